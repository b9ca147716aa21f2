from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from ..errors import TdImportError
from ..models.row_data import RawRow, is_blank_record

"""Excel reader for the importer.

The same column contract as the CSV format applies: first row of a sheet is
the header, every following row is a property row. Cells are read as text so
that the mapper sees exactly what the CSV tokenizer would produce.

pandas (openpyxl engine) でシートを読み込み、RawRow に正規化する。
"""

__all__ = [
    "SheetHeaderError",
    "read_excel_file",
    "normalize_sheet",
]


class SheetHeaderError(TdImportError):
    """Raised when a sheet has no header row."""


def read_excel_file(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read an Excel file returning raw DataFrames keyed by sheet name.

    Parameters
    ----------
    path: Excel ファイルパス
    target_sheets: 対象シート制限 (None なら全シート)
    """
    dfs: dict[str, pd.DataFrame] = {}
    xls = pd.ExcelFile(path)
    for name in xls.sheet_names:
        if target_sheets is not None and str(name) not in target_sheets:
            continue
        # ヘッダなし・文字列として生読み (NA 変換なし)
        df = xls.parse(name, header=None, dtype=str, keep_default_na=False)
        dfs[str(name)] = df
    return dfs


def _cell(value: object) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> list[RawRow]:
    """Normalize a raw DataFrame into RawRow records.

    Steps:
    1. Validate the sheet has a header row
    2. Trim header names and cell values
    3. Skip rows whose cells are all blank
    Row numbers are sheet row numbers (header = 1).
    """
    if df.shape[0] < 1:
        raise SheetHeaderError(f"sheet '{sheet_name}' has no header row")
    columns = [_cell(c) for c in df.iloc[0].tolist()]
    rows: list[RawRow] = []
    for offset, raw in enumerate(df.iloc[1:].itertuples(index=False, name=None)):
        cells = [_cell(v) for v in raw]
        if is_blank_record(cells):
            continue
        values = {col: val for col, val in zip(columns, cells, strict=False) if col != ""}
        rows.append(RawRow(row_number=offset + 2, values=values))
    return rows
