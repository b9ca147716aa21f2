from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable

from ..errors import TdImportError
from ..models.config_models import DEFAULT_DELIMITER
from ..models.row_data import RawRow, is_blank_record

"""CSV tokenizer.

Turns raw delimited text into header-keyed RawRow records:
- A leading byte order mark is ignored
- The first non-empty record is the header; header names are trimmed and
  must be unique (blank names aside)
- Every cell value is trimmed; whitespace-only cells become ""
- Fully blank records are dropped (empty lines are not even counted)
- Unbalanced quoting or a cell count different from the header's aborts the
  whole call with MalformedRowError

Row numbers follow the records of the file: header = 1, first data row = 2.
"""

__all__ = [
    "EmptyInputError",
    "MalformedRowError",
    "tokenize",
    "serialize_rows",
]

logger = logging.getLogger(__name__)

HEADER_ROW_NUMBER = 1
BOM = "\ufeff"
# csv の既定上限 (128 KiB) では長い description が読めない
MAX_FIELD_SIZE = 2**31 - 1


class EmptyInputError(TdImportError):
    """Raised when the CSV text is empty."""

    def __init__(self, message: str = "CSV content is empty") -> None:
        super().__init__(message)


class MalformedRowError(TdImportError):
    """Raised when a record cannot be tokenized (quoting, cell count, header)."""

    def __init__(self, row: int, detail: str) -> None:
        self.row = row
        self.detail = detail
        super().__init__(f"Row {row}: {detail}")


def _records(text: str, delimiter: str) -> Iterable[list[str]]:
    if csv.field_size_limit() < MAX_FIELD_SIZE:
        csv.field_size_limit(MAX_FIELD_SIZE)
    # strict=True: 閉じられていない引用符を csv.Error として検出
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    record_number = 0
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            kind = "field too large" if "field limit" in str(e) else "malformed quoting"
            raise MalformedRowError(record_number + 1, f"{kind} ({e})") from e
        if not record:
            continue  # empty line
        record_number += 1
        yield record


def _header(cells: list[str]) -> list[str]:
    seen: set[str] = set()
    for name in cells:
        if name in seen:
            raise MalformedRowError(HEADER_ROW_NUMBER, f'duplicate column "{name}"')
        if name:
            seen.add(name)
    return cells


def tokenize(text: str, delimiter: str = DEFAULT_DELIMITER) -> list[RawRow]:
    """Tokenize CSV text into RawRow records.

    Parameters
    ----------
    text: Raw CSV content (header row required)
    delimiter: Single character field separator

    Raises
    ------
    EmptyInputError: ``text`` is empty (a lone byte order mark counts as empty)
    MalformedRowError: unbalanced quoting, cell count mismatch or a repeated
        header name (no partial result)
    """
    text = text.removeprefix(BOM)
    if not text:
        raise EmptyInputError()

    columns: list[str] | None = None
    rows: list[RawRow] = []
    row_number = HEADER_ROW_NUMBER
    for record in _records(text, delimiter):
        cells = [c.strip() for c in record]
        if columns is None:
            columns = _header(cells)
            continue
        row_number += 1
        if is_blank_record(cells):
            logger.debug("row %d is blank, skipped", row_number)
            continue
        if len(cells) != len(columns):
            raise MalformedRowError(
                row_number,
                f"expected {len(columns)} fields but found {len(cells)}",
            )
        values = {col: val for col, val in zip(columns, cells, strict=True) if col != ""}
        rows.append(RawRow(row_number=row_number, values=values))

    if columns is None:
        return []
    logger.debug("tokenized %d rows with %d columns", len(rows), len(columns))
    return rows


def serialize_rows(rows: Iterable[RawRow], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Write rows back to CSV text (header = union of columns, first-seen order).

    Columns missing in a row are written as empty cells. Gaps in the row
    numbers (blank records dropped by tokenize) are written back as empty
    records, so tokenizing the result reproduces the same row numbers.
    """
    rows = list(rows)
    if not rows:
        return ""
    columns: list[str] = []
    for row in rows:
        for col in row.values:
            if col not in columns:
                columns.append(col)
    buf = io.StringIO(newline="")
    writer = csv.writer(buf, delimiter=delimiter, lineterminator="\n")
    writer.writerow(columns)
    blank = [""] * len(columns)
    previous = HEADER_ROW_NUMBER
    for row in rows:
        for _ in range(previous + 1, row.row_number):
            writer.writerow(blank)
        writer.writerow([row.get(col) for col in columns])
        previous = row.row_number
    return buf.getvalue()
