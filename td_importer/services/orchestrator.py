from __future__ import annotations

import logging
import time
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import TdImportError
from ..excel.reader import SheetHeaderError, normalize_sheet, read_excel_file
from ..logging.error_log import IssueLogBuffer
from ..models.config_models import ImportConfig
from ..models.processing_result import FileStat, ProcessingResult
from ..models.row_data import RawRow
from ..parser.tokenizer import tokenize
from .document import splice_properties
from .importer import import_rows
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Service orchestration for multi-file imports.

Coordinates a CLI run: read every input file (CSV text or Excel sheet),
run the import pipeline per file, splice the resulting properties into the
target document, record warnings/errors in the issue log and aggregate the
metrics for the SUMMARY line.

A failing file never aborts the run; its properties are simply not spliced.
"""

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
FILE_LEVEL_ROW = -1


class ProcessingError(TdImportError):
    """Raised for fatal run-level errors (e.g. no input files)."""


@dataclass(frozen=True)
class RunOutcome:
    result: ProcessingResult
    document: dict[str, Any]


def read_rows(path: Path, config: ImportConfig) -> list[RawRow]:
    """Read and tokenize one input file.

    Excel workbooks use ``config.sheet_name`` (first sheet when None); anything
    else is read as UTF-8 CSV text (BOM tolerated).
    """
    if path.suffix.lower() in EXCEL_SUFFIXES:
        targets = [config.sheet_name] if config.sheet_name else None
        sheets = read_excel_file(path, target_sheets=targets)
        if not sheets:
            raise SheetHeaderError(f"sheet '{config.sheet_name}' not found in {path.name}")
        sheet_name, df = next(iter(sheets.items()))
        return normalize_sheet(df, sheet_name)
    return tokenize(path.read_text(encoding="utf-8-sig"), delimiter=config.delimiter)


def _record_failure(issue_log: IssueLogBuffer, path: Path, error: Exception) -> None:
    row = getattr(error, "row", None)
    column = getattr(error, "column", None)
    issue_log.add_error(
        path.name,
        str(error),
        row=row if isinstance(row, int) else FILE_LEVEL_ROW,
        column=column if isinstance(column, str) else "",
    )


def process_all(
    paths: Sequence[Path],
    config: ImportConfig,
    document: dict[str, Any] | None = None,
    issue_log: IssueLogBuffer | None = None,
) -> RunOutcome:
    """Import every file in ``paths`` into ``document``.

    Args:
        paths: CSV / Excel files, processed in the given order
        config: Import configuration
        document: Target Thing Description (a new empty one when None)
        issue_log: Buffer receiving warnings and errors (optional)

    Returns:
        RunOutcome with aggregated metrics and the updated document

    Raises:
        ProcessingError: no input files were given
    """
    if not paths:
        raise ProcessingError("no input files given")

    start = time.perf_counter()
    issues = issue_log if issue_log is not None else IssueLogBuffer()
    current: dict[str, Any] = dict(document or {})
    file_stats: list[FileStat] = []
    total_properties = 0
    total_warnings = 0

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            try:
                rows = read_rows(path, config)
                outcome = import_rows(rows, config)
            except (TdImportError, OSError, ValueError, zipfile.BadZipFile) as e:
                # ValueError / BadZipFile: 壊れたブック、UnicodeDecodeError も ValueError
                logger.error(f"{path.name}: {e}")
                _record_failure(issues, path, e)
                file_stats.append(FileStat(file_name=path.name, status="failed", error=str(e)))
                progress.finish_file(success=False)
                continue

            for w in outcome.warnings:
                logger.warning(f"{path.name}: {w.render()}")
                issues.add_warning(path.name, w)
            current = splice_properties(current, outcome.fragment())
            total_properties += len(outcome.properties)
            total_warnings += len(outcome.warnings)
            file_stats.append(
                FileStat(
                    file_name=path.name,
                    status="success",
                    properties=len(outcome.properties),
                    warnings=len(outcome.warnings),
                )
            )
            logger.info(f"{path.name}: {len(outcome.properties)} properties imported")
            progress.finish_file(success=True, properties=len(outcome.properties))

    success = sum(1 for s in file_stats if s.status == "success")
    result = ProcessingResult(
        success_files=success,
        failed_files=len(file_stats) - success,
        total_properties=total_properties,
        total_warnings=total_warnings,
        elapsed_seconds=time.perf_counter() - start,
        file_stats=file_stats,
    )
    return RunOutcome(result=result, document=current)
