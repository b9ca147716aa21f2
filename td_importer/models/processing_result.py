from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .property import Property
from .row_data import RawRow
from .warning import CsvWarning

"""Result models for CSV import runs.

ParseResult is what the tokenizer + validator hand back (rows and warnings
side by side). ImportResult adds the aggregated properties. FileStat and
ProcessingResult aggregate a multi-file CLI run for the SUMMARY line.
"""


@dataclass(frozen=True)
class ParseResult:
    """Tokenized rows together with the advisory warnings found in them."""
    rows: list[RawRow]
    warnings: list[CsvWarning]


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a complete CSV import (rows -> properties)."""
    properties: dict[str, Property]
    warnings: list[CsvWarning]

    def fragment(self) -> dict[str, Any]:
        """JSON-ready ``{name: property}`` mapping to splice under ``properties``."""
        return {name: prop.to_dict() for name, prop in self.properties.items()}


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    status: str  # success/failed
    properties: int = 0
    warnings: int = 0
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a multi-file import (SUMMARY line source)."""
    success_files: int  # 成功ファイル数
    failed_files: int  # 失敗ファイル数
    total_properties: int  # 取り込んだプロパティ総数
    total_warnings: int
    elapsed_seconds: float = 0.0
    file_stats: list[FileStat] = field(default_factory=list)
