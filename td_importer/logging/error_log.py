from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import SEVERITY_ERROR, SEVERITY_WARNING, IssueRecord
from ..models.warning import CsvWarning

"""Issue log for import runs.

Warnings and file failures of a run are collected in memory and written as
JSON Lines (one IssueRecord per line) to ``<logs_dir>/import-YYYYMMDD-HHMMSS.log``.
The file name is stamped in UTC when the first record is written; a run
without issues leaves no file behind.
"""

__all__ = [
    "IssueRecord",
    "IssueLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
LOG_NAME_FMT = "import-%Y%m%d-%H%M%S.log"


class IssueLogBuffer:
    """Collects IssueRecords for one run; flush() appends them to the run's file."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir or DEFAULT_LOGS_DIR
        self._pending: list[IssueRecord] = []
        self._path: Path | None = None
        self._severities: Counter[str] = Counter()

    @property
    def file_path(self) -> Path:
        """Target file; directory created and name fixed on first access."""
        if self._path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            self._path = self._logs_dir / datetime.now(UTC).strftime(LOG_NAME_FMT)
        return self._path

    @property
    def records(self) -> list[IssueRecord]:
        """Records not yet flushed (a copy)."""
        return list(self._pending)

    def append(self, record: IssueRecord) -> None:
        self._pending.append(record)
        self._severities[record.severity] += 1

    def add_warning(self, file_name: str, warning: CsvWarning) -> None:
        self.append(
            IssueRecord.create(file_name, warning.row, warning.column, SEVERITY_WARNING, warning.message)
        )

    def add_error(self, file_name: str, message: str, row: int = -1, column: str = "") -> None:
        self.append(IssueRecord.create(file_name, row, column, SEVERITY_ERROR, message))

    def count(self, severity: str) -> int:
        """Records of ``severity`` seen in this run, flushed ones included."""
        return self._severities[severity]

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending records; returns the file, or None when nothing was pending."""
        if not self._pending:
            return None
        lines = "".join(f"{record.to_json_line()}\n" for record in self._pending)
        with self.file_path.open("a", encoding="utf-8") as fh:
            fh.write(lines)
        self._pending.clear()
        return self.file_path
