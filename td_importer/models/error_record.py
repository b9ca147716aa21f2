from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""IssueRecord model for the import issue log.

This module defines the IssueRecord dataclass used for structured logging of
import problems (fatal errors and advisory warnings). It supports row=-1 as a
sentinel value for file-level failures where no specific row applies.
"""

__all__ = [
    "IssueRecord",
    "SEVERITY_ERROR",
    "SEVERITY_WARNING",
]

SEVERITY_ERROR = "ERROR"
SEVERITY_WARNING = "WARNING"


@dataclass(frozen=True)
class IssueRecord:
    """Structured issue record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV filename being imported
        row: Row number (1-based, header = 1). Use -1 for file-level errors
        column: Column name, "" when the issue is not column specific
        severity: ERROR or WARNING
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int  # 行番号。不明な場合 -1 許容
    column: str
    severity: str
    message: str

    @staticmethod
    def create(file: str, row: int, column: str, severity: str, message: str) -> IssueRecord:
        """Create a new IssueRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(
            timestamp=ts,
            file=file,
            row=row,
            column=column,
            severity=severity,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize IssueRecord to JSON Lines format (fixed key set)."""
        return json.dumps(asdict(self), ensure_ascii=False)
