from __future__ import annotations

from dataclasses import asdict, dataclass

"""Advisory warning produced while validating CSV rows.

A warning never removes the offending row from the import; the caller decides
what to do with it (the import dialog simply lists them).
"""

__all__ = [
    "CsvWarning",
]


@dataclass(frozen=True)
class CsvWarning:
    """Non-fatal validation finding.

    Attributes:
        row: 1-based CSV row number (header = 1, first data row = 2)
        column: Column the finding refers to
        message: Human readable description
    """
    row: int
    column: str
    message: str

    def to_dict(self) -> dict[str, object]:
        return asdict(self)

    def render(self) -> str:
        """Format as shown to users: ``Row 2, type: Invalid type "x"``."""
        return f"Row {self.row}, {self.column}: {self.message}"
