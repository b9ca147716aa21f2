from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

"""RawRow model for the CSV importer.

RawRow represents a single tokenized CSV record: header-keyed, trimmed string
values in the column order of the header. The row_number follows the CSV file
itself (header = row 1, first data row = row 2).
"""

__all__ = [
    "RawRow",
    "is_blank_record",
]


@dataclass(frozen=True)
class RawRow:
    """Logical representation of a single CSV record after tokenization.

    Values are always strings. Whitespace-only cells are normalized to "".
    """
    row_number: int  # 1-based, header row = 1
    values: dict[str, str]  # Column name -> trimmed value (header order)

    def get(self, column: str) -> str:
        """Return the trimmed value for ``column`` or "" when the column is absent."""
        value = self.values.get(column)
        return value if value is not None else ""


def is_blank_record(cells: Iterable[str]) -> bool:
    """True when every (already trimmed) cell of a source record is empty.

    Blank records are dropped by both readers but still consume a row number.
    """
    return all(c == "" for c in cells)
