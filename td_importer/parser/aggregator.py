from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..errors import TdImportError
from ..models.config_models import DuplicateNamePolicy
from ..models.property import Property
from ..models.row_data import RawRow
from .mapper import map_row_to_property

"""Row aggregation: typed properties keyed by name.

Enforces the required columns (``name``, ``modbus:address``, ``modbus:entity``)
as hard failures. The first offending row aborts the aggregation and nothing
is returned.
"""

__all__ = [
    "RequiredFieldError",
    "DuplicateNameError",
    "map_csv_to_properties",
]

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error on CSV file: "


class RequiredFieldError(TdImportError):
    """Raised when a row lacks one of the required columns."""

    def __init__(self, column: str, message: str, row: int | None = None) -> None:
        self.column = column
        self.row = row
        super().__init__(ERROR_PREFIX + message)


class DuplicateNameError(TdImportError):
    """Raised for a repeated property name under DuplicateNamePolicy.ERROR."""

    def __init__(self, name: str, row: int | None = None) -> None:
        self.name = name
        self.row = row
        super().__init__(f'{ERROR_PREFIX}duplicate property name "{name}"')


def _blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def _check_required(values: Mapping[str, str | None], row_number: int) -> str:
    name = values.get("name")
    if _blank(name):
        raise RequiredFieldError("name", "Row name is required", row_number)
    if _blank(values.get("modbus:address")):
        raise RequiredFieldError(
            "modbus:address", f'"modbus:address" value is required for row: "{name}"', row_number
        )
    if _blank(values.get("modbus:entity")):
        raise RequiredFieldError(
            "modbus:entity", f'"modbus:entity" value is required for row: "{name}"', row_number
        )
    return name  # type: ignore[return-value]


def map_csv_to_properties(
    rows: Iterable[RawRow | Mapping[str, str | None]],
    duplicate_names: DuplicateNamePolicy = DuplicateNamePolicy.OVERWRITE,
) -> dict[str, Property]:
    """Fold rows into a ``{name: Property}`` collection in row order.

    Raises:
        RequiredFieldError: a row misses name, address or entity (checked in that order)
        DuplicateNameError: a name repeats and the policy is ERROR
    """
    properties: dict[str, Property] = {}
    for index, row in enumerate(rows):
        if isinstance(row, RawRow):
            values: Mapping[str, str | None] = row.values
            row_number = row.row_number
        else:
            values = row
            row_number = index + 2
        name = _check_required(values, row_number)
        if name in properties:
            if duplicate_names is DuplicateNamePolicy.ERROR:
                raise DuplicateNameError(name, row_number)
            logger.debug("row %d overwrites property %r", row_number, name)
        properties[name] = map_row_to_property(values)
    return properties
