from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..models.config_models import EntityCasingPolicy
from ..models.row_data import RawRow
from ..models.warning import CsvWarning

"""Advisory validation of tokenized CSV rows.

Checks the ``type`` and ``modbus:entity`` columns against their allowed values
and reports findings as CsvWarning. Rows are never dropped and nothing is
raised here: whether a warning blocks the import is up to the caller.
"""

__all__ = [
    "VALID_TYPES",
    "VALID_MODBUS_ENTITIES",
    "canonical_entity",
    "validate",
]

TYPE_COLUMN = "type"
ENTITY_COLUMN = "modbus:entity"

VALID_TYPES = ("number", "string", "boolean")
VALID_MODBUS_ENTITIES = (
    "HoldingRegister",
    "InputRegister",
    "Coil",
    "DiscreteInput",
)

_ENTITY_LOOKUP = {e.lower(): e for e in VALID_MODBUS_ENTITIES}


def canonical_entity(value: str) -> str | None:
    """Return the canonical spelling of a modbus entity, None when unknown."""
    return _ENTITY_LOOKUP.get(value.lower())


def _row_values(row: RawRow | Mapping[str, str]) -> Mapping[str, str]:
    return row.values if isinstance(row, RawRow) else row


def validate(
    rows: Iterable[RawRow | Mapping[str, str]],
    entity_casing: EntityCasingPolicy = EntityCasingPolicy.RECOGNIZE,
) -> list[CsvWarning]:
    """Collect warnings for unknown value types and modbus entities.

    Warnings follow row order; within a row the ``type`` finding comes first.
    Plain mappings are numbered by position (first row = 2).
    """
    warnings: list[CsvWarning] = []
    for index, row in enumerate(rows):
        row_number = row.row_number if isinstance(row, RawRow) else index + 2
        values = _row_values(row)

        type_value = values.get(TYPE_COLUMN) or ""
        if type_value and type_value not in VALID_TYPES:
            warnings.append(
                CsvWarning(row=row_number, column=TYPE_COLUMN, message=f'Invalid type "{type_value}"')
            )

        entity = values.get(ENTITY_COLUMN) or ""
        if not entity:
            continue
        canonical = canonical_entity(entity)
        if canonical is None:
            warnings.append(
                CsvWarning(
                    row=row_number,
                    column=ENTITY_COLUMN,
                    message=f'Invalid modbus entity "{entity}"',
                )
            )
        elif entity != canonical and entity_casing is EntityCasingPolicy.WARN:
            warnings.append(
                CsvWarning(
                    row=row_number,
                    column=ENTITY_COLUMN,
                    message=f'Non-canonical modbus entity "{entity}", expected "{canonical}"',
                )
            )
    return warnings
