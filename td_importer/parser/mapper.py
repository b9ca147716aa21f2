from __future__ import annotations

import math
from collections.abc import Mapping

from ..models.property import Property, PropertyForm
from ..models.row_data import RawRow

"""Type coercion: one CSV row (all strings) -> one typed Property.

The mapper is total: it never raises for a tokenized row. Required-field
checks belong to the aggregator; here a malformed ``modbus:address`` simply
becomes NaN.
"""

__all__ = [
    "map_row_to_property",
    "parse_number",
    "parse_optional_number",
    "parse_bool",
]

DEFAULT_HREF = "/"


def _normalize(num: float) -> int | float:
    if math.isfinite(num) and num.is_integer():
        return int(num)
    return num


def parse_number(value: str | None) -> int | float:
    """Parse like JavaScript ``Number()``, returning NaN instead of raising.

    Missing and empty values yield NaN (never a coerced zero).
    """
    if value is None:
        return math.nan
    s = value.strip()
    if s == "" or "_" in s:
        return math.nan
    unsigned = s.lstrip("+-")
    # Number() は "Infinity" の綴りのみ受け付ける (inf, nan, infinity は NaN)
    if unsigned.lower() in ("nan", "inf", "infinity") and unsigned != "Infinity":
        return math.nan
    try:
        if unsigned.lower().startswith(("0x", "0o", "0b")):
            # 符号付き 16 進は Number() でも NaN
            return int(s, 0) if s[0] not in "+-" else math.nan
        return _normalize(float(s))
    except ValueError:
        return math.nan


def parse_optional_number(value: str | None) -> int | float | None:
    """Parse an optional numeric cell: None when empty, non-numeric or infinite."""
    num = parse_number(value)
    return num if math.isfinite(num) else None


def parse_bool(value: str | None) -> bool:
    return (value or "").lower() == "true"


def _text(values: Mapping[str, str | None], column: str) -> str | None:
    value = values.get(column)
    return value if value else None


def map_row_to_property(row: RawRow | Mapping[str, str | None]) -> Property:
    """Convert one CSV row into a read-only Property with a single form.

    Optional columns that are empty or absent are left out (None attribute,
    no key in ``to_dict()``).
    """
    values = row.values if isinstance(row, RawRow) else row

    form = PropertyForm(
        href=values.get("href") or DEFAULT_HREF,
        unit_id=parse_optional_number(values.get("modbus:unitID")),
        address=parse_number(values.get("modbus:address")),
        quantity=parse_optional_number(values.get("modbus:quantity")),
        modbus_type=_text(values, "modbus:type"),
        zero_based_addressing=parse_bool(values.get("modbus:zeroBasedAddressing")),
        entity=values.get("modbus:entity") or "",
        polling_time=_text(values, "modbus:pollingTime"),
        function=_text(values, "modbus:function"),
        most_significant_byte=parse_bool(values.get("modbus:mostSignificantByte")),
        most_significant_word=parse_bool(values.get("modbus:mostSignificantWord")),
        timeout=_text(values, "modbus:timeout"),
    )
    return Property(
        forms=(form,),
        type=_text(values, "type"),
        title=_text(values, "title"),
        description=_text(values, "description"),
        minimum=parse_optional_number(values.get("minimum")),
        maximum=parse_optional_number(values.get("maximum")),
        unit=_text(values, "unit"),
    )
