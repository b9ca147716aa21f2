from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Property affordance models for the CSV importer.

These dataclasses are the typed output of the row mapper. Optional attributes
default to None and are left out of the serialized mapping produced by
``to_dict()``, so an empty CSV cell never shows up as a ``null`` key in the
Thing Description.
"""

__all__ = [
    "READ_PROPERTY_OP",
    "PropertyForm",
    "Property",
]

READ_PROPERTY_OP = "readproperty"


@dataclass(frozen=True)
class PropertyForm:
    """Read-channel descriptor (single form) of an imported property.

    Field order matches the serialized key order. The ``key`` metadata holds the
    Thing Description key for modbus parameters.
    """
    href: str
    address: float | int  # NaN when the source value was malformed
    entity: str
    zero_based_addressing: bool = False
    most_significant_byte: bool = False
    most_significant_word: bool = False
    unit_id: int | float | None = None
    quantity: int | float | None = None
    modbus_type: str | None = None
    polling_time: str | None = None
    function: str | None = None
    timeout: str | None = None
    op: str = READ_PROPERTY_OP

    # 出力キー順 (Thing Description 上の並び)
    _KEYS = (
        ("op", "op"),
        ("href", "href"),
        ("unit_id", "modbus:unitID"),
        ("address", "modbus:address"),
        ("quantity", "modbus:quantity"),
        ("modbus_type", "modbus:type"),
        ("zero_based_addressing", "modbus:zeroBasedAddressing"),
        ("entity", "modbus:entity"),
        ("polling_time", "modbus:pollingTime"),
        ("function", "modbus:function"),
        ("most_significant_byte", "modbus:mostSignificantByte"),
        ("most_significant_word", "modbus:mostSignificantWord"),
        ("timeout", "modbus:timeout"),
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for attr, key in self._KEYS:
            value = getattr(self, attr)
            if value is None:
                continue
            out[key] = value
        return out


@dataclass(frozen=True)
class Property:
    """Typed property affordance built from one CSV row.

    ``read_only`` is always True: the importer only produces read affordances.
    ``forms`` always holds exactly one PropertyForm.
    """
    forms: tuple[PropertyForm, ...]
    type: str | None = None
    read_only: bool = True
    title: str | None = None
    description: str | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    unit: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type is not None:
            out["type"] = self.type
        out["readOnly"] = self.read_only
        for name in ("title", "description", "minimum", "maximum", "unit"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        out["forms"] = [f.to_dict() for f in self.forms]
        return out
