from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ..errors import TdImportError
from ..models.config_models import DEFAULT_INDENT
from ..models.property import Property

"""Thing Description document helpers.

- parse_document: editor text -> parsed TD (or DocumentParseError)
- format_document: TD -> pretty-printed JSON text
- splice_properties: put imported properties under the ``properties`` section
"""

__all__ = [
    "DocumentParseError",
    "parse_document",
    "format_document",
    "splice_properties",
]

PROPERTIES_SECTION = "properties"


class DocumentParseError(TdImportError):
    """Raised when the TD text is not a JSON object."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        super().__init__(message)


def parse_document(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentParseError(
            f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})", e.lineno, e.colno
        ) from e
    if not isinstance(data, dict):
        raise DocumentParseError("TD must be a JSON object at the root level")
    return data


def format_document(document: Mapping[str, Any], indent: int = DEFAULT_INDENT) -> str:
    return json.dumps(document, indent=indent, ensure_ascii=False, allow_nan=True)


def splice_properties(
    document: Mapping[str, Any] | None,
    properties: Mapping[str, Property | Mapping[str, Any]],
) -> dict[str, Any]:
    """Return a new document with ``properties`` merged into its properties section.

    Existing properties keep their order; an imported name that already exists
    replaces the old value in place, new names are appended.
    """
    updated = dict(document or {})
    section = updated.get(PROPERTIES_SECTION)
    merged: dict[str, Any] = dict(section) if isinstance(section, Mapping) else {}
    for name, prop in properties.items():
        merged[name] = prop.to_dict() if isinstance(prop, Property) else dict(prop)
    updated[PROPERTIES_SECTION] = merged
    return updated
