from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import TdImportError

"""Affordance copy service.

Duplicates an affordance of a Thing Description section (properties, actions,
events, ...) under a collision-free name and places the copy right after the
original. The input document is left untouched; callers continue with the
returned document.
"""

__all__ = [
    "MissingSectionError",
    "MissingAffordanceError",
    "CopyResult",
    "copy_affordance",
    "unique_copy_name",
]

COPY_SUFFIX = "_copy"
TITLE_SUFFIX = " copy"


class MissingSectionError(TdImportError):
    """Raised when the document is missing or lacks the requested section."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f'TD or section "{section}" missing')


class MissingAffordanceError(TdImportError):
    """Raised when no affordance is given and the name is not in the section."""

    def __init__(self, section: str, name: str) -> None:
        self.section = section
        self.name = name
        super().__init__(f'affordance "{name}" missing in section "{section}"')


@dataclass(frozen=True)
class CopyResult:
    updated_document: dict[str, Any]
    new_name: str


def unique_copy_name(original_name: str, existing: Mapping[str, Any]) -> str:
    """``<name>_copy``, then ``<name>_copy_1``, ``<name>_copy_2``, ... until unused."""
    base = f"{original_name}{COPY_SUFFIX}"
    if base not in existing:
        return base
    counter = 1
    while f"{base}_{counter}" in existing:
        counter += 1
    return f"{base}_{counter}"


def copy_affordance(
    document: Mapping[str, Any] | None,
    section: str,
    original_name: str,
    affordance: Mapping[str, Any] | None = None,
) -> CopyResult:
    """Copy ``original_name`` within ``section`` and insert it after the original.

    Parameters
    ----------
    document: Parsed Thing Description
    section: Section key, e.g. "properties" or "actions"
    original_name: Name of the affordance to copy
    affordance: Affordance value to clone (defaults to the section entry)

    Raises
    ------
    MissingSectionError: document is None or the section is not a mapping
    MissingAffordanceError: ``affordance`` omitted and ``original_name`` unknown
    """
    if not isinstance(document, Mapping) or not isinstance(document.get(section), Mapping):
        raise MissingSectionError(section)
    entries: Mapping[str, Any] = document[section]
    if affordance is None:
        if original_name not in entries:
            raise MissingAffordanceError(section, original_name)
        affordance = entries[original_name]

    new_name = unique_copy_name(original_name, entries)
    clone = copy.deepcopy(dict(affordance))
    title = clone.get("title")
    if isinstance(title, str) and title:
        clone["title"] = f"{title}{TITLE_SUFFIX}"

    # 順序保証: (key, value) の列として再構築し、原本の直後に挿入
    pairs: list[tuple[str, Any]] = list(entries.items())
    position = next((i + 1 for i, (key, _) in enumerate(pairs) if key == original_name), len(pairs))
    pairs.insert(position, (new_name, clone))

    updated = dict(document)
    updated[section] = dict(pairs)
    return CopyResult(updated_document=updated, new_name=new_name)
