from __future__ import annotations

"""Base exception for the CSV -> Thing Description importer.

Concrete errors live next to the code that raises them (tokenizer, aggregator,
copy service, config loader). They all derive from ``TdImportError`` so the CLI
can report any fatal failure with a single ``except`` clause.
"""

__all__ = [
    "TdImportError",
]


class TdImportError(Exception):
    """Fatal import/edit failure. The message is meant for the end user."""
