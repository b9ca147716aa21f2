from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.config_models import ImportConfig
from ..models.processing_result import ImportResult, ParseResult
from ..models.row_data import RawRow
from ..parser.aggregator import map_csv_to_properties
from ..parser.tokenizer import tokenize
from ..parser.validator import validate

"""Import pipeline service.

Wires tokenizer -> validator -> aggregator together:
- parse_csv: rows and advisory warnings (validation never short-circuits)
- import_rows: warnings + aggregated properties for already tokenized rows
- import_csv: the whole pipeline for raw CSV text

Fatal problems propagate as the TdImportError subclasses raised by the parser
modules; warnings are returned alongside the data.
"""

__all__ = [
    "parse_csv",
    "import_rows",
    "import_csv",
]

logger = logging.getLogger(__name__)


def parse_csv(text: str, config: ImportConfig | None = None) -> ParseResult:
    """Tokenize and validate CSV text."""
    cfg = config or ImportConfig()
    rows = tokenize(text, delimiter=cfg.delimiter)
    warnings = validate(rows, entity_casing=cfg.entity_casing_policy)
    logger.debug("parsed %d rows, %d warnings", len(rows), len(warnings))
    return ParseResult(rows=rows, warnings=warnings)


def import_rows(rows: Sequence[RawRow], config: ImportConfig | None = None) -> ImportResult:
    """Validate and aggregate tokenized rows (CSV or spreadsheet source)."""
    cfg = config or ImportConfig()
    warnings = validate(rows, entity_casing=cfg.entity_casing_policy)
    properties = map_csv_to_properties(rows, duplicate_names=cfg.duplicate_name_policy)
    return ImportResult(properties=properties, warnings=warnings)


def import_csv(text: str, config: ImportConfig | None = None) -> ImportResult:
    """Run the full CSV import pipeline.

    Raises:
        EmptyInputError / MalformedRowError: tokenization failed
        RequiredFieldError / DuplicateNameError: aggregation failed
    """
    cfg = config or ImportConfig()
    parsed = parse_csv(text, cfg)
    properties = map_csv_to_properties(parsed.rows, duplicate_names=cfg.duplicate_name_policy)
    return ImportResult(properties=properties, warnings=parsed.warnings)
