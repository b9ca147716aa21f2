"""CSV parsing pipeline: tokenizer -> validator -> mapper -> aggregator."""

from .aggregator import DuplicateNameError, RequiredFieldError, map_csv_to_properties
from .mapper import map_row_to_property
from .tokenizer import EmptyInputError, MalformedRowError, serialize_rows, tokenize
from .validator import VALID_MODBUS_ENTITIES, VALID_TYPES, validate

__all__ = [
    "tokenize",
    "serialize_rows",
    "validate",
    "map_row_to_property",
    "map_csv_to_properties",
    "EmptyInputError",
    "MalformedRowError",
    "RequiredFieldError",
    "DuplicateNameError",
    "VALID_TYPES",
    "VALID_MODBUS_ENTITIES",
]
