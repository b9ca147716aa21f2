"""CSV -> Thing Description importer.

Turns CSV rows describing modbus data points into read-only property
affordances of a Thing Description, and copies affordances inside an
existing Thing Description.
"""

from .errors import TdImportError
from .models import CsvWarning, ImportResult, ParseResult, Property, PropertyForm, RawRow
from .models.config_models import DuplicateNamePolicy, EntityCasingPolicy, ImportConfig
from .parser import (
    DuplicateNameError,
    EmptyInputError,
    MalformedRowError,
    RequiredFieldError,
    map_csv_to_properties,
    map_row_to_property,
    tokenize,
    validate,
)
from .services.copy_affordance import CopyResult, MissingAffordanceError, MissingSectionError, copy_affordance
from .services.document import DocumentParseError, format_document, parse_document, splice_properties
from .services.importer import import_csv, import_rows, parse_csv

__version__ = "0.1.0"

__all__ = [
    "TdImportError",
    "EmptyInputError",
    "MalformedRowError",
    "RequiredFieldError",
    "DuplicateNameError",
    "MissingSectionError",
    "MissingAffordanceError",
    "DocumentParseError",
    "RawRow",
    "CsvWarning",
    "Property",
    "PropertyForm",
    "ParseResult",
    "ImportResult",
    "ImportConfig",
    "EntityCasingPolicy",
    "DuplicateNamePolicy",
    "tokenize",
    "validate",
    "map_row_to_property",
    "map_csv_to_properties",
    "parse_csv",
    "import_csv",
    "import_rows",
    "copy_affordance",
    "CopyResult",
    "parse_document",
    "format_document",
    "splice_properties",
]
