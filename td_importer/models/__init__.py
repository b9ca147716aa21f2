"""Domain models for the CSV -> Thing Description importer.

This package contains the value objects passed between the tokenizer,
validator, mapper, aggregator and the services built on top of them.
"""

from .config_models import DuplicateNamePolicy, EntityCasingPolicy, ImportConfig
from .error_record import IssueRecord
from .processing_result import FileStat, ImportResult, ParseResult, ProcessingResult
from .property import READ_PROPERTY_OP, Property, PropertyForm
from .row_data import RawRow
from .warning import CsvWarning

__all__ = [
    # Configuration models
    "DuplicateNamePolicy",
    "EntityCasingPolicy",
    "ImportConfig",
    # Row level models
    "RawRow",
    "CsvWarning",
    "IssueRecord",
    # Output models
    "READ_PROPERTY_OP",
    "Property",
    "PropertyForm",
    "ParseResult",
    "ImportResult",
    "FileStat",
    "ProcessingResult",
]
