from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Config dataclasses and policy constants for the CSV importer.

These are the typed counterparts of config/import.yml (see
td_importer/config/loader.py). The two policy enums pin down behaviors where a
strict and a lenient reading of the CSV format are both reasonable.
"""


class EntityCasingPolicy(Enum):
    """How the validator treats a modbus entity that only matches case-insensitively.

    - RECOGNIZE: "coil" is accepted silently as "Coil"
    - WARN: "coil" is accepted but reported with a casing warning
    """
    RECOGNIZE = "recognize"
    WARN = "warn"


class DuplicateNamePolicy(Enum):
    """How the aggregator treats two rows with the same property name.

    - OVERWRITE: last row wins, key keeps its first-seen position
    - ERROR: abort the aggregation with DuplicateNameError
    """
    OVERWRITE = "overwrite"
    ERROR = "error"


DEFAULT_DELIMITER = ","
DEFAULT_LOGS_DIRECTORY = "./logs"
DEFAULT_INDENT = 2


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for CSV import runs.

    Every field has a default so the importer works without a config file.
    """
    delimiter: str = DEFAULT_DELIMITER
    entity_casing_policy: EntityCasingPolicy = EntityCasingPolicy.RECOGNIZE
    duplicate_name_policy: DuplicateNamePolicy = DuplicateNamePolicy.OVERWRITE
    sheet_name: str | None = None  # Excel 入力時の対象シート (None なら先頭シート)
    logs_directory: str = DEFAULT_LOGS_DIRECTORY
    write_issue_log: bool = True
    indent: int = DEFAULT_INDENT
