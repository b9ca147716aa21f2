from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..errors import TdImportError
from ..models.config_models import (
    DEFAULT_DELIMITER,
    DEFAULT_INDENT,
    DEFAULT_LOGS_DIRECTORY,
    DuplicateNamePolicy,
    EntityCasingPolicy,
    ImportConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default: config/import.yml, overridable via TD_IMPORT_CONFIG)
- Validate against the JSON schema shipped next to this module
- Apply defaults for every omitted key
"""

__all__ = [
    "ConfigError",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")
CONFIG_ENV_VAR = "TD_IMPORT_CONFIG"


class ConfigError(TdImportError):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/unreadable or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: Path | None = None) -> Path:
    """Explicit path > $TD_IMPORT_CONFIG > config/import.yml."""
    if explicit is not None:
        return explicit
    env = os.getenv(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: root must be a mapping")

    _validate_config_schema(data)

    return ImportConfig(
        delimiter=data.get("delimiter", DEFAULT_DELIMITER),
        entity_casing_policy=EntityCasingPolicy(data.get("entity_casing_policy", "recognize")),
        duplicate_name_policy=DuplicateNamePolicy(data.get("duplicate_name_policy", "overwrite")),
        sheet_name=data.get("sheet_name"),
        logs_directory=data.get("logs_directory", DEFAULT_LOGS_DIRECTORY),
        write_issue_log=data.get("write_issue_log", True),
        indent=data.get("indent", DEFAULT_INDENT),
    )
