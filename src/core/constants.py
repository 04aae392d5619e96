"""Core constants used across JsonDB modules.

This module centralizes file format keys and engine defaults.
Keeping values here avoids magic literals in storage logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".jsondb")
JSON_FILE_EXTENSION = ".json"
TEMP_FILE_SUFFIX = ".tmp"
ID_GENERATOR_KEY = "idGenerator"
ROWS_KEY = "rows"
ROW_ID_KEY = "id"
DEFAULT_ID_FIELD = "id"
INITIAL_ID_VALUE = 1
JSON_INDENT = 2
ENTITY_MARKER_ATTRIBUTE = "__jsondb_entity__"
DATA_ROOT_ENV_VAR = "JSONDB_DATA_ROOT"
ENTITY_MODULES_ENV_VAR = "JSONDB_ENTITY_MODULES"
