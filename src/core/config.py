"""Runtime configuration model for JsonDB.

This module owns all environment variable and settings file parsing.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

import yaml

from core.constants import DATA_ROOT_ENV_VAR, DEFAULT_DATA_ROOT, ENTITY_MODULES_ENV_VAR
from core.errors import JsonDBConfigError


@dataclass(frozen=True)
class JsonDBConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Directory holding one JSON file per entity type.
        entity_modules: Importable modules scanned for entity classes.
    """

    data_root: Path
    entity_modules: tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "JsonDBConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.
        """
        data_root_value = os.getenv(DATA_ROOT_ENV_VAR, str(DEFAULT_DATA_ROOT))
        modules_value = os.getenv(ENTITY_MODULES_ENV_VAR, "")
        return cls(
            data_root=_resolve_data_root(data_root_value),
            entity_modules=_split_module_list(modules_value),
        )

    @classmethod
    def from_yaml(cls, settings_path: Path) -> "JsonDBConfig":
        """Build config from a YAML settings file.

        Relative ``data_root`` values resolve against the settings file directory.

        Args:
            settings_path: Path to a YAML mapping with ``data_root``
                and optional ``entity_modules`` keys.

        Returns:
            A validated config object.

        Raises:
            JsonDBConfigError: If the file is unreadable or malformed.
        """
        payload = _load_yaml_mapping(settings_path)
        data_root_value = payload.get("data_root", str(DEFAULT_DATA_ROOT))
        if not isinstance(data_root_value, str) or not data_root_value:
            raise JsonDBConfigError(
                f"Invalid data_root in {settings_path}: expected non-empty string, "
                f"got {data_root_value!r}."
            )
        data_root = Path(data_root_value).expanduser()
        if not data_root.is_absolute():
            data_root = settings_path.parent / data_root
        return cls(
            data_root=data_root.resolve(),
            entity_modules=_parse_module_entries(payload.get("entity_modules", []), settings_path),
        )


def _resolve_data_root(raw_value: str) -> Path:
    return Path(raw_value).expanduser().resolve()


def _split_module_list(raw_value: str) -> tuple[str, ...]:
    """Split a comma separated module list, ignoring blanks."""
    return tuple(item.strip() for item in raw_value.split(",") if item.strip())


def _load_yaml_mapping(settings_path: Path) -> dict[str, Any]:
    """Read a YAML settings file into a mapping.

    Args:
        settings_path: Settings file path.

    Returns:
        Parsed top-level mapping.

    Raises:
        JsonDBConfigError: If file is missing, invalid YAML, or not a mapping.
    """
    try:
        payload = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except OSError as error:
        raise JsonDBConfigError(
            f"Failed to read settings file {settings_path}: {error}."
        ) from error
    except yaml.YAMLError as error:
        raise JsonDBConfigError(
            f"Failed to parse settings file {settings_path}: {error}. "
            "Fix the YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise JsonDBConfigError(
            f"Invalid settings file {settings_path}: expected mapping at top level."
        )
    return payload


def _parse_module_entries(raw_value: object, settings_path: Path) -> tuple[str, ...]:
    """Validate the entity_modules settings entry.

    Raises:
        JsonDBConfigError: If value is not a list of module name strings.
    """
    if isinstance(raw_value, str):
        return _split_module_list(raw_value)
    if not isinstance(raw_value, list) or not all(isinstance(item, str) for item in raw_value):
        raise JsonDBConfigError(
            f"Invalid entity_modules in {settings_path}: expected list of module names."
        )
    return tuple(item.strip() for item in raw_value if item.strip())
