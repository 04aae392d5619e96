"""Public SDK surface for JsonDB.

This module provides a stable import path for applications.
It re-exports the facade, configuration, and entity declaration helpers.
"""

from __future__ import annotations

from core.config import JsonDBConfig
from core.entity_metadata import EntityMetadataManager, json_entity
from core.errors import (
    DuplicateIdentifierError,
    EntityDeclarationError,
    InvalidIdentifierError,
    JsonDBError,
    JsonDBStoreError,
    ManualIdentifierNotAllowedError,
    MissingIdentifierError,
    RowNotFoundError,
    UnknownEntityError,
)
from core.types import EntityMetadata
from store.database import Database
from store.json_db import JsonDB

__all__ = [
    "Database",
    "DuplicateIdentifierError",
    "EntityDeclarationError",
    "EntityMetadata",
    "EntityMetadataManager",
    "InvalidIdentifierError",
    "JsonDB",
    "JsonDBConfig",
    "JsonDBError",
    "JsonDBStoreError",
    "ManualIdentifierNotAllowedError",
    "MissingIdentifierError",
    "RowNotFoundError",
    "UnknownEntityError",
    "json_entity",
]
