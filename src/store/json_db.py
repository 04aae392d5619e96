"""Public JsonDB facade.

This module exposes entity-level save, find, update, remove, and replace
calls backed by the storage engine.
"""

from __future__ import annotations

from typing import Any, Iterable

from core.config import JsonDBConfig
from core.entity_metadata import EntityMetadataManager
from store.database import Database


class JsonDB:
    """Primary entry point for persisting entity instances."""

    def __init__(self, database: Database) -> None:
        self._database = database

    @classmethod
    def from_config(
        cls,
        config: JsonDBConfig | None = None,
        entity_types: Iterable[type] = (),
    ) -> "JsonDB":
        """Build a JsonDB with a fresh metadata registry and engine.

        Args:
            config: Optional runtime configuration; read from env when omitted.
            entity_types: Entity classes registered in addition to scanned modules.

        Returns:
            Ready-to-use JsonDB instance.

        Raises:
            EntityDeclarationError: If an entity class or module is invalid.
            JsonDBStoreError: If an existing data file cannot be loaded.
        """
        resolved_config = config or JsonDBConfig.from_env()
        manager = EntityMetadataManager()
        manager.scan(resolved_config.entity_modules)
        for entity_type in entity_types:
            manager.register(entity_type)
        return cls(Database(resolved_config, manager))

    @property
    def database(self) -> Database:
        return self._database

    def save(self, entity: Any) -> Any:
        """Persist a new entity and return it with its generated id."""
        return self._database.save(entity)

    def find_all(self, entity_type: type) -> list[Any]:
        """Return all stored entities of a type in insertion order."""
        return self._database.find_all(entity_type)

    def find_one(self, entity_type: type, row_id: int) -> Any | None:
        """Return one entity by id, or None when absent."""
        return self._database.find_one(entity_type, row_id)

    def update(self, entity: Any) -> None:
        """Overwrite an existing entity row."""
        self._database.update(entity)

    def remove(self, entity_type: type, row_id: int) -> bool:
        """Remove an entity row by id; absent ids are ignored."""
        return self._database.remove(entity_type, row_id)

    def replace(self, entity: Any) -> None:
        """Insert or overwrite an entity row at its own id."""
        self._database.replace(entity)

    def close(self) -> None:
        """Release the engine's in-memory state."""
        self._database.destroy()
