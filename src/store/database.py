"""JSON file storage engine.

This module owns one row table and identifier generator per entity type.
Every mutating call rewrites that entity's data file before returning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import threading
from typing import Any

from core.config import JsonDBConfig
from core.constants import JSON_FILE_EXTENSION
from core.entity_metadata import EntityMetadataManager
from core.errors import (
    JsonDBStoreError,
    ManualIdentifierNotAllowedError,
    MissingIdentifierError,
)
from core.logging_config import get_logger
from core.types import EntityMetadata
from store.entity_mapping import (
    assign_entity_id,
    entity_id,
    entity_to_row,
    is_row_identifier,
    row_to_entity,
)
from store.file_io import read_data_file, write_data_file
from store.id_generator import IdentifierGenerator
from store.row_table import RowTable
from store.table_codec import (
    build_entity_table,
    decode_table,
    encode_entity_table,
    order_row,
)

_LOGGER = get_logger(__name__)


@dataclass
class _EntityStore:
    """Engine state for one entity type, guarded by its own lock."""

    metadata: EntityMetadata
    data_path: Path
    generator: IdentifierGenerator
    table: RowTable
    lock: threading.Lock = field(default_factory=threading.Lock)


class Database:
    """Storage engine serving CRUD operations over per-entity JSON files.

    Operations on one entity type are serialized by a per-type lock;
    different entity types proceed independently. Mutations are applied
    to copies and committed only after the data file write succeeds.
    """

    def __init__(self, config: JsonDBConfig, metadata_manager: EntityMetadataManager) -> None:
        """Initialize the engine and load every registered entity file.

        Args:
            config: Runtime configuration.
            metadata_manager: Registry of entity metadata.

        Raises:
            JsonDBStoreError: If a data file is unreadable or malformed.
        """
        self._data_root = config.data_root
        self._metadata_manager = metadata_manager
        self._stores: dict[type, _EntityStore] = {}
        self._registry_lock = threading.Lock()
        self._destroyed = False
        self._data_root.mkdir(parents=True, exist_ok=True)
        for entity_type in metadata_manager.entity_types():
            self._store_for(entity_type)
        _LOGGER.info(
            "database_initialized",
            data_root=str(self._data_root),
            entity_count=len(self._stores),
        )

    @property
    def data_root(self) -> Path:
        return self._data_root

    def data_path(self, entity_type: type) -> Path:
        """Return the data file path for an entity type."""
        return self._path_for(self._metadata_manager.resolve(entity_type))

    def save(self, entity: Any) -> Any:
        """Insert a new entity, assigning it the next generated id.

        Args:
            entity: Entity instance whose id field is unset.

        Returns:
            The same entity with its id field populated.

        Raises:
            ManualIdentifierNotAllowedError: If the entity already has an id.
            JsonDBStoreError: If the data file cannot be written.
        """
        store = self._store_for(type(entity))
        metadata = store.metadata
        manual_id = getattr(entity, metadata.id_field)
        if manual_id is not None:
            raise ManualIdentifierNotAllowedError(manual_id)
        with store.lock:
            generator = store.generator.copy()
            table = store.table.copy()
            row_id = generator.next()
            table.insert(entity_to_row(entity, metadata, row_id))
            self._commit(store, generator, table)
        assign_entity_id(entity, metadata, row_id)
        _LOGGER.info("row_saved", entity=metadata.filename, row_id=row_id)
        return entity

    def find_all(self, entity_type: type) -> list[Any]:
        """Return all entities of a type in insertion order."""
        store = self._store_for(entity_type)
        with store.lock:
            rows = store.table.find_all()
        return [row_to_entity(row, store.metadata) for row in rows]

    def find_one(self, entity_type: type, row_id: int) -> Any | None:
        """Return the entity with the given id, or None when absent.

        Values that cannot be row ids, such as bools, match nothing.
        """
        store = self._store_for(entity_type)
        if not is_row_identifier(row_id):
            return None
        with store.lock:
            row = store.table.find_one(row_id)
        return row_to_entity(row, store.metadata) if row is not None else None

    def count(self, entity_type: type) -> int:
        """Return the number of stored rows for an entity type."""
        store = self._store_for(entity_type)
        with store.lock:
            return len(store.table)

    def update(self, entity: Any) -> None:
        """Overwrite an existing row, keeping its position and id.

        Undeclared keys already stored on the row are carried over.

        Raises:
            MissingIdentifierError: If the entity has no id.
            RowNotFoundError: If no row has the entity's id.
            JsonDBStoreError: If the data file cannot be written.
        """
        store = self._store_for(type(entity))
        metadata = store.metadata
        row_id = self._required_id(entity, metadata, "update")
        with store.lock:
            table = store.table.copy()
            row = entity_to_row(entity, metadata, row_id)
            existing = table.find_one(row_id)
            if existing is not None:
                row = order_row({**existing, **row}, metadata.fields)
            table.update(row)
            self._commit(store, store.generator.copy(), table)
        _LOGGER.info("row_updated", entity=metadata.filename, row_id=row_id)

    def remove(self, entity_type: type, row_id: int) -> bool:
        """Delete a row if present and rewrite the data file either way.

        Values that cannot be row ids, such as bools, remove nothing.

        Returns:
            Whether a row was removed.

        Raises:
            JsonDBStoreError: If the data file cannot be written.
        """
        store = self._store_for(entity_type)
        with store.lock:
            table = store.table.copy()
            removed = is_row_identifier(row_id) and table.remove(row_id)
            self._commit(store, store.generator.copy(), table)
        _LOGGER.info(
            "row_removed",
            entity=store.metadata.filename,
            row_id=row_id,
            removed=removed,
        )
        return removed

    def replace(self, entity: Any) -> None:
        """Insert or overwrite a row at the entity's own id.

        Existing rows are overwritten in place; new ids are appended and
        observed by the generator so later saves never reuse them.

        Raises:
            MissingIdentifierError: If the entity has no id.
            InvalidIdentifierError: If the id is not a positive integer.
            JsonDBStoreError: If the data file cannot be written.
        """
        store = self._store_for(type(entity))
        metadata = store.metadata
        row_id = self._required_id(entity, metadata, "replace")
        with store.lock:
            generator = store.generator.copy()
            table = store.table.copy()
            overwritten = table.upsert(entity_to_row(entity, metadata, row_id))
            generator.observe(row_id)
            self._commit(store, generator, table)
        _LOGGER.info(
            "row_replaced",
            entity=metadata.filename,
            row_id=row_id,
            overwritten=overwritten,
        )

    def destroy(self) -> None:
        """Release all in-memory tables; the engine is unusable afterwards."""
        with self._registry_lock:
            self._stores.clear()
            self._destroyed = True
        _LOGGER.info("database_destroyed", data_root=str(self._data_root))

    def _store_for(self, entity_type: type) -> _EntityStore:
        """Return the loaded store for an entity type, loading it on first use.

        Raises:
            UnknownEntityError: If the type is not registered.
            JsonDBStoreError: If the engine was destroyed or the file is invalid.
        """
        metadata = self._metadata_manager.resolve(entity_type)
        with self._registry_lock:
            if self._destroyed:
                raise JsonDBStoreError(
                    f"Database at {self._data_root} has been destroyed. "
                    "Create a new Database to continue."
                )
            store = self._stores.get(entity_type)
            if store is None:
                store = self._load_store(metadata)
                self._stores[entity_type] = store
            return store

    def _load_store(self, metadata: EntityMetadata) -> _EntityStore:
        data_path = self._path_for(metadata)
        text = read_data_file(data_path)
        if text is None:
            generator, table = IdentifierGenerator(), RowTable(metadata.name)
        else:
            snapshot = decode_table(text, str(data_path))
            generator, table = build_entity_table(metadata, snapshot, str(data_path))
        _LOGGER.info(
            "entity_table_loaded",
            entity=metadata.filename,
            row_count=len(table),
            id_generator=generator.current(),
            file_exists=text is not None,
        )
        return _EntityStore(
            metadata=metadata,
            data_path=data_path,
            generator=generator,
            table=table,
        )

    def _commit(
        self,
        store: _EntityStore,
        generator: IdentifierGenerator,
        table: RowTable,
    ) -> None:
        """Write the new state to disk, then make it the live state."""
        write_data_file(store.data_path, encode_entity_table(store.metadata, generator, table))
        store.generator = generator
        store.table = table
        _LOGGER.debug(
            "entity_table_written",
            entity=store.metadata.filename,
            row_count=len(table),
            id_generator=generator.current(),
        )

    def _path_for(self, metadata: EntityMetadata) -> Path:
        return self._data_root / f"{metadata.filename}{JSON_FILE_EXTENSION}"

    @staticmethod
    def _required_id(entity: Any, metadata: EntityMetadata, operation: str) -> int:
        row_id = entity_id(entity, metadata)
        if row_id is None:
            raise MissingIdentifierError(
                f"Cannot {operation} {metadata.name} without an id. Call save for new rows."
            )
        return row_id
