"""Conversion between entity instances and table rows.

This module is the only place that reads or writes entity attributes,
keeping the engine working purely on plain row dictionaries.
"""

from __future__ import annotations

import copy
import dataclasses
from typing import Any

from core.constants import ROW_ID_KEY
from core.errors import InvalidIdentifierError
from core.types import EntityMetadata, Row


def entity_id(entity: object, metadata: EntityMetadata) -> int | None:
    """Return the entity identifier, or None when unset.

    Raises:
        InvalidIdentifierError: If the id is set but not a positive integer.
    """
    value = getattr(entity, metadata.id_field)
    if value is None:
        return None
    return validate_identifier(value, metadata)


def assign_entity_id(entity: object, metadata: EntityMetadata, row_id: int) -> None:
    """Store a generated identifier on the entity instance."""
    setattr(entity, metadata.id_field, row_id)


def entity_to_row(entity: object, metadata: EntityMetadata, row_id: int) -> Row:
    """Build a row with the id key first and declared fields in order."""
    row: Row = {ROW_ID_KEY: row_id}
    for name in metadata.fields:
        row[name] = copy.deepcopy(getattr(entity, name))
    return row


def row_to_entity(row: Row, metadata: EntityMetadata) -> Any:
    """Build a fresh entity instance from a row.

    Declared fields missing from the row keep their dataclass defaults.
    Keys not declared by the entity are ignored.
    """
    init_names = {item.name for item in dataclasses.fields(metadata.entity_type) if item.init}
    kwargs: dict[str, Any] = {}
    if metadata.id_field in init_names:
        kwargs[metadata.id_field] = row[ROW_ID_KEY]
    for name in metadata.fields:
        if name in row and name in init_names:
            kwargs[name] = copy.deepcopy(row[name])
    entity = metadata.entity_type(**kwargs)
    if metadata.id_field not in init_names:
        setattr(entity, metadata.id_field, row[ROW_ID_KEY])
    for name in metadata.fields:
        if name in row and name not in init_names:
            setattr(entity, name, copy.deepcopy(row[name]))
    return entity


def is_row_identifier(value: object) -> bool:
    """Return whether a value can name a stored row."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_identifier(value: object, metadata: EntityMetadata) -> int:
    """Check that a caller supplied id is a positive integer.

    Raises:
        InvalidIdentifierError: If the value is not usable as a row id.
    """
    if not is_row_identifier(value):
        raise InvalidIdentifierError(
            f"Invalid {metadata.name} id {value!r}: expected a positive integer."
        )
    return int(value)
