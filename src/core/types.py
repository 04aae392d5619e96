"""Shared typed models.

This module defines the immutable metadata and snapshot models used
by the entity registry, the codec, and the storage engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

Row = dict[str, Any]


@dataclass(frozen=True)
class EntityMetadata:
    """Persistence metadata for one entity type.

    Attributes:
        entity_type: Registered entity class.
        filename: Base name of the data file, without extension.
        id_field: Entity attribute holding the identifier.
        fields: Other persisted attribute names in serialized order.
    """

    entity_type: type
    filename: str
    id_field: str
    fields: tuple[str, ...]

    @property
    def name(self) -> str:
        """Return the entity class name for messages."""
        return self.entity_type.__name__


@dataclass(frozen=True)
class TableSnapshot:
    """Decoded contents of one entity data file.

    Attributes:
        id_generator: Next identifier value to assign.
        rows: Rows in file order, each with the id key first.
    """

    id_generator: int
    rows: tuple[Row, ...]
