"""Entity declaration and metadata registry.

This module turns decorated dataclasses into immutable EntityMetadata
records once, so the storage engine never inspects classes at runtime.
"""

from __future__ import annotations

import dataclasses
import importlib
from typing import Callable, Iterable, Sequence, TypeVar

from core.constants import DEFAULT_ID_FIELD, ENTITY_MARKER_ATTRIBUTE
from core.errors import EntityDeclarationError, UnknownEntityError
from core.types import EntityMetadata

EntityT = TypeVar("EntityT", bound=type)


@dataclasses.dataclass(frozen=True)
class _EntityDeclaration:
    filename: str
    id_field: str


def json_entity(filename: str, id_field: str = DEFAULT_ID_FIELD) -> Callable[[EntityT], EntityT]:
    """Mark a mutable dataclass as a persisted entity.

    Args:
        filename: Base data file name, without extension.
        id_field: Dataclass field that holds the identifier.

    Returns:
        Class decorator that records the declaration on the class.

    Raises:
        EntityDeclarationError: If filename is empty.
    """
    if not filename or not filename.strip():
        raise EntityDeclarationError("json_entity requires a non-empty filename.")

    def decorate(entity_type: EntityT) -> EntityT:
        setattr(
            entity_type,
            ENTITY_MARKER_ATTRIBUTE,
            _EntityDeclaration(filename=filename.strip(), id_field=id_field),
        )
        return entity_type

    return decorate


def is_json_entity(candidate: object) -> bool:
    """Return whether an object is a class decorated with json_entity."""
    return isinstance(candidate, type) and isinstance(
        candidate.__dict__.get(ENTITY_MARKER_ATTRIBUTE), _EntityDeclaration
    )


class EntityMetadataManager:
    """Registry mapping entity classes to their persistence metadata."""

    def __init__(self) -> None:
        self._metadata: dict[type, EntityMetadata] = {}

    def register(
        self,
        entity_type: type,
        filename: str | None = None,
        id_field: str | None = None,
        fields: Sequence[str] | None = None,
    ) -> EntityMetadata:
        """Register one entity class.

        Explicit arguments override values from the json_entity decorator.

        Args:
            entity_type: Mutable dataclass to persist.
            filename: Optional data file base name.
            id_field: Optional identifier field name.
            fields: Optional persisted field order, excluding the id field.

        Returns:
            Registered metadata.

        Raises:
            EntityDeclarationError: If the class or its declaration is invalid.
        """
        declaration = entity_type.__dict__.get(ENTITY_MARKER_ATTRIBUTE)
        resolved_filename = filename or (declaration.filename if declaration else None)
        if not resolved_filename:
            raise EntityDeclarationError(
                f"Entity {entity_type.__name__} has no filename. "
                "Decorate it with json_entity or pass filename explicitly."
            )
        resolved_id_field = id_field or (declaration.id_field if declaration else DEFAULT_ID_FIELD)
        dataclass_fields = _dataclass_field_names(entity_type)
        if resolved_id_field not in dataclass_fields:
            raise EntityDeclarationError(
                f"Entity {entity_type.__name__} has no id field '{resolved_id_field}'."
            )
        persisted_fields = _resolve_fields(entity_type, dataclass_fields, resolved_id_field, fields)
        existing = self._metadata.get(entity_type)
        if existing is not None:
            return existing
        self._ensure_filename_unused(entity_type, resolved_filename)
        metadata = EntityMetadata(
            entity_type=entity_type,
            filename=resolved_filename,
            id_field=resolved_id_field,
            fields=persisted_fields,
        )
        self._metadata[entity_type] = metadata
        return metadata

    def scan(self, module_names: Iterable[str]) -> list[EntityMetadata]:
        """Import modules and register every json_entity class they define.

        Args:
            module_names: Importable dotted module names.

        Returns:
            Metadata registered by this scan, in discovery order.

        Raises:
            EntityDeclarationError: If a module cannot be imported.
        """
        registered: list[EntityMetadata] = []
        for module_name in module_names:
            try:
                module = importlib.import_module(module_name)
            except ImportError as error:
                raise EntityDeclarationError(
                    f"Failed to import entity module '{module_name}': {error}."
                ) from error
            for candidate in vars(module).values():
                if is_json_entity(candidate) and candidate.__module__ == module.__name__:
                    registered.append(self.register(candidate))
        return registered

    def resolve(self, entity_type: type) -> EntityMetadata:
        """Return metadata for a registered entity class.

        Raises:
            UnknownEntityError: If the class was never registered.
        """
        metadata = self._metadata.get(entity_type)
        if metadata is None:
            raise UnknownEntityError(
                f"Entity type {getattr(entity_type, '__name__', entity_type)!s} is not registered. "
                "Register it or include its module in entity_modules."
            )
        return metadata

    def entity_types(self) -> tuple[type, ...]:
        """Return registered entity classes in registration order."""
        return tuple(self._metadata)

    def _ensure_filename_unused(self, entity_type: type, filename: str) -> None:
        for metadata in self._metadata.values():
            if metadata.filename == filename:
                raise EntityDeclarationError(
                    f"Entities {metadata.name} and {entity_type.__name__} "
                    f"both use data file '{filename}'."
                )


def _dataclass_field_names(entity_type: type) -> tuple[str, ...]:
    """Return dataclass field names, rejecting unusable classes.

    Raises:
        EntityDeclarationError: If the class is not a mutable dataclass.
    """
    if not isinstance(entity_type, type) or not dataclasses.is_dataclass(entity_type):
        raise EntityDeclarationError(
            f"Entity {getattr(entity_type, '__name__', entity_type)!s} must be a dataclass."
        )
    if entity_type.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        raise EntityDeclarationError(
            f"Entity {entity_type.__name__} must not be frozen; ids are assigned on save."
        )
    return tuple(item.name for item in dataclasses.fields(entity_type))


def _resolve_fields(
    entity_type: type,
    dataclass_fields: tuple[str, ...],
    id_field: str,
    fields: Sequence[str] | None,
) -> tuple[str, ...]:
    if fields is None:
        return tuple(name for name in dataclass_fields if name != id_field)
    unknown = [name for name in fields if name not in dataclass_fields]
    if unknown or id_field in fields or len(set(fields)) != len(fields):
        raise EntityDeclarationError(
            f"Invalid persisted fields for {entity_type.__name__}: {list(fields)}. "
            "List each dataclass field at most once and omit the id field."
        )
    return tuple(fields)
