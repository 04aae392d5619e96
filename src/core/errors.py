"""JsonDB exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each storage precondition raises a specific error type for debuggability.
"""

from __future__ import annotations


class JsonDBError(Exception):
    """Base exception for all JsonDB failures."""


class JsonDBConfigError(JsonDBError):
    """Raised for invalid runtime configuration."""


class JsonDBStoreError(JsonDBError):
    """Raised for data file IO and format failures."""


class EntityDeclarationError(JsonDBError):
    """Raised when an entity class cannot be registered."""


class UnknownEntityError(JsonDBError):
    """Raised when an entity type has no registered metadata."""


class ManualIdentifierNotAllowedError(JsonDBError):
    """Raised when save receives an entity whose id is already set."""

    def __init__(self, identifier: object) -> None:
        super().__init__(
            f"row with manual id should not be added: {identifier}, call replace instead"
        )
        self.identifier = identifier


class RowNotFoundError(JsonDBError):
    """Raised when a row expected to exist is absent."""


class DuplicateIdentifierError(JsonDBError):
    """Raised when a row table would hold two rows with one id."""


class MissingIdentifierError(JsonDBError):
    """Raised when an operation needs an id the entity does not carry."""


class InvalidIdentifierError(JsonDBError):
    """Raised when an id value is not a positive integer."""
