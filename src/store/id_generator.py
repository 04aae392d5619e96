"""Monotonic identifier generator for one entity type."""

from __future__ import annotations

from core.constants import INITIAL_ID_VALUE


class IdentifierGenerator:
    """Counter holding the next identifier to assign.

    The value never decreases, so removed identifiers are never reused.
    """

    def __init__(self, start: int = INITIAL_ID_VALUE) -> None:
        self._next_value = max(start, INITIAL_ID_VALUE)

    def next(self) -> int:
        """Return the current value and advance the counter."""
        value = self._next_value
        self._next_value += 1
        return value

    def observe(self, existing: int) -> None:
        """Ensure later values stay above an identifier already in use."""
        if existing >= self._next_value:
            self._next_value = existing + 1

    def current(self) -> int:
        """Return the next value without consuming it."""
        return self._next_value

    def copy(self) -> "IdentifierGenerator":
        return IdentifierGenerator(self._next_value)

    def __repr__(self) -> str:
        return f"IdentifierGenerator(next={self._next_value})"
