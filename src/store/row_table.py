"""In-memory row table for one entity type.

Rows are kept in insertion order, keyed by identifier. The order is the
file order and the order returned by find_all.
"""

from __future__ import annotations

from typing import Iterable

from core.constants import ROW_ID_KEY
from core.errors import DuplicateIdentifierError, RowNotFoundError
from core.types import Row


class RowTable:
    """Insertion-ordered identifier to row mapping."""

    def __init__(self, name: str, rows: Iterable[Row] = ()) -> None:
        self._name = name
        self._rows: dict[int, Row] = {}
        for row in rows:
            self.insert(row)

    def insert(self, row: Row) -> None:
        """Append a row at the end of the table.

        Raises:
            DuplicateIdentifierError: If the row id is already present.
        """
        row_id = _row_id(row)
        if row_id in self._rows:
            raise DuplicateIdentifierError(
                f"Duplicate id {row_id} in {self._name} table. "
                "This indicates a corrupted data file or an engine bug."
            )
        self._rows[row_id] = dict(row)

    def find_all(self) -> list[Row]:
        """Return copies of all rows in insertion order."""
        return [dict(row) for row in self._rows.values()]

    def find_one(self, row_id: int) -> Row | None:
        """Return a copy of the row with the given id, if present."""
        row = self._rows.get(row_id)
        return dict(row) if row is not None else None

    def update(self, row: Row) -> None:
        """Replace a row in place, keeping its position.

        Raises:
            RowNotFoundError: If no row has the same id.
        """
        row_id = _row_id(row)
        if row_id not in self._rows:
            raise RowNotFoundError(f"No {self._name} row with id {row_id} to update.")
        self._rows[row_id] = dict(row)

    def upsert(self, row: Row) -> bool:
        """Overwrite the row with the same id in place or append it.

        Returns:
            Whether an existing row was overwritten.
        """
        row_id = _row_id(row)
        existed = row_id in self._rows
        self._rows[row_id] = dict(row)
        return existed

    def remove(self, row_id: int) -> bool:
        """Delete a row if present; absent ids are ignored.

        Returns:
            Whether a row was removed.
        """
        return self._rows.pop(row_id, None) is not None

    def ids(self) -> tuple[int, ...]:
        return tuple(self._rows)

    def copy(self) -> "RowTable":
        return RowTable(self._name, self._rows.values())

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._rows

    def __len__(self) -> int:
        return len(self._rows)


def _row_id(row: Row) -> int:
    return int(row[ROW_ID_KEY])
