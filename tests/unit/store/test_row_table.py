"""Unit tests for the in-memory row table."""

from __future__ import annotations

import pytest

from core.errors import DuplicateIdentifierError, RowNotFoundError
from store.row_table import RowTable


def _table() -> RowTable:
    return RowTable(
        "User",
        [
            {"id": 1, "username": "Foo", "age": 20},
            {"id": 2, "username": "Bar", "age": 40},
            {"id": 3, "username": "Baz", "age": 33},
        ],
    )


def test_find_all_preserves_insertion_order() -> None:
    """Rows should come back in the order they were inserted."""
    assert [row["id"] for row in _table().find_all()] == [1, 2, 3]


def test_insert_duplicate_id_raises() -> None:
    """Inserting an existing id is an invariant violation."""
    table = _table()

    with pytest.raises(DuplicateIdentifierError):
        table.insert({"id": 2, "username": "Dup", "age": 1})


def test_update_keeps_position() -> None:
    """Updated rows keep their original position."""
    table = _table()
    table.update({"id": 1, "username": "Foo", "age": 24})

    rows = table.find_all()

    assert [row["id"] for row in rows] == [1, 2, 3] and rows[0]["age"] == 24


def test_update_missing_row_raises() -> None:
    """Updating an unknown id should fail."""
    with pytest.raises(RowNotFoundError):
        _table().update({"id": 9, "username": "Nope", "age": 0})


def test_remove_twice_is_noop() -> None:
    """Second removal of the same id changes nothing and does not raise."""
    table = _table()
    first = table.remove(2)
    second = table.remove(2)

    assert (first, second) == (True, False) and table.ids() == (1, 3)


def test_find_all_returns_detached_copies() -> None:
    """Mutating a returned row or list must not leak into the table."""
    table = _table()
    rows = table.find_all()
    rows[0]["age"] = 99
    rows.clear()

    assert table.find_one(1) == {"id": 1, "username": "Foo", "age": 20}


def test_find_all_snapshot_ignores_later_mutation() -> None:
    """A previously returned sequence should not observe later inserts."""
    table = _table()
    rows = table.find_all()
    table.insert({"id": 4, "username": "Qux", "age": 50})

    assert len(rows) == 3 and len(table) == 4


def test_upsert_overwrites_in_place_or_appends() -> None:
    """upsert should overwrite existing ids in place and append new ids."""
    table = _table()
    overwritten = table.upsert({"id": 2, "username": "Bar", "age": 41})
    appended = table.upsert({"id": 7, "username": "New", "age": 1})

    assert (overwritten, appended) == (True, False) and table.ids() == (1, 2, 3, 7)


def test_find_one_missing_returns_none() -> None:
    """Lookup of an absent id returns None."""
    assert _table().find_one(42) is None
