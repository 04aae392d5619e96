"""Unit tests for metadata-free data file access."""

from __future__ import annotations

import pytest

from core.errors import JsonDBStoreError
from store.data_files import DataFileSummary, list_data_files, load_data_file


def test_list_data_files_summarizes_each_file(data_root) -> None:
    """Each data file should be summarized with count and generator."""
    (data_root / "books.json").write_text('{"idGenerator": 7, "rows": []}', encoding="utf-8")

    summaries = list_data_files(data_root)

    assert summaries == [
        DataFileSummary(filename="books", row_count=0, id_generator=7),
        DataFileSummary(filename="users", row_count=1, id_generator=2),
    ]


def test_list_data_files_missing_root_is_empty(tmp_path) -> None:
    """A data root that does not exist has no files."""
    assert list_data_files(tmp_path / "missing") == []


def test_load_data_file_returns_rows(data_root) -> None:
    """Loading by base name should decode the rows."""
    snapshot = load_data_file(data_root, "users")

    assert snapshot.rows == ({"id": 1, "username": "Foo", "age": 20},)


def test_load_data_file_missing_raises(data_root) -> None:
    """Unknown file names raise a store error."""
    with pytest.raises(JsonDBStoreError):
        load_data_file(data_root, "orders")
