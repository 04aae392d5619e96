"""Metadata-free access to entity data files.

This module reads data files without entity classes, for inspection
tools that only know the data root.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import JSON_FILE_EXTENSION
from core.errors import JsonDBStoreError
from core.types import TableSnapshot
from store.file_io import read_data_file
from store.table_codec import decode_table


@dataclass(frozen=True)
class DataFileSummary:
    """Row count and generator state for one data file."""

    filename: str
    row_count: int
    id_generator: int


def list_data_files(data_root: Path) -> list[DataFileSummary]:
    """Summarize every entity data file under a data root, sorted by name.

    Raises:
        JsonDBStoreError: If a data file is unreadable or malformed.
    """
    if not data_root.is_dir():
        return []
    summaries: list[DataFileSummary] = []
    for data_path in sorted(data_root.glob(f"*{JSON_FILE_EXTENSION}")):
        snapshot = load_data_file(data_root, data_path.stem)
        summaries.append(
            DataFileSummary(
                filename=data_path.stem,
                row_count=len(snapshot.rows),
                id_generator=snapshot.id_generator,
            )
        )
    return summaries


def load_data_file(data_root: Path, filename: str) -> TableSnapshot:
    """Decode one entity data file by base name.

    Raises:
        JsonDBStoreError: If the file is missing, unreadable, or malformed.
    """
    data_path = data_root / f"{filename}{JSON_FILE_EXTENSION}"
    text = read_data_file(data_path)
    if text is None:
        raise JsonDBStoreError(
            f"Data file not found at {data_path}. Use 'jsondb files' to list entity files."
        )
    return decode_table(text, str(data_path))
