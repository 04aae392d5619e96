"""Entity data file serialization.

This module converts row tables to and from the on-disk JSON document.
Key order and indentation are fixed so files stay diff-friendly.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Sequence

from core.constants import ID_GENERATOR_KEY, JSON_INDENT, ROW_ID_KEY, ROWS_KEY
from core.errors import JsonDBStoreError
from core.types import EntityMetadata, Row, TableSnapshot
from store.id_generator import IdentifierGenerator
from store.row_table import RowTable


def encode_table(id_generator: int, rows: Iterable[Row], fields: Sequence[str] = ()) -> str:
    """Render a table as the on-disk JSON document.

    Args:
        id_generator: Next identifier value.
        rows: Rows in file order.
        fields: Declared field order applied after the id key.

    Returns:
        JSON text with two-space indentation and no trailing newline.
    """
    payload = {
        ID_GENERATOR_KEY: id_generator,
        ROWS_KEY: [order_row(row, fields) for row in rows],
    }
    return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False)


def encode_entity_table(
    metadata: EntityMetadata,
    generator: IdentifierGenerator,
    table: RowTable,
) -> str:
    """Render an entity's generator and row table.

    Raises:
        JsonDBStoreError: If a row value cannot be encoded as JSON.
    """
    rows = table.find_all()
    try:
        return encode_table(generator.current(), rows, metadata.fields)
    except (TypeError, ValueError) as error:
        raise JsonDBStoreError(
            f"Failed to encode {metadata.filename} data: {_describe_unencodable(rows)}{error}. "
            "Store only JSON-compatible values on entity fields."
        ) from error


def decode_table(text: str, source: str) -> TableSnapshot:
    """Parse and validate an entity data document.

    Args:
        text: Raw file content.
        source: File path or label used in error messages.

    Returns:
        Validated snapshot in file order.

    Raises:
        JsonDBStoreError: If the document is not valid JSON or has the wrong shape.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise JsonDBStoreError(
            f"Failed to parse data file {source}: {error.msg} at line {error.lineno}. "
            "Fix or remove the file and retry."
        ) from error
    if not isinstance(payload, dict):
        raise JsonDBStoreError(f"Invalid data file {source}: expected JSON object at top level.")
    id_generator = payload.get(ID_GENERATOR_KEY)
    if not _is_identifier(id_generator):
        raise JsonDBStoreError(
            f"Invalid data file {source}: '{ID_GENERATOR_KEY}' must be a positive integer, "
            f"got {id_generator!r}."
        )
    raw_rows = payload.get(ROWS_KEY, [])
    if not isinstance(raw_rows, list):
        raise JsonDBStoreError(f"Invalid data file {source}: '{ROWS_KEY}' must be a list.")
    rows = tuple(_validate_row(item, index, source) for index, item in enumerate(raw_rows))
    return TableSnapshot(id_generator=id_generator, rows=rows)


def build_entity_table(
    metadata: EntityMetadata,
    snapshot: TableSnapshot,
    source: str,
) -> tuple[IdentifierGenerator, RowTable]:
    """Build engine state from a decoded snapshot.

    The generator observes every row id so a stale idGenerator value
    cannot hand out an identifier already on disk.

    Raises:
        JsonDBStoreError: If the file holds duplicate row ids.
    """
    generator = IdentifierGenerator(snapshot.id_generator)
    table = RowTable(metadata.name)
    for row in snapshot.rows:
        row_id = int(row[ROW_ID_KEY])
        if row_id in table:
            raise JsonDBStoreError(
                f"Invalid data file {source}: id {row_id} appears more than once."
            )
        table.insert(order_row(row, metadata.fields))
        generator.observe(row_id)
    return generator, table


def order_row(row: Row, fields: Sequence[str]) -> Row:
    """Return a row with the id key first, declared fields next, extras last."""
    ordered: dict[str, Any] = {ROW_ID_KEY: row[ROW_ID_KEY]}
    for name in fields:
        if name in row:
            ordered[name] = row[name]
    for name, value in row.items():
        if name not in ordered:
            ordered[name] = value
    return ordered


def _describe_unencodable(rows: Sequence[Row]) -> str:
    """Name the first row field whose value JSON cannot encode."""
    for row in rows:
        for name, value in row.items():
            try:
                json.dumps(value, ensure_ascii=False)
            except (TypeError, ValueError):
                return f"row {row[ROW_ID_KEY]} field '{name}': "
    return ""


def _validate_row(item: object, index: int, source: str) -> Row:
    if not isinstance(item, dict):
        raise JsonDBStoreError(f"Invalid data file {source}: row {index} is not an object.")
    if not _is_identifier(item.get(ROW_ID_KEY)):
        raise JsonDBStoreError(
            f"Invalid data file {source}: row {index} needs a positive integer "
            f"'{ROW_ID_KEY}', got {item.get(ROW_ID_KEY)!r}."
        )
    return item


def _is_identifier(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
