"""End-to-end tests for JsonDB against a seeded users data file."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from core.config import JsonDBConfig
from core.errors import ManualIdentifierNotAllowedError
from store.json_db import JsonDB
from tests.entity_models import User


@pytest.fixture
def jsondb(data_root: Path) -> Iterator[JsonDB]:
    client = JsonDB.from_config(
        JsonDBConfig(data_root=data_root, entity_modules=("tests.entity_models",))
    )
    yield client
    client.close()


def _users_file(data_root: Path) -> str:
    return (data_root / "users.json").read_text(encoding="utf-8")


def test_save(jsondb: JsonDB, data_root: Path) -> None:
    """Saving a new user appends id 2 and advances the generator."""
    jsondb.save(User(username="Bar", age=40))

    assert _users_file(data_root) == """{
  "idGenerator": 3,
  "rows": [
    {
      "id": 1,
      "username": "Foo",
      "age": 20
    },
    {
      "id": 2,
      "username": "Bar",
      "age": 40
    }
  ]
}"""


def test_find(jsondb: JsonDB) -> None:
    """Seeded user should be found by id and listed alone."""
    assert len(jsondb.find_all(User)) == 1 and repr(jsondb.find_one(User, 1)) == (
        "User(id=1, username='Foo', age=20)"
    )


def test_update(jsondb: JsonDB, data_root: Path) -> None:
    """Updating age rewrites the row and keeps idGenerator."""
    user = jsondb.find_one(User, 1)
    user.age = 24
    jsondb.update(user)

    assert _users_file(data_root) == """{
  "idGenerator": 2,
  "rows": [
    {
      "id": 1,
      "username": "Foo",
      "age": 24
    }
  ]
}"""


def test_remove(jsondb: JsonDB, data_root: Path) -> None:
    """Removing the only row leaves an empty list and the same generator."""
    jsondb.remove(User, 1)

    assert _users_file(data_root) == """{
  "idGenerator": 2,
  "rows": []
}"""


def test_save_with_manual_id_is_rejected(jsondb: JsonDB, data_root: Path) -> None:
    """Manual ids fail with a replace hint and change nothing."""
    before = _users_file(data_root)

    with pytest.raises(ManualIdentifierNotAllowedError) as raised:
        jsondb.save(User(2, "Foo", 30))

    assert (
        str(raised.value) == "row with manual id should not be added: 2, call replace instead"
        and _users_file(data_root) == before
        and len(jsondb.find_all(User)) == 1
    )


def test_state_survives_restart(jsondb: JsonDB, data_root: Path) -> None:
    """A new engine over the same files sees the same rows and generator."""
    jsondb.save(User(username="Bar", age=40))
    jsondb.remove(User, 2)
    jsondb.close()

    reopened = JsonDB.from_config(JsonDBConfig(data_root=data_root), entity_types=[User])
    saved = reopened.save(User(username="Baz", age=50))

    assert saved.id == 3 and [user.id for user in reopened.find_all(User)] == [1, 3]
