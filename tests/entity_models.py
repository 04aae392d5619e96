"""Entity classes used across the test suite."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.entity_metadata import json_entity


@json_entity(filename="users")
@dataclass
class User:
    id: int | None = None
    username: str = ""
    age: int = 0


@json_entity(filename="books", id_field="book_id")
@dataclass
class Book:
    title: str = ""
    book_id: int | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class Unregistered:
    id: int | None = None
    name: str = ""
