"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.fixture_paths import copy_fixture_data


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Writable data root seeded with the fixture data files."""
    return copy_fixture_data(tmp_path / "data")
