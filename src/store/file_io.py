"""Data file IO helpers with traceable errors."""

from __future__ import annotations

import os
from pathlib import Path
import tempfile

from core.constants import TEMP_FILE_SUFFIX
from core.errors import JsonDBStoreError


def read_data_file(data_path: Path) -> str | None:
    """Read a data file, returning None when it does not exist.

    Raises:
        JsonDBStoreError: If the file exists but cannot be read.
    """
    try:
        return data_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as error:
        raise JsonDBStoreError(f"Failed to read data file {data_path}: {error}.") from error


def write_data_file(data_path: Path, content: str) -> None:
    """Replace a data file atomically.

    Content goes to a temp file in the same directory, is fsynced, then
    renamed over the target so readers never see a partial file.

    Raises:
        JsonDBStoreError: If any write step fails.
    """
    try:
        data_path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=str(data_path.parent),
            prefix=f".{data_path.name}.",
            suffix=TEMP_FILE_SUFFIX,
        )
    except OSError as error:
        raise JsonDBStoreError(f"Failed to prepare data file {data_path}: {error}.") from error
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as temp_file:
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_name, data_path)
    except (OSError, ValueError) as error:
        _discard_temp_file(temp_name)
        raise JsonDBStoreError(f"Failed to write data file {data_path}: {error}.") from error
    except BaseException:
        _discard_temp_file(temp_name)
        raise


def _discard_temp_file(temp_name: str) -> None:
    try:
        os.unlink(temp_name)
    except FileNotFoundError:
        pass
