"""JsonDB CLI entry points.

This module exposes read-only commands for inspecting entity data files.
It maps argparse commands onto the metadata-free data file readers.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import JsonDBConfig
from core.constants import JSON_INDENT, ROW_ID_KEY
from core.errors import JsonDBError
from store.data_files import list_data_files, load_data_file


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="jsondb", description="JsonDB data file inspector")
    parser.add_argument("--data-root", help="Override JSONDB_DATA_ROOT for this command")
    parser.add_argument("--config", help="YAML settings file providing data_root")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_files_command(subparsers)
    _add_show_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the JsonDB CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.config, args.data_root)
        if args.command == "files":
            return _run_files_command(config, args)
        if args.command == "show":
            return _run_show_command(config, args)
    except JsonDBError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(config_path: str | None, data_root: str | None) -> JsonDBConfig:
    """Build config with optional settings file and data-root override.

    Args:
        config_path: Optional YAML settings file.
        data_root: Optional override path.

    Returns:
        Resolved config.
    """
    if config_path:
        config = JsonDBConfig.from_yaml(Path(config_path).expanduser())
    else:
        config = JsonDBConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return config


def _run_files_command(config: JsonDBConfig, args: argparse.Namespace) -> int:
    """Handle files command.

    Args:
        config: Resolved config.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for summary in list_data_files(config.data_root):
        print(
            f"{summary.filename}\trows={summary.row_count}\tidGenerator={summary.id_generator}"
        )
    return 0


def _run_show_command(config: JsonDBConfig, args: argparse.Namespace) -> int:
    """Handle show command.

    Args:
        config: Resolved config.
        args: Parsed CLI args.

    Returns:
        Exit code, 1 when the requested row is absent.
    """
    snapshot = load_data_file(config.data_root, args.filename)
    if args.id is None:
        print(json.dumps(list(snapshot.rows), indent=JSON_INDENT, ensure_ascii=False))
        return 0
    for row in snapshot.rows:
        if row[ROW_ID_KEY] == args.id:
            print(json.dumps(row, indent=JSON_INDENT, ensure_ascii=False))
            return 0
    print(f"error: no row with id {args.id} in {args.filename}", file=sys.stderr)
    return 1


def _add_files_command(subparsers: Any) -> None:
    """Register files subcommand."""
    subparsers.add_parser("files", help="List entity data files with row counts")


def _add_show_command(subparsers: Any) -> None:
    """Register show subcommand."""
    parser = subparsers.add_parser("show", help="Print rows of one entity data file")
    parser.add_argument("filename", help="Entity file base name, without extension")
    parser.add_argument("--id", type=int, help="Print only the row with this id")
