"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path

import typer

from filedb.core.config import FiledbConfig
from filedb.core.errors import DatabaseError
from filedb.core.manager import DatabaseManager
from filedb.models.item import ItemId
from filedb.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> FiledbConfig:
    """Return the settings loaded by the main callback."""
    obj = ctx.ensure_object(dict)
    config = obj.get("config")
    return config if config is not None else FiledbConfig()


def get_database_path(ctx: typer.Context) -> Path:
    """Return the database root selected by --db or the config.

    Raises:
        typer.Exit: If no database is configured.
    """
    obj = ctx.ensure_object(dict)
    path: Path | None = obj.get("db") or get_config(ctx).database
    if path is None:
        print_error("No database selected. Use --db PATH or 'filedb config set database PATH'.")
        raise typer.Exit(code=1)
    return path


def open_database(ctx: typer.Context) -> DatabaseManager:
    """Open the selected database, rebuilding its index from disk.

    Raises:
        typer.Exit: If the database cannot be opened.
    """
    path = get_database_path(ctx)
    with exit_on_error():
        return DatabaseManager.open(path)


def parse_item_id(text: str) -> ItemId:
    """Parse ``name`` / ``name#index`` / ``/`` into an ItemId."""
    return ItemId.parse(text)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report database, OS and validation errors and exit with code 1.

    Raises:
        typer.Exit: If the body raised one of those errors.
    """
    try:
        yield
    except (DatabaseError, OSError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
