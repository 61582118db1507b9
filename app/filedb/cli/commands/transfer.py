"""Transfer commands.

Move and copy items inside the database, across its boundary, and
relocate the database itself.
"""

from pathlib import Path
from typing import Annotated

import typer

from filedb.cli.types import exit_on_error, get_config, open_database, parse_item_id
from filedb.core.config import ConfigError, save_config
from filedb.models.item import ExportMode
from filedb.utils.formatting import print_success, print_warning


def move_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item to move (name or name#index).")],
    destination: Annotated[
        str,
        typer.Argument(help="Directory item to move it into ('/' for the root)."),
    ],
) -> None:
    """Move an item into another directory of the database.

    Anything already at the destination is overwritten.
    """
    manager = open_database(ctx)
    with exit_on_error():
        moved = manager.migrate_item(parse_item_id(item), parse_item_id(destination))
        path = manager.locate_relative(moved)
    print_success(f"Moved {item} to {path.as_posix()} ({moved})")


def copy_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item to copy (name or name#index).")],
    parent: Annotated[
        str,
        typer.Argument(help="Directory item receiving the copy ('/' for the root)."),
    ],
    name: Annotated[str, typer.Argument(help="Name of the copy.")],
) -> None:
    """Duplicate an item under a new name."""
    manager = open_database(ctx)
    with exit_on_error():
        duplicate = manager.duplicate_item(parse_item_id(item), parse_item_id(parent), name)
    print_success(f"Copied {item} to {duplicate}")


def export_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item to export (name or name#index).")],
    destination: Annotated[
        Path,
        typer.Argument(help="Directory outside the database; created if missing."),
    ],
    move: Annotated[
        bool,
        typer.Option("--move", "-m", help="Move the item out instead of copying it."),
    ] = False,
) -> None:
    """Copy or move an item out of the database.

    Examples:
        filedb export notes.txt ~/backup
        filedb export photos /mnt/usb --move
    """
    manager = open_database(ctx)
    mode = ExportMode.MOVE if move else ExportMode.COPY
    with exit_on_error():
        exported = manager.export_item(parse_item_id(item), destination, mode)
    verb = "Moved" if move else "Exported"
    print_success(f"{verb} {item} to {exported}")


def import_item(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(help="File or directory outside the database."),
    ],
    to: Annotated[
        str,
        typer.Option("--to", "-t", help="Directory item to import into."),
    ] = "/",
) -> None:
    """Copy an external file or directory into the database."""
    manager = open_database(ctx)
    with exit_on_error():
        imported = manager.import_item(source, parse_item_id(to))
    print_success(f"Imported {source} as {imported}")


def migrate_database(
    ctx: typer.Context,
    destination: Annotated[
        Path,
        typer.Argument(help="Directory that will contain the database."),
    ],
) -> None:
    """Move the whole database into another directory.

    When the moved database is the configured default, the config is
    updated to its new location.
    """
    manager = open_database(ctx)
    old_root = manager.root
    with exit_on_error():
        new_root = manager.migrate_database(destination)
    print_success(f"Moved database to {new_root}")

    config = get_config(ctx)
    if config.database is not None and config.database.resolve() == old_root:
        try:
            save_config(config.model_copy(update={"database": new_root}))
        except ConfigError as e:
            print_warning(f"Database moved but config not updated: {e}")
