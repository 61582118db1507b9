"""Item commands.

Create, list, read, write, rename and delete the items of a database.
Every command opens the database, runs one operation and exits.
"""

import json
import sys
from pathlib import Path
from typing import Annotated

import typer

from filedb.cli.display import create_info_table, create_items_table
from filedb.cli.types import (
    OutputFormat,
    exit_on_error,
    get_config,
    open_database,
    parse_item_id,
)
from filedb.core.manager import DatabaseManager
from filedb.models.item import ItemId
from filedb.utils.formatting import console, print_info, print_success


def _describe(manager: DatabaseManager, ids: list[ItemId]) -> list[tuple[ItemId, Path, bool]]:
    return [
        (item_id, manager.locate_relative(item_id), manager.locate_absolute(item_id).is_dir())
        for item_id in ids
    ]


def list_items(
    ctx: typer.Context,
    parent: Annotated[
        str,
        typer.Argument(help="Directory item to list ('/' for the database root)."),
    ] = "/",
    all_items: Annotated[
        bool,
        typer.Option("--all", "-a", help="List every tracked item, at any depth."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List tracked items.

    Examples:
        filedb ls                    # Items at the top of the database
        filedb ls photos             # Items inside 'photos'
        filedb ls --all --format json
    """
    manager = open_database(ctx)
    sort = get_config(ctx).sort

    with exit_on_error():
        if all_items:
            ids = manager.get_all(sort=sort)
        else:
            ids = manager.get_by_parent(parse_item_id(parent), sort=sort)
        rows = _describe(manager, ids)

    if output_format == OutputFormat.JSON:
        data = [
            {
                "id": str(item_id),
                "name": item_id.name,
                "index": item_id.index,
                "path": path.as_posix(),
                "is_dir": is_dir,
            }
            for item_id, path, is_dir in rows
        ]
        console.print_json(json.dumps(data))
        return

    if not rows:
        print_info("No items.")
        return

    title = "All Items" if all_items else f"Items in {parse_item_id(parent)}"
    console.print(create_items_table(rows, title))
    console.print(f"\n[dim]{len(rows)} items[/dim]")


def new_item(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help="Name of the new item. Names with an extension become files."),
    ],
    parent: Annotated[
        str,
        typer.Option("--parent", "-p", help="Directory item to create it in."),
    ] = "/",
) -> None:
    """Create an empty file or directory.

    Examples:
        filedb new photos                  # Directory
        filedb new notes.txt -p photos     # File inside 'photos'
    """
    manager = open_database(ctx)
    with exit_on_error():
        item_id = manager.write_new(ItemId.id(name), parse_item_id(parent))
        path = manager.locate_relative(item_id)
    print_success(f"Created {item_id} at {path.as_posix()}")


def write_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="File item to overwrite (name or name#index).")],
    source: Annotated[
        Path | None,
        typer.Option(
            "--from",
            help="Read the new content from this file instead of stdin.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Atomically replace a file's content.

    Examples:
        echo hello | filedb write notes.txt
        filedb write notes.txt#1 --from draft.txt
    """
    manager = open_database(ctx)
    item_id = parse_item_id(item)
    with exit_on_error():
        if source is None:
            written = manager.overwrite_existing_from_reader(item_id, sys.stdin.buffer)
        else:
            with open(source, "rb") as reader:
                written = manager.overwrite_existing_from_reader(item_id, reader)
    print_success(f"Wrote {written} bytes to {item_id}")


def cat_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="File item to print (name or name#index).")],
) -> None:
    """Print a file's raw content."""
    manager = open_database(ctx)
    with exit_on_error():
        data = manager.read_existing(parse_item_id(item))
    typer.echo(data, nl=False)


def rename_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item to rename (name or name#index).")],
    new_name: Annotated[str, typer.Argument(help="New name, in the same directory.")],
) -> None:
    """Rename an item in place."""
    manager = open_database(ctx)
    with exit_on_error():
        renamed = manager.rename(parse_item_id(item), new_name)
    print_success(f"Renamed {item} to {renamed}")


def remove_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item to delete ('/' deletes the database).")],
    force: Annotated[
        bool | None,
        typer.Option(
            "--force/--no-force",
            help="Delete non-empty directories with their contents.",
        ),
    ] = None,
) -> None:
    """Delete an item from disk and from the index.

    Examples:
        filedb rm notes.txt
        filedb rm photos --force
    """
    manager = open_database(ctx)
    item_id = parse_item_id(item)
    effective_force = get_config(ctx).force_delete if force is None else force
    with exit_on_error():
        manager.delete(item_id, force=effective_force)
    if item_id.is_root:
        print_success("Deleted the database")
    else:
        print_success(f"Deleted {item_id}")


def info_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item to describe ('/' for the database).")],
) -> None:
    """Show an item's size and timestamps."""
    manager = open_database(ctx)
    item_id = parse_item_id(item)
    with exit_on_error():
        info = manager.get_file_information(item_id)
    console.print(create_info_table(item_id, info))


def parent_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item whose parent to show.")],
) -> None:
    """Print the ItemId of the directory containing an item."""
    manager = open_database(ctx)
    with exit_on_error():
        parent = manager.get_parent(parse_item_id(item))
    typer.echo(str(parent))


def where_item(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item to locate ('/' for the database).")],
    relative: Annotated[
        bool,
        typer.Option("--relative", "-r", help="Print the path relative to the database root."),
    ] = False,
) -> None:
    """Print the path of an item."""
    manager = open_database(ctx)
    item_id = parse_item_id(item)
    with exit_on_error():
        if relative:
            path = manager.locate_relative(item_id)
        else:
            path = manager.locate_absolute(item_id)
    typer.echo(str(path))
