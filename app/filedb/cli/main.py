"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from filedb import __version__
from filedb.cli.commands import config, init, items, scan, transfer
from filedb.core.config import ConfigError, FiledbConfig, load_config
from filedb.utils.formatting import err_console, print_warning

# Create main Typer app
app = typer.Typer(
    name="filedb",
    help="Manage a directory tree as a database of identifiable items.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"filedb version {__version__}")
        raise typer.Exit()


def _enable_debug_logging() -> None:
    """Route library logging through Rich at DEBUG level."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    db: Annotated[
        Path | None,
        typer.Option(
            "--db",
            "-d",
            help="Database root to operate on (overrides the configured one).",
        ),
    ] = None,
) -> None:
    """filedb - Manage a directory tree as a database of identifiable items.

    Files and folders are addressed by name, or name#index when several
    items share a name.
    """
    if verbose:
        _enable_debug_logging()

    try:
        settings = load_config()
    except ConfigError as e:
        print_warning(f"{e}. Using default settings.")
        settings = FiledbConfig()

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["db"] = db
    ctx.obj["config"] = settings


# Register commands
app.command("init")(init.init_database)
app.command("ls")(items.list_items)
app.command("new")(items.new_item)
app.command("write")(items.write_item)
app.command("cat")(items.cat_item)
app.command("rename")(items.rename_item)
app.command("rm")(items.remove_item)
app.command("info")(items.info_item)
app.command("parent")(items.parent_item)
app.command("where")(items.where_item)
app.command("scan")(scan.scan_database)
app.command("mv")(transfer.move_item)
app.command("cp")(transfer.copy_item)
app.command("export")(transfer.export_item)
app.command("import")(transfer.import_item)
app.command("migrate")(transfer.migrate_database)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
