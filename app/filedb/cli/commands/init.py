"""Init command implementation.

Creates a new, empty database directory.
"""

from pathlib import Path
from typing import Annotated

import typer

from filedb.cli.types import exit_on_error, get_config
from filedb.core.config import ConfigError, save_config
from filedb.core.manager import DatabaseManager
from filedb.utils.formatting import print_error, print_info, print_success


def init_database(
    ctx: typer.Context,
    parent: Annotated[
        Path,
        typer.Argument(help="Existing directory that will contain the database."),
    ],
    name: Annotated[
        str,
        typer.Argument(help="Name of the database directory to create."),
    ],
    save: Annotated[
        bool,
        typer.Option(
            "--save",
            "-s",
            help="Record the new database as the default in the config.",
        ),
    ] = False,
) -> None:
    """Create a new database directory.

    Examples:
        filedb init ~/data notes          # Create ~/data/notes
        filedb init . store --save        # Create ./store and make it the default
    """
    with exit_on_error():
        manager = DatabaseManager(parent, name)

    print_success(f"Created database at {manager.root}")

    if save:
        config = get_config(ctx).model_copy(update={"database": manager.root})
        try:
            path = save_config(config)
        except ConfigError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_info(f"Default database saved to {path}")
