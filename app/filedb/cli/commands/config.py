"""Config commands.

Show and change the settings stored in ~/.config/filedb/config.toml.
"""

from typing import Annotated

import typer

from filedb.cli.types import get_config
from filedb.core.config import ConfigError, save_config, update_config
from filedb.core.paths import get_config_path
from filedb.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and change CLI settings.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the current settings."""
    config = get_config(ctx)
    console.print(f"[dim]{get_config_path()}[/dim]")
    for key, value in config.model_dump(mode="json").items():
        shown = "-" if value is None else value
        console.print(f"  [bold_header]{key}[/] = [text]{shown}[/]")


@app.command("set")
def set_value(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Setting name.")],
    value: Annotated[str, typer.Argument(help="New value (empty to unset 'database').")],
) -> None:
    """Change one setting.

    Examples:
        filedb config set database ~/data/notes
        filedb config set scan_policy detect_only
        filedb config set sort false
    """
    try:
        config = update_config(get_config(ctx), key, value)
        path = save_config(config)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Set {key} in {path}")
