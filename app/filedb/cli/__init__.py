"""CLI package for filedb.

This package contains the Typer application and all subcommands.
"""

from filedb.cli.main import app

__all__ = ["app"]
