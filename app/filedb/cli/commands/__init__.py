"""CLI commands for filedb.

This package contains all subcommand implementations.
"""

from filedb.cli.commands import config, init, items, scan, transfer

__all__ = ["config", "init", "items", "scan", "transfer"]
