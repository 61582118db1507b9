"""Scan command implementation.

Reconciles the index with what is on disk and reports the differences.
"""

import json
from typing import Annotated

import typer

from filedb.cli.display import create_scan_table, print_scan_summary
from filedb.cli.types import OutputFormat, exit_on_error, get_config, open_database, parse_item_id
from filedb.models.item import ScanPolicy
from filedb.utils.formatting import console, print_info, print_success


def _confirm_removal(item_count: int) -> bool:
    """Prompt user to confirm deleting untracked items.

    Args:
        item_count: Number of items that would be deleted.

    Returns:
        True if user confirms, False otherwise.
    """
    return typer.confirm(
        f"\nDelete {item_count} item(s) from disk?",
        default=False,
    )


def scan_database(
    ctx: typer.Context,
    scope: Annotated[
        str,
        typer.Argument(help="Directory item to scan ('/' for the whole database)."),
    ] = "/",
    policy: Annotated[
        ScanPolicy | None,
        typer.Option(
            "--policy",
            "-p",
            help="What to do with untracked items: detect_only, add_new or remove_new.",
            case_sensitive=False,
        ),
    ] = None,
    recursive: Annotated[
        bool | None,
        typer.Option(
            "--recursive/--shallow",
            help="Scan the whole subtree or only direct children.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt for remove_new.",
        ),
    ] = False,
) -> None:
    """Discover the items under a directory and apply a scan policy to them.

    The index lives only for one command, so everything inside the scope
    counts as untracked. detect_only lists what is there with the ids it
    would get, add_new tracks it, and remove_new deletes it from disk after
    confirmation.

    Examples:
        filedb scan                          # Whole database
        filedb scan photos --shallow         # Direct children of 'photos'
        filedb scan --policy detect_only --format json
        filedb scan tmp --policy remove_new --yes
    """
    config = get_config(ctx)
    effective_policy = policy or config.scan_policy
    effective_recursive = config.recursive_scan if recursive is None else recursive
    removing = effective_policy == ScanPolicy.REMOVE_NEW
    first_policy = ScanPolicy.DETECT_ONLY if removing else effective_policy
    scope_id = parse_item_id(scope)

    manager = open_database(ctx)
    with exit_on_error():
        manager.forget(scope_id, recursive=effective_recursive)
        report = manager.scan_for_changes(scope_id, first_policy, recursive=effective_recursive)

    if removing and report.added:
        if not yes:
            console.print(create_scan_table(report))
            if not _confirm_removal(len(report.added)):
                print_info("Aborted.")
                raise typer.Exit(code=0)
        with exit_on_error():
            report = manager.scan_for_changes(
                scope_id, ScanPolicy.REMOVE_NEW, recursive=effective_recursive
            )

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(report.to_dict()))
        return

    if report.is_in_sync:
        print_success(f"Nothing found under {scope_id}.")
        return

    console.print(create_scan_table(report))
    print_scan_summary(report)
    if removing:
        print_success(f"Deleted {len(report.added)} item(s) from disk.")
