"""Shared Rich display functions for items, metadata and scan reports."""

from pathlib import Path

from rich.table import Table

from filedb.models.info import FileInformation
from filedb.models.item import ItemId
from filedb.models.scan import ScanReport
from filedb.utils.formatting import console, create_item_table


def create_items_table(items: list[tuple[ItemId, Path, bool]], title: str = "Items") -> Table:
    """Create a Rich table listing tracked items.

    Args:
        items: ``(ItemId, relative path, is_dir)`` triples.
        title: Table title.

    Returns:
        Rich Table configured for item display.
    """
    table = create_item_table(title)
    for item_id, path, is_dir in items:
        if is_dir:
            table.add_row(f"[item.dir]{item_id}[/]", "[item.dir]dir[/]", path.as_posix())
        else:
            table.add_row(f"[item.id]{item_id}[/]", "[item.file]file[/]", path.as_posix())
    return table


def _format_age(seconds: int | None) -> str:
    if seconds is None:
        return "-"
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def create_info_table(item_id: ItemId, info: FileInformation) -> Table:
    """Create a two-column table describing one item's metadata."""
    table = Table(
        title=f"Item {item_id}",
        show_header=False,
        border_style="border",
    )
    table.add_column("Field", style="bold_header", no_wrap=True)
    table.add_column("Value", style="text")

    table.add_row("Name", info.name or "-")
    table.add_row("Kind", "directory" if info.is_dir else "file")
    if not info.is_dir:
        table.add_row("Extension", info.extension or "-")
    table.add_row("Size", f"[item.size]{info.size}[/]")
    table.add_row("Created", _format_timestamp(info.unix_created, info.seconds_since_created))
    table.add_row(
        "Last opened", _format_timestamp(info.unix_last_opened, info.seconds_since_last_opened)
    )
    table.add_row(
        "Last modified",
        _format_timestamp(info.unix_last_modified, info.seconds_since_last_modified),
    )
    return table


def _format_timestamp(unix: int | None, since: int | None) -> str:
    if unix is None:
        return "[muted]unavailable[/muted]"
    return f"{unix} [muted]({_format_age(since)})[/muted]"


def create_scan_table(report: ScanReport) -> Table:
    """Create a Rich table listing every change found by a scan.

    Added items are styled as additions, removed items as removals.
    """
    table = Table(
        title=f"Changes in {report.scanned_from}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Change", width=9, justify="center")
    table.add_column("ID", no_wrap=True)
    table.add_column("Path", style="item.path")

    for change in report.added:
        table.add_row(
            "[added]+added[/added]",
            f"[added]{change.id}[/added]",
            change.path.as_posix(),
        )
    for change in report.removed:
        table.add_row(
            "[removed]-removed[/removed]",
            f"[removed]{change.id}[/removed]",
            change.path.as_posix(),
        )
    return table


def print_scan_summary(report: ScanReport) -> None:
    """Print the counts of a scan report.

    Args:
        report: Report returned by scan_for_changes.
    """
    scope = "recursive" if report.recursive else "shallow"
    console.print(
        f"\n[dim]{len(report.added)} added, {len(report.removed)} removed, "
        f"{report.unchanged_count} unchanged ({scope} scan)[/dim]"
    )
