"""Unit tests for reconciliation report models."""

from pathlib import Path

from filedb.models.item import ItemId
from filedb.models.scan import ChangeKind, ExternalChange, ScanReport


def _report(added: int = 0, removed: int = 0, unchanged: int = 0) -> ScanReport:
    return ScanReport(
        scanned_from=ItemId.database_id(),
        recursive=True,
        added=tuple(
            ExternalChange(ChangeKind.ADDED, ItemId.with_index("new.txt", i), Path(f"d{i}/new.txt"))
            for i in range(added)
        ),
        removed=tuple(
            ExternalChange(ChangeKind.REMOVED, ItemId.with_index("old", i), Path(f"old{i}"))
            for i in range(removed)
        ),
        unchanged_count=unchanged,
    )


class TestScanReport:
    """Tests for ScanReport properties."""

    def test_in_sync_without_changes(self) -> None:
        """A report with no changes is in sync."""
        report = _report(unchanged=4)
        assert report.is_in_sync
        assert report.total_changed_count == 0

    def test_counts_changes(self) -> None:
        """Added and removed both count as changes."""
        report = _report(added=2, removed=1)
        assert not report.is_in_sync
        assert report.total_changed_count == 3

    def test_to_dict(self) -> None:
        """to_dict exposes a JSON-ready summary and change lists."""
        data = _report(added=1, removed=1, unchanged=2).to_dict()

        assert data["scanned_from"] == "/"
        assert data["in_sync"] is False
        assert data["summary"] == {"added": 1, "removed": 1, "unchanged": 2, "total": 2}
        assert data["added"] == [{"name": "new.txt", "index": 0, "path": "d0/new.txt"}]
        assert data["removed"] == [{"name": "old", "index": 0, "path": "old0"}]
