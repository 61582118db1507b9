"""Reconciliation report models.

This module defines the immutable result of comparing the item index
with what is actually present on disk.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from filedb.models.item import ItemId


class ChangeKind(str, Enum):
    """Type of difference between the index and the filesystem.

    Attributes:
        ADDED: Present on disk but not tracked in the index.
        REMOVED: Tracked in the index but missing on disk.
    """

    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class ExternalChange:
    """A file or folder change made outside the manager.

    Attributes:
        kind: Whether the item appeared or disappeared.
        id: Identity of the item (for added items, the identity it gets
            when tracked under the add policy).
        path: Path relative to the database root.
    """

    kind: ChangeKind
    id: ItemId
    path: Path


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Summary returned by scan_for_changes.

    Attributes:
        scanned_from: ItemId used as the scan scope.
        recursive: Whether the whole subtree was scanned.
        added: Items found on disk that were not tracked.
        removed: Tracked items that were missing on disk.
        unchanged_count: Tracked items in scope that are still present.
    """

    scanned_from: ItemId
    recursive: bool
    added: tuple[ExternalChange, ...]
    removed: tuple[ExternalChange, ...]
    unchanged_count: int

    @property
    def total_changed_count(self) -> int:
        """Total number of changes (added + removed)."""
        return len(self.added) + len(self.removed)

    @property
    def is_in_sync(self) -> bool:
        """Check if the index already matched the filesystem."""
        return self.total_changed_count == 0

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the report.
        """
        return {
            "scanned_from": str(self.scanned_from),
            "recursive": self.recursive,
            "in_sync": self.is_in_sync,
            "summary": {
                "added": len(self.added),
                "removed": len(self.removed),
                "unchanged": self.unchanged_count,
                "total": self.total_changed_count,
            },
            "added": [_change_to_dict(c) for c in self.added],
            "removed": [_change_to_dict(c) for c in self.removed],
        }


def _change_to_dict(change: ExternalChange) -> dict[str, object]:
    return {
        "name": change.id.name,
        "index": change.id.index,
        "path": change.path.as_posix(),
    }
