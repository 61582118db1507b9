"""Reconciliation of the item index with the filesystem.

The Reconciler compares what the index tracks inside a scope with what
is actually on disk there, reports the differences and, depending on
the scan policy, starts tracking or deletes untracked items.

Tracked entries whose path vanished from disk are always dropped: an
index entry that resolves to nothing is never kept.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from filedb.core.errors import ItemNotADirectoryError
from filedb.core.fsops import collect_paths_in_scope, is_path_in_scope, path_name, remove_path
from filedb.models.item import ItemId, ScanPolicy
from filedb.models.scan import ChangeKind, ExternalChange, ScanReport

if TYPE_CHECKING:
    from filedb.core.index import ItemIndex

logger = logging.getLogger(__name__)


class Reconciler:
    """Computes and applies differences between an index and its root.

    Example:
        >>> reconciler = Reconciler(root, index)
        >>> report = reconciler.scan(ItemId.database_id(), ScanPolicy.DETECT_ONLY)
        >>> if report.is_in_sync:
        ...     print("Index matches disk")
    """

    def __init__(self, root: Path, index: ItemIndex) -> None:
        """Initialize the Reconciler.

        Args:
            root: Absolute database root.
            index: Index to reconcile. It is mutated in place.
        """
        self._root = root
        self._index = index

    def scan(
        self,
        scope: ItemId,
        policy: ScanPolicy = ScanPolicy.ADD_NEW,
        recursive: bool = True,
    ) -> ScanReport:
        """Reconcile the index with the disk contents of ``scope``.

        Args:
            scope: Directory to scan; the database root for everything.
            policy: What to do with untracked items found on disk.
            recursive: Scan the whole subtree instead of direct children.

        Returns:
            ScanReport describing what was added and removed.

        Raises:
            ItemNotFoundError: If ``scope`` cannot be resolved.
            ItemNotADirectoryError: If ``scope`` is not a directory.
            PathConversionError: If a discovered name is not valid text.
            OSError: If listing or deleting fails.
        """
        scope_relative = None if scope.is_root else self._index.resolve(scope)
        scope_absolute = self._root if scope_relative is None else self._root / scope_relative
        if not scope_absolute.is_dir():
            raise ItemNotADirectoryError(scope_absolute)

        discovered = collect_paths_in_scope(self._root, scope_absolute, recursive)
        discovered_set = set(discovered)

        def in_scope(path: Path) -> bool:
            return is_path_in_scope(path, scope_relative, recursive)

        tracked_in_scope: set[Path] = set()
        removed: list[ExternalChange] = []
        unchanged_count = 0

        for item_id, path in self._index.entries():
            if not in_scope(path):
                continue
            tracked_in_scope.add(path)
            if path in discovered_set:
                unchanged_count += 1
            else:
                removed.append(ExternalChange(kind=ChangeKind.REMOVED, id=item_id, path=path))

        added_paths = [path for path in discovered if path not in tracked_in_scope]
        # Names are converted before anything is mutated
        added_names = [path_name(path) for path in added_paths]

        self._index.retain(lambda path: not in_scope(path) or path in discovered_set)

        added: list[ExternalChange] = []
        offsets: dict[str, int] = {}
        for name, path in zip(added_names, added_paths, strict=True):
            offset = offsets.get(name, 0)
            offsets[name] = offset + 1
            item_id = ItemId.with_index(name, self._index.count(name) + offset)
            added.append(ExternalChange(kind=ChangeKind.ADDED, id=item_id, path=path))

        if policy == ScanPolicy.ADD_NEW:
            for name, path in zip(added_names, added_paths, strict=True):
                self._index.add(name, path)
        elif policy == ScanPolicy.REMOVE_NEW:
            self._remove_untracked(added_paths)

        report = ScanReport(
            scanned_from=scope,
            recursive=recursive,
            added=tuple(added),
            removed=tuple(removed),
            unchanged_count=unchanged_count,
        )
        logger.info(
            "Scanned %s (%s, %s): %d added, %d removed, %d unchanged",
            scope,
            "recursive" if recursive else "shallow",
            policy.value,
            len(report.added),
            len(report.removed),
            report.unchanged_count,
        )
        return report

    def _remove_untracked(self, paths: list[Path]) -> None:
        """Delete untracked paths from disk, deepest first."""
        for path in sorted(paths, key=lambda p: len(p.parts), reverse=True):
            absolute = self._root / path
            if not absolute.exists() and not absolute.is_symlink():
                continue
            logger.info("Removing untracked %s", absolute)
            remove_path(absolute)
