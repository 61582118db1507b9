"""In-memory item index.

Maps each shared name to the ordered list of root-relative paths stored
under it. The position of a path in its list is the ``index`` part of
an ItemId, so removals keep the order of the remaining entries.

Invariants held between operations:
- no entry exists for the empty (root) name;
- a name's list is never empty (it is dropped instead);
- a relative path appears at most once in the whole index.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from filedb.core.errors import IndexOutOfRangeError, ItemExistsError, ItemNotFoundError
from filedb.models.item import ItemId

logger = logging.getLogger(__name__)


def is_below(path: Path, prefix: Path) -> bool:
    """Check if ``path`` lies strictly inside the directory ``prefix``."""
    return path != prefix and path.is_relative_to(prefix)


class ItemIndex:
    """Name to relative-paths mapping owned by a DatabaseManager.

    Only the manager mutates the index; callers receive copies or
    ItemId values, never the internal lists.
    """

    def __init__(self) -> None:
        self._items: dict[str, list[Path]] = {}

    def __len__(self) -> int:
        return sum(len(paths) for paths in self._items.values())

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __repr__(self) -> str:
        return f"ItemIndex(names={len(self._items)}, items={len(self)})"

    def resolve(self, item_id: ItemId) -> Path:
        """Return the relative path stored for ``item_id``.

        Args:
            item_id: Non-root identity to resolve.

        Returns:
            Root-relative path of the item.

        Raises:
            ItemNotFoundError: If the name has no entries.
            IndexOutOfRangeError: If the index exceeds the name's entries.
        """
        paths = self._items.get(item_id.name)
        if paths is None:
            raise ItemNotFoundError(item_id.name)
        if item_id.index >= len(paths):
            raise IndexOutOfRangeError(item_id.name, item_id.index, len(paths))
        return paths[item_id.index]

    def contains(self, name: str, path: Path) -> bool:
        """Check if ``path`` is tracked under ``name``."""
        return path in self._items.get(name, ())

    def find(self, path: Path) -> ItemId | None:
        """Return the identity tracking ``path``, if any."""
        for item_id, item_path in self.entries():
            if item_path == path:
                return item_id
        return None

    def add(self, name: str, path: Path) -> ItemId:
        """Append ``path`` under ``name``.

        Args:
            name: Shared name key. Must not be empty.
            path: Root-relative path that already exists on disk.

        Returns:
            The ItemId of the new entry (its index is the prior list length).

        Raises:
            ValueError: If ``name`` is empty.
            ItemExistsError: If ``path`` is already tracked under ``name``.
        """
        if not name:
            msg = "Index entries require a non-empty name"
            raise ValueError(msg)

        paths = self._items.setdefault(name, [])
        if path in paths:
            raise ItemExistsError(name)

        paths.append(path)
        logger.debug("Indexed %s as %s#%d", path, name, len(paths) - 1)
        return ItemId.with_index(name, len(paths) - 1)

    def remove(self, item_id: ItemId) -> Path:
        """Remove one entry, shifting later entries of the same name down.

        Args:
            item_id: Identity of the entry to remove.

        Returns:
            The relative path that was removed.

        Raises:
            ItemNotFoundError: If the name has no entries.
            IndexOutOfRangeError: If the index exceeds the name's entries.
        """
        self.resolve(item_id)
        paths = self._items[item_id.name]
        removed = paths.pop(item_id.index)
        if not paths:
            del self._items[item_id.name]
        logger.debug("Unindexed %s (%s)", removed, item_id)
        return removed

    def discard(self, path: Path) -> ItemId | None:
        """Remove the entry tracking ``path``, if there is one.

        Returns:
            The identity the entry had before removal, or None.
        """
        item_id = self.find(path)
        if item_id is not None:
            self.remove(item_id)
        return item_id

    def paths_for(self, name: str) -> list[Path]:
        """Return a copy of the paths stored under ``name``.

        Raises:
            ItemNotFoundError: If the name has no entries.
        """
        paths = self._items.get(name)
        if paths is None:
            raise ItemNotFoundError(name)
        return list(paths)

    def count(self, name: str) -> int:
        """Number of entries stored under ``name`` (0 if none)."""
        return len(self._items.get(name, ()))

    def ids_for(self, name: str) -> list[ItemId]:
        """Return every ItemId sharing ``name``, in index order.

        Raises:
            ItemNotFoundError: If the name has no entries.
        """
        return [ItemId.with_index(name, i) for i in range(len(self.paths_for(name)))]

    def entries(self) -> Iterator[tuple[ItemId, Path]]:
        """Iterate over every ``(ItemId, relative path)`` pair."""
        for name, paths in self._items.items():
            for index, path in enumerate(paths):
                yield ItemId.with_index(name, index), path

    def ids(self) -> list[ItemId]:
        """Return every tracked ItemId in insertion order."""
        return [item_id for item_id, _ in self.entries()]

    def retain(self, keep: Callable[[Path], bool]) -> list[tuple[ItemId, Path]]:
        """Drop every entry whose path fails ``keep``.

        Args:
            keep: Predicate called with each relative path.

        Returns:
            The dropped entries, with the identities they had before removal.
        """
        dropped: list[tuple[ItemId, Path]] = []
        for name in list(self._items):
            kept: list[Path] = []
            for index, path in enumerate(self._items[name]):
                if keep(path):
                    kept.append(path)
                else:
                    dropped.append((ItemId.with_index(name, index), path))
            if kept:
                self._items[name] = kept
            else:
                del self._items[name]
        return dropped

    def discard_under(self, prefix: Path) -> list[tuple[ItemId, Path]]:
        """Drop every entry strictly inside the directory ``prefix``.

        Returns:
            The dropped entries.
        """
        return self.retain(lambda path: not is_below(path, prefix))

    def rebase(self, old_prefix: Path, new_prefix: Path) -> int:
        """Move every entry strictly inside ``old_prefix`` under ``new_prefix``.

        Used after a tracked directory has been renamed or relocated, so
        its tracked descendants keep resolving.

        Returns:
            Number of rewritten entries.
        """
        rewritten = 0
        for paths in self._items.values():
            for position, path in enumerate(paths):
                if is_below(path, old_prefix):
                    paths[position] = new_prefix / path.relative_to(old_prefix)
                    rewritten += 1
        if rewritten:
            logger.debug("Rebased %d entries from %s to %s", rewritten, old_prefix, new_prefix)
        return rewritten

    def snapshot(self) -> dict[str, list[Path]]:
        """Return a deep copy of the mapping, for inspection only."""
        return {name: list(paths) for name, paths in self._items.items()}

    def clear(self) -> None:
        """Remove every entry."""
        self._items.clear()
