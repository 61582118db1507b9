"""Database manager.

This module provides the DatabaseManager class: the single owner of a
database root directory and of the in-memory index that maps item
identities to paths below it.

Every mutating operation performs its filesystem call first and updates
the index only once that call has succeeded, so the index never refers
to a path that does not exist yet.
"""

from __future__ import annotations

import errno
import logging
import os
import time
from pathlib import Path
from typing import Any, BinaryIO, TypeVar

from pydantic import BaseModel

from filedb.core import payloads
from filedb.core.atomic import write_bytes_atomic, write_stream_atomic
from filedb.core.errors import (
    DatabaseClosedError,
    DestinationContainsDatabaseError,
    ExportInsideDatabaseError,
    IdenticalPathsError,
    ImportInsideDatabaseError,
    ItemExistsError,
    ItemNotADirectoryError,
    ItemNotAFileError,
    ItemNotFoundError,
    NoParentError,
    PathConversionError,
    RootIdUnsupportedError,
)
from filedb.core.fsops import (
    clear_destination,
    copy_item,
    delete_directory,
    is_inside,
    is_path_in_scope,
    path_name,
    transfer,
)
from filedb.core.index import ItemIndex, is_below
from filedb.core.reconcile import Reconciler
from filedb.models.info import FileInformation, FileSize
from filedb.models.item import ExportMode, ItemId, ScanPolicy, as_item_id
from filedb.models.scan import ScanReport

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Anything accepted where an item is expected: an ItemId or a bare name
ItemRef = ItemId | str


def _validate_name(name: str) -> str:
    """Check that ``name`` is a single, usable path component."""
    if not name or name in (".", "..") or Path(name).name != name:
        msg = f"Invalid item name: {name!r}"
        raise ValueError(msg)
    return name


def _absolute(path: Path | str) -> Path:
    """Anchor a caller supplied external path at the working directory."""
    path = Path(path)
    return path if path.is_absolute() else Path.cwd() / path


def _unix_seconds(timestamp: float | None) -> int | None:
    if timestamp is None or timestamp < 0:
        return None
    return int(timestamp)


def _seconds_since(timestamp: float | None, now: float) -> int | None:
    if timestamp is None or now < timestamp:
        return None
    return int(now - timestamp)


class DatabaseManager:
    """Manages one database directory and the index of its items.

    Items are addressed by ItemId (shared name + position). Names with an
    extension are files, names without one are directories.

    Not thread-safe: callers must serialize mutating calls.

    Example:
        >>> manager = DatabaseManager(tmp_dir, "database")
        >>> manager.write_new("folder")
        >>> manager.write_new("notes.txt", parent="folder")
        >>> manager.overwrite_existing("notes.txt", b"hello")
        5
    """

    def __init__(self, path: Path | str, name: Path | str) -> None:
        """Create a new database directory ``path/name``.

        Args:
            path: Existing parent directory.
            name: Name of the database directory to create.

        Raises:
            FileExistsError: If the database directory already exists.
            FileNotFoundError: If ``path`` does not exist.
            OSError: If the directory cannot be created.
        """
        root = Path(path) / name
        root.mkdir()
        self._root = root.resolve()
        self._index = ItemIndex()
        self._closed = False
        logger.info("Created database at %s", self._root)

    @classmethod
    def open(cls, root: Path | str) -> DatabaseManager:
        """Attach to an existing database directory.

        The index is not persisted, so it is rebuilt from the disk
        contents with a recursive scan that tracks everything found.

        Args:
            root: Existing database directory.

        Returns:
            Manager tracking every file and folder under ``root``.

        Raises:
            ItemNotADirectoryError: If ``root`` is not a directory.
        """
        root = Path(root)
        if not root.is_dir():
            raise ItemNotADirectoryError(root)

        manager = cls.__new__(cls)
        manager._root = root.resolve()
        manager._index = ItemIndex()
        manager._closed = False
        manager.scan_for_changes(ItemId.database_id(), ScanPolicy.ADD_NEW, recursive=True)
        logger.info("Opened database at %s (%d items)", manager._root, len(manager._index))
        return manager

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"items={len(self._index)}"
        return f"DatabaseManager(root={str(self._root)!r}, {state})"

    @property
    def root(self) -> Path:
        """Absolute path of the database root (empty once deleted)."""
        return self._root

    @property
    def is_open(self) -> bool:
        """Whether the database still exists and can be operated on."""
        return not self._closed

    @property
    def index(self) -> dict[str, list[Path]]:
        """Copy of the name to relative-paths mapping."""
        return self._index.snapshot()

    @property
    def item_count(self) -> int:
        """Number of tracked items."""
        return len(self._index)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def locate_absolute(self, item: ItemRef) -> Path:
        """Return the absolute path of an item.

        The root ItemId resolves to the database root itself.

        Raises:
            ItemNotFoundError: If the name is not tracked.
            IndexOutOfRangeError: If the index is out of bounds.
        """
        item_id = self._resolve_ref(item)
        if item_id.is_root:
            return self._root
        return self._root / self._index.resolve(item_id)

    def locate_relative(self, item: ItemRef) -> Path:
        """Return the root-relative path of an item.

        The root ItemId resolves to the empty relative path.

        Raises:
            ItemNotFoundError: If the name is not tracked.
            IndexOutOfRangeError: If the index is out of bounds.
        """
        item_id = self._resolve_ref(item)
        if item_id.is_root:
            return Path()
        return self._index.resolve(item_id)

    def get_paths_for_id(self, item: ItemRef) -> list[Path]:
        """Return every relative path stored under the item's name.

        Raises:
            RootIdUnsupportedError: If the root ItemId is passed.
            ItemNotFoundError: If the name is not tracked.
        """
        item_id = self._require_item(item)
        return self._index.paths_for(item_id.name)

    def get_ids_from_shared_id(self, item: ItemRef) -> list[ItemId]:
        """Return every ItemId sharing the item's name, in index order.

        Raises:
            RootIdUnsupportedError: If the root ItemId is passed.
            ItemNotFoundError: If the name is not tracked.
        """
        item_id = self._require_item(item)
        return self._index.ids_for(item_id.name)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def get_all(self, sort: bool = True) -> list[ItemId]:
        """Return every tracked item.

        Args:
            sort: Sort by (name, index) instead of index order.
        """
        self._require_open()
        ids = self._index.ids()
        return sorted(ids) if sort else ids

    def get_by_parent(self, parent: ItemRef, sort: bool = True) -> list[ItemId]:
        """Return the tracked items directly inside ``parent``.

        Args:
            parent: Directory item, or the root ItemId for top-level items.
            sort: Sort by (name, index) instead of index order.

        Raises:
            ItemNotFoundError: If ``parent`` is not tracked.
            ItemNotADirectoryError: If ``parent`` is not a directory.
        """
        parent_id = self._resolve_ref(parent)
        parent_absolute = self.locate_absolute(parent_id)
        if not parent_absolute.is_dir():
            raise ItemNotADirectoryError(parent_absolute)

        parent_relative = self.locate_relative(parent_id)
        ids = [item_id for item_id, path in self._index.entries() if path.parent == parent_relative]
        return sorted(ids) if sort else ids

    def get_parent(self, item: ItemRef) -> ItemId:
        """Return the ItemId of the directory containing an item.

        Top-level items return the root ItemId.

        Raises:
            RootIdUnsupportedError: If the root ItemId is passed.
            ItemNotFoundError: If the item is not tracked.
            NoParentError: If the parent directory is not tracked.
        """
        item_id = self._require_item(item)
        parent = self._index.resolve(item_id).parent
        if parent == Path():
            return ItemId.database_id()

        parent_id = self._index.find(parent)
        if parent_id is None:
            raise NoParentError(item_id.name)
        return parent_id

    # ------------------------------------------------------------------
    # Creation and content
    # ------------------------------------------------------------------

    def write_new(self, item: ItemRef, parent: ItemRef | None = None) -> ItemId:
        """Create a new empty file or directory.

        Names with an extension (``notes.txt``) become files, names
        without one (``folder``) become directories.

        Args:
            item: Name of the new item. The root ItemId is not allowed.
            parent: Directory to create it in; defaults to the root.

        Returns:
            ItemId of the created item.

        Raises:
            RootIdUnsupportedError: If ``item`` is the root ItemId.
            ItemNotFoundError: If ``parent`` is not tracked.
            ItemNotADirectoryError: If ``parent`` is not a directory.
            ItemExistsError: If the same path is already tracked.
            FileExistsError: If something untracked already sits there.
        """
        item_id = self._require_item(item)
        name = _validate_name(item_id.name)
        parent_id = self._resolve_ref(parent if parent is not None else ItemId.database_id())

        parent_absolute = self.locate_absolute(parent_id)
        if not parent_absolute.is_dir():
            raise ItemNotADirectoryError(parent_absolute)

        relative = self.locate_relative(parent_id) / name
        if self._index.contains(name, relative):
            raise ItemExistsError(name)

        absolute = parent_absolute / name
        if relative.suffix:
            absolute.touch(exist_ok=False)
        else:
            absolute.mkdir()

        created = self._index.add(name, relative)
        logger.debug("Created %s as %s", relative, created)
        return created

    def overwrite_existing(self, item: ItemRef, data: bytes | bytearray | memoryview) -> int:
        """Atomically replace a file's content with ``data``.

        Returns:
            Number of bytes written.

        Raises:
            ItemNotFoundError: If the item is not tracked.
            ItemNotAFileError: If the item is a directory.
            OSError: If writing fails; the old content is kept.
        """
        return write_bytes_atomic(self.locate_absolute(item), data)

    def overwrite_existing_from_reader(self, item: ItemRef, reader: BinaryIO) -> int:
        """Atomically replace a file's content with a stream read to EOF.

        Returns:
            Number of bytes written.

        Raises:
            ItemNotFoundError: If the item is not tracked.
            ItemNotAFileError: If the item is a directory.
            OSError: If reading or writing fails; the old content is kept.
        """
        return write_stream_atomic(self.locate_absolute(item), reader)

    def read_existing(self, item: ItemRef) -> bytes:
        """Return a file's raw bytes.

        Raises:
            ItemNotFoundError: If the item is not tracked.
            ItemNotAFileError: If the item is a directory.
        """
        path = self.locate_absolute(item)
        if path.is_dir():
            raise ItemNotAFileError(path)
        return path.read_bytes()

    def overwrite_existing_json(self, item: ItemRef, value: Any) -> int:
        """Serialize ``value`` as JSON and atomically write it to a file."""
        return self.overwrite_existing(item, payloads.encode_json(value))

    def read_existing_json(self, item: ItemRef) -> Any:
        """Read a file and parse it as JSON.

        Raises:
            PayloadError: If the content is not valid JSON.
        """
        return payloads.decode_json(self.read_existing(item))

    def overwrite_existing_toml(self, item: ItemRef, value: dict[str, Any]) -> int:
        """Serialize a table as TOML and atomically write it to a file."""
        return self.overwrite_existing(item, payloads.encode_toml(value))

    def read_existing_toml(self, item: ItemRef) -> dict[str, Any]:
        """Read a file and parse it as TOML.

        Raises:
            PayloadError: If the content is not valid TOML.
        """
        return payloads.decode_toml(self.read_existing(item))

    def overwrite_existing_model(self, item: ItemRef, model: BaseModel) -> int:
        """Serialize a Pydantic model and atomically write it to a file."""
        return self.overwrite_existing(item, payloads.encode_model(model))

    def read_existing_model(self, item: ItemRef, model_type: type[ModelT]) -> ModelT:
        """Read a file and validate it into ``model_type``.

        Raises:
            PayloadError: If the content does not validate.
        """
        return payloads.decode_model(self.read_existing(item), model_type)

    # ------------------------------------------------------------------
    # Rename and delete
    # ------------------------------------------------------------------

    def rename(self, item: ItemRef, to: str) -> ItemId:
        """Rename an item inside its current directory.

        Tracked items below a renamed directory follow it.

        Args:
            item: Item to rename. The root ItemId is not allowed.
            to: New name.

        Returns:
            ItemId of the renamed item (appended under the new name).

        Raises:
            RootIdUnsupportedError: If ``item`` is the root ItemId.
            ItemNotFoundError: If the item is not tracked.
            ItemExistsError: If the destination is already tracked.
            FileExistsError: If something untracked sits at the destination.
        """
        item_id = self._require_item(item)
        name = _validate_name(to)

        source_relative = self._index.resolve(item_id)
        destination_relative = source_relative.with_name(name)
        if self._index.contains(name, destination_relative):
            raise ItemExistsError(name)

        source = self._root / source_relative
        destination = self._root / destination_relative
        if destination.exists() or destination.is_symlink():
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(destination))

        is_dir = source.is_dir()
        source.rename(destination)

        self._index.remove(item_id)
        renamed = self._index.add(name, destination_relative)
        if is_dir:
            self._index.rebase(source_relative, destination_relative)
        logger.debug("Renamed %s -> %s", source_relative, destination_relative)
        return renamed

    def delete(self, item: ItemRef, force: bool = True) -> None:
        """Delete an item, or the whole database.

        Deleting the root ItemId removes the database directory and
        closes the manager. Tracked items below a deleted directory
        leave the index with it.

        Args:
            item: Item to delete, or the root ItemId.
            force: Delete non-empty directories with their contents. When
                False, only empty directories can be deleted.

        Raises:
            ItemNotFoundError: If the item is not tracked.
            OSError: If the directory is not empty and ``force`` is False,
                or the deletion fails.
        """
        item_id = self._resolve_ref(item)

        if item_id.is_root:
            delete_directory(self._root, force)
            logger.info("Deleted database at %s", self._root)
            self._root = Path()
            self._index.clear()
            self._closed = True
            return

        relative = self._index.resolve(item_id)
        absolute = self._root / relative
        is_dir = absolute.is_dir() and not absolute.is_symlink()
        if is_dir:
            delete_directory(absolute, force)
        else:
            absolute.unlink()

        self._index.remove(item_id)
        if is_dir:
            self._index.discard_under(relative)
        logger.debug("Deleted %s", relative)

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def scan_for_changes(
        self,
        scope: ItemRef | None = None,
        policy: ScanPolicy = ScanPolicy.ADD_NEW,
        recursive: bool = True,
    ) -> ScanReport:
        """Reconcile the index with the disk contents of a directory.

        Tracked items missing on disk are always dropped from the index.
        Untracked items found on disk are handled according to ``policy``.

        Args:
            scope: Directory to scan; defaults to the whole database.
            policy: Detect, track, or delete untracked items.
            recursive: Scan the whole subtree instead of direct children.

        Returns:
            ScanReport of everything added and removed.

        Raises:
            ItemNotFoundError: If ``scope`` is not tracked.
            ItemNotADirectoryError: If ``scope`` is not a directory.
        """
        scope_id = self._resolve_ref(scope if scope is not None else ItemId.database_id())
        return Reconciler(self._root, self._index).scan(scope_id, policy, recursive)

    def forget(self, scope: ItemRef | None = None, recursive: bool = True) -> int:
        """Drop the index entries of a directory's contents, leaving the disk alone.

        A following scan_for_changes() with the same scope reports every
        item found there as untracked, so its policy applies to all of them.

        Args:
            scope: Directory whose contents are forgotten; defaults to the
                whole database.
            recursive: Forget the whole subtree instead of direct children.

        Returns:
            Number of entries dropped.

        Raises:
            ItemNotFoundError: If ``scope`` is not tracked.
            ItemNotADirectoryError: If ``scope`` is not a directory.
        """
        scope_id = self._resolve_ref(scope if scope is not None else ItemId.database_id())
        scope_relative = None if scope_id.is_root else self._index.resolve(scope_id)
        scope_absolute = self._root if scope_relative is None else self._root / scope_relative
        if not scope_absolute.is_dir():
            raise ItemNotADirectoryError(scope_absolute)

        dropped = self._index.retain(
            lambda path: not is_path_in_scope(path, scope_relative, recursive)
        )
        logger.debug("Forgot %d entries under %s", len(dropped), scope_id)
        return len(dropped)

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def migrate_item(self, item: ItemRef, to: ItemRef) -> ItemId:
        """Move an item into another directory of the database.

        Whatever already sits at the destination is overwritten and
        leaves the index.

        Args:
            item: Item to move. The root ItemId is not allowed.
            to: Destination directory, or the root ItemId.

        Returns:
            ItemId of the moved item.

        Raises:
            ItemNotADirectoryError: If ``to`` is not a directory.
            IdenticalPathsError: If the item already is in ``to``.
            OSError: If ``to`` lies inside the moved directory, or the
                move fails.
        """
        item_id = self._require_item(item)
        destination_dir = self.locate_absolute(to)
        if not destination_dir.is_dir():
            raise ItemNotADirectoryError(destination_dir)

        source_relative = self._index.resolve(item_id)
        source = self._root / source_relative
        name = path_name(source)
        destination = destination_dir / name
        destination_relative = destination.relative_to(self._root)

        if destination == source:
            raise IdenticalPathsError(destination)
        if is_below(destination_relative, source_relative):
            raise OSError(
                errno.EINVAL, "Cannot move a directory into itself", str(destination)
            )
        if is_below(source_relative, destination_relative):
            raise OSError(
                errno.EINVAL, "Destination contains the item being moved", str(destination)
            )

        is_dir = source.is_dir()
        if clear_destination(destination):
            self._index.discard(destination_relative)
            self._index.discard_under(destination_relative)

        source.rename(destination)

        self._index.discard(source_relative)
        moved = self._index.add(name, destination_relative)
        if is_dir:
            self._index.rebase(source_relative, destination_relative)
        logger.debug("Moved %s -> %s", source_relative, destination_relative)
        return moved

    def export_item(
        self,
        item: ItemRef,
        to: Path | str,
        mode: ExportMode = ExportMode.COPY,
    ) -> Path:
        """Copy or move an item to a directory outside the database.

        The destination directory is created if it does not exist, and
        anything already at the destination path is overwritten.

        Args:
            item: Item to export. The root ItemId is not allowed.
            to: External destination directory.
            mode: Copy (index unchanged) or move (item leaves the index).

        Returns:
            Absolute path of the exported copy.

        Raises:
            ExportInsideDatabaseError: If ``to`` lies inside the database.
            DestinationContainsDatabaseError: If the exported path would be
                the database root or one of its ancestors.
            ItemNotADirectoryError: If ``to`` exists and is not a directory.
        """
        item_id = self._require_item(item)
        destination_dir = _absolute(to)
        if is_inside(destination_dir, self._root):
            raise ExportInsideDatabaseError(destination_dir)
        if destination_dir.exists() and not destination_dir.is_dir():
            raise ItemNotADirectoryError(destination_dir)

        source_relative = self._index.resolve(item_id)
        source = self._root / source_relative
        destination = destination_dir / source.name
        if is_inside(self._root, destination):
            raise DestinationContainsDatabaseError(destination)

        destination_dir.mkdir(parents=True, exist_ok=True)

        clear_destination(destination)

        if mode == ExportMode.MOVE:
            transfer(source, destination)
            self._index.remove(item_id)
            self._index.discard_under(source_relative)
        else:
            copy_item(source, destination)

        logger.info("Exported %s to %s (%s)", source_relative, destination, mode.value)
        return destination

    def import_item(self, source: Path | str, to: ItemRef | None = None) -> ItemId:
        """Copy an external file or directory into the database.

        The imported item keeps its name. Only the item itself is
        tracked; contents of an imported directory can be picked up with
        scan_for_changes().

        Args:
            source: External path to import.
            to: Destination directory; defaults to the root.

        Returns:
            ItemId of the imported item.

        Raises:
            ImportInsideDatabaseError: If ``source`` lies inside the database.
            ItemNotADirectoryError: If ``to`` is not a directory.
            ItemExistsError: If the destination is taken.
            ItemNotFoundError: If ``source`` does not exist.
        """
        source_path = _absolute(source)
        if is_inside(source_path, self._root):
            raise ImportInsideDatabaseError(source_path)

        parent_id = self._resolve_ref(to if to is not None else ItemId.database_id())
        destination_dir = self.locate_absolute(parent_id)
        if not destination_dir.is_dir():
            raise ItemNotADirectoryError(destination_dir)

        name = path_name(source_path)
        destination = destination_dir / name
        destination_relative = self.locate_relative(parent_id) / name
        if (
            destination.exists()
            or destination.is_symlink()
            or self._index.contains(name, destination_relative)
        ):
            raise ItemExistsError(name)

        if not source_path.is_dir() and not source_path.is_file():
            raise ItemNotFoundError(
                str(source_path), f"Import source '{source_path}' doesn't exist"
            )
        copy_item(source_path, destination)

        imported = self._index.add(name, destination_relative)
        logger.info("Imported %s as %s", source_path, imported)
        return imported

    def duplicate_item(self, item: ItemRef, parent: ItemRef, name: str) -> ItemId:
        """Copy an item under a new name into a directory of the database.

        Args:
            item: Item to copy. The root ItemId is not allowed.
            parent: Directory receiving the copy, or the root ItemId.
            name: Name of the copy.

        Returns:
            ItemId of the copy.

        Raises:
            ItemNotADirectoryError: If ``parent`` is not a directory.
            IdenticalPathsError: If the copy would replace the source.
            ItemExistsError: If the destination is taken.
        """
        item_id = self._require_item(item)
        name = _validate_name(name)
        parent_id = self._resolve_ref(parent)

        source = self.locate_absolute(item_id)
        parent_absolute = self.locate_absolute(parent_id)
        if not parent_absolute.is_dir():
            raise ItemNotADirectoryError(parent_absolute)

        destination = parent_absolute / name
        destination_relative = self.locate_relative(parent_id) / name
        if destination == source:
            raise IdenticalPathsError(destination)
        if (
            destination.exists()
            or destination.is_symlink()
            or self._index.contains(name, destination_relative)
        ):
            raise ItemExistsError(name)

        copy_item(source, destination)

        duplicate = self._index.add(name, destination_relative)
        logger.debug("Duplicated %s as %s", item_id, duplicate)
        return duplicate

    def migrate_database(self, to: Path | str) -> Path:
        """Move the whole database directory into another directory.

        An existing directory with the database's name at the destination
        is replaced. The index needs no change: it stores root-relative
        paths.

        Args:
            to: Directory that will contain the database.

        Returns:
            The new database root.

        Raises:
            IdenticalPathsError: If the database already lives in ``to``.
            ExportInsideDatabaseError: If ``to`` lies inside the database.
            DestinationContainsDatabaseError: If the new root would contain
                the current one.
            ItemNotADirectoryError: If ``to`` exists and is not a directory.
        """
        self._require_open()
        destination_dir = _absolute(to)
        new_root = destination_dir / self._root.name

        if new_root.resolve() == self._root:
            raise IdenticalPathsError(new_root)
        if is_inside(self._root, new_root):
            raise DestinationContainsDatabaseError(new_root)
        if is_inside(destination_dir, self._root):
            raise ExportInsideDatabaseError(destination_dir)
        if destination_dir.exists() and not destination_dir.is_dir():
            raise ItemNotADirectoryError(destination_dir)
        destination_dir.mkdir(parents=True, exist_ok=True)

        clear_destination(new_root)
        copy_item(self._root, new_root)
        delete_directory(self._root, force=True)

        logger.info("Migrated database %s -> %s", self._root, new_root)
        self._root = new_root.resolve()
        return self._root

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def get_file_information(self, item: ItemRef) -> FileInformation:
        """Return a metadata snapshot for an item (or the database root).

        Raises:
            ItemNotFoundError: If the item is not tracked.
            OSError: If the item cannot be stat'ed.
        """
        path = self.locate_absolute(item)
        stat = path.stat()
        now = time.time()
        is_dir = path.is_dir()

        name: str | None
        try:
            name = path_name(path) if is_dir else path.stem
        except PathConversionError:
            name = None
        extension = None
        if not is_dir and path.suffix:
            extension = path.suffix[1:]

        created = getattr(stat, "st_birthtime", None)
        return FileInformation(
            name=name,
            extension=extension,
            size=FileSize.from_bytes(stat.st_size),
            is_dir=is_dir,
            unix_created=_unix_seconds(created),
            seconds_since_created=_seconds_since(created, now),
            unix_last_opened=_unix_seconds(stat.st_atime),
            seconds_since_last_opened=_seconds_since(stat.st_atime, now),
            unix_last_modified=_unix_seconds(stat.st_mtime),
            seconds_since_last_modified=_seconds_since(stat.st_mtime, now),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_open(self) -> None:
        if self._closed:
            raise DatabaseClosedError()

    def _resolve_ref(self, item: ItemRef) -> ItemId:
        self._require_open()
        return as_item_id(item)

    def _require_item(self, item: ItemRef) -> ItemId:
        item_id = self._resolve_ref(item)
        if item_id.is_root:
            raise RootIdUnsupportedError()
        return item_id
