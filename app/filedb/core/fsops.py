"""Filesystem primitives used by the database manager.

Thin wrappers over shutil / pathlib that encode the manager's rules for
deleting, copying and moving items. Errors from the OS propagate
unchanged.
"""

import errno
import logging
import shutil
from collections import deque
from pathlib import Path

from filedb.core.errors import PathConversionError

logger = logging.getLogger(__name__)


def path_name(path: Path) -> str:
    """Return the final component of ``path`` as text.

    Names decoded from undecodable OS bytes carry lone surrogates; they
    cannot be used as index keys and are rejected here.

    Raises:
        PathConversionError: If the path has no name or it is not valid text.
    """
    name = path.name
    if not name:
        raise PathConversionError(path)
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathConversionError(path) from e
    return name


def is_inside(path: Path, root: Path) -> bool:
    """Check if ``path`` is ``root`` or lies below it, after resolving both."""
    return path.resolve().is_relative_to(root.resolve())


def remove_path(path: Path) -> None:
    """Remove a file, or a directory with all of its contents.

    Symlinks are removed themselves, never followed.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def delete_directory(path: Path, force: bool) -> None:
    """Delete a directory.

    Args:
        path: Directory to delete.
        force: If True, delete it with all contents. Otherwise it must be
            empty.

    Raises:
        OSError: If the directory is not empty and ``force`` is False, or
            the deletion fails.
    """
    if force:
        shutil.rmtree(path)
    else:
        path.rmdir()


def copy_item(source: Path, destination: Path) -> None:
    """Copy a file or a whole directory tree to ``destination``."""
    if source.is_dir():
        shutil.copytree(source, destination, symlinks=True)
    else:
        shutil.copy2(source, destination)


def transfer(source: Path, destination: Path) -> None:
    """Move ``source`` to ``destination``.

    A plain rename is tried first. Across filesystem boundaries the item
    is copied and the source deleted afterwards.
    """
    try:
        source.rename(destination)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise

    logger.debug("Cross-device move: %s -> %s", source, destination)
    copy_item(source, destination)
    remove_path(source)


def clear_destination(path: Path) -> bool:
    """Remove whatever sits at ``path``.

    Returns:
        True if something was removed.
    """
    if not path.exists() and not path.is_symlink():
        return False
    logger.info("Overwriting existing %s", path)
    remove_path(path)
    return True


def is_path_in_scope(path: Path, scope: Path | None, recursive: bool) -> bool:
    """Check if a root-relative path belongs to a scan scope.

    Args:
        path: Root-relative path of a tracked item.
        scope: Root-relative scope directory, None for the database root.
        recursive: Whether the scope covers the whole subtree or only
            direct children.
    """
    if scope is None:
        return recursive or path.parent == Path()
    if recursive:
        return path != scope and path.is_relative_to(scope)
    return path.parent == scope


def collect_paths_in_scope(root: Path, scope: Path, recursive: bool) -> list[Path]:
    """List files and directories under ``scope``, relative to ``root``.

    Entries are returned directory by directory (breadth first), sorted
    within each directory. Symlinked directories are listed but not
    descended into.

    Args:
        root: Database root.
        scope: Absolute directory to enumerate (``root`` or inside it).
        recursive: Enumerate the whole subtree instead of direct children.

    Returns:
        Root-relative paths of every file and directory found.
    """
    collected: list[Path] = []
    pending: deque[Path] = deque([scope])

    while pending:
        directory = pending.popleft()
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                collected.append(entry.relative_to(root))
                if recursive and not entry.is_symlink():
                    pending.append(entry)
            elif entry.is_file():
                collected.append(entry.relative_to(root))

    return collected
