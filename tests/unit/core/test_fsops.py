"""Unit tests for filesystem primitives."""

import errno
from pathlib import Path
from unittest.mock import patch

import pytest
from filedb.core.errors import PathConversionError
from filedb.core.fsops import (
    clear_destination,
    collect_paths_in_scope,
    copy_item,
    delete_directory,
    is_inside,
    is_path_in_scope,
    path_name,
    remove_path,
    transfer,
)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Small tree: root/{b/{x.txt, c/}, a.txt}."""
    root = tmp_path / "root"
    (root / "b" / "c").mkdir(parents=True)
    (root / "b" / "x.txt").write_text("x")
    (root / "a.txt").write_text("a")
    return root


class TestPathName:
    """Tests for path_name."""

    def test_returns_final_component(self) -> None:
        """The last component is returned as text."""
        assert path_name(Path("a/b/notes.txt")) == "notes.txt"

    def test_rejects_empty_name(self) -> None:
        """Paths without a name cannot become index keys."""
        with pytest.raises(PathConversionError):
            path_name(Path("/"))

    def test_rejects_undecodable_name(self) -> None:
        """Names carrying surrogate escapes are rejected."""
        with pytest.raises(PathConversionError):
            path_name(Path("bad\udcff.txt"))


class TestContainment:
    """Tests for is_inside."""

    def test_root_itself_is_inside(self, tree: Path) -> None:
        """The root counts as inside itself."""
        assert is_inside(tree, tree)

    def test_descendant_is_inside(self, tree: Path) -> None:
        """Nested paths, even missing ones, are inside."""
        assert is_inside(tree / "b" / "new", tree)

    def test_dotdot_escape_is_outside(self, tree: Path) -> None:
        """Paths are resolved before comparing."""
        assert not is_inside(tree / ".." / "elsewhere", tree)


class TestDeletion:
    """Tests for remove_path, delete_directory and clear_destination."""

    def test_delete_non_empty_without_force_fails(self, tree: Path) -> None:
        """Non-forced deletion requires an empty directory."""
        with pytest.raises(OSError):
            delete_directory(tree / "b", force=False)
        assert (tree / "b").exists()

    def test_delete_with_force(self, tree: Path) -> None:
        """Forced deletion removes contents."""
        delete_directory(tree / "b", force=True)
        assert not (tree / "b").exists()

    def test_remove_path_file_and_dir(self, tree: Path) -> None:
        """remove_path handles files and directories."""
        remove_path(tree / "a.txt")
        remove_path(tree / "b")
        assert list(tree.iterdir()) == []

    def test_clear_destination(self, tree: Path) -> None:
        """clear_destination reports whether something was removed."""
        assert clear_destination(tree / "a.txt")
        assert not clear_destination(tree / "a.txt")


class TestCopyAndTransfer:
    """Tests for copy_item and transfer."""

    def test_copy_directory_tree(self, tree: Path, tmp_path: Path) -> None:
        """Directories are copied recursively."""
        copy_item(tree / "b", tmp_path / "copy")
        assert (tmp_path / "copy" / "x.txt").read_text() == "x"
        assert (tree / "b" / "x.txt").exists()

    def test_transfer_renames(self, tree: Path, tmp_path: Path) -> None:
        """Same-device moves are plain renames."""
        transfer(tree / "a.txt", tmp_path / "moved.txt")
        assert (tmp_path / "moved.txt").read_text() == "a"
        assert not (tree / "a.txt").exists()

    def test_transfer_cross_device_falls_back_to_copy(self, tree: Path, tmp_path: Path) -> None:
        """EXDEV renames are replaced by copy plus delete."""
        cross_device = OSError(errno.EXDEV, "Invalid cross-device link")
        with patch.object(Path, "rename", side_effect=cross_device):
            transfer(tree / "b", tmp_path / "moved")

        assert (tmp_path / "moved" / "x.txt").read_text() == "x"
        assert not (tree / "b").exists()

    def test_transfer_other_errors_propagate(self, tree: Path, tmp_path: Path) -> None:
        """Only EXDEV triggers the fallback."""
        denied = OSError(errno.EACCES, "Permission denied")
        with patch.object(Path, "rename", side_effect=denied), pytest.raises(OSError):
            transfer(tree / "a.txt", tmp_path / "moved.txt")
        assert (tree / "a.txt").exists()


class TestScope:
    """Tests for is_path_in_scope and collect_paths_in_scope."""

    def test_root_scope_recursive(self) -> None:
        """Everything is in the recursive root scope."""
        assert is_path_in_scope(Path("a/b/c"), None, recursive=True)

    def test_root_scope_shallow(self) -> None:
        """Only top-level entries are in the shallow root scope."""
        assert is_path_in_scope(Path("a"), None, recursive=False)
        assert not is_path_in_scope(Path("a/b"), None, recursive=False)

    def test_sub_scope(self) -> None:
        """A directory scope excludes the directory itself."""
        assert is_path_in_scope(Path("b/c/d"), Path("b"), recursive=True)
        assert not is_path_in_scope(Path("b/c/d"), Path("b"), recursive=False)
        assert not is_path_in_scope(Path("b"), Path("b"), recursive=True)

    def test_collect_recursive_is_breadth_first_and_sorted(self, tree: Path) -> None:
        """Discovery lists each directory sorted, level by level."""
        assert collect_paths_in_scope(tree, tree, recursive=True) == [
            Path("a.txt"),
            Path("b"),
            Path("b/c"),
            Path("b/x.txt"),
        ]

    def test_collect_shallow(self, tree: Path) -> None:
        """Shallow discovery lists direct children only."""
        assert collect_paths_in_scope(tree, tree / "b", recursive=False) == [
            Path("b/c"),
            Path("b/x.txt"),
        ]

    def test_symlinked_directories_not_descended(self, tree: Path, tmp_path: Path) -> None:
        """A symlink to a directory is listed but not walked."""
        target = tmp_path / "target"
        target.mkdir()
        (target / "inner.txt").write_text("i")
        (tree / "link").symlink_to(target, target_is_directory=True)

        found = collect_paths_in_scope(tree, tree, recursive=True)

        assert Path("link") in found
        assert Path("link/inner.txt") not in found
