"""Unit tests for the in-memory item index."""

from pathlib import Path

import pytest
from filedb.core.errors import IndexOutOfRangeError, ItemExistsError, ItemNotFoundError
from filedb.core.index import ItemIndex, is_below
from filedb.models.item import ItemId


@pytest.fixture
def index() -> ItemIndex:
    """Index with three notes.txt entries and one folder."""
    idx = ItemIndex()
    idx.add("a", Path("a"))
    idx.add("notes.txt", Path("a/notes.txt"))
    idx.add("notes.txt", Path("b/notes.txt"))
    idx.add("notes.txt", Path("c/notes.txt"))
    return idx


class TestIsBelow:
    """Tests for is_below helper."""

    def test_strictly_inside(self) -> None:
        """Descendants are below their ancestors."""
        assert is_below(Path("a/b/c"), Path("a"))

    def test_self_is_not_below(self) -> None:
        """A path is not below itself."""
        assert not is_below(Path("a"), Path("a"))

    def test_sibling_prefix_is_not_below(self) -> None:
        """Component-wise comparison, not string prefixes."""
        assert not is_below(Path("ab/c"), Path("a"))


class TestAddAndResolve:
    """Tests for ItemIndex.add and resolve."""

    def test_add_returns_position(self, index: ItemIndex) -> None:
        """New entries get the prior list length as index."""
        assert index.add("notes.txt", Path("d/notes.txt")) == ItemId.with_index("notes.txt", 3)

    def test_resolve(self, index: ItemIndex) -> None:
        """Entries resolve by name and position."""
        assert index.resolve(ItemId.with_index("notes.txt", 1)) == Path("b/notes.txt")

    def test_resolve_unknown_name(self, index: ItemIndex) -> None:
        """Unknown names raise ItemNotFoundError."""
        with pytest.raises(ItemNotFoundError, match="missing"):
            index.resolve(ItemId.id("missing"))

    def test_resolve_out_of_range(self, index: ItemIndex) -> None:
        """Too large indices raise IndexOutOfRangeError."""
        with pytest.raises(IndexOutOfRangeError, match=r"Index 3 out of bounds .* \(len: 3\)"):
            index.resolve(ItemId.with_index("notes.txt", 3))

    def test_duplicate_path_rejected(self, index: ItemIndex) -> None:
        """The same path cannot be added twice under a name."""
        with pytest.raises(ItemExistsError):
            index.add("notes.txt", Path("b/notes.txt"))

    def test_empty_name_rejected(self) -> None:
        """The root name is never stored."""
        with pytest.raises(ValueError, match="non-empty"):
            ItemIndex().add("", Path("x"))

    def test_len_counts_entries(self, index: ItemIndex) -> None:
        """len() counts paths, not names."""
        assert len(index) == 4
        assert "notes.txt" in index
        assert "missing" not in index


class TestRemove:
    """Tests for order preserving removal."""

    def test_remove_shifts_later_entries(self, index: ItemIndex) -> None:
        """Removing index 0 moves the others down by one, in order."""
        removed = index.remove(ItemId.with_index("notes.txt", 0))

        assert removed == Path("a/notes.txt")
        assert index.paths_for("notes.txt") == [Path("b/notes.txt"), Path("c/notes.txt")]

    def test_removing_last_entry_drops_name(self, index: ItemIndex) -> None:
        """A name without paths disappears."""
        index.remove(ItemId.id("a"))
        assert "a" not in index
        with pytest.raises(ItemNotFoundError):
            index.paths_for("a")

    def test_discard_by_path(self, index: ItemIndex) -> None:
        """discard removes the entry tracking a path and reports its id."""
        assert index.discard(Path("b/notes.txt")) == ItemId.with_index("notes.txt", 1)
        assert index.discard(Path("b/notes.txt")) is None
        assert index.count("notes.txt") == 2

    def test_retain_reports_pre_removal_ids(self, index: ItemIndex) -> None:
        """retain returns dropped entries with the ids they had before."""
        dropped = index.retain(lambda p: p != Path("b/notes.txt"))
        assert dropped == [(ItemId.with_index("notes.txt", 1), Path("b/notes.txt"))]
        assert index.resolve(ItemId.with_index("notes.txt", 1)) == Path("c/notes.txt")


class TestSubtreeUpdates:
    """Tests for discard_under and rebase."""

    def test_discard_under(self, index: ItemIndex) -> None:
        """Entries inside a directory are dropped, the directory itself kept."""
        index.discard_under(Path("a"))
        assert index.resolve(ItemId.id("a")) == Path("a")
        assert index.paths_for("notes.txt") == [Path("b/notes.txt"), Path("c/notes.txt")]

    def test_rebase(self, index: ItemIndex) -> None:
        """Entries inside a directory follow it to a new location."""
        assert index.rebase(Path("a"), Path("z/a2")) == 1
        assert index.resolve(ItemId.id("notes.txt")) == Path("z/a2/notes.txt")
        assert index.resolve(ItemId.id("a")) == Path("a")

    def test_snapshot_is_a_copy(self, index: ItemIndex) -> None:
        """Mutating a snapshot leaves the index alone."""
        snapshot = index.snapshot()
        snapshot["notes.txt"].clear()
        assert index.count("notes.txt") == 3


class TestQueries:
    """Tests for lookup helpers."""

    def test_find(self, index: ItemIndex) -> None:
        """find maps a path back to its identity."""
        assert index.find(Path("c/notes.txt")) == ItemId.with_index("notes.txt", 2)
        assert index.find(Path("nope")) is None

    def test_ids_for(self, index: ItemIndex) -> None:
        """ids_for lists every index of a name."""
        assert index.ids_for("notes.txt") == [ItemId.with_index("notes.txt", i) for i in range(3)]

    def test_contains(self, index: ItemIndex) -> None:
        """contains checks a name and path pair."""
        assert index.contains("notes.txt", Path("a/notes.txt"))
        assert not index.contains("a", Path("a/notes.txt"))

    def test_clear(self, index: ItemIndex) -> None:
        """clear empties the index."""
        index.clear()
        assert len(index) == 0
