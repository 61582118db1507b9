"""Item identity models.

This module defines ItemId, the value used to address tracked files and
folders, together with the policy enums accepted by manager operations.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# "name#3" selects the fourth item sharing "name"
_INDEXED_ID_PATTERN = re.compile(r"^(?P<name>.+)#(?P<index>\d+)$")

# Tokens accepted by ItemId.parse() for the database root
_ROOT_TOKENS: frozenset[str] = frozenset({"", "/"})


@dataclass(frozen=True, slots=True, order=True)
class ItemId:
    """Identifier selecting a tracked item by shared name and position.

    Several items may share one name (e.g. two ``notes.txt`` files in
    different folders). ``index`` picks one of them: it is the zero-based
    position in the list of paths stored under ``name``.

    The value with an empty ``name`` is reserved for the database root.

    Attributes:
        name: Shared name key (the item's file or folder name).
        index: Zero-based position among items sharing ``name``.
    """

    name: str
    index: int = 0

    def __post_init__(self) -> None:
        """Validate identity data after initialization."""
        if self.index < 0:
            msg = f"Index cannot be negative, got {self.index}"
            raise ValueError(msg)

    @classmethod
    def id(cls, name: str) -> ItemId:
        """Create an ItemId for the first item named ``name``."""
        return cls(name=name, index=0)

    @classmethod
    def with_index(cls, name: str, index: int) -> ItemId:
        """Create an ItemId for a specific duplicate of ``name``."""
        return cls(name=name, index=index)

    @classmethod
    def database_id(cls) -> ItemId:
        """Return the ItemId that denotes the database root itself."""
        return cls(name="", index=0)

    @classmethod
    def parse(cls, text: str) -> ItemId:
        """Parse the ``name`` / ``name#index`` notation used by the CLI.

        An empty string or ``/`` parses to the database root. A trailing
        ``#<digits>`` is always read as the index, so an item whose name
        itself ends that way is written with an explicit index: the file
        ``a#1`` is ``a#1#0``. str() produces that form.

        Args:
            text: Text to parse.

        Returns:
            Parsed ItemId.
        """
        text = text.strip()
        if text in _ROOT_TOKENS:
            return cls.database_id()

        match = _INDEXED_ID_PATTERN.match(text)
        if match:
            return cls(name=match.group("name"), index=int(match.group("index")))
        return cls(name=text)

    @property
    def is_root(self) -> bool:
        """Check if this ItemId denotes the database root."""
        return not self.name

    def __str__(self) -> str:
        if self.is_root:
            return "/"
        if self.index == 0 and not _INDEXED_ID_PATTERN.match(self.name):
            return self.name
        return f"{self.name}#{self.index}"


def as_item_id(value: ItemId | str) -> ItemId:
    """Accept either an ItemId or a bare name (index 0)."""
    if isinstance(value, ItemId):
        return value
    return ItemId.id(value)


class ScanPolicy(str, Enum):
    """How scan_for_changes treats items found on disk but not tracked.

    Attributes:
        DETECT_ONLY: Report new items, leave disk and index alone.
        ADD_NEW: Start tracking new items.
        REMOVE_NEW: Delete new items from disk.
    """

    DETECT_ONLY = "detect_only"
    ADD_NEW = "add_new"
    REMOVE_NEW = "remove_new"


class ExportMode(str, Enum):
    """Whether export_item copies the source or moves it out of the database."""

    COPY = "copy"
    MOVE = "move"
