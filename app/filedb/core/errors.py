"""Exceptions raised by the database manager.

Every error the manager detects itself derives from DatabaseError.
Failures of the underlying filesystem calls are not wrapped: they
propagate as the OSError subclass the call raised.
"""

from pathlib import Path


class DatabaseError(Exception):
    """Base exception for all database errors."""


class DatabaseClosedError(DatabaseError):
    """Raised when a manager is used after its database was deleted."""

    def __init__(self) -> None:
        super().__init__("Database has been deleted; the manager is closed")


class ItemNotFoundError(DatabaseError):
    """Raised when an ItemId name has no tracked entries in the index.

    Attributes:
        name: The name that could not be resolved.
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"ID '{name}' doesn't point to a known path")


class IndexOutOfRangeError(ItemNotFoundError):
    """Raised when an ItemId index exceeds the number of items sharing its name.

    Subclasses ItemNotFoundError: the identity does not resolve either way.

    Attributes:
        name: The shared name that was looked up.
        index: The requested index.
        length: How many items currently share the name.
    """

    def __init__(self, name: str, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(
            name,
            f"Index {index} out of bounds for ID '{name}' (len: {length})",
        )


class ItemExistsError(DatabaseError):
    """Raised when the destination of an operation is already tracked or present.

    Attributes:
        name: Name of the conflicting item.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"ID '{name}' already exists")


class RootIdUnsupportedError(DatabaseError):
    """Raised when the database root ItemId is passed where an item is required."""

    def __init__(self) -> None:
        super().__init__("Root database ID cannot be used for this operation")


class ItemNotADirectoryError(DatabaseError):
    """Raised when a path was expected to be a directory but is not."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Path '{path}' doesn't point to a directory")


class ItemNotAFileError(DatabaseError):
    """Raised when a path was expected to be a file but is not."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Path '{path}' doesn't point to a file")


class IdenticalPathsError(DatabaseError):
    """Raised when source and destination resolve to the same location."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source and destination are identical: '{path}'")


class ContainmentError(DatabaseError):
    """Base for transfers that would cross into the managed root."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class ExportInsideDatabaseError(ContainmentError):
    """Raised when an export destination lies inside the database root."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Export destination is inside the database: '{path}'")


class ImportInsideDatabaseError(ContainmentError):
    """Raised when an import source lies inside the database root."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Import source is inside the database: '{path}'")


class DestinationContainsDatabaseError(ContainmentError):
    """Raised when a transfer destination is the database root or one of its ancestors."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Destination would replace the database: '{path}'")


class PathConversionError(DatabaseError):
    """Raised when a path segment cannot be represented as text."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        detail = f": '{path}'" if path is not None else ""
        super().__init__(f"Couldn't convert path segment to text{detail}")


class NoParentError(DatabaseError):
    """Raised when an item has no parent inside the tracked tree."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"ID '{name}' doesn't have a parent")


class PathStepOverflowError(DatabaseError):
    """Raised when more path components are trimmed than the path has."""

    def __init__(self, steps: int, available: int) -> None:
        self.steps = steps
        self.available = available
        super().__init__(f"Steps '{steps}' greater than path length '{available}'")


class NoClosestDirError(DatabaseError):
    """Raised when no directory with the requested name is found walking upward."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Directory '{name}' not found along path to executable")


class PayloadError(DatabaseError):
    """Raised when stored bytes cannot be decoded into the requested format."""
