"""File metadata models.

Read-only snapshots of filesystem metadata returned by
DatabaseManager.get_file_information(). They are produced on demand
and carry no link back to the index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

# Adjacent units differ by this factor (decimal, not binary, units)
UNIT_STEP = 1_000


class FileSizeUnit(IntEnum):
    """Units used by FileSize, ordered from smallest to largest."""

    BYTE = 0
    KILOBYTE = 1
    MEGABYTE = 2
    GIGABYTE = 3
    TERABYTE = 4
    PETABYTE = 5

    @property
    def label(self) -> str:
        """Singular display name of the unit."""
        return self.name.capitalize()


@dataclass(frozen=True, slots=True, order=True)
class FileSize:
    """File size value paired with a unit.

    Attributes:
        size: Integer size expressed in ``unit``.
        unit: Unit of ``size``.
    """

    size: int = 0
    unit: FileSizeUnit = FileSizeUnit.BYTE

    @classmethod
    def from_bytes(cls, num_bytes: int) -> FileSize:
        """Build a FileSize from raw bytes, picking the largest fitting unit.

        Args:
            num_bytes: Size in bytes.

        Returns:
            FileSize whose integer value is truncated in the chosen unit.
        """
        unit = FileSizeUnit.BYTE
        size = num_bytes
        while size >= UNIT_STEP and unit < FileSizeUnit.PETABYTE:
            size //= UNIT_STEP
            unit = FileSizeUnit(unit + 1)
        return cls(size=size, unit=unit)

    def as_unit(self, unit: FileSizeUnit) -> FileSize:
        """Return a copy of this size converted to another unit.

        Converting to a smaller unit multiplies, converting to a larger
        unit truncates.

        Args:
            unit: Destination unit.

        Returns:
            Converted FileSize.
        """
        difference = self.unit - unit
        if difference > 0:
            return FileSize(size=self.size * UNIT_STEP**difference, unit=unit)
        if difference < 0:
            return FileSize(size=self.size // UNIT_STEP ** (-difference), unit=unit)
        return FileSize(size=self.size, unit=unit)

    @property
    def unit_label(self) -> str:
        """Unit display name, pluralized unless the size is exactly 1."""
        label = self.unit.label
        return label if self.size == 1 else f"{label}s"

    def __str__(self) -> str:
        return f"{self.size} {self.unit_label}"


@dataclass(frozen=True, slots=True)
class FileInformation:
    """Metadata snapshot for a tracked file or folder.

    Timestamps are whole unix seconds; the ``seconds_since_*`` values are
    ages relative to the moment the snapshot was taken. Any of them can
    be None when the platform does not report the value.

    Attributes:
        name: File stem for files, full name for directories.
        extension: Extension without the dot (files only).
        size: Size reported by the filesystem.
        is_dir: Whether the item is a directory.
        unix_created: Creation time, when the platform exposes it.
        seconds_since_created: Age since creation.
        unix_last_opened: Last access time.
        seconds_since_last_opened: Age since last access.
        unix_last_modified: Last modification time.
        seconds_since_last_modified: Age since last modification.
    """

    name: str | None
    extension: str | None
    size: FileSize = field(default_factory=FileSize)
    is_dir: bool = False
    unix_created: int | None = None
    seconds_since_created: int | None = None
    unix_last_opened: int | None = None
    seconds_since_last_opened: int | None = None
    unix_last_modified: int | None = None
    seconds_since_last_modified: int | None = None
