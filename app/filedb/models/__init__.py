"""Data models for filedb.

This module exports the core data structures used throughout the application.
"""

from filedb.models.info import FileInformation, FileSize, FileSizeUnit
from filedb.models.item import ExportMode, ItemId, ScanPolicy
from filedb.models.scan import ChangeKind, ExternalChange, ScanReport

__all__ = [
    "ChangeKind",
    "ExportMode",
    "ExternalChange",
    "FileInformation",
    "FileSize",
    "FileSizeUnit",
    "ItemId",
    "ScanPolicy",
    "ScanReport",
]
