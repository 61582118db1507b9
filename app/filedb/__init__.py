"""filedb - a directory tree managed as identifiable items.

Files and folders below a database root are addressed by ItemId (shared
name plus position) instead of raw paths. DatabaseManager keeps the
in-memory index and the filesystem consistent.
"""

from filedb.core.errors import DatabaseError
from filedb.core.manager import DatabaseManager
from filedb.models.item import ExportMode, ItemId, ScanPolicy

__version__ = "0.1.0"

__all__ = [
    "DatabaseError",
    "DatabaseManager",
    "ExportMode",
    "ItemId",
    "ScanPolicy",
    "__version__",
]
