"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from filedb.core.manager import DatabaseManager
from filedb.models.item import ItemId


@pytest.fixture
def manager(tmp_path: Path) -> DatabaseManager:
    """Empty database at tmp_path/db."""
    return DatabaseManager(tmp_path, "db")


@pytest.fixture
def populated(manager: DatabaseManager) -> DatabaseManager:
    """Database with two folders, each holding a notes.txt.

    Layout::

        db/
            a/notes.txt   -> notes.txt#0
            b/notes.txt   -> notes.txt#1
            readme.md
    """
    manager.write_new(ItemId.id("a"))
    manager.write_new(ItemId.id("b"))
    manager.write_new(ItemId.id("notes.txt"), ItemId.id("a"))
    manager.write_new(ItemId.id("notes.txt"), ItemId.id("b"))
    manager.write_new(ItemId.id("readme.md"))
    return manager


@pytest.fixture
def outside_dir(tmp_path: Path) -> Path:
    """Existing directory outside the database."""
    path = tmp_path / "outside"
    path.mkdir()
    return path
