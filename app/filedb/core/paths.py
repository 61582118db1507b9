"""Path discovery and XDG-compliant path management for filedb.

Discovery helpers locate a database parent directory relative to the
working directory or the running program. The XDG helpers locate the
CLI's own configuration.

XDG defaults:
- Config: ~/.config/filedb/
"""

import logging
import os
import sys
from pathlib import Path

from filedb.core.errors import NoClosestDirError, PathStepOverflowError

logger = logging.getLogger(__name__)

# Application identifier for directory naming
APP_NAME = "filedb"


def _truncate(path: Path, steps: int) -> Path:
    """Remove ``steps`` trailing components from ``path``.

    At least one component must remain.

    Raises:
        ValueError: If ``steps`` is negative.
        PathStepOverflowError: If ``path`` is not deep enough.
    """
    if steps < 0:
        msg = f"Steps cannot be negative, got {steps}"
        raise ValueError(msg)
    available = len(path.parents)
    if available <= steps:
        raise PathStepOverflowError(steps, available)
    for _ in range(steps):
        path = path.parent
    return path


def _program_path() -> Path:
    """Absolute path of the running program (the script being executed)."""
    return Path(sys.argv[0] or sys.executable).resolve()


def from_working_dir(steps: int = 0) -> Path:
    """Return the working directory with ``steps`` components removed.

    Args:
        steps: Number of trailing components to remove.

    Returns:
        The truncated working directory.

    Raises:
        PathStepOverflowError: If ``steps`` exceeds the directory depth.
    """
    return _truncate(Path.cwd(), steps)


def from_exe(steps: int = 0) -> Path:
    """Return the directory holding the running program, minus ``steps`` components.

    Args:
        steps: Number of trailing components to remove from that directory.

    Raises:
        PathStepOverflowError: If ``steps`` exceeds the directory depth.
    """
    return _truncate(_program_path(), steps + 1)


def from_closest_match(name: str) -> Path:
    """Find the nearest directory called ``name`` walking up from the program.

    Each ancestor of the program path is checked itself first, then its
    direct child directories. Files are ignored.

    Args:
        name: Directory name to look for.

    Returns:
        Path of the first matching directory.

    Raises:
        NoClosestDirError: If no ancestor level has a matching directory.
    """
    for ancestor in _program_path().parents:
        if ancestor.name == name:
            return ancestor
        try:
            children = sorted(ancestor.iterdir())
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", ancestor, e)
            continue
        for child in children:
            if child.name == name and child.is_dir():
                return child

    raise NoClosestDirError(name)


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/filedb/ (or XDG_CONFIG_HOME/filedb/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/filedb/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/filedb/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")
