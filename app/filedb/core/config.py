"""CLI settings.

This module provides the settings model and I/O functions used by the
filedb command line. Library users construct DatabaseManager directly
and never need it.

Configuration is stored in ~/.config/filedb/config.toml
"""

import tomllib
from pathlib import Path
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from filedb.core.atomic import write_bytes_atomic
from filedb.core.paths import get_config_path
from filedb.models.item import ScanPolicy


class FiledbConfig(BaseModel):
    """Settings for the filedb CLI.

    Attributes:
        database: Database root used when no --db option is given.
        sort: Sort listings by name and index.
        force_delete: Delete non-empty directories without --force.
        scan_policy: Policy used by ``filedb scan`` when none is given.
        recursive_scan: Whether ``filedb scan`` descends into subdirectories.
    """

    model_config = ConfigDict(extra="forbid")

    database: Annotated[
        Path | None,
        Field(description="Default database root"),
    ] = None
    sort: Annotated[
        bool,
        Field(description="Sort item listings"),
    ] = True
    force_delete: Annotated[
        bool,
        Field(description="Delete non-empty directories by default"),
    ] = False
    scan_policy: Annotated[
        ScanPolicy,
        Field(description="Default policy for untracked items"),
    ] = ScanPolicy.ADD_NEW
    recursive_scan: Annotated[
        bool,
        Field(description="Scan subdirectories by default"),
    ] = True


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> FiledbConfig:
    """Load settings from a TOML file.

    A missing file is not an error: the defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated FiledbConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return FiledbConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return FiledbConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: FiledbConfig, path: Path | None = None) -> Path:
    """Save settings to a TOML file atomically.

    Args:
        config: The FiledbConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        write_bytes_atomic(config_path, tomli_w.dumps(_config_to_dict(config)).encode("utf-8"))
    except OSError as e:
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def update_config(config: FiledbConfig, key: str, value: str) -> FiledbConfig:
    """Return a copy of ``config`` with one setting changed.

    Values are given as text (as typed on the command line) and are
    validated by the model. An empty value resets ``database``.

    Args:
        config: Current settings.
        key: Setting name.
        value: New value as text.

    Raises:
        ConfigError: If the key is unknown or the value is invalid.
    """
    if key not in FiledbConfig.model_fields:
        known = ", ".join(FiledbConfig.model_fields)
        raise ConfigError(f"Unknown setting '{key}' (known: {known})")

    data = config.model_dump()
    data[key] = None if key == "database" and not value else value
    try:
        return FiledbConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for '{key}': {e}") from e


def _config_to_dict(config: FiledbConfig) -> dict[str, Any]:
    """Convert FiledbConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset database is left out.
    """
    data = config.model_dump(mode="json")
    if data["database"] is None:
        del data["database"]
    return data
