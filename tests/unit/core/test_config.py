"""Unit tests for CLI settings I/O."""

from pathlib import Path

import pytest
from filedb.core.config import (
    ConfigError,
    ConfigParseError,
    FiledbConfig,
    load_config,
    save_config,
    update_config,
)
from filedb.models.item import ScanPolicy


class TestFiledbConfig:
    """Tests for the FiledbConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the documented CLI behavior."""
        config = FiledbConfig()
        assert config.database is None
        assert config.sort is True
        assert config.force_delete is False
        assert config.scan_policy == ScanPolicy.ADD_NEW
        assert config.recursive_scan is True

    def test_extra_keys_rejected(self) -> None:
        """Unknown keys are schema errors."""
        with pytest.raises(ValueError):
            FiledbConfig.model_validate({"colour": "blue"})


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """No file means default settings."""
        assert load_config(tmp_path / "config.toml") == FiledbConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values from the file are validated into the model."""
        path = tmp_path / "config.toml"
        path.write_text('database = "/srv/db"\nscan_policy = "detect_only"\nsort = false\n')

        config = load_config(path)

        assert config.database == Path("/srv/db")
        assert config.scan_policy == ScanPolicy.DETECT_ONLY
        assert config.sort is False

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken syntax raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("database = ")
        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('scan_policy = "sometimes"\n')
        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        """Saved settings load back unchanged."""
        path = tmp_path / "nested" / "config.toml"
        config = FiledbConfig(database=Path("/srv/db"), force_delete=True)

        assert save_config(config, path) == path
        assert load_config(path) == config

    def test_unset_database_omitted(self, tmp_path: Path) -> None:
        """TOML has no null, so an unset database is not written."""
        path = tmp_path / "config.toml"
        save_config(FiledbConfig(), path)
        assert "database" not in path.read_text()

    def test_write_failure(self, tmp_path: Path) -> None:
        """Unwritable targets raise ConfigError."""
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ConfigError, match="Failed to write config"):
            save_config(FiledbConfig(), blocker / "config.toml")


class TestUpdateConfig:
    """Tests for update_config."""

    def test_parses_text_values(self) -> None:
        """Values typed as text are converted by the model."""
        config = update_config(FiledbConfig(), "recursive_scan", "false")
        assert config.recursive_scan is False

        config = update_config(config, "scan_policy", "remove_new")
        assert config.scan_policy == ScanPolicy.REMOVE_NEW

    def test_empty_database_unsets(self) -> None:
        """An empty value clears the default database."""
        config = FiledbConfig(database=Path("/srv/db"))
        assert update_config(config, "database", "").database is None

    def test_unknown_key(self) -> None:
        """Unknown keys are refused."""
        with pytest.raises(ConfigError, match="Unknown setting"):
            update_config(FiledbConfig(), "colour", "blue")

    def test_invalid_value(self) -> None:
        """Values the model rejects are refused."""
        with pytest.raises(ConfigError, match="Invalid value"):
            update_config(FiledbConfig(), "sort", "maybe")
