"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import filedb.core.theme as theme_module
import pytest
from filedb.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
    reload_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.added == "#c1ff62"
        assert colors.removed == "#f53263"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts valid hex color codes."""
        colors = ThemeColors(text="#AABBCC", muted="#abc")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects non-hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_unknown_color_rejected(self) -> None:
        """Unknown color names are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(sparkle="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors helper."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files return None."""
        assert _load_toml_colors(tmp_path / "theme.toml") is None

    def test_reads_colors_section(self, tmp_path: Path) -> None:
        """Only string values of [colors] are returned."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\ntext = "#000000"\nbogus = 3\n')
        assert _load_toml_colors(path) == {"text": "#000000"}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken files return None."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")
        assert _load_toml_colors(path) is None

    def test_colors_not_a_table(self, tmp_path: Path) -> None:
        """A non-table colors entry returns None."""
        path = tmp_path / "theme.toml"
        path.write_text('colors = "red"\n')
        assert _load_toml_colors(path) is None


class TestLoadTheme:
    """Tests for load_theme."""

    def test_defaults_without_override(self, tmp_path: Path) -> None:
        """No override file gives the defaults."""
        assert load_theme(tmp_path / "theme.toml") == ThemeColors()

    def test_partial_override(self, tmp_path: Path) -> None:
        """Overrides replace only the given colors."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nadded = "#00ff00"\n')

        colors = load_theme(path)

        assert colors.added == "#00ff00"
        assert colors.removed == ThemeColors().removed

    def test_invalid_override_falls_back(self, tmp_path: Path) -> None:
        """Invalid overrides fall back to the defaults."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nadded = "green"\n')
        assert load_theme(path) == ThemeColors()


class TestRichTheme:
    """Tests for Rich theme conversion and caching."""

    def test_styles_present(self) -> None:
        """The Rich theme defines the styles the CLI uses."""
        theme = get_rich_theme(ThemeColors())
        for style in ("info", "error", "added", "removed", "item.dir", "item.path"):
            assert style in theme.styles

    def test_styles_use_palette(self) -> None:
        """Styles take their color from the palette, bold where marked."""
        theme = get_rich_theme(ThemeColors(item_dir="#123456"))
        assert theme.styles["item.dir"].bold
        assert theme.styles["item.dir"].color is not None
        assert theme.styles["item.dir"].color.triplet is not None
        assert theme.styles["item.dir"].color.triplet.hex == "#123456"
        assert not theme.styles["item.path"].bold

    def test_get_theme_caches(self) -> None:
        """get_theme loads once and reuses the instance."""
        with patch.object(theme_module, "_cached_theme", None):
            first = get_theme()
            assert get_theme() is first
            assert isinstance(first, Theme)

    def test_reload_theme(self) -> None:
        """reload_theme replaces the cached instance."""
        with patch.object(theme_module, "_cached_theme", None):
            first = get_theme()
            assert reload_theme() is not first
