"""Tests for light variant lookup."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from diffhue.themes.catalog import EMBEDDED_SYNTAX_THEMES
from diffhue.themes.variants import LIGHT_VARIANTS, light_variant_of


class TestLightVariantOf:
    """Tests for the light_variant_of function."""

    @pytest.mark.parametrize(
        "base,expected",
        [
            ("tokyonight", "tokyonight-day"),
            ("catppuccin", "catppuccin-latte"),
            ("gruvbox", "gruvbox-light"),
            ("solarized", "solarized-light"),
            ("ayu", "ayu-light"),
        ],
    )
    def test_known_variants(self, base: str, expected: str) -> None:
        assert light_variant_of(base) == expected

    @pytest.mark.parametrize("base", ["nord", "dracula", "onedark", "monokai", "ansi", ""])
    def test_themes_without_variant(self, base: str) -> None:
        assert light_variant_of(base) is None

    def test_lookup_is_case_sensitive(self) -> None:
        assert light_variant_of("TokyoNight") is None

    @given(st.text())
    def test_total_over_arbitrary_names(self, name: str) -> None:
        result = light_variant_of(name)
        assert result is None or result in LIGHT_VARIANTS.values()


class TestVariantTable:
    """Tests for the LIGHT_VARIANTS table."""

    def test_every_variant_is_bundled(self) -> None:
        for base, variant in LIGHT_VARIANTS.items():
            assert base in EMBEDDED_SYNTAX_THEMES
            assert variant in EMBEDDED_SYNTAX_THEMES

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            LIGHT_VARIANTS["nord"] = "nord-light"  # type: ignore[index]
