"""Tests for UI palette parsing."""

import json

import pytest
from textual.theme import Theme

from diffhue.settings import ThemeMode
from diffhue.themes.catalog import EMBEDDED_UI_THEMES
from diffhue.themes.errors import MalformedUIThemeError
from diffhue.themes.palette import REQUIRED_UI_TOKENS, parse_ui_theme, supported_modes


def _theme_json(overrides: dict[str, object] | None = None, **extra: object) -> bytes:
    tokens: dict[str, object] = {token: "#101010" for token in REQUIRED_UI_TOKENS}
    tokens.update(overrides or {})
    return json.dumps({"name": "Test", "defs": {"blue": "#0000ff"}, "theme": tokens, **extra}).encode()


class TestParseUITheme:
    """Tests for parse_ui_theme."""

    @pytest.mark.parametrize("name", sorted(EMBEDDED_UI_THEMES))
    @pytest.mark.parametrize("mode", list(ThemeMode))
    def test_bundled_themes_are_complete(self, name: str, mode: ThemeMode) -> None:
        palette = parse_ui_theme(name, EMBEDDED_UI_THEMES[name].read_bytes(), mode)
        assert set(palette.colors) == set(REQUIRED_UI_TOKENS)
        assert all(color.startswith("#") for color in palette.colors.values())

    def test_resolves_defs_references(self) -> None:
        palette = parse_ui_theme("test", _theme_json({"primary": "blue"}), ThemeMode.DARK)
        assert palette["primary"] == "#0000ff"

    def test_selects_mode_values(self) -> None:
        data = _theme_json({"background": {"dark": "#000000", "light": "#ffffff"}})
        assert parse_ui_theme("test", data, ThemeMode.DARK)["background"] == "#000000"
        assert parse_ui_theme("test", data, ThemeMode.LIGHT)["background"] == "#ffffff"

    def test_light_falls_back_to_dark_value(self) -> None:
        data = _theme_json({"background": {"dark": "#000000"}})
        assert parse_ui_theme("test", data, ThemeMode.LIGHT)["background"] == "#000000"

    def test_label_and_mode_are_recorded(self) -> None:
        palette = parse_ui_theme("test", _theme_json(), ThemeMode.LIGHT)
        assert palette.label == "Test"
        assert palette.mode is ThemeMode.LIGHT

    def test_missing_token_is_malformed(self) -> None:
        tokens = {token: "#101010" for token in REQUIRED_UI_TOKENS if token != "diff_added"}
        data = json.dumps({"theme": tokens}).encode()
        with pytest.raises(MalformedUIThemeError, match="diff_added"):
            parse_ui_theme("test", data, ThemeMode.DARK)

    @pytest.mark.parametrize("value", ["not-a-color", "#12345", "#gggggg", 42, {"light": "#ffffff"}])
    def test_invalid_color_is_malformed(self, value: object) -> None:
        with pytest.raises(MalformedUIThemeError) as exc_info:
            parse_ui_theme("broken", _theme_json({"primary": value}), ThemeMode.DARK)
        assert exc_info.value.name == "broken"

    @pytest.mark.parametrize("data", [b"{", b"[]", b'{"theme": []}', b'{"defs": [], "theme": {}}'])
    def test_invalid_documents_are_malformed(self, data: bytes) -> None:
        with pytest.raises(MalformedUIThemeError):
            parse_ui_theme("broken", data, ThemeMode.DARK)


class TestSupportedModes:
    """Tests for supported_modes."""

    def test_dark_only_theme(self) -> None:
        label, modes = supported_modes("test", _theme_json())
        assert label == "Test"
        assert modes == frozenset({ThemeMode.DARK})

    def test_theme_with_light_values(self) -> None:
        _label, modes = supported_modes("test", _theme_json({"text": {"dark": "#eeeeee", "light": "#111111"}}))
        assert modes == frozenset({ThemeMode.DARK, ThemeMode.LIGHT})

    @pytest.mark.parametrize(
        "name,light",
        [("tokyonight", True), ("catppuccin", True), ("solarized", True), ("nord", False), ("dracula", False)],
    )
    def test_bundled_declarations(self, name: str, light: bool) -> None:
        _label, modes = supported_modes(name, EMBEDDED_UI_THEMES[name].read_bytes())
        assert (ThemeMode.LIGHT in modes) is light


class TestToTextualTheme:
    """Tests for ResolvedUITheme.to_textual_theme."""

    def test_builds_textual_theme(self) -> None:
        palette = parse_ui_theme("nord", EMBEDDED_UI_THEMES["nord"].read_bytes(), ThemeMode.DARK)
        theme = palette.to_textual_theme()
        assert isinstance(theme, Theme)
        assert theme.name == "nord-dark"
        assert theme.primary == palette["primary"]
        assert theme.background == palette["background"]
        assert theme.dark is True
        assert theme.variables["diff-added"] == palette["diff_added"]

    def test_light_palette_is_not_dark(self) -> None:
        palette = parse_ui_theme("tokyonight", EMBEDDED_UI_THEMES["tokyonight"].read_bytes(), ThemeMode.LIGHT)
        assert palette.to_textual_theme().dark is False
