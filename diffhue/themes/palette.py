"""UI palettes: the colors for application chrome and diff markers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass

from textual.theme import Theme

from diffhue.settings import ThemeMode
from diffhue.themes.errors import MalformedUIThemeError

REQUIRED_UI_TOKENS: tuple[str, ...] = (
    "primary",
    "secondary",
    "accent",
    "error",
    "warning",
    "success",
    "info",
    "text",
    "text_muted",
    "background",
    "background_panel",
    "border",
    "border_muted",
    "diff_added",
    "diff_removed",
    "diff_modified",
    "diff_context",
    "diff_added_bg",
    "diff_removed_bg",
    "diff_modified_bg",
    "diff_line_number",
    "diff_ext_marker",
)


@dataclass(frozen=True)
class ResolvedUITheme:
    """A fully populated UI palette for one mode."""

    name: str
    label: str
    mode: ThemeMode
    colors: dict[str, str]

    def __getitem__(self, token: str) -> str:
        return self.colors[token]

    def to_textual_theme(self) -> Theme:
        """Build a Textual Theme from this palette.

        Returns:
            A Textual Theme instance named after the palette and mode.
        """
        colors = self.colors
        return Theme(
            name=f"{self.name}-{self.mode.value}",
            primary=colors["primary"],
            secondary=colors["secondary"],
            accent=colors["accent"],
            warning=colors["warning"],
            error=colors["error"],
            success=colors["success"],
            foreground=colors["text"],
            background=colors["background"],
            surface=colors["background_panel"],
            panel=colors["background_panel"],
            dark=self.mode is ThemeMode.DARK,
            variables={
                "border": colors["border"],
                "border-muted": colors["border_muted"],
                "text-muted": colors["text_muted"],
                "diff-added": colors["diff_added"],
                "diff-removed": colors["diff_removed"],
                "diff-modified": colors["diff_modified"],
                "diff-context": colors["diff_context"],
                "diff-added-bg": colors["diff_added_bg"],
                "diff-removed-bg": colors["diff_removed_bg"],
                "diff-modified-bg": colors["diff_modified_bg"],
                "diff-line-number": colors["diff_line_number"],
                "diff-ext-marker": colors["diff_ext_marker"],
            },
        )


def _is_hex_color(value: str) -> bool:
    """Check if a string is a hex color.

    Args:
        value: Value to check.

    Returns:
        True if value is a hex color string.
    """
    if not value.startswith("#") or len(value) not in {4, 7, 9}:
        return False
    try:
        int(value[1:], 16)
    except ValueError:
        return False
    return True


def _load_document(name: str, data: bytes) -> tuple[str, Mapping[str, str], Mapping[str, object]]:
    """Decode a UI theme file into its label, definitions and token table.

    Raises:
        MalformedUIThemeError: If the file is not a UI theme document.
    """
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedUIThemeError(name, f"invalid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise MalformedUIThemeError(name, "top-level value must be an object")

    defs = raw.get("defs", {})
    if not isinstance(defs, dict) or not all(isinstance(value, str) for value in defs.values()):
        raise MalformedUIThemeError(name, "'defs' must map names to colors")

    tokens = raw.get("theme")
    if not isinstance(tokens, dict):
        raise MalformedUIThemeError(name, "missing 'theme' table")

    label = raw.get("name")
    return (label if isinstance(label, str) else name), defs, tokens


def _resolve_color(name: str, token: str, value: object, defs: Mapping[str, str]) -> str:
    if not isinstance(value, str):
        raise MalformedUIThemeError(name, f"token {token!r} has a non-string color")
    color = defs.get(value, value)
    if not _is_hex_color(color):
        raise MalformedUIThemeError(name, f"token {token!r} has invalid color {value!r}")
    return color


def _select_value(value: object, mode: ThemeMode) -> object:
    """Pick the value for a mode; light falls back to dark."""
    if not isinstance(value, dict):
        return value
    if mode is ThemeMode.LIGHT and "light" in value:
        return value["light"]
    return value.get("dark")


def parse_ui_theme(name: str, data: bytes, mode: ThemeMode) -> ResolvedUITheme:
    """Parse a UI theme file for the given mode.

    Args:
        name: Catalog name of the theme, used in errors.
        data: Raw JSON contents.
        mode: Mode whose colors are selected.

    Returns:
        The resolved palette.

    Raises:
        MalformedUIThemeError: If the file is invalid or a required token is missing.
    """
    label, defs, tokens = _load_document(name, data)

    missing = [token for token in REQUIRED_UI_TOKENS if token not in tokens]
    if missing:
        raise MalformedUIThemeError(name, f"missing tokens: {', '.join(missing)}")

    colors = {
        token: _resolve_color(name, token, _select_value(tokens[token], mode), defs) for token in REQUIRED_UI_TOKENS
    }
    return ResolvedUITheme(name=name, label=label, mode=mode, colors=colors)


def supported_modes(name: str, data: bytes) -> tuple[str, frozenset[ThemeMode]]:
    """Get the label and declared modes of a UI theme file.

    Every theme supports dark mode. Light mode is declared by giving at
    least one token a ``light`` value.

    Returns:
        Tuple of (label, supported modes).

    Raises:
        MalformedUIThemeError: If the file is not a UI theme document.
    """
    label, _defs, tokens = _load_document(name, data)
    has_light = any(isinstance(value, dict) and "light" in value for value in tokens.values())
    modes = {ThemeMode.DARK, ThemeMode.LIGHT} if has_light else {ThemeMode.DARK}
    return label, frozenset(modes)
