"""Persistent settings for diffhue."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import TypeVar

from diffhue.logger import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_UI_THEME_NAME = "tokyonight"

CONFIG_FILE_NAME = "config.toml"
THEMES_DIR_NAME = "themes"


class ThemeMode(Enum):
    """Light or dark appearance."""

    DARK = "dark"
    LIGHT = "light"


class SyntaxMode(Enum):
    """Whether syntax highlighting is enabled."""

    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class UIThemeConfig:
    """Configured UI theme (``[ui.theme]``)."""

    name: str = DEFAULT_UI_THEME_NAME
    mode: ThemeMode | None = None


@dataclass(frozen=True)
class SyntaxThemeConfig:
    """Configured syntax theme (``[ui.syntax]``)."""

    mode: SyntaxMode = SyntaxMode.ON
    theme: str | None = None


@dataclass(frozen=True)
class Settings:
    """User-configurable settings stored on disk."""

    ui_theme: UIThemeConfig = field(default_factory=UIThemeConfig)
    syntax: SyntaxThemeConfig = field(default_factory=SyntaxThemeConfig)
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> Settings:
        """Create settings from a mapping, applying defaults for invalid values.

        Args:
            data: Mapping containing raw settings values, shaped like config.toml.

        Returns:
            A Settings instance with validated values.
        """
        ui_section = _coerce_table(data.get("ui"))
        theme_section = _coerce_table(ui_section.get("theme"))
        syntax_section = _coerce_table(ui_section.get("syntax"))

        name = _coerce_str(theme_section.get("name")) or DEFAULT_UI_THEME_NAME
        theme_mode = _coerce_enum(ThemeMode, theme_section.get("mode"), "ui.theme.mode")

        syntax_mode = _coerce_enum(SyntaxMode, syntax_section.get("mode"), "ui.syntax.mode") or SyntaxMode.ON
        syntax_theme = _coerce_str(syntax_section.get("theme"))

        log_level_value = _coerce_str(data.get("log_level"))
        log_level_value = log_level_value.upper() if log_level_value is not None else None
        log_level = log_level_value if log_level_value in LOG_LEVELS else DEFAULT_LOG_LEVEL

        return cls(
            ui_theme=UIThemeConfig(name=name, mode=theme_mode),
            syntax=SyntaxThemeConfig(mode=syntax_mode, theme=syntax_theme),
            log_level=log_level,
        )

    def with_overrides(
        self,
        *,
        theme: str | None = None,
        theme_mode: ThemeMode | None = None,
        syntax_theme: str | None = None,
        syntax_mode: SyntaxMode | None = None,
    ) -> Settings:
        """Apply command-line overrides on top of file settings.

        ``None`` leaves the file value in place.

        Returns:
            A new Settings instance.
        """
        ui_theme = self.ui_theme
        if theme is not None and theme.strip():
            ui_theme = replace(ui_theme, name=theme.strip())
        if theme_mode is not None:
            ui_theme = replace(ui_theme, mode=theme_mode)

        syntax = self.syntax
        if syntax_theme is not None:
            syntax = replace(syntax, theme=syntax_theme.strip() or None)
        if syntax_mode is not None:
            syntax = replace(syntax, mode=syntax_mode)

        return replace(self, ui_theme=ui_theme, syntax=syntax)


def get_config_dir() -> Path:
    """Get the directory used for persistent configuration.

    Returns:
        Path to the configuration directory.
    """
    override_dir = os.environ.get("DIFFHUE_CONFIG_DIR")
    if override_dir:
        return Path(override_dir).expanduser()

    base_dir = os.environ.get("XDG_CONFIG_HOME")
    if base_dir:
        return Path(base_dir).expanduser() / "diffhue"

    return Path.home() / ".config" / "diffhue"


def get_settings_path() -> Path:
    """Get the full path to the configuration file.

    Returns:
        Path to the TOML configuration file.
    """
    return get_config_dir() / CONFIG_FILE_NAME


def get_themes_dir() -> Path:
    """Get the directory holding user-supplied ``.tmTheme`` files.

    Returns:
        Path to the user themes directory.
    """
    return get_config_dir() / THEMES_DIR_NAME


def load_settings() -> Settings:
    """Load settings from disk.

    Returns:
        Loaded settings, or defaults if none exist.
    """
    settings_path = get_settings_path()
    if not settings_path.exists():
        return Settings()

    try:
        raw = tomllib.loads(settings_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        logger.warning(f"Failed to parse settings file {settings_path}: {exc}")
        return Settings()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read settings file {settings_path}: {exc}")
        return Settings()

    return Settings.from_mapping(raw)


def _coerce_table(value: object) -> Mapping[str, object]:
    """Coerce a value into a TOML table.

    Args:
        value: Raw value to coerce.

    Returns:
        The value if it is a mapping, otherwise an empty mapping.
    """
    if isinstance(value, Mapping):
        return value
    return {}


def _coerce_str(value: object) -> str | None:
    """Coerce a value into a stripped, non-empty string if possible.

    Args:
        value: Raw value to coerce.

    Returns:
        String value or None.
    """
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _coerce_enum(enum_type: type[E], value: object, key: str) -> E | None:
    """Coerce a string into an enum member by value, case-insensitively.

    Args:
        enum_type: Enum class to coerce into.
        value: Raw value to coerce.
        key: Dotted configuration key, used in the warning.

    Returns:
        Enum member, or None when the value is missing or invalid.
    """
    text = _coerce_str(value)
    if text is None:
        return None
    try:
        return enum_type(text.lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        logger.warning(f"Ignoring invalid {key} value {text!r} (expected one of: {choices})")
        return None
