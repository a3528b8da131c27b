"""Read-only lookup of theme files by identifier.

Built-in themes ship as package data under ``assets/``. Syntax themes may
also come from ``.tmTheme`` files in the user themes directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from diffhue.logger import get_logger
from diffhue.settings import ThemeMode, get_themes_dir
from diffhue.themes.identifiers import (
    TMTHEME_SUFFIX,
    BareFileName,
    BuiltinName,
    BuiltinNameWithSuffix,
    FilesystemPath,
    ThemeIdentifier,
    is_tmtheme_file_name,
    parse_identifier,
)
from diffhue.themes.variants import light_variant_of

logger = get_logger(__name__)

# Path to bundled theme assets
ASSETS_DIR = Path(__file__).parent.parent / "assets"
UI_THEME_SUFFIX = ".json"


class ThemeSource(Enum):
    """Where a syntax theme comes from."""

    EMBEDDED = "embedded"
    USER = "user"


@dataclass(frozen=True)
class SyntaxThemeEntry:
    """A syntax theme available for listing."""

    name: str
    source: ThemeSource
    path: Path


def _scan_assets(directory: Path, suffix: str) -> MappingProxyType[str, Path]:
    """Index bundled files by stem.

    Args:
        directory: Asset directory to scan.
        suffix: File extension to include.

    Returns:
        Read-only mapping from theme name to file path, sorted by name.
    """
    if not directory.is_dir():
        return MappingProxyType({})
    files = sorted(path for path in directory.iterdir() if path.is_file() and path.suffix == suffix)
    return MappingProxyType({path.stem: path for path in files})


EMBEDDED_UI_THEMES = _scan_assets(ASSETS_DIR / "ui", UI_THEME_SUFFIX)
EMBEDDED_SYNTAX_THEMES = _scan_assets(ASSETS_DIR / "syntax", TMTHEME_SUFFIX)


def _read(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except (OSError, ValueError) as exc:
        logger.debug(f"Cannot read theme file {path}: {exc}")
        return None


class ThemeCatalog:
    """Lookup of UI and syntax theme bytes.

    Absence is an expected outcome: every lookup returns ``None`` rather than
    raising when the identifier is unknown or the file cannot be read.
    """

    def __init__(
        self,
        user_dir: Path | None = None,
        ui_themes: Mapping[str, Path] | None = None,
        syntax_themes: Mapping[str, Path] | None = None,
    ) -> None:
        """Initialize the catalog.

        Args:
            user_dir: Directory with user ``.tmTheme`` files. Defaults to the
                ``themes`` subdirectory of the configuration directory.
            ui_themes: Embedded UI themes by name. Defaults to the bundled assets.
            syntax_themes: Embedded syntax themes by name. Defaults to the bundled assets.
        """
        self.user_dir = user_dir if user_dir is not None else get_themes_dir()
        self._ui_themes = ui_themes if ui_themes is not None else EMBEDDED_UI_THEMES
        self._syntax_themes = syntax_themes if syntax_themes is not None else EMBEDDED_SYNTAX_THEMES

    def classify_ui(self, identifier: str) -> ThemeIdentifier:
        """Classify an identifier against the UI theme names."""
        return parse_identifier(identifier, self._ui_themes)

    def classify_syntax(self, identifier: str) -> ThemeIdentifier:
        """Classify an identifier against the syntax theme names."""
        return parse_identifier(identifier, self._syntax_themes)

    def lookup_ui(self, identifier: str) -> bytes | None:
        """Get the bytes of a built-in UI theme.

        A mode suffix (``"gruvbox-light"``) selects the base entry.

        Args:
            identifier: UI theme identifier.

        Returns:
            The theme file contents, or None if there is no such theme.
        """
        parsed = self.classify_ui(identifier)
        if isinstance(parsed, BuiltinName):
            path = self._ui_themes.get(parsed.name)
        elif isinstance(parsed, BuiltinNameWithSuffix):
            path = self._ui_themes.get(parsed.base)
        else:
            path = None

        if path is None:
            return None
        return _read(path)

    def lookup_syntax(self, identifier: str) -> bytes | None:
        """Get the bytes of a syntax theme.

        Args:
            identifier: Built-in name, name with mode suffix, file name in the
                user themes directory, or filesystem path.

        Returns:
            The theme file contents, or None if nothing matches.
        """
        path = self._syntax_path(self.classify_syntax(identifier))
        if path is None:
            return None
        return _read(path)

    def _syntax_path(self, parsed: ThemeIdentifier) -> Path | None:
        if isinstance(parsed, FilesystemPath):
            return parsed.path

        if isinstance(parsed, BareFileName):
            return self.user_dir / parsed.file_name

        if isinstance(parsed, BuiltinNameWithSuffix):
            if parsed.mode is ThemeMode.DARK:
                return self._syntax_themes.get(parsed.base)
            variant = light_variant_of(parsed.base)
            return self._syntax_themes.get(variant) if variant is not None else None

        embedded = self._syntax_themes.get(parsed.name)
        if embedded is not None:
            return embedded
        return self.user_dir / f"{parsed.name}{TMTHEME_SUFFIX}"

    def list_ui(self) -> list[str]:
        """List built-in UI theme names in lexicographic order."""
        return sorted(self._ui_themes)

    def list_syntax(self) -> list[SyntaxThemeEntry]:
        """List syntax themes: embedded ones first, then user files.

        Returns:
            Entries sorted by name within each group.
        """
        entries = [
            SyntaxThemeEntry(name=name, source=ThemeSource.EMBEDDED, path=path)
            for name, path in sorted(self._syntax_themes.items())
        ]
        entries.extend(
            SyntaxThemeEntry(name=path.name, source=ThemeSource.USER, path=path) for path in self._user_theme_files()
        )
        return entries

    def _user_theme_files(self) -> list[Path]:
        try:
            candidates = list(self.user_dir.iterdir())
        except OSError:
            return []
        return sorted(
            (path for path in candidates if path.is_file() and is_tmtheme_file_name(path.name)),
            key=lambda path: path.name,
        )
