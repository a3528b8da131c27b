"""Theme resolution: configuration in, UI palette and syntax theme out.

The UI theme has no fallback: an unknown or broken UI theme is an error.
The syntax theme always resolves to something (unless highlighting is off),
trying in order:

1. the explicitly configured syntax theme;
2. the light variant of the UI theme, when in light mode;
3. the syntax theme named like the UI theme;
4. the built-in ``ansi`` theme.

Steps 2 and 3 only run when no syntax theme is configured; a configured
theme that fails to load goes straight to ``ansi``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from diffhue.logger import get_logger
from diffhue.settings import SyntaxMode, SyntaxThemeConfig, ThemeMode, UIThemeConfig
from diffhue.themes.catalog import SyntaxThemeEntry, ThemeCatalog
from diffhue.themes.errors import MalformedUIThemeError, UnknownUIThemeError
from diffhue.themes.identifiers import BuiltinNameWithSuffix
from diffhue.themes.palette import ResolvedUITheme, parse_ui_theme, supported_modes
from diffhue.themes.tmtheme import ThemeDocument, ThemeParseError, parse_theme_document, strip_background
from diffhue.themes.variants import light_variant_of

logger = get_logger(__name__)

FALLBACK_SYNTAX_THEME = "ansi"


class SyntaxSource(Enum):
    """Which resolution step produced the syntax theme."""

    EXPLICIT = "explicit"
    LIGHT_VARIANT = "light-variant"
    INHERITED = "inherited"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ResolvedSyntaxTheme:
    """A loaded syntax theme with its global background removed."""

    identifier: str
    source: SyntaxSource
    document: ThemeDocument

    @property
    def colors(self) -> dict[str, str]:
        """Foreground color per scope selector."""
        return self.document.colors


@dataclass(frozen=True)
class ResolvedThemes:
    """Everything the rendering layer needs."""

    ui: ResolvedUITheme
    syntax: ResolvedSyntaxTheme | None


@dataclass(frozen=True)
class UIThemeInfo:
    """A built-in UI theme available for listing."""

    name: str
    label: str
    dark: bool
    light: bool


class UIThemeResolver:
    """Resolves the UI theme configuration into a palette."""

    def __init__(self, catalog: ThemeCatalog) -> None:
        self.catalog = catalog

    def resolve(self, config: UIThemeConfig) -> tuple[ThemeMode, ResolvedUITheme]:
        """Load the configured UI theme.

        The mode is ``config.mode`` if set, then the identifier's mode suffix
        (``"gruvbox-light"``), then dark.

        Args:
            config: UI theme configuration.

        Returns:
            Tuple of (mode, palette).

        Raises:
            UnknownUIThemeError: If the theme is not in the catalog.
            MalformedUIThemeError: If the theme cannot be parsed.
        """
        mode = config.mode or self._suffix_mode(config.name) or ThemeMode.DARK

        data = self.catalog.lookup_ui(config.name)
        if data is None:
            raise UnknownUIThemeError(config.name, self.catalog.list_ui())

        palette = parse_ui_theme(config.name, data, mode)
        logger.debug(f"Resolved UI theme {config.name!r} ({mode.value})")
        return mode, palette

    def _suffix_mode(self, name: str) -> ThemeMode | None:
        parsed = self.catalog.classify_ui(name)
        if isinstance(parsed, BuiltinNameWithSuffix):
            return parsed.mode
        return None


class SyntaxThemeResolver:
    """Resolves the syntax theme configuration, never failing outward."""

    def __init__(self, catalog: ThemeCatalog) -> None:
        self.catalog = catalog

    def resolve(
        self,
        config: SyntaxThemeConfig,
        ui_theme_name: str,
        mode: ThemeMode,
    ) -> ResolvedSyntaxTheme | None:
        """Pick and load a syntax theme.

        Args:
            config: Syntax theme configuration.
            ui_theme_name: Configured UI theme identifier.
            mode: Mode resolved for the UI theme.

        Returns:
            The background-stripped syntax theme, or None when highlighting is off.
        """
        if config.mode is SyntaxMode.OFF:
            return None

        for source, candidate in self._candidates(config, ui_theme_name, mode):
            identifier = candidate()
            if identifier is None:
                continue
            document = self._load(identifier, source)
            if document is not None:
                logger.debug(f"Using syntax theme {identifier!r} ({source.value})")
                return ResolvedSyntaxTheme(identifier, source, strip_background(document))

        raise RuntimeError(f"Built-in syntax theme {FALLBACK_SYNTAX_THEME!r} is missing or invalid")

    def _candidates(
        self,
        config: SyntaxThemeConfig,
        ui_theme_name: str,
        mode: ThemeMode,
    ) -> list[tuple[SyntaxSource, Callable[[], str | None]]]:
        """Ordered resolution attempts; the first one that loads wins."""
        explicit = config.theme.strip() if config.theme else ""
        candidates: list[tuple[SyntaxSource, Callable[[], str | None]]] = []

        if explicit:
            candidates.append((SyntaxSource.EXPLICIT, lambda: explicit))
        else:
            if mode is ThemeMode.LIGHT:
                base = self._base_name(ui_theme_name)
                candidates.append((SyntaxSource.LIGHT_VARIANT, lambda: light_variant_of(base)))
            candidates.append((SyntaxSource.INHERITED, lambda: ui_theme_name))

        candidates.append((SyntaxSource.FALLBACK, lambda: FALLBACK_SYNTAX_THEME))
        return candidates

    def _base_name(self, ui_theme_name: str) -> str:
        """UI theme name without its mode suffix (``"tokyonight-light"`` -> ``"tokyonight"``)."""
        parsed = self.catalog.classify_ui(ui_theme_name)
        if isinstance(parsed, BuiltinNameWithSuffix):
            return parsed.base
        return ui_theme_name.strip()

    def _load(self, identifier: str, source: SyntaxSource) -> ThemeDocument | None:
        # Only misses of an explicit choice are user-visible.
        log = logger.warning if source is SyntaxSource.EXPLICIT else logger.debug

        data = self.catalog.lookup_syntax(identifier)
        if data is None:
            log(f"Syntax theme {identifier!r} not found ({source.value})")
            return None

        try:
            return parse_theme_document(data)
        except ThemeParseError as exc:
            log(f"Syntax theme {identifier!r} could not be parsed ({source.value}): {exc}")
            return None


class ThemeResolver:
    """Single entry point for theme resolution and listing."""

    def __init__(self, catalog: ThemeCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else ThemeCatalog()
        self.ui_resolver = UIThemeResolver(self.catalog)
        self.syntax_resolver = SyntaxThemeResolver(self.catalog)

    def resolve_all(self, ui_config: UIThemeConfig, syntax_config: SyntaxThemeConfig) -> ResolvedThemes:
        """Resolve the UI palette, then the syntax theme in the UI theme's mode.

        Raises:
            UnknownUIThemeError: If the UI theme is not in the catalog.
            MalformedUIThemeError: If the UI theme cannot be parsed.
        """
        mode, ui = self.ui_resolver.resolve(ui_config)
        syntax = self.syntax_resolver.resolve(syntax_config, ui_config.name, mode)
        return ResolvedThemes(ui=ui, syntax=syntax)

    def list_ui_themes(self) -> list[UIThemeInfo]:
        """List built-in UI themes with their supported modes.

        Themes whose file cannot be read or parsed are skipped with a warning.
        """
        themes: list[UIThemeInfo] = []
        for name in self.catalog.list_ui():
            data = self.catalog.lookup_ui(name)
            if data is None:
                continue
            try:
                label, modes = supported_modes(name, data)
            except MalformedUIThemeError as exc:
                logger.warning(str(exc))
                continue
            themes.append(
                UIThemeInfo(
                    name=name,
                    label=label,
                    dark=ThemeMode.DARK in modes,
                    light=ThemeMode.LIGHT in modes,
                )
            )
        return themes

    def list_syntax_themes(self) -> list[SyntaxThemeEntry]:
        """List embedded and user syntax themes."""
        return self.catalog.list_syntax()


def resolve_all(
    ui_config: UIThemeConfig,
    syntax_config: SyntaxThemeConfig,
    catalog: ThemeCatalog | None = None,
) -> ResolvedThemes:
    """Resolve both themes with a fresh resolver.

    Args:
        ui_config: UI theme configuration.
        syntax_config: Syntax theme configuration.
        catalog: Catalog to use. Defaults to the bundled assets and user directory.

    Returns:
        The resolved UI palette and syntax theme.
    """
    return ThemeResolver(catalog).resolve_all(ui_config, syntax_config)
