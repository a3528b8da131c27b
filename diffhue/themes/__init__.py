"""Theme resolution for diffhue.

This package turns the theme configuration into a UI palette and a syntax
highlighting theme, falling back gracefully for syntax themes.
"""

from diffhue.themes.catalog import SyntaxThemeEntry, ThemeCatalog, ThemeSource
from diffhue.themes.errors import MalformedUIThemeError, ThemeError, UnknownUIThemeError
from diffhue.themes.palette import REQUIRED_UI_TOKENS, ResolvedUITheme
from diffhue.themes.resolver import (
    FALLBACK_SYNTAX_THEME,
    ResolvedSyntaxTheme,
    ResolvedThemes,
    SyntaxSource,
    SyntaxThemeResolver,
    ThemeResolver,
    UIThemeInfo,
    UIThemeResolver,
    resolve_all,
)
from diffhue.themes.tmtheme import ThemeDocument, strip_background
from diffhue.themes.variants import LIGHT_VARIANTS, light_variant_of

__all__ = [
    "FALLBACK_SYNTAX_THEME",
    "LIGHT_VARIANTS",
    "REQUIRED_UI_TOKENS",
    "MalformedUIThemeError",
    "ResolvedSyntaxTheme",
    "ResolvedThemes",
    "ResolvedUITheme",
    "SyntaxSource",
    "SyntaxThemeEntry",
    "SyntaxThemeResolver",
    "ThemeCatalog",
    "ThemeDocument",
    "ThemeError",
    "ThemeResolver",
    "ThemeSource",
    "UIThemeInfo",
    "UIThemeResolver",
    "UnknownUIThemeError",
    "light_variant_of",
    "resolve_all",
    "strip_background",
]
