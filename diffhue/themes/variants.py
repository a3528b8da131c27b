"""Light-mode counterparts of built-in themes."""

from __future__ import annotations

from types import MappingProxyType

LIGHT_VARIANTS: MappingProxyType[str, str] = MappingProxyType(
    {
        "tokyonight": "tokyonight-day",
        "catppuccin": "catppuccin-latte",
        "gruvbox": "gruvbox-light",
        "solarized": "solarized-light",
        "ayu": "ayu-light",
    }
)


def light_variant_of(base: str) -> str | None:
    """Get the light variant of a theme.

    Args:
        base: Base theme identifier (e.g., "tokyonight").

    Returns:
        The light variant identifier, or None if the theme has none.

    Examples:
        >>> light_variant_of("tokyonight")
        'tokyonight-day'
        >>> light_variant_of("nord") is None
        True
    """
    return LIGHT_VARIANTS.get(base)
