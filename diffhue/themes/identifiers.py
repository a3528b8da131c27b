"""Classification of theme identifiers.

A configured theme reference is one of four kinds. Classifying it once here
keeps the catalog's lookup rules in a single place:

- ``BuiltinName``: a plain name such as ``"nord"``.
- ``BuiltinNameWithSuffix``: a built-in name plus a mode suffix, such as
  ``"tokyonight-light"`` or ``"nord-dark"``.
- ``BareFileName``: a ``.tmTheme`` file name looked up in the user themes
  directory, such as ``"MyTheme.tmTheme"``.
- ``FilesystemPath``: anything containing a path separator, read literally.
"""

from __future__ import annotations

import os
from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path

from diffhue.settings import ThemeMode

TMTHEME_SUFFIX = ".tmTheme"

_MODE_SUFFIXES: dict[str, ThemeMode] = {f"-{mode.value}": mode for mode in ThemeMode}


@dataclass(frozen=True)
class BuiltinName:
    """A plain theme name."""

    name: str


@dataclass(frozen=True)
class BuiltinNameWithSuffix:
    """A built-in theme name with an explicit mode suffix."""

    base: str
    mode: ThemeMode

    @property
    def name(self) -> str:
        return f"{self.base}-{self.mode.value}"


@dataclass(frozen=True)
class BareFileName:
    """A theme file name resolved against the user themes directory."""

    file_name: str


@dataclass(frozen=True)
class FilesystemPath:
    """A literal path to a theme file."""

    path: Path


ThemeIdentifier = BuiltinName | BuiltinNameWithSuffix | BareFileName | FilesystemPath


def is_tmtheme_file_name(value: str) -> bool:
    """Check whether a name carries the ``.tmTheme`` extension (any case)."""
    return value.lower().endswith(TMTHEME_SUFFIX.lower())


def parse_identifier(raw: str, builtin_names: Collection[str]) -> ThemeIdentifier:
    """Classify a raw theme reference.

    Args:
        raw: Identifier as configured. Surrounding whitespace is ignored.
        builtin_names: Names of embedded themes, used to recognize mode suffixes.

    Returns:
        The classified identifier.
    """
    value = raw.strip()

    if "/" in value or os.sep in value or value.startswith("~"):
        path = Path(value)
        try:
            path = path.expanduser()
        except (RuntimeError, ValueError):
            # ``~name`` for a user that does not exist stays literal
            pass
        return FilesystemPath(path)

    if is_tmtheme_file_name(value):
        return BareFileName(value)

    if value in builtin_names:
        return BuiltinName(value)

    for suffix, mode in _MODE_SUFFIXES.items():
        base = value.removesuffix(suffix)
        if base != value and base in builtin_names:
            return BuiltinNameWithSuffix(base, mode)

    return BuiltinName(value)
