"""Errors raised while resolving themes."""

from __future__ import annotations

from collections.abc import Iterable


class ThemeError(Exception):
    """Base class for theme resolution errors surfaced to the caller."""


class UnknownUIThemeError(ThemeError):
    """The configured UI theme is not in the catalog."""

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        message = f"Unknown UI theme {name!r}"
        if self.available:
            message += f". Available themes: {', '.join(self.available)}"
        super().__init__(message)


class MalformedUIThemeError(ThemeError):
    """A UI theme exists in the catalog but cannot be loaded."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"UI theme {name!r} is malformed: {reason}")
