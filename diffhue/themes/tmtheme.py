"""Parsing and post-processing of TextMate (``.tmTheme``) syntax themes.

A tmTheme file is an XML property list::

    <dict>
      <key>name</key><string>Nord</string>
      <key>settings</key>
      <array>
        <dict>                      <!-- global settings: no scope -->
          <key>settings</key>
          <dict><key>background</key><string>#2E3440</string> ...</dict>
        </dict>
        <dict>                      <!-- one rule per scope selector list -->
          <key>scope</key><string>keyword, storage</string>
          <key>settings</key><dict><key>foreground</key>...</dict>
        </dict>
      </array>
    </dict>
"""

from __future__ import annotations

import plistlib
from dataclasses import dataclass, field
from xml.parsers.expat import ExpatError

BACKGROUND_KEY = "background"
FOREGROUND_KEY = "foreground"


class ThemeParseError(ValueError):
    """Raised when theme bytes are not a usable tmTheme document."""


@dataclass(frozen=True)
class ScopeRule:
    """A single entry of a tmTheme ``settings`` array."""

    settings: dict[str, str]
    scope: str | None = None
    name: str | None = None

    @property
    def is_global(self) -> bool:
        """Rules without a scope hold the theme-wide defaults."""
        return self.scope is None

    @property
    def selectors(self) -> tuple[str, ...]:
        """Individual scope selectors of this rule."""
        if self.scope is None:
            return ()
        return tuple(part.strip() for part in self.scope.split(",") if part.strip())


@dataclass(frozen=True)
class ThemeDocument:
    """A parsed syntax theme."""

    name: str
    rules: tuple[ScopeRule, ...] = field(default_factory=tuple)

    @property
    def global_settings(self) -> dict[str, str]:
        """Theme-wide settings merged from every scope-less rule."""
        merged: dict[str, str] = {}
        for rule in self.rules:
            if rule.is_global:
                merged.update(rule.settings)
        return merged

    @property
    def colors(self) -> dict[str, str]:
        """Foreground color per scope selector.

        Later rules override earlier ones for the same selector, matching the
        cascade order of the file.
        """
        mapping: dict[str, str] = {}
        for rule in self.rules:
            foreground = rule.settings.get(FOREGROUND_KEY)
            if foreground is None:
                continue
            for selector in rule.selectors:
                mapping[selector] = foreground
        return mapping


def parse_theme_document(data: bytes) -> ThemeDocument:
    """Parse tmTheme bytes.

    Args:
        data: Raw file contents.

    Returns:
        The parsed document.

    Raises:
        ThemeParseError: If the bytes are not a tmTheme property list.
    """
    try:
        payload = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, IndexError, TypeError) as exc:
        raise ThemeParseError(f"Failed to parse plist: {exc}") from exc

    if not isinstance(payload, dict):
        raise ThemeParseError("Top-level plist value must be a mapping")

    raw_rules = payload.get("settings")
    if not isinstance(raw_rules, list):
        raise ThemeParseError("Theme has no 'settings' array")

    rules: list[ScopeRule] = []
    for index, raw_rule in enumerate(raw_rules):
        if not isinstance(raw_rule, dict):
            raise ThemeParseError(f"Entry {index} of 'settings' must be a mapping")
        raw_settings = raw_rule.get("settings")
        if not isinstance(raw_settings, dict):
            raise ThemeParseError(f"Entry {index} of 'settings' has no settings mapping")

        scope = raw_rule.get("scope")
        name = raw_rule.get("name")
        rules.append(
            ScopeRule(
                settings={key: value for key, value in raw_settings.items() if isinstance(value, str)},
                scope=scope if isinstance(scope, str) and scope.strip() else None,
                name=name if isinstance(name, str) else None,
            )
        )

    name = payload.get("name")
    return ThemeDocument(name=name if isinstance(name, str) else "", rules=tuple(rules))


def strip_background(document: ThemeDocument) -> ThemeDocument:
    """Remove the theme-wide background so the UI background stays authoritative.

    Only scope-less rules are touched. A global rule left without any setting
    is dropped. Per-scope colors are kept as they are.

    Args:
        document: Parsed theme. It is not modified.

    Returns:
        A new document without a global background.
    """
    rules: list[ScopeRule] = []
    for rule in document.rules:
        if not rule.is_global:
            rules.append(rule)
            continue
        settings = {key: value for key, value in rule.settings.items() if key != BACKGROUND_KEY}
        if settings:
            rules.append(ScopeRule(settings=settings, scope=None, name=rule.name))
    return ThemeDocument(name=document.name, rules=tuple(rules))
