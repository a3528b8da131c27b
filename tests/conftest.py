"""Shared test fixtures for diffhue."""

import os
import plistlib
import tempfile
from collections.abc import Callable
from pathlib import Path

# Keep log files out of the user's data directory; must happen before diffhue.logger is imported
os.environ.setdefault("DIFFHUE_LOG_DIR", tempfile.mkdtemp(prefix="diffhue-test-logs-"))

import pytest

from diffhue.themes import ThemeCatalog, ThemeResolver


@pytest.fixture(autouse=True)
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the configuration directory at an empty temporary directory.

    Returns:
        Path to the configuration directory.
    """
    directory = tmp_path / "config"
    directory.mkdir()
    monkeypatch.setenv("DIFFHUE_CONFIG_DIR", str(directory))
    return directory


@pytest.fixture
def themes_dir(config_dir: Path) -> Path:
    """Create the user themes directory.

    Returns:
        Path to the user themes directory.
    """
    directory = config_dir / "themes"
    directory.mkdir()
    return directory


@pytest.fixture
def catalog(config_dir: Path) -> ThemeCatalog:
    """Catalog over the bundled assets and the temporary user directory."""
    return ThemeCatalog()


@pytest.fixture
def resolver(catalog: ThemeCatalog) -> ThemeResolver:
    """Resolver over the test catalog."""
    return ThemeResolver(catalog)


def make_tmtheme(
    name: str = "Custom",
    keyword: str = "#123456",
    background: str | None = "#000000",
    foreground: str = "#eeeeee",
) -> bytes:
    """Build the bytes of a small tmTheme document."""
    global_settings = {"foreground": foreground}
    if background is not None:
        global_settings["background"] = background
    return plistlib.dumps(
        {
            "name": name,
            "settings": [
                {"settings": global_settings},
                {"name": "Keyword", "scope": "keyword, storage", "settings": {"foreground": keyword}},
                {"name": "String", "scope": "string", "settings": {"foreground": "#00aa00"}},
            ],
        }
    )


@pytest.fixture
def tmtheme_factory() -> Callable[..., bytes]:
    """Factory for tmTheme bytes (see make_tmtheme)."""
    return make_tmtheme
