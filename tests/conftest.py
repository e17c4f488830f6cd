"""Shared fixtures: small icon folders written into tmp_path."""

from pathlib import Path
from typing import Callable, Dict

import pytest

HOME_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor">'
    '<path d="M3 12L12 3l9 9v9H3z"/></svg>'
)
SETTINGS_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<circle cx="12" cy="12" r="8" fill="#000"/></svg>'
)
BARE_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><rect x="2" y="2" width="20" height="20"/></svg>'
BROKEN_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0L1 1"'


@pytest.fixture
def make_icon_dir(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing ``{relative_path: markup}`` under ``tmp_path/<name>``."""

    def factory(files: Dict[str, str], name: str = "icons") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, markup in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(markup, encoding="utf-8")
        return root

    return factory


@pytest.fixture
def icons_dir(make_icon_dir) -> Path:
    """The ``icons/`` folder with ``home.svg`` and ``settings.svg``."""
    return make_icon_dir({"home.svg": HOME_SVG, "settings.svg": SETTINGS_SVG})
