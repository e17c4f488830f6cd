"""Discover SVG icons under an input directory."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from daicon.config import ICON_EXTENSIONS
from daicon.errors import NoIconsFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IconEntry:
    """One discovered icon file.

    ``ordinal_index`` ties the icon to its codepoint, its staged file name
    and its Dart constant.
    """

    relative_path: str
    ordinal_index: int
    base_name: str


def find_icon_files(root: Path) -> List[str]:
    """Return POSIX relative paths of icon files under ``root``, sorted."""
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for filename in filenames:
            if filename.startswith("."):
                continue
            file_path = Path(dirpath) / filename
            if file_path.suffix.lower() in ICON_EXTENSIONS and file_path.is_file():
                found.append(file_path.relative_to(root).as_posix())
    return sorted(found)


def load_icon_set(root: Path) -> List[IconEntry]:
    """
    Build the ordered icon index for ``root``.

    Entries are sorted by relative path before indices are assigned, so the
    order does not depend on how the filesystem lists directories.

    Raises:
        NoIconsFound: if no icon files exist under ``root``.
    """
    relative_paths = find_icon_files(root)
    if not relative_paths:
        raise NoIconsFound(f"No SVG files found in {root}")

    entries = [
        IconEntry(
            relative_path=rel,
            ordinal_index=index,
            base_name=Path(rel).stem,
        )
        for index, rel in enumerate(relative_paths)
    ]
    logger.debug("Found %d icons under %s", len(entries), root)
    return entries
