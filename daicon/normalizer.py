"""
Rewrite icon markup into a form the font compiler can consume.

Each icon is checked for a ``viewBox`` and a fill declaration; missing ones
are injected. Broken markup never stops the batch: the icon is replaced by
a filled triangle so every entry still gets exactly one glyph.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import List

from daicon.config import CURRENT_COLOR_FILL, DEFAULT_VIEWBOX, FALLBACK_SVG, SVG_NS
from daicon.errors import ReadFailure
from daicon.loader import IconEntry

logger = logging.getLogger(__name__)

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", "http://www.w3.org/1999/xlink")

XML_DECLARATION = re.compile(r"<\?xml[^>]*\?>")
STYLE_FILL = re.compile(r"(^|;)\s*fill\s*:")


class IconNormalizationFailure(ValueError):
    """Markup of a single icon could not be normalized."""


@dataclass(frozen=True)
class NormalizedIcon:
    entry: IconEntry
    markup: str
    used_fallback: bool = False


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element or attribute name."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def declares_fill(root: ET.Element) -> bool:
    for elem in root.iter():
        for attr, value in elem.attrib.items():
            name = local_name(attr)
            if name == "fill":
                return True
            if name == "style" and STYLE_FILL.search(value):
                return True
    return False


def normalize_svg(markup: str) -> str:
    """
    Return ``markup`` with a ``viewBox`` and a fill declared on the root.

    Raises:
        IconNormalizationFailure: if the markup is not an SVG document.
    """
    cleaned = XML_DECLARATION.sub("", markup).strip()
    try:
        root = ET.fromstring(cleaned)
    except ET.ParseError as exc:
        raise IconNormalizationFailure(f"Failed to parse SVG: {exc}") from exc

    if local_name(root.tag) != "svg":
        raise IconNormalizationFailure(f"Root element is <{local_name(root.tag)}>, expected <svg>")

    if root.get("viewBox") is None:
        root.set("viewBox", DEFAULT_VIEWBOX)

    if not declares_fill(root):
        root.set("fill", CURRENT_COLOR_FILL)

    return ET.tostring(root, encoding="unicode")


def normalize_icon(entry: IconEntry, root: Path) -> NormalizedIcon:
    """Read and normalize one icon, falling back to a placeholder glyph on failure."""
    path = root / entry.relative_path
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ReadFailure(f"Cannot read {path}: {exc}") from exc
    try:
        markup = normalize_svg(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, IconNormalizationFailure) as exc:
        logger.debug("Using fallback glyph for %s: %s", entry.relative_path, exc)
        return NormalizedIcon(entry=entry, markup=FALLBACK_SVG, used_fallback=True)
    return NormalizedIcon(entry=entry, markup=markup)


def normalize_icons(entries: List[IconEntry], root: Path) -> List[NormalizedIcon]:
    icons = [normalize_icon(entry, root) for entry in entries]
    fallbacks = sum(1 for icon in icons if icon.used_fallback)
    if fallbacks:
        logger.warning("%d of %d icons could not be parsed and use the fallback glyph", fallbacks, len(icons))
    return icons
