"""Tests for SVG normalization and the per-icon fallback."""

import xml.etree.ElementTree as ET

import pytest

from daicon.config import FALLBACK_SVG
from daicon.errors import ReadFailure
from daicon.loader import load_icon_set
from daicon.normalizer import (
    IconNormalizationFailure,
    normalize_icon,
    normalize_icons,
    normalize_svg,
)

from conftest import BARE_SVG, BROKEN_SVG, HOME_SVG, SETTINGS_SVG

SVG = "{http://www.w3.org/2000/svg}svg"


def test_missing_viewbox_and_fill_are_injected():
    root = ET.fromstring(normalize_svg(BARE_SVG))

    assert root.tag == SVG
    assert root.get("viewBox") == "0 0 24 24"
    assert root.get("fill") == "currentColor"


def test_existing_viewbox_is_kept():
    markup = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 48 48"><path d="M0 0h48v48z"/></svg>'

    root = ET.fromstring(normalize_svg(markup))

    assert root.get("viewBox") == "0 0 48 48"


def test_fill_on_child_counts_as_declared():
    root = ET.fromstring(normalize_svg(SETTINGS_SVG))

    assert root.get("fill") is None


def test_fill_in_style_counts_as_declared():
    markup = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path style="fill: red" d="M0 0h1v1z"/></svg>'

    root = ET.fromstring(normalize_svg(markup))

    assert root.get("fill") is None


def test_xml_declaration_and_default_namespace():
    markup = '<?xml version="1.0" encoding="UTF-8"?>\n' + HOME_SVG

    result = normalize_svg(markup)

    assert not result.startswith("<?xml")
    assert result.startswith('<svg xmlns="http://www.w3.org/2000/svg"')


def test_svg_without_namespace_is_accepted():
    root = ET.fromstring(normalize_svg('<svg><path d="M0 0h1v1z"/></svg>'))

    assert root.tag == "svg"
    assert root.get("viewBox") == "0 0 24 24"


@pytest.mark.parametrize("markup", [BROKEN_SVG, "", "<html><body/></html>"])
def test_invalid_markup_raises_failure(markup):
    with pytest.raises(IconNormalizationFailure):
        normalize_svg(markup)


def test_broken_icon_falls_back_to_triangle(make_icon_dir):
    root = make_icon_dir({"broken.svg": BROKEN_SVG})
    entry = load_icon_set(root)[0]

    icon = normalize_icon(entry, root)

    assert icon.used_fallback
    assert icon.markup == FALLBACK_SVG
    assert icon.entry is entry


def test_undecodable_icon_falls_back(make_icon_dir):
    root = make_icon_dir({})
    (root / "binary.svg").write_bytes(b"\xff\xfe\x00<svg")
    entry = load_icon_set(root)[0]

    assert normalize_icon(entry, root).used_fallback


def test_one_malformed_icon_does_not_drop_others(make_icon_dir):
    root = make_icon_dir({
        "a.svg": HOME_SVG,
        "b.svg": BROKEN_SVG,
        "c.svg": BARE_SVG,
    })
    entries = load_icon_set(root)

    icons = normalize_icons(entries, root)

    assert [icon.entry.ordinal_index for icon in icons] == [0, 1, 2]
    assert [icon.used_fallback for icon in icons] == [False, True, False]


def test_unreadable_icon_raises_read_failure(make_icon_dir):
    root = make_icon_dir({"gone.svg": HOME_SVG})
    entry = load_icon_set(root)[0]
    (root / "gone.svg").unlink()

    with pytest.raises(ReadFailure):
        normalize_icon(entry, root)
