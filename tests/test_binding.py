"""Tests for the generated Dart class."""

import re

import pytest

from daicon.binding import render_binding
from daicon.codepoints import assign_codepoints
from daicon.identifiers import IdentifierSet

CONSTANT = re.compile(r"static const IconData (\w+) = IconData\((0x[0-9a-f]+), fontFamily: _fontFamily\);")


def test_binding_for_home_and_settings():
    identifiers = IdentifierSet("Icons", ("home", "settings"))

    text = render_binding(identifiers, assign_codepoints(2))

    assert text.startswith("// Place fonts/Icons.ttf in your fonts/ directory and\n")
    assert "//       - asset: fonts/Icons.ttf\n" in text
    assert "import 'package:flutter/widgets.dart';" in text
    assert "class Icons {\n  Icons._();\n" in text
    assert "  static const String _fontFamily = 'Icons';" in text
    assert CONSTANT.findall(text) == [("home", "0xe900"), ("settings", "0xe901")]
    assert text.endswith("}\n")


def test_one_constant_per_icon_with_sequential_codepoints():
    names = tuple(f"icon_{i}" for i in range(300))

    text = render_binding(IdentifierSet("Many", names), assign_codepoints(len(names)))

    found = CONSTANT.findall(text)
    assert len(found) == 300
    assert all(int(code, 16) == 0xE900 + i for i, (_, code) in enumerate(found))


def test_rendering_is_deterministic():
    identifiers = IdentifierSet("Icons", ("a", "b", "c"))

    assert render_binding(identifiers, assign_codepoints(3)) == render_binding(identifiers, assign_codepoints(3))


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        render_binding(IdentifierSet("Icons", ("a", "b")), assign_codepoints(3))
