"""Render the Dart class exposing one IconData constant per icon."""

from __future__ import annotations

from daicon.codepoints import CodepointTable
from daicon.config import FONTS_DIR_NAME
from daicon.identifiers import IdentifierSet


def render_header(class_name: str) -> str:
    return "\n".join([
        f"// Place {FONTS_DIR_NAME}/{class_name}.ttf in your fonts/ directory and",
        "// add the following to your pubspec.yaml",
        "// flutter:",
        "//   fonts:",
        f"//    - family: {class_name}",
        "//      fonts:",
        f"//       - asset: {FONTS_DIR_NAME}/{class_name}.ttf",
        "//",
        "// Generated with Daicon",
        "",
        "",
    ])


def render_constant(name: str, code: int) -> str:
    return f"  static const IconData {name} = IconData(0x{code:x}, fontFamily: _fontFamily);"


def render_binding(identifiers: IdentifierSet, table: CodepointTable) -> str:
    """
    Return the Dart source for ``identifiers``.

    ``constant_names[i]`` is bound to ``table[i]``; both must describe the
    same number of icons.
    """
    names = identifiers.constant_names
    if len(names) != len(table):
        raise ValueError(
            f"{len(names)} constant names but {len(table)} codepoints; binding would be inconsistent"
        )

    class_name = identifiers.class_name
    lines = [
        "import 'package:flutter/widgets.dart';",
        "",
        f"class {class_name} {{",
        f"  {class_name}._();",
        "",
        f"  static const String _fontFamily = '{class_name}';",
        "",
    ]
    lines.extend(render_constant(name, table[index]) for index, name in enumerate(names))
    lines.append("}")
    return render_header(class_name) + "\n".join(lines) + "\n"
