"""
Derive Dart identifiers from the input folder and icon file names.

The class name comes from the input directory (``my-icons`` -> ``MyIcons``),
constant names from icon base names (``arrowLeft`` -> ``arrow_left``).
Duplicate constant names are disambiguated with the icon's ordinal index.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from daicon.loader import IconEntry

logger = logging.getLogger(__name__)

# Splits "fooBar" -> "foo Bar", "HTMLParser" -> "HTML Parser".
CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])|([A-Z])([A-Z][a-z])")
NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")

DEFAULT_CLASS_NAME = "Icons"
DEFAULT_CONSTANT_NAME = "icon"

DART_RESERVED = frozenset({
    "abstract", "as", "assert", "async", "await", "base", "break", "case", "catch",
    "class", "const", "continue", "covariant", "default", "deferred", "do", "dynamic",
    "else", "enum", "export", "extends", "extension", "external", "factory", "false",
    "final", "finally", "for", "function", "get", "hide", "if", "implements", "import",
    "in", "interface", "is", "late", "library", "mixin", "new", "null", "of", "on",
    "operator", "part", "required", "rethrow", "return", "sealed", "set", "show",
    "static", "super", "switch", "sync", "this", "throw", "true", "try", "type",
    "typedef", "var", "void", "when", "while", "with", "yield",
})


@dataclass(frozen=True)
class IdentifierSet:
    class_name: str
    constant_names: Tuple[str, ...]


def split_words(name: str) -> List[str]:
    """Split an arbitrary file or folder name into words."""
    spaced = CASE_BOUNDARY.sub(
        lambda m: f"{m.group(1)} {m.group(2)}" if m.group(1) else f"{m.group(3)} {m.group(4)}",
        name,
    )
    return [word for word in NON_ALNUM.split(spaced) if word]


def pascal_case(name: str) -> str:
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(name))


def snake_case(name: str) -> str:
    return "_".join(word.lower() for word in split_words(name))


def class_name_for(dirname: str) -> str:
    name = pascal_case(dirname)
    if not name:
        return DEFAULT_CLASS_NAME
    if name[0].isdigit():
        # "3d-icons" -> "Icons3d", "3d" -> "Icons3d"
        if name.endswith(DEFAULT_CLASS_NAME):
            name = name[: -len(DEFAULT_CLASS_NAME)]
        return DEFAULT_CLASS_NAME + name
    return name


def constant_name_for(base_name: str) -> str:
    name = snake_case(base_name)
    if not name:
        return DEFAULT_CONSTANT_NAME
    if name[0].isdigit():
        name = f"{DEFAULT_CONSTANT_NAME}_{name}"
    if name in DART_RESERVED:
        name += "_"
    return name


def disambiguate(names: Sequence[str], indices: Sequence[int]) -> List[str]:
    """
    Make constant names unique without reordering them.

    The first occurrence keeps its name; later duplicates get ``_<index>``
    appended until the name is free.
    """
    taken = set()
    unique = []
    for name, index in zip(names, indices):
        candidate = name
        while candidate in taken:
            candidate = f"{candidate}_{index}"
        if candidate != name:
            logger.warning("Duplicate icon name '%s', renamed to '%s'", name, candidate)
        taken.add(candidate)
        unique.append(candidate)
    return unique


def generate_identifiers(dirname: str, entries: Sequence[IconEntry]) -> IdentifierSet:
    names = [constant_name_for(entry.base_name) for entry in entries]
    indices = [entry.ordinal_index for entry in entries]
    return IdentifierSet(
        class_name=class_name_for(dirname),
        constant_names=tuple(disambiguate(names, indices)),
    )
