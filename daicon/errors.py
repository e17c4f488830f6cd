"""Exceptions raised by the daicon pipeline.

Everything the CLI reports to the user derives from DaiconError. Per-icon
markup problems never show up here: the normalizer replaces the icon with
a fallback glyph instead.
"""

from __future__ import annotations


class DaiconError(Exception):
    """Base class for fatal pipeline errors."""


class InvalidInputPath(DaiconError):
    """The input path is empty, missing, or not a directory."""


class NoIconsFound(DaiconError):
    """The input directory contains no SVG files."""


class TooManyIcons(DaiconError):
    """More icons than codepoints left in the private-use area."""

    def __init__(self, count: int, capacity: int) -> None:
        super().__init__(
            f"{count} icons do not fit into the private-use area "
            f"(at most {capacity} codepoints are available)"
        )
        self.count = count
        self.capacity = capacity


class FontCompilerFailure(DaiconError):
    """The font could not be built from the staged icons."""


class WriteFailure(DaiconError):
    """An output file or directory could not be written."""


class ReadFailure(DaiconError):
    """An input icon file could not be read."""
