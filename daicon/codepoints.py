"""Map icon indices to private-use-area codepoints."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from daicon.config import PUA_LAST_CODEPOINT, START_CODEPOINT
from daicon.errors import TooManyIcons

CodepointTable = Mapping[int, int]

MAX_ICONS = PUA_LAST_CODEPOINT - START_CODEPOINT + 1


def codepoint(index: int) -> int:
    if index < 0:
        raise ValueError(f"Icon index must be non-negative, got {index}")
    return START_CODEPOINT + index


def assign_codepoints(count: int) -> CodepointTable:
    """Return a read-only ``index -> codepoint`` table for ``count`` icons."""
    if count < 0:
        raise ValueError(f"Icon count must be non-negative, got {count}")
    if count > MAX_ICONS:
        raise TooManyIcons(count, MAX_ICONS)
    return MappingProxyType({index: codepoint(index) for index in range(count)})
