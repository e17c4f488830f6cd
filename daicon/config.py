"""Constants shared by the daicon pipeline."""

from __future__ import annotations


# Generated Dart classes rely on icons starting exactly here.
START_CODEPOINT = 0xE900
PUA_LAST_CODEPOINT = 0xF8FF

ICON_EXTENSIONS = frozenset({".svg"})

SVG_NS = "http://www.w3.org/2000/svg"
DEFAULT_VIEWBOX = "0 0 24 24"
CURRENT_COLOR_FILL = "currentColor"
FALLBACK_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor">'
    '<path d="M12 2L2 22h20L12 2z"/></svg>'
)

OUTPUT_SUFFIX = "-flutter"
FONTS_DIR_NAME = "fonts"
STAGING_DIR_NAME = ".temp_icons"
STAGED_NAME_TEMPLATE = "icon_{index}.svg"
BINDING_NAME_TEMPLATE = "{class_name}_icons.dart"
README_NAME = "README.md"

UNITS_PER_EM = 1000
CU2QU_MAX_ERR = 1.0
