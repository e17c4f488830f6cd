"""
End-to-end conversion of an SVG folder into a Flutter icon package.

Both outputs, the font and the Dart class, are derived from the single
ordered icon list built by the loader, so constant ``i`` always names the
glyph at codepoint ``0xE900 + i``.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from daicon.binding import render_binding
from daicon.codepoints import assign_codepoints
from daicon.compiler import compile_font, count_empty_glyphs, suppress_compiler_output
from daicon.config import (
    BINDING_NAME_TEMPLATE,
    FONTS_DIR_NAME,
    OUTPUT_SUFFIX,
    README_NAME,
    START_CODEPOINT,
)
from daicon.errors import InvalidInputPath, WriteFailure
from daicon.identifiers import class_name_for, generate_identifiers
from daicon.loader import load_icon_set
from daicon.normalizer import normalize_icons
from daicon.readme import render_readme
from daicon.staging import stage_icons, staging_directory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    output_dir: Path
    font_path: Path
    binding_path: Path
    readme_path: Path
    class_name: str
    icon_count: int
    fallback_count: int = 0
    empty_glyph_count: int = 0


def resolve_input_dir(raw: Union[str, Path, None]) -> Path:
    """
    Validate the user-supplied input path and return it as an absolute path.

    Raises:
        InvalidInputPath: if the path is empty, missing, or not a directory.
    """
    if raw is None or not str(raw).strip():
        raise InvalidInputPath("Please enter a valid path")
    path = Path(str(raw).strip()).expanduser().resolve()
    if not path.exists():
        raise InvalidInputPath(f"Directory does not exist: {path}")
    if not path.is_dir():
        raise InvalidInputPath(f"Not a directory: {path}")
    return path


def output_dir_for(input_dir: Path) -> Path:
    return input_dir.parent / f"{input_dir.name}{OUTPUT_SUFFIX}"


def prepare_output_dir(output_dir: Path) -> None:
    """Remove ``output_dir`` if present and create it empty."""
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
    except OSError as exc:
        raise WriteFailure(f"Cannot prepare output directory {output_dir}: {exc}") from exc


def write_output(path: Path, content: str) -> Path:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteFailure(f"Cannot write {path}: {exc}") from exc
    return path


def run(input_dir: Union[str, Path], status: Optional[Callable[[str], None]] = None) -> RunResult:
    """Convert ``input_dir`` into ``<input_dir>-flutter`` next to it."""
    report = status or logger.info

    root = resolve_input_dir(input_dir)
    class_name = class_name_for(root.name)
    output_dir = output_dir_for(root)

    report("Processing SVG files...")
    entries = load_icon_set(root)
    table = assign_codepoints(len(entries))

    prepare_output_dir(output_dir)
    icons = normalize_icons(entries, root)

    report("Generating icon font...")
    font_path = output_dir / FONTS_DIR_NAME / f"{class_name}.ttf"
    with staging_directory(output_dir) as staging_dir:
        stage_icons(icons, staging_dir)
        with suppress_compiler_output() as caught:
            compile_font(staging_dir, font_path, class_name, START_CODEPOINT)
    empty_glyphs = count_empty_glyphs(caught)
    if empty_glyphs:
        logger.warning("%d icons have no drawable outline and render as empty glyphs", empty_glyphs)

    report("Generating Dart class...")
    identifiers = generate_identifiers(root.name, entries)
    binding_path = write_output(
        output_dir / BINDING_NAME_TEMPLATE.format(class_name=class_name),
        render_binding(identifiers, table),
    )

    report("Generating documentation...")
    readme_path = write_output(output_dir / README_NAME, render_readme(class_name))

    return RunResult(
        output_dir=output_dir,
        font_path=font_path,
        binding_path=binding_path,
        readme_path=readme_path,
        class_name=class_name,
        icon_count=len(entries),
        fallback_count=sum(1 for icon in icons if icon.used_fallback),
        empty_glyph_count=empty_glyphs,
    )
