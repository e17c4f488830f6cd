"""Command-line entry point: ``daicon [INPUT_DIR]``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from daicon import __version__
from daicon.errors import DaiconError
from daicon.pipeline import RunResult, run

PROMPT = "Enter the path to your SVG icons folder: "


def _status(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daicon",
        description="Convert a folder of SVG icons into a Flutter icon font and Dart class",
    )
    parser.add_argument(
        "input_dir",
        nargs="?",
        help="Folder with SVG icons (prompted for when omitted)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_summary(result: RunResult) -> None:
    name = result.class_name
    print("Successfully generated Flutter icons!")
    print(f"\nOutput directory: {result.output_dir}")
    print(f"Number of icons processed: {result.icon_count}")
    if result.fallback_count:
        print(f"Icons replaced by the fallback glyph: {result.fallback_count}")
    print("\nGenerated files:")
    print(f"- {result.binding_path.name} (Dart class with icon definitions)")
    print(f"- fonts/{result.font_path.name} (Icon font file)")
    print(f"- {result.readme_path.name} (Usage instructions)")
    print("\nNext steps:")
    print("1. Copy the generated folder to your Flutter project")
    print("2. Add the font to your pubspec.yaml as shown in the README")
    print(f"3. Import the {result.binding_path.name} file in your code")
    print(f"4. Use the icons with {name}.iconName")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    _status("Daicon - SVG to Flutter Icons Converter\n")
    input_dir = args.input_dir
    if input_dir is None:
        try:
            input_dir = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print("\nAborted.", file=sys.stderr)
            return 1

    try:
        result = run(input_dir, status=_status)
    except (DaiconError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_summary(result)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
