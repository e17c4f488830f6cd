"""Сборка TTF-шрифта из подготовленной папки SVG-иконок с помощью fontTools.

На вход подаётся папка с файлами ``icon_<индекс>.svg``. Глифы идут в порядке
числового индекса (``icon_2`` раньше ``icon_10``), каждому назначается код
``start_codepoint + индекс`` без перенумерации. Контуры берутся из элементов
path/polygon/polyline/rect/circle/ellipse/line, разбираются svgpathtools,
дуги аппроксимируются кубиками, затем кубики переводятся в квадратичные
кривые. Трансформации и стили не учитываются: это иконки в один цвет.
"""

from __future__ import annotations

import io
import logging
import math
import re
import struct
import warnings
import xml.etree.ElementTree as ET
from contextlib import contextmanager, redirect_stdout
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.transformPen import TransformPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from svgpathtools import Arc, CubicBezier, Line, Path as SvgPath, QuadraticBezier, parse_path

from daicon.config import CU2QU_MAX_ERR, START_CODEPOINT, UNITS_PER_EM
from daicon.errors import FontCompilerFailure

logger = logging.getLogger(__name__)

COMPILER_LOGGERS = ("fontTools",)
STAGED_FILE = re.compile(r"^icon_(\d+)\.svg$")
NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
# Содержимое этих контейнеров не рисуется напрямую.
NON_RENDERED = {"defs", "clipPath", "mask", "symbol", "marker", "pattern", "title", "desc", "metadata", "style"}
INT16_MIN, INT16_MAX = -32768, 32767


class EmptyGlyphWarning(UserWarning):
    """Иконку не удалось нарисовать; в шрифт попал пустой глиф."""


@contextmanager
def suppress_compiler_output(logger_names: Tuple[str, ...] = COMPILER_LOGGERS) -> Iterator[List[warnings.WarningMessage]]:
    """Глушит вывод компилятора на время сборки.

    Логгеры fontTools поднимаются до ERROR, stdout уходит в буфер, warnings
    записываются в список, который отдаётся наружу. При выходе всё
    восстанавливается, в том числе при исключении.
    """
    loggers = [logging.getLogger(name) for name in logger_names]
    saved_levels = [item.level for item in loggers]
    for item in loggers:
        item.setLevel(logging.ERROR)

    buffer = io.StringIO()
    try:
        with warnings.catch_warnings(record=True) as caught, redirect_stdout(buffer):
            warnings.simplefilter("always")
            yield caught
    finally:
        for item, level in zip(loggers, saved_levels):
            item.setLevel(level)
        captured = buffer.getvalue().strip()
        if captured:
            logger.debug("Подавленный вывод компилятора:\n%s", captured)


def count_empty_glyphs(caught: List[warnings.WarningMessage]) -> int:
    """Считает известные безопасные предупреждения, остальные пишет в debug-лог."""
    empty = 0
    for message in caught:
        if issubclass(message.category, EmptyGlyphWarning):
            empty += 1
        else:
            logger.debug("Предупреждение компилятора: %s", message.message)
    return empty


def collect_staged_files(staging_dir: Path) -> List[Tuple[int, Path]]:
    """Возвращает пары (индекс, путь), отсортированные по числовому индексу."""
    if not staging_dir.is_dir():
        raise FontCompilerFailure(f"Staging directory not found: {staging_dir}")

    staged = []
    for entry in staging_dir.iterdir():
        match = STAGED_FILE.match(entry.name)
        if match and entry.is_file():
            staged.append((int(match.group(1)), entry))
    if not staged:
        raise FontCompilerFailure(f"No icon_<N>.svg files in {staging_dir}")
    return sorted(staged)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _num(value: str | None, default: float = 0.0) -> float:
    """Число из атрибута, единицы вроде ``px`` отбрасываются."""
    if value is None:
        return default
    match = NUMBER.match(value.strip())
    if not match:
        raise ValueError(f"Not a number: {value!r}")
    return float(match.group(0))


def _points_to_path(points: str, closed: bool) -> str | None:
    coords = NUMBER.findall(points)
    if len(coords) < 4:
        return None
    pairs = [f"{coords[i]},{coords[i + 1]}" for i in range(0, len(coords) - 1, 2)]
    path_data = "M " + " L ".join(pairs)
    return path_data + " Z" if closed else path_data


def _rect_to_path(elem: ET.Element) -> str | None:
    x, y = _num(elem.get("x")), _num(elem.get("y"))
    w, h = _num(elem.get("width")), _num(elem.get("height"))
    if w <= 0 or h <= 0:
        return None
    rx_raw, ry_raw = elem.get("rx"), elem.get("ry")
    rx = _num(rx_raw if rx_raw is not None else ry_raw)
    ry = _num(ry_raw if ry_raw is not None else rx_raw)
    rx, ry = min(rx, w / 2), min(ry, h / 2)
    if rx <= 0 or ry <= 0:
        return f"M {x},{y} L {x + w},{y} L {x + w},{y + h} L {x},{y + h} Z"
    return (
        f"M {x + rx},{y} L {x + w - rx},{y} A {rx},{ry} 0 0,1 {x + w},{y + ry} "
        f"L {x + w},{y + h - ry} A {rx},{ry} 0 0,1 {x + w - rx},{y + h} "
        f"L {x + rx},{y + h} A {rx},{ry} 0 0,1 {x},{y + h - ry} "
        f"L {x},{y + ry} A {rx},{ry} 0 0,1 {x + rx},{y} Z"
    )


def _ellipse_to_path(cx: float, cy: float, rx: float, ry: float) -> str | None:
    if rx <= 0 or ry <= 0:
        return None
    return (
        f"M {cx - rx},{cy} A {rx},{ry} 0 1,0 {cx + rx},{cy} "
        f"A {rx},{ry} 0 1,0 {cx - rx},{cy} Z"
    )


def extract_path_data(root: ET.Element) -> List[str]:
    """Собирает атрибуты d всех рисуемых фигур в порядке документа."""
    paths: List[str] = []

    def visit(elem: ET.Element) -> None:
        for child in elem:
            name = _local(child.tag)
            if name in NON_RENDERED:
                continue
            path_data = None
            if name == "path":
                path_data = child.get("d")
            elif name in ("polygon", "polyline"):
                path_data = _points_to_path(child.get("points", ""), closed=name == "polygon")
            elif name == "rect":
                path_data = _rect_to_path(child)
            elif name == "circle":
                r = _num(child.get("r"))
                path_data = _ellipse_to_path(_num(child.get("cx")), _num(child.get("cy")), r, r)
            elif name == "ellipse":
                path_data = _ellipse_to_path(
                    _num(child.get("cx")), _num(child.get("cy")), _num(child.get("rx")), _num(child.get("ry"))
                )
            elif name == "line":
                path_data = (
                    f"M {_num(child.get('x1'))},{_num(child.get('y1'))} "
                    f"L {_num(child.get('x2'))},{_num(child.get('y2'))}"
                )
            if path_data and path_data.strip():
                paths.append(path_data)
            visit(child)

    visit(root)
    return paths


def parse_viewbox(root: ET.Element) -> Tuple[float, float, float, float]:
    """Возвращает (min_x, min_y, width, height) из viewBox или width/height."""
    raw = root.get("viewBox")
    if raw:
        parts = [float(p) for p in NUMBER.findall(raw)]
        if len(parts) != 4:
            raise ValueError(f"Invalid viewBox: {raw!r}")
        min_x, min_y, width, height = parts
        if not all(math.isfinite(v) for v in parts):
            raise ValueError(f"Non-finite viewBox: {raw!r}")
    else:
        min_x, min_y = 0.0, 0.0
        width, height = _num(root.get("width"), 24.0), _num(root.get("height"), 24.0)
    if width <= 0 or height <= 0:
        raise ValueError(f"Empty viewBox area: {width}x{height}")
    return min_x, min_y, width, height


def _em_transform(viewbox: Tuple[float, float, float, float]) -> Tuple[float, float, float, float, float, float]:
    """Вписывает viewBox в квадрат em с сохранением пропорций, ось Y переворачивается."""
    min_x, min_y, width, height = viewbox
    scale = UNITS_PER_EM / max(width, height)
    offset_x = (UNITS_PER_EM - width * scale) / 2.0
    offset_y = (UNITS_PER_EM - height * scale) / 2.0
    matrix = (scale, 0, 0, -scale, offset_x - min_x * scale, UNITS_PER_EM - offset_y + min_y * scale)
    if not all(math.isfinite(v) for v in matrix):
        raise ValueError(f"viewBox cannot be scaled to the em square: {width}x{height}")
    return matrix


def _draw_path_to_pen(path: SvgPath, pen: TransformPen) -> None:
    """Рисует сегменты SVG-пути в pen, каждый под-контур закрывается."""
    contour_start = None
    current_point = None

    for segment in path:
        if segment.start == segment.end:
            continue

        if current_point is None or segment.start != current_point:
            # Новая под-петля
            if contour_start is not None:
                pen.closePath()
            pen.moveTo((segment.start.real, segment.start.imag))
            contour_start = segment.start

        end = (segment.end.real, segment.end.imag)
        if isinstance(segment, Line):
            pen.lineTo(end)
        elif isinstance(segment, QuadraticBezier):
            pen.qCurveTo((segment.control.real, segment.control.imag), end)
        elif isinstance(segment, CubicBezier):
            pen.curveTo(
                (segment.control1.real, segment.control1.imag),
                (segment.control2.real, segment.control2.imag),
                end,
            )
        elif isinstance(segment, Arc):
            for cubic in segment.as_cubic_curves():
                pen.curveTo(
                    (cubic.control1.real, cubic.control1.imag),
                    (cubic.control2.real, cubic.control2.imag),
                    (cubic.end.real, cubic.end.imag),
                )
        else:
            raise ValueError(f"Unknown segment type: {type(segment)}")

        current_point = segment.end
        if segment.end == contour_start:
            pen.closePath()
            contour_start = None
            current_point = None

    if contour_start is not None:
        pen.closePath()


def _check_glyph_bounds(glyph) -> None:
    """Координаты глифа должны помещаться в int16 формата glyf."""
    if glyph.numberOfContours <= 0:
        return
    glyph.recalcBounds(None)
    bounds = (glyph.xMin, glyph.yMin, glyph.xMax, glyph.yMax)
    if any(v < INT16_MIN or v > INT16_MAX for v in bounds):
        raise ValueError(f"outline does not fit the font coordinate range: {bounds}")
    if glyph.xMax - glyph.xMin > INT16_MAX or glyph.yMax - glyph.yMin > INT16_MAX:
        raise ValueError(f"outline is too large for the font coordinate range: {bounds}")


def build_glyph(svg_path: Path):
    """Строит TTGlyph из одного подготовленного SVG.

    Если геометрию нарисовать нельзя, выдаётся EmptyGlyphWarning и пустой глиф.
    """
    try:
        root = ET.parse(svg_path).getroot()
    except ET.ParseError as exc:
        raise FontCompilerFailure(f"Cannot parse staged icon {svg_path.name}: {exc}") from exc

    tt_pen = TTGlyphPen(None)
    try:
        transform = _em_transform(parse_viewbox(root))
        path_data = extract_path_data(root)
        if not path_data:
            raise ValueError("no drawable shapes")
        cu2qu_pen = Cu2QuPen(tt_pen, max_err=CU2QU_MAX_ERR, reverse_direction=False)
        transform_pen = TransformPen(cu2qu_pen, transform)
        for d in path_data:
            _draw_path_to_pen(parse_path(d), transform_pen)
        glyph = tt_pen.glyph()
        _check_glyph_bounds(glyph)
    except (ValueError, IndexError, ZeroDivisionError, OverflowError) as exc:
        warnings.warn(f"{svg_path.name}: {exc}", EmptyGlyphWarning)
        return TTGlyphPen(None).glyph()
    return glyph


def compile_font(
    staging_dir: Path,
    font_path: Path,
    family: str,
    start_codepoint: int = START_CODEPOINT,
) -> List[str]:
    """Собирает TTF из ``staging_dir`` и возвращает порядок глифов без .notdef."""
    staged = collect_staged_files(staging_dir)

    glyph_order = [".notdef"]
    glyphs = {".notdef": TTGlyphPen(None).glyph()}
    cmap: Dict[int, str] = {}

    for index, svg_path in staged:
        name = svg_path.stem
        glyph = build_glyph(svg_path)
        glyph_order.append(name)
        glyphs[name] = glyph
        cmap[start_codepoint + index] = name

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    glyf_table = fb.font["glyf"]
    h_metrics: Dict[str, Tuple[int, int]] = {}
    for name in glyph_order:
        glyph = glyf_table[name]
        glyph.recalcBounds(glyf_table)
        h_metrics[name] = (UNITS_PER_EM, getattr(glyph, "xMin", 0))
    fb.setupHorizontalMetrics(h_metrics)
    fb.setupHorizontalHeader(ascent=UNITS_PER_EM, descent=0)
    fb.setupOS2(
        sTypoAscender=UNITS_PER_EM,
        sTypoDescender=0,
        sTypoLineGap=0,
        usWinAscent=UNITS_PER_EM,
        usWinDescent=0,
    )
    fb.setupNameTable({
        "familyName": family,
        "styleName": "Regular",
        "uniqueFontIdentifier": f"{family}-Regular",
        "fullName": f"{family} Regular",
        "psName": f"{family}-Regular",
        "version": "1.0",
    })
    fb.setupPost()
    fb.setupMaxp()

    try:
        font_path.parent.mkdir(parents=True, exist_ok=True)
        fb.save(str(font_path))
    except (OSError, ValueError, struct.error) as exc:
        raise FontCompilerFailure(f"Cannot save font {font_path}: {exc}") from exc

    logger.debug("Шрифт %s: %d глифов", font_path, len(glyph_order) - 1)
    return glyph_order[1:]
