"""Временная раскладка нормализованных иконок перед сборкой шрифта.

Файлы получают имена только по индексу (``icon_0.svg``, ``icon_1.svg``, ...),
исходное имя отбрасывается. Так компилятор не может вывести из имени файла
собственный юникод, расходящийся с таблицей кодов.
"""

from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from daicon.config import STAGED_NAME_TEMPLATE, STAGING_DIR_NAME
from daicon.errors import WriteFailure
from daicon.normalizer import NormalizedIcon

logger = logging.getLogger(__name__)


def staged_name(index: int) -> str:
    return STAGED_NAME_TEMPLATE.format(index=index)


@contextmanager
def staging_directory(output_dir: Path) -> Iterator[Path]:
    """Создаёт ``<output_dir>/.temp_icons`` и удаляет его при любом выходе."""
    staging_dir = output_dir / STAGING_DIR_NAME
    try:
        staging_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteFailure(f"Cannot create staging directory {staging_dir}: {exc}") from exc
    try:
        yield staging_dir
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)
        logger.debug("Временная папка удалена: %s", staging_dir)


def stage_icons(icons: List[NormalizedIcon], staging_dir: Path) -> List[Path]:
    """Записывает иконки в ``staging_dir`` и возвращает пути в порядке индексов."""
    staged = []
    for icon in icons:
        dest = staging_dir / staged_name(icon.entry.ordinal_index)
        try:
            dest.write_text(icon.markup, encoding="utf-8")
        except OSError as exc:
            raise WriteFailure(f"Cannot write {dest}: {exc}") from exc
        staged.append(dest)
    return staged
