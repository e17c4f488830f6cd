"""Tests for the temporary staging folder."""

import pytest

from daicon.config import STAGING_DIR_NAME
from daicon.errors import WriteFailure
from daicon.loader import load_icon_set
from daicon.normalizer import normalize_icons
from daicon.staging import stage_icons, staged_name, staging_directory

from conftest import HOME_SVG, SETTINGS_SVG


def test_staged_files_use_index_names_only(make_icon_dir, tmp_path):
    root = make_icon_dir({"home.svg": HOME_SVG, "sub/settings.svg": SETTINGS_SVG})
    icons = normalize_icons(load_icon_set(root), root)
    out = tmp_path / "out"

    with staging_directory(out) as staging_dir:
        paths = stage_icons(icons, staging_dir)
        assert [p.name for p in paths] == ["icon_0.svg", "icon_1.svg"]
        assert sorted(p.name for p in staging_dir.iterdir()) == ["icon_0.svg", "icon_1.svg"]
        assert paths[0].read_text(encoding="utf-8") == icons[0].markup


def test_staging_dir_removed_after_success(tmp_path):
    with staging_directory(tmp_path) as staging_dir:
        assert staging_dir == tmp_path / STAGING_DIR_NAME
        assert staging_dir.is_dir()

    assert not staging_dir.exists()


def test_staging_dir_removed_after_failure(tmp_path):
    with pytest.raises(RuntimeError):
        with staging_directory(tmp_path) as staging_dir:
            (staging_dir / "icon_0.svg").write_text("<svg/>", encoding="utf-8")
            raise RuntimeError("compiler crashed")

    assert not (tmp_path / STAGING_DIR_NAME).exists()


def test_staged_name():
    assert staged_name(12) == "icon_12.svg"


def test_unwritable_staging_dir_raises_write_failure(icons_dir, tmp_path):
    icons = normalize_icons(load_icon_set(icons_dir), icons_dir)

    with pytest.raises(WriteFailure):
        stage_icons(icons, tmp_path / "does-not-exist")
