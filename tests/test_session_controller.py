"""Unit tests for the atlas session controller."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from PIL import Image

from logo_atlas.capacity import AdjustmentKind
from logo_atlas.controllers import (
    AtlasSession,
    ExternalOpenError,
    NoImagesSelectedError,
    SavedFileMissingError,
)
from logo_atlas.geometry import GridSettings, InvalidCellSizeError, InvalidPaddingError
from utils.image_loader import ImageLoadError, load_image


def _session(opener=None, **overrides) -> AtlasSession:
    values = dict(columns=4, rows=1, padding=4, atlas_size=1024)
    values.update(overrides)
    return AtlasSession(GridSettings(**values), opener=opener)


def test_selection_grows_rows_first(make_pngs):
    session = _session()
    adjustment = session.select_images(make_pngs(10))

    assert adjustment.kind is AdjustmentKind.ROWS_ADJUSTED
    assert (session.settings.columns, session.settings.rows) == (4, 3)
    assert session.image_count == 10
    assert len(session.cache) == 10


def test_selection_beyond_maximum_clamps_and_truncates(make_pngs):
    session = _session(columns=6)
    adjustment = session.select_images(make_pngs(30))

    assert adjustment.kind is AdjustmentKind.CAPACITY_EXCEEDED
    assert (session.settings.columns, session.settings.rows) == (6, 4)

    result = session.generate()
    assert result.used_count == 24
    assert result.selected_count == 30
    assert result.truncated
    assert "Only the first 24 images" in result.truncation_message


def test_grid_changes_rerun_capacity_check(make_pngs):
    session = _session(columns=4, rows=3)
    session.select_images(make_pngs(10))

    adjustment = session.update_settings(columns=2)
    # ceil(10 / 2) = 5 rows > 4, so columns grow back to ceil(10 / 3) = 4
    assert adjustment.kind is AdjustmentKind.COLUMNS_ADJUSTED
    assert (session.settings.columns, session.settings.rows) == (4, 3)


def test_padding_and_resolution_changes_leave_grid_alone(make_pngs):
    session = _session()
    session.select_images(make_pngs(3))

    adjustment = session.update_settings(padding=16, atlas_size=2048)

    assert not adjustment.changed
    assert session.settings == GridSettings(columns=4, rows=1, padding=16, atlas_size=2048)


def test_generate_without_images():
    with pytest.raises(NoImagesSelectedError):
        _session().generate()


def test_generate_rejects_invalid_padding(make_pngs):
    session = _session(columns=6, rows=4, padding=512)
    session.select_images(make_pngs(1))
    with pytest.raises(InvalidPaddingError):
        session.generate()


def test_generate_rejects_zero_cell(make_pngs):
    session = _session(columns=6, rows=1, padding=146)
    session.select_images(make_pngs(1))
    with pytest.raises(InvalidCellSizeError):
        session.generate()


def test_reference_generation(make_pngs):
    session = _session(columns=3, rows=2, padding=10)
    adjustment = session.select_images(make_pngs(5))

    assert not adjustment.changed
    result = session.generate()

    assert result.atlas.size == (1024, 1024)
    assert result.used_count == 5
    assert (result.geometry.cell_width, result.geometry.cell_height) == (328, 497)
    assert result.summary == (
        "Generated atlas 1024x1024 using 5 images (3x2 grid) padding=10px"
    )


def test_regeneration_is_pixel_identical(make_pngs):
    session = _session(columns=2, rows=2, padding=8)
    session.select_images(make_pngs(4))
    assert session.generate().atlas.tobytes() == session.generate().atlas.tobytes()


def test_file_removed_after_selection_fails_generation(make_pngs):
    paths = make_pngs(2)
    session = _session()
    session.select_images(paths)
    paths[1].unlink()

    with pytest.raises(ImageLoadError) as excinfo:
        session.generate()
    assert paths[1].name in str(excinfo.value)


def test_preview_uses_cache_only(make_pngs):
    calls: List[Path] = []

    def counting_loader(path):
        calls.append(Path(path))
        return load_image(path)

    session = AtlasSession(GridSettings(atlas_size=1024), loader=counting_loader)
    session.select_images(make_pngs(3))
    for padding in (0, 8, 64, 512):
        session.update_settings(padding=padding)
        preview = session.render_preview((160, 120))
        assert preview.size == (160, 120)

    assert len(calls) == 3


def test_save_appends_png_suffix(make_pngs, tmp_path):
    session = _session()
    session.select_images(make_pngs(2))
    result = session.generate()

    saved = session.save(result.atlas, tmp_path / "atlas")

    assert saved.name == "atlas.png"
    assert session.last_saved_path == saved
    assert session.can_open_saved
    with Image.open(saved) as reopened:
        assert reopened.size == (1024, 1024)
        assert reopened.mode == "RGBA"


def test_save_rejects_other_formats(tmp_path):
    session = _session()
    with pytest.raises(ValueError):
        session.save(Image.new("RGBA", (4, 4)), tmp_path / "atlas.jpg")
    with pytest.raises(ValueError):
        session.save(Image.new("RGBA", (4, 4)), tmp_path / "missing" / "atlas.png")
    assert session.last_saved_path is None


def test_open_saved_requires_a_saved_file(tmp_path):
    opened: List[Path] = []
    session = _session(opener=lambda p: opened.append(p) or True)

    with pytest.raises(SavedFileMissingError):
        session.open_saved()

    saved = session.save(Image.new("RGBA", (4, 4)), tmp_path / "atlas.png")
    assert session.open_saved() == saved
    assert opened == [saved]

    saved.unlink()
    with pytest.raises(SavedFileMissingError):
        session.open_saved()


def test_open_saved_reports_handler_failure(tmp_path):
    session = _session(opener=lambda p: False)
    session.save(Image.new("RGBA", (4, 4)), tmp_path / "atlas.png")
    with pytest.raises(ExternalOpenError):
        session.open_saved()

    unconfigured = _session()
    unconfigured.save(Image.new("RGBA", (4, 4)), tmp_path / "other.png")
    with pytest.raises(ExternalOpenError):
        unconfigured.open_saved()


def test_close_releases_cache(make_pngs):
    session = _session()
    session.select_images(make_pngs(2))
    session.close()
    assert len(session.cache) == 0
    assert session.image_count == 0


def test_oversized_image_does_not_break_selection(make_png, monkeypatch):
    small = make_png((8, 8))
    large = make_png((64, 64))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

    session = _session(columns=1, rows=1)
    adjustment = session.select_images([small, large])

    assert adjustment.kind is AdjustmentKind.ROWS_ADJUSTED
    assert session.image_count == 2
    assert len(session.cache) == 2
    assert len(session.cache.errors) == 1
    assert session.render_preview((80, 60)).size == (80, 60)
    with pytest.raises(ImageLoadError):
        session.generate()
