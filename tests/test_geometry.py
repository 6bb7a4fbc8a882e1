import itertools

import pytest

from logo_atlas.geometry import (
    GridSettings,
    InvalidCellSizeError,
    InvalidPaddingError,
    Rect,
    compute_grid_geometry,
    fit_rect,
    geometry_for,
    plan_placements,
    preview_scale,
)

PADDINGS = [0, 1, 10, 50, 146, 200, 256, 341, 512]
SIZES = [1024, 2048, 4096]


def test_reference_grid_dimensions():
    geometry = compute_grid_geometry(3, 2, 1024, 10)
    # (3 + 1) * 10 = 40 -> 984 / 3; (2 + 1) * 10 = 30 -> 994 / 2
    assert geometry.cell_width == 328
    assert geometry.cell_height == 497
    assert geometry.capacity == 6


def test_padding_larger_than_atlas_is_rejected():
    with pytest.raises(InvalidPaddingError):
        compute_grid_geometry(6, 4, 1024, 512)


def test_zero_inner_cell_is_rejected():
    # 7 * 146 = 1022 leaves 2 pixels for 6 columns
    with pytest.raises(InvalidCellSizeError):
        compute_grid_geometry(6, 1, 1024, 146)


@pytest.mark.parametrize("columns,rows,padding,size", [
    combo for combo in itertools.product(range(1, 7), range(1, 5), PADDINGS, SIZES)
])
def test_geometry_accepts_exactly_the_valid_grids(columns, rows, padding, size):
    available_w = size - (columns + 1) * padding
    available_h = size - (rows + 1) * padding
    if available_w <= 0 or available_h <= 0:
        with pytest.raises(InvalidPaddingError):
            compute_grid_geometry(columns, rows, size, padding)
    elif available_w // columns < 1 or available_h // rows < 1:
        with pytest.raises(InvalidCellSizeError):
            compute_grid_geometry(columns, rows, size, padding)
    else:
        geometry = compute_grid_geometry(columns, rows, size, padding)
        assert geometry.cell_width == available_w // columns
        assert geometry.cell_height == available_h // rows


def test_cells_do_not_overlap_and_stay_inside_atlas():
    for columns, rows, padding, size in itertools.product(range(1, 7), range(1, 5), PADDINGS, SIZES):
        try:
            geometry = compute_grid_geometry(columns, rows, size, padding)
        except ValueError:
            continue
        cells = [p.cell for p in plan_placements(geometry, [], include_empty=True)]
        assert len(cells) == columns * rows
        for cell in cells:
            assert 0 <= cell.x and 0 <= cell.y
            assert cell.right <= size and cell.bottom <= size
        for a, b in itertools.combinations(cells, 2):
            assert not a.intersects(b)


def test_cell_origin_follows_reading_order():
    geometry = compute_grid_geometry(3, 2, 1024, 10)
    assert geometry.position(4) == (1, 1)
    assert geometry.cell_origin(0) == (10, 10)
    assert geometry.cell_origin(4) == (10 + 338, 10 + 507)


def test_fit_rect_preserves_aspect_and_centers():
    cell = Rect(10, 10, 328, 497)
    target = fit_rect(cell, (100, 50))
    assert (target.width, target.height) == (328, 164)
    assert target.x == 10
    assert target.y - cell.y == (497 - 164) // 2


def test_fit_rect_upscales_small_images():
    target = fit_rect(Rect(0, 0, 200, 200), (10, 20))
    assert (target.width, target.height) == (100, 200)
    assert target.x == 50 and target.y == 0


def test_plan_placements_truncates_to_capacity_and_skips_missing():
    geometry = compute_grid_geometry(2, 1, 1024, 0)
    placements = plan_placements(geometry, [(10, 10), None, (10, 10)])
    assert len(placements) == 2
    assert placements[0].target is not None
    assert placements[1].target is None


def test_scaled_plan_matches_scaled_cells():
    geometry = compute_grid_geometry(2, 2, 1024, 16)
    full = plan_placements(geometry, [(64, 64)] * 4)
    half = plan_placements(geometry, [(64, 64)] * 4, scale=0.5)
    for a, b in zip(full, half):
        assert b.cell.x == pytest.approx(a.cell.x * 0.5)
        assert b.cell.width == pytest.approx(a.cell.width * 0.5)
        assert abs(b.target.width - a.target.width * 0.5) <= 1


def test_non_strict_geometry_clamps_instead_of_failing():
    geometry = compute_grid_geometry(6, 4, 1024, 512, strict=False)
    assert geometry.cell_width == 1
    assert geometry.cell_height == 1


def test_preview_scale_uses_smaller_axis():
    geometry = compute_grid_geometry(1, 1, 2048, 0)
    assert preview_scale(geometry, 1024, 512) == 0.25


def test_grid_settings_enforce_limits():
    assert GridSettings().capacity == 4
    with pytest.raises(ValueError):
        GridSettings(columns=7)
    with pytest.raises(ValueError):
        GridSettings(rows=0)
    with pytest.raises(ValueError):
        GridSettings(padding=513)
    with pytest.raises(ValueError):
        GridSettings(atlas_size=1000)


def test_geometry_for_settings():
    geometry = geometry_for(GridSettings(columns=3, rows=2, padding=10, atlas_size=1024))
    assert (geometry.cell_width, geometry.cell_height) == (328, 497)
