"""Atlas and preview composition.

Both outputs are produced by :func:`compose`, which paints the placements
from :func:`logo_atlas.geometry.plan_placements` at a given scale.  The final
atlas uses scale 1.0 on a transparent canvas; the preview uses the display
scale, draws placeholder cells and never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from utils.image_loader import ImageLoadError
from utils.image_operations import draw_image, new_canvas

from . import config
from .geometry import (
    GridGeometry,
    Placement,
    compute_grid_geometry,
    plan_placements,
    preview_scale,
)

logger = logging.getLogger("logo_atlas.compositor")

Color = Tuple[int, int, int, int]


@dataclass(frozen=True)
class CompositionStyle:
    """How cells and the canvas are painted."""

    background: Color = (0, 0, 0, 0)
    cell_fill: Optional[Color] = None
    cell_outline: Optional[Color] = None
    frame_outline: Optional[Color] = None
    frame_width: int = 1
    draw_empty_cells: bool = False
    best_effort: bool = False  # skip images that fail to draw instead of raising


ATLAS_STYLE = CompositionStyle()

PREVIEW_STYLE = CompositionStyle(
    background=config.PREVIEW_BACKGROUND,
    cell_fill=config.PREVIEW_CELL_FILL,
    cell_outline=config.PREVIEW_CELL_OUTLINE,
    frame_outline=config.PREVIEW_FRAME_OUTLINE,
    frame_width=config.PREVIEW_FRAME_WIDTH,
    draw_empty_cells=True,
    best_effort=True,
)


def _box(placement: Placement) -> Tuple[int, int, int, int]:
    target = placement.target
    return int(target.x), int(target.y), int(target.width), int(target.height)


def compose(
    images: Sequence[Optional[Image.Image]],
    geometry: GridGeometry,
    canvas_size: Tuple[int, int],
    *,
    scale: float = 1.0,
    style: CompositionStyle = ATLAS_STYLE,
) -> Image.Image:
    """Paint *images* into the grid described by *geometry*.

    ``images`` is in selection order; entries past the grid capacity are
    ignored and ``None`` entries leave their cell without a thumbnail.
    """
    canvas = new_canvas(canvas_size, style.background)
    sizes = [img.size if img is not None else None for img in images]
    placements = plan_placements(
        geometry, sizes, scale=scale, include_empty=style.draw_empty_cells
    )

    draw = ImageDraw.Draw(canvas, "RGBA")
    if style.cell_fill or style.cell_outline:
        for placement in placements:
            cell = placement.cell
            draw.rectangle(
                [cell.x, cell.y, cell.right, cell.bottom],
                fill=style.cell_fill,
                outline=style.cell_outline,
            )

    for placement in placements:
        if placement.target is None:
            continue
        image = images[placement.index]
        try:
            draw_image(canvas, image, _box(placement))
        except (OSError, ValueError) as exc:
            if not style.best_effort:
                raise
            logger.debug("Skipping thumbnail %d: %s", placement.index, exc)

    if style.frame_outline:
        right = max(0, geometry.used_width * scale - 1)
        bottom = max(0, geometry.used_height * scale - 1)
        draw.rectangle(
            [0, 0, right, bottom],
            outline=style.frame_outline,
            width=style.frame_width,
        )
    return canvas


def compose_atlas(
    images: Sequence[Optional[Image.Image]], geometry: GridGeometry
) -> Image.Image:
    """Compose the full resolution atlas.

    The first ``geometry.capacity`` images are used.  A missing image aborts
    the composition with :class:`ImageLoadError` rather than leaving its cell
    empty.
    """
    used = list(images[: geometry.capacity])
    missing = [index for index, image in enumerate(used) if image is None]
    if missing:
        raise ImageLoadError(
            "Images could not be loaded: " + ", ".join(f"#{i + 1}" for i in missing)
        )
    size = geometry.atlas_size
    atlas = compose(used, geometry, (size, size), style=ATLAS_STYLE)
    logger.info(
        "Composed %dx%d atlas with %d images (%dx%d grid)",
        size,
        size,
        len(used),
        geometry.columns,
        geometry.rows,
    )
    return atlas


def render_preview(
    images: Sequence[Optional[Image.Image]],
    columns: int,
    rows: int,
    atlas_size: int,
    padding: int,
    preview_size: Tuple[int, int],
) -> Image.Image:
    """Render a scaled preview of the grid with thumbnails.

    Geometry is computed in non-strict mode so invalid padding still yields
    a (degenerate) preview.  Any drawing failure is logged and skipped.
    """
    width = max(1, preview_size[0])
    height = max(1, preview_size[1])
    geometry = compute_grid_geometry(columns, rows, atlas_size, padding, strict=False)
    scale = preview_scale(geometry, width, height)
    return compose(
        images, geometry, (width, height), scale=scale, style=PREVIEW_STYLE
    )


__all__ = [
    "ATLAS_STYLE",
    "CompositionStyle",
    "PREVIEW_STYLE",
    "compose",
    "compose_atlas",
    "render_preview",
]
