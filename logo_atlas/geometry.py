"""Grid geometry for fixed-grid atlases.

This module is pure Python and UI agnostic so the layout arithmetic can be
unit tested without Qt or Pillow.  A single placement routine,
:func:`plan_placements`, serves both the full resolution atlas and the scaled
down preview.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from . import config


class GeometryError(ValueError):
    """Base class for grid configurations that leave no room for images."""

    title = "Invalid Grid"


class InvalidPaddingError(GeometryError):
    """Raised when padding consumes all available space on an axis."""

    title = "Invalid Padding"


class InvalidCellSizeError(GeometryError):
    """Raised when the computed inner cell size drops to zero."""

    title = "Invalid Cell Size"


@dataclass(frozen=True)
class GridSettings:
    """User adjustable grid configuration."""

    columns: int = config.DEFAULT_COLUMNS
    rows: int = config.DEFAULT_ROWS
    padding: int = config.DEFAULT_PADDING
    atlas_size: int = config.DEFAULT_ATLAS_SIZE

    def __post_init__(self) -> None:
        if not config.MIN_COLUMNS <= self.columns <= config.MAX_COLUMNS:
            raise ValueError(
                f"columns must be between {config.MIN_COLUMNS} and {config.MAX_COLUMNS}"
            )
        if not config.MIN_ROWS <= self.rows <= config.MAX_ROWS:
            raise ValueError(
                f"rows must be between {config.MIN_ROWS} and {config.MAX_ROWS}"
            )
        if not config.MIN_PADDING <= self.padding <= config.MAX_PADDING:
            raise ValueError(
                f"padding must be between {config.MIN_PADDING} and {config.MAX_PADDING}"
            )
        if self.atlas_size not in config.ATLAS_SIZES:
            raise ValueError(f"Unsupported atlas size: {self.atlas_size}")

    @property
    def capacity(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class GridGeometry:
    """Inner cell dimensions for a grid laid out on a square atlas."""

    columns: int
    rows: int
    atlas_size: int
    padding: int
    cell_width: int
    cell_height: int

    @property
    def capacity(self) -> int:
        return self.columns * self.rows

    def position(self, index: int) -> Tuple[int, int]:
        """Return ``(row, column)`` for the cell at *index* in reading order."""
        return divmod(index, self.columns)

    def cell_origin(self, index: int) -> Tuple[int, int]:
        """Top-left corner of the inner area of cell *index* in atlas pixels."""
        row, column = self.position(index)
        x = self.padding + column * (self.cell_width + self.padding)
        y = self.padding + row * (self.cell_height + self.padding)
        return x, y

    @property
    def used_width(self) -> int:
        return self.padding + self.columns * (self.cell_width + self.padding)

    @property
    def used_height(self) -> int:
        return self.padding + self.rows * (self.cell_height + self.padding)


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle; coordinates may be fractional in preview space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def intersects(self, other: "Rect") -> bool:
        return not (
            self.right <= other.x
            or self.bottom <= other.y
            or self.x >= other.right
            or self.y >= other.bottom
        )


@dataclass(frozen=True)
class Placement:
    """Where one image lands on the output canvas."""

    index: int
    row: int
    column: int
    cell: Rect
    target: Optional[Rect] = None  # None when the cell holds no drawable image


def compute_grid_geometry(
    columns: int,
    rows: int,
    atlas_size: int,
    padding: int,
    *,
    strict: bool = True,
) -> GridGeometry:
    """Compute the inner cell size for a ``columns`` x ``rows`` grid.

    Padding surrounds every cell, so each axis loses ``(count + 1) * padding``
    pixels before the remainder is divided evenly.  Division truncates; any
    leftover pixels stay as unused margin on the right and bottom edges.

    With ``strict`` (the default) a configuration that leaves no room raises
    :class:`InvalidPaddingError` or :class:`InvalidCellSizeError`.  The
    preview uses ``strict=False``, which clamps every quantity to at least one
    pixel instead.
    """
    if columns < 1 or rows < 1:
        raise ValueError("Grid must have positive dimensions")
    if atlas_size <= 0:
        raise ValueError("atlas_size must be positive")
    if padding < 0:
        raise ValueError("padding must not be negative")

    available_w = atlas_size - (columns + 1) * padding
    available_h = atlas_size - (rows + 1) * padding
    if strict and (available_w <= 0 or available_h <= 0):
        raise InvalidPaddingError(
            "Padding too large for selected resolution/columns causing no space "
            "for images. Reduce padding or increase resolution/columns."
        )
    if not strict:
        available_w = max(1, available_w)
        available_h = max(1, available_h)

    cell_w = available_w // columns
    cell_h = available_h // rows
    if strict and (cell_w <= 0 or cell_h <= 0):
        raise InvalidCellSizeError(
            "Computed cell size is zero or negative. Adjust padding/columns/resolution."
        )
    if not strict:
        cell_w = max(1, cell_w)
        cell_h = max(1, cell_h)

    return GridGeometry(
        columns=columns,
        rows=rows,
        atlas_size=atlas_size,
        padding=padding,
        cell_width=cell_w,
        cell_height=cell_h,
    )


def geometry_for(settings: GridSettings, *, strict: bool = True) -> GridGeometry:
    return compute_grid_geometry(
        settings.columns,
        settings.rows,
        settings.atlas_size,
        settings.padding,
        strict=strict,
    )


def fit_rect(cell: Rect, image_size: Tuple[int, int]) -> Rect:
    """Aspect-fit an image of *image_size* inside *cell*, centered.

    The scale is ``min(cell_w / img_w, cell_h / img_h)`` so small images are
    enlarged as well.  Drawn sizes are rounded and never drop below one pixel;
    the centering offset uses floor division.
    """
    img_w, img_h = image_size
    if img_w <= 0 or img_h <= 0:
        raise ValueError(f"Image has no pixels: {image_size}")
    scale = min(cell.width / img_w, cell.height / img_h)
    draw_w = max(1, round(img_w * scale))
    draw_h = max(1, round(img_h * scale))
    x = int(cell.x + (cell.width - draw_w) // 2)
    y = int(cell.y + (cell.height - draw_h) // 2)
    return Rect(x, y, draw_w, draw_h)


def plan_placements(
    geometry: GridGeometry,
    image_sizes: Sequence[Optional[Tuple[int, int]]],
    *,
    scale: float = 1.0,
    include_empty: bool = False,
) -> List[Placement]:
    """Lay out images in reading order, scaled by *scale*.

    ``image_sizes`` holds one entry per image in selection order; ``None``
    marks an image that could not be decoded, which keeps its cell but gets no
    target rectangle.  Entries beyond the grid capacity are ignored.  With
    ``include_empty`` every cell of the grid is returned, including cells past
    the last image.
    """
    count = geometry.capacity if include_empty else min(len(image_sizes), geometry.capacity)
    cell_w = geometry.cell_width * scale
    cell_h = geometry.cell_height * scale

    placements: List[Placement] = []
    for index in range(count):
        row, column = geometry.position(index)
        x, y = geometry.cell_origin(index)
        cell = Rect(x * scale, y * scale, cell_w, cell_h)
        size = image_sizes[index] if index < len(image_sizes) else None
        target = fit_rect(cell, size) if size is not None else None
        placements.append(Placement(index, row, column, cell, target))
    return placements


def preview_scale(geometry: GridGeometry, width: int, height: int) -> float:
    """Factor mapping atlas pixels onto a ``width`` x ``height`` preview."""
    return min(width / geometry.atlas_size, height / geometry.atlas_size)


__all__ = [
    "GeometryError",
    "GridGeometry",
    "GridSettings",
    "InvalidCellSizeError",
    "InvalidPaddingError",
    "Placement",
    "Rect",
    "compute_grid_geometry",
    "fit_rect",
    "geometry_for",
    "plan_placements",
    "preview_scale",
]
