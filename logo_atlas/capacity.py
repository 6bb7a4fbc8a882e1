"""Reconcile the grid size with the number of selected images."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import config


class AdjustmentKind(Enum):
    NONE = "none"
    ROWS_ADJUSTED = "rows"
    COLUMNS_ADJUSTED = "columns"
    CAPACITY_EXCEEDED = "capacity"


@dataclass(frozen=True)
class CapacityAdjustment:
    """Outcome of :func:`adjust_grid_capacity`."""

    kind: AdjustmentKind
    columns: int
    rows: int
    image_count: int

    @property
    def changed(self) -> bool:
        return self.kind is not AdjustmentKind.NONE

    @property
    def capacity(self) -> int:
        return self.columns * self.rows

    @property
    def used_count(self) -> int:
        return min(self.image_count, self.capacity)

    @property
    def title(self) -> str:
        if self.kind is AdjustmentKind.CAPACITY_EXCEEDED:
            return "Grid Capacity Exceeded"
        return "Grid Adjusted"

    @property
    def message(self) -> str:
        if self.kind is AdjustmentKind.ROWS_ADJUSTED:
            return f"Adjusted rows to {self.rows} to fit {self.image_count} images."
        if self.kind is AdjustmentKind.COLUMNS_ADJUSTED:
            return f"Adjusted columns to {self.columns} to fit {self.image_count} images."
        if self.kind is AdjustmentKind.CAPACITY_EXCEEDED:
            return (
                f"Selected {self.image_count} images exceed the maximum grid capacity "
                f"of {self.capacity}. The grid has been set to {self.columns}x{self.rows} "
                f"and only the first {self.capacity} images will be used."
            )
        return ""


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def adjust_grid_capacity(
    image_count: int,
    columns: int,
    rows: int,
    *,
    max_columns: int = config.MAX_COLUMNS,
    max_rows: int = config.MAX_ROWS,
) -> CapacityAdjustment:
    """Grow the grid so it can hold *image_count* images.

    Rows are grown first with the column count fixed.  If that would exceed
    ``max_rows`` the columns are grown instead, using the original row count.
    If neither fits, the grid is clamped to ``max_columns`` x ``max_rows`` and
    only the first images are used.  A grid that already fits is returned
    unchanged with :attr:`AdjustmentKind.NONE`.
    """
    if image_count < 0:
        raise ValueError("image_count must not be negative")
    if columns < 1 or rows < 1:
        raise ValueError("Grid must have positive dimensions")

    if image_count <= columns * rows:
        return CapacityAdjustment(AdjustmentKind.NONE, columns, rows, image_count)

    needed_rows = _ceil_div(image_count, columns)
    if needed_rows <= max_rows:
        return CapacityAdjustment(
            AdjustmentKind.ROWS_ADJUSTED, columns, needed_rows, image_count
        )

    needed_columns = _ceil_div(image_count, rows)
    if needed_columns <= max_columns:
        return CapacityAdjustment(
            AdjustmentKind.COLUMNS_ADJUSTED, needed_columns, rows, image_count
        )

    return CapacityAdjustment(
        AdjustmentKind.CAPACITY_EXCEEDED, max_columns, max_rows, image_count
    )


__all__ = ["AdjustmentKind", "CapacityAdjustment", "adjust_grid_capacity"]
