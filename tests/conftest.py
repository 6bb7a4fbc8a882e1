"""Shared fixtures for atlas tests."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Tuple

import pytest
from PIL import Image

PALETTE = [
    (255, 0, 0, 255),
    (0, 255, 0, 255),
    (0, 0, 255, 255),
    (255, 255, 0, 255),
    (255, 0, 255, 255),
    (0, 255, 255, 255),
]


def assert_color_close(actual, expected, tolerance=8):
    assert len(actual) == len(expected)
    for component_actual, component_expected in zip(actual, expected, strict=True):
        assert abs(component_actual - component_expected) <= tolerance


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., Path]:
    """Write a solid-colour PNG and return its path."""

    counter = {"n": 0}

    def factory(
        size: Tuple[int, int] = (40, 20),
        color: Tuple[int, int, int, int] = (255, 0, 0, 255),
        name: str | None = None,
    ) -> Path:
        counter["n"] += 1
        path = tmp_path / (name or f"logo_{counter['n']:02d}.png")
        Image.new("RGBA", size, color).save(path)
        return path

    return factory


@pytest.fixture
def make_pngs(make_png) -> Callable[[int], List[Path]]:
    """Write *count* small PNGs cycling through :data:`PALETTE`."""

    def factory(count: int, size: Tuple[int, int] = (8, 4)) -> List[Path]:
        return [make_png(size, PALETTE[i % len(PALETTE)]) for i in range(count)]

    return factory


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers added by ``configure_logging`` so each test starts clean."""
    yield
    logger = logging.getLogger("logo_atlas")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
