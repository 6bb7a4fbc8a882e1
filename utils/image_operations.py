"""Reusable Pillow operations used by the atlas compositor.

Functions are intentionally small and pure to keep them easy to test.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PIL import Image

logger = logging.getLogger("logo_atlas.image_operations")

ColorValue = tuple[int, int, int, int]


def ensure_rgba(image: Image.Image) -> Image.Image:
    """Return ``image`` in RGBA mode, converting only when necessary."""
    if image.mode == "RGBA":
        return image
    return image.convert("RGBA")


def new_canvas(size: tuple[int, int], background: ColorValue = (0, 0, 0, 0)) -> Image.Image:
    """Allocate an RGBA canvas filled with ``background``."""
    return Image.new("RGBA", size, background)


def resize_image(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Resize ``image`` to exactly ``size`` with Lanczos resampling.

    Aspect handling is the caller's job; the target size is expected to be
    an aspect-fit rectangle already.
    """
    if image.size == size:
        return image.copy()
    return image.resize(size, Image.Resampling.LANCZOS)


def draw_image(canvas: Image.Image, image: Image.Image, box: tuple[int, int, int, int]) -> None:
    """Scale ``image`` into ``box`` (x, y, width, height) and blend it onto ``canvas``.

    Parts of the box outside the canvas are clipped.
    """
    x, y, width, height = box
    scaled = resize_image(ensure_rgba(image), (width, height))
    if x < 0 or y < 0:
        scaled = scaled.crop((max(0, -x), max(0, -y), width, height))
        x, y = max(0, x), max(0, y)
    canvas.alpha_composite(scaled, dest=(x, y))


def save_png(image: Image.Image, path: str | Path, *, compress_level: int = 6) -> Path:
    """Encode ``image`` as PNG at ``path``."""
    target = Path(path)
    save_params: dict[str, Any] = {
        "format": "PNG",
        "compress_level": compress_level,
    }
    image.save(str(target), **save_params)
    logger.debug("Encoded %sx%s PNG to %s", image.width, image.height, target)
    return target


__all__ = [
    "draw_image",
    "ensure_rgba",
    "new_canvas",
    "resize_image",
    "save_png",
]
