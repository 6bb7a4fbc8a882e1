"""Decoding of selected PNG files with Pillow."""

from pathlib import Path
from typing import Iterable, Union
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from .validation import validate_image_path

logger = logging.getLogger("logo_atlas.loader")

VALID_EXTENSIONS = {'.png'}


class ImageLoadError(Exception):
    """Raised when a selected image cannot be read or decoded."""

    title = "Load Failed"

    def __init__(self, message: str, paths: Iterable[Union[str, Path]] = ()):
        super().__init__(message)
        self.paths = [Path(p) for p in paths]


def load_image(image_path: Union[str, Path]) -> Image.Image:
    """
    Decode *image_path* into a fully loaded RGBA image.

    The file handle is released before returning so the cache never keeps
    files open.

    Raises:
        ImageLoadError: If the path is invalid or the data cannot be decoded
    """
    try:
        safe_path = validate_image_path(image_path, VALID_EXTENSIONS)
    except ValueError as e:
        raise ImageLoadError(f"Cannot load {image_path}: {e}", [image_path]) from e

    try:
        with Image.open(safe_path) as img:
            img = ImageOps.exif_transpose(img)
            if img.width <= 0 or img.height <= 0:
                raise ImageLoadError(f"Image has no pixels: {safe_path}", [safe_path])
            rgba = img.convert("RGBA")
            rgba.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.error("Error decoding image %s: %s", safe_path, e)
        raise ImageLoadError(f"Failed to decode {safe_path.name}: {e}", [safe_path]) from e

    return rgba


__all__ = ["ImageLoadError", "VALID_EXTENSIONS", "load_image"]
