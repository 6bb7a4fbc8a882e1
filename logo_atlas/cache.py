"""Decoded image cache owned by an atlas session.

Images are decoded once when the user selects them and kept in selection
order so the preview can redraw on every settings change without touching
the file system.  A new selection replaces the whole cache: previous images
are closed before the new ones are decoded.  Entries that failed to decode
are kept as ``None`` so indices stay aligned with the selection.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from PIL import Image

from utils.image_loader import ImageLoadError, load_image

logger = logging.getLogger("logo_atlas.cache")

Loader = Callable[[Union[str, Path]], Image.Image]


class ImageCache:
    """Selection-ordered cache of decoded images."""

    def __init__(self, loader: Loader = load_image) -> None:
        self._loader = loader
        self._paths: List[Path] = []
        self._images: List[Optional[Image.Image]] = []
        self._errors: List[ImageLoadError] = []

    def __len__(self) -> int:
        return len(self._images)

    @property
    def paths(self) -> Tuple[Path, ...]:
        return tuple(self._paths)

    @property
    def errors(self) -> Tuple[ImageLoadError, ...]:
        """Decode failures from the most recent :meth:`replace`."""
        return tuple(self._errors)

    def replace(self, paths: Iterable[Union[str, Path]]) -> Sequence[Optional[Image.Image]]:
        """Release the current entries and decode *paths* in order."""
        self.clear()
        for path in paths:
            try:
                image = self._loader(path)
            except ImageLoadError as exc:
                logger.warning("Skipping image that failed to decode: %s", exc)
                self._errors.append(exc)
                image = None
            # path and image go in together so indices stay aligned
            self._paths.append(Path(path))
            self._images.append(image)
        logger.info(
            "Cached %d of %d selected images", len(self._images) - len(self._errors), len(self._images)
        )
        return tuple(self._images)

    def get(self, index: int) -> Optional[Image.Image]:
        """Return the decoded image at *index*, or ``None`` if absent or failed."""
        if 0 <= index < len(self._images):
            return self._images[index]
        return None

    def images(self) -> Tuple[Optional[Image.Image], ...]:
        return tuple(self._images)

    def sizes(self) -> List[Optional[Tuple[int, int]]]:
        """Pixel sizes in selection order, ``None`` for failed entries."""
        return [img.size if img is not None else None for img in self._images]

    def clear(self) -> None:
        """Close and drop all cached images."""
        for image in self._images:
            if image is not None:
                image.close()
        self._paths.clear()
        self._images.clear()
        self._errors.clear()


__all__ = ["ImageCache", "Loader"]
