"""Session controller for atlas generation.

:class:`AtlasSession` owns everything that lives for the duration of one
application run: the current selection, the decoded image cache, the grid
settings and the path of the last saved atlas.  It has no Qt dependency so the
same workflow can be driven by the window presenter, the command line tool or
tests.  The only host integration, opening a file with the system viewer, is
injected as a callable.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from PIL import Image

from utils.image_loader import ImageLoadError, load_image
from utils.image_operations import save_png
from utils.validation import validate_output_path

from .. import config
from ..cache import ImageCache, Loader
from ..capacity import AdjustmentKind, CapacityAdjustment, adjust_grid_capacity
from ..compositor import compose_atlas, render_preview
from ..geometry import GridGeometry, GridSettings, geometry_for

logger = logging.getLogger("logo_atlas.session")

Opener = Callable[[Path], bool]


class NoImagesSelectedError(RuntimeError):
    """Raised when generation is requested with an empty selection."""

    title = "No Images"


class SavedFileMissingError(RuntimeError):
    """Raised when there is no saved atlas to open."""

    title = "Open Saved"


class ExternalOpenError(RuntimeError):
    """Raised when the host refuses to open the saved atlas."""

    title = "Open Saved"


@dataclass(frozen=True)
class GenerationResult:
    """A freshly composed atlas and the settings it was built with."""

    atlas: Image.Image
    settings: GridSettings
    geometry: GridGeometry
    selected_count: int
    used_count: int

    @property
    def truncated(self) -> bool:
        return self.selected_count > self.used_count

    @property
    def truncation_message(self) -> str:
        if not self.truncated:
            return ""
        capacity = self.settings.capacity
        return (
            f"Selected {self.selected_count} images but the atlas grid capacity is "
            f"{capacity}. Only the first {capacity} images will be used."
        )

    @property
    def summary(self) -> str:
        s = self.settings
        return (
            f"Generated atlas {s.atlas_size}x{s.atlas_size} using {self.used_count} images "
            f"({s.columns}x{s.rows} grid) padding={s.padding}px"
        )


class AtlasSession:
    """Hold selection, cache and settings for one atlas editing session."""

    def __init__(
        self,
        settings: Optional[GridSettings] = None,
        *,
        loader: Loader = load_image,
        opener: Optional[Opener] = None,
    ) -> None:
        self._settings = settings or GridSettings()
        self._loader = loader
        self._opener = opener
        self._cache = ImageCache(loader)
        self._selection: List[Path] = []
        self._last_saved_path: Optional[Path] = None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def settings(self) -> GridSettings:
        return self._settings

    @property
    def selection(self) -> Tuple[Path, ...]:
        return tuple(self._selection)

    @property
    def image_count(self) -> int:
        return len(self._selection)

    @property
    def cache(self) -> ImageCache:
        return self._cache

    @property
    def last_saved_path(self) -> Optional[Path]:
        return self._last_saved_path

    @property
    def can_open_saved(self) -> bool:
        return self._last_saved_path is not None and self._last_saved_path.is_file()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def select_images(self, paths: Sequence[Union[str, Path]]) -> CapacityAdjustment:
        """Replace the selection, decode it into the cache and fit the grid.

        Decode failures are recorded on :attr:`cache` (``cache.errors``) and do
        not stop the selection.
        """
        self._selection = [Path(p) for p in paths]
        self._cache.replace(self._selection)
        logger.info("Selected %d images", len(self._selection))
        return self.ensure_capacity()

    def ensure_capacity(self) -> CapacityAdjustment:
        """Grow the configured grid so it can hold the current selection."""
        adjustment = adjust_grid_capacity(
            len(self._selection), self._settings.columns, self._settings.rows
        )
        if adjustment.changed:
            self._settings = dataclasses.replace(
                self._settings, columns=adjustment.columns, rows=adjustment.rows
            )
            logger.info("%s", adjustment.message)
        return adjustment

    def update_settings(self, **changes: int) -> CapacityAdjustment:
        """Apply user changes to the grid settings.

        Column or row changes re-run the capacity check, which may override
        the value the user just entered.  Padding and resolution changes do
        not.
        """
        new_settings = dataclasses.replace(self._settings, **changes)
        grid_changed = (
            new_settings.columns != self._settings.columns
            or new_settings.rows != self._settings.rows
        )
        self._settings = new_settings
        if grid_changed:
            return self.ensure_capacity()
        return CapacityAdjustment(
            AdjustmentKind.NONE, new_settings.columns, new_settings.rows, len(self._selection)
        )

    def render_preview(self, size: Tuple[int, int]) -> Image.Image:
        """Draw the preview from cached images only."""
        s = self._settings
        return render_preview(
            self._cache.images(), s.columns, s.rows, s.atlas_size, s.padding, size
        )

    def generate(self) -> GenerationResult:
        """Compose the atlas for the current selection and settings.

        The grid is used as configured; the capacity check is not re-run, so
        a selection larger than the grid is truncated to its capacity.

        Raises:
            NoImagesSelectedError: The selection is empty.
            InvalidPaddingError, InvalidCellSizeError: The grid leaves no room.
            ImageLoadError: One or more of the used images cannot be decoded.
        """
        if not self._selection:
            raise NoImagesSelectedError("No images selected")

        settings = self._settings
        geometry = geometry_for(settings)
        to_use = self._selection[: settings.capacity]

        images: List[Image.Image] = []
        failed: List[ImageLoadError] = []
        for path in to_use:
            try:
                images.append(self._loader(path))
            except ImageLoadError as exc:
                failed.append(exc)
        try:
            if failed:
                names = ", ".join(p.name for exc in failed for p in exc.paths)
                raise ImageLoadError(
                    f"Could not load {len(failed)} image(s): {names}",
                    [p for exc in failed for p in exc.paths],
                )
            atlas = compose_atlas(images, geometry)
        finally:
            for image in images:
                image.close()

        result = GenerationResult(
            atlas=atlas,
            settings=settings,
            geometry=geometry,
            selected_count=len(self._selection),
            used_count=len(images),
        )
        logger.info("%s", result.summary)
        return result

    def save(self, atlas: Image.Image, path: Union[str, Path]) -> Path:
        """Encode *atlas* as PNG at *path* and remember it for :meth:`open_saved`.

        Raises:
            ValueError: The path is a URL, its directory is missing, or its
                extension is not ``.png``.
        """
        target = validate_output_path(
            path, {config.OUTPUT_FORMAT}, default_ext=config.OUTPUT_FORMAT
        )
        save_png(atlas, target, compress_level=config.PNG_COMPRESS_LEVEL)
        self._last_saved_path = target
        logger.info("Saved atlas to %s", target)
        return target

    def open_saved(self) -> Path:
        """Open the last saved atlas with the host's default viewer.

        Raises:
            SavedFileMissingError: Nothing was saved or the file is gone.
            ExternalOpenError: No opener is configured or it failed.
        """
        path = self._last_saved_path
        if path is None:
            raise SavedFileMissingError("No saved atlas to open.")
        if not path.is_file():
            raise SavedFileMissingError("Saved atlas file not found.")
        if self._opener is None:
            raise ExternalOpenError("No external viewer is configured.")
        try:
            opened = self._opener(path)
        except OSError as exc:
            raise ExternalOpenError(f"Failed to open file: {exc}") from exc
        if not opened:
            raise ExternalOpenError(f"Failed to open file: {path}")
        logger.info("Opened %s with the default viewer", path)
        return path

    def close(self) -> None:
        """Release cached images."""
        self._cache.clear()
        self._selection.clear()
