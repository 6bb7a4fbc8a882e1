"""
AtlasPresenter: Handles application logic for the main window, decoupled from widgets.
"""
import logging
from typing import Optional

from PIL import Image

from utils.image_loader import ImageLoadError

from . import config
from .capacity import AdjustmentKind, CapacityAdjustment
from .controllers import (
    AtlasSession,
    ExternalOpenError,
    GenerationResult,
    NoImagesSelectedError,
    SavedFileMissingError,
)
from .geometry import GeometryError


class AtlasPresenter:
    def __init__(self, view, session: AtlasSession):
        self.view = view
        self.session = session
        self.logger = logging.getLogger("logo_atlas.presenter")
        self._showing_atlas = False

    def read_atlas_size(self) -> int:
        try:
            return int(self.view.resolution_combo.currentText())
        except ValueError:
            return config.DEFAULT_ATLAS_SIZE

    # --- selection and settings -------------------------------------------
    def select_images(self) -> None:
        paths = self.view.ask_open_paths()
        if not paths:
            return
        adjustment = self.session.select_images(paths)
        self.view.set_status(f"Selected {self.session.image_count} images")

        errors = self.session.cache.errors
        if errors:
            details = "\n".join(str(exc) for exc in errors[:3])
            if len(errors) > 3:
                details += f"\n…{len(errors) - 3} more files could not be loaded."
            self.view.show_message(ImageLoadError.title, details, "warning")

        self._apply_adjustment(adjustment)
        self.refresh_preview()

    def on_grid_changed(self) -> None:
        adjustment = self.session.update_settings(
            columns=self.view.columns_spin.value(),
            rows=self.view.rows_spin.value(),
        )
        self._apply_adjustment(adjustment)
        self.refresh_preview()

    def on_output_settings_changed(self) -> None:
        self.session.update_settings(
            padding=self.view.padding_spin.value(),
            atlas_size=self.read_atlas_size(),
        )
        self.refresh_preview()

    def _apply_adjustment(self, adjustment: CapacityAdjustment) -> None:
        if not adjustment.changed:
            return

        self.view.columns_spin.blockSignals(True)
        self.view.columns_spin.setValue(adjustment.columns)
        self.view.columns_spin.blockSignals(False)

        self.view.rows_spin.blockSignals(True)
        self.view.rows_spin.setValue(adjustment.rows)
        self.view.rows_spin.blockSignals(False)

        level = "warning" if adjustment.kind is AdjustmentKind.CAPACITY_EXCEEDED else "info"
        self.view.show_message(adjustment.title, adjustment.message, level)

    def refresh_preview(self) -> None:
        size = self.view.preview_label.render_size()
        try:
            preview = self.session.render_preview((size.width(), size.height()))
        except (OSError, ValueError) as exc:
            # advisory only; keep the previous preview
            self.logger.warning("Preview rendering failed: %s", exc)
            return
        self.view.preview_label.set_image(preview)
        self._showing_atlas = False

    def on_preview_resized(self) -> None:
        # a generated atlas is only rescaled by the label; the layout preview is redrawn
        if not self._showing_atlas:
            self.refresh_preview()

    # --- generate / save / open -------------------------------------------
    def generate(self) -> Optional[GenerationResult]:
        try:
            result = self.session.generate()
        except NoImagesSelectedError as exc:
            self.view.show_message(exc.title, str(exc), "info")
            return None
        except (GeometryError, ImageLoadError) as exc:
            self.logger.error("Atlas generation failed: %s", exc)
            self.view.show_message(exc.title, str(exc), "error")
            return None

        if result.truncated:
            self.view.show_message("Grid Capacity", result.truncation_message, "info")

        self.view.preview_label.set_image(result.atlas)
        self._showing_atlas = True
        self.view.set_status(result.summary)

        path = self.view.ask_save_path(config.DEFAULT_OUTPUT_NAME)
        if path:
            self.save_atlas(result.atlas, path)
        return result

    def save_atlas(self, atlas: Image.Image, path: str) -> bool:
        try:
            saved = self.session.save(atlas, path)
        except ValueError as exc:
            self.view.show_message("Invalid save location", f"Cannot save atlas: {exc}", "warning")
            return False
        except OSError as exc:
            self.logger.error("Save failed: %s", exc)
            self.view.show_message("Error", f"Could not save atlas: {exc}", "error")
            return False
        self.view.set_status(f"Saved atlas to {saved.name}")
        self.view.open_saved_button.setEnabled(True)
        return True

    def open_saved(self) -> None:
        try:
            self.session.open_saved()
        except SavedFileMissingError as exc:
            self.view.show_message(exc.title, str(exc), "info")
            self.view.open_saved_button.setEnabled(False)
        except ExternalOpenError as exc:
            self.logger.error("%s", exc)
            self.view.show_message(exc.title, str(exc), "error")
