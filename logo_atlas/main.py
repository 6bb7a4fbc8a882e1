# main.py
"""
Entry point and main application window for Logo Atlas Maker.
"""
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QStandardPaths
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from utils.desktop import open_with_default_app

from . import config
from .controllers import AtlasSession
from .geometry import GridSettings
from .logs import configure_logging, default_log_file, install_excepthook
from .presenter import AtlasPresenter
from .widgets.control_panel import ControlPanel, GridDefaults
from .widgets.preview import PreviewLabel

logger = logging.getLogger("logo_atlas.window")


class MainWindow(QMainWindow):
    def __init__(self, session: Optional[AtlasSession] = None):
        super().__init__()
        self.setWindowTitle(config.WINDOW_TITLE)
        self.resize(config.WINDOW_WIDTH, config.WINDOW_HEIGHT)

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(8, 6, 8, 6)
        main_layout.setSpacing(6)

        if session is None:
            session = AtlasSession(GridSettings(), opener=open_with_default_app)
        self.session = session

        settings = session.settings
        self.control_panel = ControlPanel(
            grid_defaults=GridDefaults(
                columns=settings.columns,
                rows=settings.rows,
                padding=settings.padding,
                atlas_size=settings.atlas_size,
            ),
            parent=self,
        )
        main_layout.addWidget(self.control_panel)

        self.status_label = QLabel()
        self.status_label.setToolTip(
            "Status messages about selection, generation and save operations."
        )
        main_layout.addWidget(self.status_label)

        self.preview_label = PreviewLabel()
        main_layout.addWidget(self.preview_label, stretch=1)

        self.presenter = AtlasPresenter(self, session)
        self._bind_control_panel()
        self._create_shortcuts()

        self.presenter.refresh_preview()
        logger.info("MainWindow initialized.")

    def _bind_control_panel(self) -> None:
        panel = self.control_panel

        self.columns_spin = panel.columns_spin
        self.rows_spin = panel.rows_spin
        self.padding_spin = panel.padding_spin
        self.resolution_combo = panel.resolution_combo
        self.open_saved_button = panel.open_saved_button

        panel.selectImagesRequested.connect(self.presenter.select_images)
        panel.gridChanged.connect(self.presenter.on_grid_changed)
        panel.outputSettingsChanged.connect(self.presenter.on_output_settings_changed)
        panel.generateRequested.connect(self.presenter.generate)
        panel.openSavedRequested.connect(self.presenter.open_saved)
        self.preview_label.resized.connect(lambda _: self.presenter.on_preview_resized())

    def _create_shortcuts(self):
        QShortcut(QKeySequence("Ctrl+O"), self, activated=self.presenter.select_images)
        QShortcut(QKeySequence("Ctrl+G"), self, activated=self.presenter.generate)

    # --- view interface used by AtlasPresenter ---------------------------
    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def show_message(self, title: str, text: str, level: str = "info") -> None:
        if level == "error":
            QMessageBox.critical(self, title, text)
        elif level == "warning":
            QMessageBox.warning(self, title, text)
        else:
            QMessageBox.information(self, title, text)

    def _pictures_dir(self) -> str:
        return QStandardPaths.writableLocation(QStandardPaths.PicturesLocation) or ""

    def ask_open_paths(self) -> List[str]:
        pattern = " ".join(f"*.{ext}" for ext in config.SUPPORTED_IMAGE_FORMATS)
        files, _ = QFileDialog.getOpenFileNames(
            self,
            "Select PNGs",
            self._pictures_dir(),
            f"PNG Files ({pattern})",
        )
        return files

    def ask_save_path(self, default_name: str) -> Optional[str]:
        extra = {}
        if sys.platform.startswith("win"):
            extra["options"] = QFileDialog.Option.DontUseNativeDialog
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Atlas",
            str(Path(self._pictures_dir()) / default_name),
            "PNG Files (*.png)",
            **extra,
        )
        return path or None

    def closeEvent(self, event):
        self.session.close()
        super().closeEvent(event)


def main() -> int:
    log = configure_logging(default_log_file())
    install_excepthook(log)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setStyle("Fusion")
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
