"""Control panel widget for the main Logo Atlas window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QSpinBox,
)

from .. import config


@dataclass(frozen=True)
class GridDefaults:
    """Initial values and ranges for the grid controls."""

    columns: int = config.DEFAULT_COLUMNS
    rows: int = config.DEFAULT_ROWS
    padding: int = config.DEFAULT_PADDING
    atlas_size: int = config.DEFAULT_ATLAS_SIZE
    atlas_sizes: Tuple[int, ...] = config.ATLAS_SIZES


class ControlPanel(QFrame):
    """Toolbar that exposes selection, grid and output controls."""

    selectImagesRequested = Signal()
    generateRequested = Signal()
    openSavedRequested = Signal()
    gridChanged = Signal()
    outputSettingsChanged = Signal()

    def __init__(self, *, grid_defaults: GridDefaults = GridDefaults(), parent=None) -> None:
        super().__init__(parent)
        self._grid_defaults = grid_defaults

        self.setObjectName("controlPanel")
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

        self._build_layout()

    # Public control accessors -------------------------------------------------
    @property
    def columns_spin(self) -> QSpinBox:
        return self._columns_spin

    @property
    def rows_spin(self) -> QSpinBox:
        return self._rows_spin

    @property
    def padding_spin(self) -> QSpinBox:
        return self._padding_spin

    @property
    def resolution_combo(self) -> QComboBox:
        return self._resolution_combo

    @property
    def select_button(self) -> QPushButton:
        return self._select_btn

    @property
    def generate_button(self) -> QPushButton:
        return self._generate_btn

    @property
    def open_saved_button(self) -> QPushButton:
        return self._open_saved_btn

    # Layout builders ---------------------------------------------------------
    def _build_layout(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(8)

        self._select_btn = QPushButton("Select PNGs")
        self._select_btn.setToolTip(
            "Open a dialog to select multiple PNG images to include in the atlas."
        )
        self._select_btn.clicked.connect(self.selectImagesRequested.emit)
        layout.addWidget(self._select_btn)

        self._build_grid_controls(layout)
        self._build_output_controls(layout)

        self._generate_btn = QPushButton("Generate Atlas")
        self._generate_btn.setToolTip(
            "Generate and save the atlas PNG using the current settings and selected images."
        )
        self._generate_btn.clicked.connect(self.generateRequested.emit)
        layout.addWidget(self._generate_btn)

        self._open_saved_btn = QPushButton("Open Saved")
        self._open_saved_btn.setToolTip(
            "Open the last saved atlas file with the default system viewer."
        )
        self._open_saved_btn.setEnabled(False)
        self._open_saved_btn.clicked.connect(self.openSavedRequested.emit)
        layout.addWidget(self._open_saved_btn)

        layout.addStretch()

    def _build_grid_controls(self, layout: QHBoxLayout) -> None:
        defaults = self._grid_defaults

        layout.addWidget(QLabel("Columns:"))
        self._columns_spin = QSpinBox()
        self._columns_spin.setRange(config.MIN_COLUMNS, config.MAX_COLUMNS)
        self._columns_spin.setValue(defaults.columns)
        self._columns_spin.setFixedWidth(60)
        self._columns_spin.setToolTip(
            f"Number of columns in the atlas grid ({config.MIN_COLUMNS} to {config.MAX_COLUMNS})."
        )
        self._columns_spin.valueChanged.connect(lambda _: self.gridChanged.emit())
        layout.addWidget(self._columns_spin)

        layout.addWidget(QLabel("Rows:"))
        self._rows_spin = QSpinBox()
        self._rows_spin.setRange(config.MIN_ROWS, config.MAX_ROWS)
        self._rows_spin.setValue(defaults.rows)
        self._rows_spin.setFixedWidth(60)
        self._rows_spin.setToolTip(
            f"Number of rows in the atlas grid ({config.MIN_ROWS} to {config.MAX_ROWS})."
        )
        self._rows_spin.valueChanged.connect(lambda _: self.gridChanged.emit())
        layout.addWidget(self._rows_spin)

    def _build_output_controls(self, layout: QHBoxLayout) -> None:
        defaults = self._grid_defaults

        layout.addWidget(QLabel("Resolution:"))
        self._resolution_combo = QComboBox()
        self._resolution_combo.addItems([str(size) for size in defaults.atlas_sizes])
        self._resolution_combo.setCurrentText(str(defaults.atlas_size))
        self._resolution_combo.setToolTip(
            "Output atlas resolution in pixels (choose 1024, 2048 or 4096)."
        )
        self._resolution_combo.currentTextChanged.connect(
            lambda _: self.outputSettingsChanged.emit()
        )
        layout.addWidget(self._resolution_combo)

        layout.addWidget(QLabel("Padding:"))
        self._padding_spin = QSpinBox()
        self._padding_spin.setRange(config.MIN_PADDING, config.MAX_PADDING)
        self._padding_spin.setValue(defaults.padding)
        self._padding_spin.setFixedWidth(60)
        self._padding_spin.setToolTip(
            "Padding in pixels placed around and between images in the atlas."
        )
        self._padding_spin.valueChanged.connect(lambda _: self.outputSettingsChanged.emit())
        layout.addWidget(self._padding_spin)


__all__ = [
    "ControlPanel",
    "GridDefaults",
]
