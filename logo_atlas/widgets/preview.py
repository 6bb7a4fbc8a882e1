"""Preview area showing the atlas layout or the last generated atlas."""

from typing import Optional

from PIL import Image
from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QFrame, QLabel, QSizePolicy


def pil_to_qimage(image: Image.Image) -> QImage:
    """Convert a Pillow image to a detached ``QImage``."""
    rgba = image.convert("RGBA") if image.mode != "RGBA" else image
    data = rgba.tobytes("raw", "RGBA")
    qimage = QImage(data, rgba.width, rgba.height, rgba.width * 4, QImage.Format_RGBA8888)
    # copy() detaches from the Python buffer, which is freed after return
    return qimage.copy()


class PreviewLabel(QLabel):
    """QLabel that keeps its image scaled to fit and reports resizes."""

    resized = Signal(QSize)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.original_pixmap: Optional[QPixmap] = None
        self.setAlignment(Qt.AlignCenter)
        self.setFrameShape(QFrame.Box)
        self.setMinimumSize(200, 150)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setToolTip(
            "Preview of the atlas layout. Thumbnails of selected images are shown in their grid cells."
        )

    def render_size(self) -> QSize:
        """Pixel size available for a preview image inside the frame."""
        inner = self.contentsRect().size()
        return QSize(max(1, inner.width()), max(1, inner.height()))

    def set_image(self, image: Image.Image) -> None:
        self.original_pixmap = QPixmap.fromImage(pil_to_qimage(image))
        self._update_pixmap()

    def _update_pixmap(self) -> None:
        if self.original_pixmap is None:
            return
        scaled = self.original_pixmap.scaled(
            self.render_size(), Qt.KeepAspectRatio, Qt.SmoothTransformation
        )
        super().setPixmap(scaled)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._update_pixmap()
        self.resized.emit(event.size())

    def sizeHint(self) -> QSize:
        return QSize(640, 480)
