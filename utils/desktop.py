"""Host desktop integration."""

from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices


def open_with_default_app(path: Path) -> bool:
    """Open *path* with the handler the OS associates with its type.

    Returns ``False`` when Qt could not hand the file to a handler.
    """
    return QDesktopServices.openUrl(QUrl.fromLocalFile(str(path)))
