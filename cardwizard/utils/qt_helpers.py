# cardwizard/utils/qt_helpers.py
from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QColor, QGuiApplication, QImage


def ensure_gui_application(argv: Optional[Sequence[str]] = None) -> QGuiApplication:
    """
    Return the running Qt application, creating a QGuiApplication if needed.
    Falls back to the offscreen platform when there is no display.
    """
    app = QGuiApplication.instance()
    if app is not None:
        return app
    if sys.platform.startswith("linux") and not (
        os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")
    ):
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    return QGuiApplication(list(argv) if argv is not None else sys.argv[:1])


def image_to_png_bytes(image: QImage) -> bytes:
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.WriteOnly)
    image.save(buffer, "PNG")
    buffer.close()
    return bytes(data)


def solid_png(width: int, height: int, color: str = "#336699") -> bytes:
    """Small solid-colour PNG, handy for previews and fixtures."""
    image = QImage(width, height, QImage.Format_ARGB32)
    image.fill(QColor(color))
    return image_to_png_bytes(image)
