# document_sink.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import Qt, QRectF, QSizeF, QMarginsF
from PySide6.QtGui import QColor, QImage, QPageLayout, QPageSize, QPainter, QPdfWriter, QPen

from cardwizard.config import (
    CUT_GUIDE_GRAY,
    CUT_GUIDE_WIDTH_PT,
    FALLBACK_BORDER_GRAY,
    FALLBACK_BORDER_WIDTH_PT,
    MODEL_UNIT,
)
from cardwizard.utils.unit_converter import to_pixels, to_points

log = logging.getLogger(__name__)


class OutputSinkFailure(RuntimeError):
    """The document could not be opened, paged or written."""


@dataclass(frozen=True)
class RectStyle:
    gray: int
    width_pt: float
    dashed: bool = False

    @property
    def color(self) -> QColor:
        return QColor(self.gray, self.gray, self.gray)


FALLBACK_BORDER = RectStyle(FALLBACK_BORDER_GRAY, FALLBACK_BORDER_WIDTH_PT)
CUT_GUIDE = RectStyle(CUT_GUIDE_GRAY, CUT_GUIDE_WIDTH_PT, dashed=True)


class DocumentSink(ABC):
    """
    Page-oriented drawing target. Coordinates are in model units (mm) with the
    origin at the top-left corner of the page.

    Used as a context manager: leaving the block normally finalizes the
    document, leaving it through an exception only releases resources.
    """

    @property
    @abstractmethod
    def page_count(self) -> int: ...

    @abstractmethod
    def add_page(self) -> None: ...

    @abstractmethod
    def draw_image_at(self, image: QImage, x: float, y: float, w: float, h: float) -> None: ...

    @abstractmethod
    def draw_rect_at(self, x: float, y: float, w: float, h: float, style: RectStyle) -> None: ...

    @abstractmethod
    def finalize(self) -> None: ...

    def abort(self) -> None:
        """Release resources after a failure. Output is not guaranteed."""

    def __enter__(self) -> "DocumentSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.finalize()
        else:
            self.abort()
        return False


class PdfWriterSink(DocumentSink):
    """DocumentSink backed by QPdfWriter; one painter for the whole document."""

    def __init__(
        self,
        path: Union[str, Path],
        page_width: float,
        page_height: float,
        *,
        dpi: int = 300,
        unit: str = MODEL_UNIT,
        title: str = "",
        creator: str = "",
    ) -> None:
        self.path = Path(path)
        self.unit = unit
        self.dpi = int(dpi)
        self.page_width = page_width
        self.page_height = page_height

        if not self.path.parent.is_dir():
            raise OutputSinkFailure(f"Output directory does not exist: {self.path.parent}")

        self._writer = QPdfWriter(str(self.path))
        page_size_pt = QSizeF(to_points(page_width, unit), to_points(page_height, unit))
        self._writer.setPageSize(QPageSize(page_size_pt, QPageSize.Point))
        self._writer.setPageMargins(QMarginsF(0, 0, 0, 0), QPageLayout.Point)
        self._writer.setResolution(self.dpi)
        if title:
            self._writer.setTitle(title)
        if creator:
            self._writer.setCreator(creator)

        self._painter: Optional[QPainter] = None
        self._pages = 0
        self._finalized = False

    # ------------------------------------------------------------------
    # unit helpers
    # ------------------------------------------------------------------
    def _px(self, value: float) -> float:
        return to_pixels(value, self.unit, self.dpi)

    def _rect(self, x: float, y: float, w: float, h: float) -> QRectF:
        return QRectF(self._px(x), self._px(y), self._px(w), self._px(h))

    def _active_painter(self) -> QPainter:
        if self._painter is None:
            raise OutputSinkFailure("add_page() must be called before drawing")
        return self._painter

    # ------------------------------------------------------------------
    # DocumentSink
    # ------------------------------------------------------------------
    @property
    def page_count(self) -> int:
        return self._pages

    def add_page(self) -> None:
        if self._finalized:
            raise OutputSinkFailure(f"{self.path} is already finalized")
        if self._painter is None:
            # QPdfWriter starts on its first page; the file is opened here.
            painter = QPainter()
            if not painter.begin(self._writer):
                raise OutputSinkFailure(f"Could not open {self.path} for writing")
            painter.setRenderHint(QPainter.Antialiasing, True)
            painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
            self._painter = painter
        elif not self._writer.newPage():
            raise OutputSinkFailure(f"Could not start page {self._pages + 1} in {self.path}")
        self._pages += 1

    def draw_image_at(self, image: QImage, x: float, y: float, w: float, h: float) -> None:
        self._active_painter().drawImage(self._rect(x, y, w, h), image)

    def draw_rect_at(self, x: float, y: float, w: float, h: float, style: RectStyle) -> None:
        painter = self._active_painter()
        pen = QPen(style.color)
        pen.setWidthF(to_pixels(style.width_pt, "pt", self.dpi))
        pen.setStyle(Qt.DashLine if style.dashed else Qt.SolidLine)
        painter.save()
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(self._rect(x, y, w, h))
        painter.restore()

    def finalize(self) -> None:
        if self._finalized:
            return
        self._finalized = True
        if self._painter is None:
            # an empty export leaves no file behind at the output path
            self.path.unlink(missing_ok=True)
            log.info("No pages were added; %s was not written", self.path)
            return
        painter, self._painter = self._painter, None
        if not painter.end():
            raise OutputSinkFailure(f"Failed to write {self.path}")
        if not self.path.is_file():
            raise OutputSinkFailure(f"{self.path} was not created")

    def abort(self) -> None:
        self._finalized = True
        if self._painter is not None:
            painter, self._painter = self._painter, None
            painter.end()
