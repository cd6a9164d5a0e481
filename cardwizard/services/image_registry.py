"""Per-export table of decoded card faces.

One entry per ``(style, side)`` the renderer produced, keyed as
``"<style_id>-<side>"``. The registry is built fresh for each export and
passed to the compositor explicitly; nothing here is shared between runs.
Buffers that do not decode are logged and left out, so the matching lookups
miss and the compositor draws its placeholder instead.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Optional, Union

from PySide6.QtCore import QByteArray
from PySide6.QtGui import QImage

from cardwizard.models.card import Side
from cardwizard.models.deck import RenderedCardImage

log = logging.getLogger(__name__)


def image_key(style_id: str, side: Union[str, Side]) -> str:
    return f"{style_id}-{Side.parse(side).value}"


class ImageRegistry:
    """Lookup from (style id, side) to a decoded QImage."""

    def __init__(self) -> None:
        self._images: Dict[str, QImage] = {}

    @classmethod
    def from_rendered(cls, rendered: Iterable[RenderedCardImage]) -> "ImageRegistry":
        registry = cls()
        for item in rendered:
            registry.register(item)
        return registry

    def register(self, rendered: RenderedCardImage) -> bool:
        """Decode and store one rendered face. Returns False when it was skipped."""
        try:
            payload = rendered.payload()
        except ValueError as exc:
            log.warning("Skipping rendered image %s: %s", rendered.key, exc)
            return False

        image = QImage()
        if not payload or not image.loadFromData(QByteArray(payload)) or image.isNull():
            log.warning("Skipping rendered image %s: data is not a decodable image", rendered.key)
            return False

        if rendered.key in self._images:
            log.debug("Replacing rendered image %s", rendered.key)
        self._images[rendered.key] = image
        return True

    def lookup(self, style_id: str, side: Union[str, Side]) -> Optional[QImage]:
        return self._images.get(image_key(style_id, side))

    __call__ = lookup

    def keys(self) -> Iterator[str]:
        return iter(self._images)

    def __contains__(self, key: object) -> bool:
        return key in self._images

    def __len__(self) -> int:
        return len(self._images)
