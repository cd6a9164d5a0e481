from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Union

from cardwizard.config import DEFAULT_PAPER, PNG_DATA_URL_PREFIX
from cardwizard.models.card import Card, FieldDefinition, Side
from cardwizard.models.layout import InvalidDimension


class DeckFormatError(ValueError):
    """Raised when a deck document cannot be turned into a Deck."""


@dataclass(frozen=True)
class CardSize:
    width: float
    height: float

    def __post_init__(self):
        if not (self.width > 0 and self.height > 0):
            raise InvalidDimension(
                f"Card dimensions must be positive, got {self.width} x {self.height}"
            )


@dataclass(frozen=True)
class RenderedCardImage:
    """
    One pre-rendered face produced by the layout renderer.

    ``image`` is either the PNG bytes themselves or a base64 string, with or
    without the ``data:image/png;base64,`` prefix the renderer emits.
    """
    style_id: str
    side: Side
    image: Union[bytes, str]

    @property
    def key(self) -> str:
        return f"{self.style_id}-{self.side.value}"

    def payload(self) -> bytes:
        """Raw image bytes. Raises ValueError if the base64 text is malformed."""
        if isinstance(self.image, (bytes, bytearray)):
            return bytes(self.image)
        text = self.image
        if text.startswith(PNG_DATA_URL_PREFIX):
            text = text[len(PNG_DATA_URL_PREFIX):]
        try:
            return base64.b64decode(text, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Rendered image {self.key!r} is not valid base64") from exc

    def to_dict(self) -> Dict[str, str]:
        image = self.image
        if isinstance(image, (bytes, bytearray)):
            image = PNG_DATA_URL_PREFIX + base64.b64encode(image).decode("ascii")
        return {"styleId": self.style_id, "side": self.side.value, "image": image}

    @classmethod
    def from_dict(cls, data: dict) -> "RenderedCardImage":
        return cls(
            style_id=data.get("styleId") or "",
            side=Side.parse(data.get("side", "")),
            image=data.get("image") or "",
        )


@dataclass
class Deck:
    size: CardSize
    cards: List[Card] = field(default_factory=list)
    paper_size: str = DEFAULT_PAPER
    draw_cut_guides: bool = False
    rendered_cards: List[RenderedCardImage] = field(default_factory=list)
    fields: List[FieldDefinition] = field(default_factory=list)
    id: str = ""
    name: str = ""
    default_front_style_id: str = ""
    default_back_style_id: str = ""

    @property
    def total_cards(self) -> int:
        return sum(card.copies for card in self.cards)

    def expanded_cards(self) -> Iterator[Card]:
        """Flatten cards by repeat count, preserving deck order."""
        for card in self.cards:
            for _ in range(card.copies):
                yield card

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "width": self.size.width,
            "height": self.size.height,
            "cards": [c.to_dict() for c in self.cards],
            "fields": [f.to_dict() for f in self.fields],
            "defaultFrontStyleId": self.default_front_style_id,
            "defaultBackStyleId": self.default_back_style_id,
            "paperSize": self.paper_size,
            "drawCutGuides": self.draw_cut_guides,
            "renderedCards": [r.to_dict() for r in self.rendered_cards],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Deck":
        try:
            fields = [FieldDefinition.from_dict(f) for f in data.get("fields") or []]
            field_types = {f.name: f.type for f in fields}
            return cls(
                id=str(data.get("id", "")),
                name=str(data.get("name", "")),
                size=CardSize(float(data["width"]), float(data["height"])),
                cards=[Card.from_dict(c, field_types) for c in data.get("cards") or []],
                fields=fields,
                paper_size=data.get("paperSize") or DEFAULT_PAPER,
                draw_cut_guides=bool(data.get("drawCutGuides", False)),
                rendered_cards=[
                    RenderedCardImage.from_dict(r) for r in data.get("renderedCards") or []
                ],
                default_front_style_id=data.get("defaultFrontStyleId") or "",
                default_back_style_id=data.get("defaultBackStyleId") or "",
            )
        except InvalidDimension:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise DeckFormatError(f"Malformed deck document: {exc}") from exc
