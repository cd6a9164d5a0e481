from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from cardwizard.config import DEFAULT_BACK_STYLE, DEFAULT_FRONT_STYLE


class Side(str, Enum):
    FRONT = "front"
    BACK = "back"

    @property
    def default_style(self) -> str:
        return DEFAULT_FRONT_STYLE if self is Side.FRONT else DEFAULT_BACK_STYLE

    @classmethod
    def parse(cls, value: Union[str, "Side"]) -> "Side":
        if isinstance(value, Side):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown card side {value!r}; expected 'front' or 'back'") from exc


class FieldKind(Enum):
    TEXT = "text"
    NUMBER = "number"
    IMAGE = "image"


@dataclass(frozen=True)
class FieldDefinition:
    """A column of the deck's data table. ``type`` is ``"text"`` or ``"image"``."""
    name: str
    type: str = "text"

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict) -> "FieldDefinition":
        return cls(name=data["name"], type=data.get("type") or "text")


@dataclass(frozen=True)
class FieldValue:
    """Tagged value stored in a card's data bag."""
    kind: FieldKind
    value: Union[str, float]

    @property
    def is_image(self) -> bool:
        return self.kind is FieldKind.IMAGE

    @property
    def text(self) -> str:
        if self.kind is FieldKind.NUMBER and float(self.value).is_integer():
            return str(int(self.value))
        return str(self.value)

    @classmethod
    def coerce(cls, raw: Any, field_type: Optional[str] = None) -> "FieldValue":
        if isinstance(raw, FieldValue):
            return raw
        if raw is None:
            return cls(FieldKind.TEXT, "")
        # bool is an int subclass; keep it out of NUMBER
        if isinstance(raw, bool):
            return cls(FieldKind.TEXT, "true" if raw else "false")
        if isinstance(raw, (int, float)):
            return cls(FieldKind.NUMBER, float(raw))
        if field_type == FieldKind.IMAGE.value:
            return cls(FieldKind.IMAGE, str(raw))
        return cls(FieldKind.TEXT, str(raw))

    def to_raw(self) -> Union[str, int, float]:
        if self.kind is FieldKind.NUMBER and float(self.value).is_integer():
            return int(self.value)
        return self.value


@dataclass
class Card:
    id: str
    data: Dict[str, FieldValue] = field(default_factory=dict)
    count: int = 1
    front_style_id: str = ""
    back_style_id: str = ""

    @property
    def copies(self) -> int:
        """Number of physical copies; counts below one still print once."""
        try:
            return max(1, int(self.count))
        except (TypeError, ValueError):
            return 1

    def style_for(self, side: Union[str, Side]) -> str:
        side = Side.parse(side)
        style_id = self.front_style_id if side is Side.FRONT else self.back_style_id
        return style_id or side.default_style

    def field_value(self, name: str) -> Optional[FieldValue]:
        return self.data.get(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "data": {k: v.to_raw() for k, v in self.data.items()},
            "count": self.count,
            "frontStyleId": self.front_style_id,
            "backStyleId": self.back_style_id,
        }

    @classmethod
    def from_dict(cls, data: dict, field_types: Optional[Dict[str, str]] = None) -> "Card":
        field_types = field_types or {}
        values = {
            key: FieldValue.coerce(raw, field_types.get(key))
            for key, raw in (data.get("data") or {}).items()
        }
        count = data.get("count", 1)
        return cls(
            id=str(data.get("id", "")),
            data=values,
            count=int(count) if count is not None else 1,
            front_style_id=data.get("frontStyleId") or "",
            back_style_id=data.get("backStyleId") or "",
        )
