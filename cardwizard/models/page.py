# models/page.py
from dataclasses import dataclass
from typing import Tuple

from cardwizard.models.card import Card, Side


@dataclass(frozen=True)
class CellPlacement:
    slot: int          # position within the batch (row-major, front order)
    row: int
    column: int        # physical column on this page (mirrored on backs)
    x: float
    y: float
    width: float
    height: float
    style_id: str
    card: Card


@dataclass(frozen=True)
class Page:
    index: int         # absolute page index in the document
    batch: int
    side: Side
    placements: Tuple[CellPlacement, ...]

    @property
    def is_front(self) -> bool:
        return self.side is Side.FRONT

    def placement_for_slot(self, slot: int) -> CellPlacement:
        for placement in self.placements:
            if placement.slot == slot:
                return placement
        raise KeyError(slot)
