# models/layout.py
from dataclasses import dataclass
from math import ceil
from typing import Dict, Tuple, Union


class InvalidDimension(ValueError):
    """Raised when a card (or page) dimension is not strictly positive."""


@dataclass(frozen=True)
class Layout:
    """Grid geometry for one printed sheet. All lengths are in millimetres."""
    page_width: float
    page_height: float
    columns: int
    rows: int
    card_width: float
    card_height: float
    spacing: float
    margin_left: float
    margin_top: float
    paper_name: str = "letter"

    @property
    def cards_per_page(self) -> int:
        return self.columns * self.rows

    @property
    def grid_width(self) -> float:
        return self.columns * self.card_width + (self.columns - 1) * self.spacing

    @property
    def grid_height(self) -> float:
        return self.rows * self.card_height + (self.rows - 1) * self.spacing

    def cell_origin(self, row: int, column: int) -> Tuple[float, float]:
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise IndexError(f"cell ({row}, {column}) outside {self.columns}x{self.rows} grid")
        x = self.margin_left + column * (self.card_width + self.spacing)
        y = self.margin_top + row * (self.card_height + self.spacing)
        return x, y

    def cell_rect(self, row: int, column: int) -> Tuple[float, float, float, float]:
        x, y = self.cell_origin(row, column)
        return x, y, self.card_width, self.card_height

    def page_count(self, total_cards: int) -> int:
        """Fronts and backs are always emitted in pairs."""
        if total_cards <= 0:
            return 0
        return 2 * ceil(total_cards / self.cards_per_page)

    def to_dict(self) -> Dict[str, Union[str, int, float]]:
        return {
            "paperSize": self.paper_name,
            "pageWidth": self.page_width,
            "pageHeight": self.page_height,
            "cardsPerRow": self.columns,
            "cardsPerCol": self.rows,
            "cardWidth": self.card_width,
            "cardHeight": self.card_height,
            "spacing": self.spacing,
            "marginLeft": self.margin_left,
            "marginTop": self.margin_top,
        }
