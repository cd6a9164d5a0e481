"""pagination_manager.py

Turns a Deck and a solved Layout into the ordered list of printable pages.

Terminology
-----------
* **expanded sequence** – the deck's cards repeated ``card.copies`` times, in
  deck order. Rebuilt on every run, never stored on the deck.
* **batch** – up to ``layout.cards_per_page`` consecutive cards from the
  expanded sequence. Every batch produces exactly two pages: its fronts, then
  its backs.
* **mirroring** – on a back page the card from front column ``c`` is placed
  at column ``columns - 1 - c`` (same row), so that a sheet printed duplex and
  flipped on its long edge lines each back up with its front.

Public API
----------
>>> pm = PaginationManager(deck, layout)
>>> pm.generate()
>>> len(pm)          # page count, always even
4
>>> for page in pm.iter_pages():
...     draw(page)   # page.placements -> CellPlacement(x, y, width, height, ...)

The manager is framework-free: no Qt imports, so it can be unit-tested and
reused by any document sink.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence

from cardwizard.models.card import Card, Side
from cardwizard.models.page import CellPlacement, Page

from typing import TYPE_CHECKING
if TYPE_CHECKING:  # pragma: no cover
    from cardwizard.models.deck import Deck
    from cardwizard.models.layout import Layout

log = logging.getLogger(__name__)


class PaginationError(RuntimeError):
    """Raised when the layout cannot hold a single card."""


def chunk(items: Sequence[Card], size: int) -> Iterator[Sequence[Card]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


class PaginationManager:
    """Paginate a deck into interleaved front/back pages."""

    def __init__(self, deck: "Deck", layout: "Layout") -> None:
        self.deck = deck
        self.layout = layout
        if layout.cards_per_page < 1:
            raise PaginationError(f"Layout has no room for cards: {layout}")

        self._expanded: Optional[List[Card]] = None
        self._pages: List[Page] = []
        self._generated: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def cards_per_page(self) -> int:
        return self.layout.cards_per_page

    @property
    def expanded(self) -> List[Card]:
        if self._expanded is None:
            self._expanded = list(self.deck.expanded_cards())
        return self._expanded

    def batches(self) -> List[Sequence[Card]]:
        return list(chunk(self.expanded, self.cards_per_page))

    def generate(self) -> List[Page]:
        """Build every page up-front."""
        if self._generated:
            return self._pages

        self._pages = []
        for batch_index, batch in enumerate(self.batches()):
            self._pages.append(self._build_page(batch_index, batch, Side.FRONT))
            self._pages.append(self._build_page(batch_index, batch, Side.BACK))
        self._generated = True
        log.debug(
            "Paginated %d cards into %d pages (%d per page)",
            len(self.expanded), len(self._pages), self.cards_per_page,
        )
        return self._pages

    def page_count(self) -> int:
        return len(self.generate())

    __len__ = page_count

    def get_page(self, index: int) -> Page:
        return self.generate()[index]

    def iter_pages(self) -> Iterator[Page]:
        """Yield pages one batch at a time; batches are independent."""
        if self._generated:
            yield from self._pages
            return
        for batch_index, batch in enumerate(chunk(self.expanded, self.cards_per_page)):
            yield self._build_page(batch_index, batch, Side.FRONT)
            yield self._build_page(batch_index, batch, Side.BACK)

    def preview(self, side: Side | str = Side.FRONT) -> Page | None:
        """First sheet of ``side``, as a print preview would show it."""
        side = Side.parse(side)
        batches = self.batches()
        if not batches:
            return None
        return self._build_page(0, batches[0], side)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build_page(self, batch_index: int, batch: Sequence[Card], side: Side) -> Page:
        layout = self.layout
        placements = []
        for slot, card in enumerate(batch):
            row, col = divmod(slot, layout.columns)
            if side is Side.BACK:
                col = layout.columns - 1 - col
            x, y, w, h = layout.cell_rect(row, col)
            placements.append(CellPlacement(
                slot=slot,
                row=row,
                column=col,
                x=x,
                y=y,
                width=w,
                height=h,
                style_id=card.style_for(side),
                card=card,
            ))
        index = batch_index * 2 + (0 if side is Side.FRONT else 1)
        return Page(index=index, batch=batch_index, side=side, placements=tuple(placements))
