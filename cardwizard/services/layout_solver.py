"""Print grid solver.

Works out how many identical, unrotated cards fit on a sheet. The search is a
fixed sequence of relaxations, not an optimiser:

1. ideal margin and spacing,
2. minimum margin with ideal spacing,
3. minimum margin with no spacing,

stopping as soon as the target card count is reached. A later attempt only
replaces the current best when it fits strictly more cards, so ties keep the
roomier margins. The chosen grid is then centred on the page.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from math import floor
from typing import Tuple

from cardwizard.config import (
    DEFAULT_PAPER,
    IDEAL_MARGIN,
    IDEAL_SPACING,
    MIN_MARGIN,
    MIN_SPACING,
    PAPER_PROFILES,
    TARGET_CARDS_PER_PAGE,
)
from cardwizard.models.layout import InvalidDimension, Layout

from typing import TYPE_CHECKING
if TYPE_CHECKING:  # pragma: no cover
    from cardwizard.models.deck import Deck

log = logging.getLogger(__name__)


def resolve_paper(name: str | None) -> Tuple[str, float, float]:
    """Return ``(paper_name, width, height)``; unknown names fall back to letter."""
    key = (name or "").strip().lower()
    if key not in PAPER_PROFILES:
        key = DEFAULT_PAPER
    width, height = PAPER_PROFILES[key]
    return key, width, height


def _fit(page_w: float, page_h: float, card_w: float, card_h: float,
         margin: float, spacing: float) -> Tuple[int, int, int]:
    printable_w = page_w - 2 * margin
    printable_h = page_h - 2 * margin
    # n*card + (n-1)*spacing <= printable  <=>  n <= (printable + spacing) / (card + spacing)
    columns = max(1, floor((printable_w + spacing) / (card_w + spacing)))
    rows = max(1, floor((printable_h + spacing) / (card_h + spacing)))
    return columns, rows, columns * rows


def compute_layout(card_width: float, card_height: float, paper_name: str | None = DEFAULT_PAPER) -> Layout:
    if not (card_width > 0 and card_height > 0):
        raise InvalidDimension(
            f"Card dimensions must be positive, got {card_width} x {card_height}"
        )
    paper, page_w, page_h = resolve_paper(paper_name)
    return _compute_layout(float(card_width), float(card_height), paper, page_w, page_h)


@lru_cache(maxsize=64)
def _compute_layout(card_w: float, card_h: float, paper: str, page_w: float, page_h: float) -> Layout:
    columns, rows, count = _fit(page_w, page_h, card_w, card_h, IDEAL_MARGIN, IDEAL_SPACING)
    spacing = IDEAL_SPACING

    if count < TARGET_CARDS_PER_PAGE:
        c, r, n = _fit(page_w, page_h, card_w, card_h, MIN_MARGIN, IDEAL_SPACING)
        if n > count:
            columns, rows, count = c, r, n
            spacing = IDEAL_SPACING

        if count < TARGET_CARDS_PER_PAGE:
            c, r, n = _fit(page_w, page_h, card_w, card_h, MIN_MARGIN, MIN_SPACING)
            if n > count:
                columns, rows, count = c, r, n
                spacing = MIN_SPACING

    grid_w = columns * card_w + (columns - 1) * spacing
    grid_h = rows * card_h + (rows - 1) * spacing
    margin_left = max(0.0, (page_w - grid_w) / 2)
    margin_top = max(0.0, (page_h - grid_h) / 2)

    log.debug(
        "Layout %s: %.2fx%.2f cards -> %dx%d, spacing %.1f, margins %.2f/%.2f",
        paper, card_w, card_h, columns, rows, spacing, margin_left, margin_top,
    )
    return Layout(
        page_width=page_w,
        page_height=page_h,
        columns=columns,
        rows=rows,
        card_width=card_w,
        card_height=card_h,
        spacing=spacing,
        margin_left=margin_left,
        margin_top=margin_top,
        paper_name=paper,
    )


def layout_for_deck(deck: "Deck") -> Layout:
    """Layout a print preview would show for ``deck``."""
    return compute_layout(deck.size.width, deck.size.height, deck.paper_size)
