# export_manager.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from PySide6.QtGui import QImage

from cardwizard.models.card import Side
from cardwizard.models.deck import Deck
from cardwizard.models.layout import Layout
from cardwizard.models.page import Page
from cardwizard.services.app_settings import AppSettings
from cardwizard.services.document_sink import (
    CUT_GUIDE,
    FALLBACK_BORDER,
    DocumentSink,
    PdfWriterSink,
)
from cardwizard.services.image_registry import ImageRegistry
from cardwizard.services.layout_solver import layout_for_deck
from cardwizard.services.pagination_manager import PaginationManager

log = logging.getLogger(__name__)

ImageLookup = Callable[[str, Side], Optional[QImage]]


class ExportManager:
    """Pagination and duplex compositor: turns a deck into drawn pages."""

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or AppSettings()

    def layout_for(self, deck: Deck) -> Layout:
        return layout_for_deck(deck)

    def compose(self, deck: Deck, layout: Layout, lookup: ImageLookup, sink: DocumentSink) -> int:
        """Draw every page of ``deck`` into ``sink``. Returns the number of pages drawn."""
        pager = PaginationManager(deck, layout)
        drawn = 0
        # Batches are independent; a caller wanting cancellation can stop between pages.
        for page in pager.iter_pages():
            self.draw_page(page, lookup, sink, cut_guides=deck.draw_cut_guides)
            drawn += 1
        return drawn

    def draw_page(self, page: Page, lookup: ImageLookup, sink: DocumentSink, cut_guides: bool = False) -> None:
        sink.add_page()
        missing = 0
        for cell in page.placements:
            image = lookup(cell.style_id, page.side)
            if image is not None:
                sink.draw_image_at(image, cell.x, cell.y, cell.width, cell.height)
            else:
                missing += 1
                sink.draw_rect_at(cell.x, cell.y, cell.width, cell.height, FALLBACK_BORDER)
            if cut_guides:
                sink.draw_rect_at(cell.x, cell.y, cell.width, cell.height, CUT_GUIDE)
        log.debug(
            "Page %d (%s, batch %d): %d cards, %d placeholders",
            page.index + 1, page.side.value, page.batch, len(page.placements), missing,
        )

    def export_pdf(self, deck: Deck, pdf_path: Union[str, Path], layout: Optional[Layout] = None) -> int:
        layout = layout or self.layout_for(deck)
        registry = ImageRegistry.from_rendered(deck.rendered_cards)
        log.info(
            "Exporting %d cards (%dx%d per page, %s) to %s",
            deck.total_cards, layout.columns, layout.rows, layout.paper_name, pdf_path,
        )

        sink = PdfWriterSink(
            pdf_path,
            layout.page_width,
            layout.page_height,
            dpi=self.settings.print_dpi,
            title=self.settings.title or deck.name,
            creator=self.settings.author,
        )
        with sink:
            pages = self.compose(deck, layout, registry.lookup, sink)

        log.info("Wrote %d pages to %s", pages, pdf_path)
        return pages
