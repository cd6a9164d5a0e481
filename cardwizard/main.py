#!/usr/bin/env python3
import argparse
import json
import logging
import sys

from cardwizard.config import PAPER_PROFILES
from cardwizard.models.deck import DeckFormatError
from cardwizard.models.layout import InvalidDimension
from cardwizard.services.app_settings import AppSettings
from cardwizard.services.document_sink import OutputSinkFailure
from cardwizard.services.export_manager import ExportManager
from cardwizard.utils.qt_helpers import ensure_gui_application
from cardwizard.utils.valid_path import ValidPath
from cardwizard.utils.validator import load_deck

log = logging.getLogger("cardwizard")

# --- Helpers ---------------------------------------------------------------

def _die(msg: str, code: int = 2):
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(code)


# --- Argparse --------------------------------------------------------------

def build_parser():
    p = argparse.ArgumentParser(
        prog="cardwizard",
        description="Lay out a deck of cards as a duplex-ready PDF",
    )
    p.add_argument("deck", help="deck file (JSON)")
    p.add_argument("--export", "-e", dest="export_path",
                   help="PDF file to write")
    p.add_argument("--paper", choices=sorted(PAPER_PROFILES),
                   help="override the deck's paper size")
    p.add_argument("--cut-guides", action="store_true", dest="cut_guides",
                   help="draw dashed cut guides around every card")
    p.add_argument("--layout-only", action="store_true", dest="layout_only",
                   help="print the computed page layout as JSON and exit")
    p.add_argument("--dpi", type=int, default=None,
                   help="PDF painter resolution")
    p.add_argument("--verbose", "-v", action="store_true",
                   help="log progress to stderr")
    return p


# --- Main ------------------------------------------------------------------

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    deck_path = ValidPath.check(args.deck, require_file=True)
    if deck_path is None:
        _die(f"deck does not exist or is not a file: {args.deck}")

    export_path = None
    if not args.layout_only:
        if not args.export_path:
            _die("--export is required unless --layout-only is given")
        export_path = ValidPath.check(args.export_path, has_ext="pdf", parent_must_exist=True)
        if export_path is None:
            _die(f"invalid PDF path: {args.export_path}")

    try:
        deck = load_deck(deck_path)
    except (DeckFormatError, InvalidDimension, OSError) as exc:
        _die(str(exc))

    if args.paper:
        deck.paper_size = args.paper
    if args.cut_guides:
        deck.draw_cut_guides = True

    settings = AppSettings(title=deck.name)
    if args.dpi is not None:
        try:
            settings.print_dpi = args.dpi
        except ValueError as exc:
            _die(str(exc))

    manager = ExportManager(settings)
    try:
        layout = manager.layout_for(deck)
    except InvalidDimension as exc:
        _die(str(exc))

    if args.layout_only:
        summary = layout.to_dict()
        summary["totalCards"] = deck.total_cards
        summary["totalPages"] = layout.page_count(deck.total_cards)
        print(json.dumps(summary, indent=2))
        return 0

    _app = ensure_gui_application(sys.argv[:1])
    try:
        pages = manager.export_pdf(deck, export_path, layout=layout)
    except OutputSinkFailure as exc:
        _die(str(exc))

    log.info("%s: %d pages", export_path, pages)
    return 0


if __name__ == "__main__":
    sys.exit(main())
