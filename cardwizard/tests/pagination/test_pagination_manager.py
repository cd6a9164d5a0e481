import pytest

from cardwizard.models.card import Card, Side
from cardwizard.models.deck import CardSize, Deck
from cardwizard.models.layout import Layout
from cardwizard.services.layout_solver import compute_layout
from cardwizard.services.pagination_manager import PaginationManager

# ------------------------------------------------------------
# Fixtures: a small 3 x 2 grid keeps the arithmetic readable
# ------------------------------------------------------------

@pytest.fixture
def layout():
    return Layout(
        page_width=100.0, page_height=100.0,
        columns=3, rows=2,
        card_width=20.0, card_height=30.0,
        spacing=2.0, margin_left=18.0, margin_top=19.0,
    )


def make_deck(*counts, **kwargs):
    cards = [
        Card(f"c{i}", count=n, front_style_id=f"f{i}", back_style_id=f"b{i}")
        for i, n in enumerate(counts)
    ]
    return Deck(size=CardSize(20.0, 30.0), cards=cards, **kwargs)

# ------------------------------------------------------------
# Expansion & batching
# ------------------------------------------------------------

def test_expanded_sequence_comes_from_the_deck(layout):
    deck = make_deck(2, 1)
    pm = PaginationManager(deck, layout)
    assert [c.id for c in pm.expanded] == [c.id for c in deck.expanded_cards()] == ["c0", "c0", "c1"]


@pytest.mark.parametrize("total, expected_pages", [(1, 2), (6, 2), (7, 4), (12, 4), (13, 6)])
def test_page_count_is_two_per_batch(layout, total, expected_pages):
    pm = PaginationManager(make_deck(total), layout)
    assert len(pm) == expected_pages
    assert len(pm) == layout.page_count(total)


def test_pages_alternate_front_and_back(layout):
    pm = PaginationManager(make_deck(4, 5), layout)
    sides = [page.side for page in pm.iter_pages()]
    assert sides == [Side.FRONT, Side.BACK, Side.FRONT, Side.BACK]
    assert [p.index for p in pm.generate()] == [0, 1, 2, 3]
    assert [p.batch for p in pm.generate()] == [0, 0, 1, 1]


def test_last_batch_may_be_partial(layout):
    pm = PaginationManager(make_deck(8), layout)
    front, back = pm.get_page(2), pm.get_page(3)
    assert len(front.placements) == 2
    assert len(back.placements) == 2


def test_empty_deck_has_no_pages(layout):
    pm = PaginationManager(make_deck(), layout)
    assert len(pm) == 0
    assert list(pm.iter_pages()) == []
    assert pm.preview() is None

# ------------------------------------------------------------
# Placement geometry
# ------------------------------------------------------------

def test_front_cells_are_row_major(layout):
    pm = PaginationManager(make_deck(5), layout)
    front = pm.get_page(0)
    assert [(p.row, p.column) for p in front.placements] == [
        (0, 0), (0, 1), (0, 2), (1, 0), (1, 1),
    ]
    last = front.placements[-1]
    assert (last.x, last.y) == (18.0 + 22.0, 19.0 + 32.0)
    assert (last.width, last.height) == (20.0, 30.0)


def test_back_columns_are_mirrored(layout):
    pm = PaginationManager(make_deck(5), layout)
    front, back = pm.get_page(0), pm.get_page(1)
    for slot, placed in enumerate(front.placements):
        mirrored = back.placement_for_slot(slot)
        assert mirrored.card is placed.card
        assert mirrored.row == placed.row
        assert mirrored.column == layout.columns - 1 - placed.column
        assert mirrored.y == placed.y


def test_mirrored_back_uses_mirrored_x(layout):
    pm = PaginationManager(make_deck(1), layout)
    back = pm.get_page(1)
    only = back.placements[0]
    assert only.column == 2
    assert only.x == 18.0 + 2 * 22.0


def test_styles_follow_side(layout):
    deck = make_deck(1)
    deck.cards.append(Card("plain"))
    pm = PaginationManager(deck, layout)
    front, back = pm.get_page(0), pm.get_page(1)
    assert [p.style_id for p in front.placements] == ["f0", "default-front"]
    assert [p.style_id for p in back.placements] == ["b0", "default-back"]


def test_pagination_is_repeatable():
    deck = make_deck(3, 7, 1)
    layout = compute_layout(63.5, 88.9, "letter")
    first = PaginationManager(deck, layout).generate()
    second = PaginationManager(deck, layout).generate()
    assert first == second


def test_lazy_and_eager_pages_match(layout):
    deck = make_deck(2, 9)
    lazy = list(PaginationManager(deck, layout).iter_pages())
    eager = PaginationManager(deck, layout).generate()
    assert lazy == eager


def test_preview_shows_first_sheet(layout):
    pm = PaginationManager(make_deck(10), layout)
    back = pm.preview("back")
    assert back.side is Side.BACK
    assert len(back.placements) == layout.cards_per_page
