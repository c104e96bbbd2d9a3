from __future__ import annotations

from typing import Iterable, Sequence

from freecell.cards import Card
from freecell.encoding import card_code, parse_cards
from freecell.state import FOUNDATION_ORDER, GameState


def make_state(
    columns: Sequence[str] = (),
    *,
    free_cells: Sequence[str | None] = (None, None, None, None),
    foundations: dict[str, int] | None = None,
    game_number: int = 0,
) -> GameState:
    """Build a board from card codes; foundations are given as run lengths per suit."""

    tableau: list[tuple[Card, ...]] = [tuple(parse_cards(text)) for text in columns]
    tableau.extend(() for _ in range(8 - len(tableau)))
    cells = tuple(None if code is None else parse_cards(code)[0] for code in free_cells)
    lengths = foundations or {}
    piles = tuple(_run(suit.value, lengths.get(suit.value, 0)) for suit in FOUNDATION_ORDER)
    return GameState(tableau=tuple(tableau), free_cells=cells, foundations=piles, game_number=game_number)


def _run(suit_name: str, length: int) -> tuple[Card, ...]:
    codes = "A23456789TJQK"
    suit_code = suit_name[0].upper()
    return tuple(parse_cards(" ".join(f"{codes[i]}{suit_code}" for i in range(length))))


def column_codes(cards: Iterable[Card]) -> str:
    return " ".join(card_code(card) for card in cards)
