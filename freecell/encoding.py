"""Card index encoding and compact board vectors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

import numpy as np

from .cards import DECK_SIZE, RANK_VALUES, SUIT_ORDER, Card, Rank, Suit

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from numpy.typing import NDArray

    from .state import GameState

RANK_CODES: Final[list[str]] = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K"]
SUIT_CODES: Final[list[str]] = ["C", "D", "H", "S"]
SUIT_SYMBOLS: Final[list[str]] = ["♣", "♦", "♥", "♠"]
SUIT_TO_IDX: Final[dict[Suit, int]] = {suit: idx for idx, suit in enumerate(SUIT_ORDER)}
RANKS: Final[tuple[Rank, ...]] = Rank.ordered()

# Pile addresses used by ``location_vector``.
TABLEAU_BASE: Final[int] = 0
FREECELL_BASE: Final[int] = 8
FOUNDATION_BASE: Final[int] = 12
UNPLACED: Final[int] = 0xFF


def card_index(card: Card) -> int:
    """Return the Microsoft deal index of ``card`` (rank * 4 + suit)."""

    return (RANK_VALUES[card.rank] - 1) * len(SUIT_ORDER) + SUIT_TO_IDX[card.suit]


def card_from_index(index: int) -> Card:
    """Decode a deal index back into a ``Card``."""

    if not 0 <= index < DECK_SIZE:
        raise ValueError(f"card index {index} out of range")
    rank_idx, suit_idx = divmod(index, len(SUIT_ORDER))
    return Card(rank=RANKS[rank_idx], suit=SUIT_ORDER[suit_idx])


def card_code(card: Card) -> str:
    """Return the two-character code for ``card`` (``"TD"``, ``"AS"``)."""

    return RANK_CODES[RANK_VALUES[card.rank] - 1] + SUIT_CODES[SUIT_TO_IDX[card.suit]]


def card_label(card: Card) -> str:
    """Return a human label with the suit symbol (``"10♦"``)."""

    rank_value = RANK_VALUES[card.rank]
    rank = "10" if rank_value == 10 else RANK_CODES[rank_value - 1]
    return rank + SUIT_SYMBOLS[SUIT_TO_IDX[card.suit]]


def parse_card(text: str) -> Card:
    """Parse ``"4D"``, ``"10D"``, ``"TD"`` or ``"4♦"`` into a ``Card``."""

    cleaned = text.strip().upper()
    if len(cleaned) < 2:
        raise ValueError(f"invalid card code '{text}'")
    rank_part, suit_part = cleaned[:-1], cleaned[-1]
    if rank_part == "10":
        rank_part = "T"
    if suit_part in SUIT_CODES:
        suit_idx = SUIT_CODES.index(suit_part)
    elif suit_part in SUIT_SYMBOLS:
        suit_idx = SUIT_SYMBOLS.index(suit_part)
    else:
        raise ValueError(f"invalid card code '{text}'")
    if rank_part not in RANK_CODES:
        raise ValueError(f"invalid card code '{text}'")
    return Card(rank=RANKS[RANK_CODES.index(rank_part)], suit=SUIT_ORDER[suit_idx])


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace separated list of card codes."""

    return [parse_card(token) for token in text.split()]


def location_vector(state: "GameState") -> "NDArray[np.uint8]":
    """Return, for each card index, the address of the pile holding it.

    Addresses are 0-7 for tableau columns, 8-11 for free cells and 12-15 for
    foundations. Raises ``ValueError`` if a card is missing or appears twice.
    """

    vector = np.full(DECK_SIZE, UNPLACED, dtype=np.uint8)
    seen = np.zeros(DECK_SIZE, dtype=np.uint16)

    def place(card: Card, address: int) -> None:
        idx = card_index(card)
        seen[idx] += 1
        vector[idx] = address

    for column_idx, column in enumerate(state.tableau):
        for card in column:
            place(card, TABLEAU_BASE + column_idx)
    for cell_idx, occupant in enumerate(state.free_cells):
        if occupant is not None:
            place(occupant, FREECELL_BASE + cell_idx)
    for pile_idx, pile in enumerate(state.foundations):
        for card in pile:
            place(card, FOUNDATION_BASE + pile_idx)

    duplicated = np.flatnonzero(seen > 1)
    if duplicated.size:
        codes = ", ".join(card_code(card_from_index(int(idx))) for idx in duplicated)
        raise ValueError(f"cards placed more than once: {codes}")
    missing = np.flatnonzero(seen == 0)
    if missing.size:
        codes = ", ".join(card_code(card_from_index(int(idx))) for idx in missing)
        raise ValueError(f"cards missing from the board: {codes}")
    return vector
