"""Core game state data structures for FreeCell."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Final, Iterator

from . import encoding
from .cards import Card, Suit

TABLEAU_COLUMN_COUNT: Final[int] = 8
FREE_CELL_COUNT: Final[int] = 4
FOUNDATION_COUNT: Final[int] = 4
FULL_FOUNDATION: Final[int] = 13

# Foundation slot order used by ``Location.foundation(index)``.
FOUNDATION_ORDER: Final[tuple[Suit, ...]] = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)

Column = tuple[Card, ...]


class PileKind(str, Enum):
    """The three kinds of pile a card can sit on."""

    TABLEAU = "tableau"
    FREECELL = "freecell"
    FOUNDATION = "foundation"


_PILE_SIZES: Final[dict[PileKind, int]] = {
    PileKind.TABLEAU: TABLEAU_COLUMN_COUNT,
    PileKind.FREECELL: FREE_CELL_COUNT,
    PileKind.FOUNDATION: FOUNDATION_COUNT,
}


@dataclass(frozen=True, slots=True)
class Location:
    """Address of a single pile on the board."""

    kind: PileKind
    index: int

    def __post_init__(self) -> None:
        limit = _PILE_SIZES[self.kind]
        if not 0 <= self.index < limit:
            raise ValueError(f"{self.kind.value} index {self.index} out of range")

    @classmethod
    def tableau(cls, index: int) -> "Location":
        return cls(PileKind.TABLEAU, index)

    @classmethod
    def freecell(cls, index: int) -> "Location":
        return cls(PileKind.FREECELL, index)

    @classmethod
    def foundation(cls, index: int) -> "Location":
        return cls(PileKind.FOUNDATION, index)

    @classmethod
    def foundation_for(cls, suit: Suit) -> "Location":
        """Return the foundation slot that collects ``suit``."""

        return cls(PileKind.FOUNDATION, FOUNDATION_ORDER.index(suit))

    @property
    def foundation_suit(self) -> Suit:
        if self.kind is not PileKind.FOUNDATION:
            raise ValueError("only foundation locations have a suit")
        return FOUNDATION_ORDER[self.index]


@dataclass(frozen=True, slots=True)
class GameState:
    """One point-in-time board. Never mutated; every move builds a new value."""

    tableau: tuple[Column, ...]
    free_cells: tuple[Card | None, ...]
    foundations: tuple[Column, ...]
    game_number: int

    @property
    def is_won(self) -> bool:
        return all(len(pile) == FULL_FOUNDATION for pile in self.foundations)

    def foundation(self, suit: Suit) -> Column:
        return self.foundations[FOUNDATION_ORDER.index(suit)]

    def foundation_length(self, suit: Suit) -> int:
        return len(self.foundation(suit))

    def empty_free_cells(self) -> int:
        return sum(1 for cell in self.free_cells if cell is None)

    def empty_columns(self) -> int:
        return sum(1 for column in self.tableau if not column)

    def pile(self, location: Location) -> Column:
        """Return the cards at ``location`` bottom-first (a free cell has 0 or 1)."""

        if location.kind is PileKind.TABLEAU:
            return self.tableau[location.index]
        if location.kind is PileKind.FOUNDATION:
            return self.foundations[location.index]
        occupant = self.free_cells[location.index]
        return () if occupant is None else (occupant,)

    def top_card(self, location: Location) -> Card | None:
        """Return the card that could be lifted from ``location``."""

        cards = self.pile(location)
        return cards[-1] if cards else None

    def cards(self) -> Iterator[Card]:
        """Yield every card on the board."""

        for column in self.tableau:
            yield from column
        for occupant in self.free_cells:
            if occupant is not None:
                yield occupant
        for pile in self.foundations:
            yield from pile

    def without_top(self, location: Location) -> "GameState":
        """Return a copy with the top card of ``location`` removed."""

        if location.kind is PileKind.FREECELL:
            cells = list(self.free_cells)
            cells[location.index] = None
            return replace(self, free_cells=tuple(cells))
        return self._with_pile(location, self.pile(location)[:-1])

    def with_cards(self, location: Location, cards: Column) -> "GameState":
        """Return a copy with ``cards`` placed on top of ``location``."""

        if location.kind is PileKind.FREECELL:
            if len(cards) != 1:
                raise ValueError("a free cell holds exactly one card")
            cells = list(self.free_cells)
            cells[location.index] = cards[0]
            return replace(self, free_cells=tuple(cells))
        return self._with_pile(location, self.pile(location) + tuple(cards))

    def _with_pile(self, location: Location, cards: Column) -> "GameState":
        if location.kind is PileKind.TABLEAU:
            columns = list(self.tableau)
            columns[location.index] = cards
            return replace(self, tableau=tuple(columns))
        piles = list(self.foundations)
        piles[location.index] = cards
        return replace(self, foundations=tuple(piles))


def validate_state(state: GameState) -> None:
    """Raise ``ValueError`` if ``state`` breaks a board invariant.

    Every card must be on the board exactly once and every foundation must be a
    single-suit run starting at the ace.
    """

    if len(state.tableau) != TABLEAU_COLUMN_COUNT:
        raise ValueError("tableau must have 8 columns")
    if len(state.free_cells) != FREE_CELL_COUNT:
        raise ValueError("there must be 4 free cells")
    if len(state.foundations) != FOUNDATION_COUNT:
        raise ValueError("there must be 4 foundations")
    encoding.location_vector(state)
    for suit, pile in zip(FOUNDATION_ORDER, state.foundations):
        for expected_value, card in enumerate(pile, start=1):
            if card.suit is not suit or card.value != expected_value:
                raise ValueError(f"{suit.value} foundation is out of sequence at {card.id}")
