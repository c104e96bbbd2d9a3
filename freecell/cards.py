"""Card abstractions and helpers for FreeCell."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class Suit(str, Enum):
    """The four suits, declared in canonical deck order."""

    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"


class Color(str, Enum):
    """Suit colours used by the tableau stacking rule."""

    RED = "red"
    BLACK = "black"


class Rank(str, Enum):
    """Card ranks from ace (low) to king (high)."""

    ACE = "ace"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "jack"
    QUEEN = "queen"
    KING = "king"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return ranks from ace to king."""

        return tuple(cls)


SUIT_ORDER: Final[tuple[Suit, ...]] = tuple(Suit)
RANK_VALUES: Final[dict[Rank, int]] = {rank: idx for idx, rank in enumerate(Rank, start=1)}
RED_SUITS: Final[frozenset[Suit]] = frozenset({Suit.HEARTS, Suit.DIAMONDS})
DECK_SIZE: Final[int] = len(SUIT_ORDER) * len(RANK_VALUES)


def rank_value(rank: Rank) -> int:
    """Return the numeric value of ``rank`` (ace=1 ... king=13)."""

    return RANK_VALUES[rank]


def color(suit: Suit) -> Color:
    """Return the colour of ``suit``."""

    return Color.RED if suit in RED_SUITS else Color.BLACK


def opposite_suits(suit: Suit) -> tuple[Suit, Suit]:
    """Return the two suits of the other colour, in canonical order."""

    own = color(suit)
    first, second = (candidate for candidate in SUIT_ORDER if color(candidate) is not own)
    return first, second


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card; two cards are the same card iff rank and suit match."""

    rank: Rank
    suit: Suit

    @property
    def id(self) -> str:
        return f"{self.rank.value}_of_{self.suit.value}"

    @property
    def value(self) -> int:
        return rank_value(self.rank)

    @property
    def color(self) -> Color:
        return color(self.suit)

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    def __str__(self) -> str:
        return self.id


def create_deck() -> list[Card]:
    """Return the 52 cards in Microsoft deal order: ranks outer, suits inner."""

    return [Card(rank=rank, suit=suit) for rank in Rank.ordered() for suit in SUIT_ORDER]
