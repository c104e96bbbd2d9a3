"""Microsoft FreeCell deal shuffle.

The generator is the C runtime ``rand()`` linear congruential generator used by
the original Windows FreeCell. The permutation it produces is a compatibility
contract with the published deal numbers, so every constant below is fixed.
"""

from __future__ import annotations

from typing import Final, Sequence, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER: Final[int] = 214013
LCG_INCREMENT: Final[int] = 2531011
SEED_MASK: Final[int] = 0xFFFFFFFF
RAND_MASK: Final[int] = 0x7FFF
EXTENDED_RANGE_START: Final[int] = 0x80000000
EXTENDED_RANGE_BIT: Final[int] = 0x8000


def next_seed(seed: int) -> int:
    """Advance the generator by one step (unsigned 32-bit wraparound)."""

    return (seed * LCG_MULTIPLIER + LCG_INCREMENT) & SEED_MASK


def shuffle(deck: Sequence[T], game_number: int) -> list[T]:
    """Return ``deck`` permuted for deal ``game_number``.

    ``deck`` is not modified. ``game_number`` must fit in an unsigned 32-bit
    integer; deals at or above 2**31 use the extended-range variant.
    """

    if not 0 <= game_number <= SEED_MASK:
        raise ValueError(f"game number {game_number} is not an unsigned 32-bit integer")

    cards = list(deck)
    extended = game_number >= EXTENDED_RANGE_START
    seed = game_number
    for i in range(len(cards)):
        cards_left = len(cards) - i
        seed = next_seed(seed)
        rand = (seed >> 16) & RAND_MASK
        if extended:
            rand |= EXTENDED_RANGE_BIT
        position = rand % cards_left
        cards[position], cards[cards_left - 1] = cards[cards_left - 1], cards[position]
    cards.reverse()
    return cards
