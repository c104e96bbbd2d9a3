"""Initial layout construction for numbered deals."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Final, Sequence

from .cards import Card, create_deck
from .shuffle import shuffle
from .state import FOUNDATION_COUNT, FREE_CELL_COUNT, TABLEAU_COLUMN_COUNT, GameState

logger = logging.getLogger(__name__)

MIN_GAME_NUMBER: Final[int] = 1
MAX_GAME_NUMBER: Final[int] = 1_000_000


@dataclass(frozen=True, slots=True)
class DealPattern:
    """Row-major distribution of the shuffled deck over the tableau."""

    columns: int = TABLEAU_COLUMN_COUNT
    rows: int = 7
    long_columns: int = 4

    def cards_in_column(self, column: int) -> int:
        """Return how many cards ``column`` receives."""

        return self.rows if column < self.long_columns else self.rows - 1

    def distribute(self, cards: Sequence[Card]) -> tuple[tuple[Card, ...], ...]:
        """Deal ``cards`` across the columns row by row."""

        columns: list[list[Card]] = [[] for _ in range(self.columns)]
        remaining = iter(cards)
        for row in range(self.rows):
            for col in range(self.columns):
                if row >= self.cards_in_column(col):
                    continue
                columns[col].append(next(remaining))
        return tuple(tuple(column) for column in columns)


DEFAULT_DEAL_PATTERN: Final[DealPattern] = DealPattern()


def clamp_game_number(game_number: int) -> int:
    """Clamp ``game_number`` into the playable range."""

    return max(MIN_GAME_NUMBER, min(MAX_GAME_NUMBER, game_number))


def random_game_number(rng: random.Random | None = None) -> int:
    """Return a uniformly random playable deal number."""

    source = rng if rng is not None else random
    return source.randint(MIN_GAME_NUMBER, MAX_GAME_NUMBER)


def deal(game_number: int, pattern: DealPattern = DEFAULT_DEAL_PATTERN) -> GameState:
    """Return the opening layout of deal ``game_number``."""

    clamped = clamp_game_number(game_number)
    if clamped != game_number:
        logger.debug("game number %d clamped to %d", game_number, clamped)

    shuffled = shuffle(create_deck(), clamped)
    return GameState(
        tableau=pattern.distribute(shuffled),
        free_cells=(None,) * FREE_CELL_COUNT,
        foundations=tuple(() for _ in range(FOUNDATION_COUNT)),
        game_number=clamped,
    )
