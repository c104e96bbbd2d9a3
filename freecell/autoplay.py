"""Safe automatic promotion of cards to the foundations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterator

from .cards import Card, Suit, opposite_suits
from .rules import can_move_to_foundation, check_win, try_move
from .state import GameState, Location

AUTO_MOVE_SAFE_RANK_OFFSET: Final[int] = 2


@dataclass(frozen=True, slots=True)
class AutoMove:
    """A card that can be sent home, and where it currently sits."""

    card: Card
    source: Location

    @property
    def target(self) -> Location:
        return Location.foundation_for(self.card.suit)


def min_opposite_rank(state: GameState, suit: Suit) -> int:
    """Return the shorter foundation length among the other colour's suits."""

    return min(state.foundation_length(other) for other in opposite_suits(suit))


def is_safe_auto_move(card: Card, state: GameState) -> bool:
    """Return ``True`` if ``card`` is next for its foundation and never needed as a base."""

    value = card.value
    return (
        value == state.foundation_length(card.suit) + 1
        and value <= min_opposite_rank(state, card.suit) + AUTO_MOVE_SAFE_RANK_OFFSET
    )


def _candidates(state: GameState) -> Iterator[tuple[Card, Location]]:
    for idx, occupant in enumerate(state.free_cells):
        if occupant is not None:
            yield occupant, Location.freecell(idx)
    for idx, column in enumerate(state.tableau):
        if column:
            yield column[-1], Location.tableau(idx)


def find_auto_move(state: GameState) -> AutoMove | None:
    """Return the first safe foundation move, scanning free cells then columns."""

    for card, source in _candidates(state):
        if can_move_to_foundation(card, state.foundation(card.suit)) and is_safe_auto_move(card, state):
            return AutoMove(card=card, source=source)
    return None


def apply_auto_move(state: GameState, move: AutoMove) -> GameState:
    """Send ``move.card`` to its foundation."""

    return try_move(move.source, move.target, state, card=move.card)


def iter_auto_moves(state: GameState) -> Iterator[tuple[AutoMove, GameState]]:
    """Yield each automatic move with the state it produces, one at a time."""

    current = state
    while not check_win(current):
        move = find_auto_move(current)
        if move is None:
            return
        following = apply_auto_move(current, move)
        if following is current:  # pragma: no cover - find_auto_move only reports legal moves
            return
        yield move, following
        current = following


def auto_play(state: GameState) -> GameState:
    """Return the state reached after every available safe move."""

    current = state
    for _, current in iter_auto_moves(state):
        pass
    return current


def detect_auto_move(old: GameState, new: GameState) -> tuple[Location, Location] | None:
    """Return ``(source, foundation)`` for the card that went home between two states."""

    grown = [
        idx
        for idx, (before, after) in enumerate(zip(old.foundations, new.foundations))
        if len(after) > len(before)
    ]
    for idx, (before, after) in enumerate(zip(old.free_cells, new.free_cells)):
        if before is not None and after is None:
            for pile_idx in grown:
                if new.foundations[pile_idx][-1] == before:
                    return Location.freecell(idx), Location.foundation(pile_idx)
    for idx, (before, after) in enumerate(zip(old.tableau, new.tableau)):
        if len(before) > len(after):
            for pile_idx in grown:
                if new.foundations[pile_idx][-1] == before[-1]:
                    return Location.tableau(idx), Location.foundation(pile_idx)
    return None
