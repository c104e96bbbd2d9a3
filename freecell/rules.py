"""Rule predicates and move application for FreeCell."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from .cards import Card
from .state import FULL_FOUNDATION, GameState, Location, PileKind

logger = logging.getLogger(__name__)

__all__ = [
    "IllegalMove",
    "can_move_to_tableau",
    "can_move_to_foundation",
    "max_movable_cards",
    "is_stacked_run",
    "can_move_sequence",
    "try_move",
    "try_move_sequence",
    "require_move",
    "check_win",
]


class IllegalMove(RuntimeError):
    """Raised by the ``require_move`` helpers when a requested move is not legal."""


def can_move_to_tableau(card: Card, target_column: Sequence[Card]) -> bool:
    """Return ``True`` if ``card`` may be placed on ``target_column``."""

    if not target_column:
        return True
    top = target_column[-1]
    return top.value == card.value + 1 and top.color is not card.color


def can_move_to_foundation(card: Card, foundation_pile: Sequence[Card]) -> bool:
    """Return ``True`` if ``card`` is the next card for ``foundation_pile``."""

    if not foundation_pile:
        return card.is_ace
    top = foundation_pile[-1]
    return top.suit is card.suit and top.value == card.value - 1


def max_movable_cards(empty_free_cells: int, empty_columns: int, exclude_target_column: bool = False) -> int:
    """Return the supermove capacity for the given free space."""

    effective_empty_columns = max(0, empty_columns - 1) if exclude_target_column else empty_columns
    return (1 + empty_free_cells) * 2**effective_empty_columns


def is_stacked_run(cards: Sequence[Card]) -> bool:
    """Return ``True`` if ``cards`` descend by one with alternating colours."""

    return all(can_move_to_tableau(upper, (lower,)) for lower, upper in zip(cards, cards[1:]))


def can_move_sequence(
    source_column: Sequence[Card],
    start_index: int,
    state: GameState,
    *,
    target_column: int | None = None,
) -> bool:
    """Return ``True`` if the cards from ``start_index`` may move together.

    With no ``target_column`` the destination is assumed to be one of the
    empty columns, which is the conservative reading.
    """

    if not 0 <= start_index < len(source_column):
        return False
    moving = source_column[start_index:]
    if not is_stacked_run(moving):
        return False
    if target_column is None:
        exclude_target = True
    else:
        exclude_target = not state.tableau[target_column]
    capacity = max_movable_cards(state.empty_free_cells(), state.empty_columns(), exclude_target)
    return len(moving) <= capacity


def _accepts(state: GameState, card: Card, target: Location) -> bool:
    if target.kind is PileKind.TABLEAU:
        return can_move_to_tableau(card, state.tableau[target.index])
    if target.kind is PileKind.FREECELL:
        return state.free_cells[target.index] is None
    if card.suit is not target.foundation_suit:
        return False
    return can_move_to_foundation(card, state.foundations[target.index])


def try_move(
    source: Location,
    target: Location,
    state: GameState,
    *,
    card: Card | None = None,
) -> GameState:
    """Move the top card of ``source`` to ``target``.

    When ``card`` is given it must be the card currently on top of ``source``.
    Returns a new state on success and ``state`` itself otherwise.
    """

    if source == target:
        return state
    top = state.top_card(source)
    if top is None:
        logger.debug("rejected move from empty %s %d", source.kind.value, source.index)
        return state
    if card is not None and card != top:
        logger.debug("rejected move of %s: %s is on top of the source", card.id, top.id)
        return state
    if not _accepts(state, top, target):
        logger.debug("rejected move of %s to %s %d", top.id, target.kind.value, target.index)
        return state
    return state.without_top(source).with_cards(target, (top,))


def try_move_sequence(source_column: int, start_index: int, target_column: int, state: GameState) -> GameState:
    """Move the run starting at ``start_index`` between two tableau columns.

    Returns ``state`` itself when the run is not movable.
    """

    if source_column == target_column:
        return state
    column = state.tableau[source_column]
    if not can_move_sequence(column, start_index, state, target_column=target_column):
        logger.debug("rejected sequence move from column %d index %d", source_column, start_index)
        return state
    moving = column[start_index:]
    if not can_move_to_tableau(moving[0], state.tableau[target_column]):
        logger.debug("column %d does not accept %s", target_column, moving[0].id)
        return state
    columns = list(state.tableau)
    columns[source_column] = column[:start_index]
    columns[target_column] = state.tableau[target_column] + moving
    return replace(state, tableau=tuple(columns))


def require_move(
    source: Location,
    target: Location,
    state: GameState,
    *,
    card: Card | None = None,
) -> GameState:
    """Like ``try_move`` but raise ``IllegalMove`` instead of returning ``state``."""

    moved = try_move(source, target, state, card=card)
    if moved is state:
        raise IllegalMove(
            f"cannot move from {source.kind.value} {source.index + 1} to {target.kind.value} {target.index + 1}"
        )
    return moved


def check_win(state: GameState) -> bool:
    """Return ``True`` once all four foundations are complete."""

    return all(len(pile) == FULL_FOUNDATION for pile in state.foundations)
