"""Move values and the move notation used by the terminal front end."""

from __future__ import annotations

from dataclasses import dataclass

from . import rules
from .state import GameState, Location, PileKind

_PILE_PREFIXES = {
    "t": PileKind.TABLEAU,
    "f": PileKind.FREECELL,
    "h": PileKind.FOUNDATION,
}


@dataclass(frozen=True)
class Move:
    """A requested move of ``count`` cards from ``source`` to ``target``.

    ``count`` greater than one is only meaningful between tableau columns.
    """

    source: Location
    target: Location
    count: int = 1


def apply_move(state: GameState, move: Move) -> GameState:
    """Apply ``move``; returns ``state`` unchanged when it is illegal."""

    if move.count == 1:
        return rules.try_move(move.source, move.target, state)
    if move.source.kind is not PileKind.TABLEAU or move.target.kind is not PileKind.TABLEAU:
        return state
    column = state.tableau[move.source.index]
    start_index = len(column) - move.count
    if start_index < 0:
        return state
    return rules.try_move_sequence(move.source.index, start_index, move.target.index, state)


def require_move(state: GameState, move: Move) -> GameState:
    """Like ``apply_move`` but raise ``rules.IllegalMove`` when ``move`` is rejected."""

    if move.count == 1:
        return rules.require_move(move.source, move.target, state)
    moved = apply_move(state, move)
    if moved is state:
        raise rules.IllegalMove(
            f"cannot move {move.count} cards from {move.source.kind.value} {move.source.index + 1} "
            f"to {move.target.kind.value} {move.target.index + 1}"
        )
    return moved


def parse_move(text: str, state: GameState) -> Move:
    """Parse the front end's move notation against ``state``.

    Piles are written ``t1``-``t8`` (tableau), ``f1``-``f4`` (free cells) and
    ``h1``-``h4`` (foundations). ``t3:2`` lifts the top two cards of column 3.
    A bare ``f`` picks the first empty free cell and a bare ``h`` the
    foundation of the moving card's suit.
    """

    parts = text.split()
    if len(parts) != 2:
        raise ValueError("a move needs a source and a target, e.g. 't1 t4'")
    source_token, target_token = parts

    count = 1
    if ":" in source_token:
        source_token, count_token = source_token.split(":", maxsplit=1)
        if not count_token.isdigit() or int(count_token) < 1:
            raise ValueError(f"invalid card count '{count_token}'")
        count = int(count_token)

    source = _resolve(source_token, state, moving=None)
    target = _resolve(target_token, state, moving=source)
    return Move(source=source, target=target, count=count)


def _resolve(token: str, state: GameState, *, moving: Location | None) -> Location:
    kind = _PILE_PREFIXES.get(token[:1].lower())
    if kind is None:
        raise ValueError(f"unknown pile '{token}'")
    number = token[1:]
    if number:
        if not number.isdigit():
            raise ValueError(f"invalid pile number in '{token}'")
        return Location(kind, int(number) - 1)
    if kind is PileKind.FREECELL:
        for idx, occupant in enumerate(state.free_cells):
            if occupant is None:
                return Location.freecell(idx)
        raise ValueError("no empty free cell")
    if kind is PileKind.FOUNDATION and moving is not None:
        top = state.top_card(moving)
        if top is not None:
            return Location.foundation_for(top.suit)
    raise ValueError(f"pile '{token}' needs a number")
