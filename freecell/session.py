"""Undoable game sessions built from immutable states."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

from .actions import Move, require_move
from .autoplay import iter_auto_moves
from .deal import deal
from .rules import check_win
from .state import GameState

logger = logging.getLogger(__name__)

__all__ = ["SessionState", "UpdateState", "Undo", "NewGame", "reduce", "GameSession"]


@dataclass(frozen=True, slots=True)
class SessionState:
    """The current board plus every earlier board, oldest first."""

    current: GameState
    history: tuple[GameState, ...] = ()


@dataclass(frozen=True, slots=True)
class UpdateState:
    """Adopt ``new_state`` and remember the current one."""

    new_state: GameState


@dataclass(frozen=True, slots=True)
class Undo:
    """Step back to the most recent remembered state."""


@dataclass(frozen=True, slots=True)
class NewGame:
    """Deal ``game_number`` and forget all history."""

    game_number: int


SessionAction = Union[UpdateState, Undo, NewGame]


def reduce(session: SessionState, action: SessionAction) -> SessionState:
    """Return the session that results from ``action``."""

    if isinstance(action, UpdateState):
        return SessionState(current=action.new_state, history=session.history + (session.current,))
    if isinstance(action, Undo):
        if not session.history:
            return session
        return SessionState(current=session.history[-1], history=session.history[:-1])
    if isinstance(action, NewGame):
        return SessionState(current=deal(action.game_number))
    raise TypeError(f"unknown session action {action!r}")


@dataclass(slots=True)
class GameSession:
    """Mutable holder of the one live ``SessionState``."""

    state: SessionState = field(default_factory=lambda: SessionState(current=deal(1)))

    @classmethod
    def start(cls, game_number: int) -> "GameSession":
        return cls(SessionState(current=deal(game_number)))

    @property
    def current(self) -> GameState:
        return self.state.current

    @property
    def history(self) -> tuple[GameState, ...]:
        return self.state.history

    @property
    def game_number(self) -> int:
        return self.state.current.game_number

    @property
    def can_undo(self) -> bool:
        return bool(self.state.history)

    @property
    def is_won(self) -> bool:
        return check_win(self.state.current)

    @property
    def has_progress(self) -> bool:
        """``True`` while a started game would be lost by dealing a new one."""

        return self.can_undo and not self.is_won

    def dispatch(self, action: SessionAction) -> GameState:
        self.state = reduce(self.state, action)
        return self.state.current

    def apply_move(self, new_state: GameState) -> GameState:
        """Record the current state in history and adopt ``new_state``."""

        logger.debug("session %d: %d state(s) in history", self.game_number, len(self.history) + 1)
        return self.dispatch(UpdateState(new_state))

    def undo(self) -> GameState:
        """Return to the previous state; no-op when there is no history."""

        if not self.can_undo:
            logger.debug("undo requested with empty history")
        return self.dispatch(Undo())

    def new_game(self, game_number: int) -> GameState:
        """Deal ``game_number`` and clear history."""

        logger.debug("new game %d", game_number)
        return self.dispatch(NewGame(game_number))

    def play(self, move: Move, *, auto: bool = True) -> GameState:
        """Apply ``move`` and then every safe automatic move.

        Each automatic move is recorded separately, so undo steps back through
        them one at a time. Raises ``IllegalMove`` and leaves the session
        untouched when ``move`` is rejected.
        """

        moved = require_move(self.current, move)
        self.apply_move(moved)
        if auto:
            for auto_move, following in iter_auto_moves(moved):
                logger.debug("auto move %s from %s %d", auto_move.card.id, auto_move.source.kind.value, auto_move.source.index)
                self.apply_move(following)
        return self.current

    def auto_play(self) -> int:
        """Record every available safe move; returns how many were made."""

        count = 0
        for _, following in iter_auto_moves(self.current):
            self.apply_move(following)
            count += 1
        return count
