"""Top-level package for the FreeCell rules engine."""

from . import actions, autoplay, cards, deal, encoding, rules, session, shuffle, state

__all__ = [
    "actions",
    "autoplay",
    "cards",
    "deal",
    "encoding",
    "rules",
    "session",
    "shuffle",
    "state",
]
