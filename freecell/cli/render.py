"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Color
from ..encoding import card_label
from ..state import GameState
from .views import BoardView

_COLOR_STYLES = {
    Color.RED: "red",
    Color.BLACK: "bold white",
}


def format_card(card: Card | None) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card is None:
        return "[dim]··[/dim]"
    style = _COLOR_STYLES[card.color]
    return f"[{style}]{card_label(card)}[/{style}]"


def render_state(state: GameState, *, title: str | None = None) -> RenderableType:
    """Return a Rich panel describing ``state``."""

    view = BoardView(state=state, card_formatter=format_card)
    heading = title if title is not None else f"FreeCell #{state.game_number}"
    if state.is_won:
        heading += " [bold green]won[/bold green]"
    return Panel(view.render(), title=heading, padding=(0, 1), border_style="cyan")
