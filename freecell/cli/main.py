"""Typer entry-point wiring for the FreeCell CLI."""

from __future__ import annotations

import logging
from typing import Any, Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import actions, autoplay, deal, encoding
from ..rules import IllegalMove
from ..session import GameSession
from ..state import FOUNDATION_ORDER, GameState
from .render import format_card, render_state

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

MAX_EVENT_LOG = 12

HELP_TEXT = (
    "[bold]Moves[/bold]: [cyan]t1 t4[/cyan] column to column, [cyan]t3:2 t5[/cyan] two cards, "
    "[cyan]t1 f[/cyan] to a free cell, [cyan]f2 h[/cyan] home to a foundation.\n"
    "[bold]Commands[/bold]: [cyan]u[/cyan] undo, [cyan]a[/cyan] auto-play, "
    "[cyan]n [N][/cyan] new game, [cyan]q[/cyan] quit."
)


def _game_number_argument() -> Any:
    return typer.Argument(
        ...,
        min=deal.MIN_GAME_NUMBER,
        max=deal.MAX_GAME_NUMBER,
        clamp=True,
        help="Microsoft deal number (1-1000000).",
    )


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine decisions."),
) -> None:
    """FreeCell with Microsoft deal numbers."""

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _append_event(log: list[str], message: str) -> None:
    """Append ``message`` to ``log`` maintaining a bounded log length."""

    log.append(message)
    excess = len(log) - MAX_EVENT_LOG
    if excess > 0:
        del log[:excess]


def _foundation_table(state: GameState) -> Table:
    table = Table(title="Foundations", box=box.SIMPLE_HEAVY)
    table.add_column("Suit", justify="left")
    table.add_column("Cards", justify="right")
    table.add_column("Top", justify="center")
    for suit in FOUNDATION_ORDER:
        pile = state.foundation(suit)
        table.add_row(suit.value, str(len(pile)), format_card(pile[-1] if pile else None))
    return table


def _describe_new_states(before: GameState, states: tuple[GameState, ...]) -> list[str]:
    """Describe automatic moves by diffing each recorded state with its predecessor."""

    lines: list[str] = []
    previous = before
    for state in states:
        detected = autoplay.detect_auto_move(previous, state)
        if detected is not None:
            source, target = detected
            card = state.top_card(target)
            if card is not None:
                lines.append(f"auto: {format_card(card)} from {source.kind.value} {source.index + 1}")
        previous = state
    return lines


def _handle_command(session: GameSession, command: str, events: list[str]) -> bool:
    """Run one prompt command; returns ``False`` when the player quits."""

    verb, _, rest = command.partition(" ")
    verb = verb.lower()
    if verb in {"q", "quit", "exit"}:
        return False
    if verb in {"?", "h", "help"}:
        console.print(HELP_TEXT)
        return True
    if verb in {"u", "undo"}:
        if session.can_undo:
            session.undo()
            _append_event(events, "undo")
        else:
            console.print("[yellow]Nothing to undo.[/yellow]")
        return True
    if verb in {"a", "auto"}:
        before = session.current
        mark = len(session.history)
        count = session.auto_play()
        for line in _describe_new_states(before, session.history[mark + 1 :] + (session.current,)):
            _append_event(events, line)
        if count == 0:
            console.print("[yellow]No safe automatic moves.[/yellow]")
        return True
    if verb in {"n", "new"}:
        if session.has_progress and not typer.confirm("Abandon the current game?", default=False):
            return True
        number = deal.random_game_number()
        if rest.strip():
            try:
                number = deal.clamp_game_number(int(rest.strip()))
            except ValueError:
                console.print(f"[red]Not a game number: {rest.strip()}[/red]")
                return True
        session.new_game(number)
        events.clear()
        _append_event(events, f"new game #{number}")
        return True

    try:
        move = actions.parse_move(command, session.current)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        return True
    mark = len(session.history)
    try:
        session.play(move)
    except IllegalMove as exc:
        console.print(f"[red]Illegal move: {exc}.[/red]")
        return True
    _append_event(events, command)
    recorded = session.history[mark + 1 :] + (session.current,)
    for line in _describe_new_states(recorded[0], recorded[1:]):
        _append_event(events, line)
    return True


@app.command()
def show(game_number: int = _game_number_argument()) -> None:
    """Print the opening layout of a deal."""

    console.print(render_state(deal.deal(game_number)))


@app.command("codes")
def codes(game_number: int = _game_number_argument()) -> None:
    """Print a deal as plain card codes, one column per line."""

    state = deal.deal(game_number)
    for idx, column in enumerate(state.tableau, start=1):
        typer.echo(f"{idx}: " + " ".join(encoding.card_code(card) for card in column))


@app.command("autoplay")
def autoplay_cli(game_number: int = _game_number_argument()) -> None:
    """Deal a game and apply every safe automatic move."""

    state = deal.deal(game_number)
    moves = 0
    for auto_move, state in autoplay.iter_auto_moves(state):
        moves += 1
        console.print(f"{format_card(auto_move.card)} from {auto_move.source.kind.value} {auto_move.source.index + 1}")
    console.print(_foundation_table(state))
    console.print(f"[cyan]{moves} automatic move(s).[/cyan]")


@app.command()
def play(
    game_number: Optional[int] = typer.Argument(
        None,
        min=deal.MIN_GAME_NUMBER,
        max=deal.MAX_GAME_NUMBER,
        clamp=True,
        help="Deal number; omit for a random deal.",
    ),
) -> None:
    """Play a deal at the prompt."""

    number = game_number if game_number is not None else deal.random_game_number()
    session = GameSession.start(number)
    events: list[str] = []
    console.print(HELP_TEXT)
    while True:
        console.print(render_state(session.current))
        if events:
            console.print("[dim]" + " • ".join(events[-4:]) + "[/dim]")
        if session.is_won:
            console.print(f"[bold green]Game #{session.game_number} solved![/bold green]")
        try:
            command = typer.prompt("move").strip()
        except typer.Abort:
            break
        if not command:
            continue
        if not _handle_command(session, command, events):
            break


def main() -> None:
    """Entry-point for ``python -m freecell.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
