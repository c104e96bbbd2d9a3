"""Composable view primitives for the FreeCell CLI."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import zip_longest
from typing import Callable

from rich import box
from rich.console import Group, RenderableType
from rich.table import Table

from ..cards import Card
from ..state import FOUNDATION_ORDER, GameState


@dataclass(slots=True)
class BoardView:
    """Renderable showing the free cells, foundations and tableau."""

    state: GameState
    card_formatter: Callable[[Card | None], str]

    def _top_row(self) -> Table:
        table = Table(box=box.SIMPLE, expand=True, show_edge=False)
        for idx in range(len(self.state.free_cells)):
            table.add_column(f"f{idx + 1}", justify="center")
        for idx, suit in enumerate(FOUNDATION_ORDER):
            table.add_column(f"h{idx + 1} {suit.value}", justify="center")

        cells = [self.card_formatter(occupant) for occupant in self.state.free_cells]
        homes = [self.card_formatter(pile[-1] if pile else None) for pile in self.state.foundations]
        table.add_row(*cells, *homes)
        return table

    def _tableau(self) -> Table:
        table = Table(box=box.MINIMAL, expand=True)
        for idx in range(len(self.state.tableau)):
            table.add_column(f"t{idx + 1}", justify="center")
        for row in zip_longest(*self.state.tableau):
            table.add_row(*("" if card is None else self.card_formatter(card) for card in row))
        return table

    def render(self) -> RenderableType:
        return Group(self._top_row(), self._tableau())
