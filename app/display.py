from __future__ import annotations

import logging

from app.core.board import CELL_COUNT, Symbol
from app.core.events import StatusChanged
from app.core.status import Deciding, GameStatus, MoveResult, Won, accepts_moves
from app.core.status_text import status_message
from app.engine import GameEngine

logger = logging.getLogger(__name__)


class BoardView:
    """Passive display adapter for one engine.

    Renders from notifications only: nine cell labels, a status line and the
    highlighted winning line. Clicks on disabled cells never reach the engine,
    and engine rejections are ignored.
    """

    def __init__(self, engine: GameEngine) -> None:
        self._engine = engine
        self.cells: list[str] = [""] * CELL_COUNT
        self.message: str = ""
        self.highlighted: frozenset[int] = frozenset()
        self.input_enabled: bool = True
        self._status: GameStatus = Deciding()

        snap = engine.snapshot()
        self._render(snap.status, snap.board)
        engine.subscribe(self.on_status_changed)

    @property
    def status(self) -> GameStatus:
        return self._status

    def on_status_changed(self, event: StatusChanged) -> None:
        self._render(event.status, event.board)
        if isinstance(event.status, Deciding):
            # A new game re-enables input after a declined replay.
            self.input_enabled = True

    def _render(self, status: GameStatus, board: tuple[Symbol | None, ...]) -> None:
        self._status = status
        self.cells = [symbol_label(c) for c in board]
        self.message = status_message(status)
        self.highlighted = frozenset(status.line) if isinstance(status, Won) else frozenset()

    def cell_enabled(self, index: int) -> bool:
        return (
            self.input_enabled
            and accepts_moves(self._status)
            and 0 <= index < CELL_COUNT
            and not self.cells[index]
        )

    def click(self, index: int) -> MoveResult | None:
        """Forward a cell selection; returns None when the cell is disabled."""

        if not self.cell_enabled(index):
            return None
        result = self._engine.apply_move(index)
        if not result.ok:
            logger.debug("Ignoring rejected click on cell %d: %s", index, result.error)
        return result

    def disable_input(self, message: str | None = None) -> None:
        self.input_enabled = False
        if message is not None:
            self.message = message

    def close(self) -> None:
        self._engine.unsubscribe(self.on_status_changed)


def render_board_text(view: BoardView) -> str:
    """Plain-text board; empty cells show their index, winning cells are bracketed."""

    def label(i: int) -> str:
        mark = view.cells[i] or str(i)
        return f"[{mark}]" if i in view.highlighted else f" {mark} "

    rows = ["|".join(label(i) for i in range(r, r + 3)) for r in range(0, CELL_COUNT, 3)]
    sep = "\n" + "-" * len(rows[0]) + "\n"
    return f"{view.message}\n\n{sep.join(rows)}\n"


def symbol_label(symbol: Symbol | None) -> str:
    return symbol.value if symbol is not None else ""
