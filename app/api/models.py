from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from app.core.board import Symbol
from app.core.status import GamePhase, InProgress, MoveError, Won
from app.core.status_text import status_message
from app.display import symbol_label
from app.engine import GameSnapshot


class MoveRequest(BaseModel):
    # Passed through unconverted: the engine rejects anything but an int in 0..8
    # (booleans, numeric strings and floats included) as `invalid_cell`.
    cell: Any


class GameView(BaseModel):
    generation: int
    phase: GamePhase
    cells: list[str] = Field(default_factory=list)

    # Whose turn it is; only set while in progress.
    next: Symbol | None = None

    # Winner and the three winning cells; only set when won.
    winner: Symbol | None = None
    line: list[int] | None = None

    message: str

    @classmethod
    def from_snapshot(cls, snap: GameSnapshot) -> "GameView":
        status = snap.status
        return cls(
            generation=snap.generation,
            phase=status.phase,
            cells=[symbol_label(c) for c in snap.board],
            next=status.next if isinstance(status, InProgress) else None,
            winner=status.symbol if isinstance(status, Won) else None,
            line=list(status.line) if isinstance(status, Won) else None,
            message=status_message(status),
        )


class MoveRejected(BaseModel):
    error: MoveError
    game: GameView
