from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal, TypeAlias

from app.core.board import Symbol
from app.core.status import GameStatus

EventType = Literal[
    "GAME_STARTED",
    "TURN_DECIDED",
    "MOVE_APPLIED",
]


@dataclass(frozen=True, slots=True)
class StatusChanged:
    """Notification sent to observers on every status change.

    `generation` increments on each `start()`; `seq` increments on every event.
    `cell` is the index just played for MOVE_APPLIED, otherwise None.
    """

    type: EventType
    generation: int
    seq: int
    status: GameStatus
    board: tuple[Symbol | None, ...]
    cell: int | None
    ts: datetime

    @staticmethod
    def now(
        *,
        type: EventType,
        generation: int,
        seq: int,
        status: GameStatus,
        board: tuple[Symbol | None, ...],
        cell: int | None = None,
    ) -> "StatusChanged":
        return StatusChanged(
            type=type,
            generation=generation,
            seq=seq,
            status=status,
            board=board,
            cell=cell,
            ts=datetime.now(timezone.utc),
        )


StatusObserver: TypeAlias = Callable[[StatusChanged], None]
