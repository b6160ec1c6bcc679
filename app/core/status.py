from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, TypeAlias

from app.core.board import Symbol


class GamePhase(StrEnum):
    deciding = "deciding"
    in_progress = "in_progress"
    won = "won"
    draw = "draw"


@dataclass(frozen=True, slots=True)
class Deciding:
    """Waiting for the randomized first-turn pick."""

    phase: ClassVar[GamePhase] = GamePhase.deciding


@dataclass(frozen=True, slots=True)
class InProgress:
    next: Symbol

    phase: ClassVar[GamePhase] = GamePhase.in_progress


@dataclass(frozen=True, slots=True)
class Won:
    symbol: Symbol
    line: tuple[int, int, int]

    phase: ClassVar[GamePhase] = GamePhase.won


@dataclass(frozen=True, slots=True)
class Draw:
    phase: ClassVar[GamePhase] = GamePhase.draw


GameStatus: TypeAlias = Deciding | InProgress | Won | Draw


def is_terminal(status: GameStatus) -> bool:
    return isinstance(status, (Won, Draw))


def accepts_moves(status: GameStatus) -> bool:
    return isinstance(status, InProgress)


class MoveError(StrEnum):
    game_not_accepting_moves = "game_not_accepting_moves"
    invalid_cell = "invalid_cell"
    cell_occupied = "cell_occupied"


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of `GameEngine.apply_move`.

    - `status`: the game status after the call (unchanged when rejected).
    - `error`: why the move was rejected, or None when it was accepted.
    """

    status: GameStatus
    error: MoveError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def accepted(status: GameStatus) -> "MoveResult":
        return MoveResult(status=status)

    @staticmethod
    def rejected(status: GameStatus, error: MoveError) -> "MoveResult":
        return MoveResult(status=status, error=error)
