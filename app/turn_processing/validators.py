from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.core.board import Board, is_valid_index
from app.core.status import GameStatus, MoveError, accepts_moves


@dataclass(frozen=True, slots=True)
class MoveContext:
    """Inputs available to validators.

    Kept small so it can be logged as-is.
    """

    cell: object
    status: GameStatus
    board: Board


class MoveValidator(ABC):
    """One precondition for an incoming move."""

    @abstractmethod
    def check(self, *, ctx: MoveContext) -> MoveError | None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class AcceptingMovesValidator(MoveValidator):
    """Deny moves while deciding the first turn and after the game is over."""

    def check(self, *, ctx: MoveContext) -> MoveError | None:
        if not accepts_moves(ctx.status):
            return MoveError.game_not_accepting_moves
        return None


@dataclass(frozen=True, slots=True)
class CellRangeValidator(MoveValidator):
    def check(self, *, ctx: MoveContext) -> MoveError | None:
        if not is_valid_index(ctx.cell):
            return MoveError.invalid_cell
        return None


@dataclass(frozen=True, slots=True)
class VacantCellValidator(MoveValidator):
    # Relies on CellRangeValidator having run first.
    def check(self, *, ctx: MoveContext) -> MoveError | None:
        if not ctx.board.is_empty(ctx.cell):  # type: ignore[arg-type]
            return MoveError.cell_occupied
        return None


@dataclass(frozen=True, slots=True)
class MovePipeline:
    validators: tuple[MoveValidator, ...]

    def first_error(self, *, ctx: MoveContext) -> MoveError | None:
        """Run validators in order and stop at the first rejection."""

        for v in self.validators:
            err = v.check(ctx=ctx)
            if err is not None:
                return err
        return None


def default_move_pipeline() -> MovePipeline:
    return MovePipeline(
        validators=(
            AcceptingMovesValidator(),
            CellRangeValidator(),
            VacantCellValidator(),
        )
    )
