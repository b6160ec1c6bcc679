from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from app.core.board import Board, Symbol
from app.core.status import Deciding, Draw, GamePhase, InProgress, MoveError, Won
from app.fsm import GameFSM
from app.turn_processing.validators import MoveContext, default_move_pipeline


def test_fsm_walks_through_a_full_game() -> None:
    fsm = GameFSM()
    assert fsm.phase == GamePhase.deciding

    fsm.turn_decided()
    assert fsm.phase == GamePhase.in_progress

    fsm.turn_passed()
    assert fsm.phase == GamePhase.in_progress

    fsm.line_completed()
    assert fsm.phase == GamePhase.won

    fsm.restart()
    assert fsm.phase == GamePhase.deciding


def test_fsm_restart_is_accepted_from_every_phase() -> None:
    fsm = GameFSM()
    fsm.restart()
    assert fsm.phase == GamePhase.deciding

    fsm.turn_decided()
    fsm.restart()
    assert fsm.phase == GamePhase.deciding

    fsm.turn_decided()
    fsm.board_filled()
    assert fsm.phase == GamePhase.draw
    fsm.restart()
    assert fsm.phase == GamePhase.deciding


@pytest.mark.parametrize("event", ["turn_passed", "line_completed", "board_filled"])
def test_fsm_rejects_moves_while_deciding(event: str) -> None:
    fsm = GameFSM()
    with pytest.raises(TransitionNotAllowed):
        fsm.send(event)


@pytest.mark.parametrize("event", ["turn_decided", "turn_passed", "line_completed", "board_filled"])
def test_fsm_terminal_phases_only_leave_through_restart(event: str) -> None:
    fsm = GameFSM()
    fsm.turn_decided()
    fsm.line_completed()

    with pytest.raises(TransitionNotAllowed):
        fsm.send(event)
    assert fsm.phase == GamePhase.won


def _ctx(cell: object, status, board: Board | None = None) -> MoveContext:
    return MoveContext(cell=cell, status=status, board=board or Board())


@pytest.mark.parametrize("status", [Deciding(), Draw(), Won(symbol=Symbol.O, line=(0, 1, 2))])
def test_pipeline_denies_moves_outside_in_progress(status) -> None:
    assert default_move_pipeline().first_error(ctx=_ctx(0, status)) is MoveError.game_not_accepting_moves


def test_pipeline_checks_range_before_occupancy() -> None:
    board = Board()
    board.place(4, Symbol.X)
    pipeline = default_move_pipeline()
    status = InProgress(next=Symbol.O)

    assert pipeline.first_error(ctx=_ctx(-1, status, board)) is MoveError.invalid_cell
    assert pipeline.first_error(ctx=_ctx(9, status, board)) is MoveError.invalid_cell
    assert pipeline.first_error(ctx=_ctx(4, status, board)) is MoveError.cell_occupied
    assert pipeline.first_error(ctx=_ctx(5, status, board)) is None
