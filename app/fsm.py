from __future__ import annotations

from statemachine import State, StateMachine

from app.core.status import GamePhase


class GameFSM(StateMachine):
    """Phase guard for a single game.

    - phases: deciding -> in_progress -> won | draw
    - `restart` is accepted from every phase and is the only way out of won/draw.
    - the engine owns board and status data; the FSM only rejects illegal transitions.
    """

    deciding = State(GamePhase.deciding.value, value=GamePhase.deciding.value, initial=True)
    in_progress = State(GamePhase.in_progress.value, value=GamePhase.in_progress.value)
    won = State(GamePhase.won.value, value=GamePhase.won.value)
    draw = State(GamePhase.draw.value, value=GamePhase.draw.value)

    turn_decided = deciding.to(in_progress)
    turn_passed = in_progress.to.itself()
    line_completed = in_progress.to(won)
    board_filled = in_progress.to(draw)
    restart = deciding.to.itself() | in_progress.to(deciding) | won.to(deciding) | draw.to(deciding)

    @property
    def phase(self) -> GamePhase:
        return GamePhase(str(self.current_state.value))
