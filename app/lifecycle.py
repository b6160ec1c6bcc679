from __future__ import annotations

import logging
from collections.abc import Callable

from app.core.events import StatusChanged
from app.core.status import GameStatus, is_terminal
from app.core.status_text import game_ended_message, play_again_prompt
from app.display import BoardView
from app.engine import GameEngine

logger = logging.getLogger(__name__)

# Receives the prompt text; True means "Play Again", False means "Close".
ReplayPrompt = Callable[[str], bool]


class LifecycleHost:
    """Starts games and handles the game-over "play again" question.

    - `launch()` starts the first game.
    - on a terminal notification the host asks `ask_play_again`; yes starts a new game,
      no disables the view's input and leaves the engine in its terminal state.
    """

    def __init__(self, *, engine: GameEngine, view: BoardView, ask_play_again: ReplayPrompt) -> None:
        self._engine = engine
        self._view = view
        self._ask_play_again = ask_play_again
        self.closed = False
        engine.subscribe(self.on_status_changed)

    def launch(self) -> GameStatus:
        self.closed = False
        return self._engine.start()

    def new_game(self) -> GameStatus:
        # "New Game" is allowed at any point, including mid-game.
        self.closed = False
        return self._engine.start()

    def on_status_changed(self, event: StatusChanged) -> None:
        if not is_terminal(event.status):
            return
        # Only react to the latest game; a queued terminal event can be stale.
        if event.generation != self._engine.generation:
            return

        if self._ask_play_again(play_again_prompt(event.status)):
            logger.info("Replay accepted after game %d", event.generation)
            self._engine.start()
        else:
            logger.info("Replay declined after game %d", event.generation)
            self.closed = True
            self._view.disable_input(game_ended_message(event.status))
