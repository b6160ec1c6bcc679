"""Play tic-tac-toe in the terminal.

Wires the engine to a `BoardView` and a `LifecycleHost` the same way a GUI would:
the board is redrawn from notifications, cell numbers typed at the prompt are
forwarded as clicks, and the game-over question decides whether a new game starts.

Usage:
    pip install -e . && python scripts/play_terminal.py

Settings come from the same environment variables as the API
(TICTACTOE_FIRST_TURN_DELAY_MS, TICTACTOE_SEED, TICTACTOE_LOG_LEVEL).
"""

from __future__ import annotations

import logging
import threading

from app.config import settings_from_env
from app.core.events import StatusChanged
from app.core.scheduler import ThreadingScheduler
from app.core.status import Deciding
from app.display import BoardView, render_board_text
from app.engine import GameEngine
from app.lifecycle import LifecycleHost


def _ask_yes_no(prompt: str) -> bool:
    answer = input(f"\n{prompt} [y/N] ").strip().casefold()
    return answer in {"y", "yes"}


def main() -> None:
    settings = settings_from_env()
    logging.basicConfig(level=settings.log_level)

    engine = GameEngine(
        scheduler=ThreadingScheduler(),
        first_turn_delay=settings.first_turn_delay,
        seed=settings.seed,
    )
    view = BoardView(engine)

    turn_ready = threading.Event()

    def _on_status(event: StatusChanged) -> None:
        if isinstance(event.status, Deciding):
            turn_ready.clear()
        else:
            turn_ready.set()

    def _game_over(prompt: str) -> bool:
        print(render_board_text(view))
        return _ask_yes_no(prompt)

    engine.subscribe(_on_status)
    host = LifecycleHost(engine=engine, view=view, ask_play_again=_game_over)

    host.launch()
    print(render_board_text(view))
    while not host.closed:
        turn_ready.wait()
        if host.closed:
            break

        print(render_board_text(view))
        raw = input("Cell (0-8), 'n' for a new game, 'q' to quit: ").strip().casefold()
        if raw == "q":
            break
        if raw == "n":
            host.new_game()
            continue
        if not raw.isdigit():
            continue
        view.click(int(raw))

    print(render_board_text(view))


if __name__ == "__main__":
    main()
