from __future__ import annotations

from app.core.status import Deciding, Draw, GameStatus, InProgress, Won

DECIDING_MESSAGE = "Deciding first turn..."
DRAW_MESSAGE = "It's a draw!"
GAME_ENDED_SUFFIX = " (Game ended)"
PLAY_AGAIN_QUESTION = "Would you like to play again?"


def status_message(status: GameStatus) -> str:
    """Short status line shown above the board."""

    if isinstance(status, Deciding):
        return DECIDING_MESSAGE
    if isinstance(status, InProgress):
        return f"{status.next} Turn"
    if isinstance(status, Won):
        return f"{status.symbol} wins!"
    if isinstance(status, Draw):
        return DRAW_MESSAGE
    raise TypeError(f"Unknown game status: {status!r}")


def game_ended_message(status: GameStatus) -> str:
    # Shown when the player declines another round.
    return status_message(status) + GAME_ENDED_SUFFIX


def play_again_prompt(status: GameStatus) -> str:
    return f"{status_message(status)}\n\n{PLAY_AGAIN_QUESTION}"
