from __future__ import annotations

from app.config import EngineSettings
from app.core.scheduler import Scheduler
from app.engine import GameEngine

_ENGINE: GameEngine | None = None


def init_engine(*, settings: EngineSettings, scheduler: Scheduler) -> GameEngine:
    """Create the process-wide engine once.

    Safe to call multiple times; subsequent calls return the existing instance.
    """

    global _ENGINE
    if _ENGINE is None:
        _ENGINE = GameEngine(
            scheduler=scheduler,
            first_turn_delay=settings.first_turn_delay,
            seed=settings.seed,
        )
    return _ENGINE


def reset_engine_for_tests() -> None:
    """Drop the cached engine so tests can install one with a controllable scheduler."""

    global _ENGINE
    _ENGINE = None


def get_engine() -> GameEngine:
    if _ENGINE is None:
        raise RuntimeError("Engine not initialized. Call init_engine() at startup.")
    return _ENGINE
