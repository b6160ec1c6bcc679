from __future__ import annotations

import random
from collections.abc import Callable, Generator
from dataclasses import dataclass

import pytest


@dataclass(slots=True)
class ManualHandle:
    delay: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose timers only fire when a test says so."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(delay=delay, callback=callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def run_pending(self) -> int:
        """Fire every non-cancelled timer once; returns how many fired."""

        due = self.pending
        self.handles = []
        for h in due:
            h.callback()
        return len(due)


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def make_engine(scheduler: ManualScheduler):
    """Factory for engines driven by the manual scheduler.

    `first=` forces the starting symbol by stubbing the RNG choice.
    """

    from app.core.board import Symbol
    from app.engine import GameEngine

    def _make(*, first: Symbol | None = None, seed: int = 1234) -> GameEngine:
        rng = random.Random(seed)
        if first is not None:
            rng.choice = lambda seq: first  # type: ignore[method-assign]
        return GameEngine(scheduler=scheduler, rng=rng)

    return _make


@pytest.fixture()
def started(make_engine, scheduler: ManualScheduler):
    """Factory returning an engine that already finished deciding the first turn."""

    from app.core.board import Symbol

    def _started(first: Symbol = Symbol.X):
        engine = make_engine(first=first)
        engine.start()
        scheduler.run_pending()
        return engine

    return _started


@pytest.fixture()
def client_and_scheduler(scheduler: ManualScheduler) -> Generator[tuple, None, None]:
    """FastAPI TestClient backed by an engine on the manual scheduler."""

    from fastapi.testclient import TestClient

    from app.api.deps import init_engine, reset_engine_for_tests
    from app.config import EngineSettings
    from app.main import app

    reset_engine_for_tests()
    engine = init_engine(settings=EngineSettings(seed=7), scheduler=scheduler)

    with TestClient(app) as c:
        yield c, scheduler, engine

    reset_engine_for_tests()
