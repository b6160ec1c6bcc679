from __future__ import annotations

import logging
import random
import threading
from collections import deque
from dataclasses import dataclass
from functools import partial

from app.core.board import Board, Symbol
from app.core.events import EventType, StatusChanged, StatusObserver
from app.core.scheduler import Cancellable, Scheduler
from app.core.status import Deciding, Draw, GameStatus, InProgress, MoveResult, Won
from app.fsm import GameFSM
from app.turn_processing.validators import MoveContext, MovePipeline, default_move_pipeline

logger = logging.getLogger(__name__)

STARTING_SYMBOLS: tuple[Symbol, Symbol] = (Symbol.X, Symbol.O)


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    generation: int
    status: GameStatus
    board: tuple[Symbol | None, ...]


class GameEngine:
    """Owns the single game instance and is its only mutation surface.

    Contract:
      - `start()` resets the board and schedules the first-turn pick.
      - `apply_move(cell)` validates and plays one cell; rejections are returned, not raised.
      - observers registered with `subscribe` get a `StatusChanged` for every status change,
        in order, outside the engine lock.

    All mutations happen under one lock, so the engine may be driven from a timer thread
    and a caller thread at the same time.
    """

    def __init__(
        self,
        *,
        scheduler: Scheduler,
        first_turn_delay: float = 0.5,
        rng: random.Random | None = None,
        seed: int | None = None,
        pipeline: MovePipeline | None = None,
    ) -> None:
        if rng is None:
            if seed is None:
                seed = random.SystemRandom().randint(1, 2**31 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self._rng = rng
        self._scheduler = scheduler
        self._first_turn_delay = first_turn_delay
        self._pipeline = pipeline or default_move_pipeline()

        self._lock = threading.RLock()
        self._board = Board()
        self._fsm = GameFSM()
        self._status: GameStatus = Deciding()
        self._generation = 0
        self._seq = 0
        self._pending: Cancellable | None = None

        self._observers: list[StatusObserver] = []
        self._outbox: deque[StatusChanged] = deque()
        self._dispatching = False

    # Observers

    def subscribe(self, observer: StatusObserver) -> None:
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def unsubscribe(self, observer: StatusObserver) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    # Queries

    def current_status(self) -> GameStatus:
        return self._status

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def board(self) -> tuple[Symbol | None, ...]:
        return self._board.cells

    @property
    def has_pending_decision(self) -> bool:
        return self._pending is not None

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(generation=self._generation, status=self._status, board=self._board.cells)

    # Mutations

    def start(self) -> GameStatus:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None

            self._generation += 1
            self._board = Board()
            self._fsm.restart()
            self._status = Deciding()

            generation = self._generation
            self._pending = self._scheduler.call_later(
                self._first_turn_delay,
                partial(self._decide_first_turn, generation),
            )
            self._record("GAME_STARTED")
            status = self._status

        logger.info("Game %d started; deciding first turn", generation)
        self._publish()
        return status

    def apply_move(self, cell: int) -> MoveResult:
        with self._lock:
            ctx = MoveContext(cell=cell, status=self._status, board=self._board)
            err = self._pipeline.first_error(ctx=ctx)
            if err is not None:
                logger.debug("Move at %r rejected: %s (status=%r)", cell, err.value, self._status)
                return MoveResult.rejected(self._status, err)

            current = self._status
            if not isinstance(current, InProgress):
                raise RuntimeError(f"Move pipeline accepted a move while {current.phase.value}")
            symbol = current.next
            self._board.place(cell, symbol)

            line = self._board.completed_line(symbol)
            if line is not None:
                self._fsm.line_completed()
                self._status = Won(symbol=symbol, line=line)
            elif self._board.is_full():
                self._fsm.board_filled()
                self._status = Draw()
            else:
                self._fsm.turn_passed()
                self._status = InProgress(next=symbol.other)

            self._record("MOVE_APPLIED", cell=cell)
            status = self._status
            generation = self._generation

        logger.info("Game %d: %s played cell %d -> %s", generation, symbol, cell, status.phase.value)
        self._publish()
        return MoveResult.accepted(status)

    def _decide_first_turn(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Ignoring first-turn pick for stale game %d (current %d)", generation, self._generation)
                return
            self._pending = None
            symbol = self._rng.choice(STARTING_SYMBOLS)
            self._fsm.turn_decided()
            self._status = InProgress(next=symbol)
            self._record("TURN_DECIDED")

        logger.info("Game %d: %s moves first", generation, symbol)
        self._publish()

    # Notification

    def _record(self, type: EventType, *, cell: int | None = None) -> None:
        self._seq += 1
        event = StatusChanged.now(
            type=type,
            generation=self._generation,
            seq=self._seq,
            status=self._status,
            board=self._board.cells,
            cell=cell,
        )
        self._outbox.append(event)

    def _publish(self) -> None:
        """Deliver queued events in order.

        An observer that calls back into the engine only queues its event here;
        the outer delivery loop picks it up once the current event reached everyone.
        """

        with self._lock:
            if self._dispatching:
                return
            self._dispatching = True

        try:
            while True:
                with self._lock:
                    if not self._outbox:
                        self._dispatching = False
                        return
                    nxt = self._outbox.popleft()
                    observers = list(self._observers)

                for observer in observers:
                    try:
                        observer(nxt)
                    except Exception:
                        logger.exception("Status observer %r failed on %s", observer, nxt.type)
        except BaseException:
            with self._lock:
                self._dispatching = False
            raise
