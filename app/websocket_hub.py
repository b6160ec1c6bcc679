from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from fastapi import WebSocket

from app.api.models import GameView
from app.core.events import StatusChanged
from app.engine import GameSnapshot

logger = logging.getLogger(__name__)


class GameWebSocketHub:
    """In-process WebSocket fan-out for the single game.

    Contract:
      - register a connection via `connect(websocket, greeting=...)`; the greeting is
        sent before the connection can receive any broadcast.
      - broadcast lightweight events with `broadcast(payload)`.

    Payloads should be JSON-serializable dicts.
    """

    def __init__(self) -> None:
        self._conns: set[WebSocket] = set()
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    def _get_lock(self) -> asyncio.Lock:
        # One lock per event loop; the module-level hub outlives app restarts (tests).
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def connect(
        self,
        websocket: WebSocket,
        *,
        greeting: Callable[[], dict[str, object]] | None = None,
    ) -> None:
        await websocket.accept()
        async with self._get_lock():
            # Broadcasts wait on the lock, so nothing overtakes the greeting.
            if greeting is not None:
                await websocket.send_json(greeting())
            self._conns.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._get_lock():
            self._conns.discard(websocket)

    async def broadcast(self, payload: dict[str, object]) -> None:
        async with self._get_lock():
            conns = list(self._conns)

        if not conns:
            return

        dead: list[WebSocket] = []
        for ws in conns:
            try:
                await ws.send_json(payload)
            except Exception:
                dead.append(ws)

        if dead:
            logger.debug("Dropping %d dead websocket(s)", len(dead))
            async with self._get_lock():
                for ws in dead:
                    self._conns.discard(ws)


def game_updated_payload(event: StatusChanged) -> dict[str, object]:
    view = GameView.from_snapshot(GameSnapshot(generation=event.generation, status=event.status, board=event.board))
    return {"type": "game_updated", "event": event.type, "seq": event.seq, **view.model_dump(mode="json")}


class HubRelay:
    """Engine observer that hands notifications to the hub's event loop.

    Notifications can come from a request handler, a timer callback or a test thread,
    so they are always scheduled onto `loop` thread-safely.
    """

    def __init__(self, *, hub: GameWebSocketHub, loop: asyncio.AbstractEventLoop) -> None:
        self._hub = hub
        self._loop = loop

    def __call__(self, event: StatusChanged) -> None:
        asyncio.run_coroutine_threadsafe(self._hub.broadcast(game_updated_payload(event)), self._loop)


hub = GameWebSocketHub()
