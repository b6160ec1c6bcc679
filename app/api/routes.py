from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from app.api.deps import get_engine
from app.api.models import GameView, MoveRejected, MoveRequest
from app.core.status import MoveError
from app.engine import GameEngine
from app.websocket_hub import hub

router = APIRouter()


def _game_state_payload() -> dict[str, object]:
    view = GameView.from_snapshot(get_engine().snapshot())
    return {"type": "game_state", **view.model_dump(mode="json")}


@router.websocket("/ws/game")
async def game_updates_ws(websocket: WebSocket) -> None:
    try:
        await hub.connect(websocket, greeting=_game_state_payload)
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(websocket)
    except Exception:
        await hub.disconnect(websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/game", response_model=GameView)
async def get_game_route(engine: GameEngine = Depends(get_engine)) -> GameView:
    return GameView.from_snapshot(engine.snapshot())


@router.post("/game/start", response_model=GameView, status_code=status.HTTP_201_CREATED)
async def start_game_route(engine: GameEngine = Depends(get_engine)) -> GameView:
    engine.start()
    return GameView.from_snapshot(engine.snapshot())


@router.post("/game/moves", response_model=GameView)
async def move_route(payload: MoveRequest, engine: GameEngine = Depends(get_engine)) -> GameView:
    result = engine.apply_move(payload.cell)
    if result.error is not None:
        code = (
            status.HTTP_422_UNPROCESSABLE_ENTITY
            if result.error is MoveError.invalid_cell
            else status.HTTP_409_CONFLICT
        )
        body = MoveRejected(error=result.error, game=GameView.from_snapshot(engine.snapshot()))
        raise HTTPException(status_code=code, detail=body.model_dump(mode="json"))

    return GameView.from_snapshot(engine.snapshot())
