import asyncio
import logging

from fastapi import FastAPI

from app.api.deps import init_engine
from app.api.routes import router
from app.config import settings_from_env
from app.core.scheduler import AsyncioScheduler
from app.websocket_hub import HubRelay, hub

settings = settings_from_env()

app = FastAPI(title="tictactoe-engine", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def _startup() -> None:
    loop = asyncio.get_running_loop()
    engine = init_engine(settings=settings, scheduler=AsyncioScheduler(loop=loop))

    relay = HubRelay(hub=hub, loop=loop)
    app.state.hub_relay = relay
    engine.subscribe(relay)

    # Application launch starts the first game.
    if engine.generation == 0:
        engine.start()
    logger.info("Engine ready (seed=%s, first turn delay=%sms)", engine.seed, settings.first_turn_delay_ms)


@app.on_event("shutdown")
async def _shutdown() -> None:
    from app.api.deps import get_engine

    relay = getattr(app.state, "hub_relay", None)
    if relay is not None:
        get_engine().unsubscribe(relay)
        app.state.hub_relay = None


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "tictactoe-engine", "version": "0.1.0"}
