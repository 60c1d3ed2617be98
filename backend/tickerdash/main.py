"""FastAPI application wiring for the simulated market dashboard backend."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .market import (
    MarketEngine,
    UnknownInstrumentError,
    create_market_engine,
    create_market_router,
    create_stream_router,
)

logger = logging.getLogger(__name__)


def create_app(engine: MarketEngine | None = None) -> FastAPI:
    """Build the app around one engine. The engine ticks only while the app is up."""
    logging.basicConfig(
        level=os.environ.get("TICKERDASH_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if engine is None:
        engine = create_market_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await engine.start()
        try:
            yield
        finally:
            # History stays in memory for inspection after shutdown
            await engine.stop()

    app = FastAPI(title="Tickerdash", lifespan=lifespan)
    app.state.engine = engine

    @app.exception_handler(UnknownInstrumentError)
    async def unknown_instrument_handler(request: Request, exc: UnknownInstrumentError) -> JSONResponse:
        logger.debug("Rejected unknown instrument %r on %s", exc.instrument, request.url.path)
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    app.include_router(create_market_router(engine))
    app.include_router(create_stream_router(engine))

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "engine_running": engine.running, "live": engine.is_live}

    return app
