"""SSE streaming endpoint for the live market snapshot."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from .engine import MarketEngine

logger = logging.getLogger(__name__)


def create_stream_router(engine: MarketEngine, interval: float = 0.5) -> APIRouter:
    """Create the SSE streaming router with a reference to the market engine.

    This factory pattern lets us inject the engine without globals.
    """
    router = APIRouter(prefix="/api/stream", tags=["streaming"])

    @router.get("/market")
    async def stream_market(request: Request) -> StreamingResponse:
        """SSE endpoint for live market updates.

        Emits an event whenever the price cache changes, in the format:

            data: {"prices": {"TATA": {"value": 1503.2, "up": true, ...}},
                   "summary": {"rising": 1, "falling": 0, ...}}

        Includes a retry directive so the browser auto-reconnects on
        disconnection (EventSource built-in behavior).
        """
        return StreamingResponse(
            _generate_events(engine, request, interval),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


def snapshot_payload(engine: MarketEngine) -> dict:
    """Latest prices for current subscriptions plus the market summary."""
    subscribed = set(engine.get_subscriptions())
    prices = {
        instrument: latest.to_dict()
        for instrument, latest in engine.get_all_latest().items()
        if instrument in subscribed
    }
    return {"prices": prices, "summary": engine.get_market_summary().to_dict()}


async def _generate_events(
    engine: MarketEngine,
    request: Request,
    interval: float,
) -> AsyncGenerator[str, None]:
    """Async generator that yields SSE-formatted market events.

    Polls the engine every `interval` seconds and only sends when the price
    version moved. Stops when the client disconnects.
    """
    # Tell the client to retry after 1 second if the connection drops
    yield "retry: 1000\n\n"

    last_version = -1
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)

    try:
        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            current_version = engine.version
            if current_version != last_version:
                last_version = current_version
                yield f"data: {json.dumps(snapshot_payload(engine))}\n\n"

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
