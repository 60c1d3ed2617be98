"""REST endpoints over the market engine."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from .engine import MarketEngine


class LiveToggle(BaseModel):
    live: bool


def create_market_router(engine: MarketEngine) -> APIRouter:
    """Create the market REST router bound to a single engine instance."""
    router = APIRouter(prefix="/api/market", tags=["market"])

    def _state() -> dict:
        return {
            "instruments": list(engine.instruments),
            "subscriptions": engine.get_subscriptions(),
            "live": engine.is_live,
        }

    @router.get("/instruments")
    async def list_instruments() -> dict:
        return _state()

    @router.post("/subscriptions")
    async def subscribe_all() -> dict:
        engine.subscribe_all()
        return _state()

    @router.delete("/subscriptions")
    async def clear_all() -> dict:
        engine.clear_all()
        return _state()

    @router.post("/subscriptions/{instrument}")
    async def subscribe(instrument: str) -> dict:
        engine.subscribe(instrument)
        return _state()

    @router.delete("/subscriptions/{instrument}")
    async def unsubscribe(instrument: str) -> dict:
        engine.unsubscribe(instrument)
        return _state()

    @router.put("/live")
    async def set_live(body: LiveToggle) -> dict:
        engine.set_live(body.live)
        return _state()

    @router.get("/prices/{instrument}")
    async def latest_price(instrument: str) -> dict:
        latest = engine.get_latest_price(instrument)
        if latest is None:
            raise HTTPException(status_code=404, detail=f"No price yet for {instrument.upper()}")
        return latest.to_dict()

    @router.get("/history/{instrument}")
    async def history(instrument: str) -> list[dict]:
        return [s.to_dict() for s in engine.get_history(instrument)]

    @router.get("/enriched/{instrument}")
    async def enriched(instrument: str) -> list[dict]:
        return [s.to_dict() for s in engine.get_enriched(instrument)]

    @router.get("/rsi/{instrument}")
    async def rsi(instrument: str) -> list[dict]:
        return [p.to_dict() for p in engine.get_rsi_series(instrument)]

    @router.get("/stats/{instrument}")
    async def stats(instrument: str) -> dict | None:
        result = engine.get_session_stats(instrument)
        return result.to_dict() if result else None

    @router.get("/summary")
    async def summary() -> dict:
        return engine.get_market_summary().to_dict()

    return router

