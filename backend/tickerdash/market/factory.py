"""Factory for creating the market engine from environment configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from .engine import MarketEngine
from .instruments import BASE_PRICE, HISTORY_SIZE, RSI_PERIOD, TICK_INTERVAL
from .interface import split_random_sources

logger = logging.getLogger(__name__)


def create_market_engine() -> MarketEngine:
    """Create a MarketEngine configured from environment variables.

    - TICKERDASH_TICK_INTERVAL  seconds between steps (default 0.9)
    - TICKERDASH_HISTORY_SIZE   samples kept per instrument (default 120)
    - TICKERDASH_RSI_PERIOD     RSI period (default 14)
    - TICKERDASH_BASE_PRICE     first-tick reference price (default 1500.00)
    - TICKERDASH_SEED           integer seed for a reproducible feed

    Malformed or non-positive values are logged and replaced by the default.
    Returns an unstarted engine. Caller must await engine.start().
    """
    interval = _env_number("TICKERDASH_TICK_INTERVAL", TICK_INTERVAL, float)
    history_size = _env_number("TICKERDASH_HISTORY_SIZE", HISTORY_SIZE, int)
    rsi_period = _env_number("TICKERDASH_RSI_PERIOD", RSI_PERIOD, int)
    base_price = _env_number("TICKERDASH_BASE_PRICE", BASE_PRICE, float)

    seed_raw = os.environ.get("TICKERDASH_SEED", "").strip()
    seed: int | None = None
    if seed_raw:
        try:
            seed = int(seed_raw)
        except ValueError:
            logger.warning("Ignoring non-integer TICKERDASH_SEED=%r", seed_raw)

    if seed is not None:
        logger.info("Market engine: seeded simulator (seed=%d)", seed)
    else:
        logger.info("Market engine: random simulator")

    tick_rng, volume_rng = split_random_sources(seed)
    return MarketEngine(
        base_price=base_price,
        history_size=history_size,
        tick_interval=interval,
        rsi_period=rsi_period,
        rng=tick_rng,
        volume_rng=volume_rng,
    )


def _env_number(name: str, default: float, cast: Callable[[str], float]) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r; using %s", name, raw, default)
        return default
    if not value > 0:
        logger.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return default
    return value
