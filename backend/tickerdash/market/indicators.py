"""Indicators derived from an instrument's price history.

Every function here is pure over the samples it is given. Nothing is cached
and the history store is never touched, so callers recompute on each read.

The formulas are the simplified dashboard versions, not textbook ones:
    - volume is synthetic and re-drawn on every call
    - VWAP accumulates from the first sample of the window
    - RSI divides gains/losses accumulated since the first sample by the
      period, instead of Wilder's rolling average
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from .instruments import RSI_EPSILON, RSI_PERIOD, VOLUME_FLOOR, VOLUME_SPAN
from .interface import RandomSource, default_random_source
from .models import EnrichedSample, RsiPoint, Sample


def classify_trends(prices: Sequence[float]) -> list[str]:
    """'up' if a price is at or above its predecessor, else 'down'.

    The first price has nothing to compare against and is always 'up'.
    """
    if not prices:
        return []
    trends = ["up"]
    for prev, curr in zip(prices, prices[1:]):
        trends.append("up" if curr >= prev else "down")
    return trends


def synthetic_volumes(n: int, rng: RandomSource) -> list[int]:
    """Illustrative traded volume in [3000, 12000), independent of price."""
    return [math.floor(VOLUME_FLOOR + float(rng.random()) * VOLUME_SPAN) for _ in range(n)]


def enrich(samples: Sequence[Sample], rng: RandomSource | None = None) -> list[EnrichedSample]:
    """Attach trend, volume and running VWAP to each sample.

    Two calls over the same samples agree on trend but not on volume (and
    therefore not on VWAP) unless the same seeded ``rng`` state is supplied.
    """
    if not samples:
        return []
    if rng is None:
        rng = default_random_source()

    prices = np.array([s.price for s in samples], dtype=float)
    volumes = synthetic_volumes(len(samples), rng)
    cum_pv = np.cumsum(prices * np.array(volumes, dtype=float))
    cum_vol = np.cumsum(volumes)
    trends = classify_trends(prices.tolist())

    return [
        EnrichedSample(
            timestamp=s.timestamp,
            price=s.price,
            trend=trends[i],
            volume=volumes[i],
            vwap=float(cum_pv[i] / cum_vol[i]),
            cumulative_price_volume=float(cum_pv[i]),
            cumulative_volume=int(cum_vol[i]),
        )
        for i, s in enumerate(samples)
    ]


def rsi_series(samples: Sequence[Sample | EnrichedSample], period: int = RSI_PERIOD) -> list[RsiPoint]:
    """Simplified RSI, one point per sample from index ``period`` onward.

    For each i >= period:
        avg_gain = (sum of positive moves over 1..i) / period
        avg_loss = (sum of negative moves over 1..i) / period, or 1e-6 if zero
        rsi      = 100 - 100 / (1 + avg_gain / avg_loss)

    Returns an empty list when there are ``period`` samples or fewer.
    """
    if period < 1:
        raise ValueError(f"RSI period must be positive, got {period}")
    if len(samples) <= period:
        return []

    diffs = np.diff(np.array([s.price for s in samples], dtype=float))
    gains = np.cumsum(np.clip(diffs, 0.0, None))
    losses = np.cumsum(np.clip(-diffs, 0.0, None))

    points: list[RsiPoint] = []
    for i in range(period, len(samples)):
        # diffs[i - 1] is the move from samples[i - 1] to samples[i]
        avg_gain = float(gains[i - 1]) / period
        avg_loss = float(losses[i - 1]) / period or RSI_EPSILON
        rs = avg_gain / avg_loss
        points.append(RsiPoint(timestamp=samples[i].timestamp, rsi=100 - 100 / (1 + rs)))
    return points
