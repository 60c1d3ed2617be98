"""Data models for the simulated market feed."""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Sample:
    """One generated price point. Never modified after creation."""

    price: float
    timestamp: float = field(default_factory=time.time)  # Unix seconds

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "price": self.price}


@dataclass(frozen=True, slots=True)
class LatestPrice:
    """Most recent tick for an instrument.

    ``up`` is True when the new price is at or above the one it replaced.
    """

    instrument: str
    value: float
    up: bool
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        """Serialize for JSON / SSE transmission."""
        return {
            "instrument": self.instrument,
            "value": self.value,
            "up": self.up,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True, slots=True)
class EnrichedSample:
    """A history sample with trend, synthetic volume and running VWAP attached."""

    timestamp: float
    price: float
    trend: str  # 'up' or 'down'
    volume: int
    vwap: float
    cumulative_price_volume: float
    cumulative_volume: int

    @property
    def price_up(self) -> float | None:
        """Price when this sample is part of an up leg, else None (chart split)."""
        return self.price if self.trend == "up" else None

    @property
    def price_down(self) -> float | None:
        return self.price if self.trend == "down" else None

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "price": self.price,
            "trend": self.trend,
            "volume": self.volume,
            "vwap": self.vwap,
            "cumulative_price_volume": self.cumulative_price_volume,
            "cumulative_volume": self.cumulative_volume,
            "price_up": self.price_up,
            "price_down": self.price_down,
        }


@dataclass(frozen=True, slots=True)
class RsiPoint:
    timestamp: float
    rsi: float

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "rsi": self.rsi}


@dataclass(frozen=True, slots=True)
class SessionStats:
    """Open/high/low/last figures for one instrument's current history window."""

    first: float
    last: float
    high: float
    low: float
    change: float
    change_pct: float
    mood: str  # 'Bullish', 'Bearish' or 'Neutral'

    def to_dict(self) -> dict:
        return {
            "first": self.first,
            "last": self.last,
            "high": self.high,
            "low": self.low,
            "change": self.change,
            "change_pct": self.change_pct,
            "mood": self.mood,
        }


@dataclass(frozen=True, slots=True)
class MarketSummary:
    """Cross-instrument snapshot over the current subscriptions."""

    rising: int = 0
    falling: int = 0
    flat: int = 0
    total: float = 0.0
    subscribed: int = 0
    universe: int = 0
    last_tick_at: float | None = None

    def to_dict(self) -> dict:
        return {
            "rising": self.rising,
            "falling": self.falling,
            "flat": self.flat,
            "total": self.total,
            "subscribed": self.subscribed,
            "universe": self.universe,
            "last_tick_at": self.last_tick_at,
        }
