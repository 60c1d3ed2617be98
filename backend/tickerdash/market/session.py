"""Per-instrument session stats and the cross-instrument market summary."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .cache import PriceCache
from .instruments import MOOD_THRESHOLD_PCT
from .models import EnrichedSample, MarketSummary, Sample, SessionStats


def classify_mood(change_pct: float) -> str:
    if change_pct > MOOD_THRESHOLD_PCT:
        return "Bullish"
    if change_pct < -MOOD_THRESHOLD_PCT:
        return "Bearish"
    return "Neutral"


def session_stats(series: Sequence[Sample | EnrichedSample]) -> SessionStats | None:
    """Open/high/low/last over the window. None when the window is empty.

    ``first`` is the oldest sample still in the window, so once the history
    starts evicting, the session "open" rolls forward with it.
    """
    if not series:
        return None

    prices = [s.price for s in series]
    first = prices[0]
    last = prices[-1]
    change = last - first
    change_pct = change / first * 100 if first != 0 else 0.0

    return SessionStats(
        first=first,
        last=last,
        high=max(prices),
        low=min(prices),
        change=round(change, 4),
        change_pct=round(change_pct, 4),
        mood=classify_mood(change_pct),
    )


def market_summary(
    subscriptions: Iterable[str],
    cache: PriceCache,
    universe_size: int = 0,
    last_tick_at: float | None = None,
) -> MarketSummary:
    """Count rising/falling/flat subscriptions and sum their latest prices.

    A subscribed instrument that has not ticked yet counts as flat and adds
    nothing to the total. Pure over its inputs: calling it again without new
    ticks returns an equal summary.
    """
    rising = falling = flat = subscribed = 0
    total = 0.0
    for instrument in subscriptions:
        subscribed += 1
        latest = cache.get(instrument)
        if latest is None:
            flat += 1
            continue
        total += latest.value
        if latest.up:
            rising += 1
        else:
            falling += 1

    return MarketSummary(
        rising=rising,
        falling=falling,
        flat=flat,
        total=round(total, 2),
        subscribed=subscribed,
        universe=universe_size,
        last_tick_at=last_tick_at,
    )
