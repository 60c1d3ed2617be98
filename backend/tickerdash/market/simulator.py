"""Random-walk tick generator."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from .cache import PriceCache
from .history import HistoryStore
from .instruments import BASE_PRICE, MAX_TICK_DELTA, MIN_PRICE
from .interface import RandomSource, default_random_source
from .models import LatestPrice, Sample

logger = logging.getLogger(__name__)


class TickGenerator:
    """Bounded uniform random walk, one step per instrument per tick.

    Math:
        P(t+1) = round(P(t) + U(-delta, +delta), 2)

    Where:
        P(t)   = last cached price, or the base price before the first tick
        delta  = maximum absolute move per tick (10.00 by default)

    Prices are floored at MIN_PRICE so the walk can never go negative.
    The base price itself is never recorded as a sample.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        base_price: float = BASE_PRICE,
        max_delta: float = MAX_TICK_DELTA,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._rng = rng if rng is not None else default_random_source()
        self._base_price = base_price
        self._max_delta = max_delta
        self._clock = clock

    @property
    def base_price(self) -> float:
        return self._base_price

    def next_price(self, previous: float | None) -> float:
        """Draw the price that follows ``previous`` (base price when None)."""
        if previous is None:
            previous = self._base_price
        delta = float(self._rng.uniform(-self._max_delta, self._max_delta))
        return max(MIN_PRICE, round(previous + delta, 2))

    def step(
        self,
        instruments: Iterable[str],
        cache: PriceCache,
        history: HistoryStore,
        timestamp: float | None = None,
    ) -> dict[str, LatestPrice]:
        """Advance every given instrument by one tick. Returns {instrument: LatestPrice}.

        All instruments in a step share one timestamp (``timestamp`` or the
        clock). Each new price is appended to history before it replaces the
        cached price, so a rejected sample never leaves the two out of step.
        """
        ts = timestamp if timestamp is not None else self._clock()
        result: dict[str, LatestPrice] = {}
        for instrument in instruments:
            previous = cache.get_price(instrument)
            if previous is None:
                previous = self._base_price
            price = self.next_price(previous)
            history.append(instrument, Sample(price=price, timestamp=ts))
            latest = cache.update(instrument, price, previous_price=previous, timestamp=ts)
            result[instrument] = latest

        if result:
            logger.debug(
                "Tick: %s",
                ", ".join(f"{i}={p.value:.2f}" for i, p in result.items()),
            )
        return result
