"""Thread-safe in-memory cache of the latest tick per instrument."""

from __future__ import annotations

import time
from threading import Lock

from .models import LatestPrice


class PriceCache:
    """Thread-safe in-memory cache of the latest price for each instrument.

    Writer: MarketEngine.tick() via the TickGenerator.
    Readers: SSE streaming endpoint, market summary, REST price lookups.

    Unsubscribing an instrument leaves its entry here; the price simply
    stops moving.
    """

    def __init__(self) -> None:
        self._prices: dict[str, LatestPrice] = {}
        self._lock = Lock()
        self._version: int = 0  # Monotonically increasing; bumped on every update

    def update(
        self,
        instrument: str,
        price: float,
        previous_price: float,
        timestamp: float | None = None,
    ) -> LatestPrice:
        """Record a new price for an instrument. Returns the created LatestPrice.

        ``up`` is computed as ``price >= previous_price`` so an unchanged
        price still counts as rising.
        """
        with self._lock:
            ts = timestamp if timestamp is not None else time.time()
            value = round(price, 2)
            latest = LatestPrice(
                instrument=instrument,
                value=value,
                up=value >= round(previous_price, 2),
                timestamp=ts,
            )
            self._prices[instrument] = latest
            self._version += 1
            return latest

    def get(self, instrument: str) -> LatestPrice | None:
        """Get the latest tick for a single instrument, or None if it never ticked."""
        with self._lock:
            return self._prices.get(instrument)

    def get_all(self) -> dict[str, LatestPrice]:
        """Snapshot of all current prices. Returns a shallow copy."""
        with self._lock:
            return dict(self._prices)

    def get_price(self, instrument: str) -> float | None:
        """Convenience: get just the price float, or None."""
        latest = self.get(instrument)
        return latest.value if latest else None

    def clear(self) -> None:
        with self._lock:
            self._prices.clear()
            self._version += 1

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._prices)

    def __contains__(self, instrument: str) -> bool:
        with self._lock:
            return instrument in self._prices
