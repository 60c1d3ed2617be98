"""Fixed-capacity rolling price history per instrument."""

from __future__ import annotations

from collections import deque
from threading import Lock

from .instruments import HISTORY_SIZE
from .models import Sample


class HistoryStore:
    """FIFO window of the most recent samples for each instrument.

    Each instrument gets a ``deque(maxlen=capacity)``, so appends are O(1)
    and the oldest sample falls off the head once the window is full.
    Readers receive tuple snapshots and can never mutate the store.
    """

    def __init__(self, capacity: int = HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._series: dict[str, deque[Sample]] = {}
        self._lock = Lock()
        self._version: int = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, instrument: str, sample: Sample) -> None:
        """Add a sample at the tail of the instrument's window.

        Raises ValueError if the sample is older than the current tail.
        """
        with self._lock:
            series = self._series.get(instrument)
            if series is None:
                series = deque(maxlen=self._capacity)
                self._series[instrument] = series
            if series and sample.timestamp < series[-1].timestamp:
                raise ValueError(
                    f"Out-of-order sample for {instrument}: "
                    f"{sample.timestamp} < {series[-1].timestamp}"
                )
            series.append(sample)
            self._version += 1

    def get(self, instrument: str) -> tuple[Sample, ...]:
        """Ordered snapshot of the window, oldest first. Empty if never appended."""
        with self._lock:
            series = self._series.get(instrument)
            return tuple(series) if series else ()

    def clear(self) -> None:
        with self._lock:
            self._series.clear()
            self._version += 1

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        """Number of instruments with at least one sample."""
        with self._lock:
            return len(self._series)

    def __contains__(self, instrument: str) -> bool:
        with self._lock:
            return instrument in self._series
