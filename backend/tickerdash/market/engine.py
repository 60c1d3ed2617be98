"""Market engine: subscriptions, periodic ticking and indicator reads."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable

from .cache import PriceCache
from .errors import UnknownInstrumentError
from .history import HistoryStore
from .indicators import enrich, rsi_series
from .instruments import BASE_PRICE, HISTORY_SIZE, INSTRUMENTS, RSI_PERIOD, TICK_INTERVAL
from .interface import RandomSource, split_random_sources
from .models import EnrichedSample, LatestPrice, MarketSummary, RsiPoint, Sample, SessionStats
from .session import market_summary, session_stats
from .simulator import TickGenerator

logger = logging.getLogger(__name__)


class MarketEngine:
    """Owns the subscription set, price cache, history store and tick task.

    A single background asyncio task calls tick() every ``tick_interval``
    seconds while the feed is live. tick() is synchronous, so every
    subscribed instrument gets its sample for a step before any reader on
    the event loop can observe the store.

    Lifecycle:
        engine = MarketEngine()
        await engine.start()
        engine.subscribe("TATA")
        engine.set_live(False)      # pause; no catch-up on resume
        engine.get_rsi_series("TATA")
        await engine.stop()         # state stays readable

    Unsubscribing (or clear_all) stops ticks for an instrument but keeps its
    history and last price. Only reset() discards accumulated state.

    Every method that takes an instrument raises UnknownInstrumentError for
    identifiers outside the configured universe.
    """

    def __init__(
        self,
        instruments: Iterable[str] = INSTRUMENTS,
        base_price: float = BASE_PRICE,
        history_size: int = HISTORY_SIZE,
        tick_interval: float = TICK_INTERVAL,
        rsi_period: int = RSI_PERIOD,
        rng: RandomSource | None = None,
        clock: Callable[[], float] = time.time,
        volume_rng: RandomSource | None = None,
    ) -> None:
        """``rng`` drives prices and ``volume_rng`` the read-time volume draws.

        With neither given, both come from independent numpy streams. A lone
        ``rng`` is shared with volumes unless ``volume_rng`` is passed too.
        """
        self._instruments: tuple[str, ...] = tuple(dict.fromkeys(i.strip().upper() for i in instruments))
        self._interval = tick_interval
        self._rsi_period = rsi_period
        if rng is None:
            rng, spawned_volume_rng = split_random_sources()
            volume_rng = volume_rng if volume_rng is not None else spawned_volume_rng
        self._rng = rng
        self._volume_rng = volume_rng if volume_rng is not None else rng
        self._clock = clock

        self._cache = PriceCache()
        self._history = HistoryStore(capacity=history_size)
        self._generator = TickGenerator(rng=self._rng, base_price=base_price, clock=clock)

        self._subscriptions: list[str] = []
        self._live = True
        self._last_tick_at: float | None = None
        self._version: int = 0  # Bumped on every tick and subscription change
        self._task: asyncio.Task | None = None

    # --- Lifecycle ---

    async def start(self) -> None:
        """Start the periodic tick task. No-op if already running."""
        if self._task and not self._task.done():
            return
        self._task = asyncio.create_task(self._run_loop(), name="market-engine-loop")
        logger.info(
            "Market engine started: %d instruments, %.2fs interval",
            len(self._instruments),
            self._interval,
        )

    async def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Market engine stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def reset(self) -> None:
        """Drop subscriptions, prices and history. Live/paused state is kept."""
        self._subscriptions.clear()
        self._cache.clear()
        self._history.clear()
        self._last_tick_at = None
        self._version += 1
        logger.info("Market engine reset")

    # --- Subscriptions ---

    @property
    def instruments(self) -> tuple[str, ...]:
        return self._instruments

    def get_subscriptions(self) -> list[str]:
        return list(self._subscriptions)

    def subscribe(self, instrument: str) -> None:
        """Add an instrument to the tick set. No-op if already subscribed."""
        instrument = self._resolve(instrument)
        if instrument not in self._subscriptions:
            self._subscriptions.append(instrument)
            self._version += 1
            logger.info("Subscribed %s (ticks from next step)", instrument)

    def unsubscribe(self, instrument: str) -> None:
        """Stop ticking an instrument. Its history and last price are kept."""
        instrument = self._resolve(instrument)
        if instrument in self._subscriptions:
            self._subscriptions.remove(instrument)
            self._version += 1
            logger.info("Unsubscribed %s", instrument)

    def subscribe_all(self) -> None:
        added = [i for i in self._instruments if i not in self._subscriptions]
        if added:
            self._subscriptions.extend(added)
            self._version += 1
        logger.info("Subscribed all %d instruments", len(self._instruments))

    def clear_all(self) -> None:
        if self._subscriptions:
            self._subscriptions.clear()
            self._version += 1
        logger.info("Cleared all subscriptions")

    # --- Feed control ---

    @property
    def is_live(self) -> bool:
        return self._live

    def set_live(self, live: bool) -> None:
        """Pause or resume tick generation. Resuming does not replay missed steps."""
        if live != self._live:
            self._live = live
            logger.info("Market feed %s", "resumed" if live else "paused")

    def tick(self) -> dict[str, LatestPrice]:
        """Run one simulation step for the current subscriptions.

        The subscription list is captured up front, so changes made while
        a step is in progress only apply from the next one. A clock that
        steps backwards is held at the previous step's timestamp, keeping
        every history window non-decreasing.
        """
        snapshot = tuple(self._subscriptions)
        if not snapshot:
            return {}
        ts = self._clock()
        if self._last_tick_at is not None and ts < self._last_tick_at:
            logger.warning("Clock went backwards (%.3f < %.3f); holding timestamp", ts, self._last_tick_at)
            ts = self._last_tick_at
        updates = self._generator.step(snapshot, self._cache, self._history, timestamp=ts)
        self._last_tick_at = ts
        self._version += 1
        return updates

    @property
    def last_tick_at(self) -> float | None:
        return self._last_tick_at

    @property
    def version(self) -> int:
        """Bumps on every tick and subscription change. Useful for SSE change detection."""
        return self._version

    # --- Reads ---

    def get_latest_price(self, instrument: str) -> LatestPrice | None:
        return self._cache.get(self._resolve(instrument))

    def get_all_latest(self) -> dict[str, LatestPrice]:
        return self._cache.get_all()

    def get_history(self, instrument: str) -> tuple[Sample, ...]:
        return self._history.get(self._resolve(instrument))

    def get_enriched(self, instrument: str) -> list[EnrichedSample]:
        return enrich(self.get_history(instrument), self._volume_rng)

    def get_rsi_series(self, instrument: str) -> list[RsiPoint]:
        return rsi_series(self.get_history(instrument), self._rsi_period)

    def get_session_stats(self, instrument: str) -> SessionStats | None:
        return session_stats(self.get_history(instrument))

    def get_market_summary(self) -> MarketSummary:
        return market_summary(
            self._subscriptions,
            self._cache,
            universe_size=len(self._instruments),
            last_tick_at=self._last_tick_at,
        )

    # --- Internal ---

    def _resolve(self, instrument: str) -> str:
        """Normalize an identifier and check it belongs to the universe."""
        normalized = instrument.strip().upper()
        if normalized not in self._instruments:
            raise UnknownInstrumentError(instrument)
        return normalized

    async def _run_loop(self) -> None:
        """Core loop: step the simulation while live, sleep, repeat."""
        while True:
            try:
                if self._live:
                    self.tick()
            except Exception:
                logger.exception("Market engine step failed")
            await asyncio.sleep(self._interval)
