"""Simulated market feed and indicator engine for Tickerdash.

Public API:
    MarketEngine           - Subscriptions, periodic ticking and indicator reads
    TickGenerator          - Bounded random-walk price generator
    HistoryStore           - Fixed-capacity FIFO history per instrument
    PriceCache             - Thread-safe latest-price store
    RandomSource           - Protocol for injectable randomness
    enrich / rsi_series    - Pure indicator derivations
    session_stats / market_summary - Session aggregation
    UnknownInstrumentError - Raised for identifiers outside the universe
    create_market_engine   - Factory reading environment configuration
    create_market_router   - FastAPI router factory for REST endpoints
    create_stream_router   - FastAPI router factory for SSE endpoint
"""

from .cache import PriceCache
from .engine import MarketEngine
from .errors import UnknownInstrumentError
from .factory import create_market_engine
from .history import HistoryStore
from .indicators import classify_trends, enrich, rsi_series, synthetic_volumes
from .interface import RandomSource, default_random_source, split_random_sources
from .models import EnrichedSample, LatestPrice, MarketSummary, RsiPoint, Sample, SessionStats
from .routes import create_market_router
from .session import classify_mood, market_summary, session_stats
from .simulator import TickGenerator
from .stream import create_stream_router

__all__ = [
    "EnrichedSample",
    "HistoryStore",
    "LatestPrice",
    "MarketEngine",
    "MarketSummary",
    "PriceCache",
    "RandomSource",
    "RsiPoint",
    "Sample",
    "SessionStats",
    "TickGenerator",
    "UnknownInstrumentError",
    "classify_mood",
    "classify_trends",
    "create_market_engine",
    "create_market_router",
    "create_stream_router",
    "default_random_source",
    "enrich",
    "market_summary",
    "rsi_series",
    "session_stats",
    "split_random_sources",
    "synthetic_volumes",
]
