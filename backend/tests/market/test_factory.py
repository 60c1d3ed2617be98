"""Tests for market engine factory."""

import os
from unittest.mock import patch

from tickerdash.market.engine import MarketEngine
from tickerdash.market.factory import create_market_engine


class TestFactory:
    """Tests for create_market_engine factory."""

    def test_defaults_when_env_empty(self):
        """Test that defaults apply when nothing is configured."""
        with patch.dict(os.environ, {}, clear=True):
            engine = create_market_engine()

        assert isinstance(engine, MarketEngine)
        assert engine._interval == 0.9
        assert engine._rsi_period == 14
        assert engine._history.capacity == 120
        assert not engine.running

    def test_reads_numeric_settings(self):
        env = {
            "TICKERDASH_TICK_INTERVAL": "0.25",
            "TICKERDASH_HISTORY_SIZE": "60",
            "TICKERDASH_RSI_PERIOD": "7",
            "TICKERDASH_BASE_PRICE": "250",
        }
        with patch.dict(os.environ, env, clear=True):
            engine = create_market_engine()

        assert engine._interval == 0.25
        assert engine._history.capacity == 60
        assert engine._rsi_period == 7
        assert engine._generator.base_price == 250.0

    def test_malformed_values_fall_back(self):
        """Test that garbage or non-positive values are ignored."""
        env = {"TICKERDASH_TICK_INTERVAL": "fast", "TICKERDASH_HISTORY_SIZE": "-5"}
        with patch.dict(os.environ, env, clear=True):
            engine = create_market_engine()

        assert engine._interval == 0.9
        assert engine._history.capacity == 120

    def test_whitespace_value_uses_default(self):
        with patch.dict(os.environ, {"TICKERDASH_RSI_PERIOD": "   "}, clear=True):
            engine = create_market_engine()

        assert engine._rsi_period == 14

    def test_seed_makes_feed_reproducible(self):
        """Two engines with the same seed produce the same prices."""
        prices = []
        for _ in range(2):
            with patch.dict(os.environ, {"TICKERDASH_SEED": "42"}, clear=True):
                engine = create_market_engine()
            engine.subscribe("TATA")
            for _ in range(5):
                engine.tick()
            prices.append([s.price for s in engine.get_history("TATA")])

        assert prices[0] == prices[1]

    def test_reads_do_not_shift_seeded_prices(self):
        """Indicator reads between ticks leave a seeded price path unchanged."""
        prices = []
        for read_between_ticks in (True, False):
            with patch.dict(os.environ, {"TICKERDASH_SEED": "42"}, clear=True):
                engine = create_market_engine()
            engine.subscribe("TATA")
            for _ in range(5):
                engine.tick()
                if read_between_ticks:
                    engine.get_enriched("TATA")
                    engine.get_session_stats("TATA")
            prices.append([s.price for s in engine.get_history("TATA")])

        assert prices[0] == prices[1]

    def test_bad_seed_is_ignored(self):
        with patch.dict(os.environ, {"TICKERDASH_SEED": "abc"}, clear=True):
            engine = create_market_engine()

        assert isinstance(engine, MarketEngine)
