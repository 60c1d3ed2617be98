"""Integration tests for the MarketEngine background loop."""

import asyncio

import pytest

from tickerdash.market.engine import MarketEngine


@pytest.mark.asyncio
class TestMarketEngineLoop:
    """Integration tests for start/stop and pause/resume."""

    async def test_prices_update_over_time(self):
        """Test that subscribed instruments tick periodically."""
        engine = MarketEngine(tick_interval=0.02)
        engine.subscribe("TATA")
        await engine.start()

        await asyncio.sleep(0.15)  # Several update cycles
        await engine.stop()

        assert len(engine.get_history("TATA")) >= 2

    async def test_no_ticks_without_subscriptions(self):
        engine = MarketEngine(tick_interval=0.02)
        await engine.start()
        await asyncio.sleep(0.08)
        await engine.stop()

        assert engine.version == 0
        assert engine.last_tick_at is None

    async def test_stop_is_clean(self):
        """Test that stop() is clean and idempotent."""
        engine = MarketEngine(tick_interval=0.05)
        await engine.start()
        await engine.stop()
        # Double stop should not raise
        await engine.stop()
        assert not engine.running

    async def test_start_twice_keeps_one_task(self):
        engine = MarketEngine(tick_interval=0.05)
        await engine.start()
        task = engine._task
        await engine.start()
        assert engine._task is task
        await engine.stop()

    async def test_stop_preserves_history(self):
        """State stays readable after the loop is cancelled."""
        engine = MarketEngine(tick_interval=0.02)
        engine.subscribe("MRF")
        await engine.start()
        await asyncio.sleep(0.1)
        await engine.stop()

        count = len(engine.get_history("MRF"))
        assert count > 0
        await asyncio.sleep(0.06)
        assert len(engine.get_history("MRF")) == count
        assert engine.get_latest_price("MRF") is not None

    async def test_pause_stops_ticks(self):
        engine = MarketEngine(tick_interval=0.02)
        engine.subscribe("TATA")
        engine.set_live(False)
        await engine.start()

        await asyncio.sleep(0.1)
        assert engine.get_history("TATA") == ()

        engine.set_live(True)
        await asyncio.sleep(0.1)
        await engine.stop()
        assert len(engine.get_history("TATA")) >= 1

    async def test_resume_does_not_replay_missed_steps(self, make_rng, clock):
        engine = MarketEngine(rng=make_rng(), clock=clock, tick_interval=0.05)
        engine.subscribe("TATA")
        await engine.start()
        await asyncio.sleep(0.01)  # First step runs immediately
        engine.set_live(False)
        paused_count = len(engine.get_history("TATA"))

        await asyncio.sleep(0.3)  # ~6 steps skipped
        engine.set_live(True)
        await asyncio.sleep(0.07)  # at most two boundaries
        await engine.stop()

        assert len(engine.get_history("TATA")) <= paused_count + 2

    async def test_loop_survives_step_errors(self):
        """Test that the engine keeps running after a failing step."""
        engine = MarketEngine(tick_interval=0.02)
        engine.subscribe("TATA")
        calls = 0
        real_tick = engine.tick

        def flaky_tick():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("boom")
            return real_tick()

        engine.tick = flaky_tick
        await engine.start()
        await asyncio.sleep(0.12)

        assert engine.running
        await engine.stop()
        assert calls > 1
        assert len(engine.get_history("TATA")) >= 1
