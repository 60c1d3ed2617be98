"""Pytest configuration and fixtures."""

import itertools

import pytest

from tickerdash.market.engine import MarketEngine


class ScriptedRandom:
    """Deterministic RandomSource: replays fixed deltas and unit draws in a cycle."""

    def __init__(self, deltas=(10.0,), units=(0.5,)):
        self._deltas = itertools.cycle(deltas)
        self._units = itertools.cycle(units)

    def uniform(self, low, high):
        return next(self._deltas)

    def random(self):
        return next(self._units)


class StepClock:
    """Clock that advances one second per call."""

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        self.now += 1.0
        return self.now


@pytest.fixture
def scripted_rng():
    return ScriptedRandom()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def engine(scripted_rng, clock):
    """Engine with +10 ticks, volume 7500 and a one-second step clock."""
    return MarketEngine(rng=scripted_rng, clock=clock)


@pytest.fixture
def make_rng():
    """Factory for ScriptedRandom with custom delta/unit scripts."""
    return ScriptedRandom
