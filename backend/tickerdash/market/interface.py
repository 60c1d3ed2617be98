"""Pluggable randomness contract for the simulator and indicator engine."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Contract for the random numbers the market engine consumes.

    Both ``numpy.random.Generator`` and ``random.Random`` satisfy it, so
    production code uses a numpy generator and tests can pass a seeded
    ``random.Random`` or a scripted stub.

    Consumers:
        TickGenerator     - uniform(-delta, +delta) per instrument per step
        synthetic_volumes - random() per enriched sample
    """

    def uniform(self, low: float, high: float) -> float:
        """Draw a float from [low, high)."""

    def random(self) -> float:
        """Draw a float from [0.0, 1.0)."""


def default_random_source(seed: int | None = None) -> RandomSource:
    """Numpy-backed source. A None seed draws fresh OS entropy."""
    return np.random.default_rng(seed)


def split_random_sources(seed: int | None = None) -> tuple[RandomSource, RandomSource]:
    """Independent (tick, volume) streams spawned from one seed.

    Reading indicators draws volumes, so keeping those draws on their own
    stream leaves the price path for a given seed unaffected by reads.
    """
    tick_rng, volume_rng = np.random.default_rng(seed).spawn(2)
    return tick_rng, volume_rng
