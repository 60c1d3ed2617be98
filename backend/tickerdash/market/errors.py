"""Exceptions raised by the market engine."""

from __future__ import annotations


class UnknownInstrumentError(ValueError):
    """Raised when an operation names an instrument outside the configured universe."""

    def __init__(self, instrument: str) -> None:
        super().__init__(f"Unknown instrument: {instrument!r}")
        self.instrument = instrument
