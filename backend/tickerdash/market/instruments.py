"""Instrument universe and simulation constants for the market engine."""

# Fixed universe of simulated NSE names shown on the watchlist
INSTRUMENTS: tuple[str, ...] = ("TATA", "RELIANCE", "ADANI", "MRF", "JSW")

# Starting price for an instrument that has never ticked
BASE_PRICE = 1500.00

# Lowest price the tick generator will ever emit
MIN_PRICE = 0.01

# Per-tick price move is drawn uniformly from [-MAX_TICK_DELTA, +MAX_TICK_DELTA]
MAX_TICK_DELTA = 10.0

# Seconds between simulation steps
TICK_INTERVAL = 0.9

# Samples kept per instrument (FIFO window)
HISTORY_SIZE = 120

RSI_PERIOD = 14

# Stand-in for a zero average loss in the RSI ratio
RSI_EPSILON = 1e-6

# Synthetic volume is floor(VOLUME_FLOOR + U[0, 1) * VOLUME_SPAN)
VOLUME_FLOOR = 3000
VOLUME_SPAN = 9000

# Session change (percent) beyond which an instrument is Bullish / Bearish
MOOD_THRESHOLD_PCT = 0.5
