"""
Fixed simulator constants.

Bucket sizes, lookback windows and retention limits are part of the
simulator contract and are not user-configurable.
"""

from typing import Dict, Tuple


# ==================== Candles ====================

# Bucket sizes maintained on every tick, regardless of which one is selected
CANDLE_INTERVALS_MS: Tuple[int, ...] = (10, 100, 1000, 5000)

# Closed candles kept per bucket size (FIFO eviction)
MAX_CANDLES_PER_INTERVAL = 200

# Candles handed out per snapshot (payload size control)
MAX_CANDLES_IN_SNAPSHOT = 150

# Synthetic volume: seed for a new candle and per-tick increment upper bounds
CANDLE_VOLUME_SEED_MAX = 100_000
CANDLE_VOLUME_INCREMENT_MAX = 10_000


# ==================== Amplitude windows ====================

AMPLITUDE_WINDOWS_MS: Dict[str, int] = {
    "15s": 15_000,
    "1m": 60_000,
    "15m": 900_000,
    "1h": 3_600_000,
}

# Upper bound of the configurable target swing per window (percent)
AMPLITUDE_THRESHOLD_MAX_PCT: Dict[str, float] = {
    "15s": 20.0,
    "1m": 30.0,
    "15m": 45.0,
    "1h": 100.0,
}

# Boosting starts once this fraction of the window has elapsed
AMPLITUDE_BOOST_START = 0.6
AMPLITUDE_BOOST_GAIN = 5.0


# ==================== Price process ====================

MIN_PRICE = 1e-5
EXTREME_VOLATILITY = 0.05
HIGH_VOLATILITY = 0.1
HIGH_VOLATILITY_RANDOM_FACTOR = 1.5


# ==================== Order book ====================

# Level spacing as a fraction of the spread
ORDER_BOOK_STEP_FRACTION = 0.2
# Per-level volume = randint(1, 10) * ORDER_BOOK_VOLUME_UNIT
ORDER_BOOK_VOLUME_UNIT = 100_000
ORDER_BOOK_MAX_LEVELS = 50


# ==================== Trades ====================

MAX_TRADES = 50
MAX_TRADES_IN_SNAPSHOT = 20


# ==================== Patterns ====================

DEFAULT_PATTERN_STRENGTH = 0.5
DEFAULT_PATTERN_DURATION_MS = 30_000
