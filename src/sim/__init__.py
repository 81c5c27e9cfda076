"""
Synthetic market simulator.

Public API:
- MarketSimulator: Main simulator orchestrator (tick, execute_trade, update_config)
- SimulationRunner: Background driver calling tick() on a schedule
- SimulationConfig: Immutable configuration snapshot
- Candle, OrderBook, Trade, MarketDataSnapshot: Core types

Architecture:
- engine.py: Thin orchestrator holding the state lock
- types.py: All shared types
- sim_config.py: Config validation and merge
- random_source.py: Box-Muller normal samples
- pricing/: GBM price, pattern drift, amplitude control, spread
- market/: Multi-interval candles, synthetic order book
- execution/: Trade validation and log
- metrics.py: Engine-side counters
- presets.py: Named pattern presets
"""

from .types import (
    # Enums
    TradeSide,
    PatternType,
    TradeRejection,
    # State
    PriceState,
    PatternState,
    AmplitudeTracker,
    # Market
    Candle,
    OrderBookLevel,
    OrderBook,
    Trade,
    TradeResult,
    MarketDataSnapshot,
)
from .errors import SimulationError, InvalidConfigError
from .sim_config import SimulationConfig
from .random_source import RandomSource
from .engine import MarketSimulator
from .runner import SimulationRunner
from .presets import PATTERN_PRESETS, PatternPreset, get_preset, preset_overrides

__all__ = [
    # Main classes
    "MarketSimulator",
    "SimulationRunner",
    "SimulationConfig",
    "RandomSource",
    # Enums
    "TradeSide",
    "PatternType",
    "TradeRejection",
    # State
    "PriceState",
    "PatternState",
    "AmplitudeTracker",
    # Market
    "Candle",
    "OrderBookLevel",
    "OrderBook",
    "Trade",
    "TradeResult",
    "MarketDataSnapshot",
    # Errors
    "SimulationError",
    "InvalidConfigError",
    # Presets
    "PATTERN_PRESETS",
    "PatternPreset",
    "get_preset",
    "preset_overrides",
]
