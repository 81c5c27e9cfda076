"""
MarketSim - Synthetic Market Simulator

Simulates a tradable instrument: a GBM price with optional chart-pattern
drift and amplitude control, multi-interval OHLCV candles, a synthetic
order book, and rate-limited simulated trade execution.
"""

__version__ = "1.0.0"
__author__ = "MarketSim"

from .config import get_config
from .sim import MarketSimulator, SimulationConfig, SimulationRunner

__all__ = [
    "__version__",
    "get_config",
    "MarketSimulator",
    "SimulationConfig",
    "SimulationRunner",
]
