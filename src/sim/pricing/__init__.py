"""
Pricing models for the market simulator.

Advances the GBM price, overlays pattern drift, boosts volatility to
meet amplitude targets, and derives bid/ask from the spread.
"""

from .price_process import PriceProcess
from .pattern_drift import PatternDriftModel
from .amplitude import AmplitudeController
from .spread_model import SpreadModel

__all__ = [
    "PriceProcess",
    "PatternDriftModel",
    "AmplitudeController",
    "SpreadModel",
]
