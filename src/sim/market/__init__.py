"""
Derived market structure: candles and order book.
"""

from .candles import CandleAggregator
from .order_book import OrderBookSynthesizer

__all__ = [
    "CandleAggregator",
    "OrderBookSynthesizer",
]
