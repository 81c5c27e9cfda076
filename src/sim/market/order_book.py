"""
Synthetic order book.

Builds `levels` bids below the bid and `levels` asks above the ask,
spaced by 0.2 x spread. Level volume is randint(1, 10) x 100K units,
drawn independently per level. Nothing persists between ticks.
"""

from typing import Optional

from ..constants import ORDER_BOOK_STEP_FRACTION, ORDER_BOOK_VOLUME_UNIT
from ..random_source import RandomSource
from ..types import OrderBook, OrderBookLevel


class OrderBookSynthesizer:
    """Derives a depth ladder from the current bid/ask."""

    def __init__(self, random_source: Optional[RandomSource] = None):
        self._random = random_source or RandomSource()

    def _level_volume(self) -> float:
        return float(self._random.integers(1, 11) * ORDER_BOOK_VOLUME_UNIT)

    def build(self, bid_price: float, ask_price: float, levels: int, spread: float) -> OrderBook:
        """
        Build a fresh order book.

        Args:
            bid_price: Best bid
            ask_price: Best ask
            levels: Levels per side
            spread: Spread in price units (> 0 for strictly monotonic levels)

        Returns:
            OrderBook with bids descending and asks ascending
        """
        step = spread * ORDER_BOOK_STEP_FRACTION
        bids = [
            OrderBookLevel(price=bid_price - i * step, volume=self._level_volume())
            for i in range(levels)
        ]
        asks = [
            OrderBookLevel(price=ask_price + i * step, volume=self._level_volume())
            for i in range(levels)
        ]
        return OrderBook(bids=bids, asks=asks)
