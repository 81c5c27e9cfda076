"""
Spread model for bid-ask derivation.

Spread is a fixed amount in price units (not percentage), taken from
the simulation config. Bid and ask sit half a spread either side of the
simulated price; buys fill at the ask, sells at the bid.
"""

from typing import Tuple

from ..types import TradeSide


class SpreadModel:
    """Derives bid/ask and fill prices from a mid price and spread."""

    def get_bid_ask(self, mid: float, spread: float) -> Tuple[float, float]:
        """
        Derive bid and ask prices from mid and spread.

        Args:
            mid: Mid price
            spread: Spread in price units

        Returns:
            Tuple of (bid_price, ask_price)
        """
        half_spread = spread / 2.0
        bid = mid - half_spread
        ask = mid + half_spread
        return (bid, ask)

    def get_fill_price(self, mid: float, spread: float, side: TradeSide) -> float:
        """Price a market order crosses at: ask for buys, bid for sells."""
        bid, ask = self.get_bid_ask(mid, spread)
        return ask if side == TradeSide.BUY else bid
