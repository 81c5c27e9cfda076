"""
Trade executor.

Validates and records simulated market fills against the current price.

Validation order:
1. Rate limit: fewer than 1000 / max_trades_per_second ms since the last
   accepted trade -> RATE_LIMITED
2. Size limit: |size| > max_trade_size, or a non-finite size -> SIZE_EXCEEDED

A rejected request changes nothing: no trade is logged and the rate
limiter slot is not consumed. Accepted trades fill at price +/- spread/2
(buy at the ask, sell at the bid) and go to the front of a bounded log.

The executor reads the price; it never advances it.
"""

import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from ...utils.rate_limiter import IntervalRateLimiter
from ..constants import MAX_TRADES
from ..pricing.spread_model import SpreadModel
from ..types import Trade, TradeRejection, TradeResult, TradeSide


@dataclass
class TradeExecutorConfig:
    """Limits applied to trade requests."""
    max_trade_size: float = 1.0
    max_trades_per_second: float = 10
    spread: float = 0.0001


class TradeExecutor:
    """Validates trade requests and keeps the trade log (newest first)."""

    def __init__(
        self,
        config: Optional[TradeExecutorConfig] = None,
        capacity: int = MAX_TRADES,
    ):
        """
        Initialize executor.

        Args:
            config: Optional limits
            capacity: Maximum trades kept in the log
        """
        self._config = config or TradeExecutorConfig()
        self._limiter = IntervalRateLimiter(self._config.max_trades_per_second)
        self._spread_model = SpreadModel()
        self._trades: Deque[Trade] = deque(maxlen=capacity)
        self._trade_counter: int = 0

    @property
    def config(self) -> TradeExecutorConfig:
        return self._config

    def configure(self, config: TradeExecutorConfig) -> None:
        """Swap limits. The last trade time is kept."""
        self._config = config
        self._limiter.set_rate(config.max_trades_per_second)

    def reset(self) -> None:
        """Clear the trade log and rate limiter."""
        self._trades.clear()
        self._limiter.reset()
        self._trade_counter = 0

    @property
    def last_trade_ms(self) -> Optional[float]:
        return self._limiter.last_acquired_ms

    def _next_trade_id(self) -> str:
        """Generate sequential trade ID."""
        self._trade_counter += 1
        return f"trade_{self._trade_counter:06d}"

    def execute(self, now_ms: float, side: TradeSide, size: float, current_price: float) -> TradeResult:
        """
        Execute a trade at the current price.

        Args:
            now_ms: Request timestamp
            side: buy or sell
            size: Trade size in units (sign is ignored for the size limit)
            current_price: Simulated mid price

        Returns:
            TradeResult with the trade or the rejection reason
        """
        side = TradeSide(side)

        if not self._limiter.is_allowed(now_ms):
            wait_ms = self._limiter.wait_time(now_ms)
            return TradeResult.rejected(
                TradeRejection.RATE_LIMITED,
                f"Rate limit exceeded: retry in {wait_ms:.0f}ms",
            )

        if not math.isfinite(size):
            return TradeResult.rejected(
                TradeRejection.SIZE_EXCEEDED,
                f"Trade size must be a finite number, got {size}",
            )

        if abs(size) > self._config.max_trade_size:
            return TradeResult.rejected(
                TradeRejection.SIZE_EXCEEDED,
                f"Trade size {abs(size):g} exceeds maximum {self._config.max_trade_size:g}",
            )

        price = self._spread_model.get_fill_price(current_price, self._config.spread, side)
        trade = Trade(
            id=self._next_trade_id(),
            timestamp=now_ms,
            side=side,
            size=size,
            price=price,
        )
        self._trades.appendleft(trade)
        self._limiter.record(now_ms)
        return TradeResult.filled(trade)

    def recent_trades(self, limit: Optional[int] = None) -> List[Trade]:
        """Trades, newest first."""
        trades = list(self._trades)
        if limit is not None:
            trades = trades[:limit]
        return trades
