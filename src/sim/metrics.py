"""
Simulator metrics collection.

Tracks engine activity:
- Tick count and price range seen
- Amplitude boost activity (peak multiplier, boosted ticks)
- Executed trades and volume
- Rejection counts by kind
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .types import Trade, TradeRejection, TradeSide


@dataclass
class SimulationMetricsSnapshot:
    """Snapshot of simulator metrics at a point in time."""
    ticks: int = 0
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    boosted_ticks: int = 0
    peak_volatility_multiplier: float = 1.0

    trades_executed: int = 0
    buy_trades: int = 0
    sell_trades: int = 0
    total_traded_value: float = 0.0

    rate_limited: int = 0
    size_exceeded: int = 0
    invalid_config: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ticks": self.ticks,
            "min_price": self.min_price,
            "max_price": self.max_price,
            "boosted_ticks": self.boosted_ticks,
            "peak_volatility_multiplier": self.peak_volatility_multiplier,
            "trades_executed": self.trades_executed,
            "buy_trades": self.buy_trades,
            "sell_trades": self.sell_trades,
            "total_traded_value": self.total_traded_value,
            "rate_limited": self.rate_limited,
            "size_exceeded": self.size_exceeded,
            "invalid_config": self.invalid_config,
        }


class SimulationMetrics:
    """
    Collects and aggregates simulator metrics.

    Updated by the engine on every tick, trade and config update.
    """

    def __init__(self):
        """Initialize metrics collector."""
        self._reset()

    def _reset(self) -> None:
        """Reset all metrics to zero."""
        self._snapshot = SimulationMetricsSnapshot()

    def record_tick(self, price: float, volatility_multiplier: float) -> None:
        s = self._snapshot
        s.ticks += 1
        s.min_price = price if s.min_price is None else min(s.min_price, price)
        s.max_price = price if s.max_price is None else max(s.max_price, price)
        if volatility_multiplier > 1.0:
            s.boosted_ticks += 1
            s.peak_volatility_multiplier = max(s.peak_volatility_multiplier, volatility_multiplier)

    def record_trade(self, trade: Trade) -> None:
        s = self._snapshot
        s.trades_executed += 1
        if trade.side == TradeSide.BUY:
            s.buy_trades += 1
        else:
            s.sell_trades += 1
        s.total_traded_value += trade.value

    def record_rejection(self, rejection: TradeRejection) -> None:
        if rejection == TradeRejection.RATE_LIMITED:
            self._snapshot.rate_limited += 1
        elif rejection == TradeRejection.SIZE_EXCEEDED:
            self._snapshot.size_exceeded += 1

    def record_invalid_config(self) -> None:
        self._snapshot.invalid_config += 1

    def get_metrics(self) -> SimulationMetricsSnapshot:
        """
        Get current metrics snapshot.

        Returns:
            Copy of the aggregated metrics
        """
        return SimulationMetricsSnapshot(**self._snapshot.to_dict())

    def reset(self) -> None:
        """Reset all metrics."""
        self._reset()
