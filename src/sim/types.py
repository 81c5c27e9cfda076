"""
Core types for the market simulator.

Provides all shared types, enums and snapshots:
- PriceState, PatternState, AmplitudeTracker: Per-component mutable state
- Candle, OrderBookLevel, OrderBook: Market structure
- Trade, TradeResult: Simulated fills and their outcome
- MarketDataSnapshot: Per-tick output handed to the transport layer

Type design principles:
- Immutable where possible (frozen dataclasses)
- Mutable state objects are owned by exactly one component
- Serializable (to_dict methods, camelCase keys to match the wire format)

Time model:
- All timestamps are epoch milliseconds (int or float)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class TradeSide(str, Enum):
    """Trade side."""
    BUY = "buy"
    SELL = "sell"


class PatternType(str, Enum):
    """
    Named drift overlays.

    RANDOM_WALK contributes no drift and is equivalent to no pattern.
    """
    RANDOM_WALK = "random_walk"
    UPTREND = "uptrend"
    DOWNTREND = "downtrend"
    VOLATILE = "volatile"
    SIDEWAYS = "sideways"
    BREAKOUT_UP = "breakout_up"
    BREAKOUT_DOWN = "breakout_down"
    HEAD_AND_SHOULDERS = "head_and_shoulders"
    DOUBLE_TOP = "double_top"
    DOUBLE_BOTTOM = "double_bottom"


class TradeRejection(str, Enum):
    """Reason a trade request was refused."""
    RATE_LIMITED = "rate_limited"
    SIZE_EXCEEDED = "size_exceeded"


# ─────────────────────────────────────────────────────────────────────────────
# Component state
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class PriceState:
    """
    Authoritative price. Owned by PriceProcess.

    current_price is always > 0.
    """
    current_price: float
    last_update_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentPrice": self.current_price,
            "lastUpdateTimestamp": self.last_update_ms,
        }


@dataclass
class PatternState:
    """Progress of the active pattern. Owned by PatternDriftModel."""
    pattern_start_ms: float
    base_price: float
    progress: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patternStartTime": self.pattern_start_ms,
            "progress": self.progress,
            "basePrice": self.base_price,
        }


@dataclass
class AmplitudeTracker:
    """
    Rolling min/max for one lookback window. Owned by AmplitudeController.

    Invariant: min_price <= every price observed since window_start <= max_price.
    """
    window_start_ms: float
    start_price: float
    min_price: float
    max_price: float

    @classmethod
    def starting_at(cls, now_ms: float, price: float) -> "AmplitudeTracker":
        return cls(
            window_start_ms=now_ms,
            start_price=price,
            min_price=price,
            max_price=price,
        )

    def observe(self, price: float) -> None:
        self.min_price = min(self.min_price, price)
        self.max_price = max(self.max_price, price)

    @property
    def amplitude_pct(self) -> float:
        """Observed swing as a percentage of the window's start price."""
        if self.start_price <= 0:
            return 0.0
        return (self.max_price - self.min_price) / self.start_price * 100.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "windowStart": self.window_start_ms,
            "startPrice": self.start_price,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "amplitudePct": self.amplitude_pct,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Candle
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Candle:
    """
    OHLCV aggregate over one bucket.

    timestamp is the bucket start. Only the last candle of a series is
    mutated; closed candles are never touched again.
    """
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def update(self, price: float, volume_increment: float) -> None:
        """Fold a new price into the open candle."""
        self.high = max(self.high, price)
        self.low = min(self.low, price)
        self.close = price
        self.volume += max(0.0, volume_increment)

    def copy(self) -> "Candle":
        return Candle(
            timestamp=self.timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Order Book
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OrderBookLevel:
    """Single price level."""
    price: float
    volume: float

    def to_dict(self) -> Dict[str, Any]:
        return {"price": self.price, "volume": self.volume}


@dataclass(frozen=True)
class OrderBook:
    """
    Synthetic depth ladder.

    bids are sorted by descending price, asks by ascending price.
    Regenerated every tick, no identity across ticks.
    """
    bids: List[OrderBookLevel] = field(default_factory=list)
    asks: List[OrderBookLevel] = field(default_factory=list)

    @property
    def best_bid(self) -> Optional[float]:
        return self.bids[0].price if self.bids else None

    @property
    def best_ask(self) -> Optional[float]:
        return self.asks[0].price if self.asks else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bids": [level.to_dict() for level in self.bids],
            "asks": [level.to_dict() for level in self.asks],
        }


# ─────────────────────────────────────────────────────────────────────────────
# Trade
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Trade:
    """Record of a simulated fill."""
    id: str
    timestamp: float
    side: TradeSide
    size: float
    price: float

    @property
    def value(self) -> float:
        return abs(self.size) * self.price

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "side": self.side.value,
            "size": self.size,
            "price": self.price,
            "value": self.value,
        }


@dataclass(frozen=True)
class TradeResult:
    """Outcome of a trade request."""
    success: bool
    trade: Optional[Trade] = None
    rejection: Optional[TradeRejection] = None
    message: str = ""

    @classmethod
    def filled(cls, trade: Trade) -> "TradeResult":
        return cls(success=True, trade=trade, message="Trade executed")

    @classmethod
    def rejected(cls, rejection: TradeRejection, message: str) -> "TradeResult":
        return cls(success=False, rejection=rejection, message=message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "trade": self.trade.to_dict() if self.trade else None,
            "rejection": self.rejection.value if self.rejection else None,
            "message": self.message,
        }


# ─────────────────────────────────────────────────────────────────────────────
# Snapshot
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MarketDataSnapshot:
    """
    Per-tick market data.

    trades are newest first; candles are oldest first and belong to the
    currently selected candle interval.
    """
    timestamp: float
    price: float
    bid: float
    ask: float
    order_book: OrderBook
    trades: List[Trade] = field(default_factory=list)
    candles: List[Candle] = field(default_factory=list)
    candle_interval_ms: int = 1000
    volatility_multiplier: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "price": self.price,
            "bid": self.bid,
            "ask": self.ask,
            "orderBook": self.order_book.to_dict(),
            "trades": [t.to_dict() for t in self.trades],
            "candles": [c.to_dict() for c in self.candles],
            "candleInterval": self.candle_interval_ms,
            "volatilityMultiplier": self.volatility_multiplier,
        }
