"""
Pydantic models for simulator API requests and responses.

Field names follow the camelCase wire format the UI consumes.
"""

from typing import Literal

from pydantic import BaseModel, Field


class OrderBookLevelModel(BaseModel):
    """Single order book level."""

    price: float
    volume: float


class OrderBookModel(BaseModel):
    """Bids descending, asks ascending."""

    bids: list[OrderBookLevelModel]
    asks: list[OrderBookLevelModel]


class CandleModel(BaseModel):
    """OHLCV candle; timestamp is the bucket start (epoch ms)."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float


class TradeModel(BaseModel):
    """Executed simulated trade."""

    id: str
    timestamp: float
    side: Literal["buy", "sell"]
    size: float
    price: float
    value: float


class MarketDataResponse(BaseModel):
    """Response for GET /api/market-data."""

    timestamp: float
    price: float
    bid: float
    ask: float
    orderBook: OrderBookModel
    trades: list[TradeModel]
    candles: list[CandleModel]
    candleInterval: int
    volatilityMultiplier: float = 1.0


class CandlesResponse(BaseModel):
    """Response for GET /api/candles."""

    interval: int
    candles: list[CandleModel]
    total: int


class TradeRequest(BaseModel):
    """Body for POST /api/trades."""

    side: Literal["buy", "sell"]
    size: float = Field(..., description="Trade size in units")


class TradeResponse(BaseModel):
    """Response for POST /api/trades."""

    success: bool
    trade: TradeModel | None = None
    rejection: str | None = None
    message: str = ""


class ConfigResponse(BaseModel):
    """Applied simulation configuration."""

    initialPrice: float
    volatility: float
    spread: float
    updateInterval: float
    orderBookLevels: int
    maxTradeSize: float
    maxTradesPerSecond: float
    tradeSizeStep: float
    candleInterval: int
    priceChangeThreshold15s: float
    priceChangeThreshold1m: float
    priceChangeThreshold15m: float
    priceChangeThreshold1h: float
    patternType: str | None = None
    patternStrength: float
    patternDuration: float


class PresetModel(BaseModel):
    """Named pattern preset."""

    name: str
    patternType: str
    volatility: float
    patternStrength: float
    patternDuration: int
    description: str


class StatsResponse(BaseModel):
    """Response for GET /api/stats."""

    ticks: int
    min_price: float | None = None
    max_price: float | None = None
    boosted_ticks: int
    peak_volatility_multiplier: float
    trades_executed: int
    buy_trades: int
    sell_trades: int
    total_traded_value: float
    rate_limited: int
    size_exceeded: int
    invalid_config: int
    runner_running: bool = False
