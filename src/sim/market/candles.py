"""
Multi-interval candle aggregation.

Every tick's price is folded into a candle for each bucket size
(10ms, 100ms, 1s, 5s by default), independent of which bucket size is
currently selected for display.

Per bucket size:
- interval_start = floor(now / size) * size
- a later interval_start closes the current candle into the series and
  opens a new one at the tick price
- otherwise the current candle's high/low/close/volume are updated

Closed series are capacity-bounded (oldest evicted first). Volume is a
synthetic proxy: a random seed on open plus a random non-negative
increment per update, so it never decreases within a candle.
"""

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional

import pandas as pd

from ..constants import (
    CANDLE_INTERVALS_MS,
    CANDLE_VOLUME_INCREMENT_MAX,
    CANDLE_VOLUME_SEED_MAX,
    MAX_CANDLES_PER_INTERVAL,
)
from ..random_source import RandomSource
from ..types import Candle

OHLCV_COLUMNS = ["ts_open", "ts_close", "open", "high", "low", "close", "volume"]


class CandleAggregator:
    """Rolling OHLCV series for a fixed set of bucket sizes."""

    def __init__(
        self,
        intervals_ms: Iterable[int] = CANDLE_INTERVALS_MS,
        capacity: int = MAX_CANDLES_PER_INTERVAL,
        random_source: Optional[RandomSource] = None,
    ):
        self.intervals_ms: List[int] = sorted(set(intervals_ms))
        self.capacity = capacity
        self._random = random_source or RandomSource()
        self._series: Dict[int, Deque[Candle]] = {}
        self._current: Dict[int, Optional[Candle]] = {}
        self.reset()

    def reset(self) -> None:
        self._series = {interval: deque(maxlen=self.capacity) for interval in self.intervals_ms}
        self._current = {interval: None for interval in self.intervals_ms}

    def _check_interval(self, interval_ms: int) -> None:
        if interval_ms not in self._series:
            raise ValueError(
                f"Unsupported candle interval {interval_ms}ms. Use one of {self.intervals_ms}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Ingestion
    # ─────────────────────────────────────────────────────────────────────────

    def ingest(self, now_ms: float, price: float) -> None:
        """Fold price into the current candle of every bucket size."""
        for interval in self.intervals_ms:
            self.ingest_interval(interval, now_ms, price)

    def ingest_interval(self, interval_ms: int, now_ms: float, price: float) -> Candle:
        """
        Fold price into one bucket size.

        Returns:
            The (possibly new) current candle for the bucket size
        """
        self._check_interval(interval_ms)
        interval_start = int(now_ms // interval_ms) * interval_ms
        current = self._current[interval_ms]

        if current is None or interval_start > current.timestamp:
            if current is not None:
                self._series[interval_ms].append(current)
            current = Candle(
                timestamp=interval_start,
                open=price,
                high=price,
                low=price,
                close=price,
                volume=float(self._random.integers(0, CANDLE_VOLUME_SEED_MAX)),
            )
            self._current[interval_ms] = current
        else:
            current.update(price, float(self._random.integers(0, CANDLE_VOLUME_INCREMENT_MAX)))

        return current

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def series(self, interval_ms: int) -> List[Candle]:
        """Closed candles, oldest first."""
        self._check_interval(interval_ms)
        return [candle.copy() for candle in self._series[interval_ms]]

    def current(self, interval_ms: int) -> Optional[Candle]:
        """The open (still mutating) candle, if any."""
        self._check_interval(interval_ms)
        candle = self._current[interval_ms]
        return candle.copy() if candle is not None else None

    def candles(self, interval_ms: int, limit: Optional[int] = None, include_current: bool = True) -> List[Candle]:
        """
        Most recent candles for a bucket size, oldest first.

        Args:
            interval_ms: Bucket size
            limit: Keep only the last `limit` candles (None = up to capacity)
            include_current: Append the open candle after the closed ones

        The combined view never exceeds `capacity`; the oldest closed candle
        gives way to the open one.
        """
        self._check_interval(interval_ms)
        candles: List[Candle] = list(self._series[interval_ms])
        current = self._current[interval_ms]
        if include_current and current is not None:
            candles.append(current)
        candles = candles[-self.capacity:]
        if limit is not None:
            candles = candles[-limit:] if limit > 0 else []
        return [candle.copy() for candle in candles]

    def to_dataframe(self, interval_ms: int, include_current: bool = True) -> pd.DataFrame:
        """
        Candles as an OHLCV DataFrame.

        Returns:
            DataFrame with columns: ts_open, ts_close, open, high, low, close, volume
        """
        rows = [candle.to_dict() for candle in self.candles(interval_ms, include_current=include_current)]
        if not rows:
            return pd.DataFrame(columns=OHLCV_COLUMNS)

        df = pd.DataFrame(rows)
        df["ts_open"] = pd.to_datetime(df.pop("timestamp"), unit="ms")
        df["ts_close"] = df["ts_open"] + pd.Timedelta(milliseconds=interval_ms)
        return df[OHLCV_COLUMNS].reset_index(drop=True)
