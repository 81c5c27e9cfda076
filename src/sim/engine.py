"""
Market simulator orchestrator.

Thin orchestrator that owns all simulator state and routes each
operation to the modular components.

Tick pipeline (in tick):
1. amplitude: volatility_multiplier(now, price, targets) -> multiplier
2. pattern: drift_contribution(now, price) -> drift
3. price: step(now, multiplier, drift) -> new price
4. spread: get_bid_ask(price, spread) -> bid, ask
5. candles: ingest(now, price) for every bucket size
6. order book: build(bid, ask, levels, spread)
7. snapshot: MarketDataSnapshot for the selected candle interval

Trades, config updates and presets are independent entry points. All three
operations (and every read accessor) hold one re-entrant lock, so a
timer thread ticking and a request thread trading never interleave.
"""

import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..utils.logger import get_logger
from .constants import MAX_CANDLES_IN_SNAPSHOT, MAX_TRADES_IN_SNAPSHOT
from .errors import InvalidConfigError
from .execution import TradeExecutor, TradeExecutorConfig
from .market import CandleAggregator, OrderBookSynthesizer
from .metrics import SimulationMetrics, SimulationMetricsSnapshot
from .presets import get_preset
from .pricing import AmplitudeController, PatternDriftModel, PriceProcess, SpreadModel
from .random_source import RandomSource
from .sim_config import SimulationConfig
from .types import Candle, MarketDataSnapshot, PatternState, Trade, TradeResult, TradeSide


def wall_clock_ms() -> float:
    """Current epoch time in milliseconds."""
    return time.time() * 1000.0


class MarketSimulator:
    """
    Synthetic market.

    Exposes the three operations the transport layer drives:
    tick(), execute_trade() and update_config().
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        random_source: Optional[RandomSource] = None,
        start_ms: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize simulator.

        Args:
            config: Initial configuration (defaults if None)
            random_source: Shared source of randomness (seed it for reproducible runs)
            start_ms: Timestamp of the initial price (clock() if None)
            clock: Millisecond clock used when an operation gets no explicit timestamp
        """
        self._lock = threading.RLock()
        self._config = config or SimulationConfig()
        self._random = random_source or RandomSource()
        self._clock = clock or wall_clock_ms
        self.logger = get_logger()

        self._spread_model = SpreadModel()
        self._metrics = SimulationMetrics()
        self._init_state(self._clock() if start_ms is None else start_ms)

    def _init_state(self, now_ms: float) -> None:
        cfg = self._config
        self._price = PriceProcess(cfg.initial_price, cfg.volatility, now_ms, self._random)
        self._pattern = PatternDriftModel(
            start_ms=now_ms,
            base_price=self._price.price,
            pattern_type=cfg.pattern_type,
            strength=cfg.pattern_strength,
            duration_ms=cfg.pattern_duration_ms,
            random_source=self._random,
        )
        self._amplitude = AmplitudeController()
        self._candles = CandleAggregator(random_source=self._random)
        self._order_book = OrderBookSynthesizer(self._random)
        self._executor = TradeExecutor(self._executor_config(cfg))
        self._last_snapshot: Optional[MarketDataSnapshot] = None

    @staticmethod
    def _executor_config(cfg: SimulationConfig) -> TradeExecutorConfig:
        return TradeExecutorConfig(
            max_trade_size=cfg.max_trade_size,
            max_trades_per_second=cfg.max_trades_per_second,
            spread=cfg.spread,
        )

    def _now(self, now_ms: Optional[float]) -> float:
        return self._clock() if now_ms is None else now_ms

    # ─────────────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────────────

    def tick(self, now_ms: Optional[float] = None) -> MarketDataSnapshot:
        """
        Advance all state by one step.

        Args:
            now_ms: Tick timestamp (clock() if None). The price step uses
                the wall-clock time elapsed since the previous tick.

        Returns:
            MarketDataSnapshot for this tick
        """
        with self._lock:
            now = self._now(now_ms)
            cfg = self._config
            current = self._price.price

            multiplier = self._amplitude.volatility_multiplier(now, current, cfg.amplitude_thresholds)
            pattern_drift = self._pattern.drift_contribution(now, current)
            price = self._price.step(now, volatility_multiplier=multiplier, pattern_drift=pattern_drift)

            bid, ask = self._spread_model.get_bid_ask(price, cfg.spread)
            self._candles.ingest(now, price)
            order_book = self._order_book.build(bid, ask, cfg.order_book_levels, cfg.spread)

            snapshot = MarketDataSnapshot(
                timestamp=now,
                price=price,
                bid=bid,
                ask=ask,
                order_book=order_book,
                trades=self._executor.recent_trades(MAX_TRADES_IN_SNAPSHOT),
                candles=self._candles.candles(cfg.candle_interval_ms, MAX_CANDLES_IN_SNAPSHOT),
                candle_interval_ms=cfg.candle_interval_ms,
                volatility_multiplier=multiplier,
            )
            self._metrics.record_tick(price, multiplier)
            self._last_snapshot = snapshot
            return snapshot

    def execute_trade(
        self,
        side: Union[TradeSide, str],
        size: float,
        now_ms: Optional[float] = None,
    ) -> TradeResult:
        """
        Execute a simulated market trade at the current price.

        Args:
            side: "buy" or "sell"
            size: Trade size in units
            now_ms: Request timestamp (clock() if None)

        Returns:
            TradeResult; rejections (RATE_LIMITED, SIZE_EXCEEDED) leave all state unchanged

        Raises:
            ValueError: If side is not buy or sell
        """
        side = TradeSide(side)
        with self._lock:
            now = self._now(now_ms)
            result = self._executor.execute(now, side, size, self._price.price)

            if result.success:
                trade = result.trade
                self._metrics.record_trade(trade)
                self.logger.trade(trade.side.value, trade.size, trade.price, trade.id)
            else:
                self._metrics.record_rejection(result.rejection)
                self.logger.rejection(
                    result.rejection.name,
                    result.message,
                    side=side.value,
                    size=size,
                )
            return result

    def update_config(self, partial: Mapping[str, Any], now_ms: Optional[float] = None) -> SimulationConfig:
        """
        Merge a partial update into the configuration.

        The whole config object is replaced in one assignment. Changing
        pattern_type restarts the pattern from the current price. Price,
        amplitude trackers, candles and trades persist.

        Args:
            partial: Field overrides (snake_case or camelCase keys)
            now_ms: Update timestamp (clock() if None)

        Returns:
            The applied configuration

        Raises:
            InvalidConfigError: Update rejected; the previous config stays in effect
        """
        with self._lock:
            try:
                new_config = self._config.merged(partial)
            except InvalidConfigError as e:
                self._metrics.record_invalid_config()
                self.logger.rejection("INVALID_CONFIG", "; ".join(e.errors))
                raise

            changes = self._config.diff(new_config)
            self._config = new_config

            self._price.volatility = new_config.volatility
            self._executor.configure(self._executor_config(new_config))
            pattern_reset = self._pattern.apply_config(
                new_config.pattern_type,
                new_config.pattern_strength,
                new_config.pattern_duration_ms,
                self._now(now_ms),
                self._price.price,
            )

            self.logger.config_change(changes)
            if pattern_reset:
                self.logger.info(
                    f"Pattern restarted: {new_config.pattern_type.value if new_config.pattern_type else 'none'} "
                    f"from {self._price.price:.6f}"
                )
            return new_config

    def apply_preset(self, name: str, now_ms: Optional[float] = None) -> SimulationConfig:
        """
        Apply a named preset and restart its pattern from the current price.

        Unlike update_config, the pattern restarts even when the preset's
        pattern type is already active, so a preset can be replayed.

        Raises:
            KeyError: Unknown preset name
        """
        preset = get_preset(name)
        with self._lock:
            now = self._now(now_ms)
            applied = self.update_config(preset.overrides(), now)
            self._pattern.reset(now, self._price.price)
            self.logger.info(f"Preset {preset.name} applied from {self._price.price:.6f}")
            return applied

    def reset(self, now_ms: Optional[float] = None) -> None:
        """Restart price, pattern, trackers, candles and trades from the current config."""
        with self._lock:
            self._init_state(self._now(now_ms))
            self._metrics.reset()
            self.logger.info(f"Simulator reset to {self._config.initial_price}")

    # ─────────────────────────────────────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────────────────────────────────────

    def get_config(self) -> SimulationConfig:
        return self._config

    @property
    def price(self) -> float:
        with self._lock:
            return self._price.price

    def last_snapshot(self) -> Optional[MarketDataSnapshot]:
        with self._lock:
            return self._last_snapshot

    def candles(self, interval_ms: Optional[int] = None, limit: Optional[int] = MAX_CANDLES_IN_SNAPSHOT) -> List[Candle]:
        """Candles for any bucket size (selected interval if None), oldest first."""
        with self._lock:
            interval = interval_ms or self._config.candle_interval_ms
            return self._candles.candles(interval, limit)

    def candles_dataframe(self, interval_ms: Optional[int] = None):
        with self._lock:
            return self._candles.to_dataframe(interval_ms or self._config.candle_interval_ms)

    def trades(self, limit: Optional[int] = None) -> List[Trade]:
        with self._lock:
            return self._executor.recent_trades(limit)

    def pattern_state(self) -> PatternState:
        with self._lock:
            state = self._pattern.state
            return PatternState(state.pattern_start_ms, state.base_price, state.progress)

    def amplitude_state(self) -> Dict[str, Dict]:
        with self._lock:
            return self._amplitude.to_dict()

    def stats(self) -> SimulationMetricsSnapshot:
        with self._lock:
            return self._metrics.get_metrics()
