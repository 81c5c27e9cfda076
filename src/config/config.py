"""
Configuration management for the market simulator.
Loads settings from environment variables (and .env files) with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from ..sim.errors import InvalidConfigError
from ..sim.sim_config import SimulationConfig


# SIM_* environment variable -> SimulationConfig field
SIM_ENV_VARS: Dict[str, str] = {
    "SIM_INITIAL_PRICE": "initial_price",
    "SIM_VOLATILITY": "volatility",
    "SIM_SPREAD": "spread",
    "SIM_UPDATE_INTERVAL_MS": "update_interval_ms",
    "SIM_ORDER_BOOK_LEVELS": "order_book_levels",
    "SIM_MAX_TRADE_SIZE": "max_trade_size",
    "SIM_MAX_TRADES_PER_SECOND": "max_trades_per_second",
    "SIM_TRADE_SIZE_STEP": "trade_size_step",
    "SIM_CANDLE_INTERVAL_MS": "candle_interval_ms",
    "SIM_AMPLITUDE_15S": "amplitude_threshold_15s",
    "SIM_AMPLITUDE_1M": "amplitude_threshold_1m",
    "SIM_AMPLITUDE_15M": "amplitude_threshold_15m",
    "SIM_AMPLITUDE_1H": "amplitude_threshold_1h",
    "SIM_PATTERN_TYPE": "pattern_type",
    "SIM_PATTERN_STRENGTH": "pattern_strength",
    "SIM_PATTERN_DURATION_MS": "pattern_duration_ms",
}


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = False


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "127.0.0.1"
    port: int = 3001

    # Start the tick loop when the app starts
    autostart: bool = True


def _parse_env_value(field_name: str, raw: str) -> Any:
    """Convert a raw environment string for a SimulationConfig field."""
    if field_name == "pattern_type":
        raw = raw.strip()
        return raw or None
    try:
        return float(raw)
    except ValueError:
        raise InvalidConfigError([f"{field_name} must be a number, got {raw!r}"])


def load_simulation_config(path: str, base: Optional[SimulationConfig] = None) -> SimulationConfig:
    """
    Load simulation overrides from a YAML file.

    The file holds a flat mapping of config fields (snake_case or the
    camelCase wire keys), e.g.:

        volatility: 0.0005
        patternType: uptrend

    Args:
        path: YAML file path
        base: Config the overrides are applied to (defaults if None)

    Returns:
        Validated SimulationConfig

    Raises:
        FileNotFoundError: If path does not exist
        InvalidConfigError: If the file is not a mapping or has invalid values
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise InvalidConfigError([f"{path} must contain a mapping of config fields"])

    return (base or SimulationConfig()).merged(data)


class Config:
    """
    Central configuration manager.

    Loads configuration from environment variables and provides
    typed access to all settings.
    """

    _instance: Optional['Config'] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, env_file: str = ".env"):
        if self._initialized:
            return

        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)

        # Initialize sub-configs
        self.simulation = self._load_simulation_config()
        self.log = self._load_log_config()
        self.server = self._load_server_config()

        self._initialized = True

    def _load_simulation_config(self) -> SimulationConfig:
        """
        Load simulation defaults from SIM_* variables, then SIM_CONFIG_FILE.

        Raises:
            InvalidConfigError: If any value is malformed or out of range
        """
        overrides: Dict[str, Any] = {}
        errors: List[str] = []
        for env_name, field_name in SIM_ENV_VARS.items():
            raw = os.getenv(env_name)
            if raw is None or raw == "":
                continue
            try:
                overrides[field_name] = _parse_env_value(field_name, raw)
            except InvalidConfigError as e:
                errors.extend(f"{env_name}: {msg}" for msg in e.errors)
        if errors:
            raise InvalidConfigError(errors)

        config = SimulationConfig().merged(overrides)

        config_file = os.getenv("SIM_CONFIG_FILE", "")
        if config_file:
            config = load_simulation_config(config_file, base=config)
        return config

    def _load_log_config(self) -> LogConfig:
        """Load logging configuration from environment."""
        return LogConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_to_file=os.getenv("LOG_TO_FILE", "false").lower() == "true",
        )

    def _load_server_config(self) -> ServerConfig:
        """Load server configuration from environment."""
        return ServerConfig(
            host=os.getenv("SIM_HOST", "127.0.0.1"),
            port=int(os.getenv("SIM_PORT", os.getenv("PORT", "3001"))),
            autostart=os.getenv("SIM_AUTOSTART", "true").lower() == "true",
        )

    def reload(self, env_file: str = ".env") -> "Config":
        """Reload configuration from environment and return the new instance."""
        self._initialized = False
        Config._instance = None
        return Config(env_file)

    def summary(self) -> str:
        """Get a human-readable configuration summary."""
        sim = self.simulation
        pattern = sim.pattern_type.value if sim.pattern_type else "none"
        lines = [
            "Simulation:",
            f"  initial_price={sim.initial_price} volatility={sim.volatility} spread={sim.spread}",
            f"  update_interval_ms={sim.update_interval_ms} order_book_levels={sim.order_book_levels}",
            f"  max_trade_size={sim.max_trade_size} max_trades_per_second={sim.max_trades_per_second}",
            f"  candle_interval_ms={sim.candle_interval_ms}",
            "  amplitude targets: " + ", ".join(
                f"{window}={pct:g}%" for window, pct in sim.amplitude_thresholds.items()
            ),
            f"  pattern={pattern} strength={sim.pattern_strength} duration_ms={sim.pattern_duration_ms}",
            "Logging:",
            f"  level={self.log.level} dir={self.log.log_dir} to_file={self.log.log_to_file}",
            "Server:",
            f"  {self.server.host}:{self.server.port} autostart={self.server.autostart}",
        ]
        return "\n".join(lines)


def get_config(env_file: str = ".env") -> Config:
    """Get or create the global config instance."""
    return Config(env_file)
