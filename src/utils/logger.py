"""
Logging system for the market simulator.
Provides human-readable console logs and optional daily log files.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# ANSI color codes for terminal output
class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    BOLD = "\033[1m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        # Format a copy so file handlers sharing the record stay uncolored
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"
        record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


class SimLogger:
    """
    Central logging system for the simulator.

    Features:
    - Console output with colors
    - Optional daily log files (general, trades, errors)
    - Structured one-line records for fills, rejections and config changes
    """

    _instance: Optional['SimLogger'] = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False):
        if SimLogger._initialized:
            return

        self.log_dir = Path(log_dir)
        self.log_to_file = log_to_file
        if log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._create_logger("marketsim", log_level, "sim")
        self.trade_logger = self._create_logger("marketsim.trades", log_level, "trades", console=False)
        self.error_logger = self._create_logger("marketsim.errors", "ERROR", "errors", console=False)

        SimLogger._initialized = True

    def _create_logger(
        self,
        name: str,
        level: str,
        file_prefix: str,
        console: bool = True,
    ) -> logging.Logger:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level.upper()))
        logger.handlers.clear()
        logger.propagate = False

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(ColoredFormatter(
                "%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%H:%M:%S"
            ))
            logger.addHandler(console_handler)

        # File handler (plain text, no colors)
        if self.log_to_file:
            log_file = self.log_dir / f"{file_prefix}_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        return logger

    def info(self, msg: str, *args, **kwargs):
        """Log info message."""
        self.main_logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message."""
        self.main_logger.debug(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message."""
        self.main_logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        """Log error message."""
        self.main_logger.error(msg, *args, **kwargs)
        self.error_logger.error(msg, *args, **kwargs)

    def trade(self, side: str, size: float, price: float, trade_id: str, **kwargs):
        """
        Log an executed simulated trade with structured format.

        Args:
            side: buy or sell
            size: Trade size (units)
            price: Fill price
            trade_id: Trade identifier
            **kwargs: Additional fields
        """
        parts = [
            "[FILL]",
            f"id={trade_id}",
            f"side={side}",
            f"size={size:g}",
            f"price={price:.6f}",
        ]

        for key, value in kwargs.items():
            parts.append(f"{key}={value}")

        msg = " | ".join(parts)
        self.trade_logger.info(msg)
        self.main_logger.debug(msg)

    def rejection(self, kind: str, reason: str, **kwargs):
        """
        Log a refused request (rate limit, size limit, invalid config).

        The caller still receives the error; this is an audit line only.

        Args:
            kind: RATE_LIMITED, SIZE_EXCEEDED, INVALID_CONFIG
            reason: Reason for the rejection
            **kwargs: Additional context
        """
        parts = [f"[REJECT:{kind}]", reason]
        for key, value in kwargs.items():
            parts.append(f"{key}={value}")

        self.main_logger.warning(" | ".join(parts))

    def config_change(self, changes: Dict[str, Any]):
        """Log an applied configuration update."""
        if not changes:
            self.main_logger.debug("[CONFIG] update applied with no changes")
            return
        parts = ["[CONFIG]"] + [f"{key}={value}" for key, value in changes.items()]
        self.main_logger.info(" | ".join(parts))


# Global logger instance
_logger: Optional[SimLogger] = None


def get_logger(log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False) -> SimLogger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = SimLogger(log_dir, log_level, log_to_file)
        _configure_third_party_loggers()
    return _logger


def setup_logger(log_dir: str = "logs", log_level: str = "INFO", log_to_file: bool = False) -> SimLogger:
    """Initialize the logger with custom settings."""
    global _logger
    SimLogger._initialized = False
    SimLogger._instance = None
    _logger = SimLogger(log_dir, log_level, log_to_file)
    _configure_third_party_loggers()
    return _logger


def _configure_third_party_loggers():
    """
    Configure third-party library loggers to reduce noise.

    The runner pushes snapshots many times per second, so per-request
    access logs from uvicorn drown out simulator output.
    """
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
