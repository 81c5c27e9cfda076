"""
Tests for SimLogger.
"""

import pytest

from src.utils.logger import SimLogger, get_logger, setup_logger


@pytest.fixture
def file_logger(tmp_path):
    logger = setup_logger(str(tmp_path), "DEBUG", log_to_file=True)
    yield logger
    for inner in (logger.main_logger, logger.trade_logger, logger.error_logger):
        for handler in inner.handlers:
            handler.close()
    setup_logger()


def read_log(tmp_path, prefix):
    (path,) = tmp_path.glob(f"{prefix}_*.log")
    return path.read_text(encoding="utf-8")


class TestSimLogger:
    """Test structured log lines and file routing."""

    def test_singleton(self):
        assert get_logger() is get_logger()
        assert isinstance(get_logger(), SimLogger)

    def test_trade_goes_to_trade_log(self, file_logger, tmp_path):
        file_logger.trade("buy", 0.5, 1.10005, "trade_000001")
        line = read_log(tmp_path, "trades")
        assert "[FILL]" in line
        assert "id=trade_000001" in line
        assert "price=1.100050" in line

    def test_rejection_logged_as_warning(self, file_logger, tmp_path):
        file_logger.rejection("SIZE_EXCEEDED", "Trade size 2 exceeds maximum 1", size=2)
        line = read_log(tmp_path, "sim")
        assert "WARNING" in line
        assert "[REJECT:SIZE_EXCEEDED]" in line
        assert "size=2" in line

    def test_errors_duplicated_to_error_log(self, file_logger, tmp_path):
        file_logger.error("callback failed")
        assert "callback failed" in read_log(tmp_path, "errors")
        assert "callback failed" in read_log(tmp_path, "sim")

    def test_file_logs_are_uncolored(self, file_logger, tmp_path):
        file_logger.info("plain text")
        assert "\033[" not in read_log(tmp_path, "sim")

    def test_config_change(self, file_logger, tmp_path):
        file_logger.config_change({"volatility": 0.002})
        assert "[CONFIG] | volatility=0.002" in read_log(tmp_path, "sim")
