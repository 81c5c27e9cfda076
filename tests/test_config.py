"""
Tests for process configuration (env, .env and YAML).
"""

import pytest

from src.config import Config, get_config, load_simulation_config
from src.sim import InvalidConfigError, PatternType, SimulationConfig


class TestEnvironment:
    """Test SIM_* environment loading."""

    def test_defaults_without_env(self, fresh_config):
        config = get_config()
        assert config.simulation == SimulationConfig()
        assert config.log.level == "INFO"
        assert config.server.port == 3001
        assert config.server.autostart is True

    def test_singleton(self, fresh_config):
        assert get_config() is get_config()

    def test_env_overrides(self, fresh_config, monkeypatch):
        monkeypatch.setenv("SIM_VOLATILITY", "0.002")
        monkeypatch.setenv("SIM_ORDER_BOOK_LEVELS", "8")
        monkeypatch.setenv("SIM_PATTERN_TYPE", "uptrend")
        monkeypatch.setenv("SIM_PORT", "4000")
        monkeypatch.setenv("SIM_AUTOSTART", "false")

        config = get_config()
        assert config.simulation.volatility == 0.002
        assert config.simulation.order_book_levels == 8
        assert config.simulation.pattern_type == PatternType.UPTREND
        assert config.server.port == 4000
        assert config.server.autostart is False

    def test_invalid_env_value(self, fresh_config, monkeypatch):
        """Malformed values name the offending variable."""
        monkeypatch.setenv("SIM_VOLATILITY", "lots")
        with pytest.raises(InvalidConfigError) as exc_info:
            get_config()
        assert any("SIM_VOLATILITY" in msg for msg in exc_info.value.errors)

    def test_out_of_range_env_value(self, fresh_config, monkeypatch):
        monkeypatch.setenv("SIM_SPREAD", "-1")
        with pytest.raises(InvalidConfigError, match="spread"):
            get_config()

    def test_dotenv_file(self, fresh_config, monkeypatch, tmp_path):
        """Values from a .env file are loaded."""
        # Registered so monkeypatch removes the variable dotenv sets
        monkeypatch.setenv("SIM_INITIAL_PRICE", "")
        (tmp_path / ".env").write_text("SIM_INITIAL_PRICE=42.5\n")

        assert get_config().simulation.initial_price == 42.5

    def test_summary(self, fresh_config):
        summary = get_config().summary()
        assert "volatility=0.0001" in summary
        assert "15s=3%" in summary

    def test_reload_replaces_singleton(self, fresh_config, monkeypatch):
        """reload() re-reads the environment and becomes the global instance."""
        monkeypatch.setenv("SIM_VOLATILITY", "0.002")
        original = get_config()

        monkeypatch.setenv("SIM_VOLATILITY", "0.003")
        reloaded = original.reload()

        assert reloaded is not original
        assert get_config() is reloaded
        assert get_config().simulation.volatility == 0.003


class TestYamlConfig:
    """Test YAML override files."""

    def test_load_file(self, tmp_path):
        path = tmp_path / "sim.yml"
        path.write_text("volatility: 0.0005\npatternType: double_top\ncandleInterval: 5000\n")

        config = load_simulation_config(str(path))
        assert config.volatility == 0.0005
        assert config.pattern_type == PatternType.DOUBLE_TOP
        assert config.candle_interval_ms == 5000

    def test_empty_file_gives_base(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        base = SimulationConfig(spread=0.0002)
        assert load_simulation_config(str(path), base=base) == base

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidConfigError, match="mapping"):
            load_simulation_config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_simulation_config(str(tmp_path / "nope.yml"))

    def test_config_file_env(self, fresh_config, monkeypatch, tmp_path):
        """SIM_CONFIG_FILE is applied on top of SIM_* values."""
        path = tmp_path / "sim.yml"
        path.write_text("volatility: 0.0007\n")
        monkeypatch.setenv("SIM_SPREAD", "0.0003")
        monkeypatch.setenv("SIM_CONFIG_FILE", str(path))

        config = Config()
        assert config.simulation.volatility == 0.0007
        assert config.simulation.spread == 0.0003
