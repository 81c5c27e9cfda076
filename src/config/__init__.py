"""
Configuration management.
"""

from .config import (
    Config,
    get_config,
    LogConfig,
    ServerConfig,
    SIM_ENV_VARS,
    load_simulation_config,
)

__all__ = [
    # Config classes
    "Config",
    "get_config",
    "LogConfig",
    "ServerConfig",
    # Simulation config loading
    "SIM_ENV_VARS",
    "load_simulation_config",
]
