"""
Shared fixtures for simulator tests.

All fixtures use a seeded RandomSource and explicit timestamps so runs
are reproducible and independent of the wall clock.
"""

import os

import pytest

from src.config import Config
from src.sim import MarketSimulator, RandomSource, SimulationConfig

START_MS = 1_700_000_000_000


@pytest.fixture
def rng() -> RandomSource:
    return RandomSource(seed=1234)


@pytest.fixture
def sim_config() -> SimulationConfig:
    return SimulationConfig()


@pytest.fixture
def simulator(sim_config, rng) -> MarketSimulator:
    return MarketSimulator(sim_config, random_source=rng, start_ms=START_MS)


@pytest.fixture
def fresh_config(monkeypatch, tmp_path):
    """
    Isolate the Config singleton from the developer's environment.

    Runs from an empty directory so no .env file is picked up.
    """
    for name in list(os.environ):
        if name.startswith("SIM_") or name in ("LOG_LEVEL", "LOG_DIR", "LOG_TO_FILE", "PORT"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    Config._instance = None
    yield
    Config._instance = None
