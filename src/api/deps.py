"""
Shared FastAPI dependencies.
"""

from fastapi import Request

from ..sim import MarketSimulator, SimulationRunner


def get_simulator(request: Request) -> MarketSimulator:
    """Simulator instance attached to the app at creation."""
    return request.app.state.simulator


def get_runner(request: Request) -> SimulationRunner:
    """Background runner attached to the app at creation."""
    return request.app.state.runner
