"""
HTTP API for the market simulator.

Usage:
    from src.api import create_app, run_server
    run_server(port=3001)
"""

from .server import create_app, run_server

__all__ = ["create_app", "run_server"]
