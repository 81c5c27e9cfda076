"""
FastAPI server for the market simulator.

Usage:
    python sim_cli.py serve --port 3001
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import get_config
from ..sim import MarketSimulator, SimulationRunner
from ..utils.logger import get_logger


def create_app(
    simulator: Optional[MarketSimulator] = None,
    start_runner: Optional[bool] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        simulator: Simulator to serve (built from get_config() if None)
        start_runner: Run the tick loop for the app's lifetime
            (ServerConfig.autostart if None)
    """
    config = get_config()
    if simulator is None:
        simulator = MarketSimulator(config.simulation)
    if start_runner is None:
        start_runner = config.server.autostart

    runner = SimulationRunner(simulator)
    logger = get_logger()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if start_runner:
            runner.start()
        try:
            yield
        finally:
            if runner.is_running:
                runner.stop()
            logger.info("API server shut down")

    app = FastAPI(
        title="MarketSim",
        description="Synthetic market data and simulated trading",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.simulator = simulator
    app.state.runner = runner

    # CORS middleware for the chart UI dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",  # Vite dev server
            "http://localhost:3000",  # Alternative dev port
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    from .routes import config_router, market_router, presets_router, trades_router

    app.include_router(market_router, prefix="/api")
    app.include_router(config_router, prefix="/api")
    app.include_router(trades_router, prefix="/api")
    app.include_router(presets_router, prefix="/api")

    @app.get("/api/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": "marketsim",
            "running": runner.is_running,
            "ticks": runner.ticks,
        }

    return app


def run_server(
    host: str = "127.0.0.1",
    port: int = 3001,
    reload: bool = False,
) -> None:
    """
    Run the simulator API server.

    Args:
        host: Host to bind to
        port: Port to listen on
        reload: Enable auto-reload for development
    """
    import uvicorn

    print(f"\n  MarketSim")
    print(f"  Server: http://{host}:{port}")
    print(f"  API Docs: http://{host}:{port}/docs")
    print(f"  Press Ctrl+C to stop\n")

    uvicorn.run(
        "src.api.server:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
        log_level="info",
    )


if __name__ == "__main__":
    run_server()
