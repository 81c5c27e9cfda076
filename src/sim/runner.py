"""
Periodic simulation driver.

Runs as a background thread that ticks the simulator every
update_interval_ms and hands each snapshot to a callback (e.g. a socket
broadcaster). The interval is re-read every loop, so config updates
take effect on the next tick.
"""

import threading
import time
from typing import Callable, Dict, Optional

from ..utils.logger import get_logger
from .engine import MarketSimulator, wall_clock_ms
from .types import MarketDataSnapshot

SnapshotCallback = Callable[[MarketDataSnapshot], None]


class SimulationRunner:
    """
    Background tick loop.

    Features:
    - Drift-free scheduling against a monotonic deadline
    - Tick and callback errors are logged and the loop keeps running
    - Idempotent start, joining stop
    """

    def __init__(
        self,
        simulator: MarketSimulator,
        callback: Optional[SnapshotCallback] = None,
        clock: Callable[[], float] = wall_clock_ms,
    ):
        """
        Args:
            simulator: Simulator to drive
            callback: Receives every snapshot (optional)
            clock: Millisecond clock passed to tick()
        """
        self.simulator = simulator
        self.callback = callback
        self._clock = clock
        self.logger = get_logger()

        self._running = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0
        self.callback_errors = 0
        self.tick_errors = 0

    def _run_once(self) -> MarketDataSnapshot:
        snapshot = self.simulator.tick(self._clock())
        self.ticks += 1
        if self.callback is not None:
            try:
                self.callback(snapshot)
            except Exception as e:
                self.callback_errors += 1
                self.logger.error(f"Snapshot callback error: {e}")
        return snapshot

    def _run_loop(self):
        """Background tick loop."""
        self.logger.info("Simulation runner started")

        next_deadline = time.monotonic()
        try:
            while not self._stop_event.is_set():
                try:
                    self._run_once()
                except Exception as e:
                    self.tick_errors += 1
                    self.logger.error(f"Simulation tick error: {e}")

                interval_s = self.simulator.get_config().update_interval_ms / 1000.0
                next_deadline += interval_s
                delay = next_deadline - time.monotonic()
                if delay < 0:
                    # Fell behind: skip missed ticks rather than bursting
                    next_deadline = time.monotonic()
                    delay = 0
                self._stop_event.wait(delay)
        finally:
            self._running = False
            self.logger.info("Simulation runner stopped")

    # ==================== Control Methods ====================

    def start(self):
        """Start the background tick loop."""
        if self._running:
            self.logger.warning("Simulation runner already running")
            return

        self._running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="simulation-runner", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0):
        """Stop the background tick loop."""
        self._running = False
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None

    def run_once(self) -> MarketDataSnapshot:
        """Run a single tick (blocking)."""
        return self._run_once()

    @property
    def is_running(self) -> bool:
        return self._running

    def get_status(self) -> Dict:
        """Get runner status."""
        return {
            "running": self._running,
            "ticks": self.ticks,
            "callback_errors": self.callback_errors,
            "tick_errors": self.tick_errors,
            "update_interval_ms": self.simulator.get_config().update_interval_ms,
        }
