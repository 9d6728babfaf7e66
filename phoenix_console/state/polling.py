"""Fixed-interval refresh with an explicit cancellation handle."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class PollingHandle:
    """Re-run ``action`` every ``interval`` seconds until cancelled.

    Failures of a single tick are logged and the loop keeps going; the owning
    controller has already recorded the error in its state.
    """

    def __init__(self, action: Callable[[], Any], interval: float, name: str = "poller") -> None:
        if interval <= 0:
            raise ValueError("Polling interval must be positive")
        self.action = action
        self.interval = interval
        self.name = name
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def start(self) -> "PollingHandle":
        if self._thread is not None:
            return self
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.debug("polling-started", poller=self.name, interval=self.interval)
        return self

    def cancel(self, timeout: Optional[float] = None) -> None:
        """Stop the loop and wait for an in-flight tick to finish."""
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug("polling-cancelled", poller=self.name)

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.action()
            except Exception as exc:
                logger.warning("polling-tick-failed", poller=self.name, error=str(exc))

    def __enter__(self) -> "PollingHandle":
        return self.start()

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        self.cancel()
        return False
