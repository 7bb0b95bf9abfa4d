"""Periodic tick driver for the study session clock."""
import logging
import threading
from typing import Callable, Optional

from config import SESSION_TICK_SECONDS

logger = logging.getLogger(__name__)


class SessionTimer:
    """
    Calls a callback once per interval on a daemon thread.

    Ticks missed while the process is suspended are dropped, not replayed.
    """

    def __init__(self, callback: Callable[[], None], interval_seconds: Optional[float] = None):
        if interval_seconds is None:
            interval_seconds = SESSION_TICK_SECONDS
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.callback = callback
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="session-timer", daemon=True)
        self._thread.start()
        logger.info(f"Session timer started (interval={self.interval_seconds}s)")

    def stop(self) -> None:
        if not self.running:
            return
        self._stop_event.set()
        self._thread.join(timeout=self.interval_seconds)
        self._thread = None
        logger.info("Session timer stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Session timer callback failed: {e}", exc_info=True)
