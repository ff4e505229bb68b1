"""
Session Sweeper - Periodic removal of expired session records
"""
import logging
import threading
from typing import Optional

import config
from sessions.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionSweeper:
    """
    Background thread that calls ``SessionStore.cleanup`` on a fixed interval.

    Expiry is enforced on every read whether or not the sweeper runs; the
    sweeper only reclaims memory held by expired records.
    """

    def __init__(self, store: SessionStore, interval: float = None):
        if interval is None:
            interval = config.SESSION_CLEANUP_INTERVAL
        if interval <= 0:
            raise ValueError("Cleanup interval must be greater than 0")

        self.store = store
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._state_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        """
        Run a single sweep.

        Returns:
            Number of records removed
        """
        return self.store.cleanup()

    def start(self) -> None:
        """
        Start the background sweep thread.

        No-op if already running. A thread still finishing a sweep after a
        timed-out ``stop`` is resumed rather than joined by a second thread.
        """
        with self._state_lock:
            self._stop_event.clear()
            if self.is_running:
                return

            self._thread = threading.Thread(
                target=self._sweep_loop,
                name="session-sweeper",
                daemon=True
            )
            self._thread.start()
        logger.info("[SWEEPER] Started (interval: %ss)", self.interval)

    def stop(self, timeout: float = None) -> None:
        """
        Stop the background thread and wait for it to exit.

        Args:
            timeout: Maximum seconds to wait for the thread; if it is still
                mid-sweep afterwards, it exits once that sweep finishes
        """
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return

        thread.join(timeout)
        if thread.is_alive():
            logger.warning("[SWEEPER] Still finishing a sweep after %ss", timeout)
        else:
            logger.info("[SWEEPER] Stopped")

    def _sweep_loop(self):
        while True:
            if self._stop_event.wait(self.interval):
                with self._state_lock:
                    # start() may have cleared the event while we were waking up
                    if self._stop_event.is_set():
                        if self._thread is threading.current_thread():
                            self._thread = None
                        return
                continue

            try:
                self.run_once()
            except Exception:
                logger.exception("[SWEEPER] Cleanup error")
