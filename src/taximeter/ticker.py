"""Tick sources that drive the meter clock.

The controller owns no timer of its own. It starts and stops a TickSource
and receives one on_tick() call per interval. IntervalTicker is the
thread-backed implementation used outside of tests.
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class TickSource(Protocol):
    def start(self, callback: Callable[[], object]) -> None: ...

    def stop(self) -> None: ...


class IntervalTicker:
    """Calls a callback every `interval_seconds` on a daemon thread.

    stop() never joins the worker: it may be called from inside the callback
    or while the caller holds a lock the callback is waiting for. A tick
    already in flight can still be delivered once after stop(), so the
    receiver must ignore ticks from runs it has since stopped.
    """

    def __init__(self, interval_seconds: float = 1.0, name: str = "meter-ticker") -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.interval_seconds = interval_seconds
        self._name = name
        self._lock = threading.Lock()
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self, callback: Callable[[], object]) -> None:
        with self._lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(callback, stop_event),
                name=self._name,
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
        thread.start()
        logger.debug("Ticker started (interval=%.2fs)", self.interval_seconds)

    def stop(self) -> None:
        with self._lock:
            if self._stop_event is None:
                return
            self._stop_event.set()
            self._stop_event = None
        logger.debug("Ticker stopped")

    def join(self, timeout: float | None = None) -> None:
        """Wait for the most recent worker thread to exit. Used on shutdown."""
        with self._lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self, callback: Callable[[], object], stop_event: threading.Event) -> None:
        # Event.wait returns True once stop() is called, ending the loop
        while not stop_event.wait(self.interval_seconds):
            try:
                callback()
            except Exception:
                logger.exception("Tick callback failed")
