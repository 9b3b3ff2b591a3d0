"""
Debounced Search Utility

Coalesces keystroke-driven query changes into a single fetch per settled
query. Trailing edge only: every new value cancels the pending emission and
restarts the quiet period.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class QueryDebouncer:
    """
    Single-slot debouncer around a timer handle.

    A delay of 0 dispatches every change immediately on the caller's thread.
    The empty string is a regular query and is emitted like any other.
    """

    def __init__(self, callback: Callable[[str], None], delay: float = 0.0,
                 timer_factory: Callable[..., threading.Timer] = threading.Timer):
        """
        Args:
            callback: Called with the settled query
            delay: Quiet period in seconds (>= 0)
            timer_factory: threading.Timer compatible constructor
        """
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.callback = callback
        self.delay = delay
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._pending_query: Optional[str] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def submit(self, query: str) -> None:
        """Register a new query value, replacing any pending one."""
        with self._lock:
            self._cancel_locked()
            if self.delay > 0:
                self._pending_query = query
                self._timer = self._timer_factory(self.delay, self._fire, args=(self._generation,))
                self._timer.daemon = True
                self._timer.start()
                return
        self.callback(query)

    def flush(self) -> None:
        """Emit the pending query now instead of waiting for the timer."""
        with self._lock:
            if self._timer is None:
                return
            query = self._pending_query
            self._cancel_locked()
        self.callback(query)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._pending_query = None
        self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer that expired while being superseded must not emit
            if generation != self._generation or self._timer is None:
                return
            query = self._pending_query
            self._timer = None
            self._pending_query = None
            self._generation += 1
        logger.debug(f"Debounce settled on {query!r}")
        self.callback(query)
