"""
Keyed, cancellable one-shot timers.

Wraps ``threading.Timer`` so that at most one timer is pending per key
and cancellation and firing can never both take effect.
"""

import logging
import threading
from typing import Any, Callable, Dict, Hashable

logger = logging.getLogger(__name__)


class TimerRegistry:
    """
    Holds pending timers by key.

    The registry entry is the single source of truth: a firing timer
    removes its own entry before running the callback, and ``cancel``
    removes the entry before stopping the timer. Whichever side removes
    the entry first wins; the other side sees nothing to do.
    """

    def __init__(self, timer_factory: Callable[..., Any] = threading.Timer):
        """
        Args:
            timer_factory: Callable with the ``threading.Timer(interval, function)``
                signature returning an object with ``start()`` and ``cancel()``
        """
        self.timer_factory = timer_factory
        self._timers: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    def schedule(self, key: Hashable, delay: float, callback: Callable[[], None]) -> None:
        """
        Run ``callback`` after ``delay`` seconds unless cancelled.

        Scheduling a key that is already pending replaces the old timer.
        """
        timer = None

        def _fire():
            with self._lock:
                if self._timers.get(key) is not timer:
                    return
                del self._timers[key]
            logger.debug(f"Timer fired: {key}")
            callback()

        timer = self.timer_factory(delay, _fire)
        timer.daemon = True

        with self._lock:
            previous = self._timers.pop(key, None)
            self._timers[key] = timer
        if previous is not None:
            previous.cancel()
        timer.start()
        logger.debug(f"Timer scheduled: {key} in {delay}s")

    def cancel(self, key: Hashable) -> bool:
        """
        Cancel the pending timer for ``key``.

        Returns:
            True if a pending timer was cancelled, False if none was pending
            (never scheduled, already fired, or already cancelled)
        """
        with self._lock:
            timer = self._timers.pop(key, None)
        if timer is None:
            return False
        timer.cancel()
        logger.debug(f"Timer cancelled: {key}")
        return True

    def is_pending(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._timers

    def cancel_all(self) -> int:
        """Cancel every pending timer. Returns how many were cancelled."""
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        return len(timers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._timers)
