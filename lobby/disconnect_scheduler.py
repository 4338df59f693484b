"""
Disconnect grace scheduler.

Holds a dropped player's seat open for a grace window so a page reload
or a brief network blip does not cost them their place in the game.
"""

import logging
from typing import Callable

from utils.constants import GAME_CONFIG
from utils.timers import TimerRegistry

logger = logging.getLogger(__name__)


class DisconnectScheduler:
    """
    Per-identity delayed evictions.

    Timers are keyed by the identity the connection had when it dropped,
    so repeated disconnects of the same identity never stack evictions.
    """

    def __init__(self, timers: TimerRegistry,
                 grace_seconds: float = GAME_CONFIG['GRACE_PERIOD_SECONDS']):
        """
        Args:
            timers: Timer registry shared with the rest of the server
            grace_seconds: How long a seat is held after a disconnect
        """
        self.timers = timers
        self.grace_seconds = grace_seconds

    @staticmethod
    def _key(identity: str):
        return ('disconnect', identity)

    def schedule_eviction(self, identity: str, evict: Callable[[str], None]) -> None:
        """Call ``evict(identity)`` once the grace window elapses."""
        self.timers.schedule(self._key(identity), self.grace_seconds, lambda: evict(identity))
        logger.info(f"Holding seat for {identity} for {self.grace_seconds}s")

    def cancel_eviction(self, identity: str) -> bool:
        """
        Cancel a pending eviction.

        Returns:
            True if an eviction was pending and is now cancelled
        """
        cancelled = self.timers.cancel(self._key(identity))
        if cancelled:
            logger.info(f"Cancelled eviction for {identity}")
        return cancelled

    def is_pending(self, identity: str) -> bool:
        return self.timers.is_pending(self._key(identity))
