# simmenu/watchdog/debounce.py

"""
Debouncing of directory change notifications
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Collapse bursts of triggers into one delayed action

    At most one action is pending; scheduling again discards the pending
    action and restarts the delay (latest wins).
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        Initialize debouncer

        Args:
            loop: Event loop the action runs on (defaults to the running loop)
        """
        self.loop = loop
        self._pending: Optional[asyncio.TimerHandle] = None

        # Statistics
        self.stats = {
            'scheduled': 0,
            'superseded': 0,
            'fired': 0,
            'cancelled': 0,
        }

    @property
    def pending(self) -> bool:
        """True while an action is waiting to fire"""
        return self._pending is not None

    def schedule(self, delay: float, action: Callable[[], Any]):
        """
        Run action after delay, discarding any earlier pending action

        Args:
            delay: Seconds to wait
            action: Zero-argument callable
        """
        if self._pending is not None:
            self._pending.cancel()
            self.stats['superseded'] += 1
            logger.debug("Debounce reset, previous action discarded")

        loop = self.loop or asyncio.get_running_loop()
        self._pending = loop.call_later(delay, self._fire, action)
        self.stats['scheduled'] += 1

    def cancel(self):
        """Discard the pending action, if any"""
        if self._pending is None:
            return

        self._pending.cancel()
        self._pending = None
        self.stats['cancelled'] += 1
        logger.debug("Pending debounced action cancelled")

    def _fire(self, action: Callable[[], Any]):
        self._pending = None
        self.stats['fired'] += 1

        try:
            action()
        except Exception as e:
            logger.error(f"Error in debounced action: {e}")

    def get_stats(self) -> Dict[str, Any]:
        """Get debouncer statistics"""
        return {
            **self.stats,
            'pending': self.pending,
        }
