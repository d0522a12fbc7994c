"""
Publish/subscribe point for the latest menu view
"""
import logging
from typing import Callable, List

from .view import View

logger = logging.getLogger(__name__)

Subscriber = Callable[[View], None]


class ViewPublisher:
    """Holds the latest view and notifies subscribers on each publish"""

    def __init__(self):
        self.latest: View = View.empty()
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber

        Returns:
            Callable that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, view: View):
        self.latest = view

        for callback in list(self._subscribers):
            try:
                callback(view)
            except Exception as e:
                logger.error(f"Error in view subscriber {callback!r}: {e}")

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
