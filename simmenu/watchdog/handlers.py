# simmenu/watchdog/handlers.py

"""
Event handler bridging watchdog observer threads to the event loop
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler

logger = logging.getLogger(__name__)

# Reading files (e.g. plists during a rebuild) must not count as a change
IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})


class ChangeNotifier(FileSystemEventHandler):
    """
    Turn watchdog events into payload-free change notifications

    Events arrive on an observer thread; the callback always runs on the
    event loop. The optional gate is evaluated on the loop right before
    the callback, so notifications queued by a watcher that has since
    been stopped are dropped.
    """

    def __init__(self, callback: Callable[[], Any],
                 loop: asyncio.AbstractEventLoop,
                 gate: Optional[Callable[[], bool]] = None):
        self.callback = callback
        self.loop = loop
        self.gate = gate

        # Statistics
        self.stats = {
            'events_received': 0,
            'events_ignored': 0,
            'notifications_delivered': 0,
            'notifications_dropped': 0,
            'last_event': None,
        }

    def on_any_event(self, event: FileSystemEvent):
        """Handle any file system event (observer thread)"""
        self.stats['events_received'] += 1

        if event.event_type in IGNORED_EVENT_TYPES:
            self.stats['events_ignored'] += 1
            return

        self.stats['last_event'] = datetime.now()

        try:
            self.loop.call_soon_threadsafe(self._dispatch)
        except RuntimeError:
            # Loop already closed (shutdown)
            self.stats['notifications_dropped'] += 1
            logger.debug(f"Event loop closed, dropping change for {event.src_path}")

    def _dispatch(self):
        """Deliver one notification (event loop)"""
        if self.gate is not None and not self.gate():
            self.stats['notifications_dropped'] += 1
            return

        self.stats['notifications_delivered'] += 1
        try:
            self.callback()
        except Exception as e:
            logger.error(f"Error in change callback: {e}")

    def get_stats(self) -> Dict[str, Any]:
        """Get handler statistics"""
        return self.stats.copy()
