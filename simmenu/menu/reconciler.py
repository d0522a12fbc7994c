"""
Menu reconciliation: re-derive the whole view from current device state
"""
import logging

from ..domain.device_manager import DeviceProvider
from .publisher import ViewPublisher
from .view import View, build_view

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Rebuilds the menu view from scratch

    Never looks at watcher state, so it is safe to run while the
    sub-watchers are being rebuilt.
    """

    def __init__(self, provider: DeviceProvider, publisher: ViewPublisher):
        self.provider = provider
        self.publisher = publisher
        self.rebuild_count = 0

    def rebuild(self):
        """Reload devices and publish a fresh view"""
        try:
            devices = self.provider.reload()
            view = build_view(devices)
        except Exception as e:
            logger.error(f"Failed to load devices, publishing empty menu: {e}")
            view = View.empty()

        self.rebuild_count += 1
        logger.info(f"Menu rebuilt with {len(view.devices)} devices")
        self.publisher.publish(view)
