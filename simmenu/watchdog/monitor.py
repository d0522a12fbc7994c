# simmenu/watchdog/monitor.py

"""
Main device-root monitor for SimMenu
"""
import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .debounce import Debouncer
from .watcher import (
    ChangeCallback,
    DirectoryWatcher,
    RootWatcher,
    SubWatcherSet,
    WatcherFactory,
)
from ..domain.device_manager import DeviceManager, DeviceProvider
from ..menu.publisher import ViewPublisher
from ..menu.reconciler import Reconciler
from ..menu.view import View

logger = logging.getLogger(__name__)


class MonitorState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class MenuManager:
    """
    Keeps the device menu in sync with the device root

    Root changes rebuild the menu and re-create the per-device watchers;
    device-level changes only rebuild the menu. All rebuilds go through
    one debouncer, so at most one is ever pending.
    """

    def __init__(self, config, provider: Optional[DeviceProvider] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None,
                 watcher_factory: Optional[WatcherFactory] = None,
                 publisher: Optional[ViewPublisher] = None):
        """
        Initialize menu manager

        Args:
            config: Configuration (uses config.paths and config.watchdog)
            provider: Device source (defaults to a DeviceManager on the root)
            loop: Event loop for notifications and debouncing
            watcher_factory: Creates directory watchers (defaults to watchdog)
            publisher: View publisher (a new one by default)
        """
        self.config = config
        self.root = Path(config.paths.device_root)
        self.debounce_time = config.watchdog.debounce_time
        self.loop = loop

        self.provider = provider or DeviceManager(self.root)
        self.publisher = publisher or ViewPublisher()
        self.reconciler = Reconciler(self.provider, self.publisher)
        self.debouncer = Debouncer(loop)

        factory = watcher_factory or self._default_watcher_factory
        self.root_watcher = RootWatcher(self.root, factory, self._on_root_changed)
        self.sub_watchers = SubWatcherSet(self.root, factory, self._reload_when_ready)

        self.state = MonitorState.IDLE

        # Initial menu, independent of watching
        self.reconciler.rebuild()

        logger.info(f"MenuManager initialized for {self.root}")

    def _default_watcher_factory(self, directory: Path, callback: ChangeCallback) -> DirectoryWatcher:
        return DirectoryWatcher(
            directory,
            callback,
            loop=self.loop,
            use_polling=self.config.watchdog.use_polling,
            poll_interval=self.config.watchdog.poll_interval,
        )

    @property
    def is_running(self) -> bool:
        return self.state is MonitorState.RUNNING

    @property
    def view(self) -> View:
        return self.publisher.latest

    def subscribe(self, callback: Callable[[View], None]) -> Callable[[], None]:
        return self.publisher.subscribe(callback)

    def start(self):
        """Start watching the device root and its subdirectories"""
        if self.is_running:
            logger.warning("MenuManager is already running")
            return

        self.root_watcher.start()
        self.sub_watchers.rescan()
        self.state = MonitorState.RUNNING

        logger.info("MenuManager started")

    def stop(self):
        """Stop all watchers and drop any pending rebuild"""
        if not self.is_running:
            logger.debug("MenuManager is not running")
            return

        self.root_watcher.stop()
        self.sub_watchers.stop_all()
        self.debouncer.cancel()
        self.state = MonitorState.IDLE

        logger.info("MenuManager stopped")

    def _on_root_changed(self):
        logger.debug(f"Change detected in {self.root}")
        self._reload_when_ready()
        self.sub_watchers.rescan()

    def _reload_when_ready(self):
        self.debouncer.schedule(self.debounce_time, self.reconciler.rebuild)

    def get_status(self) -> Dict[str, Any]:
        """Get monitor status"""
        return {
            'state': self.state.value,
            'root': str(self.root),
            'debounce_time': self.debounce_time,
            'devices': len(self.view.devices),
            'rebuilds': self.reconciler.rebuild_count,
            'root_watcher': self.root_watcher.get_status(),
            'sub_watchers': self.sub_watchers.get_status(),
            'debouncer': self.debouncer.get_stats(),
        }
