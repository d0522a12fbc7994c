# simmenu/watchdog/watcher.py

"""
Directory watcher implementations
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from .handlers import ChangeNotifier
from ..utils.file_utils import list_subdirectories

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], Any]


class WatcherError(Exception):
    """A directory watcher could not be started"""


class DirectoryWatcher:
    """
    Watches a single directory (non-recursively)

    The callback receives no arguments: it only says that something in
    the directory changed.
    """

    def __init__(self, directory: Path,
                 callback: Optional[ChangeCallback] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None,
                 use_polling: bool = False,
                 poll_interval: float = 1.0,
                 join_timeout: float = 2.0):
        """
        Initialize directory watcher

        Args:
            directory: Directory to watch
            callback: Change notification handler, run on the event loop
            loop: Event loop notifications are delivered to
            use_polling: Use polling instead of OS events
            poll_interval: Polling interval in seconds
            join_timeout: Seconds to wait for the observer thread on stop
        """
        self.directory = Path(directory)
        self.callback = callback
        self.loop = loop
        self.use_polling = use_polling
        self.poll_interval = poll_interval
        self.join_timeout = join_timeout

        self.observer = None
        self.handler: Optional[ChangeNotifier] = None

        # State
        self.is_watching = False
        self.stats = {
            'start_time': None,
            'notifications': 0,
        }

    def start(self):
        """
        Start watching directory

        Raises:
            WatcherError: If the directory is missing or the observer fails
        """
        if self.is_watching:
            logger.warning(f"Already watching directory: {self.directory}")
            return

        if not self.directory.is_dir():
            raise WatcherError(f"Directory does not exist: {self.directory}")

        try:
            loop = self.loop or asyncio.get_running_loop()

            if self.use_polling:
                observer = PollingObserver(timeout=self.poll_interval)
            else:
                observer = Observer()

            self.handler = ChangeNotifier(self._notify, loop, gate=lambda: self.is_watching)
            observer.schedule(self.handler, str(self.directory), recursive=False)
            observer.start()
        except (OSError, RuntimeError) as e:
            self.handler = None
            raise WatcherError(f"Failed to start watching {self.directory}: {e}") from e

        self.observer = observer
        self.is_watching = True
        self.stats['start_time'] = datetime.now()
        logger.debug(f"Started watching directory: {self.directory}")

    def stop(self) -> bool:
        """Stop watching directory; stopping a stopped watcher is a no-op"""
        if not self.is_watching:
            return True

        self.is_watching = False
        observer, self.observer = self.observer, None

        try:
            if observer is not None:
                observer.stop()
                observer.join(timeout=self.join_timeout)
        except RuntimeError as e:
            logger.error(f"Error stopping watcher for {self.directory}: {e}")
            return False

        logger.debug(f"Stopped watching directory: {self.directory}")
        return True

    def _notify(self):
        self.stats['notifications'] += 1
        if self.callback is not None:
            self.callback()

    def get_status(self) -> Dict[str, Any]:
        """Get watcher status"""
        handler_stats = self.handler.get_stats() if self.handler else {}

        return {
            'directory': str(self.directory),
            'is_watching': self.is_watching,
            'use_polling': self.use_polling,
            'poll_interval': self.poll_interval if self.use_polling else None,
            'start_time': self.stats['start_time'],
            'stats': {**self.stats, **handler_stats},
        }


WatcherFactory = Callable[[Path, ChangeCallback], DirectoryWatcher]


@dataclass
class SubWatcherEntry:
    path: Path
    watcher: DirectoryWatcher


class SubWatcherSet:
    """
    One watcher per immediate subdirectory of the root

    The set is rebuilt wholesale on every rescan: all held watchers are
    stopped before any new one is created.
    """

    def __init__(self, root: Path,
                 watcher_factory: WatcherFactory,
                 on_change: ChangeCallback):
        """
        Initialize sub-watcher set

        Args:
            root: Directory whose subdirectories are watched
            watcher_factory: Creates an (unstarted) watcher for a path
            on_change: Handler shared by every sub-watcher
        """
        self.root = Path(root)
        self.watcher_factory = watcher_factory
        self.on_change = on_change
        self._entries: List[SubWatcherEntry] = []
        self.rescan_count = 0

    @property
    def entries(self) -> List[SubWatcherEntry]:
        return list(self._entries)

    @property
    def paths(self) -> List[Path]:
        return [entry.path for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def rescan(self):
        """Stop every held watcher, then watch each current subdirectory"""
        self.rescan_count += 1
        self.stop_all()

        try:
            directories = list_subdirectories(self.root)
        except OSError as e:
            logger.warning(f"Cannot list {self.root}, no sub-watchers: {e}")
            return

        entries = []
        for directory in directories:
            watcher = self.watcher_factory(directory, self.on_change)
            try:
                watcher.start()
            except WatcherError as e:
                logger.warning(f"Dropping sub-watcher: {e}")
                continue
            entries.append(SubWatcherEntry(path=directory, watcher=watcher))

        self._entries = entries
        logger.info(f"Watching {len(entries)} subdirectories of {self.root}")

    def stop_all(self):
        """Stop and forget every held watcher"""
        entries, self._entries = self._entries, []
        for entry in entries:
            entry.watcher.stop()

    def get_status(self) -> Dict[str, Any]:
        return {
            'root': str(self.root),
            'total_watchers': len(self._entries),
            'rescan_count': self.rescan_count,
            'watchers': {str(e.path): e.watcher.get_status() for e in self._entries},
        }


class RootWatcher:
    """
    Binds one watcher to the root directory

    A start failure is logged and swallowed; root changes then go
    unnoticed until the next start().
    """

    def __init__(self, root: Path,
                 watcher_factory: WatcherFactory,
                 on_change: ChangeCallback):
        self.root = Path(root)
        self.watcher_factory = watcher_factory
        self.on_change = on_change
        self.watcher: Optional[DirectoryWatcher] = None

    @property
    def is_watching(self) -> bool:
        return self.watcher is not None and self.watcher.is_watching

    def start(self):
        if self.watcher is not None:
            self.watcher.stop()

        self.watcher = self.watcher_factory(self.root, self.on_change)
        try:
            self.watcher.start()
        except WatcherError as e:
            logger.error(f"Root watcher not started, root changes will be missed: {e}")
            return
        logger.info(f"Watching root directory: {self.root}")

    def stop(self):
        """
        Raises:
            RuntimeError: If start() was never called
        """
        if self.watcher is None:
            raise RuntimeError("RootWatcher.stop() called before start()")
        self.watcher.stop()

    def get_status(self) -> Dict[str, Any]:
        if self.watcher is None:
            return {'directory': str(self.root), 'is_watching': False}
        return self.watcher.get_status()
