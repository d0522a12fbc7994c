# simmenu/watchdog/__init__.py

"""
SimMenu Watchdog Module
Device root monitoring
"""
from .monitor import MenuManager, MonitorState
from .debounce import Debouncer
from .handlers import ChangeNotifier
from .watcher import (
    DirectoryWatcher,
    RootWatcher,
    SubWatcherEntry,
    SubWatcherSet,
    WatcherError,
)

__all__ = [
    'MenuManager',
    'MonitorState',
    'Debouncer',
    'ChangeNotifier',
    'DirectoryWatcher',
    'RootWatcher',
    'SubWatcherEntry',
    'SubWatcherSet',
    'WatcherError',
]
