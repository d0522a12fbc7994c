import plistlib
from pathlib import Path

import pytest

from simmenu.utils.config import Config
from simmenu.watchdog.watcher import WatcherError


class FakeWatcher:
    """In-memory stand-in for DirectoryWatcher"""

    def __init__(self, directory, callback, fail=False):
        self.directory = Path(directory)
        self.callback = callback
        self.fail = fail
        self.is_watching = False
        self.start_calls = 0
        self.stop_calls = 0

    def start(self):
        self.start_calls += 1
        if self.fail:
            raise WatcherError(f"cannot watch {self.directory}")
        self.is_watching = True

    def stop(self):
        self.stop_calls += 1
        self.is_watching = False
        return True

    def fire(self):
        # Mirrors the loop-side gate of the real watcher
        if self.is_watching:
            self.callback()

    def get_status(self):
        return {'directory': str(self.directory), 'is_watching': self.is_watching}


class FakeWatcherFactory:
    def __init__(self):
        self.created = []
        self.fail_paths = set()

    def __call__(self, directory, callback):
        watcher = FakeWatcher(directory, callback, fail=Path(directory) in self.fail_paths)
        self.created.append(watcher)
        return watcher

    def live(self, directory=None):
        return [
            w for w in self.created
            if w.is_watching and (directory is None or w.directory == Path(directory))
        ]


def write_plist(path: Path, data: dict):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        plistlib.dump(data, f)


def make_device(root: Path, name: str, runtime: str = "com.apple.CoreSimulator.SimRuntime.iOS-17-0",
                state: int = 1, apps=()):
    device_dir = root / name
    device_dir.mkdir(parents=True, exist_ok=True)
    write_plist(device_dir / "device.plist", {
        "UDID": name,
        "name": f"iPhone {name}",
        "runtime": runtime,
        "state": state,
    })
    for app in apps:
        (device_dir / app).mkdir()
    return device_dir


@pytest.fixture
def factory():
    return FakeWatcherFactory()


@pytest.fixture
def device_root(tmp_path):
    root = tmp_path / "Devices"
    root.mkdir()
    return root


@pytest.fixture
def config(device_root):
    cfg = Config()
    cfg.paths.device_root = device_root
    cfg.watchdog.debounce_time = 0.05
    cfg.watchdog.use_polling = True
    cfg.watchdog.poll_interval = 0.1
    return cfg
