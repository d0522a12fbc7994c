import asyncio
from pathlib import Path

import pytest

from simmenu.watchdog.watcher import DirectoryWatcher, RootWatcher, SubWatcherSet, WatcherError


def _noop():
    pass


def test_rescan_watches_each_subdirectory_only(device_root, factory):
    (device_root / "A").mkdir()
    (device_root / "B").mkdir()
    (device_root / "notes.txt").write_text("not a device")

    subs = SubWatcherSet(device_root, factory, _noop)
    subs.rescan()

    assert subs.paths == [device_root / "A", device_root / "B"]
    assert len(factory.live()) == 2
    assert factory.live(device_root / "notes.txt") == []


def test_rescan_twice_recreates_every_watcher(device_root, factory):
    (device_root / "A").mkdir()
    (device_root / "B").mkdir()
    subs = SubWatcherSet(device_root, factory, _noop)

    subs.rescan()
    first = [entry.watcher for entry in subs.entries]
    subs.rescan()
    second = [entry.watcher for entry in subs.entries]

    assert len(factory.created) == 4
    assert all(w.stop_calls == 1 and not w.is_watching for w in first)
    assert all(w.is_watching for w in second)
    assert not set(map(id, first)) & set(map(id, second))
    assert subs.rescan_count == 2


def test_rescan_tracks_added_and_removed_directories(device_root, factory):
    (device_root / "A").mkdir()
    (device_root / "B").mkdir()
    subs = SubWatcherSet(device_root, factory, _noop)
    subs.rescan()
    old_b = factory.live(device_root / "B")[0]

    (device_root / "C").mkdir()
    (device_root / "B").rmdir()
    subs.rescan()

    assert subs.paths == [device_root / "A", device_root / "C"]
    assert not old_b.is_watching
    assert factory.live(device_root / "B") == []


def test_rescan_skips_entries_whose_metadata_cannot_be_read(device_root, factory, monkeypatch):
    for name in ("A", "B", "C"):
        (device_root / name).mkdir()
    real_is_dir = Path.is_dir

    def is_dir(self, *args, **kwargs):
        if self.name == "B":
            raise PermissionError(13, "Permission denied", str(self))
        return real_is_dir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "is_dir", is_dir)

    subs = SubWatcherSet(device_root, factory, _noop)
    subs.rescan()

    assert subs.paths == [device_root / "A", device_root / "C"]
    assert factory.live(device_root / "B") == []
    assert len(factory.live()) == 2


def test_listing_failure_leaves_set_empty(tmp_path, factory):
    root = tmp_path / "Devices"
    root.mkdir()
    (root / "A").mkdir()
    subs = SubWatcherSet(root, factory, _noop)
    subs.rescan()
    (root / "A").rmdir()
    root.rmdir()

    subs.rescan()

    assert len(subs) == 0
    assert factory.live() == []


def test_failed_sub_watcher_is_dropped(device_root, factory):
    (device_root / "A").mkdir()
    (device_root / "B").mkdir()
    factory.fail_paths.add(device_root / "A")

    subs = SubWatcherSet(device_root, factory, _noop)
    subs.rescan()

    assert subs.paths == [device_root / "B"]


def test_sub_watchers_share_the_change_handler(device_root, factory):
    (device_root / "A").mkdir()
    (device_root / "B").mkdir()
    calls = []
    subs = SubWatcherSet(device_root, factory, lambda: calls.append(1))
    subs.rescan()

    for entry in subs.entries:
        entry.watcher.fire()

    assert calls == [1, 1]


def test_stop_all_stops_and_clears(device_root, factory):
    (device_root / "A").mkdir()
    subs = SubWatcherSet(device_root, factory, _noop)
    subs.rescan()

    subs.stop_all()

    assert len(subs) == 0
    assert factory.live() == []


def test_root_watcher_stop_before_start_is_an_error(device_root, factory):
    root = RootWatcher(device_root, factory, _noop)

    with pytest.raises(RuntimeError):
        root.stop()


def test_root_watcher_start_failure_is_swallowed(device_root, factory, caplog):
    factory.fail_paths.add(device_root)
    root = RootWatcher(device_root, factory, _noop)

    root.start()

    assert not root.is_watching
    assert "Root watcher not started" in caplog.text
    root.stop()


def test_root_watcher_restart_replaces_watcher(device_root, factory):
    root = RootWatcher(device_root, factory, _noop)
    root.start()
    first = root.watcher
    root.start()

    assert not first.is_watching
    assert root.watcher is not first
    assert root.is_watching


def test_directory_watcher_missing_directory_raises(tmp_path):
    watcher = DirectoryWatcher(tmp_path / "missing", _noop)

    with pytest.raises(WatcherError):
        watcher.start()
    assert not watcher.is_watching


def test_directory_watcher_stop_is_idempotent(tmp_path):
    watcher = DirectoryWatcher(tmp_path, _noop)

    assert watcher.stop() is True
    assert watcher.stop() is True


@pytest.mark.asyncio
async def test_directory_watcher_reports_changes_with_polling(tmp_path):
    calls = []
    watcher = DirectoryWatcher(
        tmp_path, lambda: calls.append(1),
        loop=asyncio.get_running_loop(), use_polling=True, poll_interval=0.05,
    )
    watcher.start()
    try:
        await asyncio.sleep(0.1)
        (tmp_path / "new_device").mkdir()

        for _ in range(60):
            if calls:
                break
            await asyncio.sleep(0.05)
    finally:
        watcher.stop()

    assert calls
    assert watcher.get_status()['stats']['notifications'] >= 1


@pytest.mark.asyncio
async def test_directory_watcher_is_silent_after_stop(tmp_path):
    calls = []
    watcher = DirectoryWatcher(
        tmp_path, lambda: calls.append(1),
        loop=asyncio.get_running_loop(), use_polling=True, poll_interval=0.05,
    )
    watcher.start()
    watcher.stop()

    (tmp_path / "late").mkdir()
    await asyncio.sleep(0.3)

    assert calls == []
