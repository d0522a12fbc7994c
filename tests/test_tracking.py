import asyncio
from pathlib import Path

import pytest

from simmenu.menu.tracking import (
    AppItemPresenter,
    MenuTracker,
    ModifierFlags,
    StaticItemPresenter,
)
from simmenu.menu.view import AppItem


def _app_presenter():
    return AppItemPresenter(AppItem(title="Maps", path=Path("/devices/a/Maps.app")))


def test_app_presenter_switches_action_on_control():
    presenter = _app_presenter()

    presenter.process_modifier_flags(ModifierFlags.CONTROL | ModifierFlags.SHIFT)
    assert presenter.action == AppItemPresenter.UNINSTALL

    presenter.process_modifier_flags(ModifierFlags.NONE)
    assert presenter.action == AppItemPresenter.OPEN


def test_static_presenter_does_not_respond():
    assert not StaticItemPresenter("Quit").responds_to_modifiers
    assert _app_presenter().responds_to_modifiers


@pytest.mark.asyncio
async def test_tracker_feeds_highlighted_item_while_open():
    flags = {"current": ModifierFlags.CONTROL}
    presenter = _app_presenter()

    with MenuTracker(asyncio.get_running_loop(), lambda: flags["current"], interval=0.01) as tracker:
        tracker.highlight(presenter)
        await asyncio.sleep(0.05)
        assert presenter.action == AppItemPresenter.UNINSTALL

        flags["current"] = ModifierFlags.NONE
        await asyncio.sleep(0.05)
        assert presenter.action == AppItemPresenter.OPEN

    assert not tracker.is_tracking


@pytest.mark.asyncio
async def test_tracker_releases_on_abnormal_close():
    reads = []
    tracker = MenuTracker(asyncio.get_running_loop(), lambda: reads.append(1) or ModifierFlags.NONE,
                          interval=0.01)

    with pytest.raises(RuntimeError):
        with tracker:
            tracker.highlight(_app_presenter())
            await asyncio.sleep(0.03)
            raise RuntimeError("menu dismissed")

    count = len(reads)
    await asyncio.sleep(0.05)

    assert not tracker.is_tracking
    assert len(reads) == count
