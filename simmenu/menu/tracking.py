"""
Live modifier-key feedback while a menu is open
"""
import asyncio
import enum
import logging
from typing import Callable, Optional

from .view import AppItem

logger = logging.getLogger(__name__)


class ModifierFlags(enum.Flag):
    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    OPTION = enum.auto()
    COMMAND = enum.auto()


class ModifierResponsive:
    """Capability of a menu item presenter to react to modifier keys"""

    responds_to_modifiers = False

    def process_modifier_flags(self, flags: ModifierFlags):
        pass


class StaticItemPresenter(ModifierResponsive):
    """Plain item (device, separator, quit); modifiers do nothing"""

    def __init__(self, title: str):
        self.title = title


class AppItemPresenter(ModifierResponsive):
    """Application item: control-click uninstalls instead of opening"""

    responds_to_modifiers = True

    OPEN = "open"
    UNINSTALL = "uninstall"

    def __init__(self, item: AppItem):
        self.item = item
        self.action = self.OPEN

    def process_modifier_flags(self, flags: ModifierFlags):
        self.action = self.UNINSTALL if ModifierFlags.CONTROL in flags else self.OPEN


class MenuTracker:
    """
    Polls modifier state for as long as a menu is open

    Use as a context manager around the open menu; the polling callback
    is cancelled on every exit path.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop,
                 modifier_source: Callable[[], ModifierFlags],
                 interval: float = 0.05):
        self.loop = loop
        self.modifier_source = modifier_source
        self.interval = interval
        self.highlighted: Optional[ModifierResponsive] = None
        self._handle: Optional[asyncio.Handle] = None

    def __enter__(self) -> "MenuTracker":
        self._handle = self.loop.call_soon(self._tick)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.highlighted = None
        return False

    @property
    def is_tracking(self) -> bool:
        return self._handle is not None

    def highlight(self, presenter: Optional[ModifierResponsive]):
        self.highlighted = presenter

    def _tick(self):
        presenter = self.highlighted
        if presenter is not None and presenter.responds_to_modifiers:
            try:
                presenter.process_modifier_flags(self.modifier_source())
            except Exception as e:
                logger.error(f"Error processing modifier flags: {e}")

        # __exit__ may have run from inside the modifier source
        if self._handle is not None:
            self._handle = self.loop.call_later(self.interval, self._tick)
