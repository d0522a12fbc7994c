"""
SimMenu presentation-facing view, publishing and reconciliation
"""
from .view import View, RuntimeSection, DeviceItem, AppItem, build_view, render_lines
from .publisher import ViewPublisher
from .reconciler import Reconciler
from .tracking import (
    ModifierFlags,
    ModifierResponsive,
    AppItemPresenter,
    StaticItemPresenter,
    MenuTracker,
)

__all__ = [
    'View',
    'RuntimeSection',
    'DeviceItem',
    'AppItem',
    'build_view',
    'render_lines',
    'ViewPublisher',
    'Reconciler',
    'ModifierFlags',
    'ModifierResponsive',
    'AppItemPresenter',
    'StaticItemPresenter',
    'MenuTracker',
]
