"""
Immutable menu view derived from the device hierarchy
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..domain.models import Device

SEPARATOR = "---"
QUIT_TITLE = "Quit"


@dataclass(frozen=True)
class AppItem:
    title: str
    path: Path
    bundle_id: Optional[str] = None


@dataclass(frozen=True)
class DeviceItem:
    title: str
    udid: str
    booted: bool
    applications: Tuple[AppItem, ...] = ()


@dataclass(frozen=True)
class RuntimeSection:
    runtime: str
    devices: Tuple[DeviceItem, ...] = ()


@dataclass(frozen=True)
class View:
    """Device menu, grouped into runtime sections"""
    sections: Tuple[RuntimeSection, ...] = ()

    @classmethod
    def empty(cls) -> "View":
        return cls()

    @property
    def devices(self) -> Tuple[DeviceItem, ...]:
        return tuple(device for section in self.sections for device in section.devices)

    @property
    def is_empty(self) -> bool:
        return not self.devices


def build_view(devices: Iterable[Device]) -> View:
    """
    Build a view from an ordered device list

    Consecutive devices sharing a runtime form one section, so the
    incoming order is preserved.
    """
    sections: List[RuntimeSection] = []
    current_runtime = None
    current: List[DeviceItem] = []

    for device in devices:
        runtime = device.runtime.name
        if current and runtime != current_runtime:
            sections.append(RuntimeSection(current_runtime, tuple(current)))
            current = []
        current_runtime = runtime

        current.append(DeviceItem(
            title=device.full_name,
            udid=device.udid,
            booted=device.is_booted,
            applications=tuple(
                AppItem(title=app.name, path=app.path, bundle_id=app.bundle_id)
                for app in device.applications
            ),
        ))

    if current:
        sections.append(RuntimeSection(current_runtime, tuple(current)))

    return View(sections=tuple(sections))


def render_lines(view: View) -> List[str]:
    """Text outline of the menu; booted devices are marked with '*'"""
    lines: List[str] = []
    for index, section in enumerate(view.sections):
        if index:
            lines.append(SEPARATOR)
        for device in section.devices:
            marker = "*" if device.booted else " "
            lines.append(f"{marker} {device.title}")
            for app in device.applications:
                lines.append(f"    {app.title}")

    lines.append(SEPARATOR)
    lines.append(QUIT_TITLE)
    return lines
