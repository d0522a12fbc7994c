# simmenu/domain/device_manager.py

"""
Filesystem-backed device/application provider
"""
import logging
from pathlib import Path
from typing import List, Optional, Protocol, Union

from .models import Application, Device, DeviceState, Runtime
from ..utils.file_utils import list_entries, list_subdirectories, read_plist

logger = logging.getLogger(__name__)

DEVICE_PLIST = "device.plist"
BUNDLE_PLIST = "Info.plist"


class DeviceProvider(Protocol):
    """Source of the current device/application hierarchy"""

    def reload(self) -> List[Device]:
        ...


class DeviceManager:
    """
    Reads devices from a root directory

    Every immediate subdirectory of the root is a device; its child
    entries (minus device.plist and hidden files) are its applications.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self.devices: List[Device] = []

    def reload(self) -> List[Device]:
        """Re-read the device hierarchy from disk"""
        try:
            device_dirs = list_subdirectories(self.root)
        except OSError as e:
            logger.warning(f"Cannot list device root {self.root}: {e}")
            self.devices = []
            return self.devices

        devices = []
        for device_dir in device_dirs:
            device = self._load_device(device_dir)
            if device is not None:
                devices.append(device)

        devices.sort(key=lambda d: (d.runtime.sort_key, d.name.lower()))
        self.devices = devices

        logger.debug(f"Loaded {len(devices)} devices from {self.root}")
        return self.devices

    def _load_device(self, device_dir: Path) -> Optional[Device]:
        info = read_plist(device_dir / DEVICE_PLIST) or {}

        try:
            applications = self._load_applications(device_dir)
        except OSError as e:
            logger.debug(f"Skipping unreadable device {device_dir}: {e}")
            return None

        return Device(
            udid=str(info.get("UDID", device_dir.name)),
            name=str(info.get("name", device_dir.name)),
            runtime=Runtime(str(info.get("runtime", ""))),
            state=DeviceState.from_raw(info.get("state")),
            path=device_dir,
            applications=applications,
        )

    def _load_applications(self, device_dir: Path) -> List[Application]:
        applications = []
        for entry in list_entries(device_dir):
            if entry.name == DEVICE_PLIST:
                continue
            applications.append(self._load_application(entry))

        applications.sort(key=lambda a: a.name.lower())
        return applications

    def _load_application(self, entry: Path) -> Application:
        info = None
        try:
            if entry.is_dir():
                info = read_plist(entry / BUNDLE_PLIST)
        except OSError:
            info = None

        if not info:
            return Application(name=entry.stem, path=entry)

        name = info.get("CFBundleDisplayName") or info.get("CFBundleName") or entry.stem
        return Application(
            name=str(name),
            path=entry,
            bundle_id=info.get("CFBundleIdentifier"),
        )
