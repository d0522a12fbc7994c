"""
Device and application models
"""
import re
from enum import Enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

RUNTIME_PREFIX = "com.apple.CoreSimulator.SimRuntime."


class DeviceState(Enum):
    SHUTDOWN = "shutdown"
    BOOTED = "booted"
    UNKNOWN = "unknown"

    @classmethod
    def from_raw(cls, value) -> "DeviceState":
        """Map the CoreSimulator integer state (1 shutdown, 3 booted)"""
        if value == 3:
            return cls.BOOTED
        if value == 1:
            return cls.SHUTDOWN
        return cls.UNKNOWN


@dataclass(frozen=True)
class Runtime:
    identifier: str

    def _parts(self):
        short = self.identifier
        if short.startswith(RUNTIME_PREFIX):
            short = short[len(RUNTIME_PREFIX):]
        match = re.match(r"^([A-Za-z]+)-(\d+(?:-\d+)*)$", short)
        if match:
            platform, version = match.groups()
            return platform, tuple(int(part) for part in version.split("-"))
        return short, None

    @property
    def name(self) -> str:
        """Human readable name, e.g. 'iOS 17.0' for ...SimRuntime.iOS-17-0"""
        if not self.identifier:
            return "Unknown"
        platform, version = self._parts()
        if version is None:
            return platform
        return f"{platform} {'.'.join(str(part) for part in version)}"

    @property
    def sort_key(self) -> Tuple[str, Tuple[int, ...], str]:
        """Order by platform, then numeric version, so iOS 9.3 precedes iOS 10.0"""
        if not self.identifier:
            return ("", (), "")
        platform, version = self._parts()
        return (platform, version or (), self.identifier)


@dataclass
class Application:
    name: str
    path: Path
    bundle_id: Optional[str] = None


@dataclass
class Device:
    udid: str
    name: str
    runtime: Runtime
    path: Path
    state: DeviceState = DeviceState.UNKNOWN
    applications: List[Application] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.name} ({self.runtime.name})"

    @property
    def is_booted(self) -> bool:
        return self.state is DeviceState.BOOTED
