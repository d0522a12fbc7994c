"""
SimMenu domain: devices and their applications
"""
from .models import Application, Device, DeviceState, Runtime
from .device_manager import DeviceManager, DeviceProvider

__all__ = [
    'Application',
    'Device',
    'DeviceState',
    'Runtime',
    'DeviceManager',
    'DeviceProvider',
]
