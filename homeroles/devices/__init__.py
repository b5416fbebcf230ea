"""Smart home devices."""
from .base import DeviceKind, SmartDevice, check_range
from .light import SmartLight
from .climate import SmartThermostat
from .audio import SmartSpeaker
from .factory import DEVICE_TYPES, create_device, resolve_device_kind

__all__ = [
    "DeviceKind",
    "SmartDevice",
    "check_range",
    "SmartLight",
    "SmartThermostat",
    "SmartSpeaker",
    "DEVICE_TYPES",
    "create_device",
    "resolve_device_kind",
]
