"""Construct devices by kind name."""

from typing import Dict, Type, Union

from ..results import UnknownDeviceKindError
from .audio import SmartSpeaker
from .base import DeviceKind, SmartDevice
from .climate import SmartThermostat
from .light import SmartLight

DEVICE_TYPES: Dict[DeviceKind, Type[SmartDevice]] = {
    DeviceKind.LIGHT: SmartLight,
    DeviceKind.CLIMATE: SmartThermostat,
    DeviceKind.AUDIO: SmartSpeaker,
}


def resolve_device_kind(kind: Union[DeviceKind, str]) -> DeviceKind:
    if isinstance(kind, DeviceKind):
        return kind
    try:
        return DeviceKind(str(kind).lower())
    except ValueError:
        raise UnknownDeviceKindError(str(kind)) from None


def create_device(kind: Union[DeviceKind, str], device_id: str, name: str) -> SmartDevice:
    """Create a device of the given kind with its default attribute values."""
    return DEVICE_TYPES[resolve_device_kind(kind)](device_id, name)
