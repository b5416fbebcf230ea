"""
Home layout files.

A layout lists the devices of a home, their kind, initial power state and
the roles they start with:

    {
      "devices": [
        {"id": "DEV-001", "name": "Living Room Light", "kind": "light",
         "roles": ["notification"]}
      ]
    }
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .controller import HomeController
from .devices.base import DeviceKind, SmartDevice
from .devices.factory import create_device
from .results import LayoutError
from .roles.base import RoleKind
from .roles.builtin import create_role

logger = logging.getLogger(__name__)


class DeviceEntry(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    kind: DeviceKind
    power: bool = False
    roles: List[RoleKind] = Field(default_factory=list)


class HomeLayout(BaseModel):
    devices: List[DeviceEntry] = Field(default_factory=list)
    
    @field_validator("devices")
    @classmethod
    def unique_ids(cls, devices: List[DeviceEntry]) -> List[DeviceEntry]:
        seen = set()
        for entry in devices:
            if entry.id in seen:
                raise ValueError(f"duplicate device id: {entry.id}")
            seen.add(entry.id)
        return devices


DEFAULT_LAYOUT = HomeLayout(devices=[
    DeviceEntry(id="DEV-001", name="Living Room Light", kind=DeviceKind.LIGHT),
    DeviceEntry(id="DEV-002", name="Hall Thermostat", kind=DeviceKind.CLIMATE),
    DeviceEntry(id="DEV-003", name="Kitchen Speaker", kind=DeviceKind.AUDIO),
])


def load_layout(path: Union[str, Path]) -> HomeLayout:
    """Read and validate a layout file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise LayoutError(f"Cannot read layout {path}: {e}") from e
    
    try:
        layout = HomeLayout.model_validate(data)
    except ValidationError as e:
        raise LayoutError(f"Invalid layout {path}: {e}") from e
    
    logger.info(f"Loaded {len(layout.devices)} devices from {path}")
    return layout


def save_layout(layout: HomeLayout, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(layout.model_dump_json(indent=2))
    logger.debug(f"Layout saved to {path}")


def build_home(
    layout: HomeLayout,
    controller: Optional[HomeController] = None,
) -> List[SmartDevice]:
    """Create the layout's devices, register them and attach their roles."""
    controller = controller or HomeController.get_instance()
    devices = []
    for entry in layout.devices:
        device = create_device(entry.kind, entry.id, entry.name)
        if entry.power:
            device.turn_on()
        for role_kind in entry.roles:
            device.add_role(create_role(role_kind))
        controller.register(device)
        devices.append(device)
    return devices
