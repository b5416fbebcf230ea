"""
homeroles - role-driven smart home control

Devices gain and lose behaviours ("roles") at runtime. A single controller
registers devices and composes scenarios by attaching, detaching and
executing roles across them.

Example:
    >>> from homeroles import get_controller, SmartLight
    >>> controller = get_controller()
    >>> controller.register(SmartLight("DEV-001", "Living Room Light"))
    >>> controller.activate_security_mode()
    >>> controller.trigger_security_alert()
"""

__version__ = "1.0.0"

from .config import Config, get_config
from .controller import HomeController, get_controller, reset_controller
from .devices import SmartDevice, SmartLight, SmartSpeaker, SmartThermostat, DeviceKind
from .results import Outcome, OperationResult
from .roles import RoleKind, DeviceRole

__all__ = [
    "__version__",
    "Config",
    "get_config",
    "HomeController",
    "get_controller",
    "reset_controller",
    "SmartDevice",
    "SmartLight",
    "SmartSpeaker",
    "SmartThermostat",
    "DeviceKind",
    "Outcome",
    "OperationResult",
    "RoleKind",
    "DeviceRole",
]
