"""
Home controller - the single coordination point for devices and roles.

Devices never talk to each other. The controller owns the registry of
devices and drives scenarios across them:
- activate: attach a fresh role of one kind to every registered device
- deactivate: detach that kind from every device holding it
- invoke: execute the held role on every device that has it

Named scenarios (security, vacation, energy, notification) are thin
compositions of these three operations; all scenario state lives in which
roles are attached.
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from .devices.base import SmartDevice
from .results import OperationResult
from .roles.base import DeviceRole, RoleKind, resolve_role_kind
from .roles.builtin import (
    EnergyManagementRole,
    NotificationRole,
    SecurityModeRole,
    VacationModeRole,
)

logger = logging.getLogger(__name__)

RoleFactory = Callable[[], DeviceRole]


@dataclass
class DeviceListing:
    """A registered device together with a snapshot of its roles."""
    device: SmartDevice
    roles: List[DeviceRole] = field(default_factory=list)
    
    def to_dict(self) -> dict:
        data = self.device.to_dict()
        data["roles"] = [role.to_dict() for role in self.roles]
        return data


class HomeController:
    """
    Registry of devices and dispatcher of role-driven scenarios.
    
    Use HomeController.get_instance() (or get_controller()) to reach the
    process-wide controller. The registry lock is held for the whole of each
    scenario pass so register/unregister never interleave with it.
    
    Usage:
        controller = get_controller()
        controller.register(SmartLight("DEV-001", "Living Room Light"))
        controller.activate_security_mode()
        controller.trigger_security_alert()
    """
    
    _instance: Optional["HomeController"] = None
    _instance_lock = threading.Lock()
    
    def __init__(self):
        self._devices: List[SmartDevice] = []
        self._lock = threading.RLock()
        logger.debug("HomeController initialized")
    
    @classmethod
    def get_instance(cls) -> "HomeController":
        """Return the process-wide controller, creating it on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance
    
    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide controller (for testing)."""
        with cls._instance_lock:
            cls._instance = None
    
    # Registration
    
    def register(self, device: SmartDevice) -> OperationResult:
        """Register a device. Registering the same object twice is a no-op."""
        with self._lock:
            if self._contains(device):
                logger.warning(f"Controller: '{device.name}' already registered")
                return OperationResult.already(f"{device.name} is already registered")
            self._devices.append(device)
        logger.info(f"Controller: registered '{device.name}'")
        return OperationResult.success(f"Registered {device.name}", [device.name])
    
    def unregister(self, device: SmartDevice) -> OperationResult:
        with self._lock:
            if not self._contains(device):
                logger.warning(f"Controller: '{device.name}' is not registered")
                return OperationResult.not_found(f"{device.name} is not registered")
            self._devices = [d for d in self._devices if d is not device]
        logger.info(f"Controller: unregistered '{device.name}'")
        return OperationResult.success(f"Unregistered {device.name}", [device.name])
    
    def clear(self) -> None:
        """Unregister every device."""
        with self._lock:
            self._devices = []
    
    def _contains(self, device: SmartDevice) -> bool:
        return any(d is device for d in self._devices)
    
    # Generic scenario operations
    
    def activate_scenario(self, role_factory: RoleFactory) -> OperationResult:
        """
        Attach a freshly built role to every registered device.
        
        Devices already holding that kind keep their existing role and are
        reported under details["already"].
        """
        with self._lock:
            if not self._devices:
                logger.warning("Controller: no devices registered")
                return OperationResult.no_eligible("No devices registered")
            
            gained, already = [], []
            role_name = ""
            for device in self._devices:
                role = role_factory()
                role_name = role.display_name
                result = device.add_role(role)
                (gained if result.ok else already).append(device.name)

        if not gained:
            return OperationResult.already(
                f"{role_name} already active on every device",
                already=already,
            )
        logger.info(f"Controller: {role_name} activated on {len(gained)} device(s)")
        return OperationResult.success(
            f"{role_name} activated on {len(gained)} device(s)",
            gained,
            already=already,
        )
    
    def deactivate_scenario(self, kind: Union[RoleKind, str, type]) -> OperationResult:
        """Detach a role kind from every registered device that holds it."""
        role_kind = resolve_role_kind(kind)
        with self._lock:
            removed = [
                device.name for device in self._devices
                if device.remove_role(role_kind).ok
            ]
        
        if not removed:
            return OperationResult.not_found(f"No device holds the {role_kind.value} role")
        logger.info(f"Controller: {role_kind.value} deactivated on {len(removed)} device(s)")
        return OperationResult.success(
            f"{role_kind.value} deactivated on {len(removed)} device(s)",
            removed,
        )
    
    def invoke_scenario(self, kind: Union[RoleKind, str, type], **kwargs) -> OperationResult:
        """
        Execute the held role of the given kind on every device that has it.
        
        Extra keyword arguments are passed through to the role's execute().
        """
        role_kind = resolve_role_kind(kind)
        with self._lock:
            results = []
            for device in self._devices:
                role = device.get_role(role_kind)
                if role is None:
                    continue
                results.append(role.execute(device, **kwargs))
        
        if not results:
            logger.warning(f"Controller: no devices with the {role_kind.value} role available")
            return OperationResult.no_eligible(f"No devices with the {role_kind.value} role")
        return OperationResult.success(
            f"{role_kind.value} executed on {len(results)} device(s)",
            [name for result in results for name in result.affected],
            results=results,
        )
    
    def assign_to(self, device_name: str, role: DeviceRole) -> OperationResult:
        """Attach a role to the first registered device with this name."""
        with self._lock:
            device = self._find_by_name(device_name)
            if device is None:
                logger.warning(f"Controller: device '{device_name}' not found")
                return OperationResult.not_found(f"Device '{device_name}' not found")
            return device.add_role(role)
    
    # Queries
    
    def list_devices(self) -> List[DeviceListing]:
        with self._lock:
            return [DeviceListing(device, device.roles()) for device in self._devices]
    
    def get_all_devices(self) -> List[SmartDevice]:
        with self._lock:
            return list(self._devices)
    
    def device_count(self) -> int:
        with self._lock:
            return len(self._devices)
    
    def find_device(self, name: str) -> Optional[SmartDevice]:
        with self._lock:
            return self._find_by_name(name)
    
    def get_device(self, device_id: str) -> Optional[SmartDevice]:
        with self._lock:
            for device in self._devices:
                if device.device_id == device_id:
                    return device
            return None
    
    def _find_by_name(self, name: str) -> Optional[SmartDevice]:
        for device in self._devices:
            if device.name == name:
                return device
        return None
    
    # Named scenarios
    
    def activate_security_mode(self) -> OperationResult:
        return self.activate_scenario(SecurityModeRole)
    
    def deactivate_security_mode(self) -> OperationResult:
        return self.deactivate_scenario(RoleKind.SECURITY)
    
    def trigger_security_alert(self) -> OperationResult:
        logger.info("SECURITY ALERT TRIGGERED")
        return self.invoke_scenario(RoleKind.SECURITY)
    
    def activate_vacation_mode(self, rng: Optional[random.Random] = None) -> OperationResult:
        return self.activate_scenario(lambda: VacationModeRole(rng))
    
    def deactivate_vacation_mode(self) -> OperationResult:
        return self.deactivate_scenario(RoleKind.VACATION)
    
    def simulate_presence(self) -> OperationResult:
        return self.invoke_scenario(RoleKind.VACATION)
    
    def activate_energy_mode(self) -> OperationResult:
        return self.activate_scenario(EnergyManagementRole)
    
    def deactivate_energy_mode(self) -> OperationResult:
        return self.deactivate_scenario(RoleKind.ENERGY)
    
    def apply_energy_saving(self) -> OperationResult:
        return self.invoke_scenario(RoleKind.ENERGY)
    
    def activate_notifications(self) -> OperationResult:
        return self.activate_scenario(NotificationRole)
    
    def deactivate_notifications(self) -> OperationResult:
        return self.deactivate_scenario(RoleKind.NOTIFICATION)
    
    def send_notification(self, message: str) -> OperationResult:
        logger.info(f"Sending notification: {message!r}")
        return self.invoke_scenario(RoleKind.NOTIFICATION, message=message)


def get_controller() -> HomeController:
    """Get the process-wide home controller."""
    return HomeController.get_instance()


def reset_controller() -> None:
    """Reset the process-wide controller (for testing)."""
    HomeController.reset_instance()
