"""
Base class for smart home devices.

A device owns its identity, its power state and the set of roles attached to
it. Roles are keyed by kind: a device never holds two roles of the same kind.
Kind-specific behaviour is reached through the as_light()/as_climate()/
as_audio() views rather than isinstance checks.
"""

import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ..results import OperationResult
from ..roles.base import RoleKind, resolve_role_kind

if TYPE_CHECKING:
    from ..roles.base import DeviceRole
    from .audio import SmartSpeaker
    from .climate import SmartThermostat
    from .light import SmartLight

logger = logging.getLogger(__name__)


class DeviceKind(Enum):
    """Device families the controller knows how to drive."""
    LIGHT = "light"
    CLIMATE = "climate"
    AUDIO = "audio"


def check_range(
    device_name: str,
    attribute: str,
    value: Any,
    low: float,
    high: float,
    integral: bool = False,
) -> Optional[OperationResult]:
    """Return a rejection if value is not a number within [low, high], else None."""
    allowed = int if integral else (int, float)
    if isinstance(value, bool) or not isinstance(value, allowed):
        logger.warning(f"{device_name}: invalid {attribute} {value!r}")
        return OperationResult.rejected(
            f"Invalid {attribute} {value!r} for {device_name}",
            attribute=attribute,
            value=value,
        )
    if not low <= value <= high:
        logger.warning(f"{device_name}: {attribute} {value} outside {low}-{high}")
        return OperationResult.rejected(
            f"Invalid {attribute} {value} for {device_name}. Must be {low}-{high}",
            attribute=attribute,
            value=value,
        )
    return None


class SmartDevice(ABC):
    """
    A controllable device with a dynamic set of roles.
    
    Identity (device_id, name) is fixed at construction. Power changes only
    through turn_on()/turn_off(). The role set is guarded by a per-device
    lock so attach/detach never interleaves with iteration.
    """
    
    kind: DeviceKind
    
    def __init__(self, device_id: str, name: str):
        self._device_id = device_id
        self._name = name
        self._is_on = False
        self._roles: List["DeviceRole"] = []
        self._lock = threading.RLock()
    
    @property
    def device_id(self) -> str:
        return self._device_id
    
    @property
    def name(self) -> str:
        return self._name
    
    @property
    def is_on(self) -> bool:
        return self._is_on
    
    # Power
    
    def turn_on(self) -> OperationResult:
        """Turn the device on. Redundant calls succeed."""
        self._is_on = True
        logger.info(f"{self._name} is now ON")
        return OperationResult.success(f"{self._name} is ON", [self._name])
    
    def turn_off(self) -> OperationResult:
        """Turn the device off. Redundant calls succeed."""
        self._is_on = False
        logger.info(f"{self._name} is now OFF")
        return OperationResult.success(f"{self._name} is OFF", [self._name])
    
    # Roles
    
    def add_role(self, role: "DeviceRole") -> OperationResult:
        """Attach a role unless one of the same kind is already held."""
        with self._lock:
            if self._find_role(role.kind) is not None:
                logger.warning(f"{self._name} already has role: {role.display_name}")
                return OperationResult.already(
                    f"{self._name} already has {role.display_name}",
                    role=role.kind.value,
                )
            self._roles.append(role)
        logger.info(f"{self._name} gained role: {role.display_name}")
        return OperationResult.success(
            f"{self._name} gained {role.display_name}",
            [self._name],
            role=role.kind.value,
        )
    
    def remove_role(self, kind: Union[RoleKind, str, type]) -> OperationResult:
        """Detach the role of the given kind if present."""
        role_kind = resolve_role_kind(kind)
        with self._lock:
            role = self._find_role(role_kind)
            if role is None:
                logger.debug(f"{self._name} has no role {role_kind.value} to remove")
                return OperationResult.not_found(
                    f"{self._name} has no {role_kind.value} role",
                    role=role_kind.value,
                )
            self._roles.remove(role)
        logger.info(f"{self._name} lost role: {role.display_name}")
        return OperationResult.success(
            f"{self._name} lost {role.display_name}",
            [self._name],
            role=role_kind.value,
        )
    
    def has_role(self, kind: Union[RoleKind, str, type]) -> bool:
        with self._lock:
            return self._find_role(resolve_role_kind(kind)) is not None
    
    def get_role(self, kind: Union[RoleKind, str, type]) -> Optional["DeviceRole"]:
        with self._lock:
            return self._find_role(resolve_role_kind(kind))
    
    def roles(self) -> List["DeviceRole"]:
        """Snapshot of the attached roles in attach order."""
        with self._lock:
            return list(self._roles)
    
    def _find_role(self, kind: RoleKind) -> Optional["DeviceRole"]:
        for role in self._roles:
            if role.kind == kind:
                return role
        return None
    
    # Kind views
    
    def as_light(self) -> Optional["SmartLight"]:
        return None
    
    def as_climate(self) -> Optional["SmartThermostat"]:
        return None
    
    def as_audio(self) -> Optional["SmartSpeaker"]:
        return None
    
    # Presentation
    
    @abstractmethod
    def attributes(self) -> Dict[str, Any]:
        """Kind-specific attribute values."""
        pass
    
    @abstractmethod
    def _summary(self) -> str:
        """Kind-specific part of describe()."""
        pass
    
    def describe(self) -> str:
        return (
            f"{self.__class__.__name__} [ID={self._device_id}, Name='{self._name}', "
            f"Status={'ON' if self._is_on else 'OFF'}, {self._summary()}, "
            f"Roles={len(self.roles())}]"
        )
    
    def to_dict(self) -> dict:
        return {
            "id": self._device_id,
            "name": self._name,
            "kind": self.kind.value,
            "power": self._is_on,
            "attributes": self.attributes(),
            "roles": [role.kind.value for role in self.roles()],
        }
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._device_id} {self._name!r}>"
