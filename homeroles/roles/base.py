"""
Base classes for device roles.

A role is a stateless behaviour that can be attached to any device and later
executed against it. Its kind is the identity used for uniqueness: a device
holds at most one role per kind.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from ..results import OperationResult, UnknownRoleError

if TYPE_CHECKING:
    from ..devices.base import SmartDevice

logger = logging.getLogger(__name__)


class RoleKind(Enum):
    """Role discriminators."""
    SECURITY = "security"
    VACATION = "vacation"
    ENERGY = "energy"
    NOTIFICATION = "notification"


def resolve_role_kind(kind: Union[RoleKind, str, Any]) -> RoleKind:
    """
    Normalise a role kind reference.
    
    Accepts a RoleKind, its string value, or a role class/instance.
    """
    if isinstance(kind, RoleKind):
        return kind
    if isinstance(kind, str):
        try:
            return RoleKind(kind.lower())
        except ValueError:
            raise UnknownRoleError(kind) from None
    role_kind = getattr(kind, "kind", None)
    if isinstance(role_kind, RoleKind):
        return role_kind
    raise UnknownRoleError(repr(kind))


class DeviceRole(ABC):
    """
    Base class for roles.
    
    Subclasses set `kind`, `display_name` and `description` and implement
    execute(). execute() may only change the device's own attributes and
    power; it never touches the controller or the device's role set.
    """
    
    kind: RoleKind
    display_name: str = ""
    description: str = ""
    
    @abstractmethod
    def execute(self, device: "SmartDevice", **kwargs) -> OperationResult:
        """Apply this role's behaviour to the device."""
        pass
    
    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "name": self.display_name,
            "description": self.description,
        }
    
    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.kind.value}>"
