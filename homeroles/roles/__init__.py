"""
Device roles.

Roles are behaviours attached to devices at runtime and executed by the
controller. Built-in kinds:
- security: alarms and flashing lights
- vacation: presence simulation
- energy: dimming, lower volume, eco temperature
- notification: visual and audible alerts
"""
from .base import DeviceRole, RoleKind, resolve_role_kind
from .builtin import (
    ROLE_TYPES,
    SecurityModeRole,
    VacationModeRole,
    EnergyManagementRole,
    NotificationRole,
    get_role_type,
    create_role,
)

__all__ = [
    "DeviceRole",
    "RoleKind",
    "resolve_role_kind",
    "ROLE_TYPES",
    "SecurityModeRole",
    "VacationModeRole",
    "EnergyManagementRole",
    "NotificationRole",
    "get_role_type",
    "create_role",
]
