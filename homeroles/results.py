"""
Outcome values for home control operations.

Every device, role and controller operation reports what happened through an
OperationResult instead of raising. Exceptions are reserved for programming
and configuration mistakes (unknown role names, malformed layout files).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class HomeError(Exception):
    """Base exception for configuration and usage errors."""
    
    def __init__(self, message: str, code: str = "HOME_ERROR"):
        super().__init__(message)
        self.code = code


class UnknownRoleError(HomeError):
    """Raised when a role kind name does not match any known role."""
    
    def __init__(self, name: str):
        super().__init__(f"Unknown role: {name}", code="UNKNOWN_ROLE")
        self.name = name


class UnknownDeviceKindError(HomeError):
    """Raised when a device kind name does not match any known device."""
    
    def __init__(self, name: str):
        super().__init__(f"Unknown device kind: {name}", code="UNKNOWN_DEVICE_KIND")
        self.name = name


class LayoutError(HomeError):
    """Raised when a home layout file cannot be read or validated."""
    
    def __init__(self, message: str):
        super().__init__(message, code="LAYOUT_ERROR")


class Outcome(Enum):
    """Discriminator for operation results."""
    SUCCESS = "success"
    ALREADY_PRESENT = "already_present"      # duplicate role / registration
    NOT_FOUND = "not_found"
    REJECTED = "rejected"                    # value outside its valid range
    NO_ELIGIBLE_DEVICES = "no_eligible_devices"


@dataclass
class OperationResult:
    """Result of a device, role or controller operation."""
    
    outcome: Outcome
    message: str = ""
    affected: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS
    
    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "ok": self.ok,
            "message": self.message,
            "affected": list(self.affected),
            "details": dict(self.details),
        }
    
    @classmethod
    def success(cls, message: str = "", affected: Optional[List[str]] = None, **details) -> "OperationResult":
        """Create a successful result."""
        return cls(Outcome.SUCCESS, message, list(affected or []), details)
    
    @classmethod
    def already(cls, message: str, **details) -> "OperationResult":
        """Create a result for an attach/register that already holds."""
        return cls(Outcome.ALREADY_PRESENT, message, details=details)
    
    @classmethod
    def not_found(cls, message: str, **details) -> "OperationResult":
        """Create a result for a target that does not exist."""
        return cls(Outcome.NOT_FOUND, message, details=details)
    
    @classmethod
    def rejected(cls, message: str, **details) -> "OperationResult":
        """Create a result for a write outside the valid range."""
        return cls(Outcome.REJECTED, message, details=details)
    
    @classmethod
    def no_eligible(cls, message: str, **details) -> "OperationResult":
        """Create a result for a scenario no device can take part in."""
        return cls(Outcome.NO_ELIGIBLE_DEVICES, message, details=details)
