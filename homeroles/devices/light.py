"""Dimmable colour light."""

import logging
from typing import Any, Dict, Optional

from ..results import OperationResult
from .base import DeviceKind, SmartDevice, check_range

logger = logging.getLogger(__name__)

MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 100
DEFAULT_COLOR = "White"


class SmartLight(SmartDevice):
    """A light with brightness (0-100), colour and a flash effect."""
    
    kind = DeviceKind.LIGHT
    
    def __init__(self, device_id: str, name: str):
        super().__init__(device_id, name)
        self._brightness = MAX_BRIGHTNESS
        self._color = DEFAULT_COLOR
        self._flash_count = 0
    
    @property
    def brightness(self) -> int:
        return self._brightness
    
    @property
    def color(self) -> str:
        return self._color
    
    @property
    def flash_count(self) -> int:
        return self._flash_count
    
    def set_brightness(self, brightness: int) -> OperationResult:
        rejected = check_range(self.name, "brightness", brightness, MIN_BRIGHTNESS, MAX_BRIGHTNESS, integral=True)
        if rejected:
            return rejected
        self._brightness = brightness
        logger.info(f"{self.name} brightness set to {brightness}%")
        return OperationResult.success(f"{self.name} brightness {brightness}%", [self.name])
    
    def set_color(self, color: str) -> OperationResult:
        self._color = color
        logger.info(f"{self.name} color changed to {color}")
        return OperationResult.success(f"{self.name} color {color}", [self.name])
    
    def flash(self) -> OperationResult:
        self._flash_count += 1
        logger.info(f"{self.name} is FLASHING")
        return OperationResult.success(f"{self.name} flashed", [self.name])
    
    def as_light(self) -> Optional["SmartLight"]:
        return self
    
    def attributes(self) -> Dict[str, Any]:
        return {
            "brightness": self._brightness,
            "color": self._color,
            "flash_count": self._flash_count,
        }
    
    def _summary(self) -> str:
        return f"Brightness={self._brightness}%"
