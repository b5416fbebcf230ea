"""
Thermostat.

Holds a target temperature (10.0-35.0 C) and a simulated current reading.
There is no security or sound actuator, so roles that have nothing to drive
here leave a line in the event log instead.
"""

import logging
import random
from typing import Any, Dict, List, Optional

from ..results import OperationResult
from .base import DeviceKind, SmartDevice, check_range

logger = logging.getLogger(__name__)

MIN_TEMPERATURE = 10.0
MAX_TEMPERATURE = 35.0
DEFAULT_TEMPERATURE = 20.0
READING_SPREAD = 2.0


class SmartThermostat(SmartDevice):
    """A thermostat with a target temperature (10.0-35.0 C) and an event log."""

    kind = DeviceKind.CLIMATE
    
    def __init__(self, device_id: str, name: str):
        super().__init__(device_id, name)
        self._target_temperature = DEFAULT_TEMPERATURE
        self._current_temperature = DEFAULT_TEMPERATURE
        self._event_log: List[str] = []
        self._eco_mode = False
    
    @property
    def target_temperature(self) -> float:
        return self._target_temperature
    
    @property
    def current_temperature(self) -> float:
        return self._current_temperature
    
    @property
    def eco_mode(self) -> bool:
        return self._eco_mode
    
    @property
    def event_log(self) -> List[str]:
        return list(self._event_log)
    
    def set_temperature(self, temperature: float) -> OperationResult:
        rejected = check_range(self.name, "temperature", temperature, MIN_TEMPERATURE, MAX_TEMPERATURE)
        if rejected:
            return rejected
        self._target_temperature = float(temperature)
        logger.info(f"{self.name} target temperature set to {temperature}°C")
        return OperationResult.success(f"{self.name} target {temperature}°C", [self.name])
    
    def read_temperature(self, rng: Optional[random.Random] = None) -> float:
        """Simulate a sensor reading within READING_SPREAD of the target."""
        rng = rng or random
        self._current_temperature = self._target_temperature + (rng.random() * 2 - 1) * READING_SPREAD
        logger.debug(f"{self.name} current temperature: {self._current_temperature:.1f}°C")
        return self._current_temperature
    
    def enable_eco_mode(self, delta: float = 2.0) -> OperationResult:
        """Lower the target by delta, clamped to the valid range."""
        target = max(MIN_TEMPERATURE, self._target_temperature - delta)
        result = self.set_temperature(target)
        if result.ok:
            self._eco_mode = True
            logger.info(f"{self.name} ECO mode enabled")
        return result
    
    def log_event(self, message: str) -> OperationResult:
        self._event_log.append(message)
        logger.info(f"{self.name} logged: {message}")
        return OperationResult.success(f"{self.name} logged event", [self.name])
    
    def display_message(self, message: str) -> OperationResult:
        return self.log_event(f"display: {message}")
    
    def as_climate(self) -> Optional["SmartThermostat"]:
        return self
    
    def attributes(self) -> Dict[str, Any]:
        return {
            "target_temperature": self._target_temperature,
            "current_temperature": round(self._current_temperature, 1),
            "eco_mode": self._eco_mode,
            "events": len(self._event_log),
        }
    
    def _summary(self) -> str:
        return f"Target={self._target_temperature:.1f}°C, Current={self._current_temperature:.1f}°C"
