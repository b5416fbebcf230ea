"""Smart speaker."""

import logging
from typing import Any, Dict, Optional

from ..results import OperationResult
from .base import DeviceKind, SmartDevice, check_range

logger = logging.getLogger(__name__)

MIN_VOLUME = 0
MAX_VOLUME = 100
DEFAULT_VOLUME = 50

ALARM_SOUND = "ALARM! ALARM! ALARM!"
NOTIFICATION_SOUND = "NOTIFICATION ALERT"


class SmartSpeaker(SmartDevice):
    """A speaker with volume (0-100) that can only play while on."""
    
    kind = DeviceKind.AUDIO
    
    def __init__(self, device_id: str, name: str):
        super().__init__(device_id, name)
        self._volume = DEFAULT_VOLUME
        self._current_sound: Optional[str] = None
        self._last_announcement: Optional[str] = None
    
    @property
    def volume(self) -> int:
        return self._volume
    
    @property
    def current_sound(self) -> Optional[str]:
        return self._current_sound
    
    @property
    def is_playing(self) -> bool:
        return self._current_sound is not None
    
    @property
    def last_announcement(self) -> Optional[str]:
        return self._last_announcement
    
    def set_volume(self, volume: int) -> OperationResult:
        rejected = check_range(self.name, "volume", volume, MIN_VOLUME, MAX_VOLUME, integral=True)
        if rejected:
            return rejected
        self._volume = volume
        logger.info(f"{self.name} volume set to {volume}%")
        return OperationResult.success(f"{self.name} volume {volume}%", [self.name])
    
    def play_sound(self, sound: str) -> OperationResult:
        if not self.is_on:
            logger.warning(f"{self.name} is OFF, cannot play {sound!r}")
            return OperationResult.rejected(f"{self.name} is off", sound=sound)
        self._current_sound = sound
        logger.info(f"{self.name} playing {sound!r} at volume {self._volume}%")
        return OperationResult.success(f"{self.name} playing {sound}", [self.name], sound=sound)
    
    def stop_sound(self) -> OperationResult:
        self._current_sound = None
        logger.info(f"{self.name} stopped playing")
        return OperationResult.success(f"{self.name} stopped", [self.name])
    
    def play_notification(self) -> OperationResult:
        return self.play_sound(NOTIFICATION_SOUND)
    
    def play_alarm(self) -> OperationResult:
        return self.play_sound(ALARM_SOUND)
    
    def announce(self, message: str) -> OperationResult:
        self._last_announcement = message
        logger.info(f"{self.name} announcing: {message!r}")
        return OperationResult.success(f"{self.name} announced", [self.name])
    
    def as_audio(self) -> Optional["SmartSpeaker"]:
        return self
    
    def attributes(self) -> Dict[str, Any]:
        return {
            "volume": self._volume,
            "playing": self._current_sound,
        }
    
    def _summary(self) -> str:
        return f"Volume={self._volume}%, Playing='{self._current_sound or 'None'}'"
