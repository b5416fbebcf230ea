"""
Built-in roles: security, vacation, energy management and notification.

Each role reacts differently depending on the kind of device it runs on.
Devices are reached through their as_light()/as_audio()/as_climate() views.
"""

import logging
import random
from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Optional, Type, Union

from ..results import OperationResult
from .base import DeviceRole, RoleKind, resolve_role_kind

if TYPE_CHECKING:
    from ..devices.base import SmartDevice

logger = logging.getLogger(__name__)

VACATION_TEMPERATURE = 18.0
VACATION_MIN_BRIGHTNESS = 50
VACATION_MAX_BRIGHTNESS = 100
AMBIENT_SOUND = "TV sounds"
AMBIENT_SOUND_CHANCE = 0.3
ENERGY_BRIGHTNESS = 30
ENERGY_VOLUME = 20
ECO_DELTA = 2.0
ALERT_COLOR = "Red"
NOTIFICATION_COLOR = "Blue"


def _finish(role: DeviceRole, device: "SmartDevice", steps: List[OperationResult]) -> OperationResult:
    """Fold the device calls made by a role into a single result."""
    failed = [step.message for step in steps if not step.ok]
    if failed:
        logger.warning(f"{role.display_name} on {device.name}: {len(failed)} step(s) rejected")
        return OperationResult.rejected(
            f"{role.display_name} partly failed on {device.name}",
            role=role.kind.value,
            steps=[step.message for step in steps],
            failed_steps=failed,
        )
    return OperationResult.success(
        f"{role.display_name} executed on {device.name}",
        [device.name],
        role=role.kind.value,
        steps=[step.message for step in steps],
        failed_steps=failed,
    )


def _unsupported(role: DeviceRole, device: "SmartDevice") -> OperationResult:
    logger.warning(f"{role.display_name} has no behaviour for {device!r}")
    return OperationResult.not_found(
        f"{role.display_name} has no behaviour for {device.name}",
        role=role.kind.value,
    )


class SecurityModeRole(DeviceRole):
    """Lights flash red at full brightness; speakers sound the alarm."""
    
    kind = RoleKind.SECURITY
    display_name = "Security Mode Role"
    description = "Enables device to participate in home security alerts and intrusion detection"
    
    def execute(self, device: "SmartDevice", **kwargs) -> OperationResult:
        logger.info(f"[Security] {device.name} executing security protocol")
        
        light = device.as_light()
        if light is not None:
            return _finish(self, device, [
                light.turn_on(),
                light.set_brightness(100),
                light.set_color(ALERT_COLOR),
                light.flash(),
            ])
        
        speaker = device.as_audio()
        if speaker is not None:
            return _finish(self, device, [
                speaker.turn_on(),
                speaker.set_volume(100),
                speaker.play_alarm(),
            ])
        
        thermostat = device.as_climate()
        if thermostat is not None:
            stamp = datetime.now().isoformat(timespec="seconds")
            return _finish(self, device, [
                thermostat.log_event(f"security event at {stamp}"),
            ])
        
        return _unsupported(self, device)


class VacationModeRole(DeviceRole):
    """
    Simulates presence while residents are away.
    
    rng is any object with random() and randint(a, b), such as
    random.Random. Pass a seeded or scripted source for repeatable runs.
    """
    
    kind = RoleKind.VACATION
    display_name = "Vacation Mode Role"
    description = "Simulates home presence when residents are away on vacation to deter burglars"
    
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
    
    def execute(self, device: "SmartDevice", **kwargs) -> OperationResult:
        logger.info(f"[Vacation] {device.name} simulating presence")
        
        light = device.as_light()
        if light is not None:
            if self.rng.random() > 0.5:
                brightness = self.rng.randint(VACATION_MIN_BRIGHTNESS, VACATION_MAX_BRIGHTNESS)
                return _finish(self, device, [light.turn_on(), light.set_brightness(brightness)])
            return _finish(self, device, [light.turn_off()])
        
        speaker = device.as_audio()
        if speaker is not None:
            if self.rng.random() < AMBIENT_SOUND_CHANCE:
                return _finish(self, device, [speaker.turn_on(), speaker.play_sound(AMBIENT_SOUND)])
            return _finish(self, device, [])
        
        thermostat = device.as_climate()
        if thermostat is not None:
            return _finish(self, device, [thermostat.set_temperature(VACATION_TEMPERATURE)])
        
        return _unsupported(self, device)


class EnergyManagementRole(DeviceRole):
    """Dims lights, lowers speaker volume and puts thermostats in eco mode."""
    
    kind = RoleKind.ENERGY
    display_name = "Energy Management Role"
    description = "Optimizes device operation to reduce power consumption and save energy"
    
    def execute(self, device: "SmartDevice", **kwargs) -> OperationResult:
        logger.info(f"[Energy] {device.name} applying energy-saving measures")
        
        light = device.as_light()
        if light is not None:
            return _finish(self, device, [light.set_brightness(ENERGY_BRIGHTNESS)])
        
        speaker = device.as_audio()
        if speaker is not None:
            return _finish(self, device, [speaker.set_volume(ENERGY_VOLUME)])
        
        thermostat = device.as_climate()
        if thermostat is not None:
            return _finish(self, device, [thermostat.enable_eco_mode(ECO_DELTA)])
        
        return _unsupported(self, device)


class NotificationRole(DeviceRole):
    """
    Alerts residents.
    
    Accepts an optional `message` keyword: speakers announce it and
    thermostats show it on their display.
    """
    
    kind = RoleKind.NOTIFICATION
    display_name = "Notification Role"
    description = "Enables device to alert users about important events and messages"
    
    def execute(self, device: "SmartDevice", **kwargs) -> OperationResult:
        message = kwargs.get("message")
        logger.info(f"[Notification] {device.name} sending notification")
        
        light = device.as_light()
        if light is not None:
            return _finish(self, device, [
                light.turn_on(),
                light.set_color(NOTIFICATION_COLOR),
                light.flash(),
            ])
        
        speaker = device.as_audio()
        if speaker is not None:
            steps = [speaker.turn_on(), speaker.play_notification()]
            if message:
                steps.append(speaker.announce(message))
            return _finish(self, device, steps)
        
        thermostat = device.as_climate()
        if thermostat is not None:
            return _finish(self, device, [thermostat.display_message(message or "notification")])
        
        return _unsupported(self, device)


ROLE_TYPES: Dict[RoleKind, Type[DeviceRole]] = {
    RoleKind.SECURITY: SecurityModeRole,
    RoleKind.VACATION: VacationModeRole,
    RoleKind.ENERGY: EnergyManagementRole,
    RoleKind.NOTIFICATION: NotificationRole,
}


def get_role_type(kind: Union[RoleKind, str]) -> Type[DeviceRole]:
    """Look up the role class for a kind or kind name."""
    return ROLE_TYPES[resolve_role_kind(kind)]


def create_role(kind: Union[RoleKind, str], **kwargs) -> DeviceRole:
    """Instantiate a fresh role of the given kind."""
    return get_role_type(kind)(**kwargs)
