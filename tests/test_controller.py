"""
Tests for the home controller.
"""

import threading

from homeroles.controller import HomeController, get_controller, reset_controller
from homeroles.devices import SmartLight, SmartSpeaker
from homeroles.devices.audio import ALARM_SOUND
from homeroles.results import Outcome
from homeroles.roles import (
    EnergyManagementRole, NotificationRole, RoleKind, SecurityModeRole,
)


def _home(*devices):
    controller = get_controller()
    for device in devices:
        controller.register(device)
    return controller


def _role_kinds(device):
    return [role.kind for role in device.roles()]


class TestSingleton:
    """Tests for the process-wide controller."""
    
    def test_same_instance(self):
        """Test repeated access returns the identical controller."""
        assert get_controller() is get_controller()
        assert HomeController.get_instance() is get_controller()
    
    def test_reset(self):
        """Test reset gives a fresh controller."""
        first = get_controller()
        first.register(SmartLight("DEV-001", "Lamp"))
        
        reset_controller()
        second = get_controller()
        
        assert second is not first
        assert second.device_count() == 0
    
    def test_concurrent_first_access(self):
        """Test racing first calls create exactly one controller."""
        barrier = threading.Barrier(16)
        seen = []
        
        def access():
            barrier.wait()
            seen.append(get_controller())
        
        threads = [threading.Thread(target=access) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        
        assert len({id(c) for c in seen}) == 1


class TestRegistration:
    """Tests for registering devices."""
    
    def test_register(self, light, speaker):
        """Test devices keep registration order."""
        controller = _home(light, speaker)
        
        assert controller.device_count() == 2
        assert controller.get_all_devices() == [light, speaker]
    
    def test_duplicate_registration(self, light):
        """Test registering twice is a reported no-op."""
        controller = _home(light)
        
        result = controller.register(light)
        
        assert result.outcome == Outcome.ALREADY_PRESENT
        assert controller.device_count() == 1
    
    def test_membership_by_identity(self):
        """Test distinct objects with equal ids are separate devices."""
        controller = _home(SmartLight("DEV-001", "Lamp"), SmartLight("DEV-001", "Lamp"))
        assert controller.device_count() == 2
    
    def test_unregister(self, light, speaker):
        """Test removing a device."""
        controller = _home(light, speaker)
        
        assert controller.unregister(light).ok
        assert controller.get_all_devices() == [speaker]
    
    def test_unregister_absent(self, light):
        """Test removing an unknown device is a reported no-op."""
        result = get_controller().unregister(light)
        assert result.outcome == Outcome.NOT_FOUND
    
    def test_lookup(self, light, speaker):
        """Test lookup by name and id."""
        controller = _home(light, speaker)
        
        assert controller.find_device("Kitchen Speaker") is speaker
        assert controller.get_device("DEV-001") is light
        assert controller.find_device("Garage") is None


class TestScenarios:
    """Tests for activate / deactivate / invoke."""
    
    def test_activate_attaches_everywhere(self, light, thermostat, speaker):
        """Test activation attaches a separate role to each device."""
        controller = _home(light, thermostat, speaker)
        
        result = controller.activate_scenario(SecurityModeRole)
        
        assert result.ok
        assert result.affected == ["Living Room Light", "Hall Thermostat", "Kitchen Speaker"]
        roles = [d.get_role(RoleKind.SECURITY) for d in (light, thermostat, speaker)]
        assert all(roles)
        assert len({id(r) for r in roles}) == 3
    
    def test_activate_reports_existing(self, light, speaker):
        """Test devices already holding the kind are reported."""
        light.add_role(SecurityModeRole())
        controller = _home(light, speaker)
        
        result = controller.activate_security_mode()
        
        assert result.affected == ["Kitchen Speaker"]
        assert result.details["already"] == ["Living Room Light"]
        assert len(light.roles()) == 1
    
    def test_activate_twice(self, light, speaker):
        """Test a second activation reports the role as already held."""
        controller = _home(light, speaker)
        controller.activate_security_mode()

        result = controller.activate_security_mode()

        assert result.outcome == Outcome.ALREADY_PRESENT
        assert not result.ok
        assert result.details["already"] == ["Living Room Light", "Kitchen Speaker"]
        assert len(light.roles()) == 1
        assert len(speaker.roles()) == 1

    def test_activate_without_devices(self):
        """Test activation on an empty home."""
        result = get_controller().activate_security_mode()
        assert result.outcome == Outcome.NO_ELIGIBLE_DEVICES
    
    def test_round_trip(self, light, thermostat, speaker):
        """Test activate then deactivate restores every role set."""
        light.add_role(NotificationRole())
        speaker.add_role(EnergyManagementRole())
        controller = _home(light, thermostat, speaker)
        before = {d.name: _role_kinds(d) for d in controller.get_all_devices()}
        
        controller.activate_security_mode()
        controller.deactivate_security_mode()
        
        after = {d.name: _role_kinds(d) for d in controller.get_all_devices()}
        assert after == before
    
    def test_deactivate_absent(self, light):
        """Test deactivating a kind nobody holds."""
        result = _home(light).deactivate_scenario(RoleKind.VACATION)
        assert result.outcome == Outcome.NOT_FOUND
    
    def test_security_dispatch(self, light, thermostat, speaker):
        """Test security alert behaviour per device kind."""
        light.set_brightness(20)
        controller = _home(light, speaker, thermostat)
        climate_before = thermostat.attributes()
        
        controller.activate_security_mode()
        result = controller.trigger_security_alert()
        
        assert result.ok
        assert light.brightness == 100
        assert speaker.volume == 100
        assert speaker.current_sound == ALARM_SOUND
        climate_after = thermostat.attributes()
        assert climate_after.pop("events") == 1
        climate_before.pop("events")
        assert climate_after == climate_before
    
    def test_invoke_skips_devices_without_role(self, light, speaker):
        """Test invocation only touches holders of the kind."""
        controller = _home(light, speaker)
        controller.assign_to("Living Room Light", SecurityModeRole())
        
        result = controller.trigger_security_alert()
        
        assert result.affected == ["Living Room Light"]
        assert speaker.volume == 50
        assert speaker.is_on is False
    
    def test_invoke_ignores_unregistered(self, light, speaker):
        """Test devices outside the registry are never executed."""
        speaker.add_role(SecurityModeRole())
        controller = _home(light)
        controller.activate_security_mode()
        
        controller.trigger_security_alert()
        
        assert speaker.is_on is False
    
    def test_no_eligible_devices(self, light, thermostat, speaker):
        """Test notifying with no notification roles changes nothing."""
        controller = _home(light, thermostat, speaker)
        controller.activate_energy_mode()
        before = [d.to_dict() for d in controller.get_all_devices()]
        
        result = controller.send_notification("hello")
        
        assert result.outcome == Outcome.NO_ELIGIBLE_DEVICES
        assert [d.to_dict() for d in controller.get_all_devices()] == before
    
    def test_send_notification(self, light, speaker):
        """Test the message reaches speakers."""
        controller = _home(light, speaker)
        controller.activate_notifications()
        
        controller.send_notification("Package delivered at front door!")
        
        assert speaker.last_announcement == "Package delivered at front door!"
        assert light.color == "Blue"
    
    def test_energy_mode(self, light, thermostat, speaker):
        """Test energy saving across device kinds."""
        controller = _home(light, thermostat, speaker)
        
        controller.activate_energy_mode()
        controller.apply_energy_saving()
        
        assert light.brightness == 30
        assert speaker.volume == 20
        assert thermostat.target_temperature == 18.0
        
        controller.deactivate_energy_mode()
        assert not any(d.has_role(RoleKind.ENERGY) for d in controller.get_all_devices())
    
    def test_vacation_mode(self, light, thermostat, speaker, scripted_rng):
        """Test presence simulation with a pinned random source."""
        controller = _home(light, speaker, thermostat)
        rng = scripted_rng(floats=[0.9, 0.1], ints=[60])
        
        controller.activate_vacation_mode(rng)
        controller.simulate_presence()
        
        assert light.is_on and light.brightness == 60
        assert speaker.is_playing
        assert thermostat.target_temperature == 18.0
        
        controller.deactivate_vacation_mode()
        assert controller.simulate_presence().outcome == Outcome.NO_ELIGIBLE_DEVICES


class TestAssign:
    """Tests for assigning a role to one device."""
    
    def test_assign_by_name(self, light, thermostat, speaker):
        """Test only the named device gains the role."""
        controller = _home(light, thermostat, speaker)
        
        result = controller.assign_to("Kitchen Speaker", EnergyManagementRole())
        
        assert result.ok
        assert speaker.has_role(RoleKind.ENERGY)
        assert light.roles() == []
        assert thermostat.roles() == []
    
    def test_assign_unknown_device(self, light):
        """Test assigning to a missing name."""
        result = _home(light).assign_to("Garage Door", EnergyManagementRole())
        
        assert result.outcome == Outcome.NOT_FOUND
        assert light.roles() == []
    
    def test_assign_first_match(self):
        """Test name collisions resolve to the first registered device."""
        first = SmartSpeaker("DEV-010", "Speaker")
        second = SmartSpeaker("DEV-011", "Speaker")
        controller = _home(first, second)
        
        controller.assign_to("Speaker", NotificationRole())
        
        assert first.has_role(RoleKind.NOTIFICATION)
        assert not second.has_role(RoleKind.NOTIFICATION)
    
    def test_assign_duplicate(self, thermostat):
        """Test assigning a held kind is reported."""
        controller = _home(thermostat)
        controller.assign_to("Hall Thermostat", EnergyManagementRole())
        
        result = controller.assign_to("Hall Thermostat", EnergyManagementRole())
        
        assert result.outcome == Outcome.ALREADY_PRESENT


class TestListing:
    """Tests for device listing."""
    
    def test_list_devices(self, light, speaker):
        """Test listings pair devices with role snapshots."""
        controller = _home(light, speaker)
        controller.assign_to("Living Room Light", NotificationRole())
        
        listings = controller.list_devices()
        
        assert [l.device for l in listings] == [light, speaker]
        assert [r.kind for r in listings[0].roles] == [RoleKind.NOTIFICATION]
        assert listings[1].roles == []
        
        listings[0].roles.clear()
        assert light.has_role(RoleKind.NOTIFICATION)
    
    def test_listing_to_dict(self, thermostat):
        """Test listing serialization."""
        _home(thermostat).activate_energy_mode()
        
        data = get_controller().list_devices()[0].to_dict()
        
        assert data["name"] == "Hall Thermostat"
        assert data["roles"][0]["kind"] == "energy"
