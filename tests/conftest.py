"""
Shared fixtures for homeroles tests.
"""

import pytest

from homeroles.config import reset_config
from homeroles.controller import reset_controller
from homeroles.devices import SmartLight, SmartSpeaker, SmartThermostat


class ScriptedRandom:
    """Random source returning queued values, for pinning role outcomes."""
    
    def __init__(self, floats=(), ints=()):
        self.floats = list(floats)
        self.ints = list(ints)
    
    def random(self):
        return self.floats.pop(0)
    
    def randint(self, a, b):
        value = self.ints.pop(0)
        assert a <= value <= b
        return value


@pytest.fixture(autouse=True)
def fresh_controller():
    """Every test starts with a new process-wide controller."""
    reset_controller()
    reset_config()
    yield
    reset_controller()
    reset_config()


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def light():
    return SmartLight("DEV-001", "Living Room Light")


@pytest.fixture
def thermostat():
    return SmartThermostat("DEV-002", "Hall Thermostat")


@pytest.fixture
def speaker():
    return SmartSpeaker("DEV-003", "Kitchen Speaker")
