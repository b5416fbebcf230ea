"""
Tests for the homeroles CLI.
"""

import json

from click.testing import CliRunner

from homeroles.cli import main
from homeroles.controller import get_controller


def _run(tmp_path, *args):
    runner = CliRunner()
    return runner.invoke(main, ["--data-dir", str(tmp_path), *args])


class TestCLI:
    """Tests for CLI commands."""
    
    def test_init(self, tmp_path):
        """Test init writes config and layout."""
        result = _run(tmp_path, "init")
        
        assert result.exit_code == 0
        assert (tmp_path / "config.json").exists()
        assert (tmp_path / "layout.json").exists()
    
    def test_devices_json(self, tmp_path):
        """Test listing the demo home as JSON."""
        result = _run(tmp_path, "devices", "--json")
        
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [d["name"] for d in data] == [
            "Living Room Light", "Hall Thermostat", "Kitchen Speaker",
        ]
    
    def test_devices_from_layout(self, tmp_path):
        """Test the configured layout file is used."""
        (tmp_path / "layout.json").write_text(json.dumps({
            "devices": [{"id": "P1", "name": "Porch", "kind": "light"}]
        }))
        
        result = _run(tmp_path, "devices", "--json")
        
        assert [d["id"] for d in json.loads(result.stdout)] == ["P1"]
    
    def test_invalid_layout(self, tmp_path):
        """Test a broken layout is reported as a CLI error."""
        (tmp_path / "layout.json").write_text("[]")
        
        result = _run(tmp_path, "devices")
        
        assert result.exit_code != 0
    
    def test_roles(self, tmp_path):
        """Test the role listing."""
        result = _run(tmp_path, "roles")
        
        assert result.exit_code == 0
        assert "security" in result.stdout
        assert "notification" in result.stdout
    
    def test_security_scenario(self, tmp_path):
        """Test running the security scenario end to end."""
        result = _run(tmp_path, "scenario", "security")
        
        assert result.exit_code == 0
        assert "activated on 3 device(s)" in result.stdout
        assert "security executed on 3 device(s)" in result.stdout
        assert "security deactivated on 3 device(s)" in result.stdout
    
    def test_vacation_scenario_seeded(self, tmp_path):
        """Test a seeded vacation run succeeds."""
        result = _run(tmp_path, "scenario", "vacation", "--seed", "5", "--keep")
        
        assert result.exit_code == 0
        assert "deactivated" not in result.stdout
    
    def test_assign_unknown_device(self, tmp_path):
        """Test assigning to a missing device fails."""
        result = _run(tmp_path, "assign", "Garage Door", "energy")
        
        assert result.exit_code == 1
        assert "not found" in result.stdout
    
    def test_assign(self, tmp_path):
        """Test assigning a role by name."""
        result = _run(tmp_path, "assign", "Kitchen Speaker", "energy", "--invoke")
        
        assert result.exit_code == 0
        assert "Kitchen Speaker gained Energy Management Role" in result.stdout
    
    def test_assign_invoke_touches_only_named_device(self, tmp_path):
        """Test --invoke runs the role on the named device alone."""
        (tmp_path / "layout.json").write_text(json.dumps({
            "devices": [
                {"id": "L1", "name": "Lamp", "kind": "light", "roles": ["energy"]},
                {"id": "S1", "name": "Kitchen Speaker", "kind": "audio"},
            ]
        }))

        result = _run(tmp_path, "assign", "Kitchen Speaker", "energy", "--invoke")

        assert result.exit_code == 0
        controller = get_controller()
        assert controller.find_device("Kitchen Speaker").volume == 20
        assert controller.find_device("Lamp").brightness == 100

    def test_notify_without_roles(self, tmp_path):
        """Test notifying a home with no notification roles."""
        result = _run(tmp_path, "notify", "hello")
        
        assert result.exit_code == 0
        assert "no_eligible_devices" in result.stdout
    
    def test_notify_all(self, tmp_path):
        """Test notifying after giving every device the role."""
        result = _run(tmp_path, "notify", "Package delivered", "--all")
        
        assert result.exit_code == 0
        assert "notification executed on 3 device(s)" in result.stdout
