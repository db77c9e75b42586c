"""
Тесты PowerShellSource.

subprocess.run подменяется, проверяются сборка команды, разбор
вывода ConvertTo-Json и преобразование ошибок.
"""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from dhcp_migrator.collectors import PowerShellSource
from dhcp_migrator.core.exceptions import CommandError, ParseError, TimeoutError

RUN = "dhcp_migrator.collectors.powershell.subprocess.run"


def _completed(stdout="", returncode=0, stderr=""):
    return MagicMock(stdout=stdout, returncode=returncode, stderr=stderr)


def _json(data):
    return _completed(json.dumps(data))


@pytest.mark.unit
class TestRun:
    """Тесты запуска cmdlet."""

    def test_command_line(self):
        with patch(RUN, return_value=_completed("[]")) as run:
            PowerShellSource(executable="pwsh", timeout=30).get_scopes("dhcp01")
        args, kwargs = run.call_args
        command = args[0]
        assert command[:4] == ["pwsh", "-NoProfile", "-NonInteractive", "-Command"]
        assert "Get-DhcpServerv4Scope -ComputerName 'dhcp01'" in command[4]
        assert kwargs["timeout"] == 30
        assert kwargs["capture_output"] is True

    def test_scope_id_and_quotes(self):
        with patch(RUN, return_value=_completed("")) as run:
            PowerShellSource().get_exclusions("o'brien", "10.1.0.0")
        script = run.call_args[0][0][4]
        assert "-ComputerName 'o''brien'" in script
        assert "-ScopeId '10.1.0.0'" in script

    def test_nonzero_exit(self):
        with patch(RUN, return_value=_completed(returncode=1, stderr="Access is denied")):
            with pytest.raises(CommandError) as exc_info:
                PowerShellSource().get_scopes("dhcp01")
        assert exc_info.value.server == "dhcp01"
        assert exc_info.value.output == "Access is denied"

    def test_timeout(self):
        with patch(RUN, side_effect=subprocess.TimeoutExpired("pwsh", 5)):
            with pytest.raises(TimeoutError) as exc_info:
                PowerShellSource(timeout=5).get_scopes("dhcp01")
        assert exc_info.value.timeout_seconds == 5

    def test_missing_executable(self):
        with patch(RUN, side_effect=FileNotFoundError("powershell.exe")):
            with pytest.raises(CommandError):
                PowerShellSource().get_scopes("dhcp01")

    def test_invalid_json(self):
        with patch(RUN, return_value=_completed("{not json")):
            with pytest.raises(ParseError):
                PowerShellSource().get_scopes("dhcp01")


@pytest.mark.unit
class TestReachable:
    """Тесты проверки доступности."""

    def test_true(self):
        with patch(RUN, return_value=_completed("True\r\n")):
            assert PowerShellSource().is_reachable("dhcp01") is True

    def test_false(self):
        with patch(RUN, return_value=_completed("False")):
            assert PowerShellSource().is_reachable("dhcp01") is False

    def test_error_means_unreachable(self):
        with patch(RUN, side_effect=subprocess.TimeoutExpired("pwsh", 5)):
            assert PowerShellSource().is_reachable("dhcp01") is False


@pytest.mark.unit
class TestParsing:
    """Тесты разбора вывода cmdlets."""

    def test_scopes(self):
        output = [{
            "ScopeId": "10.1.0.0",
            "SubnetMask": "255.255.255.0",
            "Name": "Office",
            "Description": None,
            "State": "Active",
            "StartRange": "10.1.0.10",
            "EndRange": "10.1.0.250",
            "LeaseDuration": 691200,
        }]
        with patch(RUN, return_value=_json(output)):
            scopes = PowerShellSource().get_scopes("dhcp01")
        assert scopes == [{
            "scope_id": "10.1.0.0",
            "subnet_mask": "255.255.255.0",
            "name": "Office",
            "description": "",
            "state": "Active",
            "lease_duration": 691200,
            "start": "10.1.0.10",
            "end": "10.1.0.250",
        }]

    def test_single_object_as_list(self):
        output = {"StartRange": "10.1.0.10", "EndRange": "10.1.0.20"}
        with patch(RUN, return_value=_json(output)):
            exclusions = PowerShellSource().get_exclusions("dhcp01", "10.1.0.0")
        assert exclusions == [{"start": "10.1.0.10", "end": "10.1.0.20"}]

    def test_empty_output(self):
        with patch(RUN, return_value=_completed("  ")):
            assert PowerShellSource().get_reservations("dhcp01", "10.1.0.0") == []

    def test_reservations(self):
        output = [{
            "IPAddress": "10.1.0.50",
            "ClientId": "00-11-22-33-44-55",
            "Name": "printer01",
            "Description": "Lobby",
            "AddressState": "Dhcp",
        }]
        with patch(RUN, return_value=_json(output)):
            reservations = PowerShellSource().get_reservations("dhcp01", "10.1.0.0")
        assert reservations[0]["client_id"] == "00-11-22-33-44-55"
        assert reservations[0]["address_state"] == "Dhcp"

    def test_options(self):
        output = [
            {"OptionId": 6, "Name": "DNS Servers", "Type": "IPv4Address",
             "Value": ["10.0.0.53", "10.0.0.54"]},
            {"OptionId": 15, "Name": "DNS Domain Name", "Type": "String",
             "Value": ["corp.example.com"]},
        ]
        with patch(RUN, return_value=_json(output)):
            options = PowerShellSource().get_server_options("dhcp01")
        assert options[0] == {
            "option_id": 6,
            "name": "DNS Servers",
            "option_type": "IPv4Address",
            "value": ["10.0.0.53", "10.0.0.54"],
        }
        assert options[1]["value"] == ["corp.example.com"]

    def test_reservation_options_use_ip(self):
        with patch(RUN, return_value=_completed("")) as run:
            PowerShellSource().get_reservation_options("dhcp01", "10.1.0.0", "10.1.0.50")
        assert "-ReservedIP '10.1.0.50'" in run.call_args[0][0][4]

    def test_dns_settings(self):
        output = {"DynamicUpdates": "OnClientRequest", "DeleteDnsRROnLeaseExpiry": True}
        with patch(RUN, return_value=_json(output)):
            settings = PowerShellSource().get_dns_settings("dhcp01", "10.1.0.0")
        assert settings == {"dynamic_updates": "OnClientRequest", "delete_dns_on_expiry": True}

    def test_dns_settings_missing(self):
        with patch(RUN, return_value=_completed("")):
            assert PowerShellSource().get_dns_settings("dhcp01", "10.1.0.0") is None
