"""
E2E: export → convert из архива.

Повторное преобразование сохранённого архива даёт побайтно
те же таблицы импорта, что и исходный экспорт.
"""

import json
from pathlib import Path

import pytest

from dhcp_migrator.cli.commands import OutputOptions, run_export
from dhcp_migrator.collectors import ArchiveSource
from dhcp_migrator.core.domain import ExportSettings

from ..conftest import FakeSource

TABLES = ("dhcp01_networks.csv", "dhcp01_ranges.csv", "dhcp01_fixedaddresses.csv")


@pytest.fixture
def settings():
    return ExportSettings(
        site="NYC",
        dhcp_members="ib-grid-01",
        failover_association="fo-nyc",
        parse_vlan_from_name=True,
        parse_vlan_from_description=True,
        add_site_to_comment=True,
    )


@pytest.mark.e2e
class TestIdempotence:
    """Повторный экспорт из архива."""

    def test_convert_matches_export(self, tmp_path, sample_server, settings):
        first = tmp_path / "first"
        second = tmp_path / "second"

        run_export(FakeSource(sample_server), ["dhcp01"], settings, OutputOptions(first))
        source = ArchiveSource(first / "dhcp01_dhcp.json")
        run_export(source, source.servers, settings, OutputOptions(second))

        for name in TABLES:
            assert (first / name).read_bytes() == (second / name).read_bytes()

    def test_archive_of_archive(self, tmp_path, sample_server, settings):
        """Архив, пересохранённый из архива, содержит ту же модель."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        run_export(FakeSource(sample_server), ["dhcp01"], settings, OutputOptions(first))
        run_export(ArchiveSource(first), ["dhcp01"], settings, OutputOptions(second))

        def server(folder: Path) -> dict:
            return json.loads((folder / "dhcp01_dhcp.json").read_text(encoding="utf-8"))["server"]

        assert server(first) == server(second)

    def test_expected_rows(self, tmp_path, sample_server, settings):
        out = tmp_path / "out"
        stats = run_export(FakeSource(sample_server), ["dhcp01"], settings, OutputOptions(out))
        assert stats["dhcp01"]["networks"] == 2
        assert stats["dhcp01"]["fixed_addresses"] == 2

        lines = (out / "dhcp01_networks.csv").read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("header-network,address*,netmask*,comment,")
        assert lines[1].startswith("network,10.1.0.0,255.255.255.0,NYC Engineering VLAN 42,691200,")
        assert ",99," in lines[1]

        fixed = (out / "dhcp01_fixedaddresses.csv").read_text(encoding="utf-8").splitlines()
        assert fixed[1] == (
            "fixedaddress,10.1.0.50,00:11:22:33:44:55,printer01,Lobby printer,10.9.9.9,,MAC_ADDRESS"
        )
        assert fixed[2] == "fixedaddress,10.1.0.51,aa:bb:cc:dd:ee:ff,,,,,MAC_ADDRESS"

        ranges = (out / "dhcp01_ranges.csv").read_text(encoding="utf-8").splitlines()
        assert ranges[1] == (
            'dhcprange,10.1.0.10,10.1.0.250,"10.1.0.10-10.1.0.20,10.1.0.30-10.1.0.40",'
            "fo-nyc,FAILOVER"
        )
        assert ranges[2] == "dhcprange,10.2.0.10,10.2.255.250,,fo-nyc,FAILOVER"


@pytest.mark.e2e
class TestExportFailure:
    """Ошибка записи одного сервера не прерывает остальные."""

    def test_error_recorded(self, tmp_path, sample_server, settings):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a folder", encoding="utf-8")

        stats = run_export(
            FakeSource(sample_server), ["dhcp01"], settings, OutputOptions(blocker / "out")
        )
        assert stats["dhcp01"]["error"]["error_type"] == "ExportError"


@pytest.mark.e2e
class TestRepeatedExport:
    """Повторный экспорт в ту же папку."""

    def test_table_without_rows_overwritten(self, tmp_path, sample_server, settings):
        out = tmp_path / "out"
        out.mkdir()
        stale = out / "dhcp01_fixedaddresses.csv"
        stale.write_bytes(b"header-fixedaddress,ip_address*\r\nfixedaddress,10.9.0.99\r\n")
        for scope in sample_server.scopes:
            scope.reservations = []

        stats = run_export(FakeSource(sample_server), ["dhcp01"], settings, OutputOptions(out))

        assert stats["dhcp01"]["fixed_addresses"] == 0
        assert str(stale) in stats["dhcp01"]["files"]
        lines = stale.read_bytes().split(b"\r\n")
        assert lines[0].startswith(b"header-fixedaddress,ip_address*,mac_address*")
        assert lines[1:] == [b""]
