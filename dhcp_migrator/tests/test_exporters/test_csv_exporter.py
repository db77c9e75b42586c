"""
Тесты CSVExporter.

Проверяет полный набор колонок схемы, рендеринг значений,
разделители, BOM и таблицы без записей (только заголовок).
"""

import csv
from unittest.mock import patch

import pytest

from dhcp_migrator.core.exceptions import ConfigError, ExportError
from dhcp_migrator.core.records import FixedAddressRecord, NetworkRecord, RangeRecord
from dhcp_migrator.exporters import CSVExporter


def _read(path, delimiter=","):
    with open(path, newline="", encoding="utf-8-sig") as f:
        return list(csv.reader(f, delimiter=delimiter))


@pytest.fixture
def networks():
    return [
        NetworkRecord(
            address="10.1.0.0",
            netmask="255.255.255.0",
            comment="NYC Office, floor 2",
            vlan=42,
            domain_name_servers="10.0.0.53,10.0.0.54",
            enable_ddns=True,
        ),
        NetworkRecord(address="10.2.0.0", netmask="255.255.0.0"),
    ]


@pytest.mark.unit
class TestExportRecords:
    """Тесты экспорта записей."""

    def test_all_columns(self, tmp_path, networks):
        path = CSVExporter(output_folder=str(tmp_path)).export_records(
            networks, NetworkRecord, "dhcp01_networks"
        )
        assert path == tmp_path / "dhcp01_networks.csv"
        rows = _read(path)
        assert rows[0] == NetworkRecord.headers()
        assert len(rows) == 3
        assert all(len(row) == len(rows[0]) for row in rows)

    def test_values_rendered(self, tmp_path, networks):
        path = CSVExporter(output_folder=str(tmp_path)).export_records(
            networks, NetworkRecord, "n"
        )
        header, first, second = _read(path)
        row = dict(zip(header, first))
        assert row["header-network"] == "network"
        assert row["comment"] == "NYC Office, floor 2"
        assert row["EA-VLAN"] == "42"
        assert row["domain_name_servers"] == "10.0.0.53,10.0.0.54"
        assert row["enable_ddns"] == "true"
        assert row["routers"] == ""
        assert dict(zip(header, second))["comment"] == ""

    def test_quoting(self, tmp_path, networks):
        path = CSVExporter(output_folder=str(tmp_path)).export_records(
            networks, NetworkRecord, "n"
        )
        content = path.read_bytes()
        assert b'"10.0.0.53,10.0.0.54"' in content
        assert content.count(b"\r\n") == 3
        assert b"\n" not in content.replace(b"\r\n", b"")

    def test_empty_table_header_only(self, tmp_path):
        path = CSVExporter(output_folder=str(tmp_path)).export_records(
            [], FixedAddressRecord, "f"
        )
        assert path == tmp_path / "f.csv"
        assert _read(path) == [FixedAddressRecord.headers()]

    def test_empty_table_replaces_previous_file(self, tmp_path):
        stale = tmp_path / "dhcp01_fixedaddresses.csv"
        stale.write_bytes(b"header-fixedaddress,ip_address*\r\nfixedaddress,10.9.0.99\r\n")
        CSVExporter(output_folder=str(tmp_path)).export_records(
            [], FixedAddressRecord, "dhcp01_fixedaddresses"
        )
        assert "10.9.0.99" not in stale.read_text(encoding="utf-8")
        assert len(_read(stale)) == 1

    def test_range_defaults(self, tmp_path):
        path = CSVExporter(output_folder=str(tmp_path)).export_records(
            [RangeRecord(start_address="10.1.0.10", end_address="10.1.0.250")],
            RangeRecord,
            "r",
        )
        header, row = _read(path)
        assert dict(zip(header, row))["server_association_type"] == "FAILOVER"


@pytest.mark.unit
class TestOptions:
    """Тесты параметров экспортера."""

    def test_named_delimiter(self, tmp_path, networks):
        exporter = CSVExporter(output_folder=str(tmp_path), delimiter="semicolon")
        assert exporter.delimiter == ";"
        path = exporter.export_records(networks, NetworkRecord, "n")
        assert _read(path, delimiter=";")[0][0] == "header-network"

    def test_custom_delimiter(self, tmp_path):
        assert CSVExporter(output_folder=str(tmp_path), delimiter="|").delimiter == "|"

    @pytest.mark.parametrize("delimiter", [";;", ""])
    def test_invalid_delimiter(self, tmp_path, delimiter):
        with pytest.raises(ConfigError):
            CSVExporter(output_folder=str(tmp_path), delimiter=delimiter)

    def test_bom(self, tmp_path, networks):
        path = CSVExporter(output_folder=str(tmp_path), add_bom=True).export_records(
            networks, NetworkRecord, "n"
        )
        assert path.read_bytes().startswith(b"\xef\xbb\xbf")

    def test_no_bom_by_default(self, tmp_path, networks):
        path = CSVExporter(output_folder=str(tmp_path)).export_records(
            networks, NetworkRecord, "n"
        )
        assert path.read_bytes().startswith(b"header-network")

    def test_creates_folder(self, tmp_path, networks):
        folder = tmp_path / "nested" / "run"
        path = CSVExporter(output_folder=str(folder)).export_records(
            networks, NetworkRecord, "n"
        )
        assert path.parent == folder

    def test_write_error(self, tmp_path, networks):
        exporter = CSVExporter(output_folder=str(tmp_path))
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(ExportError) as exc_info:
                exporter.export_records(networks, NetworkRecord, "n")
        assert exc_info.value.file_path.endswith("n.csv")

    def test_export_plain_rows(self, tmp_path):
        path = CSVExporter(output_folder=str(tmp_path)).export(
            [{"a": "1"}, {"b": "2"}], "plain"
        )
        assert _read(path) == [["a", "b"], ["1", ""], ["", "2"]]

    def test_folder_error(self, tmp_path, networks):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(ExportError):
            CSVExporter(output_folder=str(blocker / "sub")).export_records(
                networks, NetworkRecord, "n"
            )
