"""Тесты ArchiveExporter."""

import json

import pytest

from dhcp_migrator.core.models import DhcpServer
from dhcp_migrator.exporters import ArchiveExporter


@pytest.mark.unit
class TestArchiveExporter:
    """Тесты архива модели сервера."""

    def test_document(self, tmp_path, sample_server):
        path = ArchiveExporter(output_folder=str(tmp_path)).export_server(
            sample_server, "dhcp01_dhcp"
        )
        assert path == tmp_path / "dhcp01_dhcp.json"
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["metadata"]["format_version"] == 1
        assert document["metadata"]["scopes"] == 2
        assert document["metadata"]["reservations"] == 2
        assert "generated_at" in document["metadata"]
        assert document["server"] == sample_server.to_dict()

    def test_lossless(self, tmp_path, sample_server):
        path = ArchiveExporter(output_folder=str(tmp_path)).export_server(sample_server, "a")
        document = json.loads(path.read_text(encoding="utf-8"))
        assert DhcpServer.from_dict(document["server"]) == sample_server

    def test_without_metadata(self, tmp_path, sample_server):
        exporter = ArchiveExporter(output_folder=str(tmp_path), include_metadata=False, indent=None)
        path = exporter.export_server(sample_server, "a")
        content = path.read_text(encoding="utf-8")
        assert "\n" not in content
        assert list(json.loads(content)) == ["server"]

    def test_unicode_kept(self, tmp_path, sample_server):
        sample_server.scopes[0].description = "Офис"
        path = ArchiveExporter(output_folder=str(tmp_path)).export_server(sample_server, "a")
        assert "Офис" in path.read_text(encoding="utf-8")

    def test_empty_server_written(self, tmp_path):
        path = ArchiveExporter(output_folder=str(tmp_path)).export_server(
            DhcpServer(name="empty"), "empty_dhcp"
        )
        assert json.loads(path.read_text(encoding="utf-8"))["server"]["scopes"] == []

    def test_rows_not_supported(self, tmp_path):
        with pytest.raises(NotImplementedError):
            ArchiveExporter(output_folder=str(tmp_path)).export([{"a": "1"}], "rows")
        assert not (tmp_path / "rows.json").exists()
