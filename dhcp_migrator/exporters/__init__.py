"""
Модули экспорта данных.

- CSV (.csv): таблицы импорта (сети, диапазоны, фиксированные адреса)
- JSON (.json): архив модели DHCP сервера без потерь
- Excel (.xlsx): книга для ревью перед импортом

Пример использования:
    from dhcp_migrator.exporters import CSVExporter, ArchiveExporter

    CSVExporter(output_folder="reports").export_records(
        batch.networks, NetworkRecord, "dhcp01_networks"
    )
    ArchiveExporter(output_folder="reports").export_server(server, "dhcp01_dhcp")
"""

from .base import BaseExporter
from .csv_exporter import CSVExporter
from .archive_exporter import ArchiveExporter
from .excel import ExcelExporter

__all__ = ["BaseExporter", "CSVExporter", "ArchiveExporter", "ExcelExporter"]
