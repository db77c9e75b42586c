"""
CSV экспортер таблиц импорта.

Файл таблицы: строка заголовка схемы (маркер типа + все колонки,
даже полностью пустые) и по строке на запись. Строки разделяются
CRLF, значения с разделителем или кавычками берутся в кавычки.

Пример использования:
    exporter = CSVExporter(output_folder="reports", delimiter="semicolon", add_bom=True)
    exporter.export_records(batch.networks, NetworkRecord, "dhcp01_networks")
"""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Type

from ..core.exceptions import ConfigError
from ..core.records import ImportRecord
from .base import BaseExporter

logger = logging.getLogger(__name__)


class CSVExporter(BaseExporter):
    """
    Экспортер таблиц импорта в CSV.

    Attributes:
        delimiter: Разделитель полей (один символ)

    Example:
        # Excel с русской локалью
        CSVExporter(delimiter="semicolon", add_bom=True)
    """

    file_extension = ".csv"

    DELIMITERS = {
        "comma": ",",
        "semicolon": ";",
        "tab": "\t",
        "pipe": "|",
    }

    def __init__(
        self,
        output_folder: str = "reports",
        encoding: str = "utf-8",
        delimiter: str = ",",
        add_bom: bool = False,
    ):
        """
        Args:
            output_folder: Папка для сохранения
            encoding: Кодировка файла
            delimiter: Символ или имя: comma, semicolon, tab, pipe
            add_bom: BOM в начале файла (для Excel)

        Raises:
            ConfigError: Разделитель не один символ
        """
        if add_bom and encoding.lower().replace("_", "-") == "utf-8":
            encoding = "utf-8-sig"
        super().__init__(output_folder, encoding)

        self.delimiter = self.DELIMITERS.get(delimiter, delimiter)
        if len(self.delimiter) != 1:
            raise ConfigError(
                f"Разделитель CSV должен быть одним символом: {delimiter!r}",
                key="output.csv_delimiter",
            )

    def export_records(
        self,
        records: Sequence[ImportRecord],
        record_cls: Type[ImportRecord],
        filename: str,
    ) -> Path:
        """
        Пишет таблицу одной схемы.

        Args:
            records: Записи схемы record_cls
            record_cls: NetworkRecord, RangeRecord или FixedAddressRecord
            filename: Имя файла без расширения

        Returns:
            Path: Файл таблицы (без записей: только строка заголовка)
        """
        rows = [record.to_row() for record in records]
        return self.export(rows, filename, columns=record_cls.headers())

    def _write(self, data: List[Dict[str, Any]], file_path: Path, columns: List[str]) -> None:
        with open(file_path, "w", newline="", encoding=self.encoding) as f:
            writer = csv.writer(f, delimiter=self.delimiter, lineterminator="\r\n")
            writer.writerow(columns)
            for row in data:
                writer.writerow([row.get(column, "") for column in columns])

        logger.debug(f"{file_path.name}: {len(data)} строк, {len(columns)} колонок")
