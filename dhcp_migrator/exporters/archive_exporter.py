"""
Архивный экспортер.

Сохраняет всю модель DHCP сервера в JSON без потерь: один файл на
сервер. Используется для аудита и отката, не для импорта.
Файл читается обратно через ArchiveSource.

Формат:
    {
      "metadata": {"format_version": 1, "generated_at": "...",
                   "scopes": 12, "reservations": 340},
      "server": {"server": "dhcp01", "options": [...], "scopes": [...]}
    }
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.models import DhcpServer
from .base import BaseExporter

logger = logging.getLogger(__name__)

ARCHIVE_FORMAT_VERSION = 1


class ArchiveExporter(BaseExporter):
    """
    Экспортер модели DHCP сервера в JSON архив.

    Attributes:
        indent: Отступ для форматирования (None = компактный)
        include_metadata: Добавить метаданные (дата, количество)
    """

    file_extension = ".json"

    def __init__(
        self,
        output_folder: str = "reports",
        encoding: str = "utf-8",
        indent: Optional[int] = 2,
        include_metadata: bool = True,
    ):
        super().__init__(output_folder, encoding)
        self.indent = indent
        self.include_metadata = include_metadata

    def export_server(self, server: DhcpServer, filename: str) -> Path:
        """
        Сохраняет модель сервера.

        Args:
            server: Модель DHCP сервера
            filename: Имя файла

        Returns:
            Path: Путь к архиву
        """
        file_path = self._target_path(filename)
        document: Dict[str, Any] = {}
        if self.include_metadata:
            document["metadata"] = {
                "format_version": ARCHIVE_FORMAT_VERSION,
                "generated_at": datetime.now().isoformat(),
                "scopes": len(server.scopes),
                "reservations": server.reservation_count,
            }
        document["server"] = server.to_dict()

        self._write_safely(lambda: self._dump(document, file_path), file_path)
        logger.info(f"Архив сохранён: {file_path}")
        return file_path

    def _dump(self, document: Dict[str, Any], file_path: Path) -> None:
        with open(file_path, "w", encoding=self.encoding) as f:
            json.dump(document, f, indent=self.indent, ensure_ascii=False)

    def _write(self, data: List[Dict[str, Any]], file_path: Path, columns: List[str]) -> None:
        # Архив хранит модель сервера, а не строки таблицы
        raise NotImplementedError("ArchiveExporter пишет только export_server()")
