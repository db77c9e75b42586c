"""
Базовый класс экспортера данных.

Определяет интерфейс для всех экспортеров и общую логику:
папка вывода, имя файла, расширение, порядок колонок.

Пример создания кастомного экспортера:
    class XMLExporter(BaseExporter):
        file_extension = ".xml"

        def _write(self, data, file_path, columns):
            # Логика записи в XML
            pass
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Dict, Any, Optional

from ..core.exceptions import ExportError

logger = logging.getLogger(__name__)


class BaseExporter(ABC):
    """
    Абстрактный базовый класс для экспортеров.

    Attributes:
        output_folder: Папка для сохранения файлов
        encoding: Кодировка файлов
    """

    # Расширение файла (переопределяется в наследниках)
    file_extension: str = ".txt"

    def __init__(
        self,
        output_folder: str = "reports",
        encoding: str = "utf-8",
    ):
        self.output_folder = Path(output_folder)
        self.encoding = encoding

    def export(
        self,
        data: List[Dict[str, Any]],
        filename: str,
        columns: Optional[List[str]] = None,
    ) -> Optional[Path]:
        """
        Экспортирует данные в файл.

        Args:
            data: Список словарей (строк)
            filename: Имя файла (без пути, расширение добавится)
            columns: Колонки в фиксированном порядке. Если None,
                все колонки в порядке появления. При заданных колонках
                файл пишется и без строк (только заголовок)

        Returns:
            Path: Путь к созданному файлу или None если нет ни данных,
                ни колонок

        Raises:
            ExportError: Ошибка записи
        """
        if not data and not columns:
            logger.warning(f"Нет данных для экспорта: {filename}")
            return None
        if not data:
            logger.warning(f"Пустая таблица, записан только заголовок: {filename}")

        file_path = self._target_path(filename)
        if columns is None:
            columns = self._get_all_columns(data)

        self._write_safely(lambda: self._write(data, file_path, columns), file_path)
        logger.info(f"Данные экспортированы: {file_path} ({len(data)} строк)")
        return file_path

    @abstractmethod
    def _write(
        self,
        data: List[Dict[str, Any]],
        file_path: Path,
        columns: List[str],
    ) -> None:
        """
        Записывает данные в файл.

        Args:
            data: Данные для записи
            file_path: Путь к файлу
            columns: Колонки в порядке вывода
        """

    def _target_path(self, filename: str) -> Path:
        """Создаёт папку вывода и возвращает путь к файлу с расширением."""
        self._ensure_output_folder()
        if not filename.endswith(self.file_extension):
            filename += self.file_extension
        return self.output_folder / filename

    def _write_safely(self, write, file_path: Path) -> None:
        """Выполняет запись, оборачивая ошибки ввода-вывода в ExportError."""
        try:
            write()
        except (OSError, ValueError) as e:
            raise ExportError(f"Ошибка записи: {e}", file_path=str(file_path)) from e

    def _ensure_output_folder(self) -> None:
        """Создаёт папку для файлов если не существует."""
        if not self.output_folder.exists():
            self._write_safely(
                lambda: self.output_folder.mkdir(parents=True, exist_ok=True),
                self.output_folder,
            )
            logger.info(f"Создана папка: {self.output_folder}")

    def _get_all_columns(self, data: List[Dict[str, Any]]) -> List[str]:
        """
        Извлекает все уникальные колонки из данных.

        Сохраняет порядок появления колонок.
        """
        columns = []
        seen = set()
        for row in data:
            for key in row.keys():
                if key not in seen:
                    columns.append(key)
                    seen.add(key)
        return columns
