"""
Excel экспортер для просмотра таблиц импорта.

Создаёт книгу с листом на каждую схему:
- Заголовки со стилями
- Автофильтр и закреплённая строка заголовка
- Автоподбор ширины колонок
- Подсветка пустых обязательных колонок (помечены "*")

Импортируется CSV; книга нужна только для ревью перед импортом.

Пример использования:
    exporter = ExcelExporter(output_folder="reports")
    exporter.export_workbook(
        {"networks": (NetworkRecord.headers(), rows)},
        "dhcp01_review",
    )
"""

import logging
from pathlib import Path
from typing import List, Dict, Any, Optional, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from .base import BaseExporter

logger = logging.getLogger(__name__)

COLORS = {
    "header_bg": "4472C4",   # Синий фон заголовка
    "header_font": "FFFFFF",  # Белый текст заголовка
    "missing": "FFC7CE",     # Красный (пустое обязательное поле)
}

MAX_COLUMN_WIDTH = 60

Sheet = Tuple[List[str], List[Dict[str, Any]]]


class ExcelExporter(BaseExporter):
    """
    Экспортер таблиц в Excel с форматированием.

    Attributes:
        autofilter: Включить автофильтр
        freeze_header: Закрепить строку заголовка
        auto_width: Автоподбор ширины колонок
    """

    file_extension = ".xlsx"

    def __init__(
        self,
        output_folder: str = "reports",
        autofilter: bool = True,
        freeze_header: bool = True,
        auto_width: bool = True,
    ):
        super().__init__(output_folder)
        self.autofilter = autofilter
        self.freeze_header = freeze_header
        self.auto_width = auto_width

    def export_workbook(self, sheets: Dict[str, Sheet], filename: str) -> Optional[Path]:
        """
        Сохраняет несколько таблиц в одну книгу.

        Args:
            sheets: {имя листа: (колонки, строки)}
            filename: Имя файла

        Returns:
            Path или None если все таблицы пусты
        """
        if not any(rows for _, rows in sheets.values()):
            logger.warning(f"Нет данных для экспорта: {filename}")
            return None

        file_path = self._target_path(filename)

        def write() -> None:
            wb = Workbook()
            wb.remove(wb.active)
            for title, (columns, rows) in sheets.items():
                self._fill_sheet(wb.create_sheet(title=title[:31]), columns, rows)
            wb.save(file_path)

        self._write_safely(write, file_path)
        logger.info(f"Книга для ревью сохранена: {file_path}")
        return file_path

    def _write(self, data: List[Dict[str, Any]], file_path: Path, columns: List[str]) -> None:
        wb = Workbook()
        self._fill_sheet(wb.active, columns, data)
        wb.save(file_path)

    def _fill_sheet(self, ws, columns: List[str], rows: List[Dict[str, Any]]) -> None:
        """Заполняет лист: заголовок, данные, стили."""
        header_font = Font(bold=True, color=COLORS["header_font"])
        header_fill = PatternFill("solid", fgColor=COLORS["header_bg"])
        missing_fill = PatternFill("solid", fgColor=COLORS["missing"])
        thin = Side(style="thin", color="D9D9D9")
        border = Border(left=thin, right=thin, top=thin, bottom=thin)

        for col_idx, column in enumerate(columns, start=1):
            cell = ws.cell(row=1, column=col_idx, value=column)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border

        required = {column for column in columns if column.endswith("*")}
        for row_idx, row in enumerate(rows, start=2):
            for col_idx, column in enumerate(columns, start=1):
                value = row.get(column, "")
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                cell.border = border
                if column in required and value in ("", None):
                    cell.fill = missing_fill

        if self.freeze_header:
            ws.freeze_panes = "A2"
        if self.autofilter and columns:
            ws.auto_filter.ref = f"A1:{get_column_letter(len(columns))}{len(rows) + 1}"
        if self.auto_width:
            self._auto_width(ws, columns, rows)

    @staticmethod
    def _auto_width(ws, columns: List[str], rows: List[Dict[str, Any]]) -> None:
        for col_idx, column in enumerate(columns, start=1):
            width = max(
                [len(str(column))] + [len(str(row.get(column, ""))) for row in rows]
            )
            ws.column_dimensions[get_column_letter(col_idx)].width = min(
                width + 2, MAX_COLUMN_WIDTH
            )
