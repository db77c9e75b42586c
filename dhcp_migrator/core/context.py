"""
Контекст запуска export/convert.

RunContext создаётся в CLI: задаёт run_id (попадает в логи), папку
файлов запуска и накапливает итоги по серверам для summary.json.

Пример использования:
    ctx = RunContext.create(command="export", base_output_dir=Path("reports"))
    set_current_context(ctx)
    ctx.record_server("dhcp01", {"networks": 12, "warnings": []})
    ctx.save_summary()  # reports/run_2025-03-14T12-30-22/summary.json
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

SUMMARY_FILE = "summary.json"


@dataclass
class RunContext:
    """
    Контекст одного запуска.

    Attributes:
        run_id: Идентификатор запуска (timestamp)
        started_at: Время начала
        command: Команда CLI (export, convert)
        output_dir: Папка для файлов запуска
        servers: Итоги по серверам {server: статистика или {"error": ...}}
    """

    run_id: str
    started_at: datetime
    command: str = ""
    output_dir: Optional[Path] = None
    servers: Dict[str, dict] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        command: str = "",
        base_output_dir: Optional[Path] = None,
        per_run_folder: bool = True,
    ) -> "RunContext":
        """
        Args:
            command: Команда CLI
            base_output_dir: Базовая папка (default: reports/)
            per_run_folder: Подпапка run_<run_id> на каждый запуск
        """
        started_at = datetime.now()
        run_id = started_at.strftime("%Y-%m-%dT%H-%M-%S")
        base = Path(base_output_dir) if base_output_dir is not None else Path("reports")

        ctx = cls(
            run_id=run_id,
            started_at=started_at,
            command=command,
            output_dir=base / f"run_{run_id}" if per_run_folder else base,
        )
        logger.debug(f"RunContext {ctx.run_id}: {ctx.output_dir}")
        return ctx

    def ensure_output_dir(self) -> Path:
        """Создаёт папку запуска если её нет."""
        if self.output_dir is None:
            raise ValueError("output_dir not set")
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def record_server(self, server: str, stats: dict) -> None:
        self.servers[server] = stats

    @property
    def failed_servers(self):
        """Серверы, для которых не удалось записать файлы."""
        return [name for name, stats in self.servers.items() if "error" in stats]

    @property
    def elapsed_seconds(self) -> float:
        return (datetime.now() - self.started_at).total_seconds()

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "command": self.command,
            "started_at": self.started_at.isoformat(),
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "output_dir": str(self.output_dir) if self.output_dir else None,
            "servers": self.servers,
            "failed_servers": self.failed_servers,
        }

    def save_summary(self) -> Path:
        """
        Пишет summary.json в папку запуска.

        Returns:
            Path: Путь к summary.json
        """
        summary = self.to_dict()
        summary["completed_at"] = datetime.now().isoformat()

        summary_path = self.ensure_output_dir() / SUMMARY_FILE
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)

        logger.info(f"Summary saved: {summary_path}")
        return summary_path

    def __str__(self) -> str:
        return f"RunContext({self.run_id}, {self.command})"


# Текущий запуск: для run_id в логах без явного прокидывания контекста
_current_context: Optional[RunContext] = None


def get_current_context() -> Optional[RunContext]:
    return _current_context


def set_current_context(ctx: Optional[RunContext]) -> None:
    global _current_context
    _current_context = ctx
