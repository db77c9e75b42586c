"""
Structured Logging для DHCP Migrator.

Сообщения привязываются к месту в иерархии DHCP: сервер → scope →
резервирование. Консоль: human-readable, файл: JSON (или human)
с ротацией.

Пример использования:
    from dhcp_migrator.core.logging import get_logger

    logger = get_logger(__name__)
    logger.warning("Не получены резервирования", server="dhcp01", scope="10.1.0.0")

    scope_log = logger.bind(server="dhcp01", scope="10.1.0.0")
    scope_log.debug("Опции получены", operation="scope_options")

Формат консоли:
    2025-12-27 10:30:15 WARNING  [run_id] dhcp01/10.1.0.0: Не получены резервирования

Формат файла (JSON):
    {"timestamp": "2025-12-27T10:30:15.123456", "level": "WARNING",
     "logger": "dhcp_migrator.collectors.dhcp", "message": "Не получены резервирования",
     "run_id": "2025-12-27T10-30-00", "location": {"server": "dhcp01", "scope": "10.1.0.0"}}
"""

import json
import logging
import logging.handlers
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Tuple


class RotationType(str, Enum):
    """Тип ротации логов."""
    SIZE = "size"
    TIME = "time"
    NONE = "none"


# Уровни иерархии DHCP, от общего к частному
LOCATION_FIELDS = ("server", "scope", "reservation")

# Все поля, которые логгер принимает именованными аргументами
CONTEXT_FIELDS = LOCATION_FIELDS + ("operation", "run_id")


@dataclass
class LogConfig:
    """
    Конфигурация логирования.

    Attributes:
        level: Уровень логирования
        json_format: JSON формат для файла
        console: Выводить в консоль
        file_path: Путь к файлу логов (None = без файла)
        rotation: Тип ротации (size, time, none)
        max_bytes: Макс размер файла для size-ротации
        backup_count: Количество backup файлов
        when: Интервал для time-ротации (S, M, H, D, midnight)
        interval: Частота ротации для time
    """
    level: int = logging.INFO
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None
    rotation: RotationType = RotationType.SIZE
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    when: str = "midnight"
    interval: int = 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogConfig":
        """Создаёт конфигурацию из секции logging config.yaml."""
        try:
            rotation = RotationType(data.get("rotation") or "size")
        except ValueError:
            rotation = RotationType.SIZE

        level = data.get("level", "INFO")
        if isinstance(level, str):
            level = getattr(logging, level.upper(), logging.INFO)

        defaults = cls()
        return cls(
            level=level,
            json_format=bool(data.get("json_format", defaults.json_format)),
            console=bool(data.get("console", defaults.console)),
            file_path=data.get("file_path"),
            rotation=rotation,
            max_bytes=data.get("max_bytes", defaults.max_bytes),
            backup_count=data.get("backup_count", defaults.backup_count),
            when=data.get("when", defaults.when),
            interval=data.get("interval", defaults.interval),
        )


def _location(record: logging.LogRecord) -> Dict[str, str]:
    """Заполненные уровни иерархии из записи лога."""
    result = {}
    for attr in LOCATION_FIELDS:
        value = getattr(record, attr, None)
        if value:
            result[attr] = str(value)
    return result


class JSONFormatter(logging.Formatter):
    """
    JSON форматтер: одна строка на объект.

    Уровни иерархии собираются в "location", остальные extra поля
    добавляются на верхний уровень как есть.
    """

    # Атрибуты logging.LogRecord, не попадающие в JSON
    RESERVED_ATTRS = {
        "args", "asctime", "created", "exc_info", "exc_text",
        "filename", "funcName", "levelname", "levelno", "lineno",
        "module", "msecs", "message", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread",
        "threadName", "taskName",
    } | set(LOCATION_FIELDS)

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        location = _location(record)
        if location:
            log_data["location"] = location

        for key, value in record.__dict__.items():
            if key in self.RESERVED_ATTRS or key.startswith("_") or value is None:
                continue
            log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    """
    Форматтер для консоли.

    Формат: TIMESTAMP LEVEL [run_id] server/scope/reservation: MESSAGE (operation=X)
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        parts = [timestamp, record.levelname.ljust(8)]

        run_id = getattr(record, "run_id", None)
        if run_id:
            parts.append(f"[{run_id}]")

        location = "/".join(_location(record).values())
        message = record.getMessage()
        parts.append(f"{location}: {message}" if location else message)

        operation = getattr(record, "operation", None)
        if operation:
            parts.append(f"(operation={operation})")

        result = " ".join(parts)
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


class StructuredLogger(logging.LoggerAdapter):
    """
    Логгер с полями места в иерархии DHCP.

    Поля CONTEXT_FIELDS передаются именованными аргументами и попадают
    в extra записи; run_id подставляется из текущего RunContext.

    Example:
        logger.warning("Таймаут", server="dhcp01", scope="10.1.0.0")
        logger.bind(server="dhcp01").info("Собрано scope: 12")
    """

    def __init__(self, name: str, default_extra: Optional[Dict[str, Any]] = None):
        super().__init__(logging.getLogger(name), dict(default_extra or {}))

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra)
        for key in CONTEXT_FIELDS:
            if key in kwargs:
                extra[key] = kwargs.pop(key)
        extra.update(kwargs.pop("extra", None) or {})

        if "run_id" not in extra:
            from .context import get_current_context
            ctx = get_current_context()
            if ctx:
                extra["run_id"] = ctx.run_id

        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **fields: Any) -> "StructuredLogger":
        """Новый логгер с дополнительными полями по умолчанию."""
        return StructuredLogger(self.logger.name, {**self.extra, **fields})


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Получает или создаёт StructuredLogger (обычно get_logger(__name__))."""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def _create_file_handler(config: LogConfig) -> logging.Handler:
    """File handler с ротацией по LogConfig."""
    Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)

    if config.rotation == RotationType.SIZE:
        return logging.handlers.RotatingFileHandler(
            filename=config.file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    if config.rotation == RotationType.TIME:
        return logging.handlers.TimedRotatingFileHandler(
            filename=config.file_path,
            when=config.when,
            interval=config.interval,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    return logging.FileHandler(config.file_path, encoding="utf-8")


def setup_logging_from_config(config: LogConfig, stream: Any = None) -> None:
    """
    Настраивает root logger: заменяет существующие handlers.

    Args:
        config: LogConfig с настройками
        stream: Поток консоли (по умолчанию sys.stderr)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = []
    if config.console:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setFormatter(HumanFormatter())
        handlers.append(console_handler)

    if config.file_path:
        file_handler = _create_file_handler(config)
        file_handler.setFormatter(JSONFormatter() if config.json_format else HumanFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(config.level)
        root_logger.addHandler(handler)
    root_logger.setLevel(config.level)
