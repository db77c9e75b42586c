"""
Типизированные исключения для DHCP Migrator.

Иерархия:
    DhcpMigratorError (базовый)
    ├── CollectorError (получение данных с DHCP сервера)
    │   ├── ConnectionError (сервер недоступен, прерывает запуск)
    │   ├── CommandError (ошибка выполнения cmdlet)
    │   ├── ParseError (вывод cmdlet не разобран)
    │   └── TimeoutError (таймаут cmdlet)
    ├── ExportError (запись файлов)
    └── ConfigError (конфигурация)

Пример использования:
    from dhcp_migrator.core.exceptions import ConnectionError, CollectorError

    try:
        collector.check_reachable(servers)
    except ConnectionError as e:
        logger.error(f"Сервер недоступен: {e.server}")
"""

from typing import Optional, Any


class DhcpMigratorError(Exception):
    """
    Базовое исключение для всех ошибок DHCP Migrator.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# === Collector Errors ===

class CollectorError(DhcpMigratorError):
    """
    Ошибка при получении данных с DHCP сервера.

    Attributes:
        server: Имя или адрес DHCP сервера
        message: Описание ошибки
    """

    def __init__(
        self,
        message: str,
        server: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.server = server
        details = details or {}
        if server:
            details["server"] = server
        super().__init__(message, details)


class ConnectionError(CollectorError):
    """
    DHCP сервер недоступен.

    Единственная ошибка, прерывающая весь запуск.

    Пример:
        raise ConnectionError("Host unreachable", server="dhcp01")
    """
    pass


class CommandError(CollectorError):
    """
    Ошибка выполнения cmdlet на DHCP сервере.

    Attributes:
        command: Команда которая вызвала ошибку
        output: Вывод (stderr) команды

    Пример:
        raise CommandError("Exit code 1", server="dhcp01", command="Get-DhcpServerv4Scope")
    """

    def __init__(
        self,
        message: str,
        server: Optional[str] = None,
        command: Optional[str] = None,
        output: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.command = command
        self.output = output
        details = details or {}
        if command:
            details["command"] = command
        if output:
            details["output"] = output[:200]  # Ограничиваем размер
        super().__init__(message, server, details)


class ParseError(CollectorError):
    """
    Вывод cmdlet не удалось разобрать (невалидный JSON).

    Пример:
        raise ParseError("Expecting value", server="dhcp01", command="Get-DhcpServerv4Scope")
    """

    def __init__(
        self,
        message: str,
        server: Optional[str] = None,
        command: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.command = command
        details = details or {}
        if command:
            details["command"] = command
        super().__init__(message, server, details)


class TimeoutError(CollectorError):
    """
    Таймаут выполнения cmdlet.

    Attributes:
        timeout_seconds: Значение таймаута
    """

    def __init__(
        self,
        message: str,
        server: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.timeout_seconds = timeout_seconds
        details = details or {}
        if timeout_seconds:
            details["timeout_seconds"] = timeout_seconds
        super().__init__(message, server, details)


# === Export Errors ===

class ExportError(DhcpMigratorError):
    """
    Ошибка записи выходного файла.

    Attributes:
        file_path: Путь к файлу
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.file_path = file_path
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, details)


# === Config Errors ===

class ConfigError(DhcpMigratorError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Missing servers", config_file="config.yaml", key="source.servers")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


# === Utility Functions ===

def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, DhcpMigratorError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"


def is_fatal(error: Exception) -> bool:
    """
    Проверяет, должна ли ошибка прервать весь запуск.

    Args:
        error: Исключение

    Returns:
        bool: True для недоступности сервера и ошибок конфигурации
    """
    return isinstance(error, (ConnectionError, ConfigError))
