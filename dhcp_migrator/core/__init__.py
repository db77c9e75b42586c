"""
Core модули DHCP Migrator.

- models: модель конфигурации DHCP сервера
- records: записи таблиц импорта
- domain: правила преобразования модели в записи
- config_schema: pydantic схема config.yaml
- context: RunContext для отслеживания запусков
- logging: Structured Logging (human/JSON)
- exceptions: типизированные исключения
- constants: номера опций, cmdlets, имена файлов
"""

from .context import RunContext, get_current_context, set_current_context
from .logging import (
    get_logger,
    setup_logging_from_config,
    StructuredLogger,
    JSONFormatter,
    HumanFormatter,
    LogConfig,
    RotationType,
)
from .exceptions import (
    DhcpMigratorError,
    CollectorError,
    ConnectionError,
    CommandError,
    ParseError,
    TimeoutError,
    ExportError,
    ConfigError,
    format_error_for_log,
    is_fatal,
)
from .models import (
    DhcpServer,
    Scope,
    Reservation,
    DhcpOption,
    AddressRange,
    ExclusionRange,
    DnsSettings,
    DynamicUpdateMode,
    ScopeState,
)
from .records import ImportRecord, NetworkRecord, RangeRecord, FixedAddressRecord

__all__ = [
    "RunContext",
    "get_current_context",
    "set_current_context",
    "get_logger",
    "setup_logging_from_config",
    "StructuredLogger",
    "JSONFormatter",
    "HumanFormatter",
    "LogConfig",
    "RotationType",
    "DhcpMigratorError",
    "CollectorError",
    "ConnectionError",
    "CommandError",
    "ParseError",
    "TimeoutError",
    "ExportError",
    "ConfigError",
    "format_error_for_log",
    "is_fatal",
    "DhcpServer",
    "Scope",
    "Reservation",
    "DhcpOption",
    "AddressRange",
    "ExclusionRange",
    "DnsSettings",
    "DynamicUpdateMode",
    "ScopeState",
    "ImportRecord",
    "NetworkRecord",
    "RangeRecord",
    "FixedAddressRecord",
]
