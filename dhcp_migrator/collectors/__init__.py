"""
Получение конфигурации DHCP.

Источники:
- PowerShellSource: живой сервер через модуль DhcpServer
- ArchiveSource: ранее сохранённый JSON архив

DhcpCollector строит модель DhcpServer из любого источника.

Пример использования:
    from dhcp_migrator.collectors import DhcpCollector, PowerShellSource

    collector = DhcpCollector(PowerShellSource(timeout=60))
    collector.check_reachable(["dhcp01"])
    result = collector.collect_server("dhcp01")
"""

from .base import DhcpSource
from .powershell import PowerShellSource
from .archive import ArchiveSource
from .dhcp import DhcpCollector, CollectResult, RetrievalWarning

__all__ = [
    "DhcpSource",
    "PowerShellSource",
    "ArchiveSource",
    "DhcpCollector",
    "CollectResult",
    "RetrievalWarning",
]
