"""
Базовый класс источника данных DHCP.

Источник отвечает только за получение сырых данных: каждый метод
возвращает словари в формате модели (snake_case ключи) и бросает
CollectorError при ошибке. Сборка модели и обработка частичных
ошибок выполняет DhcpCollector.

Пример создания кастомного источника:
    class NetshSource(DhcpSource):
        def get_scopes(self, server):
            # Разбор "netsh dhcp server dump"
            return [{"scope_id": "10.0.0.0", ...}]
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DhcpSource(ABC):
    """
    Абстрактный источник конфигурации DHCP сервера.

    Формат словарей:
        option:      {"option_id", "name", "option_type", "value"}
        scope:       {"scope_id", "subnet_mask", "name", "description",
                      "state", "lease_duration", "start", "end"}
        exclusion:   {"start", "end"}
        reservation: {"ip_address", "client_id", "name", "description",
                      "address_state"}
        dns:         {"dynamic_updates", "delete_dns_on_expiry"}
    """

    name: str = "base"

    @abstractmethod
    def is_reachable(self, server: str) -> bool:
        """Доступен ли сервер."""

    @abstractmethod
    def get_server_options(self, server: str) -> List[Dict[str, Any]]:
        """Опции уровня сервера."""

    @abstractmethod
    def get_scopes(self, server: str) -> List[Dict[str, Any]]:
        """Список scope."""

    @abstractmethod
    def get_exclusions(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        """Диапазоны исключений scope."""

    @abstractmethod
    def get_reservations(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        """Резервирования scope."""

    @abstractmethod
    def get_scope_options(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        """Опции уровня scope."""

    @abstractmethod
    def get_reservation_options(
        self, server: str, scope_id: str, ip_address: str
    ) -> List[Dict[str, Any]]:
        """Опции уровня резервирования."""

    @abstractmethod
    def get_dns_settings(self, server: str, scope_id: str) -> Optional[Dict[str, Any]]:
        """Настройки динамического DNS scope."""
