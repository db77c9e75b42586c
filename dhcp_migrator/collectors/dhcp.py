"""
Коллектор конфигурации DHCP сервера.

Строит модель DhcpServer сверху вниз:
сервер → scopes → исключения/резервирования/опции/DNS → опции резервирований.

Обработка ошибок:
- недоступность сервера: ConnectionError, проверяется до любого
  получения данных и прерывает запуск;
- ошибка любого отдельного вызова: предупреждение, коллекция
  считается пустой, сбор продолжается.

Пример использования:
    collector = DhcpCollector(PowerShellSource())
    collector.check_reachable(["dhcp01"])
    results = collector.collect(["dhcp01"])
    results[0].server.scopes
    results[0].warnings
"""

import ipaddress
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..core.exceptions import CollectorError, ConnectionError, format_error_for_log
from ..core.logging import get_logger
from ..core.models import DhcpServer, Scope, options_from_list
from .base import DhcpSource

logger = get_logger(__name__)


@dataclass
class RetrievalWarning:
    """Частичная ошибка получения данных."""
    server: str
    collection: str
    error: str
    scope: str = ""
    reservation: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {k: v for k, v in self.__dict__.items() if v}


@dataclass
class CollectResult:
    """Модель сервера и предупреждения, возникшие при сборе."""
    server: DhcpServer
    warnings: List[RetrievalWarning] = field(default_factory=list)


class DhcpCollector:
    """
    Сбор конфигурации DHCP с одного или нескольких серверов.

    Attributes:
        source: Источник данных (PowerShellSource, ArchiveSource)
        max_workers: Максимум параллельно обрабатываемых серверов
    """

    def __init__(self, source: DhcpSource, max_workers: int = 4):
        self.source = source
        self.max_workers = max_workers

    def check_reachable(self, servers: List[str]) -> None:
        """
        Проверяет доступность всех серверов до начала сбора.

        Raises:
            ConnectionError: Первый недоступный сервер
        """
        for server in servers:
            if not self.source.is_reachable(server):
                raise ConnectionError("Сервер недоступен", server=server)
            logger.debug("Сервер доступен", server=server)

    def collect(self, servers: List[str], parallel: bool = True) -> List[CollectResult]:
        """
        Собирает конфигурацию со списка серверов.

        Args:
            servers: Имена/адреса серверов
            parallel: Параллельный сбор (при нескольких серверах)

        Returns:
            List[CollectResult]: В порядке списка servers
        """
        if not parallel or len(servers) < 2:
            return [self.collect_server(server) for server in servers]

        results: Dict[str, CollectResult] = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self.collect_server, server): server
                for server in servers
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return [results[server] for server in servers]

    def collect_server(self, server: str) -> CollectResult:
        """
        Собирает конфигурацию одного сервера.

        Args:
            server: Имя/адрес сервера

        Returns:
            CollectResult
        """
        warnings: List[RetrievalWarning] = []

        def safe(collection: str, call: Callable[[], Any], default: Any,
                 scope: str = "", reservation: str = "") -> Any:
            try:
                return call()
            except CollectorError as e:
                warning = RetrievalWarning(
                    server=server,
                    collection=collection,
                    error=format_error_for_log(e),
                    scope=scope,
                    reservation=reservation,
                )
                warnings.append(warning)
                logger.warning(
                    f"Не удалось получить {collection}: {warning.error}",
                    server=server,
                    scope=scope or None,
                    reservation=reservation or None,
                )
                return default

        source = self.source
        server_options = safe("server_options", lambda: source.get_server_options(server), [])
        scopes = []
        for raw_scope in safe("scopes", lambda: source.get_scopes(server), []):
            scope_id = raw_scope.get("scope_id") or ""
            if not scope_id:
                logger.debug("Пропущен scope без ScopeId", server=server)
                continue

            exclusions = safe(
                "exclusions", lambda: source.get_exclusions(server, scope_id), [], scope=scope_id
            )
            scope_options = safe(
                "scope_options", lambda: source.get_scope_options(server, scope_id), [],
                scope=scope_id,
            )
            dns_settings = safe(
                "dns_settings", lambda: source.get_dns_settings(server, scope_id), None,
                scope=scope_id,
            )

            reservations = []
            raw_reservations = safe(
                "reservations", lambda: source.get_reservations(server, scope_id), [],
                scope=scope_id,
            )
            for raw_reservation in raw_reservations:
                ip = raw_reservation.get("ip_address") or ""
                options = safe(
                    "reservation_options",
                    lambda: source.get_reservation_options(server, scope_id, ip),
                    [],
                    scope=scope_id,
                    reservation=ip,
                )
                reservations.append({**raw_reservation, "options": options})

            scope = Scope.from_dict({
                **raw_scope,
                "range": {
                    "start": raw_scope.get("start"),
                    "end": raw_scope.get("end"),
                    "exclusions": exclusions,
                },
                "options": scope_options,
                "dns_settings": dns_settings,
                "reservations": reservations,
            })
            self._check_exclusions(server, scope)
            scopes.append(scope)

        model = DhcpServer(
            name=server,
            options=options_from_list(server_options),
            scopes=scopes,
        )
        logger.info(
            f"Собрано scope: {len(model.scopes)}, резервирований: {model.reservation_count}, "
            f"предупреждений: {len(warnings)}",
            server=server,
        )
        return CollectResult(server=model, warnings=warnings)

    @staticmethod
    def _check_exclusions(server: str, scope: Scope) -> None:
        """
        Проверяет, что исключения лежат внутри диапазона scope.

        Некорректные исключения отбрасываются с предупреждением.
        Нераспознанные адреса оставляются как есть.
        """
        try:
            start = ipaddress.IPv4Address(scope.range.start)
            end = ipaddress.IPv4Address(scope.range.end)
        except ValueError:
            return

        valid = []
        for exclusion in scope.range.exclusions:
            try:
                ex_start = ipaddress.IPv4Address(exclusion.start)
                ex_end = ipaddress.IPv4Address(exclusion.end)
            except ValueError:
                valid.append(exclusion)
                continue
            if start <= ex_start <= ex_end <= end:
                valid.append(exclusion)
            else:
                logger.warning(
                    f"Исключение {exclusion.start}-{exclusion.end} вне диапазона "
                    f"{scope.range.start}-{scope.range.end}, пропущено",
                    server=server,
                    scope=scope.scope_id,
                )
        scope.range.exclusions = valid
