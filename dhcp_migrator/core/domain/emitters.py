"""
Сборка записей импорта из модели DHCP сервера.

Emitters не хранят состояния между scope: каждая запись строится
только из своего scope/резервирования, поэтому порядок обработки
не влияет на результат.

Использование:
    settings = ExportSettings(site="NYC", add_site_to_comment=True)
    batch = RecordBuilder(settings).build(server)
    batch.networks        # List[NetworkRecord]
    batch.ranges          # List[RangeRecord]
    batch.fixed_addresses # List[FixedAddressRecord]
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..constants import (
    OPTION_BOOT_FILE,
    OPTION_BOOT_SERVER,
    OPTION_DNS_SERVERS,
    OPTION_DOMAIN_NAME,
    OPTION_ROUTERS,
    OPTION_VENDOR_SPECIFIC,
)
from ..models import DhcpServer, Reservation, Scope
from ..records import FixedAddressRecord, NetworkRecord, RangeRecord
from .derivation import (
    classify_dns,
    format_exclusions,
    format_mac,
    normalize_comment,
    resolve_vlan,
)
from .options import OptionResolver, first_option_value

logger = logging.getLogger(__name__)


def _or_none(value: Optional[str]) -> Optional[str]:
    """Пустая строка → None."""
    return value if value else None


@dataclass
class ExportSettings:
    """
    Параметры экспорта.

    Attributes:
        site: Код сайта (EA-Site, префикс комментария)
        dhcp_members: Члены DHCP целевой системы (передаётся как есть)
        failover_association: Failover ассоциация (передаётся как есть)
        parse_vlan_from_name: Искать VLAN в имени scope
        parse_vlan_from_description: Искать VLAN в описании scope
        add_site_to_comment: Добавлять сайт в комментарий сети
        scopes: Экспортировать только эти scope (пусто = все)
        skip_inactive: Пропускать неактивные scope
    """
    site: Optional[str] = None
    dhcp_members: Optional[str] = None
    failover_association: Optional[str] = None
    parse_vlan_from_name: bool = False
    parse_vlan_from_description: bool = False
    add_site_to_comment: bool = False
    scopes: List[str] = field(default_factory=list)
    skip_inactive: bool = False

    def accepts(self, scope: Scope) -> bool:
        """Проходит ли scope фильтры экспорта."""
        if self.scopes and scope.scope_id not in self.scopes:
            return False
        if self.skip_inactive and not scope.is_active:
            return False
        return True


class NetworkEmitter:
    """
    Запись сети для scope.

    Опции 6, 43, 66, 67 наследуются scope → сервер.
    Опции 3 и 15 берутся только из scope; домен может быть
    унаследован с сервера по правилам динамического DNS.
    """

    def __init__(self, server: DhcpServer, settings: ExportSettings):
        self.server = server
        self.settings = settings
        self.resolver = OptionResolver(server)

    def emit(self, scope: Scope) -> NetworkRecord:
        settings = self.settings
        resolver = self.resolver

        record = NetworkRecord(
            address=scope.scope_id,
            netmask=scope.subnet_mask,
            comment=_or_none(
                normalize_comment(scope.name, settings.site, settings.add_site_to_comment)
            ),
            lease_time=scope.lease_duration,
            dhcp_members=_or_none(settings.dhcp_members),
            site=_or_none(settings.site),
            vlan=resolve_vlan(
                scope.name,
                scope.description,
                settings.parse_vlan_from_name,
                settings.parse_vlan_from_description,
            ),
            domain_name_servers=resolver.value(OPTION_DNS_SERVERS, scope=scope),
            routers=resolver.value(OPTION_ROUTERS, scope=scope, inherit=False),
            option_43=resolver.value(OPTION_VENDOR_SPECIFIC, scope=scope),
            boot_server=resolver.first(OPTION_BOOT_SERVER, scope=scope),
            boot_file=resolver.first(OPTION_BOOT_FILE, scope=scope),
        )

        local_domain = resolver.first(OPTION_DOMAIN_NAME, scope=scope, inherit=False)
        record.ddns_domainname = local_domain
        record.domain_name = local_domain

        dns = classify_dns(
            scope.dns_settings,
            scope_has_domain_option=OPTION_DOMAIN_NAME in scope.options,
            server_domain=first_option_value(self.server.options.get(OPTION_DOMAIN_NAME)),
        )
        if dns.inherits_domain:
            record.ddns_domainname = dns.ddns_domainname
            record.domain_name = dns.domain_name
        record.always_update_dns = dns.always_update_dns
        record.enable_ddns = dns.enable_ddns
        record.enable_option81 = dns.enable_option81
        record.update_static_leases = dns.update_static_leases
        record.update_dns_on_lease_renewal = dns.update_dns_on_lease_renewal

        logger.debug(f"{self.server.name}: сеть {scope.scope_id}/{scope.subnet_mask}")
        return record


class RangeEmitter:
    """Запись диапазона для scope."""

    def __init__(self, settings: ExportSettings):
        self.settings = settings

    def emit(self, scope: Scope) -> RangeRecord:
        return RangeRecord(
            start_address=scope.range.start,
            end_address=scope.range.end,
            exclusion_ranges=format_exclusions(scope.range.exclusions),
            failover_association=_or_none(self.settings.failover_association),
        )


class FixedAddressEmitter:
    """
    Запись фиксированного адреса для резервирования.

    Опции 3 и 6 берутся только с уровня резервирования,
    без наследования от scope и сервера.
    """

    def __init__(self, server: DhcpServer):
        self.resolver = OptionResolver(server)

    def emit(self, reservation: Reservation) -> FixedAddressRecord:
        resolver = self.resolver
        return FixedAddressRecord(
            ip_address=reservation.ip_address,
            mac_address=format_mac(reservation.client_id) or "",
            name=_or_none(reservation.name),
            comment=_or_none(reservation.description),
            domain_name_servers=resolver.value(
                OPTION_DNS_SERVERS, reservation=reservation, inherit=False
            ),
            routers=resolver.value(OPTION_ROUTERS, reservation=reservation, inherit=False),
        )


@dataclass
class RecordBatch:
    """Три независимые последовательности записей одного сервера."""
    server: str
    networks: List[NetworkRecord] = field(default_factory=list)
    ranges: List[RangeRecord] = field(default_factory=list)
    fixed_addresses: List[FixedAddressRecord] = field(default_factory=list)

    def stats(self) -> dict:
        return {
            "networks": len(self.networks),
            "ranges": len(self.ranges),
            "fixed_addresses": len(self.fixed_addresses),
        }


class RecordBuilder:
    """
    Строит все записи импорта для сервера.

    Все строки собираются целиком, файлы пишутся один раз после.
    """

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or ExportSettings()

    def build(self, server: DhcpServer) -> RecordBatch:
        """
        Args:
            server: Полностью заполненная модель сервера

        Returns:
            RecordBatch
        """
        networks = NetworkEmitter(server, self.settings)
        ranges = RangeEmitter(self.settings)
        fixed = FixedAddressEmitter(server)

        batch = RecordBatch(server=server.name)
        skipped = 0
        for scope in server.scopes:
            if not self.settings.accepts(scope):
                skipped += 1
                continue
            batch.networks.append(networks.emit(scope))
            batch.ranges.append(ranges.emit(scope))
            for reservation in scope.reservations:
                batch.fixed_addresses.append(fixed.emit(reservation))

        if skipped:
            logger.info(f"{server.name}: пропущено scope по фильтрам: {skipped}")
        logger.info(
            f"{server.name}: сетей {len(batch.networks)}, диапазонов {len(batch.ranges)}, "
            f"фиксированных адресов {len(batch.fixed_addresses)}"
        )
        return batch
