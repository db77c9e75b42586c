"""
Записи выходных таблиц импорта.

Три фиксированные схемы: сети, диапазоны, фиксированные адреса.
Каждая запись: dataclass, где все необязательные поля явно Optional
(None = "нет значения, целевая система берёт своё по умолчанию").

Первая колонка каждой таблицы: маркер типа записи в формате
CSV-импорта целевой системы: заголовок "header-network", значение "network".
Обязательные колонки помечены звёздочкой в заголовке ("address*").

Использование:
    record = NetworkRecord(address="10.0.0.0", netmask="255.255.255.0")
    NetworkRecord.headers()  # ["header-network", "address*", ...]
    record.to_row()          # {"header-network": "network", "address*": "10.0.0.0", ...}
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, List, Optional, Tuple


def render_cell(value: Any) -> str:
    """
    Рендерит значение в ячейку таблицы.

    None → "", bool → "true"/"false", остальное → str().
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ImportRecord:
    """
    Базовый класс записи импорта.

    Наследники задают RECORD_TYPE и COLUMNS: порядок колонок
    и соответствие {атрибут: заголовок}.
    """

    RECORD_TYPE: ClassVar[str] = ""
    COLUMNS: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    @classmethod
    def marker_header(cls) -> str:
        return f"header-{cls.RECORD_TYPE}"

    @classmethod
    def headers(cls) -> List[str]:
        """Полный набор заголовков в фиксированном порядке."""
        return [cls.marker_header()] + [header for _, header in cls.COLUMNS]

    def to_dict(self) -> Dict[str, Any]:
        """Значения полей как есть (для JSON/Excel)."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_row(self) -> Dict[str, str]:
        """Строка таблицы: все колонки схемы, значения отрендерены."""
        row = {self.marker_header(): self.RECORD_TYPE}
        for attr, header in self.COLUMNS:
            row[header] = render_cell(getattr(self, attr))
        return row


@dataclass
class NetworkRecord(ImportRecord):
    """Запись сети (одна на scope)."""

    RECORD_TYPE: ClassVar[str] = "network"
    COLUMNS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("address", "address*"),
        ("netmask", "netmask*"),
        ("comment", "comment"),
        ("lease_time", "lease_time"),
        ("dhcp_members", "dhcp_members"),
        ("site", "EA-Site"),
        ("vlan", "EA-VLAN"),
        ("domain_name_servers", "domain_name_servers"),
        ("routers", "routers"),
        ("option_43", "OPTION-43"),
        ("boot_server", "boot_server"),
        ("boot_file", "boot_file"),
        ("ddns_domainname", "ddns_domainname"),
        ("domain_name", "domain_name"),
        ("always_update_dns", "always_update_dns"),
        ("enable_ddns", "enable_ddns"),
        ("enable_option81", "enable_option81"),
        ("update_static_leases", "update_static_leases"),
        ("update_dns_on_lease_renewal", "update_dns_on_lease_renewal"),
    )

    address: str
    netmask: str
    comment: Optional[str] = None
    lease_time: Optional[int] = None
    dhcp_members: Optional[str] = None
    site: Optional[str] = None
    vlan: Optional[int] = None
    domain_name_servers: Optional[str] = None
    routers: Optional[str] = None
    option_43: Optional[str] = None
    boot_server: Optional[str] = None
    boot_file: Optional[str] = None
    ddns_domainname: Optional[str] = None
    domain_name: Optional[str] = None
    always_update_dns: Optional[bool] = None
    enable_ddns: Optional[bool] = None
    enable_option81: Optional[bool] = None
    update_static_leases: Optional[bool] = None
    update_dns_on_lease_renewal: Optional[bool] = None


@dataclass
class RangeRecord(ImportRecord):
    """Запись диапазона (одна на scope)."""

    RECORD_TYPE: ClassVar[str] = "dhcprange"
    COLUMNS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("start_address", "start_address*"),
        ("end_address", "end_address*"),
        ("exclusion_ranges", "exclusion_ranges"),
        ("failover_association", "failover_association"),
        ("server_association_type", "server_association_type"),
    )

    start_address: str
    end_address: str
    exclusion_ranges: Optional[str] = None
    failover_association: Optional[str] = None
    server_association_type: str = "FAILOVER"


@dataclass
class FixedAddressRecord(ImportRecord):
    """Запись фиксированного адреса (одна на резервирование)."""

    RECORD_TYPE: ClassVar[str] = "fixedaddress"
    COLUMNS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("ip_address", "ip_address*"),
        ("mac_address", "mac_address*"),
        ("name", "name"),
        ("comment", "comment"),
        ("domain_name_servers", "domain_name_servers"),
        ("routers", "routers"),
        ("match_option", "match_option"),
    )

    ip_address: str
    mac_address: str
    name: Optional[str] = None
    comment: Optional[str] = None
    domain_name_servers: Optional[str] = None
    routers: Optional[str] = None
    match_option: str = "MAC_ADDRESS"
