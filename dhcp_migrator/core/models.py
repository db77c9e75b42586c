"""
Data Models для DHCP Migrator.

Типизированные dataclasses для иерархии конфигурации DHCP сервера:

    DhcpServer
    ├── options: {option_id: DhcpOption}
    └── scopes: [Scope]
        ├── range: AddressRange (+ exclusions: [ExclusionRange])
        ├── options: {option_id: DhcpOption}
        ├── dns_settings: DnsSettings
        └── reservations: [Reservation]
            └── options: {option_id: DhcpOption}

Модель строится один раз коллектором и дальше только читается.

Использование:
    from dhcp_migrator.core.models import DhcpServer

    server = DhcpServer.from_dict(archive_data)
    for scope in server.scopes:
        print(scope.scope_id, scope.name)

    data = server.to_dict()  # без потерь, для архива
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Any, Dict, Union, Iterable

logger = logging.getLogger(__name__)

OptionValue = Union[str, int, List[Any], None]


class ScopeState(str, Enum):
    """Состояние scope."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class DynamicUpdateMode(str, Enum):
    """Режим динамического обновления DNS."""
    DISABLED = "Disabled"
    ALWAYS = "Always"
    ON_CLIENT_REQUEST = "OnClientRequest"

    @classmethod
    def parse(cls, value: Any) -> "DynamicUpdateMode":
        """
        Разбирает режим из строки.

        Неизвестные и пустые значения (в т.ч. "Never" из PowerShell)
        считаются DISABLED.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for mode in cls:
            if mode.value.lower() == text:
                return mode
        return cls.DISABLED


def _to_int(value: Any) -> Optional[int]:
    """Приводит значение к int, None если не получилось."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class DhcpOption:
    """
    Значение DHCP опции.

    Attributes:
        option_id: Номер опции (3 = routers, 6 = DNS, 15 = domain...)
        name: Отображаемое имя
        option_type: Тип значения (IPv4Address, String, BinaryData...)
        value: Скаляр или список скаляров
    """
    option_id: int
    name: str = ""
    option_type: str = ""
    value: OptionValue = None

    @property
    def values(self) -> List[Any]:
        """Значение всегда в виде списка."""
        if self.value is None:
            return []
        if isinstance(self.value, (list, tuple)):
            return list(self.value)
        return [self.value]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["DhcpOption"]:
        """Создаёт DhcpOption из словаря. None если номер опции невалидный."""
        option_id = _to_int(data.get("option_id"))
        if option_id is None:
            logger.debug(f"Пропущена опция с невалидным номером: {data.get('option_id')!r}")
            return None
        value = data.get("value")
        if isinstance(value, tuple):
            value = list(value)
        return cls(
            option_id=option_id,
            name=data.get("name") or "",
            option_type=data.get("option_type") or "",
            value=value,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь."""
        return {
            "option_id": self.option_id,
            "name": self.name,
            "option_type": self.option_type,
            "value": self.value,
        }


def options_from_list(items: Optional[Iterable[Dict[str, Any]]]) -> Dict[int, DhcpOption]:
    """
    Строит словарь опций {option_id: DhcpOption}.

    Записи с невалидным номером пропускаются, при повторе номера
    остаётся последняя.
    """
    options: Dict[int, DhcpOption] = {}
    for item in items or []:
        option = DhcpOption.from_dict(item)
        if option is not None:
            options[option.option_id] = option
    return options


def options_to_list(options: Dict[int, DhcpOption]) -> List[Dict[str, Any]]:
    """Сериализует словарь опций в список, отсортированный по номеру."""
    return [options[key].to_dict() for key in sorted(options)]


@dataclass
class ExclusionRange:
    """Диапазон исключений внутри scope (start <= end)."""
    start: str
    end: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExclusionRange":
        return cls(start=data.get("start") or "", end=data.get("end") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end}


@dataclass
class AddressRange:
    """Диапазон адресов scope с исключениями."""
    start: str = ""
    end: str = ""
    exclusions: List[ExclusionRange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AddressRange":
        data = data or {}
        return cls(
            start=data.get("start") or "",
            end=data.get("end") or "",
            exclusions=[ExclusionRange.from_dict(e) for e in data.get("exclusions") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "exclusions": [e.to_dict() for e in self.exclusions],
        }


@dataclass
class DnsSettings:
    """
    Настройки динамического обновления DNS для scope.

    Attributes:
        dynamic_updates: Режим обновления
        delete_dns_on_expiry: Удалять записи DNS при истечении аренды
    """
    dynamic_updates: DynamicUpdateMode = DynamicUpdateMode.DISABLED
    delete_dns_on_expiry: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["DnsSettings"]:
        """Создаёт DnsSettings из словаря. None если настроек нет."""
        if data is None:
            return None
        return cls(
            dynamic_updates=DynamicUpdateMode.parse(data.get("dynamic_updates")),
            delete_dns_on_expiry=bool(data.get("delete_dns_on_expiry")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dynamic_updates": self.dynamic_updates.value,
            "delete_dns_on_expiry": self.delete_dns_on_expiry,
        }


@dataclass
class Reservation:
    """
    Резервирование адреса за MAC.

    Attributes:
        ip_address: Зарезервированный адрес
        client_id: MAC в формате 00-11-22-33-44-55
        name: Имя
        description: Описание
        address_state: Состояние адреса/аренды
        options: Опции уровня резервирования
    """
    ip_address: str
    client_id: str = ""
    name: str = ""
    description: str = ""
    address_state: str = ""
    options: Dict[int, DhcpOption] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reservation":
        return cls(
            ip_address=data.get("ip_address") or "",
            client_id=data.get("client_id") or "",
            name=data.get("name") or "",
            description=data.get("description") or "",
            address_state=data.get("address_state") or "",
            options=options_from_list(data.get("options")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ip_address": self.ip_address,
            "client_id": self.client_id,
            "name": self.name,
            "description": self.description,
            "address_state": self.address_state,
            "options": options_to_list(self.options),
        }


@dataclass
class Scope:
    """
    DHCP scope.

    Attributes:
        scope_id: Адрес сети (10.1.0.0)
        subnet_mask: Маска (255.255.255.0)
        name: Отображаемое имя
        description: Описание
        state: Состояние (Active/Inactive)
        lease_duration: Длительность аренды в секундах
        range: Диапазон адресов с исключениями
        options: Опции уровня scope
        dns_settings: Настройки DNS (None если не получены)
        reservations: Резервирования
    """
    scope_id: str
    subnet_mask: str = ""
    name: str = ""
    description: str = ""
    state: str = ScopeState.ACTIVE.value
    lease_duration: Optional[int] = None
    range: AddressRange = field(default_factory=AddressRange)
    options: Dict[int, DhcpOption] = field(default_factory=dict)
    dns_settings: Optional[DnsSettings] = None
    reservations: List[Reservation] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return str(self.state).lower() == ScopeState.ACTIVE.value.lower()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scope":
        return cls(
            scope_id=data.get("scope_id") or "",
            subnet_mask=data.get("subnet_mask") or "",
            name=data.get("name") or "",
            description=data.get("description") or "",
            state=data.get("state") or ScopeState.ACTIVE.value,
            lease_duration=_to_int(data.get("lease_duration")),
            range=AddressRange.from_dict(data.get("range")),
            options=options_from_list(data.get("options")),
            dns_settings=DnsSettings.from_dict(data.get("dns_settings")),
            reservations=[Reservation.from_dict(r) for r in data.get("reservations") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scope_id": self.scope_id,
            "subnet_mask": self.subnet_mask,
            "name": self.name,
            "description": self.description,
            "state": self.state,
            "lease_duration": self.lease_duration,
            "range": self.range.to_dict(),
            "options": options_to_list(self.options),
            "dns_settings": self.dns_settings.to_dict() if self.dns_settings else None,
            "reservations": [r.to_dict() for r in self.reservations],
        }


@dataclass
class DhcpServer:
    """
    DHCP сервер со всей иерархией конфигурации.

    Attributes:
        name: Имя или адрес сервера
        options: Опции уровня сервера
        scopes: Scopes сервера
    """
    name: str
    options: Dict[int, DhcpOption] = field(default_factory=dict)
    scopes: List[Scope] = field(default_factory=list)

    @property
    def reservation_count(self) -> int:
        return sum(len(s.reservations) for s in self.scopes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DhcpServer":
        return cls(
            name=data.get("server") or data.get("name") or "",
            options=options_from_list(data.get("options")),
            scopes=[Scope.from_dict(s) for s in data.get("scopes") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует всю иерархию в словарь без потерь."""
        return {
            "server": self.name,
            "options": options_to_list(self.options),
            "scopes": [s.to_dict() for s in self.scopes],
        }
