"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- sample_server: модель DHCP сервера с типичными случаями
- FakeSource: источник данных в памяти с управляемыми ошибками
"""

import logging
from typing import Any, Dict, List, Optional

import pytest

from dhcp_migrator.collectors.base import DhcpSource
from dhcp_migrator.core.context import set_current_context
from dhcp_migrator.core.exceptions import CommandError
from dhcp_migrator.core.models import (
    AddressRange,
    DhcpOption,
    DhcpServer,
    DnsSettings,
    DynamicUpdateMode,
    ExclusionRange,
    Reservation,
    Scope,
)


def make_option(option_id: int, value: Any, name: str = "") -> DhcpOption:
    return DhcpOption(option_id=option_id, name=name, option_type="String", value=value)


def options(*items: DhcpOption) -> Dict[int, DhcpOption]:
    return {item.option_id: item for item in items}


@pytest.fixture(autouse=True)
def reset_logging_context():
    """Глобальный контекст и handlers не протекают между тестами."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    set_current_context(None)
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def sample_server() -> DhcpServer:
    """
    Сервер с двумя scope.

    10.1.0.0: свои опции 3/6, режим DNS Always без опции 15,
    два исключения, резервирование со своими опциями.
    10.2.0.0: без своих опций, DNS не получены, неактивен.
    """
    office = Scope(
        scope_id="10.1.0.0",
        subnet_mask="255.255.255.0",
        name="Engineering VLAN 42",
        description="uses VLAN99 internally",
        state="Active",
        lease_duration=691200,
        range=AddressRange(
            start="10.1.0.10",
            end="10.1.0.250",
            exclusions=[
                ExclusionRange("10.1.0.10", "10.1.0.20"),
                ExclusionRange("10.1.0.30", "10.1.0.40"),
            ],
        ),
        options=options(
            make_option(3, ["10.1.0.1"]),
            make_option(6, ["10.1.0.5", "10.1.0.6"]),
        ),
        dns_settings=DnsSettings(DynamicUpdateMode.ALWAYS, delete_dns_on_expiry=True),
        reservations=[
            Reservation(
                ip_address="10.1.0.50",
                client_id="00-11-22-33-44-55",
                name="printer01",
                description="Lobby printer",
                address_state="Active",
                options=options(make_option(6, ["10.9.9.9"])),
            ),
            Reservation(
                ip_address="10.1.0.51",
                client_id="aa-bb-cc-dd-ee-ff",
            ),
        ],
    )
    lab = Scope(
        scope_id="10.2.0.0",
        subnet_mask="255.255.0.0",
        name="Lab",
        state="Inactive",
        lease_duration=3600,
        range=AddressRange(start="10.2.0.10", end="10.2.255.250"),
    )
    return DhcpServer(
        name="dhcp01",
        options=options(
            make_option(3, ["10.0.0.1"]),
            make_option(6, ["10.0.0.53", "10.0.0.54"]),
            make_option(15, ["corp.example.com"]),
            make_option(43, ["010400000000"]),
            make_option(66, ["pxe01", "pxe02"]),
            make_option(67, ["pxelinux.0"]),
        ),
        scopes=[office, lab],
    )


class FakeSource(DhcpSource):
    """
    Источник в памяти.

    failures: {(метод, scope_id или ip): исключение}, такой вызов бросит ошибку.
    """

    name = "fake"

    def __init__(self, server: DhcpServer, reachable: bool = True,
                 failures: Optional[Dict[tuple, Exception]] = None):
        self._model = server
        self.reachable = reachable
        self.failures = failures or {}
        self.calls: List[tuple] = []

    def _check(self, method: str, key: str = "") -> None:
        self.calls.append((method, key))
        if (method, key) in self.failures:
            raise self.failures[(method, key)]

    def _scope(self, scope_id: str) -> Scope:
        return next(s for s in self._model.scopes if s.scope_id == scope_id)

    def is_reachable(self, server: str) -> bool:
        self.calls.append(("is_reachable", server))
        return self.reachable

    def get_server_options(self, server: str) -> List[Dict[str, Any]]:
        self._check("server_options")
        return [o.to_dict() for o in self._model.options.values()]

    def get_scopes(self, server: str) -> List[Dict[str, Any]]:
        self._check("scopes")
        return [
            {
                "scope_id": s.scope_id,
                "subnet_mask": s.subnet_mask,
                "name": s.name,
                "description": s.description,
                "state": s.state,
                "lease_duration": s.lease_duration,
                "start": s.range.start,
                "end": s.range.end,
            }
            for s in self._model.scopes
        ]

    def get_exclusions(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        self._check("exclusions", scope_id)
        return [e.to_dict() for e in self._scope(scope_id).range.exclusions]

    def get_reservations(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        self._check("reservations", scope_id)
        result = []
        for r in self._scope(scope_id).reservations:
            data = r.to_dict()
            data.pop("options")
            result.append(data)
        return result

    def get_scope_options(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        self._check("scope_options", scope_id)
        return [o.to_dict() for o in self._scope(scope_id).options.values()]

    def get_reservation_options(self, server: str, scope_id: str,
                                ip_address: str) -> List[Dict[str, Any]]:
        self._check("reservation_options", ip_address)
        for r in self._scope(scope_id).reservations:
            if r.ip_address == ip_address:
                return [o.to_dict() for o in r.options.values()]
        return []

    def get_dns_settings(self, server: str, scope_id: str) -> Optional[Dict[str, Any]]:
        self._check("dns_settings", scope_id)
        settings = self._scope(scope_id).dns_settings
        return settings.to_dict() if settings else None


@pytest.fixture
def fake_source(sample_server):
    return FakeSource(sample_server)


@pytest.fixture
def command_error():
    return CommandError("Access denied", server="dhcp01", command="test")
