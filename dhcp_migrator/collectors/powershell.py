"""
Источник данных через PowerShell модуль DhcpServer.

Выполняет cmdlets Get-DhcpServerv4* через subprocess и разбирает
вывод ConvertTo-Json. Работает на хосте с установленными RSAT DHCP
инструментами и правами на чтение конфигурации сервера.

Пример использования:
    source = PowerShellSource(timeout=60)
    if source.is_reachable("dhcp01"):
        scopes = source.get_scopes("dhcp01")
"""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional

from ..core.constants import POWERSHELL_COMMANDS
from ..core.exceptions import CommandError, ParseError, TimeoutError
from .base import DhcpSource

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    """Экранирует значение для строки в одинарных кавычках PowerShell."""
    return str(value).replace("'", "''")


def _as_list(data: Any) -> List[Dict[str, Any]]:
    """ConvertTo-Json отдаёт объект вместо массива для одного элемента."""
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return [item for item in data if isinstance(item, dict)]


def _option(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "option_id": item.get("OptionId"),
        "name": item.get("Name") or "",
        "option_type": item.get("Type") or "",
        "value": item.get("Value"),
    }


class PowerShellSource(DhcpSource):
    """
    Источник данных DHCP через PowerShell.

    Attributes:
        executable: powershell.exe или pwsh
        timeout: Таймаут одного cmdlet в секундах
    """

    name = "powershell"

    def __init__(self, executable: str = "powershell.exe", timeout: int = 120):
        self.executable = executable
        self.timeout = timeout

    def _run(self, key: str, server: str, **params: str) -> str:
        """
        Выполняет cmdlet и возвращает stdout.

        Raises:
            CommandError: Ненулевой код возврата или нет PowerShell
            TimeoutError: Превышен таймаут
        """
        quoted = {k: _quote(v) for k, v in params.items()}
        script = POWERSHELL_COMMANDS[key].format(server=_quote(server), **quoted)
        logger.debug(f"{server}: {script}")

        try:
            result = subprocess.run(
                [self.executable, "-NoProfile", "-NonInteractive", "-Command", script],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise TimeoutError(
                f"Таймаут {key}", server=server, timeout_seconds=self.timeout
            )
        except OSError as e:
            raise CommandError(
                f"Не удалось запустить {self.executable}: {e}", server=server, command=key
            )

        if result.returncode != 0:
            raise CommandError(
                f"{key} завершился с кодом {result.returncode}",
                server=server,
                command=key,
                output=(result.stderr or "").strip(),
            )
        return result.stdout or ""

    def _run_json(self, key: str, server: str, **params: str) -> Any:
        """Выполняет cmdlet и разбирает JSON. Пустой вывод → None."""
        output = self._run(key, server, **params).strip()
        if not output:
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise ParseError(f"Невалидный JSON: {e}", server=server, command=key)

    def is_reachable(self, server: str) -> bool:
        try:
            output = self._run("ping", server)
        except (CommandError, TimeoutError) as e:
            logger.debug(f"{server}: проверка доступности не удалась: {e}")
            return False
        return output.strip().lower() == "true"

    def get_server_options(self, server: str) -> List[Dict[str, Any]]:
        return [_option(item) for item in _as_list(self._run_json("server_options", server))]

    def get_scopes(self, server: str) -> List[Dict[str, Any]]:
        scopes = []
        for item in _as_list(self._run_json("scopes", server)):
            scopes.append({
                "scope_id": item.get("ScopeId") or "",
                "subnet_mask": item.get("SubnetMask") or "",
                "name": item.get("Name") or "",
                "description": item.get("Description") or "",
                "state": item.get("State") or "",
                "lease_duration": item.get("LeaseDuration"),
                "start": item.get("StartRange") or "",
                "end": item.get("EndRange") or "",
            })
        return scopes

    def get_exclusions(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        return [
            {"start": item.get("StartRange") or "", "end": item.get("EndRange") or ""}
            for item in _as_list(self._run_json("exclusions", server, scope_id=scope_id))
        ]

    def get_reservations(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        return [
            {
                "ip_address": item.get("IPAddress") or "",
                "client_id": item.get("ClientId") or "",
                "name": item.get("Name") or "",
                "description": item.get("Description") or "",
                "address_state": item.get("AddressState") or "",
            }
            for item in _as_list(self._run_json("reservations", server, scope_id=scope_id))
        ]

    def get_scope_options(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        data = self._run_json("scope_options", server, scope_id=scope_id)
        return [_option(item) for item in _as_list(data)]

    def get_reservation_options(
        self, server: str, scope_id: str, ip_address: str
    ) -> List[Dict[str, Any]]:
        data = self._run_json("reservation_options", server, ip=ip_address)
        return [_option(item) for item in _as_list(data)]

    def get_dns_settings(self, server: str, scope_id: str) -> Optional[Dict[str, Any]]:
        items = _as_list(self._run_json("dns_settings", server, scope_id=scope_id))
        if not items:
            return None
        item = items[0]
        return {
            # PowerShell: Always / OnClientRequest / Never
            "dynamic_updates": item.get("DynamicUpdates"),
            "delete_dns_on_expiry": bool(item.get("DeleteDnsRROnLeaseExpiry")),
        }
