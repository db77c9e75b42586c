"""
Источник данных из архивного JSON дампа.

Позволяет повторить преобразование без обращения к DHCP серверу:
архив, сохранённый ArchiveExporter, читается обратно и отвечает
на те же вызовы, что и PowerShellSource.

Пример использования:
    source = ArchiveSource("reports/run_x/dhcp01_dhcp.json")
    source.servers        # ["dhcp01"]
    source.get_scopes("dhcp01")
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.exceptions import CollectorError, ConfigError, ParseError
from .base import DhcpSource

logger = logging.getLogger(__name__)

ARCHIVE_GLOB = "*_dhcp.json"


class ArchiveSource(DhcpSource):
    """
    Источник из файла архива или папки с архивами (*_dhcp.json).

    Attributes:
        path: Путь к файлу или папке
    """

    name = "archive"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._servers: Dict[str, Dict[str, Any]] = {}
        self._load()

    def _load(self) -> None:
        if self.path.is_dir():
            files = sorted(self.path.glob(ARCHIVE_GLOB))
        elif self.path.exists():
            files = [self.path]
        else:
            raise ConfigError("Архив не найден", config_file=str(self.path))

        for file_path in files:
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    content = json.load(f)
            except json.JSONDecodeError as e:
                raise ParseError(f"Невалидный архив {file_path}: {e}") from e
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(f"Архив не читается: {e}", config_file=str(file_path)) from e

            server = content.get("server") if isinstance(content, dict) else None
            if not isinstance(server, dict) or not server.get("server"):
                raise ParseError(f"В архиве {file_path} нет данных сервера")
            self._servers[server["server"]] = server
            logger.debug(f"Архив загружен: {file_path} ({server['server']})")

    @property
    def servers(self) -> List[str]:
        """Серверы, найденные в архиве."""
        return list(self._servers)

    def _server(self, server: str) -> Dict[str, Any]:
        if server not in self._servers:
            raise CollectorError("Сервер отсутствует в архиве", server=server)
        return self._servers[server]

    def _scope(self, server: str, scope_id: str) -> Dict[str, Any]:
        for scope in self._server(server).get("scopes") or []:
            if scope.get("scope_id") == scope_id:
                return scope
        raise CollectorError(f"Scope {scope_id} отсутствует в архиве", server=server)

    def is_reachable(self, server: str) -> bool:
        return server in self._servers

    def get_server_options(self, server: str) -> List[Dict[str, Any]]:
        return list(self._server(server).get("options") or [])

    def get_scopes(self, server: str) -> List[Dict[str, Any]]:
        scopes = []
        for scope in self._server(server).get("scopes") or []:
            address_range = scope.get("range") or {}
            scopes.append({
                "scope_id": scope.get("scope_id") or "",
                "subnet_mask": scope.get("subnet_mask") or "",
                "name": scope.get("name") or "",
                "description": scope.get("description") or "",
                "state": scope.get("state") or "",
                "lease_duration": scope.get("lease_duration"),
                "start": address_range.get("start") or "",
                "end": address_range.get("end") or "",
            })
        return scopes

    def get_exclusions(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        address_range = self._scope(server, scope_id).get("range") or {}
        return list(address_range.get("exclusions") or [])

    def get_reservations(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        return [
            {k: v for k, v in reservation.items() if k != "options"}
            for reservation in self._scope(server, scope_id).get("reservations") or []
        ]

    def get_scope_options(self, server: str, scope_id: str) -> List[Dict[str, Any]]:
        return list(self._scope(server, scope_id).get("options") or [])

    def get_reservation_options(
        self, server: str, scope_id: str, ip_address: str
    ) -> List[Dict[str, Any]]:
        for reservation in self._scope(server, scope_id).get("reservations") or []:
            if reservation.get("ip_address") == ip_address:
                return list(reservation.get("options") or [])
        return []

    def get_dns_settings(self, server: str, scope_id: str) -> Optional[Dict[str, Any]]:
        return self._scope(server, scope_id).get("dns_settings")
