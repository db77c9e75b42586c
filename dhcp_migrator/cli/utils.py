"""
Утилиты CLI.

Сведение настроек из config.yaml и аргументов командной строки.
Аргументы CLI имеют приоритет над конфигурацией.
"""

import logging
from typing import List, Optional

from ..core.config_schema import AppConfig
from ..core.domain import ExportSettings
from ..core.logging import LogConfig

logger = logging.getLogger(__name__)


def _pick(cli_value, config_value):
    """Значение из CLI если задано, иначе из конфигурации."""
    return cli_value if cli_value is not None else config_value


def build_export_settings(args, app_config: AppConfig) -> ExportSettings:
    """
    Собирает ExportSettings из конфигурации и аргументов.

    Флаги-переключатели CLI только включают опцию, выключить
    включённую в config.yaml опцию из командной строки нельзя.
    """
    cfg = app_config.export
    return ExportSettings(
        site=_pick(getattr(args, "site", None), cfg.site),
        dhcp_members=_pick(getattr(args, "dhcp_members", None), cfg.dhcp_members),
        failover_association=_pick(getattr(args, "failover", None), cfg.failover_association),
        parse_vlan_from_name=bool(getattr(args, "vlan_from_name", False) or cfg.parse_vlan_from_name),
        parse_vlan_from_description=bool(
            getattr(args, "vlan_from_description", False) or cfg.parse_vlan_from_description
        ),
        add_site_to_comment=bool(getattr(args, "site_in_comment", False) or cfg.add_site_to_comment),
        scopes=list(getattr(args, "scope", None) or cfg.scopes),
        skip_inactive=bool(getattr(args, "skip_inactive", False) or cfg.skip_inactive),
    )


def resolve_servers(args, app_config: AppConfig, available: Optional[List[str]] = None) -> List[str]:
    """
    Список серверов: --server, затем config.yaml, затем доступные в источнике.
    """
    servers = getattr(args, "server", None) or app_config.source.servers or available or []
    result = []
    for server in servers:
        server = server.strip()
        if server and server not in result:
            result.append(server)
    return result


def build_log_config(args, app_config: AppConfig) -> LogConfig:
    """LogConfig из секции logging; -v включает DEBUG."""
    log_config = LogConfig.from_dict(app_config.logging.model_dump())
    if getattr(args, "verbose", False):
        log_config.level = logging.DEBUG
    return log_config
