"""
Команды экспорта.

Команды:
- export: живые DHCP серверы через PowerShell
- convert: повторное преобразование из JSON архива

Общий поток: проверка доступности → сбор модели → записи импорта →
CSV таблицы + архив (+ книга Excel) → summary.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ...collectors import ArchiveSource, CollectResult, DhcpCollector, DhcpSource, PowerShellSource
from ...core.config_schema import AppConfig
from ...core.constants import output_filename
from ...core.context import RunContext
from ...core.domain import ExportSettings, RecordBatch, RecordBuilder
from ...core.exceptions import ConfigError, ExportError, format_error_for_log
from ...core.records import FixedAddressRecord, NetworkRecord, RangeRecord
from ...exporters import ArchiveExporter, CSVExporter, ExcelExporter
from ..utils import build_export_settings, resolve_servers

logger = logging.getLogger(__name__)


@dataclass
class OutputOptions:
    """Куда и что писать."""
    output_folder: Path
    delimiter: str = ","
    encoding: str = "utf-8"
    add_bom: bool = False
    excel_review: bool = False
    archive: bool = True


def build_output_options(args, app_config: AppConfig, ctx: RunContext) -> OutputOptions:
    """OutputOptions из config.yaml и аргументов."""
    cfg = app_config.output
    return OutputOptions(
        output_folder=ctx.output_dir or Path(cfg.output_folder),
        delimiter=getattr(args, "delimiter", None) or cfg.csv_delimiter,
        encoding=cfg.csv_encoding,
        add_bom=cfg.add_bom,
        excel_review=bool(getattr(args, "excel", False) or cfg.excel_review),
        archive=cfg.archive and not getattr(args, "no_archive", False),
    )


def export_server(
    result: CollectResult,
    settings: ExportSettings,
    options: OutputOptions,
) -> Dict[str, object]:
    """
    Строит записи одного сервера и пишет все файлы.

    Args:
        result: Модель сервера и предупреждения сбора
        settings: Параметры преобразования
        options: Параметры вывода

    Returns:
        dict: Статистика по серверу для summary
    """
    server = result.server
    batch = RecordBuilder(settings).build(server)
    folder = str(options.output_folder)

    csv_exporter = CSVExporter(
        output_folder=folder,
        encoding=options.encoding,
        delimiter=options.delimiter,
        add_bom=options.add_bom,
    )
    files: List[str] = []
    tables = (
        (batch.networks, NetworkRecord),
        (batch.ranges, RangeRecord),
        (batch.fixed_addresses, FixedAddressRecord),
    )
    for records, record_cls in tables:
        path = csv_exporter.export_records(
            records, record_cls, output_filename(server.name, record_cls.RECORD_TYPE)
        )
        files.append(str(path))

    if options.archive:
        path = ArchiveExporter(output_folder=folder).export_server(
            server, output_filename(server.name, "archive")
        )
        files.append(str(path))

    if options.excel_review:
        path = ExcelExporter(output_folder=folder).export_workbook(
            _review_sheets(batch), output_filename(server.name, "review")
        )
        if path:
            files.append(str(path))

    return {
        "scopes": len(server.scopes),
        "reservations": server.reservation_count,
        **batch.stats(),
        "warnings": [w.to_dict() for w in result.warnings],
        "files": files,
    }


def _review_sheets(batch: RecordBatch) -> dict:
    return {
        "networks": (NetworkRecord.headers(), [r.to_row() for r in batch.networks]),
        "ranges": (RangeRecord.headers(), [r.to_row() for r in batch.ranges]),
        "fixed_addresses": (
            FixedAddressRecord.headers(),
            [r.to_row() for r in batch.fixed_addresses],
        ),
    }


def run_export(
    source: DhcpSource,
    servers: List[str],
    settings: ExportSettings,
    options: OutputOptions,
    ctx: Optional[RunContext] = None,
    max_workers: int = 4,
) -> Dict[str, dict]:
    """
    Полный цикл экспорта для списка серверов.

    Raises:
        ConfigError: Список серверов пуст
        ConnectionError: Один из серверов недоступен (до начала сбора)

    Returns:
        {server: статистика}
    """
    if not servers:
        raise ConfigError("Не указаны DHCP серверы", key="source.servers")

    collector = DhcpCollector(source, max_workers=max_workers)
    collector.check_reachable(servers)

    stats: Dict[str, dict] = {}
    for result in collector.collect(servers):
        name = result.server.name
        try:
            stats[name] = export_server(result, settings, options)
        except ExportError as e:
            logger.error(f"{name}: {format_error_for_log(e)}")
            stats[name] = {"error": e.to_dict()}
        if ctx:
            ctx.record_server(name, stats[name])

    if ctx:
        ctx.save_summary()
    _print_summary(stats)
    return stats


def _print_summary(stats: Dict[str, dict]) -> None:
    """Выводит итог по серверам."""
    for server, data in stats.items():
        if "error" in data:
            logger.info(f"{server}: ОШИБКА ЭКСПОРТА")
            continue
        logger.info(
            f"{server}: scope {data['scopes']}, резервирований {data['reservations']}, "
            f"сетей {data['networks']}, диапазонов {data['ranges']}, "
            f"фиксированных адресов {data['fixed_addresses']}, "
            f"предупреждений {len(data['warnings'])}"
        )


def _configured_source(app_config: AppConfig) -> DhcpSource:
    """Источник по source.type из config.yaml."""
    cfg = app_config.source
    if cfg.type == "archive":
        return ArchiveSource(cfg.archive_path)
    return PowerShellSource(executable=cfg.powershell, timeout=cfg.timeout)


def cmd_export(args, app_config: AppConfig, ctx: RunContext) -> Dict[str, dict]:
    """Обработчик команды export (источник из source.type, по умолчанию PowerShell)."""
    cfg = app_config.source
    source = _configured_source(app_config)
    available = source.servers if isinstance(source, ArchiveSource) else None
    return run_export(
        source,
        resolve_servers(args, app_config, available=available),
        build_export_settings(args, app_config),
        build_output_options(args, app_config, ctx),
        ctx,
        max_workers=cfg.max_workers,
    )


def cmd_convert(args, app_config: AppConfig, ctx: RunContext) -> Dict[str, dict]:
    """Обработчик команды convert (из архива)."""
    archive_path = getattr(args, "archive", None) or app_config.source.archive_path
    if not archive_path:
        raise ConfigError("Не указан архив", key="source.archive_path")

    source = ArchiveSource(archive_path)
    return run_export(
        source,
        resolve_servers(args, app_config, available=source.servers),
        build_export_settings(args, app_config),
        build_output_options(args, app_config, ctx),
        ctx,
        max_workers=app_config.source.max_workers,
    )
