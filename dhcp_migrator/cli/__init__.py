"""
CLI модуль dhcp_migrator.

Структура:
- utils.py: сведение настроек config.yaml и аргументов
- commands/: обработчики команд (export, convert)

Примеры использования:
    python -m dhcp_migrator export --server dhcp01 --site NYC --site-in-comment
    python -m dhcp_migrator export --server dhcp01 --server dhcp02 --excel
    python -m dhcp_migrator convert --archive reports/run_x/ --vlan-from-name
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..core.exceptions import DhcpMigratorError, format_error_for_log, is_fatal

logger = logging.getLogger(__name__)


def _add_export_arguments(parser: argparse.ArgumentParser) -> None:
    """Аргументы преобразования, общие для export и convert."""
    parser.add_argument(
        "-s",
        "--server",
        action="append",
        help="DHCP сервер (можно несколько раз). По умолчанию из config.yaml",
    )
    parser.add_argument("--site", help="Код сайта (EA-Site, префикс комментария)")
    parser.add_argument("--dhcp-members", help="Члены DHCP целевой системы")
    parser.add_argument("--failover", help="Failover ассоциация для диапазонов")
    parser.add_argument(
        "--vlan-from-name",
        action="store_true",
        help="Искать VLAN в имени scope",
    )
    parser.add_argument(
        "--vlan-from-description",
        action="store_true",
        help="Искать VLAN в описании scope (перекрывает имя)",
    )
    parser.add_argument(
        "--site-in-comment",
        action="store_true",
        help="Добавлять сайт в комментарий сети",
    )
    parser.add_argument(
        "--scope",
        action="append",
        help="Экспортировать только этот scope (можно несколько раз)",
    )
    parser.add_argument(
        "--skip-inactive",
        action="store_true",
        help="Пропускать неактивные scope",
    )
    parser.add_argument("--delimiter", help="Разделитель CSV")
    parser.add_argument(
        "--excel",
        action="store_true",
        help="Дополнительно сохранить книгу Excel для ревью",
    )
    parser.add_argument(
        "--no-archive",
        action="store_true",
        help="Не сохранять JSON архив",
    )


def setup_parser() -> argparse.ArgumentParser:
    """
    Создаёт парсер аргументов командной строки.

    Returns:
        ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog="dhcp_migrator",
        description="Экспорт конфигурации DHCP сервера в CSV для импорта в IPAM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  %(prog)s export --server dhcp01 --site NYC --site-in-comment
  %(prog)s export -s dhcp01 -s dhcp02 --vlan-from-name --excel
  %(prog)s convert --archive reports/run_x/dhcp01_dhcp.json
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Подробный вывод (DEBUG)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Папка для файлов (default: из config.yaml, reports)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Путь к файлу конфигурации YAML (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Команды")

    # === EXPORT ===
    export_parser = subparsers.add_parser("export", help="Экспорт с DHCP серверов")
    _add_export_arguments(export_parser)

    # === CONVERT ===
    convert_parser = subparsers.add_parser("convert", help="Преобразование из JSON архива")
    convert_parser.add_argument(
        "-a",
        "--archive",
        help="Файл архива или папка с *_dhcp.json",
    )
    _add_export_arguments(convert_parser)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Главная функция CLI.

    Returns:
        int: Код возврата (1 при недоступности сервера или ошибке конфигурации)
    """
    from ..config import load_config
    from ..core.context import RunContext, set_current_context
    from ..core.logging import LogConfig, setup_logging_from_config
    from .commands import cmd_convert, cmd_export
    from .utils import build_log_config

    parser = setup_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # До загрузки конфига: логирование по умолчанию
    setup_logging_from_config(
        LogConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    )

    try:
        cfg = load_config(args.config)
    except DhcpMigratorError as e:
        logger.error(format_error_for_log(e))
        return 1

    app_config = cfg.validated
    setup_logging_from_config(build_log_config(args, app_config))

    ctx = RunContext.create(
        command=args.command,
        base_output_dir=Path(args.output or app_config.output.output_folder),
        per_run_folder=app_config.output.per_run_folder,
    )
    set_current_context(ctx)
    logger.info(f"Run started (command={args.command}, run_id={ctx.run_id})")

    commands = {"export": cmd_export, "convert": cmd_convert}
    try:
        commands[args.command](args, app_config, ctx)
    except DhcpMigratorError as e:
        prefix = "Запуск прерван: " if is_fatal(e) else ""
        logger.error(f"{prefix}{format_error_for_log(e)}")
        return 1
    finally:
        set_current_context(None)

    logger.info(f"Run finished in {ctx.elapsed_seconds:.1f}s")
    return 0


def run() -> None:
    """Entry point для console_scripts."""
    sys.exit(main())
