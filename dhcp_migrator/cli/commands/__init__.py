"""
Обработчики команд CLI.

- export.py: export, convert
"""

from .export import (
    cmd_export,
    cmd_convert,
    run_export,
    export_server,
    OutputOptions,
)

__all__ = [
    "cmd_export",
    "cmd_convert",
    "run_export",
    "export_server",
    "OutputOptions",
]
