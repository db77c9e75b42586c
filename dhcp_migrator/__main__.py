"""
Точка входа для запуска модуля.

Позволяет запускать утилиту как:
    python -m dhcp_migrator [команда] [опции]

Примеры:
    python -m dhcp_migrator export --server dhcp01 --site NYC
    python -m dhcp_migrator convert --archive reports/run_x/dhcp01_dhcp.json
"""

from .cli import run

if __name__ == "__main__":
    run()
