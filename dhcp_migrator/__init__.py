"""
DHCP Migrator: экспорт конфигурации DHCP сервера для импорта в IPAM.

Получает scopes, опции, исключения, резервирования и настройки DNS
с DHCP сервера и строит три таблицы импорта:
- сети (одна строка на scope)
- диапазоны (одна строка на scope)
- фиксированные адреса (одна строка на резервирование)

плюс JSON архив исходной конфигурации без потерь.

Пример использования:
    python -m dhcp_migrator export --server dhcp01 --site NYC
"""

__version__ = "1.0.0"
