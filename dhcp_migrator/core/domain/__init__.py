"""
Domain Layer для DHCP Migrator.

Бизнес-логика отделена от получения данных (collectors) и записи
файлов (exporters). Collectors строят модель, Domain превращает её
в записи импорта.

- OptionResolver: поиск опций с наследованием
- derivation: VLAN, комментарий, динамический DNS, исключения, MAC
- RecordBuilder: записи сетей, диапазонов и фиксированных адресов

Использование:
    from dhcp_migrator.core.domain import RecordBuilder, ExportSettings

    batch = RecordBuilder(ExportSettings(site="NYC")).build(server)
"""

from .options import OptionResolver, format_option_value, first_option_value
from .derivation import (
    DnsClassification,
    classify_dns,
    extract_vlan,
    format_exclusions,
    format_mac,
    normalize_comment,
    resolve_vlan,
)
from .emitters import (
    ExportSettings,
    FixedAddressEmitter,
    NetworkEmitter,
    RangeEmitter,
    RecordBatch,
    RecordBuilder,
)

__all__ = [
    "OptionResolver",
    "format_option_value",
    "first_option_value",
    "DnsClassification",
    "classify_dns",
    "extract_vlan",
    "format_exclusions",
    "format_mac",
    "normalize_comment",
    "resolve_vlan",
    "ExportSettings",
    "FixedAddressEmitter",
    "NetworkEmitter",
    "RangeEmitter",
    "RecordBatch",
    "RecordBuilder",
]
