"""
Правила вычисления производных полей записей импорта.

Все функции чистые и не бросают исключений: на любой вход
(пустые строки, None, пустые списки) есть определённый результат.

- extract_vlan / resolve_vlan: номер VLAN из имени/описания scope
- normalize_comment: добавление сайта в комментарий
- classify_dns: флаги динамического обновления DNS
- format_exclusions: сериализация диапазонов исключений
- format_mac: MAC из 00-11-22-33-44-55 в 00:11:22:33:44:55
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import DnsSettings, DynamicUpdateMode, ExclusionRange

# "vlan", необязательные пробелы, цифры (могут отсутствовать)
VLAN_PATTERN = re.compile(r"vlan\s*(\d*)", re.IGNORECASE)


def extract_vlan(text: Optional[str]) -> Optional[int]:
    """
    Извлекает номер VLAN из текста.

    Ищется первое вхождение "vlan" (без учёта регистра). Если за ним
    нет цифр, результат None.

    Example:
        extract_vlan("Engineering VLAN 42")     # 42
        extract_vlan("uses VLAN99 internally")  # 99
        extract_vlan("vlan trunk")              # None
    """
    if not text:
        return None
    match = VLAN_PATTERN.search(text)
    if not match or not match.group(1):
        return None
    return int(match.group(1))


def resolve_vlan(
    name: Optional[str],
    description: Optional[str],
    from_name: bool,
    from_description: bool,
) -> Optional[int]:
    """
    VLAN для scope по двум независимым переключателям.

    Описание проверяется после имени и при найденном номере
    перекрывает результат имени. Если в описании есть только слово
    "vlan" без номера, номер из имени сохраняется.

    Args:
        name: Имя scope
        description: Описание scope
        from_name: Искать VLAN в имени
        from_description: Искать VLAN в описании

    Returns:
        int или None
    """
    vlan = None
    if from_name:
        vlan = extract_vlan(name)
    if from_description:
        described = extract_vlan(description)
        if described is not None:
            vlan = described
    return vlan


def normalize_comment(
    comment: Optional[str],
    site: Optional[str],
    enabled: bool,
) -> Optional[str]:
    """
    Добавляет сайт в начало комментария, если его там нет.

    Сайт ищется без учёта регистра как отдельное слово: слева начало
    строки, "_", "-" или пробел; справа "_", "-", пробел или конец строки.

    Args:
        comment: Исходный комментарий
        site: Код сайта
        enabled: Включена ли нормализация

    Returns:
        Комментарий (без изменений или "{site} {comment}"); при пустом
        комментарии только сайт, без завершающего пробела

    Example:
        normalize_comment("Office LAN", "NYC", True)      # "NYC Office LAN"
        normalize_comment("NYC-Office LAN", "NYC", True)  # "NYC-Office LAN"
    """
    if not enabled or not site:
        return comment
    if not comment:
        return site

    pattern = re.compile(
        r"(^|[_\-\s])" + re.escape(site) + r"([_\-\s]|$)",
        re.IGNORECASE,
    )
    if pattern.search(comment):
        return comment
    return f"{site} {comment}"


@dataclass
class DnsClassification:
    """
    Результат классификации настроек динамического DNS.

    None во флагах означает "не задано" (целевая система берёт своё).
    domain_name/ddns_domainname заполнены только при наследовании
    домена с уровня сервера.
    """
    always_update_dns: Optional[bool] = None
    enable_ddns: Optional[bool] = None
    enable_option81: Optional[bool] = None
    update_static_leases: Optional[bool] = None
    update_dns_on_lease_renewal: Optional[bool] = None
    ddns_domainname: Optional[str] = None
    domain_name: Optional[str] = None

    @property
    def inherits_domain(self) -> bool:
        return self.domain_name is not None


def classify_dns(
    dns_settings: Optional[DnsSettings],
    scope_has_domain_option: bool,
    server_domain: Optional[str],
) -> DnsClassification:
    """
    Флаги динамического обновления DNS.

    - Always: все четыре флага True
    - OnClientRequest: enable_ddns/enable_option81 True, always_update_dns False
    - Disabled (или настройки не получены): флаги не заданы

    Для Always/OnClientRequest без локальной опции 15 домен берётся
    с сервера (первое значение опции 15).

    Args:
        dns_settings: Настройки DNS scope (None если не получены)
        scope_has_domain_option: Есть ли у scope своя опция 15
        server_domain: Первое значение опции 15 сервера

    Returns:
        DnsClassification
    """
    result = DnsClassification()
    if dns_settings is None:
        return result

    if dns_settings.delete_dns_on_expiry:
        result.update_dns_on_lease_renewal = True

    mode = dns_settings.dynamic_updates
    if mode == DynamicUpdateMode.ALWAYS:
        result.always_update_dns = True
        result.enable_ddns = True
        result.enable_option81 = True
        result.update_static_leases = True
    elif mode == DynamicUpdateMode.ON_CLIENT_REQUEST:
        result.enable_ddns = True
        result.enable_option81 = True
        result.always_update_dns = False
    else:
        return result

    if not scope_has_domain_option and server_domain:
        result.ddns_domainname = server_domain
        result.domain_name = server_domain
    return result


def format_exclusions(exclusions: Optional[Iterable[ExclusionRange]]) -> Optional[str]:
    """
    Сериализует диапазоны исключений.

    Example:
        format_exclusions([ExclusionRange("10", "20"), ExclusionRange("30", "40")])
        # "10-20,30-40"
        format_exclusions([])  # None
    """
    parts = [f"{e.start}-{e.end}" for e in exclusions or []]
    if not parts:
        return None
    return ",".join(parts)


def format_mac(client_id: Optional[str]) -> Optional[str]:
    """
    MAC для импорта: каждый "-" заменяется на ":".

    Example:
        format_mac("00-11-22-33-44-55")  # "00:11:22:33:44:55"
    """
    if not client_id:
        return None
    mac = client_id.strip().replace("-", ":")
    return mac or None
