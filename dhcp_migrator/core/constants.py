"""
Константы DHCP Migrator.

Номера DHCP опций, cmdlets модуля DhcpServer и имена выходных файлов.
"""

import re

# =============================================================================
# НОМЕРА DHCP ОПЦИЙ
# =============================================================================

OPTION_ROUTERS = 3
OPTION_DNS_SERVERS = 6
OPTION_DOMAIN_NAME = 15
OPTION_VENDOR_SPECIFIC = 43
OPTION_BOOT_SERVER = 66
OPTION_BOOT_FILE = 67

# =============================================================================
# PowerShell cmdlets (модуль DhcpServer)
# =============================================================================
# {server}, {scope_id}, {ip} подставляются перед запуском.
# Select-Object выравнивает объекты до простых полей, чтобы
# ConvertTo-Json не выдавал вложенные IPAddress/TimeSpan.

POWERSHELL_COMMANDS = {
    "ping": (
        "Test-Connection -ComputerName '{server}' -Count 1 -Quiet"
    ),
    "server_options": (
        "Get-DhcpServerv4OptionValue -ComputerName '{server}' -All | "
        "Select-Object OptionId, Name, Type, @{{n='Value';e={{@($_.Value)}}}} | "
        "ConvertTo-Json -Depth 4 -Compress"
    ),
    "scopes": (
        "Get-DhcpServerv4Scope -ComputerName '{server}' | "
        "Select-Object @{{n='ScopeId';e={{$_.ScopeId.IPAddressToString}}}}, "
        "@{{n='SubnetMask';e={{$_.SubnetMask.IPAddressToString}}}}, "
        "Name, Description, @{{n='State';e={{[string]$_.State}}}}, "
        "@{{n='StartRange';e={{$_.StartRange.IPAddressToString}}}}, "
        "@{{n='EndRange';e={{$_.EndRange.IPAddressToString}}}}, "
        "@{{n='LeaseDuration';e={{[int]$_.LeaseDuration.TotalSeconds}}}} | "
        "ConvertTo-Json -Depth 3 -Compress"
    ),
    "exclusions": (
        "Get-DhcpServerv4ExclusionRange -ComputerName '{server}' -ScopeId '{scope_id}' | "
        "Select-Object @{{n='StartRange';e={{$_.StartRange.IPAddressToString}}}}, "
        "@{{n='EndRange';e={{$_.EndRange.IPAddressToString}}}} | "
        "ConvertTo-Json -Depth 3 -Compress"
    ),
    "reservations": (
        "Get-DhcpServerv4Reservation -ComputerName '{server}' -ScopeId '{scope_id}' | "
        "Select-Object @{{n='IPAddress';e={{$_.IPAddress.IPAddressToString}}}}, "
        "ClientId, Name, Description, @{{n='AddressState';e={{[string]$_.Type}}}} | "
        "ConvertTo-Json -Depth 3 -Compress"
    ),
    "scope_options": (
        "Get-DhcpServerv4OptionValue -ComputerName '{server}' -ScopeId '{scope_id}' -All | "
        "Select-Object OptionId, Name, Type, @{{n='Value';e={{@($_.Value)}}}} | "
        "ConvertTo-Json -Depth 4 -Compress"
    ),
    "reservation_options": (
        "Get-DhcpServerv4OptionValue -ComputerName '{server}' -ReservedIP '{ip}' -All | "
        "Select-Object OptionId, Name, Type, @{{n='Value';e={{@($_.Value)}}}} | "
        "ConvertTo-Json -Depth 4 -Compress"
    ),
    "dns_settings": (
        "Get-DhcpServerv4DnsSetting -ComputerName '{server}' -ScopeId '{scope_id}' | "
        "Select-Object @{{n='DynamicUpdates';e={{[string]$_.DynamicUpdates}}}}, "
        "DeleteDnsRROnLeaseExpiry | "
        "ConvertTo-Json -Depth 3 -Compress"
    ),
}

# =============================================================================
# ВЫХОДНЫЕ ФАЙЛЫ
# =============================================================================

# {server}_<suffix>
OUTPUT_SUFFIXES = {
    "network": "networks",
    "dhcprange": "ranges",
    "fixedaddress": "fixedaddresses",
    "archive": "dhcp",
    "review": "review",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def safe_server_name(server: str) -> str:
    """
    Приводит имя сервера к безопасному виду для имени файла.

    Args:
        server: Имя или адрес сервера

    Returns:
        str: Имя, где всё кроме [A-Za-z0-9._-] заменено на "_"
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", server.strip()) or "server"


def output_filename(server: str, kind: str) -> str:
    """
    Имя выходного файла (без расширения) для сервера.

    Example:
        output_filename("dhcp01.corp", "network")  # "dhcp01.corp_networks"
    """
    return f"{safe_server_name(server)}_{OUTPUT_SUFFIXES[kind]}"
