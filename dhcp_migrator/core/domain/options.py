"""
Разрешение DHCP опций с наследованием.

Порядок поиска (первое совпадение): резервирование → scope → сервер.
Опции хранятся как {int: DhcpOption}, ключ: номер опции.

Разные схемы используют разную глубину наследования:
- сети: scope → сервер (routers: только scope)
- фиксированные адреса: только резервирование
"""

from typing import Any, List, Optional

from ..models import DhcpOption, DhcpServer, Reservation, Scope


class OptionResolver:
    """
    Поиск опции по номеру с цепочкой наследования.

    Example:
        resolver = OptionResolver(server)
        option = resolver.resolve(6, scope=scope)                 # scope → сервер
        option = resolver.resolve(3, scope=scope, inherit=False)  # только scope
        option = resolver.resolve(6, reservation=res, inherit=False)
    """

    def __init__(self, server: DhcpServer):
        self.server = server

    def resolve(
        self,
        option_id: int,
        scope: Optional[Scope] = None,
        reservation: Optional[Reservation] = None,
        inherit: bool = True,
    ) -> Optional[DhcpOption]:
        """
        Находит опцию.

        Args:
            option_id: Номер опции
            scope: Scope (опционально)
            reservation: Резервирование (опционально)
            inherit: При False искать только на самом конкретном
                из переданных уровней, без перехода выше

        Returns:
            DhcpOption или None
        """
        if reservation is not None:
            if option_id in reservation.options:
                return reservation.options[option_id]
            if not inherit:
                return None

        if scope is not None:
            if option_id in scope.options:
                return scope.options[option_id]
            if not inherit:
                return None

        return self.server.options.get(option_id)

    def value(self, option_id: int, **kwargs: Any) -> Optional[str]:
        """Значение опции через запятую (для полей-списков)."""
        return format_option_value(self.resolve(option_id, **kwargs))

    def first(self, option_id: int, **kwargs: Any) -> Optional[str]:
        """Первый элемент значения опции (для скалярных полей)."""
        return first_option_value(self.resolve(option_id, **kwargs))


def _clean_values(option: Optional[DhcpOption]) -> List[str]:
    if option is None:
        return []
    return [str(v) for v in option.values if v is not None and str(v) != ""]


def format_option_value(option: Optional[DhcpOption]) -> Optional[str]:
    """
    Значение опции через запятую.

    Args:
        option: Опция или None

    Returns:
        "10.0.0.1,10.0.0.2" или None если значения нет
    """
    values = _clean_values(option)
    if not values:
        return None
    return ",".join(values)


def first_option_value(option: Optional[DhcpOption]) -> Optional[str]:
    """Первый элемент значения опции или None."""
    values = _clean_values(option)
    return values[0] if values else None
