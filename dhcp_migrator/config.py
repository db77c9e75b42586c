"""
Загрузка config.yaml.

Слои накладываются по очереди: значения по умолчанию схемы, файл
YAML, переменные окружения DHCP_SERVERS и DHCP_SITE. Результат
проверяется pydantic схемой (core/config_schema.py), секции доступны
атрибутами:

    config = load_config("config.yaml")
    config.source.servers        # ["dhcp01", "dhcp02"]
    config.output.csv_delimiter  # ","
"""

import os
import logging
from typing import Any, Dict, Optional

import yaml

from .core.config_schema import AppConfig, get_default_config, validate_config
from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Файл рядом с пакетом, затем рабочая папка
PACKAGE_CONFIG = os.path.join(os.path.dirname(__file__), "config.yaml")

SEARCH_PATHS = [
    PACKAGE_CONFIG,
    "config.yaml",
    "config.yml",
    ".dhcp_migrator.yaml",
]

# Переменная окружения → (секция, ключ)
ENV_OVERRIDES = {
    "DHCP_SERVERS": ("source", "servers"),
    "DHCP_SITE": ("export", "site"),
}


def _find_config_file(config_file: Optional[str]) -> Optional[str]:
    if config_file:
        if not os.path.exists(config_file):
            raise ConfigError("Файл конфигурации не найден", config_file=config_file)
        return config_file
    for candidate in SEARCH_PATHS:
        if os.path.exists(candidate):
            return candidate
    return None


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Ошибка разбора YAML: {e}", config_file=path)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Корень конфигурации должен быть словарём", config_file=path)
    return data


def _overlay(target: Dict[str, Any], layer: Dict[str, Any]) -> None:
    """Накладывает слой на target; вложенные секции сливаются по ключам."""
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _overlay(current, value)
        else:
            target[key] = value


def _env_layer() -> Dict[str, Any]:
    layer: Dict[str, Any] = {}
    for env_name, (section, key) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if not raw:
            continue
        if key == "servers":
            value: Any = [item.strip() for item in raw.split(",") if item.strip()]
        else:
            value = raw
        layer.setdefault(section, {})[key] = value
    return layer


class Config:
    """
    Итоговая конфигурация запуска.

    Attributes:
        config_file: Прочитанный файл (None если файла нет)
        validated: AppConfig после проверки схемой
    """

    def __init__(self, config_file: Optional[str] = None):
        data = get_default_config().model_dump()

        self.config_file = _find_config_file(config_file)
        if self.config_file:
            _overlay(data, _read_yaml(self.config_file))
            logger.debug(f"Конфигурация загружена из {self.config_file}")
        _overlay(data, _env_layer())

        self.validated: AppConfig = validate_config(data, self.config_file)

    def __getattr__(self, name: str) -> Any:
        # Вызывается только для отсутствующих атрибутов: секции AppConfig
        if name.startswith("_") or name == "validated":
            raise AttributeError(name)
        return getattr(self.validated, name)

    def __repr__(self) -> str:
        return f"Config(file={self.config_file!r})"


def load_config(config_file: Optional[str] = None) -> Config:
    """
    Загружает и проверяет конфигурацию.

    Args:
        config_file: Путь к YAML файлу. Без него ищется по SEARCH_PATHS,
            отсутствие файла не ошибка

    Raises:
        ConfigError: Файл не найден, не разбирается или не прошёл проверку
    """
    return Config(config_file)
