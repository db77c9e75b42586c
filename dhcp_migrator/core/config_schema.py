"""
Pydantic схемы для валидации config.yaml.

Ошибки валидации выбрасывают ConfigError.

Пример использования:
    from dhcp_migrator.core.config_schema import validate_config

    config_dict = yaml.safe_load(open("config.yaml"))
    validated = validate_config(config_dict)  # raises ConfigError on failure
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from .exceptions import ConfigError


class SourceConfig(BaseModel):
    """Откуда берётся конфигурация DHCP."""
    type: str = Field(default="powershell", pattern="^(powershell|archive)$")
    servers: List[str] = Field(default_factory=list)
    archive_path: Optional[str] = None
    powershell: str = "powershell.exe"
    timeout: int = Field(default=120, ge=1, le=3600)
    max_workers: int = Field(default=4, ge=1, le=32)

    @field_validator("servers")
    @classmethod
    def validate_servers(cls, v: List[str]) -> List[str]:
        """Убирает пустые имена и дубликаты, сохраняя порядок."""
        result = []
        for server in v:
            server = server.strip()
            if server and server not in result:
                result.append(server)
        return result

    @model_validator(mode="after")
    def validate_archive(self) -> "SourceConfig":
        if self.type == "archive" and not self.archive_path:
            raise PydanticCustomError(
                "missing_archive",
                "Для source.type=archive нужен source.archive_path",
            )
        return self


class ExportConfig(BaseModel):
    """Параметры преобразования."""
    site: Optional[str] = None
    dhcp_members: Optional[str] = None
    failover_association: Optional[str] = None
    parse_vlan_from_name: bool = False
    parse_vlan_from_description: bool = False
    add_site_to_comment: bool = False
    scopes: List[str] = Field(default_factory=list)
    skip_inactive: bool = False


class OutputConfig(BaseModel):
    """Настройки вывода."""
    output_folder: str = "reports"
    per_run_folder: bool = True
    csv_delimiter: str = Field(default=",", min_length=1)
    csv_encoding: str = "utf-8"
    add_bom: bool = False
    excel_review: bool = False
    archive: bool = True


class LoggingConfig(BaseModel):
    """Настройки логирования."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None
    rotation: str = Field(default="size", pattern="^(size|time)$")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)  # min 1KB
    backup_count: int = Field(default=5, ge=1, le=100)
    when: str = "midnight"
    interval: int = Field(default=1, ge=1)


class AppConfig(BaseModel):
    """Полная конфигурация приложения."""
    source: SourceConfig = Field(default_factory=SourceConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(config_dict: dict, config_file: Optional[str] = None) -> AppConfig:
    """
    Валидирует словарь конфигурации.

    Args:
        config_dict: Словарь из YAML
        config_file: Путь к файлу (для сообщения об ошибке)

    Returns:
        AppConfig: Валидированная конфигурация

    Raises:
        ConfigError: При ошибке валидации
    """
    try:
        return AppConfig(**config_dict)
    except ValidationError as e:
        # Первая ошибка: путь в YAML и текст
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"]) or None
        text = f"{key}: {first['msg']}" if key else first["msg"]
        raise ConfigError(
            message=f"Ошибка валидации конфигурации: {text}",
            config_file=config_file or "config.yaml",
            key=key,
        )


def get_default_config() -> AppConfig:
    """Возвращает конфигурацию по умолчанию."""
    return AppConfig()
