"""
Загрузчик конфигурации Oxidized Wrapper.

Порядок (каждый следующий уровень перекрывает предыдущий):
1. Значения по умолчанию
2. YAML файл (аргумент, env WRAPPER_CONFIG или ./config.yaml)
3. Переменные окружения

Пример config.yaml:
    netbox_url: https://netbox.local/api/dcim/devices/?limit=0
    credentials_file: /etc/oxidized-wrapper/cred-sets.json
    listen: 127.0.0.1:8081
    logging:
      level: DEBUG
      json_format: true

Конфигурация читается один раз при старте процесса.
"""

import os
import logging
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"

# Переменная окружения -> путь в конфигурации
ENV_MAPPING = {
    "WRAPPER_TOKEN": ("wrapper_token",),
    "NETBOX_URL": ("netbox_url",),
    "NETBOX_TOKEN": ("netbox_token",),
    "NETBOX_CA_FILE": ("netbox_ca_file",),
    "CREDENTIALS_FILE": ("credentials_file",),
    "LISTEN": ("listen",),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_JSON": ("logging", "json_format"),
    "LOG_FILE": ("logging", "file_path"),
}


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    file_path: Optional[str] = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=1, le=100)

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class Settings(BaseModel):
    """
    Полная конфигурация wrapper'а.

    Attributes:
        wrapper_token: Токен для входящих запросов к /devices
        netbox_url: Полный URL списка устройств NetBox
        netbox_token: API токен NetBox
        netbox_ca_file: PEM bundle доверенных CA для NetBox (None = системные)
        credentials_file: Путь к JSON файлу credential sets
        listen: Адрес host:port для HTTP сервера
    """
    wrapper_token: str = ""
    netbox_url: str = ""
    netbox_token: str = ""
    netbox_ca_file: Optional[str] = None
    credentials_file: str = "./cred-sets.json"
    listen: str = "0.0.0.0:8081"
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("netbox_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """URL хранится как есть: в нём может быть ?limit=0 и фильтры."""
        if v and not v.startswith(("http://", "https://")):
            raise PydanticCustomError(
                "invalid_url",
                "NetBox URL must start with http:// or https://",
            )
        return v

    @field_validator("netbox_ca_file")
    @classmethod
    def empty_ca_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("listen")
    @classmethod
    def validate_listen(cls, v: str) -> str:
        split_listen(v)
        return v

    @property
    def listen_host(self) -> str:
        return split_listen(self.listen)[0]

    @property
    def listen_port(self) -> int:
        return split_listen(self.listen)[1]


def split_listen(address: str) -> Tuple[str, int]:
    """
    Разбирает адрес вида "host:port" или "[::1]:port".

    Raises:
        ValueError: Адрес без порта или порт вне 1..65535
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"listen address must be host:port, got {address!r}")
    port_num = int(port)
    if not 1 <= port_num <= 65535:
        raise ValueError(f"listen port out of range: {port_num}")
    host = host.strip("[]") or "0.0.0.0"
    return host, port_num


def _merge_dict(base: dict, override: dict) -> None:
    """Рекурсивно мержит словари."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value


def _load_yaml(config_file: Optional[str], environ: Dict[str, str]) -> Dict[str, Any]:
    """Читает YAML файл конфигурации, если он есть."""
    explicit = config_file or environ.get("WRAPPER_CONFIG")
    path = explicit or DEFAULT_CONFIG_FILE

    if not os.path.exists(path):
        if explicit:
            raise ConfigError("config file not found", config_file=path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config file: {e}", config_file=path) from e

    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping", config_file=path)

    logger.debug(f"Configuration loaded from {path}")
    return data


def _load_env(environ: Dict[str, str]) -> Dict[str, Any]:
    """Собирает переопределения из переменных окружения (пустые игнорируются)."""
    data: Dict[str, Any] = {}
    for env_key, path in ENV_MAPPING.items():
        value = environ.get(env_key)
        if not value:
            continue
        if env_key == "LOG_JSON":
            value = value.lower() in ("true", "1", "yes")
        target = data
        for part in path[:-1]:
            target = target.setdefault(part, {})
        target[path[-1]] = value
    return data


def validate_settings(config_dict: dict, config_file: Optional[str] = None) -> Settings:
    """
    Валидирует словарь конфигурации.

    Raises:
        ConfigError: При ошибке валидации
    """
    try:
        return Settings(**config_dict)
    except ValidationError as e:
        first_error = e.errors()[0]
        loc = ".".join(str(x) for x in first_error.get("loc", []))
        msg = first_error.get("msg", "Unknown error")
        raise ConfigError(
            message=f"Invalid configuration: {loc}: {msg}",
            config_file=config_file,
            key=loc or None,
        ) from e


def load_settings(
    config_file: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
) -> Settings:
    """
    Загружает конфигурацию: defaults -> YAML -> env.

    Args:
        config_file: Путь к YAML файлу (опционально)
        environ: Окружение (по умолчанию os.environ)

    Returns:
        Settings: Валидированная конфигурация

    Raises:
        ConfigError: Файл не читается или значения невалидны
    """
    if environ is None:
        environ = dict(os.environ)

    data: Dict[str, Any] = {}
    _merge_dict(data, _load_yaml(config_file, environ))
    _merge_dict(data, _load_env(environ))

    return validate_settings(data, config_file=config_file)
