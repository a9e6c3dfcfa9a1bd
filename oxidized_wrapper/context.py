"""
Контекст приложения.

Всё, что создаётся один раз при старте и читается запросами:
конфигурация, credential sets и HTTP клиент NetBox.
"""

from dataclasses import dataclass
from typing import Optional

from .config import Settings, load_settings
from .core.credentials import CredentialStore
from .netbox.client import InventoryClient


@dataclass
class AppContext:
    """
    Зависимости обработчиков запросов.

    Attributes:
        settings: Конфигурация
        credentials: Хранилище credential sets (read-only)
        client: Общий клиент NetBox
    """
    settings: Settings
    credentials: CredentialStore
    client: InventoryClient


def build_context(settings: Optional[Settings] = None) -> AppContext:
    """
    Создаёт контекст при старте процесса.

    Raises:
        ConfigError: Невалидная конфигурация или CA bundle
        CredentialsError: Файл credential sets не читается
    """
    if settings is None:
        settings = load_settings()

    credentials = CredentialStore.load(settings.credentials_file)
    client = InventoryClient(ca_file=settings.netbox_ca_file)

    return AppContext(settings=settings, credentials=credentials, client=client)
