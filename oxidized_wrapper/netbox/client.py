"""
HTTP клиент NetBox.

Один GET на полный URL списка устройств с заголовком
Authorization: Token <token>. Без retry, пагинации и собственного
таймаута: NetBox должен отдать весь список одним ответом
(обычно URL содержит ?limit=0).

Один экземпляр клиента создаётся при старте и используется всеми
запросами одновременно.
"""

import logging
import os
from typing import Optional

import requests

from ..core.exceptions import ConfigError, NetBoxConnectionError

logger = logging.getLogger(__name__)

PEM_MARKER = b"-----BEGIN CERTIFICATE-----"


def check_ca_bundle(ca_file: str) -> str:
    """
    Проверяет PEM bundle с доверенными CA.

    Args:
        ca_file: Путь к файлу

    Returns:
        str: Тот же путь (для requests verify=)

    Raises:
        ConfigError: Файл не читается или в нём нет сертификатов
    """
    try:
        with open(ca_file, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ConfigError(
            f"failed to read CA file: {e}", key="netbox_ca_file", config_file=ca_file
        ) from e

    if PEM_MARKER not in data:
        raise ConfigError(
            "failed to parse CA certificate(s)", key="netbox_ca_file", config_file=ca_file
        )
    return ca_file


class InventoryClient:
    """
    Клиент для получения списка устройств из NetBox.

    Attributes:
        session: Общая requests.Session
        ca_file: PEM bundle доверенных CA (None = системное хранилище)
    """

    def __init__(
        self,
        ca_file: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Инициализация клиента.

        Args:
            ca_file: PEM bundle доверенных CA
            session: Готовая сессия (для тестов)

        Raises:
            ConfigError: ca_file задан, но невалиден
        """
        self.session = session or requests.Session()
        self.ca_file = ca_file

        if ca_file:
            self.session.verify = check_ca_bundle(os.fspath(ca_file))
            logger.info(f"Custom HTTP client initialized with CA {ca_file}")
        else:
            logger.info("NETBOX_CA_FILE not set - using system root CAs")

    def fetch(self, url: str, token: str) -> bytes:
        """
        Выполняет GET и возвращает тело ответа целиком.

        Статус ответа не проверяется: тело разбирается вызывающим кодом.

        Args:
            url: Полный URL (например https://netbox/api/dcim/devices/?limit=0)
            token: API токен NetBox

        Returns:
            bytes: Тело ответа

        Raises:
            NetBoxConnectionError: Ошибка транспорта
        """
        headers = {
            "Authorization": f"Token {token}",
            "Accept": "application/json",
        }
        try:
            response = self.session.get(url, headers=headers)
        except requests.RequestException as e:
            raise NetBoxConnectionError(
                f"failed talking to NetBox: {e}", url=url
            ) from e

        if response.status_code >= 400:
            logger.warning(f"NetBox answered HTTP {response.status_code} for {url}")
        return response.content

    def close(self) -> None:
        """Закрывает сессию."""
        self.session.close()
