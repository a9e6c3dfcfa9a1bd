"""Fixtures для API тестов.

Приложение собирается с AppContext из тестовых зависимостей:
- Settings с WRAPPER_TOKEN=RIGHT
- CredentialStore из tmp файла
- InventoryClient с MagicMock сессией вместо NetBox

Требует: pip install fastapi httpx
"""

from unittest.mock import MagicMock

import pytest

# Skip all API tests if fastapi not installed
pytest.importorskip("fastapi", reason="fastapi not installed, skipping API tests")

from fastapi.testclient import TestClient

from oxidized_wrapper.api.main import create_app
from oxidized_wrapper.config import Settings
from oxidized_wrapper.context import AppContext
from oxidized_wrapper.netbox.client import InventoryClient

WRAPPER_TOKEN = "RIGHT"
NETBOX_URL = "https://netbox.example.com/api/dcim/devices/?limit=0"
NETBOX_TOKEN = "nb-token-12345"


@pytest.fixture
def settings():
    """Тестовая конфигурация."""
    return Settings(
        wrapper_token=WRAPPER_TOKEN,
        netbox_url=NETBOX_URL,
        netbox_token=NETBOX_TOKEN,
    )


@pytest.fixture
def netbox_session():
    """
    Mock requests.Session для NetBox.

    По умолчанию отвечает пустым списком устройств.
    """
    session = MagicMock()
    response = MagicMock()
    response.status_code = 200
    response.content = b'{"count": 0, "results": []}'
    session.get.return_value = response
    return session


@pytest.fixture
def netbox_returns(netbox_session):
    """Задаёт тело ответа NetBox."""
    def _set(body: bytes, status_code: int = 200):
        netbox_session.get.return_value.content = body
        netbox_session.get.return_value.status_code = status_code
    return _set


@pytest.fixture
def context(settings, store, netbox_session):
    """AppContext с mock NetBox."""
    return AppContext(
        settings=settings,
        credentials=store,
        client=InventoryClient(session=netbox_session),
    )


@pytest.fixture
def client(context):
    """TestClient для API."""
    with TestClient(create_app(context)) as client:
        yield client


@pytest.fixture
def auth_headers():
    """Правильный Authorization header."""
    return {"Authorization": f"Token {WRAPPER_TOKEN}"}
