"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- credentials_file: JSON файл credential sets во временной директории
- store: Загруженный CredentialStore
- make_record: Фабрика InventoryRecord
- netbox_payload: Фабрика тела ответа NetBox
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from oxidized_wrapper.core.credentials import CredentialStore
from oxidized_wrapper.netbox.models import InventoryRecord


@pytest.fixture
def cred_sets() -> Dict[str, Dict[str, str]]:
    """Credential sets из типового файла."""
    return {
        "default": {"username": "admin", "password": "pw"},
        "cisco": {"username": "cuser", "password": "cpw"},
        "switches": {"username": "swuser", "password": "swpw"},
    }


@pytest.fixture
def credentials_file(tmp_path, cred_sets) -> Path:
    """Путь к cred-sets.json."""
    path = tmp_path / "cred-sets.json"
    path.write_text(json.dumps(cred_sets), encoding="utf-8")
    return path


@pytest.fixture
def store(credentials_file) -> CredentialStore:
    """Загруженное хранилище credential sets."""
    return CredentialStore.load(credentials_file)


@pytest.fixture
def make_record():
    """
    Фабрика устройств NetBox.

    Usage:
        record = make_record(address="10.0.0.1/24", credential_set="cisco")
    """
    def _make(
        name: str = "sw-01",
        address: Any = "10.0.0.1/24",
        platform: Any = "ios",
        site: Any = "dc1",
        **custom_fields: Any,
    ) -> InventoryRecord:
        data: Dict[str, Any] = {
            "name": name,
            "primary_ip4": {"address": address} if address is not None else None,
            "platform": {"slug": platform} if platform is not None else None,
            "site": {"slug": site} if site is not None else None,
            "custom_fields": custom_fields,
        }
        return InventoryRecord.model_validate(data)
    return _make


@pytest.fixture
def netbox_payload():
    """Фабрика тела ответа /api/dcim/devices/."""
    def _payload(devices: List[Dict[str, Any]]) -> bytes:
        return json.dumps({
            "count": len(devices),
            "next": None,
            "previous": None,
            "results": devices,
        }).encode("utf-8")
    return _payload
