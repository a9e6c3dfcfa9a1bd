"""
Oxidized Wrapper - прослойка между NetBox и Oxidized.

По запросу Oxidized забирает список устройств из NetBox, добавляет
каждому credentials из локального файла credential sets и отдаёт
нормализованный JSON:

    GET /devices
    {"results": [{"name": "sw1", "ip": "10.0.0.1", "model": "ios",
                  "group": "dc1", "username": "...", "password": "...",
                  "enable_password": "", "ssh_port": ""}]}

Примеры использования:
    # CLI
    WRAPPER_TOKEN=secret NETBOX_URL=https://netbox/api/dcim/devices/?limit=0 \\
        NETBOX_TOKEN=... python -m oxidized_wrapper

    # Python API
    from oxidized_wrapper import CredentialStore, transform_devices

    store = CredentialStore.load("cred-sets.json")
    devices = transform_devices(records, store)
"""

__version__ = "0.53.1"

from .core.credentials import CredentialSet, CredentialStore
from .core.models import DeviceOutput
from .transformer import transform_device, transform_devices

__all__ = [
    "__version__",
    "CredentialSet",
    "CredentialStore",
    "DeviceOutput",
    "transform_device",
    "transform_devices",
]
