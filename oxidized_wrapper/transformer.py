"""
Преобразование устройств NetBox в записи для Oxidized.

Для каждого устройства:
1. Без primary IPv4 - пропускаем (Oxidized не к чему подключаться)
2. IP без префикса: 10.0.0.1/24 -> 10.0.0.1
3. model/group из platform.slug/site.slug ("" если объекта нет)
4. Credentials по custom field credential_set (fallback на "default")
5. enable_password и oxidized_ssh_port - как есть, если строки
"""

from typing import Iterable, List, Optional

from .core.credentials import CredentialStore
from .core.fields import get_str_field
from .core.logging import get_logger
from .core.models import DeviceOutput
from .netbox.models import InventoryRecord, SlugRef

logger = get_logger(__name__)

# Имена custom fields в NetBox
CF_CREDENTIAL_SET = "credential_set"
CF_ENABLE_PASSWORD = "enable_password"
CF_SSH_PORT = "oxidized_ssh_port"


def sanitize_ip(address: str) -> str:
    """
    Отрезает префикс CIDR.

    Example:
        sanitize_ip("10.0.0.1/24")  # "10.0.0.1"
        sanitize_ip("10.0.0.1")     # "10.0.0.1"
    """
    return address.split("/", 1)[0]


def safe_slug(ref: Optional[SlugRef]) -> str:
    """slug вложенного объекта или "" если объекта нет."""
    if ref is None:
        return ""
    return ref.slug


def transform_device(
    record: InventoryRecord,
    store: CredentialStore,
) -> Optional[DeviceOutput]:
    """
    Преобразует одно устройство NetBox.

    Args:
        record: Устройство из ответа NetBox
        store: Хранилище credential sets

    Returns:
        DeviceOutput или None если у устройства нет primary IPv4
    """
    if record.primary_ip4 is None or not record.primary_ip4.address:
        logger.debug("Skipping device without primary IPv4", device=record.name)
        return None

    fields = record.custom_fields
    set_name = get_str_field(fields, CF_CREDENTIAL_SET)

    if set_name not in store:
        logger.warning(
            "Credential set not found in credentials file, using default",
            device=record.name,
            credential_set=set_name,
        )
    creds = store.resolve(set_name)

    return DeviceOutput(
        name=record.name,
        ip=sanitize_ip(record.primary_ip4.address),
        model=safe_slug(record.platform),
        group=safe_slug(record.site),
        username=creds.username,
        password=creds.password,
        enable_password=get_str_field(fields, CF_ENABLE_PASSWORD),
        ssh_port=get_str_field(fields, CF_SSH_PORT),
    )


def transform_devices(
    records: Iterable[InventoryRecord],
    store: CredentialStore,
) -> List[DeviceOutput]:
    """Преобразует все устройства, сохраняя порядок NetBox."""
    output = []
    for record in records:
        device = transform_device(record, store)
        if device is not None:
            output.append(device)
    return output
