"""NetBox: HTTP клиент и модели ответа."""

from .client import InventoryClient
from .models import InventoryRecord, parse_inventory

__all__ = [
    "InventoryClient",
    "InventoryRecord",
    "parse_inventory",
]
