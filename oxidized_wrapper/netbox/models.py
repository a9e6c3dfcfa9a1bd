"""
Модели ответа NetBox /api/dcim/devices/.

Описывают только поля, нужные Oxidized. Остальные поля ответа
игнорируются. Вложенные объекты (primary_ip4, platform, site) в
NetBox бывают null, поэтому они Optional.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..core.exceptions import NetBoxResponseError

# Сколько символов ответа показывать в логе при ошибке разбора
SNIPPET_LIMIT = 800


class _NetBoxModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class IPAddressRef(_NetBoxModel):
    """Ссылка на IP адрес (address в CIDR форме, например 10.0.0.1/24)."""
    address: str = ""

    @field_validator("address", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class SlugRef(_NetBoxModel):
    """Ссылка на platform или site."""
    slug: str = ""

    @field_validator("slug", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class InventoryRecord(_NetBoxModel):
    """
    Устройство из NetBox.

    Attributes:
        name: Имя устройства
        primary_ip4: Основной IPv4 (None если не назначен)
        platform: Платформа (slug = модель для Oxidized)
        site: Сайт (slug = группа для Oxidized)
        custom_fields: Произвольные поля (credential_set, enable_password, ...)
    """
    name: str = ""
    primary_ip4: Optional[IPAddressRef] = None
    platform: Optional[SlugRef] = None
    site: Optional[SlugRef] = None
    custom_fields: Dict[str, Any] = {}

    @field_validator("name", mode="before")
    @classmethod
    def name_none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("custom_fields", mode="before")
    @classmethod
    def custom_fields_none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class InventoryPage(_NetBoxModel):
    """Конверт ответа NetBox: {"count": N, "results": [...]}."""
    results: List[InventoryRecord] = []

    @model_validator(mode="before")
    @classmethod
    def null_body_to_empty(cls, data: Any) -> Any:
        return {} if data is None else data

    @field_validator("results", mode="before")
    @classmethod
    def results_none_to_empty(cls, v: Any) -> Any:
        # null-элементы списка: устройство без адреса, фильтр всё равно отбросит
        if v is None:
            return []
        if isinstance(v, list):
            return [item for item in v if item is not None]
        return v


def make_snippet(body: bytes, limit: int = SNIPPET_LIMIT) -> str:
    """Начало тела ответа для лога."""
    text = body.decode("utf-8", errors="replace")
    if len(text) > limit:
        return text[:limit] + "...(truncated)"
    return text


def parse_inventory(body: bytes, url: Optional[str] = None) -> List[InventoryRecord]:
    """
    Разбирает тело ответа NetBox в список устройств.

    Args:
        body: Сырые байты ответа
        url: URL запроса (для ошибки)

    Returns:
        List[InventoryRecord]: Устройства в порядке ответа

    Raises:
        NetBoxResponseError: Тело не JSON или структура не совпадает
    """
    try:
        page = InventoryPage.model_validate_json(body)
    except ValidationError as e:
        raise NetBoxResponseError(
            f"invalid NetBox response: {e.error_count()} validation error(s)",
            url=url,
            snippet=make_snippet(body),
        ) from e
    return page.results
