"""Devices routes - список устройств для Oxidized."""

from fastapi import APIRouter, Depends

from ...context import AppContext
from ...core.exceptions import NetBoxConfigError, NetBoxResponseError
from ...core.logging import get_logger
from ...netbox.models import parse_inventory
from ...transformer import transform_devices
from ..dependencies import get_context, require_token
from ..schemas import DevicesResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/devices",
    response_model=DevicesResponse,
    dependencies=[Depends(require_token)],
    summary="Устройства NetBox с credentials",
)
def list_devices(context: AppContext = Depends(get_context)):
    """
    Забирает устройства из NetBox и добавляет credentials.

    Header: Authorization: Token <WRAPPER_TOKEN>

    Синхронный handler: FastAPI выполняет его в threadpool,
    блокирующий запрос к NetBox не держит event loop.
    """
    settings = context.settings
    if not settings.netbox_url or not settings.netbox_token:
        raise NetBoxConfigError("NETBOX_URL or NETBOX_TOKEN missing")

    url = settings.netbox_url
    body = context.client.fetch(url, settings.netbox_token)
    logger.info("Good GET request to NetBox", url=url)

    try:
        records = parse_inventory(body, url=url)
    except NetBoxResponseError as e:
        logger.error(
            f"Failed to parse NetBox JSON: {e.message}",
            url=url,
            snippet=e.snippet,
        )
        raise

    devices = transform_devices(records, context.credentials)
    logger.info(
        f"Returned {len(devices)} valid nodes",
        records=len(records),
        devices=len(devices),
    )
    return DevicesResponse(results=devices)
