"""Schemas для API."""

from typing import Optional

from pydantic import BaseModel

from ..core.models import DeviceOutput, DevicesResponse


class ServiceInfo(BaseModel):
    """Ответ GET /."""

    name: str
    version: str


class ErrorResponse(BaseModel):
    """Ответ с ошибкой."""

    success: bool = False
    error: str
    detail: Optional[str] = None


__all__ = [
    "DeviceOutput",
    "DevicesResponse",
    "ServiceInfo",
    "ErrorResponse",
]
