"""
Dependency functions для routes.

- get_context: AppContext из app.state
- require_token: проверка Authorization: Token <WRAPPER_TOKEN>
"""

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request

from ..context import AppContext
from ..core.logging import get_logger

logger = get_logger(__name__)


def get_context(request: Request) -> AppContext:
    """Контекст, созданный при старте приложения."""
    return request.app.state.context


def get_client_ip(request: Request) -> str:
    """
    IP клиента с учётом reverse proxy.

    Порядок: первый адрес X-Forwarded-For, X-Real-IP, адрес соединения.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    if request.client:
        return request.client.host
    return ""


def authorize(header: Optional[str], allowed_token: str) -> bool:
    """
    Сравнивает Authorization header с "Token <allowed_token>".

    Отсутствующий header - не авторизован.
    """
    if header is None:
        return False
    expected = f"Token {allowed_token}"
    return secrets.compare_digest(header.encode("utf-8"), expected.encode("utf-8"))


def require_token(
    request: Request,
    context: AppContext = Depends(get_context),
) -> None:
    """
    Логирует запрос и проверяет токен.

    Raises:
        HTTPException 401 если токен не совпадает
    """
    client_ip = get_client_ip(request)
    logger.info(
        f"{request.method} {request.url.path}",
        client_ip=client_ip,
    )

    if not authorize(request.headers.get("Authorization"), context.settings.wrapper_token):
        logger.warning("Unauthorized request", client_ip=client_ip)
        raise HTTPException(status_code=401, detail="unauthorized")
