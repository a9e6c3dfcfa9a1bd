"""
Oxidized Wrapper Web API.

Отдаёт Oxidized список устройств NetBox с credentials.

Запуск:
    python -m oxidized_wrapper
    # или
    uvicorn --factory oxidized_wrapper.api.main:create_app --host 0.0.0.0 --port 8081

Endpoints:
    GET /devices  - список устройств (Authorization: Token <WRAPPER_TOKEN>)
    GET /healthz  - health check
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .. import __version__
from ..context import AppContext, build_context
from ..core.exceptions import NetBoxError, format_error_for_log
from ..core.logging import get_logger
from .routes import devices_router
from .schemas import ErrorResponse, ServiceInfo

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events."""
    logger.info(f"Oxidized Wrapper v{__version__} started")
    yield
    app.state.context.client.close()
    logger.info("Oxidized Wrapper shutting down")


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Создаёт FastAPI приложение.

    Args:
        context: Готовый контекст (если None - собирается из окружения)

    Raises:
        ConfigError, CredentialsError: при ошибке старта
    """
    if context is None:
        context = build_context()

    app = FastAPI(
        title="Oxidized Wrapper",
        description="NetBox -> Oxidized device list with credential sets",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context

    # =========================================================================
    # Exception handlers
    # =========================================================================

    @app.exception_handler(NetBoxError)
    async def netbox_exception_handler(request: Request, exc: NetBoxError):
        """Ошибки NetBox: 500 (конфиг/ответ) или 502 (транспорт)."""
        if exc.status_code >= 502:
            logger.error(format_error_for_log(exc))
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.__class__.__name__,
                detail=exc.message,
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Глобальный обработчик ошибок."""
        logger.exception(f"Unhandled error on {request.url.path}: {format_error_for_log(exc)}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                detail=str(exc),
            ).model_dump(),
        )

    # =========================================================================
    # Health check
    # =========================================================================

    @app.get("/healthz", response_class=PlainTextResponse, tags=["Health"])
    def health_check():
        """Проверка состояния (без авторизации)."""
        return "OK\n"

    @app.get("/", response_model=ServiceInfo, tags=["Health"])
    def root():
        """Корневой endpoint."""
        return ServiceInfo(name="Oxidized Wrapper", version=__version__)

    app.include_router(devices_router, tags=["Devices"])

    return app
