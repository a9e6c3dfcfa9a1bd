"""
Точка входа для запуска сервиса.

    python -m oxidized_wrapper [--config config.yaml]

Ошибки старта (конфигурация, credential sets, CA bundle) завершают
процесс с кодом 1 до открытия порта.
"""

import argparse
import sys

import uvicorn

from . import __version__
from .config import load_settings
from .context import build_context
from .core.exceptions import WrapperError, format_error_for_log
from .core.logging import get_logger, setup_logging

logger = get_logger("oxidized_wrapper")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="oxidized_wrapper",
        description="NetBox -> Oxidized device list with credential sets",
    )
    parser.add_argument("--config", help="Путь к YAML конфигурации")
    parser.add_argument("--version", action="version", version=__version__)
    args = parser.parse_args(argv)

    # Логирование по умолчанию, пока конфигурация не прочитана
    setup_logging()

    try:
        settings = load_settings(args.config)
        setup_logging(
            json_format=settings.logging.json_format,
            level=settings.logging.level,
            file_path=settings.logging.file_path,
            max_bytes=settings.logging.max_bytes,
            backup_count=settings.logging.backup_count,
        )
        context = build_context(settings)
    except WrapperError as e:
        logger.critical(f"Startup failed: {format_error_for_log(e)}")
        return 1

    from .api.main import create_app

    app = create_app(context)
    logger.info(f"cred-wrapper v{__version__} listening on {settings.listen}")
    uvicorn.run(
        app,
        host=settings.listen_host,
        port=settings.listen_port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
