"""
Structured Logging для Oxidized Wrapper.

Два формата: human-readable для консоли и JSON для ELK/Loki.

Пример использования:
    from oxidized_wrapper.core.logging import setup_logging, get_logger

    # Настройка при старте процесса
    setup_logging(json_format=False, level=logging.INFO)

    # Логирование с контекстом
    logger = get_logger(__name__)
    logger.warning("Credential set не найден", device="sw-01", credential_set="cisco")

Формат вывода (human):
    2026-01-10 10:30:15 - WARNING  - Credential set не найден (device=sw-01, credential_set=cisco)

Формат вывода (JSON):
    {"timestamp": "2026-01-10T10:30:15.123456", "level": "WARNING",
     "message": "Credential set не найден", "logger": "oxidized_wrapper.transformer",
     "device": "sw-01", "credential_set": "cisco"}
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, List


# Поля logging.LogRecord которые не нужно включать в вывод
RESERVED_ATTRS = {
    "args", "asctime", "created", "exc_info", "exc_text",
    "filename", "funcName", "levelname", "levelno", "lineno",
    "module", "msecs", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName", "message",
    # uvicorn дублирует сообщение с ANSI цветами
    "color_message",
}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Возвращает extra поля записи в порядке добавления."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in RESERVED_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    JSON форматтер для logging.

    Стандартные поля: timestamp, level, message, logger.
    Extra поля логируются как есть.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        log_data.update(_extra_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable форматтер с поддержкой extra полей.

    Формат: TIMESTAMP - LEVEL - MESSAGE (key=value, ...)
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        message = record.getMessage()

        extras = [
            f"{key}={value}"
            for key, value in _extra_fields(record).items()
            if value not in (None, "")
        ]
        extra_str = f" ({', '.join(extras)})" if extras else ""

        result = f"{timestamp} - {level} - {message}{extra_str}"

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class StructuredLogger:
    """
    Обёртка над logging.Logger с поддержкой структурированных полей.

    Позволяет логировать с именованными параметрами:
        logger.info("Запрос", client_ip="10.0.0.1")

    Вместо:
        logger.info("Запрос от 10.0.0.1")
    """

    def __init__(self, name: str, default_extra: Optional[Dict[str, Any]] = None):
        self._logger = logging.getLogger(name)
        self._default_extra = default_extra or {}

    def _log(
        self,
        level: int,
        message: str,
        exc_info: bool = False,
        **kwargs: Any,
    ) -> None:
        extra = {**self._default_extra, **kwargs}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log DEBUG."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log INFO."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log WARNING."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log ERROR."""
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def critical(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log CRITICAL."""
        self._log(logging.CRITICAL, message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log ERROR с traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """
        Создаёт новый логгер с дополнительными default полями.

        Example:
            req_logger = logger.bind(client_ip="10.0.0.1")
            req_logger.warning("unauthorized")  # автоматически добавит client_ip
        """
        new_extra = {**self._default_extra, **kwargs}
        return StructuredLogger(self._logger.name, default_extra=new_extra)

    @property
    def name(self) -> str:
        return self._logger.name


# Кэш логгеров
_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """
    Получает или создаёт StructuredLogger.

    Args:
        name: Имя логгера (обычно __name__)
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def parse_level(level: Any) -> int:
    """Преобразует "INFO"/"debug"/20 в числовой уровень logging."""
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logging(
    json_format: bool = False,
    level: Any = logging.INFO,
    stream: Any = None,
    file_path: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Настраивает корневой логгер.

    Args:
        json_format: True для JSON, False для human-readable
        level: Уровень логирования (int или имя)
        stream: Поток вывода (по умолчанию sys.stderr)
        file_path: Путь к файлу логов (None = без файла)
        max_bytes: Макс размер файла до ротации (default 10MB)
        backup_count: Количество backup файлов

    Example:
        setup_logging(json_format=True, level="DEBUG", file_path="logs/wrapper.log")
    """
    level = parse_level(level)
    if stream is None:
        stream = sys.stderr

    formatter = JSONFormatter() if json_format else HumanFormatter()
    root_logger = logging.getLogger()

    # Удаляем существующие handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler(stream)]

    if file_path:
        log_path = Path(file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=file_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    root_logger.setLevel(level)
