"""
Типизированные исключения для Oxidized Wrapper.

Иерархия:
    WrapperError (базовый)
    ├── ConfigError (конфигурация)
    ├── CredentialsError (файл credential sets)
    └── NetBoxError (NetBox API)
        ├── NetBoxConnectionError (транспорт, HTTP 502)
        ├── NetBoxConfigError (нет URL/токена, HTTP 500)
        └── NetBoxResponseError (невалидный ответ, HTTP 500)

ConfigError и CredentialsError фатальны при старте.
NetBoxError завершает только текущий запрос.

Пример использования:
    from oxidized_wrapper.core.exceptions import NetBoxConnectionError

    try:
        body = client.fetch(url, token)
    except NetBoxConnectionError as e:
        logger.error(f"NetBox недоступен: {e}")
"""

from typing import Optional


class WrapperError(Exception):
    """
    Базовое исключение для всех ошибок Oxidized Wrapper.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/ответов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# === Config Errors ===

class ConfigError(WrapperError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Invalid port", key="listen")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


class CredentialsError(WrapperError):
    """
    Файл credential sets не читается или имеет неверный формат.

    Пример:
        raise CredentialsError("invalid JSON", path="./cred-sets.json")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.path = path
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)


# === NetBox Errors ===

class NetBoxError(WrapperError):
    """
    Базовая ошибка NetBox API.

    Attributes:
        url: URL NetBox
        status_code: HTTP код, который получит клиент wrapper'а
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.url = url
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)


class NetBoxConnectionError(NetBoxError):
    """
    Запрос к NetBox не выполнен (DNS, TCP, TLS).

    Пример:
        raise NetBoxConnectionError("Connection refused", url="https://netbox.local")
    """

    status_code = 502


class NetBoxConfigError(NetBoxError):
    """Не задан NETBOX_URL или NETBOX_TOKEN."""

    status_code = 500


class NetBoxResponseError(NetBoxError):
    """
    Ответ NetBox не разбирается как список устройств.

    Attributes:
        snippet: Начало тела ответа (для лога, не для клиента)
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        snippet: str = "",
        details: Optional[dict] = None,
    ):
        self.snippet = snippet
        super().__init__(message, url, details)


# === Utility Functions ===

def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, WrapperError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
