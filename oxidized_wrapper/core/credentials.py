"""
Хранилище credential sets для Oxidized.

Файл credential sets (JSON) загружается один раз при старте:

    {
        "default": {"username": "admin", "password": "secret"},
        "cisco":   {"username": "cuser", "password": "cpass"}
    }

После загрузки хранилище только читается, поэтому безопасно
для параллельных запросов без блокировок.

Пример использования:
    store = CredentialStore.load("./cred-sets.json")
    creds = store.resolve("cisco")
    creds.username  # "cuser"
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Union

from .exceptions import CredentialsError

logger = logging.getLogger(__name__)

DEFAULT_SET = "default"


@dataclass(frozen=True)
class CredentialSet:
    """
    Именованная пара логин/пароль для подключения Oxidized к устройству.

    Attributes:
        username: Имя пользователя
        password: Пароль
    """
    username: str = ""
    password: str = ""


EMPTY_CREDENTIALS = CredentialSet()


class CredentialStore:
    """
    Read-only словарь имя -> CredentialSet.

    Attributes:
        _sets: Неизменяемое отображение credential sets
    """

    def __init__(self, sets: Mapping[str, CredentialSet]):
        self._sets = MappingProxyType(dict(sets))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "CredentialStore":
        """
        Загружает credential sets из JSON файла.

        Args:
            path: Путь к файлу

        Returns:
            CredentialStore: Заполненное хранилище

        Raises:
            CredentialsError: Файл не читается или формат неверный
        """
        path = str(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise CredentialsError(f"cannot read credentials file: {e}", path=path) from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise CredentialsError(f"invalid JSON in credentials file: {e}", path=path) from e

        store = cls(cls._parse(data, path))

        if DEFAULT_SET not in store:
            logger.warning(
                f"No '{DEFAULT_SET}' credential set defined - "
                f"devices with unknown sets will get empty credentials"
            )
        logger.info(f"Loaded {len(store)} credential sets from {path}")
        return store

    @staticmethod
    def _parse(data: object, path: str) -> Dict[str, CredentialSet]:
        """Проверяет структуру {name: {username, password}}."""
        if not isinstance(data, dict):
            raise CredentialsError(
                "credentials file must contain a JSON object", path=path
            )

        sets = {}
        for name, entry in data.items():
            if not isinstance(entry, dict):
                raise CredentialsError(
                    f"credential set '{name}' must be an object", path=path
                )
            username = entry.get("username", "")
            password = entry.get("password", "")
            if not isinstance(username, str) or not isinstance(password, str):
                raise CredentialsError(
                    f"credential set '{name}': username and password must be strings",
                    path=path,
                )
            sets[name] = CredentialSet(username=username, password=password)
        return sets

    def resolve(self, name: str) -> CredentialSet:
        """
        Находит credential set по имени.

        Порядок:
        1. Точное совпадение по имени
        2. Set "default"
        3. Пустой CredentialSet

        Args:
            name: Имя credential set ("" если не задан на устройстве)

        Returns:
            CredentialSet: Никогда не падает
        """
        found = self._sets.get(name)
        if found is not None:
            return found
        return self._sets.get(DEFAULT_SET, EMPTY_CREDENTIALS)

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sets)

    def __repr__(self) -> str:
        # Пароли в repr не выводим
        return f"CredentialStore(sets={sorted(self._sets)})"
