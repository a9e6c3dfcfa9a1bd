"""
Доступ к custom fields NetBox.

Custom fields в NetBox не типизированы: значение может быть строкой,
числом, null, словарём или отсутствовать. Для wrapper'а интересны
только строки, всё остальное считается пустым значением.
"""

from typing import Any, Mapping, Optional


def get_str_field(fields: Optional[Mapping[str, Any]], key: str) -> str:
    """
    Возвращает строковое значение custom field.

    Args:
        fields: Словарь custom_fields (может быть None)
        key: Имя поля

    Returns:
        str: Значение, или "" если поля нет или оно не строка

    Example:
        get_str_field({"credential_set": "cisco"}, "credential_set")  # "cisco"
        get_str_field({"oxidized_ssh_port": 22}, "oxidized_ssh_port")  # ""
    """
    if not fields:
        return ""
    value = fields.get(key)
    if isinstance(value, str):
        return value
    return ""
