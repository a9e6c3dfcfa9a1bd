"""
Модели данных для Oxidized.

DeviceOutput - одна запись списка устройств, который забирает
Oxidized (source http). Имена полей совпадают с map в конфиге Oxidized:

    source:
      http:
        map:
          name: name
          ip: ip
          model: model
          group: group
          username: username
          password: password
        vars_map:
          enable: enable_password
          ssh_port: ssh_port
"""

from typing import List

from pydantic import BaseModel, Field


class DeviceOutput(BaseModel):
    """Устройство для Oxidized."""

    name: str = ""
    ip: str = Field("", description="IPv4 без префикса")
    model: str = Field("", description="platform slug")
    group: str = Field("", description="site slug")
    username: str = ""
    password: str = ""
    enable_password: str = ""
    ssh_port: str = ""


class DevicesResponse(BaseModel):
    """Ответ GET /devices."""

    results: List[DeviceOutput] = []
