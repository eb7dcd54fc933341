from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from .errors import InvalidArgument


class DeviceStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class TestResultStatus(str, Enum):
    __test__ = False  # not a pytest class

    NORMAL = "normal"
    ABNORMAL = "abnormal"


def parse_device_status(value: Union[DeviceStatus, str, None]) -> DeviceStatus:
    """Return the DeviceStatus for `value`, or raise InvalidArgument.

    Only the exact wire values are accepted; no case folding or trimming.
    """
    if isinstance(value, DeviceStatus):
        return value
    if isinstance(value, str):
        for status in DeviceStatus:
            if status.value == value:
                return status
    raise InvalidArgument(
        f"Invalid status {value!r}. Must be \"online\" or \"offline\""
    )


@dataclass(frozen=True)
class Device:
    id: str
    external_code: str
    name: str
    type: str
    status: DeviceStatus
    last_updated: datetime


@dataclass(frozen=True)
class TestResult:
    __test__ = False  # not a pytest class

    timestamp: datetime
    test_type: str
    value: Union[float, int]  # int for whole-count assays
    unit: str
    status: TestResultStatus
