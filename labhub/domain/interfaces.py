from __future__ import annotations
from typing import Protocol, Optional, Union, runtime_checkable
from .models import Device, DeviceStatus, TestResult


@runtime_checkable
class DeviceStore(Protocol):
    def create(self, name: str, type: str, initial_status: Union[DeviceStatus, str]) -> Device:
        ...

    def find_all(self, status: Optional[DeviceStatus] = None) -> list[Device]:
        ...

    def find_by_id(self, device_id: str) -> Optional[Device]:
        ...

    def update_status(self, device_id: str, status: Union[DeviceStatus, str]) -> Optional[Device]:
        ...


@runtime_checkable
class ResultSource(Protocol):
    def generate(self, n: int = 7) -> list[TestResult]:
        ...
