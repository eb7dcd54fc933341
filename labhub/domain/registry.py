from __future__ import annotations
import logging
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from threading import Lock
from typing import Callable, Optional, Union

from ..core.timeutil import now_utc
from .errors import InvalidArgument
from .models import Device, DeviceStatus, parse_device_status

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 16


def _uuid4_str() -> str:
    return str(uuid.uuid4())


class DeviceRegistry:
    """In-memory map of device id -> Device.

    Lives for the lifetime of the process; nothing is persisted. A single
    lock serialises every operation, and records are replaced whole so a
    reader never sees a half-updated device.
    """

    def __init__(
        self,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._id_factory = id_factory or _uuid4_str
        self._clock = clock or now_utc
        self._lock = Lock()
        self._devices: dict[str, Device] = {}
        # every id and external code ever handed out, never pruned
        self._issued: set[str] = set()

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        with self._lock:
            return len(self._devices)

    def _new_identifier(self) -> str:
        # caller holds the lock
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate and candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
            logger.warning("Identifier collision on %r, retrying", candidate)
        raise RuntimeError(
            f"Could not allocate a unique identifier after {MAX_ID_ATTEMPTS} attempts"
        )

    def _next_timestamp(self, previous: Optional[datetime] = None) -> datetime:
        ts = self._clock()
        if previous is not None and ts <= previous:
            ts = previous + timedelta(microseconds=1)
        return ts

    def create(self, name: str, type: str, initial_status: Union[DeviceStatus, str]) -> Device:
        if not isinstance(name, str) or not name:
            raise InvalidArgument("Device name is required")
        if not isinstance(type, str) or not type:
            raise InvalidArgument("Device type is required")
        status = parse_device_status(initial_status)

        with self._lock:
            device = Device(
                id=self._new_identifier(),
                external_code=self._new_identifier(),
                name=name,
                type=type,
                status=status,
                last_updated=self._next_timestamp(),
            )
            self._devices[device.id] = device

        logger.info(
            "Registered device id=%s code=%s name=%r type=%r status=%s",
            device.id, device.external_code, device.name, device.type, device.status.value,
        )
        return device

    def find_all(self, status: Optional[DeviceStatus] = None) -> list[Device]:
        with self._lock:
            devices = list(self._devices.values())
        if status is None:
            return devices
        return [d for d in devices if d.status == status]

    def find_by_id(self, device_id: str) -> Optional[Device]:
        with self._lock:
            return self._devices.get(device_id)

    def update_status(self, device_id: str, status: Union[DeviceStatus, str]) -> Optional[Device]:
        new_status = parse_device_status(status)

        with self._lock:
            current = self._devices.get(device_id)
            if current is None:
                return None
            updated = replace(
                current,
                status=new_status,
                last_updated=self._next_timestamp(current.last_updated),
            )
            self._devices[device_id] = updated

        logger.info(
            "Device %s status %s -> %s",
            device_id, current.status.value, updated.status.value,
        )
        return updated
