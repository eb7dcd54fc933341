from __future__ import annotations
import logging
import random
from typing import Any, Optional

from ..core.config import settings
from ..domain.errors import InvalidArgument
from ..domain.interfaces import DeviceStore, ResultSource
from ..domain.models import Device, TestResult, parse_device_status

logger = logging.getLogger(__name__)


def _require_text(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgument(f"{label} is required")
    return value


class DeviceService:
    """Transport-agnostic boundary over the registry and the result synthesizer.

    Validates input shape and raises InvalidArgument; an unknown device id
    comes back as None.
    """

    def __init__(
        self,
        registry: DeviceStore,
        synthesizer: ResultSource,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._registry = registry
        self._synthesizer = synthesizer
        self._rng = rng or random.Random()

    def create_device(self, name: Any, type: Any, status: Any) -> Device:
        name = _require_text(name, "Device name")
        type = _require_text(type, "Device type")
        return self._registry.create(name, type, parse_device_status(status))

    def list_devices(self, status_filter: Optional[str] = None) -> list[Device]:
        # "" behaves like an absent filter, as in the query-string handling
        if status_filter is None or status_filter == "":
            return self._registry.find_all()
        return self._registry.find_all(parse_device_status(status_filter))

    def get_device(self, device_id: str) -> Optional[Device]:
        return self._registry.find_by_id(device_id)

    def set_device_status(self, device_id: str, status: Any) -> Optional[Device]:
        new_status = parse_device_status(status)
        updated = self._registry.update_status(device_id, new_status)
        if updated is None:
            logger.info("Status update for unknown device %s", device_id)
        return updated

    def pick_result_count(self) -> int:
        return self._rng.randint(settings.results_min_count, settings.results_max_count)

    def get_device_results(self, device_id: str, count: Optional[int] = None) -> Optional[list[TestResult]]:
        if self._registry.find_by_id(device_id) is None:
            return None
        if count is None:
            count = self.pick_result_count()
        return self._synthesizer.generate(count)
