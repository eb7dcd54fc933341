"""Shared fixtures: deterministic clocks, RNGs, and an isolated API client."""

import random
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from labhub.api import routes as routes_module
from labhub.domain.registry import DeviceRegistry
from labhub.main import app, get_device_service
from labhub.services.device_service import DeviceService
from labhub.services.result_synthesizer import ResultSynthesizer


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock) -> DeviceRegistry:
    return DeviceRegistry(clock=clock)


@pytest.fixture
def synthesizer(clock) -> ResultSynthesizer:
    return ResultSynthesizer(rng=random.Random(1234), clock=clock)


@pytest.fixture
def service(registry, synthesizer) -> DeviceService:
    return DeviceService(registry=registry, synthesizer=synthesizer, rng=random.Random(99))


@pytest.fixture
def client(service):
    """TestClient wired to a fresh service so tests never share devices."""
    app.dependency_overrides[routes_module.get_device_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides[routes_module.get_device_service] = get_device_service
