from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..domain.errors import InvalidArgument
from ..domain.models import Device, TestResult
from ..services.device_service import DeviceService
from .schemas import RegisterDeviceRequest, UpdateDeviceStatusRequest

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependency getters ---
# main.py points this at the real service via app.dependency_overrides.
def get_device_service() -> DeviceService:  # overridden in main
    raise RuntimeError("Device service dependency not configured")


def _device_out(d: Device) -> dict:
    return {
        "uuid": d.id,
        "deviceId": d.external_code,
        "deviceName": d.name,
        "deviceType": d.type,
        "status": d.status.value,
        "lastUpdated": d.last_updated.isoformat(),
    }


def _result_out(r: TestResult) -> dict:
    return {
        "timestamp": r.timestamp.isoformat(),
        "testType": r.test_type,
        "value": r.value,
        "unit": r.unit,
        "status": r.status.value,
    }


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Device not found")


@router.get("/devices")
async def list_devices(
    status: Optional[str] = None,
    svc: DeviceService = Depends(get_device_service),
):
    try:
        devices = svc.list_devices(status)
    except InvalidArgument:
        logger.warning("Rejected device listing with status=%r", status)
        raise HTTPException(
            status_code=400,
            detail='Invalid status parameter. Must be "online" or "offline"',
        )
    return [_device_out(d) for d in devices]


@router.post("/devices/register", status_code=201)
async def register_device(
    req: RegisterDeviceRequest,
    svc: DeviceService = Depends(get_device_service),
):
    try:
        device = svc.create_device(req.deviceName, req.deviceType, req.status)
    except InvalidArgument as e:
        logger.warning("Rejected device registration: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return _device_out(device)


@router.get("/devices/{uuid}")
async def get_device(uuid: str, svc: DeviceService = Depends(get_device_service)):
    device = svc.get_device(uuid)
    if device is None:
        raise _not_found()
    return _device_out(device)


@router.patch("/devices/{uuid}/status")
async def update_device_status(
    uuid: str,
    req: UpdateDeviceStatusRequest,
    svc: DeviceService = Depends(get_device_service),
):
    try:
        device = svc.set_device_status(uuid, req.status)
    except InvalidArgument as e:
        logger.warning("Rejected status update for %s: %s", uuid, e)
        raise HTTPException(status_code=400, detail=str(e))
    if device is None:
        raise _not_found()
    return _device_out(device)


@router.get("/devices/{uuid}/data")
async def get_device_data(uuid: str, svc: DeviceService = Depends(get_device_service)):
    results = svc.get_device_results(uuid)
    if results is None:
        raise _not_found()
    return [_result_out(r) for r in results]
