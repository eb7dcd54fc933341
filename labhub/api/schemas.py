from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Literal


class RegisterDeviceRequest(BaseModel):
    deviceName: str = Field(min_length=1)
    deviceType: str = Field(min_length=1)
    status: Literal["online", "offline"]


class UpdateDeviceStatusRequest(BaseModel):
    status: Literal["online", "offline"]
