"""
Presence models.
"""

from typing import Any, Optional

from pydantic import BaseModel


class StateResponse(BaseModel):
    uuid: Optional[str] = None
    state: dict[str, Any] = {}


class HereNowOccupant(BaseModel):
    uuid: str
    state: Optional[Any] = None


class HereNowChannel(BaseModel):
    channel: str
    occupancy: int = 0
    occupants: list[HereNowOccupant] = []


class HereNowResponse(BaseModel):
    total_channels: int = 0
    total_occupancy: int = 0
    channels: list[HereNowChannel] = []
