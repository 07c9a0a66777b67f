"""
Channel group models.
"""

from pydantic import BaseModel


class ChannelGroupResponse(BaseModel):
    status: int = 200
    message: str = "OK"
    service: str = ""


class ListChannelsResponse(BaseModel):
    group: str
    channels: list[str] = []
