"""
Publish and time models.
"""

from pydantic import BaseModel


class PublishResponse(BaseModel):
    timetoken: int


class TimeResponse(BaseModel):
    timetoken: int
