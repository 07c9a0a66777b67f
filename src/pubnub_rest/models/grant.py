"""
Access manager models.
"""

from typing import Any, Optional

from pydantic import BaseModel


class GrantResponse(BaseModel):
    level: str = ""
    subscribe_key: str = ""
    ttl: Optional[int] = None
    channels: dict[str, Any] = {}
    channel_groups: dict[str, Any] = {}
    auth_keys: dict[str, Any] = {}
