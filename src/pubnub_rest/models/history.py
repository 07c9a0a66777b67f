"""
History models.
"""

from typing import Any, Optional

from pydantic import BaseModel


class HistoryItem(BaseModel):
    model_config = {"frozen": True}

    message: Any = None
    timetoken: Optional[int] = None


class HistoryResponse(BaseModel):
    messages: list[HistoryItem] = []
    start_timetoken: int = 0
    end_timetoken: int = 0


class DeleteMessagesResponse(BaseModel):
    status: int = 200
    error: bool = False
    error_message: str = ""
