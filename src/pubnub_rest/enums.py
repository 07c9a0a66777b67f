"""
Operation kinds. The value doubles as the name used in error messages.
"""

from enum import Enum


class OperationType(str, Enum):
    PUBLISH = "Publish"
    HISTORY = "History"
    DELETE_MESSAGES = "Delete messages"
    TIME = "Time"
    ADD_CHANNELS_TO_GROUP = "Add channels to channel group"
    REMOVE_CHANNELS_FROM_GROUP = "Remove channels from channel group"
    LIST_CHANNELS_IN_GROUP = "List channels in channel group"
    DELETE_GROUP = "Delete channel group"
    SET_STATE = "Set state"
    GET_STATE = "Get state"
    HERE_NOW = "Here now"
    GRANT = "Grant"
    REVOKE = "Revoke"

    def __str__(self) -> str:
        return self.value


ACCESS_MANAGER_OPERATIONS = frozenset({OperationType.GRANT, OperationType.REVOKE})
