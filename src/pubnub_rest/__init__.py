"""
pubnub-rest: PubNub REST client for Python.

Builds signed requests for the publish/subscribe service's REST operations
and decodes their responses, including encrypted message history.
"""

from pubnub_rest.version import __version__
from pubnub_rest.client import PubNub, AsyncPubNub
from pubnub_rest.config import Config, load_config
from pubnub_rest.enums import OperationType
from pubnub_rest.errors import (
    PubNubError,
    ValidationError,
    ResponseParsingError,
    DecryptionError,
    ServerError,
    ConnectionError,
)
from pubnub_rest.models.history import HistoryItem, HistoryResponse
from pubnub_rest.request import Request, build_request

__all__ = [
    "__version__",
    "PubNub",
    "AsyncPubNub",
    "Config",
    "load_config",
    "OperationType",
    "PubNubError",
    "ValidationError",
    "ResponseParsingError",
    "DecryptionError",
    "ServerError",
    "ConnectionError",
    "HistoryItem",
    "HistoryResponse",
    "Request",
    "build_request",
]
