"""
Endpoint contract shared by every operation.

An endpoint describes one request: where it goes, what it carries and what
it needs before it may be sent. The request pipeline in pubnub_rest.request
only talks to endpoints through this interface.
"""

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, NoReturn, Optional

from pubnub_rest.version import __version__
from pubnub_rest.config import Config
from pubnub_rest.enums import OperationType
from pubnub_rest.errors import STR_MISSING_SUB_KEY, ResponseParsingError, ServerError, ValidationError

SDK_NAME = f"PubNub-Python-REST/{__version__}"

INTEGER = re.compile(r"-?[0-9]+")


def default_query(config: Config) -> dict[str, str]:
    """Parameters every request carries."""
    query = {"pnsdk": SDK_NAME, "uuid": config.uuid}
    if config.auth_key:
        query["auth"] = config.auth_key
    return query


@dataclass(frozen=True, kw_only=True)
class Endpoint(ABC):
    config: Config

    OPERATION: ClassVar[OperationType]
    METHOD: ClassVar[str] = "GET"

    def operation_type(self) -> OperationType:
        return self.OPERATION

    def http_method(self) -> str:
        return self.METHOD

    @abstractmethod
    def build_path(self) -> str:
        ...

    def build_query(self) -> dict[str, str]:
        return default_query(self.config)

    def build_body(self) -> Optional[bytes]:
        return None

    def validate(self) -> None:
        """Raise ValidationError when a required field is missing. Runs before any I/O."""
        if not self.config.subscribe_key:
            self.fail(STR_MISSING_SUB_KEY)

    def fail(self, message: str) -> NoReturn:
        raise ValidationError(self.operation_type().value, message)

    def parse_int(self, name: str, value: object) -> int:
        """Numeric string fields are re-serialized; anything non-numeric aborts the build."""
        text = str(value)
        if not INTEGER.fullmatch(text):
            raise ValidationError(self.operation_type().value, f"Invalid {name}: {value!r}")
        return int(text)

    @abstractmethod
    def decode(self, body: bytes) -> Any:
        """Turn the raw response body into this operation's response model."""


def parse_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (ValueError, TypeError, RecursionError) as e:
        raise ResponseParsingError("Error unmarshalling response", body, e) from e


def parse_service_object(body: bytes) -> dict[str, Any]:
    """Decode a ``{"status": ..., "payload": ...}`` style answer, raising on service-reported errors."""
    data = parse_json(body)
    if not isinstance(data, dict):
        raise ResponseParsingError("Error parsing response", body)
    status = data.get("status", 200)
    if data.get("error") is True or (isinstance(status, int) and status >= 400):
        raise ServerError(status if isinstance(status, int) else 400, body)
    return data
