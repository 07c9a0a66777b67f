"""
Publish and time.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import quote

from pubnub_rest.crypto import Cryptor, default_cryptor
from pubnub_rest.endpoints.base import Endpoint, parse_json
from pubnub_rest.enums import OperationType
from pubnub_rest.errors import (
    STR_MISSING_CHANNEL,
    STR_MISSING_MESSAGE,
    STR_MISSING_PUB_KEY,
    ResponseParsingError,
)
from pubnub_rest.models.publish import PublishResponse, TimeResponse
from pubnub_rest.utils import url_encode, value_as_string

PUBLISH_GET_PATH = "/publish/{pub_key}/{sub_key}/0/{channel}/0/{message}"
PUBLISH_POST_PATH = "/publish/{pub_key}/{sub_key}/0/{channel}/0"
TIME_PATH = "/time/0"


@dataclass(frozen=True, kw_only=True)
class PublishEndpoint(Endpoint):
    OPERATION = OperationType.PUBLISH

    channel: str = ""
    message: Any = None
    meta: Any = None
    should_store: Optional[bool] = None
    ttl: Optional[int] = None
    replicate: bool = True
    use_post: bool = False
    sequence: Optional[int] = None
    cryptor: Cryptor = field(default=default_cryptor, repr=False, compare=False)

    def http_method(self) -> str:
        return "POST" if self.use_post else "GET"

    def validate(self) -> None:
        super().validate()
        if not self.config.publish_key:
            self.fail(STR_MISSING_PUB_KEY)
        if not self.channel:
            self.fail(STR_MISSING_CHANNEL)
        if self.message is None:
            self.fail(STR_MISSING_MESSAGE)

    def payload(self) -> str:
        """The message as it travels: JSON, or a JSON string of its ciphertext."""
        text = value_as_string(self.message)
        if self.config.cipher_key:
            text = value_as_string(self.cryptor.encrypt(self.config.cipher_key, text))
        return text

    def build_path(self) -> str:
        args = dict(
            pub_key=self.config.publish_key,
            sub_key=self.config.subscribe_key,
            channel=url_encode(self.channel),
        )
        if self.use_post:
            return PUBLISH_POST_PATH.format(**args)
        return PUBLISH_GET_PATH.format(message=quote(self.payload(), safe=""), **args)

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        if self.meta is not None:
            query["meta"] = value_as_string(self.meta)
        if self.should_store is not None:
            query["store"] = "1" if self.should_store else "0"
        if self.ttl is not None:
            query["ttl"] = str(self.ttl)
        if not self.replicate:
            query["norep"] = "true"
        if self.sequence is not None:
            query["seqn"] = str(self.sequence)
        return query

    def build_body(self) -> Optional[bytes]:
        if self.use_post:
            return self.payload().encode("utf-8")
        return None

    def decode(self, body: bytes) -> PublishResponse:
        data = parse_json(body)
        # [1, "Sent", "14981595400555832"]
        if not isinstance(data, list) or len(data) < 3:
            raise ResponseParsingError("Error parsing response", body)
        try:
            return PublishResponse(timetoken=int(data[2]))
        except (TypeError, ValueError) as e:
            raise ResponseParsingError("Error parsing response", body, e) from e


@dataclass(frozen=True, kw_only=True)
class TimeEndpoint(Endpoint):
    OPERATION = OperationType.TIME

    def build_path(self) -> str:
        return TIME_PATH

    def decode(self, body: bytes) -> TimeResponse:
        data = parse_json(body)
        if not isinstance(data, list) or not data:
            raise ResponseParsingError("Error parsing response", body)
        try:
            return TimeResponse(timetoken=int(data[0]))
        except (TypeError, ValueError) as e:
            raise ResponseParsingError("Error parsing response", body, e) from e
