"""
History: fetch stored messages for a channel, and delete them.

The history answer is a three-element envelope

    [[<entry>, ...], <start-timetoken>, <end-timetoken>]

whose entries come in several shapes depending on include_token and on
whether the messages were published encrypted. decode_history either
returns every record or raises; it never hands back a partial list.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pubnub_rest.crypto import Cryptor, default_cryptor
from pubnub_rest.endpoints.base import Endpoint, parse_json, parse_service_object
from pubnub_rest.enums import OperationType
from pubnub_rest.errors import STR_MISSING_CHANNEL, DecryptionError, ResponseParsingError
from pubnub_rest.models.history import DeleteMessagesResponse, HistoryItem, HistoryResponse
from pubnub_rest.utils import url_encode

logger = logging.getLogger(__name__)

HISTORY_PATH = "/v2/history/sub-key/{sub_key}/channel/{channel}"
DELETE_MESSAGES_PATH = "/v3/history/sub-key/{sub_key}/channel/{channel}"
MAX_COUNT = 100

# Timetokens are signed 64-bit on the wire.
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

Timetoken = Union[int, str]


@dataclass(frozen=True, kw_only=True)
class HistoryEndpoint(Endpoint):
    OPERATION = OperationType.HISTORY

    channel: str = ""
    start: Optional[Timetoken] = None
    end: Optional[Timetoken] = None
    count: int = MAX_COUNT
    reverse: bool = False
    include_timetoken: bool = False
    cryptor: Cryptor = field(default=default_cryptor, repr=False, compare=False)

    def validate(self) -> None:
        super().validate()
        if not self.channel:
            self.fail(STR_MISSING_CHANNEL)

    def build_path(self) -> str:
        return HISTORY_PATH.format(sub_key=self.config.subscribe_key, channel=url_encode(self.channel))

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        if self.start not in (None, ""):
            query["start"] = str(self.parse_int("start", self.start))
        if self.end not in (None, ""):
            query["end"] = str(self.parse_int("end", self.end))
        query["count"] = str(self.count if 0 < self.count <= MAX_COUNT else MAX_COUNT)
        query["reverse"] = "true" if self.reverse else "false"
        query["include_token"] = "true" if self.include_timetoken else "false"
        return query

    def decode(self, body: bytes) -> HistoryResponse:
        return decode_history(body, self.config.cipher_key, self.cryptor)


@dataclass(frozen=True, kw_only=True)
class DeleteMessagesEndpoint(Endpoint):
    OPERATION = OperationType.DELETE_MESSAGES
    METHOD = "DELETE"

    channel: str = ""
    start: Optional[Timetoken] = None
    end: Optional[Timetoken] = None

    def validate(self) -> None:
        super().validate()
        if not self.channel:
            self.fail(STR_MISSING_CHANNEL)

    def build_path(self) -> str:
        return DELETE_MESSAGES_PATH.format(sub_key=self.config.subscribe_key, channel=url_encode(self.channel))

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        if self.start not in (None, ""):
            query["start"] = str(self.parse_int("start", self.start))
        if self.end not in (None, ""):
            query["end"] = str(self.parse_int("end", self.end))
        return query

    def decode(self, body: bytes) -> DeleteMessagesResponse:
        data = parse_service_object(body)
        return DeleteMessagesResponse(
            status=data.get("status", 200),
            error=bool(data.get("error", False)),
            error_message=data.get("error_message", ""),
        )


def decode_history(
    body: bytes,
    cipher_key: Optional[str] = None,
    cryptor: Cryptor = default_cryptor,
) -> HistoryResponse:
    envelope = parse_json(body)

    if not isinstance(envelope, list) or len(envelope) != 3 or not isinstance(envelope[0], list):
        raise ResponseParsingError("Error parsing response", body)

    items = []
    for entry in envelope[0]:
        if cipher_key:
            entry = _decrypt_entry(entry, cipher_key, cryptor)
        items.append(_history_item(entry, body))

    response = HistoryResponse(
        messages=items,
        start_timetoken=_timetoken(envelope[1], body),
        end_timetoken=_timetoken(envelope[2], body),
    )
    logger.debug("decoded %d history messages", len(items))
    return response


def _decrypt_entry(entry: Any, cipher_key: str, cryptor: Cryptor) -> Any:
    if isinstance(entry, str):
        ciphertext = entry
    elif isinstance(entry, dict) and isinstance(entry.get("pn_other"), str):
        ciphertext = entry["pn_other"]
    else:
        raise ResponseParsingError("Decryption error: message is empty", json.dumps(entry).encode("utf-8"))

    try:
        return json.loads(cryptor.decrypt(cipher_key, ciphertext))
    except (DecryptionError, ValueError, RecursionError) as e:
        raise ResponseParsingError("Error unmarshalling response", ciphertext.encode("utf-8"), e) from e


def _history_item(value: Any, body: bytes) -> HistoryItem:
    if isinstance(value, dict):
        if value.get("timetoken") is None:
            return HistoryItem(message=value)
        rest = {k: v for k, v in value.items() if k != "timetoken"}
        if len(rest) == 1:
            message = next(iter(rest.values()))
        else:
            message = rest or None
        return HistoryItem(message=message, timetoken=_timetoken(value["timetoken"], body))
    if isinstance(value, bool) or value is None:
        return HistoryItem()
    return HistoryItem(message=value)


def _timetoken(value: Any, body: bytes) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseParsingError("Error parsing response", body)
    try:
        token = int(value)
    except (OverflowError, ValueError) as e:
        raise ResponseParsingError("Error parsing response", body, e) from e
    if not INT64_MIN <= token <= INT64_MAX:
        raise ResponseParsingError("Error parsing response: timetoken out of range", body)
    return token
