"""
Channel group registry: add, remove, list, delete.
"""

from dataclasses import dataclass
from typing import Sequence

from pubnub_rest.endpoints.base import Endpoint, parse_service_object
from pubnub_rest.enums import OperationType
from pubnub_rest.errors import STR_MISSING_CHANNEL, STR_MISSING_CHANNEL_GROUP, ResponseParsingError
from pubnub_rest.models.channel_group import ChannelGroupResponse, ListChannelsResponse
from pubnub_rest.utils import url_encode

CHANNEL_GROUP_PATH = "/v1/channel-registration/sub-key/{sub_key}/channel-group/{group}"
DELETE_CHANNEL_GROUP_PATH = CHANNEL_GROUP_PATH + "/remove"


@dataclass(frozen=True, kw_only=True)
class _GroupEndpoint(Endpoint):
    group: str = ""

    PATH = CHANNEL_GROUP_PATH

    def validate(self) -> None:
        super().validate()
        if not self.group:
            self.fail(STR_MISSING_CHANNEL_GROUP)

    def build_path(self) -> str:
        return self.PATH.format(sub_key=self.config.subscribe_key, group=url_encode(self.group))

    def decode(self, body: bytes) -> ChannelGroupResponse:
        data = parse_service_object(body)
        return ChannelGroupResponse(
            status=data.get("status", 200),
            message=data.get("message", "OK"),
            service=data.get("service", ""),
        )


@dataclass(frozen=True, kw_only=True)
class _GroupChannelsEndpoint(_GroupEndpoint):
    channels: Sequence[str] = ()

    PARAM = ""

    def validate(self) -> None:
        Endpoint.validate(self)
        if not self.channels:
            self.fail(STR_MISSING_CHANNEL)
        if not self.group:
            self.fail(STR_MISSING_CHANNEL_GROUP)

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        query[self.PARAM] = ",".join(url_encode(ch) for ch in self.channels)
        return query


@dataclass(frozen=True, kw_only=True)
class AddChannelsToGroupEndpoint(_GroupChannelsEndpoint):
    OPERATION = OperationType.ADD_CHANNELS_TO_GROUP
    PARAM = "add"


@dataclass(frozen=True, kw_only=True)
class RemoveChannelsFromGroupEndpoint(_GroupChannelsEndpoint):
    OPERATION = OperationType.REMOVE_CHANNELS_FROM_GROUP
    PARAM = "remove"


@dataclass(frozen=True, kw_only=True)
class ListChannelsInGroupEndpoint(_GroupEndpoint):
    OPERATION = OperationType.LIST_CHANNELS_IN_GROUP

    def decode(self, body: bytes) -> ListChannelsResponse:
        data = parse_service_object(body)
        payload = data.get("payload")
        if not isinstance(payload, dict) or not isinstance(payload.get("channels", []), list):
            raise ResponseParsingError("Error parsing response", body)
        return ListChannelsResponse(group=payload.get("group", self.group), channels=payload.get("channels", []))


@dataclass(frozen=True, kw_only=True)
class DeleteGroupEndpoint(_GroupEndpoint):
    OPERATION = OperationType.DELETE_GROUP
    PATH = DELETE_CHANNEL_GROUP_PATH
