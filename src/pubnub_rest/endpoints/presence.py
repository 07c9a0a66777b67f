"""
Presence: per-uuid state and channel occupancy.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from pubnub_rest.endpoints.base import Endpoint, parse_service_object
from pubnub_rest.enums import OperationType
from pubnub_rest.errors import STR_MISSING_CHANNEL_OR_GROUP, STR_MISSING_STATE, ResponseParsingError
from pubnub_rest.models.presence import HereNowChannel, HereNowOccupant, HereNowResponse, StateResponse
from pubnub_rest.utils import join_channels, url_encode, value_as_string

STATE_PATH = "/v2/presence/sub-key/{sub_key}/channel/{channels}/uuid/{uuid}"
SET_STATE_PATH = STATE_PATH + "/data"
HERE_NOW_PATH = "/v2/presence/sub-key/{sub_key}/channel/{channels}"


@dataclass(frozen=True, kw_only=True)
class _PresenceEndpoint(Endpoint):
    channels: Sequence[str] = ()
    channel_groups: Sequence[str] = ()

    def validate(self) -> None:
        super().validate()
        if not self.channels and not self.channel_groups:
            self.fail(STR_MISSING_CHANNEL_OR_GROUP)

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        if self.channel_groups:
            query["channel-group"] = ",".join(url_encode(g) for g in self.channel_groups)
        return query


@dataclass(frozen=True, kw_only=True)
class SetStateEndpoint(_PresenceEndpoint):
    OPERATION = OperationType.SET_STATE

    state: Optional[dict[str, Any]] = None
    uuid: Optional[str] = None

    def validate(self) -> None:
        super().validate()
        if self.state is None:
            self.fail(STR_MISSING_STATE)

    def build_path(self) -> str:
        return SET_STATE_PATH.format(
            sub_key=self.config.subscribe_key,
            channels=join_channels(list(self.channels)),
            uuid=url_encode(self.uuid or self.config.uuid),
        )

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        # escaped after signing, see pubnub_rest.request
        query["state"] = value_as_string(self.state)
        return query

    def decode(self, body: bytes) -> StateResponse:
        data = parse_service_object(body)
        payload = data.get("payload", {})
        if not isinstance(payload, dict):
            raise ResponseParsingError("Error parsing response", body)
        return StateResponse(uuid=self.uuid or self.config.uuid, state=payload)


@dataclass(frozen=True, kw_only=True)
class GetStateEndpoint(_PresenceEndpoint):
    OPERATION = OperationType.GET_STATE

    uuid: Optional[str] = None

    def build_path(self) -> str:
        return STATE_PATH.format(
            sub_key=self.config.subscribe_key,
            channels=join_channels(list(self.channels)),
            uuid=url_encode(self.uuid or self.config.uuid),
        )

    def decode(self, body: bytes) -> StateResponse:
        data = parse_service_object(body)
        payload = data.get("payload", {})
        if not isinstance(payload, dict):
            raise ResponseParsingError("Error parsing response", body)
        if "channel" in data:
            state = {data["channel"]: payload}
        else:
            state = payload.get("channels", {})
        return StateResponse(uuid=data.get("uuid", self.uuid or self.config.uuid), state=state)


@dataclass(frozen=True, kw_only=True)
class HereNowEndpoint(_PresenceEndpoint):
    OPERATION = OperationType.HERE_NOW

    include_uuids: bool = True
    include_state: bool = False

    def build_path(self) -> str:
        return HERE_NOW_PATH.format(
            sub_key=self.config.subscribe_key,
            channels=join_channels(list(self.channels)),
        )

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        if not self.include_uuids:
            query["disable_uuids"] = "1"
        if self.include_state:
            query["state"] = "1"
        return query

    def decode(self, body: bytes) -> HereNowResponse:
        data = parse_service_object(body)
        payload = data.get("payload")
        if isinstance(payload, dict) and "channels" in payload:
            channels = [_here_now_channel(name, info) for name, info in payload["channels"].items()]
            return HereNowResponse(
                total_channels=payload.get("total_channels", len(channels)),
                total_occupancy=payload.get("total_occupancy", 0),
                channels=channels,
            )
        if len(self.channels) == 1 and "occupancy" in data:
            channel = _here_now_channel(self.channels[0], data)
            return HereNowResponse(total_channels=1, total_occupancy=channel.occupancy, channels=[channel])
        raise ResponseParsingError("Error parsing response", body)


def _here_now_channel(name: str, info: dict[str, Any]) -> HereNowChannel:
    occupants = []
    for entry in info.get("uuids", []):
        if isinstance(entry, dict):
            occupants.append(HereNowOccupant(uuid=entry.get("uuid", ""), state=entry.get("state")))
        else:
            occupants.append(HereNowOccupant(uuid=str(entry)))
    return HereNowChannel(channel=name, occupancy=info.get("occupancy", 0), occupants=occupants)
