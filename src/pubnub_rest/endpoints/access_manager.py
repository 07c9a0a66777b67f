"""
Access manager: grant and revoke read/write/manage permissions.

Both operations require the secret key; the request is always signed with
the literal ``grant`` segment in place of the path.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from pubnub_rest.endpoints.base import Endpoint, parse_service_object
from pubnub_rest.enums import OperationType
from pubnub_rest.errors import STR_MISSING_PUB_KEY, STR_MISSING_SECRET_KEY, ResponseParsingError
from pubnub_rest.models.grant import GrantResponse
from pubnub_rest.utils import url_encode

GRANT_PATH = "/v2/auth/grant/sub-key/{sub_key}"


def _flag(value: bool) -> str:
    return "1" if value else "0"


@dataclass(frozen=True, kw_only=True)
class GrantEndpoint(Endpoint):
    OPERATION = OperationType.GRANT

    channels: Sequence[str] = ()
    channel_groups: Sequence[str] = ()
    auth_keys: Sequence[str] = ()
    read: bool = False
    write: bool = False
    manage: bool = False
    ttl: Optional[int] = None

    def validate(self) -> None:
        super().validate()
        if not self.config.secret_key:
            self.fail(STR_MISSING_SECRET_KEY)
        if not self.config.publish_key:
            self.fail(STR_MISSING_PUB_KEY)

    def build_path(self) -> str:
        return GRANT_PATH.format(sub_key=self.config.subscribe_key)

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        query["r"] = _flag(self.read)
        query["w"] = _flag(self.write)
        query["m"] = _flag(self.manage)
        if self.channels:
            query["channel"] = ",".join(url_encode(ch) for ch in self.channels)
        if self.channel_groups:
            query["channel-group"] = ",".join(url_encode(g) for g in self.channel_groups)
        if self.auth_keys:
            query["auth"] = ",".join(self.auth_keys)
        if self.ttl is not None:
            query["ttl"] = str(self.parse_int("ttl", self.ttl))
        return query

    def decode(self, body: bytes) -> GrantResponse:
        data = parse_service_object(body)
        payload = data.get("payload")
        if not isinstance(payload, dict):
            raise ResponseParsingError("Error parsing response", body)

        channels: dict[str, Any] = dict(payload.get("channels", {}))
        if "channel" in payload:
            channels[payload["channel"]] = payload.get("auths", {})
        groups = payload.get("channel-groups", {})
        if isinstance(groups, str):
            groups = {groups: payload.get("auths", {})}

        return GrantResponse(
            level=payload.get("level", ""),
            subscribe_key=payload.get("subscribe_key", ""),
            ttl=payload.get("ttl"),
            channels=channels,
            channel_groups=groups,
            auth_keys=payload.get("auths", {}),
        )


@dataclass(frozen=True, kw_only=True)
class RevokeEndpoint(GrantEndpoint):
    OPERATION = OperationType.REVOKE

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        query["r"] = query["w"] = query["m"] = "0"
        return query
