"""
AsyncPubNub / PubNub: main SDK clients.

Every call follows the same path: build the endpoint, validate and assemble
the signed request, send it, decode the answer.
"""

import asyncio
import itertools
from typing import Any, Optional, Sequence

import httpx

from pubnub_rest.config import Config
from pubnub_rest.crypto import Cryptor, default_cryptor
from pubnub_rest.endpoints.access_manager import GrantEndpoint, RevokeEndpoint
from pubnub_rest.endpoints.base import Endpoint
from pubnub_rest.endpoints.channel_groups import (
    AddChannelsToGroupEndpoint,
    DeleteGroupEndpoint,
    ListChannelsInGroupEndpoint,
    RemoveChannelsFromGroupEndpoint,
)
from pubnub_rest.endpoints.history import DeleteMessagesEndpoint, HistoryEndpoint, Timetoken
from pubnub_rest.endpoints.presence import GetStateEndpoint, HereNowEndpoint, SetStateEndpoint
from pubnub_rest.endpoints.publish import PublishEndpoint, TimeEndpoint
from pubnub_rest.models.channel_group import ChannelGroupResponse, ListChannelsResponse
from pubnub_rest.models.grant import GrantResponse
from pubnub_rest.models.history import DeleteMessagesResponse, HistoryResponse
from pubnub_rest.models.presence import HereNowResponse, StateResponse
from pubnub_rest.models.publish import PublishResponse, TimeResponse
from pubnub_rest.request import Request, build_request
from pubnub_rest.transport.http import HttpClient


class AsyncPubNub:
    """Async PubNub REST client (primary)."""

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cryptor: Cryptor = default_cryptor,
    ):
        self.config = config or Config()
        self.cryptor = cryptor
        self.http = HttpClient(self.config, transport=transport)
        self._sequence = itertools.count(1)

    def request_for(self, endpoint: Endpoint) -> Request:
        """Assemble the signed request without sending it."""
        return build_request(endpoint)

    async def execute(self, endpoint: Endpoint) -> Any:
        request = build_request(endpoint)
        body = await self.http.execute(request)
        return endpoint.decode(body)

    async def publish(
        self,
        channel: str,
        message: Any,
        *,
        meta: Any = None,
        should_store: Optional[bool] = None,
        ttl: Optional[int] = None,
        replicate: bool = True,
        use_post: bool = False,
    ) -> PublishResponse:
        return await self.execute(PublishEndpoint(
            config=self.config, channel=channel, message=message, meta=meta,
            should_store=should_store, ttl=ttl, replicate=replicate, use_post=use_post,
            sequence=next(self._sequence), cryptor=self.cryptor,
        ))

    async def history(
        self,
        channel: str,
        *,
        start: Optional[Timetoken] = None,
        end: Optional[Timetoken] = None,
        count: int = 100,
        reverse: bool = False,
        include_timetoken: bool = False,
    ) -> HistoryResponse:
        return await self.execute(HistoryEndpoint(
            config=self.config, channel=channel, start=start, end=end, count=count,
            reverse=reverse, include_timetoken=include_timetoken, cryptor=self.cryptor,
        ))

    async def delete_messages(
        self, channel: str, *, start: Optional[Timetoken] = None, end: Optional[Timetoken] = None,
    ) -> DeleteMessagesResponse:
        return await self.execute(DeleteMessagesEndpoint(config=self.config, channel=channel, start=start, end=end))

    async def time(self) -> TimeResponse:
        return await self.execute(TimeEndpoint(config=self.config))

    async def add_channels_to_group(self, group: str, channels: Sequence[str]) -> ChannelGroupResponse:
        return await self.execute(AddChannelsToGroupEndpoint(config=self.config, group=group, channels=tuple(channels)))

    async def remove_channels_from_group(self, group: str, channels: Sequence[str]) -> ChannelGroupResponse:
        return await self.execute(
            RemoveChannelsFromGroupEndpoint(config=self.config, group=group, channels=tuple(channels))
        )

    async def list_channels_in_group(self, group: str) -> ListChannelsResponse:
        return await self.execute(ListChannelsInGroupEndpoint(config=self.config, group=group))

    async def delete_group(self, group: str) -> ChannelGroupResponse:
        return await self.execute(DeleteGroupEndpoint(config=self.config, group=group))

    async def set_state(
        self,
        state: dict[str, Any],
        *,
        channels: Sequence[str] = (),
        channel_groups: Sequence[str] = (),
        uuid: Optional[str] = None,
    ) -> StateResponse:
        return await self.execute(SetStateEndpoint(
            config=self.config, state=state, channels=tuple(channels),
            channel_groups=tuple(channel_groups), uuid=uuid,
        ))

    async def get_state(
        self, *, channels: Sequence[str] = (), channel_groups: Sequence[str] = (), uuid: Optional[str] = None,
    ) -> StateResponse:
        return await self.execute(GetStateEndpoint(
            config=self.config, channels=tuple(channels), channel_groups=tuple(channel_groups), uuid=uuid,
        ))

    async def here_now(
        self,
        *,
        channels: Sequence[str] = (),
        channel_groups: Sequence[str] = (),
        include_uuids: bool = True,
        include_state: bool = False,
    ) -> HereNowResponse:
        return await self.execute(HereNowEndpoint(
            config=self.config, channels=tuple(channels), channel_groups=tuple(channel_groups),
            include_uuids=include_uuids, include_state=include_state,
        ))

    async def grant(
        self,
        *,
        channels: Sequence[str] = (),
        channel_groups: Sequence[str] = (),
        auth_keys: Sequence[str] = (),
        read: bool = False,
        write: bool = False,
        manage: bool = False,
        ttl: Optional[int] = None,
    ) -> GrantResponse:
        return await self.execute(GrantEndpoint(
            config=self.config, channels=tuple(channels), channel_groups=tuple(channel_groups),
            auth_keys=tuple(auth_keys), read=read, write=write, manage=manage, ttl=ttl,
        ))

    async def revoke(
        self,
        *,
        channels: Sequence[str] = (),
        channel_groups: Sequence[str] = (),
        auth_keys: Sequence[str] = (),
    ) -> GrantResponse:
        return await self.execute(RevokeEndpoint(
            config=self.config, channels=tuple(channels), channel_groups=tuple(channel_groups),
            auth_keys=tuple(auth_keys),
        ))

    async def close(self) -> None:
        await self.http.close()


class PubNub:
    """Sync wrapper around AsyncPubNub. Runs the event loop internally."""

    def __init__(self, config: Optional[Config] = None, **kwargs: Any):
        self._async = AsyncPubNub(config, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def config(self) -> Config:
        return self._async.config

    def request_for(self, endpoint: Endpoint) -> Request:
        return self._async.request_for(endpoint)

    def execute(self, endpoint: Endpoint) -> Any:
        return self._run(self._async.execute(endpoint))

    def publish(self, channel: str, message: Any, **kwargs: Any) -> PublishResponse:
        return self._run(self._async.publish(channel, message, **kwargs))

    def history(self, channel: str, **kwargs: Any) -> HistoryResponse:
        return self._run(self._async.history(channel, **kwargs))

    def delete_messages(self, channel: str, **kwargs: Any) -> DeleteMessagesResponse:
        return self._run(self._async.delete_messages(channel, **kwargs))

    def time(self) -> TimeResponse:
        return self._run(self._async.time())

    def add_channels_to_group(self, group: str, channels: Sequence[str]) -> ChannelGroupResponse:
        return self._run(self._async.add_channels_to_group(group, channels))

    def remove_channels_from_group(self, group: str, channels: Sequence[str]) -> ChannelGroupResponse:
        return self._run(self._async.remove_channels_from_group(group, channels))

    def list_channels_in_group(self, group: str) -> ListChannelsResponse:
        return self._run(self._async.list_channels_in_group(group))

    def delete_group(self, group: str) -> ChannelGroupResponse:
        return self._run(self._async.delete_group(group))

    def set_state(self, state: dict[str, Any], **kwargs: Any) -> StateResponse:
        return self._run(self._async.set_state(state, **kwargs))

    def get_state(self, **kwargs: Any) -> StateResponse:
        return self._run(self._async.get_state(**kwargs))

    def here_now(self, **kwargs: Any) -> HereNowResponse:
        return self._run(self._async.here_now(**kwargs))

    def grant(self, **kwargs: Any) -> GrantResponse:
        return self._run(self._async.grant(**kwargs))

    def revoke(self, **kwargs: Any) -> GrantResponse:
        return self._run(self._async.revoke(**kwargs))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
