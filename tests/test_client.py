"""Client tests against a mocked HTTP transport."""

import json

import httpx
import pytest

from pubnub_rest import AsyncPubNub, Config, PubNub
from pubnub_rest.crypto import default_cryptor
from pubnub_rest.errors import ConnectionError, ResponseParsingError, ServerError, ValidationError


def make_config(**overrides) -> Config:
    fields = dict(subscribe_key="sub-c-test", publish_key="pub-c-test", uuid="tester")
    fields.update(overrides)
    return Config(**fields)


class Recorder:
    """MockTransport handler that records requests and replies with a fixed answer."""

    def __init__(self, status: int = 200, body: bytes = b"[]"):
        self.status = status
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, content=self.body)


class TestAsyncClient:
    @pytest.mark.asyncio
    async def test_history(self):
        recorder = Recorder(body=b'[["hey1",{"timetoken":123,"m":"x"}],5,10]')
        client = AsyncPubNub(make_config(), transport=httpx.MockTransport(recorder))
        try:
            result = await client.history("ch", count=2, include_timetoken=True)
        finally:
            await client.close()

        assert [m.message for m in result.messages] == ["hey1", "x"]
        assert result.messages[1].timetoken == 123
        sent = recorder.requests[0]
        assert sent.method == "GET"
        assert sent.url.host == "ps.pndsk.com"
        assert sent.url.path == "/v2/history/sub-key/sub-c-test/channel/ch"
        assert sent.url.params["count"] == "2"
        assert sent.url.params["include_token"] == "true"

    @pytest.mark.asyncio
    async def test_encrypted_history(self):
        ciphertext = default_cryptor.encrypt("enigma", json.dumps({"text": "hey"}))
        body = json.dumps([[ciphertext, {"pn_other": ciphertext}], 1, 2]).encode()
        client = AsyncPubNub(make_config(cipher_key="enigma"), transport=httpx.MockTransport(Recorder(body=body)))
        try:
            result = await client.history("ch")
        finally:
            await client.close()
        assert [m.message for m in result.messages] == [{"text": "hey"}, {"text": "hey"}]

    @pytest.mark.asyncio
    async def test_signed_request_reaches_transport(self):
        recorder = Recorder(body=b"[15000000000000000]")
        client = AsyncPubNub(make_config(secret_key="sec-c-test"), transport=httpx.MockTransport(recorder))
        try:
            result = await client.time()
        finally:
            await client.close()
        assert result.timetoken == 15000000000000000
        params = recorder.requests[0].url.params
        assert "signature" in params
        assert "timestamp" in params

    @pytest.mark.asyncio
    async def test_hash_in_auth_keeps_signature(self):
        recorder = Recorder(body=b"[1]")
        config = make_config(secret_key="k", auth_key="a#b")
        client = AsyncPubNub(config, transport=httpx.MockTransport(recorder))
        try:
            await client.time()
        finally:
            await client.close()
        sent = recorder.requests[0]
        assert sent.url.fragment == ""
        assert sent.url.params["auth"] == "a#b"
        assert "timestamp" in sent.url.params
        assert "signature" in sent.url.params

    @pytest.mark.asyncio
    async def test_filter_expression_reaches_transport_whole(self):
        recorder = Recorder()
        config = make_config(filter_expression="a == 'x' && b > 1")
        client = AsyncPubNub(config, transport=httpx.MockTransport(recorder))
        try:
            await client.history("ch")
        finally:
            await client.close()
        params = recorder.requests[0].url.params
        assert params["filter-expr"] == "a == 'x' && b > 1"
        assert params["count"] == "100"

    @pytest.mark.asyncio
    async def test_publish_sequence_increments(self):
        recorder = Recorder(body=b'[1,"Sent","14981595400555832"]')
        client = AsyncPubNub(make_config(), transport=httpx.MockTransport(recorder))
        try:
            first = await client.publish("ch", "hey")
            await client.publish("ch", {"a": 1}, use_post=True)
        finally:
            await client.close()
        assert first.timetoken == 14981595400555832
        assert [r.url.params["seqn"] for r in recorder.requests] == ["1", "2"]
        assert recorder.requests[1].method == "POST"
        assert recorder.requests[1].content == b'{"a":1}'

    @pytest.mark.asyncio
    async def test_validation_error_before_transport(self):
        recorder = Recorder()
        client = AsyncPubNub(make_config(subscribe_key=""), transport=httpx.MockTransport(recorder))
        try:
            with pytest.raises(ValidationError, match="History: Missing Subscribe Key"):
                await client.history("ch")
            with pytest.raises(ValidationError):
                await client.publish("ch", "hey")
            with pytest.raises(ValidationError):
                await client.here_now(channels=["ch"])
        finally:
            await client.close()
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_server_error(self):
        client = AsyncPubNub(make_config(), transport=httpx.MockTransport(Recorder(403, b'{"error":"Forbidden"}')))
        try:
            with pytest.raises(ServerError) as exc:
                await client.history("ch")
        finally:
            await client.close()
        assert exc.value.status == 403
        assert "403" in str(exc.value)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no such host", request=request)

        client = AsyncPubNub(make_config(), transport=httpx.MockTransport(fail))
        try:
            with pytest.raises(ConnectionError) as exc:
                await client.time()
        finally:
            await client.close()
        assert "Failed to execute request" in str(exc.value)
        assert isinstance(exc.value.original, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_malformed_history(self):
        client = AsyncPubNub(make_config(), transport=httpx.MockTransport(Recorder(body=b'{"not":"history"}')))
        try:
            with pytest.raises(ResponseParsingError):
                await client.history("ch")
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_auth_key_rotation_between_requests(self):
        recorder = Recorder(body=b"[1]")
        config = make_config(auth_key="first")
        client = AsyncPubNub(config, transport=httpx.MockTransport(recorder))
        try:
            await client.time()
            config.auth_key = "second"
            await client.time()
        finally:
            await client.close()
        assert [r.url.params["auth"] for r in recorder.requests] == ["first", "second"]


class TestSyncClient:
    def test_channel_group_calls(self):
        recorder = Recorder(body=b'{"status":200,"payload":{"channels":["a"],"group":"cg"},"error":false}')
        pn = PubNub(make_config(), transport=httpx.MockTransport(recorder))
        try:
            result = pn.list_channels_in_group("cg")
        finally:
            pn.close()
        assert result.channels == ["a"]
        assert recorder.requests[0].url.path == "/v1/channel-registration/sub-key/sub-c-test/channel-group/cg"

    def test_request_for_does_not_send(self):
        from pubnub_rest.endpoints.history import HistoryEndpoint

        recorder = Recorder()
        pn = PubNub(make_config(), transport=httpx.MockTransport(recorder))
        try:
            request = pn.request_for(HistoryEndpoint(config=pn.config, channel="ch"))
        finally:
            pn.close()
        assert request.url.startswith("https://ps.pndsk.com/v2/history/")
        assert recorder.requests == []
