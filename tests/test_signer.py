import pytest

from pubnub_rest.config import Config
from pubnub_rest.enums import OperationType
from pubnub_rest.signer import sign, signing_input
from pubnub_rest.utils import hmac_sha256


def make_config(**overrides) -> Config:
    fields = dict(subscribe_key="sub-c-test", publish_key="pub-c-test", secret_key="sec-c-test", uuid="tester")
    fields.update(overrides)
    return Config(**fields)


def test_signature_ignores_insertion_order():
    config = make_config()
    first = {"pnsdk": "sdk", "uuid": "tester", "count": "100", "reverse": "false"}
    second = dict(reversed(list(first.items())))

    _, sig_a = sign(config, OperationType.HISTORY, "/v2/history/sub-key/sub-c-test/channel/ch", first, 1500000000)
    _, sig_b = sign(config, OperationType.HISTORY, "/v2/history/sub-key/sub-c-test/channel/ch", second, 1500000000)

    assert sig_a.signed_input == sig_b.signed_input
    assert sig_a.value == sig_b.value


def test_signing_input_layout():
    config = make_config()
    path = "/v2/history/sub-key/sub-c-test/channel/ch"
    _, signature = sign(config, OperationType.HISTORY, path, {"uuid": "tester", "pnsdk": "sdk"}, 1500000000)

    assert signature.signed_input == (
        "sub-c-test\npub-c-test\n"
        "/v2/history/sub-key/sub-c-test/channel/ch\n"
        "pnsdk=sdk&timestamp=1500000000&uuid=tester"
    )
    assert signature.value == hmac_sha256("sec-c-test", signature.signed_input)
    assert signature.timestamp == 1500000000


@pytest.mark.parametrize("operation", [OperationType.GRANT, OperationType.REVOKE])
def test_access_manager_signs_grant_segment(operation):
    config = make_config()
    text = signing_input(config, operation, "/v2/auth/grant/sub-key/sub-c-test", {"r": "1"})
    assert text == "sub-c-test\npub-c-test\ngrant\nr=1"


def test_sign_returns_new_query():
    config = make_config()
    query = {"uuid": "tester"}
    signed, _ = sign(config, OperationType.TIME, "/time/0", query, 42)

    assert query == {"uuid": "tester"}
    assert signed == {"uuid": "tester", "timestamp": "42"}


def test_fixed_timestamp_gives_same_derivation():
    config = make_config()
    query = {"uuid": "tester", "auth": "a,b [c]"}
    _, first = sign(config, OperationType.PUBLISH, "/publish/p/s/0/ch/0/1", query, 7)
    _, second = sign(config, OperationType.PUBLISH, "/publish/p/s/0/ch/0/1", query, 7)
    assert first == second


def test_signature_uses_pre_escape_values():
    config = make_config()
    _, signature = sign(config, OperationType.TIME, "/time/0", {"uuid": "a b"}, 1)
    # pam encoding applied exactly once
    assert signature.signed_input.endswith("timestamp=1&uuid=a%20b")


def test_sign_requires_secret_key():
    with pytest.raises(ValueError):
        sign(make_config(secret_key=None), OperationType.TIME, "/time/0", {}, 1)


def test_timestamp_defaults_to_wall_clock(monkeypatch):
    monkeypatch.setattr("pubnub_rest.signer.time.time", lambda: 1234.9)
    signed, signature = sign(make_config(), OperationType.TIME, "/time/0", {}, None)
    assert signature.timestamp == 1234
    assert signed["timestamp"] == "1234"
