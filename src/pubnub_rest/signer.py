"""
Access-manager request signing.

Requests are signed only when the config carries a secret key. The signing
string is

    <subscribe-key>\\n<publish-key>\\n<segment>\\n<canonical-query>

where segment is ``grant`` for grant/revoke and the request path otherwise.
The canonical query is sorted by key, so any two parameter sets with the
same pairs produce the same signature.
"""

import logging
import time
from typing import Mapping, Optional

from pydantic import BaseModel

from pubnub_rest.config import Config
from pubnub_rest.enums import ACCESS_MANAGER_OPERATIONS, OperationType
from pubnub_rest.utils import hmac_sha256, prepare_pam_params

logger = logging.getLogger(__name__)


class Signature(BaseModel):
    model_config = {"frozen": True}

    timestamp: int
    signed_input: str
    value: str


def signing_segment(operation: OperationType, path: str) -> str:
    if operation in ACCESS_MANAGER_OPERATIONS:
        return "grant"
    return path


def signing_input(config: Config, operation: OperationType, path: str, query: Mapping[str, str]) -> str:
    return (
        f"{config.subscribe_key}\n{config.publish_key}\n"
        f"{signing_segment(operation, path)}\n{prepare_pam_params(query)}"
    )


def sign(
    config: Config,
    operation: OperationType,
    path: str,
    query: Mapping[str, str],
    timestamp: Optional[int] = None,
) -> tuple[dict[str, str], Signature]:
    """Return a copy of query with ``timestamp`` added, and the signature over it.

    The input mapping is left untouched. The signature itself never enters the
    signed query; the caller appends it to the transmitted string.
    """
    if not config.secret_key:
        raise ValueError("sign() requires a secret key")
    ts = int(time.time()) if timestamp is None else timestamp
    signed_query = dict(query)
    signed_query["timestamp"] = str(ts)

    text = signing_input(config, operation, path, signed_query)
    logger.debug("signed input: %r", text)
    return signed_query, Signature(timestamp=ts, signed_input=text, value=hmac_sha256(config.secret_key, text))
