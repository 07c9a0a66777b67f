"""
Encoding helpers shared by the request pipeline.
"""

import base64
import hashlib
import hmac
import json
import uuid
from typing import Any, Mapping
from urllib.parse import quote

# Characters the service accepts literally in path segments and query values.
URL_SAFE = "$,:;@"


def url_encode(value: str) -> str:
    """Percent-encode a path segment or query value the way the service expects.

    Space becomes ``%20`` and brackets and quotes are escaped. Commas stay
    literal so channel lists survive.
    """
    return quote(value, safe=URL_SAFE)


def pam_encode(value: str) -> str:
    """Strict encoding used inside the signing string: only unreserved characters survive."""
    return quote(value, safe="").replace("~", "%7E")


def prepare_pam_params(query: Mapping[str, str]) -> str:
    """Canonical query string for signing. Sorted by key so insertion order never matters."""
    return "&".join(f"{key}={pam_encode(str(query[key]))}" for key in sorted(query))


def hmac_sha256(secret: str, message: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


def value_as_string(value: Any) -> str:
    """Compact JSON for message, meta and state payloads."""
    return json.dumps(value, separators=(",", ":"))


def new_uuid() -> str:
    return f"pn-{uuid.uuid4()}"


def join_channels(channels: list[str]) -> str:
    """Comma-joined, individually encoded channel list. Empty list maps to ``,``."""
    if not channels:
        return ","
    return ",".join(url_encode(ch) for ch in channels)
