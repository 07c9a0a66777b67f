"""
HTTP transport: executes an assembled Request and returns the raw body.
"""

import logging
import string
from typing import Optional
from urllib.parse import quote

import httpx

from pubnub_rest.config import Config
from pubnub_rest.errors import ConnectionError, ServerError
from pubnub_rest.request import SCHEME, Request
from pubnub_rest.version import __version__

logger = logging.getLogger(__name__)

# Everything printable except "#" goes out as assembled; "#" would start a fragment.
RAW_TARGET_SAFE = "".join(c for c in string.punctuation if c != "#")


def request_target(origin: str, request: Request) -> httpx.URL:
    """Build the httpx URL from the assembled path and query without re-parsing the query."""
    raw = quote(f"{request.path}?{request.query_string}", safe=RAW_TARGET_SAFE)
    return httpx.URL(f"{SCHEME}://{origin}").copy_with(raw_path=raw.encode("ascii"))


class HttpClient:
    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._client = httpx.AsyncClient(
            headers={"User-Agent": f"pubnub-rest/{__version__}", "Accept": "application/json"},
            timeout=httpx.Timeout(config.non_subscribe_request_timeout, connect=config.connect_timeout),
            transport=transport,
        )

    def _headers(self, request: Request) -> dict[str, str]:
        if request.body is not None:
            return {"Content-Type": "application/json"}
        return {}

    async def execute(self, request: Request) -> bytes:
        try:
            resp = await self._client.request(
                request.method,
                request_target(self._config.origin, request),
                content=request.body,
                headers=self._headers(request),
            )
        except httpx.HTTPError as e:
            logger.error(f"{request.operation.value} request failed: {e}")
            raise ConnectionError(f"Failed to execute request: {e}", e) from e
        if resp.status_code >= 400:
            raise ServerError(resp.status_code, resp.content)
        return resp.content

    async def close(self) -> None:
        await self._client.aclose()
