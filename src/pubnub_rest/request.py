"""
Request assembly.

Turns an endpoint into the final request target. The order of steps matters:
the signature is computed over the query before transmission-time escaping,
while the transmitted query carries the escaped values.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from pubnub_rest.endpoints.base import Endpoint
from pubnub_rest.enums import OperationType
from pubnub_rest.signer import Signature, sign
from pubnub_rest.utils import url_encode

logger = logging.getLogger(__name__)

SCHEME = "https"


class Request(BaseModel):
    model_config = {"frozen": True}

    operation: OperationType
    method: str
    path: str
    query: dict[str, str]
    query_string: str
    url: str
    body: Optional[bytes] = None
    signature: Optional[Signature] = None


def build_query(endpoint: Endpoint) -> dict[str, str]:
    """Endpoint query plus the global filter expression: the canonical (pre-escape) form."""
    query = endpoint.build_query()
    if endpoint.config.filter_expression:
        query["filter-expr"] = endpoint.config.filter_expression
    return query


def escape_query(operation: OperationType, query: dict[str, str]) -> dict[str, str]:
    escaped = dict(query)
    if operation == OperationType.PUBLISH and escaped.get("meta"):
        escaped["meta"] = url_encode(escaped["meta"])
    if operation == OperationType.SET_STATE:
        escaped["state"] = url_encode(escaped.get("state", ""))
    if escaped.get("uuid"):
        escaped["uuid"] = url_encode(escaped["uuid"])
    if escaped.get("filter-expr"):
        escaped["filter-expr"] = url_encode(escaped["filter-expr"])
    # auth goes out as given
    return escaped


def serialize_query(query: dict[str, str], signature: Optional[Signature] = None) -> str:
    text = "&".join(f"{key}={value}" for key, value in query.items())
    if signature is not None:
        text += f"&signature={signature.value}"
    return text


def build_request(endpoint: Endpoint, timestamp: Optional[int] = None) -> Request:
    """Validate the endpoint and assemble its signed request target.

    Errors raised while building the path or query propagate unchanged.
    """
    endpoint.validate()
    config = endpoint.config
    operation = endpoint.operation_type()

    path = endpoint.build_path()
    query = build_query(endpoint)

    signature = None
    if config.secret_key:
        query, signature = sign(config, operation, path, query, timestamp)

    transmitted = escape_query(operation, query)
    query_string = serialize_query(transmitted, signature)
    url = f"{SCHEME}://{config.origin}{path}?{query_string.replace('#', '%23')}"
    logger.debug("%s %s", endpoint.http_method(), url)

    return Request(
        operation=operation,
        method=endpoint.http_method(),
        path=path,
        query=transmitted,
        query_string=query_string,
        url=url,
        body=endpoint.build_body(),
        signature=signature,
    )
