"""
Client configuration.

A single Config is shared by every request built from a client. The request
pipeline only reads it; callers may change fields (e.g. rotate auth_key)
between requests.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from pubnub_rest.utils import new_uuid

DEFAULT_ORIGIN = "ps.pndsk.com"
CONFIG_FILE = Path.home() / ".pubnub" / "config.json"

ENV_FIELDS = {
    "PUBNUB_SUBSCRIBE_KEY": "subscribe_key",
    "PUBNUB_PUBLISH_KEY": "publish_key",
    "PUBNUB_SECRET_KEY": "secret_key",
    "PUBNUB_AUTH_KEY": "auth_key",
    "PUBNUB_CIPHER_KEY": "cipher_key",
    "PUBNUB_UUID": "uuid",
    "PUBNUB_ORIGIN": "origin",
    "PUBNUB_FILTER_EXPRESSION": "filter_expression",
}


class Config(BaseModel):
    subscribe_key: str = ""
    publish_key: str = ""
    secret_key: Optional[str] = None
    uuid: str = Field(default_factory=new_uuid)
    auth_key: Optional[str] = None
    cipher_key: Optional[str] = None
    filter_expression: Optional[str] = None
    origin: str = DEFAULT_ORIGIN
    connect_timeout: float = 5.0
    non_subscribe_request_timeout: float = 10.0


def load_config(path: Optional[Path] = None, env: Optional[dict[str, str]] = None) -> Config:
    """Read the JSON config file, then overlay PUBNUB_* environment variables."""
    data: dict[str, Any] = {}
    try:
        data = json.loads((path or CONFIG_FILE).read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        pass
    if not isinstance(data, dict):
        data = {}
    environ = os.environ if env is None else env
    for var, field in ENV_FIELDS.items():
        if environ.get(var):
            data[field] = environ[var]
    known = {k: v for k, v in data.items() if k in Config.model_fields}
    return Config(**known)


def save_config(config: Config, path: Optional[Path] = None) -> Path:
    target = path or CONFIG_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(config.model_dump(exclude_none=True), indent=2))
    return target
