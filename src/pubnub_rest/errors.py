"""
PubNub REST error types.

Validation errors are raised before any network call; parsing errors carry
the raw response body for diagnostics.
"""

from typing import Any, Optional

STR_MISSING_SUB_KEY = "Missing Subscribe Key"
STR_MISSING_PUB_KEY = "Missing Publish Key"
STR_MISSING_SECRET_KEY = "Missing Secret Key"
STR_MISSING_CHANNEL = "Missing Channel"
STR_MISSING_CHANNEL_GROUP = "Missing Channel Group"
STR_MISSING_CHANNEL_OR_GROUP = "Missing Channel or Channel Group"
STR_MISSING_MESSAGE = "Missing Message"
STR_MISSING_STATE = "Missing State"


class PubNubError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ValidationError(PubNubError):
    """An operation is missing a required field or has a malformed one."""

    def __init__(self, operation: str, message: str):
        super().__init__("validation_error", f"{operation}: {message}", {"operation": operation})
        self.operation = operation
        self.reason = message


class ResponseParsingError(PubNubError):
    """The service answered with something that does not have the expected shape."""

    def __init__(self, message: str, body: bytes = b"", original: Optional[BaseException] = None):
        if isinstance(body, str):
            body = body.encode("utf-8")
        text = message if original is None else f"{message}: {original}"
        super().__init__("response_parsing_error", text)
        self.body = body
        self.original = original


class DecryptionError(PubNubError):
    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__("decryption_error", message)
        self.original = original


class ServerError(PubNubError):
    def __init__(self, status: int, body: bytes = b""):
        text = body.decode("utf-8", errors="replace")[:200]
        super().__init__("http_error", f"HTTP {status}: {text}", {"status": status})
        self.status = status
        self.body = body


class ConnectionError(PubNubError):
    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__("connection_error", message)
        self.original = original
