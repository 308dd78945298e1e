"""
Error hierarchy shared by every component of the library.

Each public operation either returns its typed payload or raises exactly one
subclass of :class:`OpenAIToolError`. Exceptions from httpx, websockets, json
and pydantic are caught at the component boundary and re-raised as one of the
categories below, with the original exception chained as ``__cause__``.
"""

import json
from enum import Enum, auto
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Categories of errors, used by callers to decide on recovery."""

    CONFIGURATION = auto()  # Locally detected precondition failure
    TRANSPORT = auto()  # Connect/read/write failure or timeout
    CODEC = auto()  # Malformed JSON or unexpected shape
    API = auto()  # Server returned an error envelope
    AUTHENTICATION = auto()  # 401 / 403
    NOT_FOUND = auto()  # 404
    RATE_LIMIT = auto()  # 429, retry with backoff
    INVALID_REQUEST = auto()  # 400 / 409 / 422, do not retry
    SERVER = auto()  # 5xx, safe to retry
    STREAM_CLOSED = auto()  # Realtime stream ended early


class OpenAIToolError(Exception):
    """Base exception for all library errors."""

    category = ErrorCategory.API

    def __init__(self, message: str, category: Optional[ErrorCategory] = None):
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category


class ConfigError(OpenAIToolError):
    """A precondition was violated before any I/O happened."""

    category = ErrorCategory.CONFIGURATION


class TransportError(OpenAIToolError):
    """The request could not be delivered or the response could not be read."""

    category = ErrorCategory.TRANSPORT

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class CodecError(OpenAIToolError):
    """A payload could not be encoded or decoded."""

    category = ErrorCategory.CODEC

    def __init__(self, message: str, cause: Optional[BaseException] = None, payload: Optional[Any] = None):
        super().__init__(message)
        self.cause = cause
        self.payload = payload


class StreamClosedError(OpenAIToolError):
    """The realtime stream closed before the session was established."""

    category = ErrorCategory.STREAM_CLOSED


class ApiError(OpenAIToolError):
    """
    The server answered with an error.

    Attributes:
        status: HTTP status code (0 for realtime ``error`` events)
        code: Machine-readable error code, when supplied
        param: Offending parameter, when supplied
        type: Error type string from the envelope
    """

    category = ErrorCategory.API

    def __init__(
        self,
        status: int,
        message: str,
        code: Optional[str] = None,
        param: Optional[str] = None,
        type: Optional[str] = None,
    ):
        super().__init__(f"[{status}] {message}" if status else message)
        self.status = status
        self.message = message
        self.code = code
        self.param = param
        self.type = type


class AuthenticationError(ApiError):
    category = ErrorCategory.AUTHENTICATION


class NotFoundError(ApiError):
    category = ErrorCategory.NOT_FOUND


class RateLimitError(ApiError):
    category = ErrorCategory.RATE_LIMIT


class InvalidRequestError(ApiError):
    category = ErrorCategory.INVALID_REQUEST


class ServerError(ApiError):
    category = ErrorCategory.SERVER


def _error_class_for_status(status: int):
    if status in (401, 403):
        return AuthenticationError
    if status == 404:
        return NotFoundError
    if status == 429:
        return RateLimitError
    if status in (400, 409, 422):
        return InvalidRequestError
    if status >= 500:
        return ServerError
    return ApiError


def api_error_from_response(status: int, body: bytes) -> ApiError:
    """
    Build an :class:`ApiError` from a non-2xx response.

    The body is parsed as ``{"error": {"message", "type", "param", "code"}}``.
    When it does not match that envelope the raw body text becomes the message.

    Args:
        status: HTTP status code
        body: Raw response body

    Returns:
        ApiError: The status-specific subclass
    """
    error_class = _error_class_for_status(status)
    text = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(text)
    except ValueError:
        data = None

    envelope: Optional[Dict[str, Any]] = None
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        envelope = data["error"]

    if envelope is None:
        return error_class(status, text.strip() or f"HTTP {status}")

    code = envelope.get("code")
    return error_class(
        status,
        envelope.get("message") or text.strip() or f"HTTP {status}",
        code=str(code) if code is not None else None,
        param=envelope.get("param"),
        type=envelope.get("type"),
    )
