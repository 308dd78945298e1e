"""
Async HTTP transport facade.

Every operation client builds an :class:`HttpRequest` and hands it to
:meth:`HttpClient.execute`. The facade owns header assembly, query encoding,
JSON and multipart bodies, timeouts, and the mapping of transport failures and
non-2xx responses onto the library's error hierarchy.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode

import httpx

from openai_tools.config.constants import DEFAULT_TIMEOUT, LOGGER_NAME, USER_AGENT
from openai_tools.core.auth import AuthProvider
from openai_tools.errors import CodecError, ConfigError, TransportError, api_error_from_response

logger = logging.getLogger(LOGGER_NAME)

QueryValue = Union[str, int, float, bool]


@dataclass
class MultipartPart:
    """
    One field of a ``multipart/form-data`` body.

    Text fields leave ``filename`` and ``content_type`` unset; file fields set
    both.
    """

    name: str
    data: Union[bytes, str]
    filename: Optional[str] = None
    content_type: Optional[str] = None

    @classmethod
    def text(cls, name: str, value: Any) -> "MultipartPart":
        return cls(name=name, data=str(value))

    @classmethod
    def file(cls, name: str, data: bytes, filename: str, content_type: str) -> "MultipartPart":
        return cls(name=name, data=data, filename=filename, content_type=content_type)


@dataclass
class HttpRequest:
    """A fully described request, independent of the HTTP library."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    json_body: Optional[Any] = None
    multipart: Optional[List[MultipartPart]] = None
    query: Optional[Sequence[Tuple[str, QueryValue]]] = None
    timeout: Optional[float] = None

    def full_url(self) -> str:
        """Return the URL with the percent-encoded query appended."""
        if not self.query:
            return self.url
        pairs = [(key, _query_value(value)) for key, value in self.query]
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{urlencode(pairs)}"


def _query_value(value: QueryValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _redact(text: str, secret: str) -> str:
    if secret:
        return text.replace(secret, "[API_KEY_HIDDEN]")
    return text


class HttpClient:
    """
    Executes :class:`HttpRequest` objects with httpx.

    Args:
        auth: Provider that supplies the credential header
        timeout: Default timeout in seconds applied when a request sets none
        transport: Optional httpx transport, used by tests to inject a
            ``httpx.MockTransport``
    """

    def __init__(
        self,
        auth: AuthProvider,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth = auth
        self.timeout = timeout
        self.transport = transport
        self.user_agent = USER_AGENT

    def build_headers(self, json_body: bool = False) -> Dict[str, str]:
        """
        Assemble the default headers for a request.

        Raises:
            ConfigError: If the credential contains header-illegal bytes
        """
        headers = {"User-Agent": self.user_agent}
        if json_body:
            headers["Content-Type"] = "application/json"
        return self.auth.apply_headers(headers)

    def request(
        self,
        method: str,
        path: str,
        json_body: Optional[Any] = None,
        multipart: Optional[List[MultipartPart]] = None,
        query: Optional[Sequence[Tuple[str, QueryValue]]] = None,
    ) -> HttpRequest:
        """Describe a request against ``path`` with default headers applied."""
        return HttpRequest(
            method=method,
            url=self.auth.endpoint(path),
            headers=self.build_headers(json_body=json_body is not None),
            json_body=json_body,
            multipart=multipart,
            query=query,
            timeout=self.timeout,
        )

    async def execute(self, request: HttpRequest) -> bytes:
        """
        Send ``request`` and return the raw body of a 2xx response.

        Args:
            request: The request to send

        Returns:
            bytes: The response body

        Raises:
            CodecError: If the JSON body cannot be serialized
            TransportError: On connection failure or timeout
            ApiError: On a non-2xx response
        """
        url = request.full_url()
        kwargs: Dict[str, Any] = {"headers": dict(request.headers)}

        if request.json_body is not None:
            try:
                content = json.dumps(request.json_body)
            except (TypeError, ValueError) as e:
                raise CodecError(f"Failed to serialize request body: {e}", cause=e) from e
            kwargs["content"] = content.encode("utf-8")
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"{request.method} {url} body: {_redact(content, self.auth.api_key)}")
        elif request.multipart is not None:
            kwargs["files"] = [self._multipart_field(part) for part in request.multipart]
            logger.debug(f"{request.method} {url} multipart fields: {[p.name for p in request.multipart]}")
        else:
            logger.debug(f"{request.method} {url}")

        timeout = request.timeout if request.timeout is not None else self.timeout
        client_kwargs: Dict[str, Any] = {"timeout": timeout}
        if self.transport is not None:
            client_kwargs["transport"] = self.transport

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.request(request.method, url, **kwargs)
                body = await response.aread()
        except httpx.TimeoutException as e:
            logger.error(f"Request to {url} timed out: {e}")
            raise TransportError(f"Request timed out: {e}", cause=e) from e
        except httpx.HTTPError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request failed: {e}", cause=e) from e

        if not 200 <= response.status_code < 300:
            error = api_error_from_response(response.status_code, body)
            logger.warning(f"{request.method} {url} returned {response.status_code}: {error.message}")
            raise error

        return body

    @staticmethod
    def _multipart_field(part: MultipartPart):
        data = part.data.encode("utf-8") if isinstance(part.data, str) else part.data
        if part.filename is None:
            return (part.name, (None, data))
        return (part.name, (part.filename, data, part.content_type or "application/octet-stream"))


def decode_json(body: bytes) -> Any:
    """
    Parse a response body as JSON.

    Raises:
        CodecError: If the body is not valid JSON
    """
    try:
        return json.loads(body)
    except ValueError as e:
        raise CodecError(f"Failed to decode response body: {e}", cause=e, payload=body[:512]) from e


def require(value: Any, message: str) -> Any:
    """Raise :class:`ConfigError` with ``message`` when ``value`` is empty."""
    if value is None or (hasattr(value, "__len__") and len(value) == 0):
        raise ConfigError(message)
    return value
