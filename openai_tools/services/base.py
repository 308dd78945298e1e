"""
Shared behaviour of the HTTP operation clients.

Every client holds an :class:`AuthProvider` and an :class:`HttpClient`,
exposes the provider constructors (``openai``, ``azure``, ``detect_provider``,
``from_url``) as class methods, and has fluent ``timeout`` and ``user_agent``
setters.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple, Type, TypeVar

import httpx

from openai_tools.config.constants import DEFAULT_TIMEOUT, LOGGER_NAME
from openai_tools.core.auth import AuthProvider, check_header_value
from openai_tools.core.http_client import HttpClient, MultipartPart, QueryValue, decode_json
from openai_tools.errors import ConfigError
from openai_tools.models.base import WireModel

logger = logging.getLogger(LOGGER_NAME)

C = TypeVar("C", bound="OperationClient")
M = TypeVar("M", bound=WireModel)


class OperationClient:
    """
    Base class for the operation clients.

    Args:
        auth: Provider to use; when omitted the provider is detected from the
            environment
        timeout: Optional request timeout in seconds
        transport: Optional httpx transport (tests inject a ``MockTransport``)
    """

    def __init__(
        self,
        auth: Optional[AuthProvider] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth = auth if auth is not None else AuthProvider.from_env()
        self.http = HttpClient(self.auth, timeout=timeout, transport=transport)

    @classmethod
    def openai(cls: Type[C], **kwargs: Any) -> C:
        """Client authenticated from ``OPENAI_API_KEY``."""
        return cls(AuthProvider.openai_from_env(), **kwargs)

    @classmethod
    def azure(cls: Type[C], **kwargs: Any) -> C:
        """Client authenticated from ``AZURE_OPENAI_API_KEY`` / ``AZURE_OPENAI_BASE_URL``."""
        return cls(AuthProvider.azure_from_env(), **kwargs)

    @classmethod
    def detect_provider(cls: Type[C], **kwargs: Any) -> C:
        """Client for whichever provider the environment configures."""
        return cls(AuthProvider.from_env(), **kwargs)

    @classmethod
    def from_url(cls: Type[C], url: str, api_key: str, **kwargs: Any) -> C:
        """Client whose provider is inferred from the host of ``url``."""
        return cls(AuthProvider.from_url(url, api_key), **kwargs)

    def timeout(self: C, seconds: Optional[float]) -> C:
        """Set the request timeout in seconds (None disables it)."""
        self.http.timeout = seconds
        return self

    def user_agent(self: C, user_agent: str) -> C:
        """
        Replace the ``User-Agent`` sent with this client's requests.

        Raises:
            ConfigError: If the value is empty or not a legal header value
        """
        if not user_agent:
            raise ConfigError("User-Agent must not be empty")
        check_header_value("User-Agent", user_agent)
        self.http.user_agent = user_agent
        return self

    async def _send(
        self,
        method: str,
        path: str,
        json_body: Optional[Any] = None,
        multipart: Optional[List[MultipartPart]] = None,
        query: Optional[Sequence[Tuple[str, QueryValue]]] = None,
    ) -> bytes:
        request = self.http.request(method, path, json_body=json_body, multipart=multipart, query=query)
        return await self.http.execute(request)

    async def _send_json(
        self,
        model: Type[M],
        method: str,
        path: str,
        json_body: Optional[Any] = None,
        multipart: Optional[List[MultipartPart]] = None,
        query: Optional[Sequence[Tuple[str, QueryValue]]] = None,
    ) -> M:
        body = await self._send(method, path, json_body=json_body, multipart=multipart, query=query)
        return model.parse_wire(decode_json(body))


def paging_query(limit: Optional[int] = None, after: Optional[str] = None) -> List[Tuple[str, QueryValue]]:
    """Build the ``limit``/``after`` cursor query shared by list endpoints."""
    query: List[Tuple[str, QueryValue]] = []
    if limit is not None:
        query.append(("limit", limit))
    if after is not None:
        query.append(("after", after))
    return query


def require_id(value: str, what: str = "object") -> str:
    """Reject an empty path identifier before it produces a malformed URL."""
    if not value:
        raise ConfigError(f"A {what} id is required")
    return value
