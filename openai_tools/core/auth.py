"""
Authentication and endpoint resolution for OpenAI and Azure OpenAI.

An :class:`AuthProvider` knows two things: how to turn an API path into a full
URL, and which credential header to attach. The OpenAI variant joins paths onto
a base URL and uses ``Authorization: Bearer``. The Azure variant is configured
with the complete deployment URL (including ``api-version``) and uses the
``api-key`` header; its endpoint resolution ignores the path.
"""

import logging
from typing import Dict, Optional
from urllib.parse import quote, urlparse

from pydantic import BaseModel, ConfigDict, Field

from openai_tools.config.constants import (
    AZURE_HOST_SUFFIX,
    DEFAULT_BASE_URL,
    ENV_AZURE_API_KEY,
    ENV_AZURE_BASE_URL,
    ENV_OPENAI_API_KEY,
    ENV_OPENAI_BASE_URL,
    LOGGER_NAME,
)
from openai_tools.config.settings import get_env, load_env
from openai_tools.errors import ConfigError

logger = logging.getLogger(LOGGER_NAME)


def _websocket_url(url: str) -> str:
    """Swap an http(s) scheme for the matching ws(s) scheme."""
    if url.startswith("https://"):
        return "wss://" + url[len("https://"):]
    if url.startswith("http://"):
        return "ws://" + url[len("http://"):]
    return url


def check_header_value(name: str, value: str) -> None:
    for ch in value:
        code = ord(ch)
        if code < 0x20 or code == 0x7F or code > 0xFF:
            raise ConfigError(f"Value for header '{name}' contains characters not allowed in HTTP headers")


class AuthProvider(BaseModel):
    """
    Base class for the two provider variants.

    Instances are immutable and safe to share between clients and tasks.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    base_url: str

    @property
    def provider_name(self) -> str:
        raise NotImplementedError

    def endpoint(self, path: str) -> str:
        """
        Resolve an API path to a full URL.

        Args:
            path: Path relative to the API root, e.g. ``"chat/completions"``

        Returns:
            str: The absolute URL
        """
        raise NotImplementedError

    def auth_headers(self) -> Dict[str, str]:
        """Return the credential header for this provider."""
        raise NotImplementedError

    def apply_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """
        Insert the credential header into ``headers``.

        Args:
            headers: Header mapping to update in place

        Returns:
            Dict[str, str]: The same mapping, for chaining

        Raises:
            ConfigError: If the key contains bytes that are illegal in a header
        """
        for name, value in self.auth_headers().items():
            check_header_value(name, value)
            headers[name] = value
        return headers

    def realtime_url(self, model: str) -> str:
        """Return the ``wss://`` URL for a Realtime session."""
        raise NotImplementedError

    @staticmethod
    def openai(api_key: str, base_url: Optional[str] = None) -> "OpenAIAuth":
        return OpenAIAuth(api_key=api_key, base_url=base_url or DEFAULT_BASE_URL)

    @staticmethod
    def azure(api_key: str, base_url: str) -> "AzureAuth":
        return AzureAuth(api_key=api_key, base_url=base_url)

    @staticmethod
    def openai_from_env() -> "OpenAIAuth":
        """
        Build an OpenAI provider from ``OPENAI_API_KEY`` (and optionally
        ``OPENAI_BASE_URL``).

        Raises:
            ConfigError: If ``OPENAI_API_KEY`` is unset or empty
        """
        load_env()
        api_key = get_env(ENV_OPENAI_API_KEY)
        if api_key is None:
            raise ConfigError(f"{ENV_OPENAI_API_KEY} is not set")
        return OpenAIAuth(api_key=api_key, base_url=get_env(ENV_OPENAI_BASE_URL) or DEFAULT_BASE_URL)

    @staticmethod
    def azure_from_env() -> "AzureAuth":
        """
        Build an Azure provider from ``AZURE_OPENAI_API_KEY`` and
        ``AZURE_OPENAI_BASE_URL``.

        Raises:
            ConfigError: If either variable is unset or empty
        """
        load_env()
        api_key = get_env(ENV_AZURE_API_KEY)
        if api_key is None:
            raise ConfigError(f"{ENV_AZURE_API_KEY} is not set")
        base_url = get_env(ENV_AZURE_BASE_URL)
        if base_url is None:
            raise ConfigError(f"{ENV_AZURE_BASE_URL} is not set")
        return AzureAuth(api_key=api_key, base_url=base_url)

    @staticmethod
    def from_env() -> "AuthProvider":
        """
        Detect the provider from the environment.

        Azure takes precedence when ``AZURE_OPENAI_API_KEY`` is set, otherwise
        ``OPENAI_API_KEY`` is used.

        Raises:
            ConfigError: If neither provider can be configured
        """
        load_env()
        if get_env(ENV_AZURE_API_KEY) is not None:
            logger.debug("Using Azure OpenAI credentials from environment")
            return AuthProvider.azure_from_env()
        if get_env(ENV_OPENAI_API_KEY) is not None:
            logger.debug("Using OpenAI credentials from environment")
            return AuthProvider.openai_from_env()
        raise ConfigError(f"Neither {ENV_AZURE_API_KEY} nor {ENV_OPENAI_API_KEY} is set")

    @staticmethod
    def from_url(url: str, api_key: str) -> "AuthProvider":
        """
        Pick the provider from the host of ``url``.

        Hosts ending in ``.openai.azure.com`` select Azure; anything else is
        treated as an OpenAI-compatible endpoint.
        """
        host = urlparse(url).hostname or ""
        if host.endswith(AZURE_HOST_SUFFIX):
            return AzureAuth(api_key=api_key, base_url=url)
        return OpenAIAuth(api_key=api_key, base_url=url)


class OpenAIAuth(AuthProvider):
    """OpenAI (or OpenAI-compatible) endpoint with bearer authentication."""

    base_url: str = DEFAULT_BASE_URL

    @property
    def provider_name(self) -> str:
        return "openai"

    def endpoint(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def realtime_url(self, model: str) -> str:
        url = _websocket_url(self.endpoint("realtime"))
        return f"{url}?model={quote(model, safe='')}"


class AzureAuth(AuthProvider):
    """Azure OpenAI deployment addressed by its complete URL."""

    @property
    def provider_name(self) -> str:
        return "azure"

    def endpoint(self, path: str) -> str:
        # The deployment URL already names the operation and api-version.
        return self.base_url

    def auth_headers(self) -> Dict[str, str]:
        return {"api-key": self.api_key}

    def realtime_url(self, model: str) -> str:
        return _websocket_url(self.base_url)
