"""
Core plumbing shared by the operation clients.

- auth: :class:`AuthProvider` with OpenAI and Azure variants
- http_client: the async HTTP transport facade built on httpx
"""

from openai_tools.core.auth import AuthProvider, AzureAuth, OpenAIAuth
from openai_tools.core.http_client import HttpClient, HttpRequest, MultipartPart

__all__ = ["AuthProvider", "AzureAuth", "OpenAIAuth", "HttpClient", "HttpRequest", "MultipartPart"]
