"""
openai_tools - Typed async client for OpenAI-compatible APIs

This library provides typed access to the OpenAI HTTP API (and Azure OpenAI
deployments) and to the Realtime API over WebSocket.

Architecture Overview:
- An immutable auth provider resolves endpoints and credential headers for
  OpenAI or Azure
- A thin async transport facade built on httpx executes every HTTP request
- Operation clients build requests through fluent setters and parse responses
  into pydantic models
- A Realtime session engine exposes the WebSocket protocol as typed events

Key Components:
- config: Constants, environment loading and opt-in logging setup
- core: Auth provider and HTTP transport facade
- models: Messages, tools, structured-output schemas and response models
- services: One client per operation family (chat, responses, embeddings,
  files, batches, fine-tuning, moderations, images, audio, models,
  conversations)
- realtime: Realtime session connector, events and handler registry
- errors: The error hierarchy every operation raises

Getting Started:
1. Set up environment variables (or a .env file):
   - OPENAI_API_KEY: Your OpenAI API key
   - AZURE_OPENAI_API_KEY / AZURE_OPENAI_BASE_URL: For Azure deployments
   - LOG_LEVEL: Logging level used by configure_logging (default INFO)

2. Make a request:
   ```python
   from openai_tools import ChatCompletion, Message, Role

   chat = ChatCompletion()
   response = await chat.model("gpt-4o-mini").messages(
       [Message.from_string(Role.USER, "Hi")]
   ).chat()
   print(response.content())
   ```
"""

from openai_tools.core.auth import AuthProvider, AzureAuth, OpenAIAuth
from openai_tools.errors import (
    ApiError,
    AuthenticationError,
    CodecError,
    ConfigError,
    ErrorCategory,
    InvalidRequestError,
    NotFoundError,
    OpenAIToolError,
    RateLimitError,
    ServerError,
    StreamClosedError,
    TransportError,
)
from openai_tools.models import Message, ParameterProperty, Role, Schema, SchemaNode, Tool
from openai_tools.realtime import EventHandler, RealtimeClient, RealtimeSession
from openai_tools.services import (
    Audio,
    Batches,
    ChatCompletion,
    Conversations,
    Embedding,
    Files,
    FineTuning,
    Images,
    Models,
    Moderations,
    Responses,
)

__version__ = "0.1.0"

__all__ = [
    "AuthProvider",
    "AzureAuth",
    "OpenAIAuth",
    "ApiError",
    "AuthenticationError",
    "CodecError",
    "ConfigError",
    "ErrorCategory",
    "InvalidRequestError",
    "NotFoundError",
    "OpenAIToolError",
    "RateLimitError",
    "ServerError",
    "StreamClosedError",
    "TransportError",
    "Message",
    "ParameterProperty",
    "Role",
    "Schema",
    "SchemaNode",
    "Tool",
    "Audio",
    "Batches",
    "ChatCompletion",
    "Conversations",
    "Embedding",
    "Files",
    "FineTuning",
    "Images",
    "Models",
    "Moderations",
    "Responses",
    "EventHandler",
    "RealtimeClient",
    "RealtimeSession",
]
