"""
Constants and configuration values used throughout the library.

This module defines constants that are shared by the HTTP operation clients and
the Realtime engine, providing a centralized location for endpoint defaults,
default model identifiers and transport tuning values.
"""

# Logger name used throughout the library
LOGGER_NAME = "openai_tools"

# Library identifier sent as User-Agent on every request
USER_AGENT = "openai-tools-python/0.1.0"

# Default public OpenAI endpoint
DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Host suffix that identifies an Azure OpenAI deployment
AZURE_HOST_SUFFIX = ".openai.azure.com"

# Environment variable names
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_OPENAI_BASE_URL = "OPENAI_BASE_URL"
ENV_AZURE_API_KEY = "AZURE_OPENAI_API_KEY"
ENV_AZURE_BASE_URL = "AZURE_OPENAI_BASE_URL"

# Default request timeout for HTTP operations, in seconds (None = no limit)
DEFAULT_TIMEOUT = None

# Default models per operation family
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
DEFAULT_MODERATION_MODEL = "omni-moderation-latest"
DEFAULT_TTS_MODEL = "gpt-4o-mini-tts"
DEFAULT_STT_MODEL = "gpt-4o-transcribe"
DEFAULT_TRANSLATION_MODEL = "whisper-1"
DEFAULT_REALTIME_MODEL = "gpt-4o-realtime-preview"

# Realtime API headers
REALTIME_BETA_HEADER = "OpenAI-Beta"
REALTIME_BETA_VALUE = "realtime=v1"

# WebSocket configuration for the Realtime API
WS_MAX_SIZE = 16 * 1024 * 1024  # 16MB - large enough for audio chunks
WS_MAX_QUEUE = 32  # Bounded inbound queue
WS_PING_INTERVAL = 20  # seconds between keepalive pings
WS_PING_TIMEOUT = 20
CONNECTION_TIMEOUT = 30  # seconds
