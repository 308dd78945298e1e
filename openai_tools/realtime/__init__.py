"""
Realtime API support.

This package exposes the OpenAI Realtime API as a typed, bidirectional event
stream over a single WebSocket connection.

Key components:
- client: :class:`RealtimeClient`, which builds the session configuration and
  connects
- session: :class:`RealtimeSession`, which sends client events and receives
  server events
- events: pydantic models for every client and server event type
- session_config: session and per-response configuration, including voice
  activity detection
- conversation: conversation items (messages, function calls and their outputs)
- handlers: :class:`EventHandler`, a callback registry for push-style delivery

Usage example:
```python
from openai_tools.realtime import RealtimeClient, Modality, EventHandler

session = await RealtimeClient().modalities([Modality.TEXT]).connect()
handler = EventHandler().on_text_delta(lambda e: print(e.delta, end=""))
await session.send_text("Say hi")
await session.run(handler)
```
"""

from openai_tools.realtime.client import RealtimeClient
from openai_tools.realtime.conversation import (
    FunctionCallItem,
    FunctionCallOutputItem,
    ItemContent,
    MessageItem,
    assistant_text,
    function_output,
    system_text,
    user_audio,
    user_text,
)
from openai_tools.realtime.events import ServerEvent, UnknownServerEvent, parse_server_event
from openai_tools.realtime.handlers import EventHandler
from openai_tools.realtime.session import RealtimeSession
from openai_tools.realtime.session_config import (
    Eagerness,
    InputAudioTranscription,
    Modality,
    NoiseReduction,
    NoiseReductionType,
    RealtimeAudioFormat,
    RealtimeVoice,
    ResponseCreateConfig,
    SemanticVad,
    ServerVad,
    SessionConfig,
)

__all__ = [
    "RealtimeClient",
    "RealtimeSession",
    "EventHandler",
    "ServerEvent",
    "UnknownServerEvent",
    "parse_server_event",
    "SessionConfig",
    "ResponseCreateConfig",
    "ServerVad",
    "SemanticVad",
    "Eagerness",
    "InputAudioTranscription",
    "NoiseReduction",
    "NoiseReductionType",
    "Modality",
    "RealtimeVoice",
    "RealtimeAudioFormat",
    "ItemContent",
    "MessageItem",
    "FunctionCallItem",
    "FunctionCallOutputItem",
    "user_text",
    "assistant_text",
    "system_text",
    "user_audio",
    "function_output",
]
