"""
Pydantic models for Realtime API events.

Client events are what the session sends; server events are what it receives.
Both are discriminated by their ``type`` field. Incoming frames are decoded by
:func:`parse_server_event`, which looks the type up in
:data:`SERVER_EVENT_TYPES` and falls back to :class:`UnknownServerEvent` so
event types added to the protocol later are delivered rather than dropped.
"""

import json
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from openai_tools.errors import CodecError
from openai_tools.realtime.conversation import (
    FunctionCallItem,
    FunctionCallOutputItem,
    MessageItem,
    item_to_wire,
)
from openai_tools.realtime.session_config import ResponseCreateConfig, SessionConfig

# ---------------------------------------------------------------------------
# Client events
# ---------------------------------------------------------------------------


class ClientEvent(BaseModel):
    """Base model for events sent to the server."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: str
    event_id: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_wire())


class SessionUpdate(ClientEvent):
    type: Literal["session.update"] = "session.update"
    session: SessionConfig

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.event_id is not None:
            out["event_id"] = self.event_id
        out["session"] = self.session.to_wire()
        return out


class InputAudioBufferAppend(ClientEvent):
    """``audio`` is base64 of raw frames in the session's input format."""
    type: Literal["input_audio_buffer.append"] = "input_audio_buffer.append"
    audio: str


class InputAudioBufferCommit(ClientEvent):
    type: Literal["input_audio_buffer.commit"] = "input_audio_buffer.commit"


class InputAudioBufferClear(ClientEvent):
    type: Literal["input_audio_buffer.clear"] = "input_audio_buffer.clear"


class OutputAudioBufferClear(ClientEvent):
    type: Literal["output_audio_buffer.clear"] = "output_audio_buffer.clear"


class ConversationItemCreate(ClientEvent):
    type: Literal["conversation.item.create"] = "conversation.item.create"
    previous_item_id: Optional[str] = None
    item: Union[MessageItem, FunctionCallItem, FunctionCallOutputItem]

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.event_id is not None:
            out["event_id"] = self.event_id
        if self.previous_item_id is not None:
            out["previous_item_id"] = self.previous_item_id
        out["item"] = item_to_wire(self.item)
        return out


class ConversationItemRetrieve(ClientEvent):
    type: Literal["conversation.item.retrieve"] = "conversation.item.retrieve"
    item_id: str


class ConversationItemDelete(ClientEvent):
    type: Literal["conversation.item.delete"] = "conversation.item.delete"
    item_id: str


class ConversationItemTruncate(ClientEvent):
    """Truncate an assistant item's audio to what the user actually heard."""
    type: Literal["conversation.item.truncate"] = "conversation.item.truncate"
    item_id: str
    content_index: int
    audio_end_ms: int


class ResponseCreate(ClientEvent):
    type: Literal["response.create"] = "response.create"
    response: Optional[ResponseCreateConfig] = None

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.event_id is not None:
            out["event_id"] = self.event_id
        if self.response is not None:
            out["response"] = self.response.to_wire()
        return out


class ResponseCancel(ClientEvent):
    type: Literal["response.cancel"] = "response.cancel"
    response_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Nested server payloads
# ---------------------------------------------------------------------------


class _ServerModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class RealtimeErrorDetail(_ServerModel):
    type: Optional[str] = None
    code: Optional[str] = None
    message: str = ""
    param: Optional[str] = None
    event_id: Optional[str] = None


class RealtimeItem(_ServerModel):
    """A conversation item as reported by the server."""
    id: Optional[str] = None
    object: Optional[str] = None
    type: str
    role: Optional[str] = None
    content: Optional[List[Dict[str, Any]]] = None
    status: Optional[str] = None
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None
    output: Optional[str] = None


class ResponseInfo(_ServerModel):
    """
    A response as reported by ``response.created`` and ``response.done``.

    ``status`` is one of ``in_progress``, ``completed``, ``cancelled``,
    ``incomplete`` or ``failed``.
    """
    id: Optional[str] = None
    object: Optional[str] = None
    status: Optional[str] = None
    status_details: Optional[Dict[str, Any]] = None
    output: List[RealtimeItem] = []
    usage: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    conversation_id: Optional[str] = None


class SessionInfo(_ServerModel):
    """Effective session configuration reported by the server."""
    id: Optional[str] = None
    object: Optional[str] = None
    model: Optional[str] = None
    modalities: Optional[List[str]] = None
    instructions: Optional[str] = None
    voice: Optional[str] = None
    input_audio_format: Optional[str] = None
    output_audio_format: Optional[str] = None
    turn_detection: Optional[Dict[str, Any]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    temperature: Optional[float] = None


class RateLimit(_ServerModel):
    name: str
    limit: int
    remaining: int
    reset_seconds: float


# ---------------------------------------------------------------------------
# Server events
# ---------------------------------------------------------------------------


class ServerEvent(_ServerModel):
    """Base model for events received from the server."""
    type: str
    event_id: Optional[str] = None


class SessionCreated(ServerEvent):
    type: Literal["session.created"] = "session.created"
    session: SessionInfo


class SessionUpdated(ServerEvent):
    type: Literal["session.updated"] = "session.updated"
    session: SessionInfo


class ConversationCreated(ServerEvent):
    type: Literal["conversation.created"] = "conversation.created"
    conversation: Dict[str, Any] = {}


class ConversationItemCreated(ServerEvent):
    type: Literal["conversation.item.created"] = "conversation.item.created"
    previous_item_id: Optional[str] = None
    item: RealtimeItem


class ConversationItemRetrieved(ServerEvent):
    type: Literal["conversation.item.retrieved"] = "conversation.item.retrieved"
    item: RealtimeItem


class ConversationItemDeleted(ServerEvent):
    type: Literal["conversation.item.deleted"] = "conversation.item.deleted"
    item_id: str


class ConversationItemTruncated(ServerEvent):
    type: Literal["conversation.item.truncated"] = "conversation.item.truncated"
    item_id: str
    content_index: int = 0
    audio_end_ms: int = 0


class InputAudioTranscriptionCompleted(ServerEvent):
    type: Literal["conversation.item.input_audio_transcription.completed"] = \
        "conversation.item.input_audio_transcription.completed"
    item_id: str
    content_index: int = 0
    transcript: str


class InputAudioTranscriptionFailed(ServerEvent):
    type: Literal["conversation.item.input_audio_transcription.failed"] = \
        "conversation.item.input_audio_transcription.failed"
    item_id: str
    content_index: int = 0
    error: RealtimeErrorDetail


class InputAudioBufferCommitted(ServerEvent):
    type: Literal["input_audio_buffer.committed"] = "input_audio_buffer.committed"
    previous_item_id: Optional[str] = None
    item_id: str


class InputAudioBufferCleared(ServerEvent):
    type: Literal["input_audio_buffer.cleared"] = "input_audio_buffer.cleared"


class InputAudioBufferSpeechStarted(ServerEvent):
    type: Literal["input_audio_buffer.speech_started"] = "input_audio_buffer.speech_started"
    audio_start_ms: int = 0
    item_id: Optional[str] = None


class InputAudioBufferSpeechStopped(ServerEvent):
    type: Literal["input_audio_buffer.speech_stopped"] = "input_audio_buffer.speech_stopped"
    audio_end_ms: int = 0
    item_id: Optional[str] = None


class OutputAudioBufferStarted(ServerEvent):
    type: Literal["output_audio_buffer.started"] = "output_audio_buffer.started"
    response_id: Optional[str] = None


class OutputAudioBufferStopped(ServerEvent):
    type: Literal["output_audio_buffer.stopped"] = "output_audio_buffer.stopped"
    response_id: Optional[str] = None


class OutputAudioBufferCleared(ServerEvent):
    type: Literal["output_audio_buffer.cleared"] = "output_audio_buffer.cleared"
    response_id: Optional[str] = None


class ResponseCreated(ServerEvent):
    type: Literal["response.created"] = "response.created"
    response: ResponseInfo


class ResponseDone(ServerEvent):
    type: Literal["response.done"] = "response.done"
    response: ResponseInfo

    @property
    def status(self) -> Optional[str]:
        return self.response.status


class ResponseOutputItemAdded(ServerEvent):
    type: Literal["response.output_item.added"] = "response.output_item.added"
    response_id: str
    output_index: int = 0
    item: RealtimeItem


class ResponseOutputItemDone(ServerEvent):
    type: Literal["response.output_item.done"] = "response.output_item.done"
    response_id: str
    output_index: int = 0
    item: RealtimeItem


class ResponseContentPartAdded(ServerEvent):
    type: Literal["response.content_part.added"] = "response.content_part.added"
    response_id: str
    item_id: str
    output_index: int = 0
    content_index: int = 0
    part: Dict[str, Any] = {}


class ResponseContentPartDone(ServerEvent):
    type: Literal["response.content_part.done"] = "response.content_part.done"
    response_id: str
    item_id: str
    output_index: int = 0
    content_index: int = 0
    part: Dict[str, Any] = {}


class _ResponseStreamEvent(ServerEvent):
    response_id: str
    item_id: str
    output_index: int = 0
    content_index: int = 0


class ResponseTextDelta(_ResponseStreamEvent):
    type: Literal["response.text.delta"] = "response.text.delta"
    delta: str


class ResponseTextDone(_ResponseStreamEvent):
    type: Literal["response.text.done"] = "response.text.done"
    text: str


class ResponseAudioDelta(_ResponseStreamEvent):
    """``delta`` is base64 audio in the session's output format."""
    type: Literal["response.audio.delta"] = "response.audio.delta"
    delta: str


class ResponseAudioDone(_ResponseStreamEvent):
    type: Literal["response.audio.done"] = "response.audio.done"


class ResponseAudioTranscriptDelta(_ResponseStreamEvent):
    type: Literal["response.audio_transcript.delta"] = "response.audio_transcript.delta"
    delta: str


class ResponseAudioTranscriptDone(_ResponseStreamEvent):
    type: Literal["response.audio_transcript.done"] = "response.audio_transcript.done"
    transcript: str


class ResponseFunctionCallArgumentsDelta(ServerEvent):
    type: Literal["response.function_call_arguments.delta"] = "response.function_call_arguments.delta"
    response_id: str
    item_id: str
    output_index: int = 0
    call_id: str
    delta: str


class ResponseFunctionCallArgumentsDone(ServerEvent):
    type: Literal["response.function_call_arguments.done"] = "response.function_call_arguments.done"
    response_id: str
    item_id: str
    output_index: int = 0
    call_id: str
    name: Optional[str] = None
    arguments: str


class RateLimitsUpdated(ServerEvent):
    type: Literal["rate_limits.updated"] = "rate_limits.updated"
    rate_limits: List[RateLimit] = []


class ErrorEvent(ServerEvent):
    type: Literal["error"] = "error"
    error: RealtimeErrorDetail


class UnknownServerEvent(ServerEvent):
    """An event whose ``type`` this library does not know; ``raw`` is the full payload."""
    raw: Dict[str, Any] = {}


SERVER_EVENT_CLASSES: List[Type[ServerEvent]] = [
    SessionCreated,
    SessionUpdated,
    ConversationCreated,
    ConversationItemCreated,
    ConversationItemRetrieved,
    ConversationItemDeleted,
    ConversationItemTruncated,
    InputAudioTranscriptionCompleted,
    InputAudioTranscriptionFailed,
    InputAudioBufferCommitted,
    InputAudioBufferCleared,
    InputAudioBufferSpeechStarted,
    InputAudioBufferSpeechStopped,
    OutputAudioBufferStarted,
    OutputAudioBufferStopped,
    OutputAudioBufferCleared,
    ResponseCreated,
    ResponseDone,
    ResponseOutputItemAdded,
    ResponseOutputItemDone,
    ResponseContentPartAdded,
    ResponseContentPartDone,
    ResponseTextDelta,
    ResponseTextDone,
    ResponseAudioDelta,
    ResponseAudioDone,
    ResponseAudioTranscriptDelta,
    ResponseAudioTranscriptDone,
    ResponseFunctionCallArgumentsDelta,
    ResponseFunctionCallArgumentsDone,
    RateLimitsUpdated,
    ErrorEvent,
]

SERVER_EVENT_TYPES: Dict[str, Type[ServerEvent]] = {
    cls.model_fields["type"].default: cls for cls in SERVER_EVENT_CLASSES
}


def parse_server_event(data: Union[str, bytes, Dict[str, Any]]) -> ServerEvent:
    """
    Decode one server frame.

    Args:
        data: Frame text, or an already-decoded JSON object

    Returns:
        ServerEvent: The typed event, or :class:`UnknownServerEvent`

    Raises:
        CodecError: If the frame is not a JSON object with a string ``type``,
            or a known event does not match its model
    """
    if isinstance(data, (str, bytes)):
        try:
            payload = json.loads(data)
        except ValueError as e:
            raise CodecError(f"Invalid JSON in realtime frame: {e}", cause=e) from e
    else:
        payload = data

    if not isinstance(payload, dict) or not isinstance(payload.get("type"), str):
        raise CodecError("Realtime frame is not an object with a 'type' field", payload=payload)

    event_type = payload["type"]
    event_class = SERVER_EVENT_TYPES.get(event_type)
    if event_class is None:
        return UnknownServerEvent(type=event_type, event_id=payload.get("event_id"), raw=payload)
    try:
        return event_class.model_validate(payload)
    except ValidationError as e:
        raise CodecError(f"Malformed '{event_type}' event: {e}", cause=e, payload=payload) from e
