"""
A live Realtime API session over one WebSocket connection.

The session owns the socket. Events can be consumed in one of two ways:
pull-style with :meth:`RealtimeSession.recv` (or ``async for`` over
:meth:`RealtimeSession.events`), or push-style by passing an
:class:`EventHandler` to :meth:`RealtimeSession.run`. A session uses one style
for its lifetime.

Sending and receiving may happen concurrently from different tasks. Sends are
serialized through a lock, and every send waits for the socket to accept the
frame, so a producer appending audio faster than the network drains is slowed
down instead of buffering without bound.
"""

import asyncio
import base64
import logging
from typing import AsyncIterator, Optional, Union

from websockets.exceptions import ConnectionClosed, ConnectionClosedOK

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.errors import ApiError, CodecError, ConfigError, StreamClosedError, TransportError
from openai_tools.realtime.conversation import (
    FunctionCallItem,
    FunctionCallOutputItem,
    MessageItem,
    function_output,
    user_text,
)
from openai_tools.realtime.events import (
    ClientEvent,
    ConversationItemCreate,
    ConversationItemDelete,
    ConversationItemRetrieve,
    ConversationItemTruncate,
    ErrorEvent,
    InputAudioBufferAppend,
    InputAudioBufferClear,
    InputAudioBufferCommit,
    OutputAudioBufferClear,
    ResponseCancel,
    ResponseCreate,
    ServerEvent,
    SessionCreated,
    SessionInfo,
    SessionUpdate,
    parse_server_event,
)
from openai_tools.realtime.handlers import EventHandler
from openai_tools.realtime.session_config import ResponseCreateConfig, SessionConfig

logger = logging.getLogger(LOGGER_NAME)

ConversationItemType = Union[MessageItem, FunctionCallItem, FunctionCallOutputItem]

DELIVERY_PULL = "pull"
DELIVERY_PUSH = "push"


class RealtimeSession:
    """
    An open Realtime session.

    Instances are created by :meth:`RealtimeClient.connect`, which waits for
    ``session.created`` before returning.

    Args:
        websocket: A connected websocket exposing ``send``, ``recv`` and ``close``
    """

    def __init__(self, websocket):
        self.ws = websocket
        self.session_id: Optional[str] = None
        self.session_info: Optional[SessionInfo] = None
        self._send_lock = asyncio.Lock()
        self._closed = False
        self._delivery: Optional[str] = None

    @property
    def closed(self) -> bool:
        return self._closed

    async def wait_for_session_created(self) -> SessionCreated:
        """
        Read the first event and require it to be ``session.created``.

        Raises:
            ApiError: If the server sent an ``error`` event instead
            ConfigError: If any other event arrived first
            StreamClosedError: If the connection closed first
        """
        event = await self._read_event()
        if event is None:
            raise StreamClosedError("Realtime connection closed before session.created")
        if isinstance(event, SessionCreated):
            self.session_id = event.session.id
            self.session_info = event.session
            logger.info(f"Realtime session created: {self.session_id}")
            return event
        if isinstance(event, ErrorEvent):
            error = event.error
            logger.error(f"Realtime session rejected: {error.message}")
            raise ApiError(0, error.message, code=error.code, param=error.param, type=error.type)
        raise ConfigError(f"unexpected pre-session event: {event.type}")

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send(self, event: ClientEvent) -> None:
        """
        Send one client event.

        Raises:
            TransportError: If the session is closed or the socket fails
            ConfigError: If the event carries an invalid configuration
            CodecError: If the event cannot be serialized
        """
        if self._closed:
            raise TransportError("Cannot send on a closed realtime session")
        try:
            payload = event.to_json()
        except (TypeError, ValueError) as e:
            raise CodecError(f"Failed to serialize {event.type}: {e}", cause=e) from e

        async with self._send_lock:
            try:
                await self.ws.send(payload)
            except ConnectionClosed as e:
                self._closed = True
                logger.warning(f"Send of {event.type} failed, connection closed: {e}")
                raise TransportError(f"Connection closed while sending {event.type}", cause=e) from e
            except OSError as e:
                logger.error(f"Send of {event.type} failed: {e}")
                raise TransportError(f"Failed to send {event.type}: {e}", cause=e) from e
        if event.type != "input_audio_buffer.append":
            logger.debug(f"Sent realtime event: {event.type}")

    async def update_session(self, config: SessionConfig) -> None:
        await self.send(SessionUpdate(session=config))

    async def append_audio(self, audio_b64: str) -> None:
        """Append base64-encoded audio in the session's input format."""
        if not audio_b64:
            raise ConfigError("Audio chunk must not be empty")
        await self.send(InputAudioBufferAppend(audio=audio_b64))

    async def append_audio_bytes(self, audio: bytes) -> None:
        """Append raw audio frames, base64 encoding them on the way out."""
        if not audio:
            raise ConfigError("Audio chunk must not be empty")
        await self.send(InputAudioBufferAppend(audio=base64.b64encode(audio).decode("ascii")))

    async def commit_audio(self) -> None:
        """Seal the input buffer into a user message (manual turn-taking)."""
        await self.send(InputAudioBufferCommit())

    async def clear_audio(self) -> None:
        await self.send(InputAudioBufferClear())

    async def clear_output_audio(self) -> None:
        """Stop audio playback that the server is still streaming (WebRTC-style clients)."""
        await self.send(OutputAudioBufferClear())

    async def create_item(self, item: ConversationItemType, previous_item_id: Optional[str] = None) -> None:
        await self.send(ConversationItemCreate(item=item, previous_item_id=previous_item_id))

    async def send_text(self, text: str, respond: bool = True) -> None:
        """
        Add a user text message and, by default, ask for a response.
        """
        await self.create_item(user_text(text))
        if respond:
            await self.create_response()

    async def create_response(self, config: Optional[ResponseCreateConfig] = None) -> None:
        await self.send(ResponseCreate(response=config))

    async def cancel_response(self, response_id: Optional[str] = None) -> None:
        """Abort the in-flight response; the server answers with ``response.done`` status ``cancelled``."""
        await self.send(ResponseCancel(response_id=response_id))

    async def submit_function_output(self, call_id: str, output: str, respond: bool = True) -> None:
        """
        Return a function result to the model and, by default, let it continue.
        """
        await self.create_item(function_output(call_id, output))
        if respond:
            await self.create_response()

    async def retrieve_item(self, item_id: str) -> None:
        await self.send(ConversationItemRetrieve(item_id=item_id))

    async def delete_item(self, item_id: str) -> None:
        await self.send(ConversationItemDelete(item_id=item_id))

    async def truncate_item(self, item_id: str, content_index: int, audio_end_ms: int) -> None:
        """Tell the server how much of an assistant item's audio was actually played."""
        if audio_end_ms < 0:
            raise ConfigError("audio_end_ms must not be negative")
        await self.send(ConversationItemTruncate(item_id=item_id, content_index=content_index,
                                                 audio_end_ms=audio_end_ms))

    # ------------------------------------------------------------------
    # Receiving
    # ------------------------------------------------------------------

    def _claim_delivery(self, mode: str) -> None:
        if self._delivery is None:
            self._delivery = mode
        elif self._delivery != mode:
            raise ConfigError(f"This session already delivers events {self._delivery}-style")

    async def _read_event(self) -> Optional[ServerEvent]:
        while not self._closed:
            try:
                frame = await self.ws.recv()
            except ConnectionClosedOK:
                logger.info("Realtime connection closed normally")
                self._closed = True
                return None
            except ConnectionClosed as e:
                logger.warning(f"Realtime connection dropped: {e}")
                self._closed = True
                return None

            if isinstance(frame, (bytes, bytearray)):
                logger.warning(f"Ignoring unexpected binary frame of {len(frame)} bytes")
                continue

            event = parse_server_event(frame)
            if isinstance(event, ErrorEvent):
                logger.error(f"Realtime error event: {event.error.message}")
            return event
        return None

    async def recv(self) -> Optional[ServerEvent]:
        """
        Receive the next server event.

        Returns:
            Optional[ServerEvent]: The event, or None once the stream has ended

        Raises:
            CodecError: If a frame cannot be decoded
        """
        self._claim_delivery(DELIVERY_PULL)
        return await self._read_event()

    async def events(self) -> AsyncIterator[ServerEvent]:
        """Iterate over server events until the stream ends."""
        while True:
            event = await self.recv()
            if event is None:
                return
            yield event

    async def run(self, handler: EventHandler) -> None:
        """
        Dispatch every server event to ``handler`` until the stream ends.
        """
        self._claim_delivery(DELIVERY_PUSH)
        while True:
            event = await self._read_event()
            if event is None:
                return
            await handler.handle(event)

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._closed and self.ws is None:
            return
        self._closed = True
        ws, self.ws = self.ws, None
        if ws is None:
            return
        try:
            await ws.close()
            logger.info(f"Realtime session {self.session_id} closed")
        except (ConnectionClosed, OSError) as e:
            logger.warning(f"Error while closing realtime connection: {e}")

    async def __aenter__(self) -> "RealtimeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
