"""
Unit tests for the Realtime session engine.

A scripted fake websocket plays the server: frames queued up front are
delivered in order, and reactions queue more frames whenever the client sends
a given event type.
"""

import asyncio
import base64
from unittest.mock import AsyncMock, patch

import pytest
from websockets.exceptions import ConnectionClosedError, InvalidURI

from openai_tools.core.auth import AuthProvider
from openai_tools.errors import ApiError, CodecError, ConfigError, StreamClosedError, TransportError
from openai_tools.models.tool import ParameterProperty, Tool
from openai_tools.realtime.client import RealtimeClient
from openai_tools.realtime.events import (
    ConversationItemCreated,
    ResponseDone,
    ResponseTextDelta,
    ResponseTextDone,
    UnknownServerEvent,
)
from openai_tools.realtime.handlers import EventHandler
from openai_tools.realtime.session import RealtimeSession
from openai_tools.realtime.session_config import Modality, ResponseCreateConfig


def text_turn_frames(response_id="resp_1", deltas=("Hi", " there")):
    """Frames a server sends for one text response"""
    frames = [{"type": "response.created", "response": {"id": response_id, "object": "realtime.response",
                                                        "status": "in_progress", "output": []}}]
    for delta in deltas:
        frames.append({"type": "response.text.delta", "response_id": response_id, "item_id": "item_2",
                       "output_index": 0, "content_index": 0, "delta": delta})
    frames.append({"type": "response.text.done", "response_id": response_id, "item_id": "item_2",
                   "output_index": 0, "content_index": 0, "text": "".join(deltas)})
    frames.append({"type": "response.done", "response": {"id": response_id, "object": "realtime.response",
                                                         "status": "completed", "output": []}})
    return frames


ITEM_CREATED = {
    "type": "conversation.item.created",
    "previous_item_id": None,
    "item": {"id": "item_1", "object": "realtime.item", "type": "message", "role": "user",
             "content": [{"type": "input_text", "text": "Say hi"}]},
}


@pytest.fixture
def auth():
    return AuthProvider.openai("sk-test")


async def connect_with(ws, client):
    """Connect ``client`` using ``ws`` as the socket"""
    with patch("websockets.connect", new=AsyncMock(return_value=ws)) as mock_connect:
        session = await client.connect()
    return session, mock_connect


class TestConnect:
    """Tests for opening a realtime session"""

    @pytest.mark.asyncio
    async def test_connect_waits_for_session_created(self, auth, fake_ws, session_created):
        ws = fake_ws([session_created])
        session, mock_connect = await connect_with(ws, RealtimeClient(auth, model="gpt-4o-realtime-preview"))

        assert session.session_id == "sess_1"
        assert session.session_info.model == "gpt-4o-realtime-preview"
        url = mock_connect.call_args.args[0]
        headers = mock_connect.call_args.kwargs["additional_headers"]
        assert url == "wss://api.openai.com/v1/realtime?model=gpt-4o-realtime-preview"
        assert headers["Authorization"] == "Bearer sk-test"
        assert headers["OpenAI-Beta"] == "realtime=v1"
        assert mock_connect.call_args.kwargs["compression"] is None
        # Default configuration needs no session.update
        assert ws.sent == []

    @pytest.mark.asyncio
    async def test_connect_sends_configuration(self, auth, fake_ws, session_created):
        ws = fake_ws([session_created])
        calculator = Tool.function("calculator", parameters=[("a", ParameterProperty.number())])
        client = RealtimeClient(auth).modalities([Modality.TEXT]).instructions("Be brief").tools([calculator])

        await connect_with(ws, client)

        assert ws.sent_types() == ["session.update"]
        session = ws.sent[0]["session"]
        assert session["modalities"] == ["text"]
        assert session["instructions"] == "Be brief"
        assert session["tools"][0]["name"] == "calculator"
        assert "turn_detection" not in session

    @pytest.mark.asyncio
    async def test_manual_turns_send_null_turn_detection(self, auth, fake_ws, session_created):
        ws = fake_ws([session_created])
        await connect_with(ws, RealtimeClient(auth).manual_turns())
        assert ws.sent[0]["session"] == {"turn_detection": None}

    @pytest.mark.asyncio
    async def test_azure_headers(self, fake_ws, session_created):
        url = "https://r.openai.azure.com/openai/realtime?api-version=2024-10-01-preview&deployment=rt"
        ws = fake_ws([session_created])
        _, mock_connect = await connect_with(ws, RealtimeClient(AuthProvider.azure("azkey", url)))

        assert mock_connect.call_args.args[0].startswith("wss://r.openai.azure.com/openai/realtime?")
        headers = mock_connect.call_args.kwargs["additional_headers"]
        assert headers["api-key"] == "azkey"
        assert "Authorization" not in headers

    @pytest.mark.asyncio
    async def test_error_before_session(self, auth, fake_ws):
        ws = fake_ws([{"type": "error", "error": {"type": "invalid_request_error",
                                                   "code": "invalid_api_key", "message": "Bad key"}}])
        with pytest.raises(ApiError) as exc_info:
            await connect_with(ws, RealtimeClient(auth))
        assert exc_info.value.code == "invalid_api_key"
        assert exc_info.value.message == "Bad key"
        assert ws.closed

    @pytest.mark.asyncio
    async def test_unexpected_first_event(self, auth, fake_ws):
        ws = fake_ws([{"type": "rate_limits.updated", "rate_limits": []}])
        with pytest.raises(ConfigError, match="unexpected pre-session event"):
            await connect_with(ws, RealtimeClient(auth))

    @pytest.mark.asyncio
    async def test_closed_before_session(self, auth, fake_ws):
        with pytest.raises(StreamClosedError):
            await connect_with(fake_ws([]), RealtimeClient(auth))

    @pytest.mark.asyncio
    async def test_connection_refused(self, auth):
        with patch("websockets.connect", new=AsyncMock(side_effect=OSError("refused"))):
            with pytest.raises(TransportError):
                await RealtimeClient(auth).connect()

    @pytest.mark.asyncio
    async def test_handshake_failure(self, auth):
        with patch("websockets.connect", new=AsyncMock(side_effect=InvalidURI("bad://", "unsupported scheme"))):
            with pytest.raises(TransportError):
                await RealtimeClient(auth).connect()

    @pytest.mark.asyncio
    async def test_connect_timeout(self, auth):
        with patch("websockets.connect", new=AsyncMock(side_effect=asyncio.TimeoutError())):
            with pytest.raises(TransportError):
                await RealtimeClient(auth).connect()

    def test_unknown_setting_values_rejected(self, auth):
        client = RealtimeClient(auth)
        with pytest.raises(ConfigError, match="voice"):
            client.voice("robot")
        with pytest.raises(ConfigError):
            client.modalities(["smell"])
        with pytest.raises(ConfigError):
            client.input_audio_format("mp3")
        with pytest.raises(ConfigError):
            client.semantic_vad(eagerness="frantic")
        assert client.config.is_default()

    @pytest.mark.asyncio
    async def test_string_setting_values_accepted(self, auth, fake_ws, session_created):
        ws = fake_ws([session_created])
        await connect_with(ws, RealtimeClient(auth).voice("verse").output_audio_format("g711_ulaw"))
        session = ws.sent[0]["session"]
        assert session["voice"] == "verse"
        assert session["output_audio_format"] == "g711_ulaw"

    @pytest.mark.asyncio
    async def test_invalid_vad_threshold(self, auth, fake_ws, session_created):
        ws = fake_ws([session_created])
        with pytest.raises(ConfigError):
            await connect_with(ws, RealtimeClient(auth).server_vad(threshold=1.5))
        assert ws.closed


class TestTextTurn:
    """Tests for a complete text turn"""

    @pytest.mark.asyncio
    async def test_text_turn_event_sequence(self, fake_ws):
        ws = fake_ws(reactions={
            "conversation.item.create": [ITEM_CREATED],
            "response.create": text_turn_frames(),
        })
        session = RealtimeSession(ws)

        await session.send_text("Say hi")

        assert ws.sent_types() == ["conversation.item.create", "response.create"]
        assert ws.sent[0]["item"] == {"type": "message", "role": "user",
                                      "content": [{"type": "input_text", "text": "Say hi"}]}
        assert ws.sent[1] == {"type": "response.create"}

        events = [event async for event in session.events()]
        types = [event.type for event in events]
        assert types[0] == "conversation.item.created"
        assert types[1] == "response.created"
        assert types[-2:] == ["response.text.done", "response.done"]
        assert set(types[2:-2]) <= {"response.text.delta"}

        deltas = "".join(e.delta for e in events if isinstance(e, ResponseTextDelta))
        done = next(e for e in events if isinstance(e, ResponseTextDone))
        assert done.text == deltas == "Hi there"
        assert isinstance(events[0], ConversationItemCreated)
        assert isinstance(events[-1], ResponseDone)
        assert events[-1].status == "completed"

    @pytest.mark.asyncio
    async def test_push_delivery(self, fake_ws):
        ws = fake_ws(text_turn_frames())
        session = RealtimeSession(ws)
        received = []
        finished = []

        handler = EventHandler().on_text_delta(lambda event: received.append(event.delta))

        @handler.on("response.done")
        async def on_done(event):
            finished.append(event.response.status)

        await session.run(handler)

        assert received == ["Hi", " there"]
        assert finished == ["completed"]


class TestInterruption:
    """Tests for cancelling an in-flight response"""

    @pytest.mark.asyncio
    async def test_cancel_yields_cancelled_response(self, fake_ws):
        cancelled = {"type": "response.done", "response": {"id": "resp_1", "object": "realtime.response",
                                                           "status": "cancelled",
                                                           "status_details": {"type": "cancelled",
                                                                              "reason": "client_cancelled"},
                                                           "output": []}}
        ws = fake_ws(reactions={
            "response.create": [{"type": "response.created",
                                 "response": {"id": "resp_1", "status": "in_progress", "output": []}}],
            "response.cancel": [cancelled],
        })
        session = RealtimeSession(ws)

        await session.create_response()
        await session.cancel_response("resp_1")

        assert ws.sent[-1] == {"type": "response.cancel", "response_id": "resp_1"}
        events = [event async for event in session.events()]
        terminal = [e for e in events if isinstance(e, ResponseDone)]
        assert len(terminal) == 1
        assert terminal[0].status == "cancelled"
        after = events[events.index(terminal[0]) + 1:]
        assert not any(isinstance(e, ResponseTextDelta) for e in after)


class TestSending:
    """Tests for client events"""

    @pytest.mark.asyncio
    async def test_audio_and_buffer_events(self, fake_ws):
        ws = fake_ws()
        session = RealtimeSession(ws)

        await session.append_audio_bytes(b"\x00\x01\x02\x03")
        await session.append_audio("AAEC")
        await session.commit_audio()
        await session.clear_audio()
        await session.clear_output_audio()

        assert ws.sent[0] == {"type": "input_audio_buffer.append",
                              "audio": base64.b64encode(b"\x00\x01\x02\x03").decode()}
        assert ws.sent_types()[2:] == ["input_audio_buffer.commit", "input_audio_buffer.clear",
                                       "output_audio_buffer.clear"]

    @pytest.mark.asyncio
    async def test_empty_audio_rejected(self, fake_ws):
        session = RealtimeSession(fake_ws())
        with pytest.raises(ConfigError):
            await session.append_audio_bytes(b"")

    @pytest.mark.asyncio
    async def test_item_management(self, fake_ws):
        ws = fake_ws()
        session = RealtimeSession(ws)

        await session.retrieve_item("item_1")
        await session.delete_item("item_1")
        await session.truncate_item("item_2", 0, 1500)

        assert ws.sent == [
            {"type": "conversation.item.retrieve", "item_id": "item_1"},
            {"type": "conversation.item.delete", "item_id": "item_1"},
            {"type": "conversation.item.truncate", "item_id": "item_2", "content_index": 0, "audio_end_ms": 1500},
        ]
        with pytest.raises(ConfigError):
            await session.truncate_item("item_2", 0, -1)

    @pytest.mark.asyncio
    async def test_function_output(self, fake_ws):
        ws = fake_ws()
        session = RealtimeSession(ws)

        await session.submit_function_output("call_1", '{"sum": 42}')

        assert ws.sent == [
            {"type": "conversation.item.create",
             "item": {"type": "function_call_output", "call_id": "call_1", "output": '{"sum": 42}'}},
            {"type": "response.create"},
        ]

    @pytest.mark.asyncio
    async def test_out_of_band_response(self, fake_ws):
        ws = fake_ws()
        session = RealtimeSession(ws)

        await session.create_response(ResponseCreateConfig.out_of_band(
            modalities=[Modality.TEXT], instructions="Classify the topic", metadata={"kind": "topic"},
            max_output_tokens="inf",
        ))

        assert ws.sent[0] == {"type": "response.create", "response": {
            "modalities": ["text"],
            "instructions": "Classify the topic",
            "max_output_tokens": "inf",
            "conversation": "none",
            "metadata": {"kind": "topic"},
        }}

    @pytest.mark.asyncio
    async def test_sends_are_serialized(self, fake_ws):
        ws = fake_ws()
        session = RealtimeSession(ws)

        await asyncio.gather(*(session.append_audio("AAAA") for _ in range(20)))

        assert len(ws.sent) == 20
        assert ws.max_active_sends == 1

    @pytest.mark.asyncio
    async def test_send_after_close(self, fake_ws):
        ws = fake_ws()
        session = RealtimeSession(ws)
        await session.close()

        with pytest.raises(TransportError):
            await session.commit_audio()
        assert ws.closed

    @pytest.mark.asyncio
    async def test_send_on_dropped_connection(self, fake_ws):
        ws = fake_ws()
        ws.send_error = ConnectionClosedError(None, None)
        session = RealtimeSession(ws)

        with pytest.raises(TransportError):
            await session.commit_audio()
        assert session.closed


class TestReceiving:
    """Tests for event delivery"""

    @pytest.mark.asyncio
    async def test_unknown_event_preserved(self, fake_ws):
        frame = {"type": "response.future_feature", "event_id": "e9", "payload": {"x": 1}}
        session = RealtimeSession(fake_ws([frame]))

        event = await session.recv()

        assert isinstance(event, UnknownServerEvent)
        assert event.type == "response.future_feature"
        assert event.raw == frame
        assert await session.recv() is None

    @pytest.mark.asyncio
    async def test_binary_frames_ignored(self, fake_ws):
        session = RealtimeSession(fake_ws([b"\x00\x01", {"type": "input_audio_buffer.cleared"}]))
        event = await session.recv()
        assert event.type == "input_audio_buffer.cleared"

    @pytest.mark.asyncio
    async def test_malformed_frame(self, fake_ws):
        session = RealtimeSession(fake_ws(["{not json"]))
        with pytest.raises(CodecError):
            await session.recv()

    @pytest.mark.asyncio
    async def test_abnormal_close_ends_stream(self, fake_ws):
        session = RealtimeSession(fake_ws([ConnectionClosedError(None, None)]))
        assert await session.recv() is None
        assert session.closed

    @pytest.mark.asyncio
    async def test_pull_and_push_are_exclusive(self, fake_ws):
        session = RealtimeSession(fake_ws([{"type": "input_audio_buffer.cleared"}]))
        await session.recv()
        with pytest.raises(ConfigError):
            await session.run(EventHandler())

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, fake_ws):
        ws = fake_ws()
        async with RealtimeSession(ws) as session:
            await session.commit_audio()
        assert ws.closed
        assert session.closed
        await session.close()
