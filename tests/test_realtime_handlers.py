import pytest

from openai_tools.realtime.events import parse_server_event
from openai_tools.realtime.handlers import EventHandler


def delta(text):
    return parse_server_event({"type": "response.text.delta", "response_id": "r", "item_id": "i", "delta": text})


class TestEventHandler:
    """Tests for push-style dispatch"""

    @pytest.mark.asyncio
    async def test_sync_and_async_callbacks(self):
        seen = []

        async def async_callback(event):
            seen.append(("async", event.delta))

        handler = EventHandler()
        handler.on_text_delta(lambda event: seen.append(("sync", event.delta)))
        handler.on_text_delta(async_callback)

        assert await handler.handle(delta("a")) is True
        assert seen == [("sync", "a"), ("async", "a")]

    @pytest.mark.asyncio
    async def test_decorator_registration(self):
        seen = []
        handler = EventHandler()

        @handler.on("response.done")
        def finished(event):
            seen.append(event.response.status)

        await handler.handle(parse_server_event({"type": "response.done", "response": {"status": "completed"}}))
        assert seen == ["completed"]
        assert finished is not None

    @pytest.mark.asyncio
    async def test_fallback_for_unhandled(self):
        seen = []
        handler = EventHandler().on_text_delta(lambda event: None).on_any(lambda event: seen.append(event.type))

        await handler.handle(delta("a"))
        await handler.handle(parse_server_event({"type": "something.new"}))

        assert seen == ["something.new"]

    @pytest.mark.asyncio
    async def test_unhandled_returns_false(self):
        assert await EventHandler().handle(delta("a")) is False

    def test_handlers_registry(self):
        handler = EventHandler().on_error(print).on_speech_started(print).on_function_call_arguments_done(print)
        assert set(handler.handlers) == {"error", "input_audio_buffer.speech_started",
                                         "response.function_call_arguments.done"}

    @pytest.mark.asyncio
    async def test_transcript_done_and_argument_delta(self):
        seen = []
        handler = (
            EventHandler()
            .on_audio_transcript_done(lambda event: seen.append(event.transcript))
            .on_function_call_arguments_delta(lambda event: seen.append((event.call_id, event.delta)))
        )

        await handler.handle(parse_server_event({"type": "response.audio_transcript.done", "response_id": "r",
                                                 "item_id": "i", "transcript": "hello"}))
        await handler.handle(parse_server_event({"type": "response.function_call_arguments.delta",
                                                 "response_id": "r", "item_id": "i", "call_id": "call_1",
                                                 "delta": "{\"a\""}))

        assert seen == ["hello", ("call_1", "{\"a\"")]
