import logging

import pytest

from openai_tools.config.constants import DEFAULT_STT_MODEL, DEFAULT_TTS_MODEL
from openai_tools.errors import ConfigError
from openai_tools.models.audio import (
    AudioFormat,
    SttModel,
    TimestampGranularity,
    TranscribeOptions,
    TranscriptionFormat,
    TranslateOptions,
    TtsModel,
    TtsOptions,
    Voice,
)
from openai_tools.services.audio import Audio


@pytest.fixture
def audio(server, openai_auth):
    """Provide an Audio client wired to the mock server"""
    return Audio(openai_auth, transport=server.transport)


class TestTextToSpeech:
    """Tests for speech synthesis"""

    @pytest.mark.asyncio
    async def test_returns_audio_bytes(self, server, audio):
        server.respond(content=b"ID3fake-mp3")

        data = await audio.text_to_speech(
            "Hello",
            TtsOptions(voice=Voice.CORAL, response_format=AudioFormat.MP3, instructions="Cheerful"),
        )

        assert data == b"ID3fake-mp3"
        assert str(server.last.url) == "https://api.openai.com/v1/audio/speech"
        assert server.last_json() == {
            "input": "Hello",
            "model": "gpt-4o-mini-tts",
            "voice": "coral",
            "response_format": "mp3",
            "instructions": "Cheerful",
        }

    def test_default_models(self):
        assert TtsOptions().model.value == DEFAULT_TTS_MODEL
        assert TranscribeOptions().model.value == DEFAULT_STT_MODEL

    @pytest.mark.asyncio
    async def test_instructions_dropped_for_older_models(self, server, audio, caplog):
        caplog.set_level(logging.WARNING, logger="openai_tools")
        server.respond(content=b"audio")

        await audio.text_to_speech("Hello", TtsOptions(model=TtsModel.TTS_1, instructions="Whisper"))

        assert "instructions" not in server.last_json()
        assert "does not support instructions" in caplog.text

    @pytest.mark.asyncio
    async def test_empty_text(self, server, audio):
        with pytest.raises(ConfigError):
            await audio.text_to_speech("")


class TestTranscription:
    """Tests for transcription and translation"""

    @pytest.mark.asyncio
    async def test_transcribe_verbose(self, server, audio):
        server.respond(json_body={
            "text": "hello world",
            "language": "english",
            "duration": 1.5,
            "words": [{"word": "hello", "start": 0.0, "end": 0.5}, {"word": "world", "start": 0.6, "end": 1.0}],
        })

        result = await audio.transcribe_bytes(
            b"RIFFfake",
            "clip.wav",
            TranscribeOptions(
                model=SttModel.WHISPER_1,
                response_format=TranscriptionFormat.VERBOSE_JSON,
                timestamp_granularities=[TimestampGranularity.WORD, TimestampGranularity.SEGMENT],
            ),
        )

        assert result.text == "hello world"
        assert [w.word for w in result.words] == ["hello", "world"]
        content = server.last.content
        assert b'filename="clip.wav"' in content
        assert b"audio/wav" in content
        assert b"whisper-1" in content
        assert content.count(b'name="timestamp_granularities[]"') == 2

    @pytest.mark.asyncio
    async def test_transcribe_text_format(self, server, audio, tmp_path):
        path = tmp_path / "clip.mp3"
        path.write_bytes(b"ID3")
        server.respond(content=b"plain transcript\n")

        result = await audio.transcribe(path, TranscribeOptions(response_format=TranscriptionFormat.TEXT))

        assert result.text == "plain transcript\n"

    @pytest.mark.asyncio
    async def test_translate_defaults_to_whisper(self, server, audio):
        server.respond(json_body={"text": "Good morning"})

        result = await audio.translate_bytes(b"audio", "clip.m4a", TranslateOptions(prompt="greeting"))

        assert result.text == "Good morning"
        assert str(server.last.url) == "https://api.openai.com/v1/audio/translations"
        assert b"whisper-1" in server.last.content
        assert b"greeting" in server.last.content

    @pytest.mark.asyncio
    async def test_empty_audio(self, server, audio):
        with pytest.raises(ConfigError):
            await audio.transcribe_bytes(b"", "clip.wav")
        assert server.requests == []
