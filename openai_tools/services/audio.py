"""
Audio client: text-to-speech, transcription and translation.

Speech synthesis returns raw audio bytes in the requested format.
Transcription and translation upload audio as multipart form data and return a
:class:`TranscriptionResponse`; for the ``text``, ``srt`` and ``vtt`` response
formats the server answers with plain text, which becomes the ``text`` field.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from openai_tools.config.constants import DEFAULT_TRANSLATION_MODEL, LOGGER_NAME
from openai_tools.core.http_client import MultipartPart, decode_json
from openai_tools.errors import ConfigError
from openai_tools.models.audio import (
    TranscribeOptions,
    TranscriptionFormat,
    TranscriptionResponse,
    TranslateOptions,
    TtsOptions,
)
from openai_tools.models.capabilities import tts_supports_instructions
from openai_tools.models.message import read_file_bytes
from openai_tools.services.base import OperationClient

logger = logging.getLogger(LOGGER_NAME)

SPEECH_PATH = "audio/speech"
TRANSCRIPTIONS_PATH = "audio/transcriptions"
TRANSLATIONS_PATH = "audio/translations"

AUDIO_MIME_TYPES = {
    ".mp3": "audio/mpeg",
    ".mpga": "audio/mpeg",
    ".mpeg": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".mp4": "audio/mp4",
    ".wav": "audio/wav",
    ".webm": "audio/webm",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
}


def audio_mime_type(filename: str) -> str:
    return AUDIO_MIME_TYPES.get(Path(filename).suffix.lower(), "audio/mpeg")


class Audio(OperationClient):
    """Client for the ``/audio`` endpoints."""

    async def text_to_speech(self, text: str, options: Optional[TtsOptions] = None) -> bytes:
        """
        Synthesize speech.

        ``instructions`` is only sent to models that accept it; for other
        models it is dropped and a warning is logged.

        Returns:
            bytes: Audio in ``options.response_format`` (mp3 by default)
        """
        if not text:
            raise ConfigError("Text-to-speech requires non-empty text")
        options = options or TtsOptions()
        body: Dict[str, Any] = {"input": text}
        body.update(options.to_wire())
        if "instructions" in body and not tts_supports_instructions(options.model):
            logger.warning(f"Model {options.model.value} does not support instructions; dropping them")
            del body["instructions"]
        logger.info(f"Synthesizing {len(text)} characters with {options.model.value}/{options.voice.value}")
        return await self._send("POST", SPEECH_PATH, json_body=body)

    async def transcribe(self, path: Union[str, Path], options: Optional[TranscribeOptions] = None) -> TranscriptionResponse:
        """Transcribe a local audio file."""
        path = Path(path)
        return await self.transcribe_bytes(read_file_bytes(path), path.name, options)

    async def transcribe_bytes(self, data: bytes, filename: str,
                               options: Optional[TranscribeOptions] = None) -> TranscriptionResponse:
        """
        Transcribe in-memory audio.

        Args:
            data: Encoded audio
            filename: Name whose extension tells the server the container format
            options: Model, language, format and timestamp options
        """
        options = options or TranscribeOptions()
        fields = options.to_wire()
        granularities = fields.pop("timestamp_granularities", None) or []
        parts = self._audio_parts(data, filename, fields)
        parts.extend(MultipartPart.text("timestamp_granularities[]", value) for value in granularities)
        body = await self._send("POST", TRANSCRIPTIONS_PATH, multipart=parts)
        return self._parse_transcription(body, options.response_format)

    async def translate(self, path: Union[str, Path], options: Optional[TranslateOptions] = None) -> TranscriptionResponse:
        """Translate a local audio file into English text."""
        path = Path(path)
        return await self.translate_bytes(read_file_bytes(path), path.name, options)

    async def translate_bytes(self, data: bytes, filename: str,
                              options: Optional[TranslateOptions] = None) -> TranscriptionResponse:
        options = options or TranslateOptions()
        fields = options.to_wire()
        fields.setdefault("model", DEFAULT_TRANSLATION_MODEL)
        parts = self._audio_parts(data, filename, fields)
        body = await self._send("POST", TRANSLATIONS_PATH, multipart=parts)
        return self._parse_transcription(body, options.response_format)

    @staticmethod
    def _audio_parts(data: bytes, filename: str, fields: Dict[str, Any]) -> List[MultipartPart]:
        if not data:
            raise ConfigError("Audio data must not be empty")
        if not filename:
            raise ConfigError("Audio upload requires a filename")
        parts = [MultipartPart.file("file", data, filename, audio_mime_type(filename))]
        parts.extend(MultipartPart.text(name, value) for name, value in fields.items())
        return parts

    @staticmethod
    def _parse_transcription(body: bytes, response_format: Optional[TranscriptionFormat]) -> TranscriptionResponse:
        if response_format is not None and not response_format.is_json:
            return TranscriptionResponse(text=body.decode("utf-8", errors="replace"))
        return TranscriptionResponse.parse_wire(decode_json(body))
