"""
Connector for Realtime API sessions.

:class:`RealtimeClient` collects the session configuration through fluent
setters and opens a :class:`RealtimeSession` with :meth:`RealtimeClient.connect`.
"""

import asyncio
import logging
from typing import Any, List, Optional, Union

import websockets
from websockets.exceptions import WebSocketException

from openai_tools.config.constants import (
    CONNECTION_TIMEOUT,
    DEFAULT_REALTIME_MODEL,
    LOGGER_NAME,
    REALTIME_BETA_HEADER,
    REALTIME_BETA_VALUE,
    USER_AGENT,
    WS_MAX_QUEUE,
    WS_MAX_SIZE,
    WS_PING_INTERVAL,
    WS_PING_TIMEOUT,
)
from openai_tools.core.auth import AuthProvider
from openai_tools.errors import TransportError
from openai_tools.models.base import coerce_enum
from openai_tools.models.capabilities import model_id
from openai_tools.models.tool import Tool
from openai_tools.realtime.session import RealtimeSession
from openai_tools.realtime.session_config import (
    Eagerness,
    InputAudioTranscription,
    Modality,
    NoiseReduction,
    NoiseReductionType,
    RealtimeAudioFormat,
    RealtimeVoice,
    SemanticVad,
    ServerVad,
    SessionConfig,
)

logger = logging.getLogger(LOGGER_NAME)


class RealtimeClient:
    """
    Builder for Realtime sessions.

    Usage example:
    ```python
    client = RealtimeClient(model="gpt-4o-realtime-preview")
    client.modalities([Modality.TEXT]).instructions("Be brief.")
    session = await client.connect()
    await session.send_text("Say hi")
    async for event in session.events():
        if event.type == "response.text.delta":
            print(event.delta, end="")
        elif event.type == "response.done":
            break
    await session.close()
    ```

    Args:
        auth: Provider to connect with; detected from the environment if omitted
        model: Realtime model identifier
    """

    def __init__(self, auth: Optional[AuthProvider] = None, model: Any = DEFAULT_REALTIME_MODEL):
        self.auth = auth if auth is not None else AuthProvider.from_env()
        self._model = model_id(model)
        self.config = SessionConfig()
        logger.info(f"RealtimeClient initialized with model: {self._model}")

    def model(self, model: Any) -> "RealtimeClient":
        self._model = model_id(model)
        return self

    def session_config(self, config: SessionConfig) -> "RealtimeClient":
        self.config = config
        return self

    def modalities(self, modalities: List[Modality]) -> "RealtimeClient":
        self.config.modalities = [coerce_enum(Modality, m, "modality") for m in modalities]
        return self

    def instructions(self, instructions: str) -> "RealtimeClient":
        self.config.instructions = instructions
        return self

    def voice(self, voice: RealtimeVoice) -> "RealtimeClient":
        self.config.voice = coerce_enum(RealtimeVoice, voice, "voice")
        return self

    def input_audio_format(self, audio_format: RealtimeAudioFormat) -> "RealtimeClient":
        self.config.input_audio_format = coerce_enum(RealtimeAudioFormat, audio_format, "audio format")
        return self

    def output_audio_format(self, audio_format: RealtimeAudioFormat) -> "RealtimeClient":
        self.config.output_audio_format = coerce_enum(RealtimeAudioFormat, audio_format, "audio format")
        return self

    def input_audio_transcription(self, model: str = "whisper-1", language: Optional[str] = None,
                                  prompt: Optional[str] = None) -> "RealtimeClient":
        self.config.input_audio_transcription = InputAudioTranscription(model=model, language=language, prompt=prompt)
        return self

    def noise_reduction(self, kind: NoiseReductionType = NoiseReductionType.NEAR_FIELD) -> "RealtimeClient":
        kind = coerce_enum(NoiseReductionType, kind, "noise reduction type")
        self.config.input_audio_noise_reduction = NoiseReduction(type=kind)
        return self

    def server_vad(
        self,
        threshold: Optional[float] = None,
        prefix_padding_ms: Optional[int] = None,
        silence_duration_ms: Optional[int] = None,
        create_response: Optional[bool] = None,
        interrupt_response: Optional[bool] = None,
    ) -> "RealtimeClient":
        self.config.turn_detection = ServerVad(
            threshold=threshold,
            prefix_padding_ms=prefix_padding_ms,
            silence_duration_ms=silence_duration_ms,
            create_response=create_response,
            interrupt_response=interrupt_response,
        )
        self.config.manual_turn_detection = False
        return self

    def semantic_vad(
        self,
        eagerness: Optional[Eagerness] = None,
        create_response: Optional[bool] = None,
        interrupt_response: Optional[bool] = None,
    ) -> "RealtimeClient":
        if eagerness is not None:
            eagerness = coerce_enum(Eagerness, eagerness, "eagerness")
        self.config.turn_detection = SemanticVad(
            eagerness=eagerness, create_response=create_response, interrupt_response=interrupt_response
        )
        self.config.manual_turn_detection = False
        return self

    def manual_turns(self) -> "RealtimeClient":
        """Disable VAD; commit audio and request responses explicitly."""
        self.config.manual_turns()
        return self

    def tools(self, tools: List[Tool]) -> "RealtimeClient":
        self.config.tools = list(tools)
        return self

    def tool_choice(self, choice: str) -> "RealtimeClient":
        self.config.tool_choice = choice
        return self

    def temperature(self, temperature: float) -> "RealtimeClient":
        self.config.temperature = temperature
        return self

    def max_response_output_tokens(self, tokens: Union[int, str]) -> "RealtimeClient":
        self.config.max_response_output_tokens = tokens
        return self

    async def connect(self) -> RealtimeSession:
        """
        Open the WebSocket and wait for ``session.created``.

        If any configuration was set, a ``session.update`` carrying it is sent
        before returning.

        Returns:
            RealtimeSession: The open session

        Raises:
            TransportError: If the connection cannot be established
            ApiError: If the server answers with an ``error`` event
            ConfigError: If another event arrives before ``session.created``
            StreamClosedError: If the server closes before ``session.created``
        """
        url = self.auth.realtime_url(self._model)
        headers = self.auth.apply_headers({
            "User-Agent": USER_AGENT,
            REALTIME_BETA_HEADER: REALTIME_BETA_VALUE,
        })

        logger.info(f"Connecting to Realtime API with model: {self._model}")
        logger.debug(f"WebSocket URL: {url}")
        try:
            ws = await asyncio.wait_for(
                websockets.connect(
                    url,
                    additional_headers=headers,
                    max_size=WS_MAX_SIZE,
                    max_queue=WS_MAX_QUEUE,
                    ping_interval=WS_PING_INTERVAL,
                    ping_timeout=WS_PING_TIMEOUT,
                    compression=None,
                ),
                timeout=CONNECTION_TIMEOUT,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out connecting to {url}")
            raise TransportError(f"Timed out after {CONNECTION_TIMEOUT}s connecting to realtime endpoint", cause=e) from e
        except (OSError, WebSocketException) as e:
            logger.error(f"Failed to connect to realtime endpoint: {e}")
            raise TransportError(f"Failed to connect to realtime endpoint: {e}", cause=e) from e

        session = RealtimeSession(ws)
        try:
            await session.wait_for_session_created()
            if not self.config.is_default():
                await session.update_session(self.config)
        except BaseException:
            await session.close()
            raise
        return session
