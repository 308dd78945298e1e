"""
Session and per-response configuration for the Realtime API.

These records are sent in ``session.update`` and ``response.create`` events.
Unset fields are omitted so the server keeps its current value. The single
exception is manual turn-taking: :meth:`SessionConfig.manual_turns` sends
``"turn_detection": null``, which is how the protocol disables voice activity
detection.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from openai_tools.errors import ConfigError
from openai_tools.models.base import coerce_enum
from openai_tools.models.tool import ApiContext, Tool


class Modality(str, Enum):
    TEXT = "text"
    AUDIO = "audio"


class RealtimeVoice(str, Enum):
    ALLOY = "alloy"
    ASH = "ash"
    BALLAD = "ballad"
    CORAL = "coral"
    ECHO = "echo"
    SAGE = "sage"
    SHIMMER = "shimmer"
    VERSE = "verse"


class RealtimeAudioFormat(str, Enum):
    """Wire encoding of audio in both directions."""
    PCM16 = "pcm16"
    G711_ULAW = "g711_ulaw"
    G711_ALAW = "g711_alaw"


class Eagerness(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    AUTO = "auto"


class NoiseReductionType(str, Enum):
    NEAR_FIELD = "near_field"
    FAR_FIELD = "far_field"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


class InputAudioTranscription(_ConfigModel):
    """Transcribe user audio alongside the conversation."""
    model: str = "whisper-1"
    language: Optional[str] = None
    prompt: Optional[str] = None


class NoiseReduction(_ConfigModel):
    type: NoiseReductionType = NoiseReductionType.NEAR_FIELD


class ServerVad(_ConfigModel):
    """
    Acoustic voice activity detection.

    Attributes:
        threshold: Activation threshold in [0, 1]
        prefix_padding_ms: Audio kept before detected speech
        silence_duration_ms: Silence that ends a turn
        create_response: Start a response automatically when a turn ends
        interrupt_response: Cancel the current response when speech starts
    """
    type: Literal["server_vad"] = "server_vad"
    threshold: Optional[float] = None
    prefix_padding_ms: Optional[int] = None
    silence_duration_ms: Optional[int] = None
    create_response: Optional[bool] = None
    interrupt_response: Optional[bool] = None

    def to_wire(self) -> Dict[str, Any]:
        if self.threshold is not None and not 0.0 <= self.threshold <= 1.0:
            raise ConfigError(f"VAD threshold must be within [0, 1], got {self.threshold}")
        return super().to_wire()


class SemanticVad(_ConfigModel):
    """Turn detection by the meaning of what the user said."""
    type: Literal["semantic_vad"] = "semantic_vad"
    eagerness: Optional[Eagerness] = None
    create_response: Optional[bool] = None
    interrupt_response: Optional[bool] = None


TurnDetection = Union[ServerVad, SemanticVad]


def tool_choice_wire(choice: str) -> Union[str, Dict[str, Any]]:
    """``auto``/``none``/``required`` pass through; anything else forces that function."""
    if choice in ("auto", "none", "required"):
        return choice
    return {"type": "function", "name": choice}


def max_tokens_wire(value: Union[int, str]) -> Union[int, str]:
    if value == "inf" or isinstance(value, int):
        return value
    raise ConfigError(f"Max output tokens must be an integer or 'inf', got {value!r}")


class SessionConfig(BaseModel):
    """
    Session-level configuration sent with ``session.update``.

    A freshly constructed config has every field unset; :meth:`is_default`
    tells the connector whether an initial ``session.update`` is needed.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    modalities: Optional[List[Modality]] = None
    instructions: Optional[str] = None
    voice: Optional[RealtimeVoice] = None
    input_audio_format: Optional[RealtimeAudioFormat] = None
    output_audio_format: Optional[RealtimeAudioFormat] = None
    input_audio_transcription: Optional[InputAudioTranscription] = None
    input_audio_noise_reduction: Optional[NoiseReduction] = None
    turn_detection: Optional[TurnDetection] = None
    manual_turn_detection: bool = False
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[str] = None
    temperature: Optional[float] = None
    max_response_output_tokens: Optional[Union[int, str]] = None

    def manual_turns(self) -> "SessionConfig":
        """Disable VAD; the caller commits audio and requests responses itself."""
        self.turn_detection = None
        self.manual_turn_detection = True
        return self

    def is_default(self) -> bool:
        return not self.to_wire()

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.modalities is not None:
            out["modalities"] = [coerce_enum(Modality, m, "modality").value for m in self.modalities]
        if self.instructions is not None:
            out["instructions"] = self.instructions
        if self.voice is not None:
            out["voice"] = coerce_enum(RealtimeVoice, self.voice, "voice").value
        if self.input_audio_format is not None:
            out["input_audio_format"] = coerce_enum(RealtimeAudioFormat, self.input_audio_format, "audio format").value
        if self.output_audio_format is not None:
            out["output_audio_format"] = coerce_enum(RealtimeAudioFormat, self.output_audio_format, "audio format").value
        if self.input_audio_transcription is not None:
            out["input_audio_transcription"] = self.input_audio_transcription.to_wire()
        if self.input_audio_noise_reduction is not None:
            out["input_audio_noise_reduction"] = self.input_audio_noise_reduction.to_wire()
        if self.turn_detection is not None:
            out["turn_detection"] = self.turn_detection.to_wire()
        elif self.manual_turn_detection:
            out["turn_detection"] = None
        if self.tools is not None:
            out["tools"] = [tool.to_wire(ApiContext.REALTIME) for tool in self.tools]
        if self.tool_choice is not None:
            out["tool_choice"] = tool_choice_wire(self.tool_choice)
        if self.temperature is not None:
            out["temperature"] = self.temperature
        if self.max_response_output_tokens is not None:
            out["max_response_output_tokens"] = max_tokens_wire(self.max_response_output_tokens)
        return out


class ResponseCreateConfig(BaseModel):
    """
    Per-response overrides sent with ``response.create``.

    Setting ``conversation="none"`` produces an out-of-band response that is
    not added to the default conversation.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    modalities: Optional[List[Modality]] = None
    instructions: Optional[str] = None
    voice: Optional[RealtimeVoice] = None
    output_audio_format: Optional[RealtimeAudioFormat] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[str] = None
    temperature: Optional[float] = None
    max_output_tokens: Optional[Union[int, str]] = None
    conversation: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None
    input: Optional[List[Dict[str, Any]]] = None

    @classmethod
    def out_of_band(cls, **kwargs: Any) -> "ResponseCreateConfig":
        return cls(conversation="none", **kwargs)

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.modalities is not None:
            out["modalities"] = [coerce_enum(Modality, m, "modality").value for m in self.modalities]
        if self.instructions is not None:
            out["instructions"] = self.instructions
        if self.voice is not None:
            out["voice"] = coerce_enum(RealtimeVoice, self.voice, "voice").value
        if self.output_audio_format is not None:
            out["output_audio_format"] = coerce_enum(RealtimeAudioFormat, self.output_audio_format, "audio format").value
        if self.tools is not None:
            out["tools"] = [tool.to_wire(ApiContext.REALTIME) for tool in self.tools]
        if self.tool_choice is not None:
            out["tool_choice"] = tool_choice_wire(self.tool_choice)
        if self.temperature is not None:
            out["temperature"] = self.temperature
        if self.max_output_tokens is not None:
            out["max_output_tokens"] = max_tokens_wire(self.max_output_tokens)
        if self.conversation is not None:
            out["conversation"] = self.conversation
        if self.metadata is not None:
            out["metadata"] = dict(self.metadata)
        if self.input is not None:
            out["input"] = list(self.input)
        return out
