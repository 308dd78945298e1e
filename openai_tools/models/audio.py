"""
Pydantic models and enumerations for the Audio API.
"""

from enum import Enum
from typing import List, Optional

from openai_tools.config.constants import DEFAULT_STT_MODEL, DEFAULT_TTS_MODEL
from openai_tools.models.base import WireModel


class TtsModel(str, Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    GPT_4O_MINI_TTS = "gpt-4o-mini-tts"


class SttModel(str, Enum):
    WHISPER_1 = "whisper-1"
    GPT_4O_TRANSCRIBE = "gpt-4o-transcribe"


class Voice(str, Enum):
    ALLOY = "alloy"
    ASH = "ash"
    CORAL = "coral"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SAGE = "sage"
    SHIMMER = "shimmer"


class AudioFormat(str, Enum):
    """Output format of synthesized speech."""
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


class TranscriptionFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"

    @property
    def is_json(self) -> bool:
        return self in (TranscriptionFormat.JSON, TranscriptionFormat.VERBOSE_JSON)


class TimestampGranularity(str, Enum):
    WORD = "word"
    SEGMENT = "segment"


class TtsOptions(WireModel):
    """Options for text-to-speech."""
    model: TtsModel = TtsModel(DEFAULT_TTS_MODEL)
    voice: Voice = Voice.ALLOY
    response_format: Optional[AudioFormat] = None
    speed: Optional[float] = None
    instructions: Optional[str] = None


class TranscribeOptions(WireModel):
    """Options for speech-to-text."""
    model: SttModel = SttModel(DEFAULT_STT_MODEL)
    language: Optional[str] = None
    prompt: Optional[str] = None
    response_format: Optional[TranscriptionFormat] = None
    temperature: Optional[float] = None
    timestamp_granularities: Optional[List[TimestampGranularity]] = None


class TranslateOptions(WireModel):
    """
    Options for translation into English. ``whisper-1`` is the only model the
    endpoint accepts today and is used when ``model`` is left unset.
    """
    model: Optional[SttModel] = None
    prompt: Optional[str] = None
    response_format: Optional[TranscriptionFormat] = None
    temperature: Optional[float] = None


class Word(WireModel):
    word: str
    start: float
    end: float


class Segment(WireModel):
    id: int
    seek: int = 0
    start: float
    end: float
    text: str
    tokens: List[int] = []
    temperature: Optional[float] = None
    avg_logprob: Optional[float] = None
    compression_ratio: Optional[float] = None
    no_speech_prob: Optional[float] = None


class TranscriptionResponse(WireModel):
    """Transcription or translation result."""
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    words: Optional[List[Word]] = None
    segments: Optional[List[Segment]] = None
