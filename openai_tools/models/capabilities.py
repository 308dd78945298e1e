"""
Model identifiers and per-model parameter support.

Reasoning models (``o1``, ``o3``, ``o4`` and ``gpt-5`` families) reject most
sampling parameters. :func:`apply_parameter_support` removes the ones a model
cannot take from an outgoing request body and logs a warning for each, so the
request still succeeds.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from openai_tools.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

REASONING_MODEL_PREFIXES = ("o1", "o3", "o4", "gpt-5")


class ChatModel(str, Enum):
    """Well-known chat model identifiers. Any string is accepted where a model is expected."""
    GPT_5_2 = "gpt-5.2"
    GPT_5_1 = "gpt-5.1"
    GPT_5_MINI = "gpt-5-mini"
    GPT_4_1 = "gpt-4.1"
    GPT_4_1_MINI = "gpt-4.1-mini"
    GPT_4_1_NANO = "gpt-4.1-nano"
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4O_AUDIO_PREVIEW = "gpt-4o-audio-preview"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_3_5_TURBO = "gpt-3.5-turbo"
    O1 = "o1"
    O1_PRO = "o1-pro"
    O3 = "o3"
    O3_MINI = "o3-mini"
    O4_MINI = "o4-mini"


class EmbeddingModel(str, Enum):
    TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
    TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"
    TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"

    @property
    def dimensions(self) -> int:
        return 3072 if self == EmbeddingModel.TEXT_EMBEDDING_3_LARGE else 1536


class RealtimeModel(str, Enum):
    GPT_4O_REALTIME_PREVIEW = "gpt-4o-realtime-preview"
    GPT_4O_MINI_REALTIME_PREVIEW = "gpt-4o-mini-realtime-preview"


class FineTuningModel(str, Enum):
    GPT_4_1_2025_04_14 = "gpt-4.1-2025-04-14"
    GPT_4_1_MINI_2025_04_14 = "gpt-4.1-mini-2025-04-14"
    GPT_4_1_NANO_2025_04_14 = "gpt-4.1-nano-2025-04-14"
    GPT_4O_MINI_2024_07_18 = "gpt-4o-mini-2024-07-18"
    GPT_4O_2024_08_06 = "gpt-4o-2024-08-06"
    GPT_3_5_TURBO_0125 = "gpt-3.5-turbo-0125"


class RestrictionKind(str, Enum):
    ANY = "any"
    FIXED = "fixed"
    NOT_SUPPORTED = "not_supported"


class ParameterRestriction:
    """What values a numeric sampling parameter may take."""

    def __init__(self, kind: RestrictionKind, value: Optional[float] = None):
        self.kind = kind
        self.value = value

    @classmethod
    def any(cls) -> "ParameterRestriction":
        return cls(RestrictionKind.ANY)

    @classmethod
    def fixed(cls, value: float) -> "ParameterRestriction":
        return cls(RestrictionKind.FIXED, value)

    def allows(self, value: float) -> bool:
        if self.kind == RestrictionKind.ANY:
            return True
        if self.kind == RestrictionKind.FIXED:
            return abs(float(value) - float(self.value)) < 1e-9
        return False


class ParameterSupport:
    """Which sampling parameters a model accepts."""

    def __init__(self, reasoning: bool):
        self.reasoning = reasoning
        if reasoning:
            self.temperature = ParameterRestriction.fixed(1.0)
            self.top_p = ParameterRestriction.fixed(1.0)
            self.frequency_penalty = ParameterRestriction.fixed(0.0)
            self.presence_penalty = ParameterRestriction.fixed(0.0)
        else:
            self.temperature = ParameterRestriction.any()
            self.top_p = ParameterRestriction.any()
            self.frequency_penalty = ParameterRestriction.any()
            self.presence_penalty = ParameterRestriction.any()
        self.logprobs = not reasoning
        self.top_logprobs = not reasoning
        self.logit_bias = not reasoning
        self.n_multiple = not reasoning


def model_id(model: Any) -> str:
    """Return the string identifier of a model enum or string."""
    return model.value if isinstance(model, Enum) else str(model)


def is_reasoning_model(model: Any) -> bool:
    return model_id(model).startswith(REASONING_MODEL_PREFIXES)


def parameter_support(model: Any) -> ParameterSupport:
    return ParameterSupport(reasoning=is_reasoning_model(model))


def apply_parameter_support(model: Any, body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop sampling parameters ``model`` does not accept from ``body``.

    Args:
        model: Model identifier
        body: Request body, modified in place

    Returns:
        Dict[str, Any]: The same body
    """
    support = parameter_support(model)
    name = model_id(model)

    for key in ("temperature", "top_p", "frequency_penalty", "presence_penalty"):
        if key in body and not getattr(support, key).allows(body[key]):
            logger.warning(f"Model {name} does not support {key}={body[key]}; dropping it")
            del body[key]

    for key in ("logprobs", "top_logprobs", "logit_bias"):
        if key in body and not getattr(support, key):
            logger.warning(f"Model {name} does not support {key}; dropping it")
            del body[key]

    if body.get("n", 1) != 1 and not support.n_multiple:
        logger.warning(f"Model {name} does not support n={body['n']}; dropping it")
        del body["n"]

    return body


def tts_supports_instructions(model: Any) -> bool:
    """Only the ``gpt-4o-mini-tts`` family accepts voice instructions."""
    return model_id(model).startswith("gpt-4o-mini-tts")
