"""
Pydantic models and enumerations for the Responses API.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from openai_tools.models.base import WireModel
from openai_tools.models.usage import Usage


class Include(str, Enum):
    """Extra data the server may attach to a response."""
    WEB_SEARCH_CALL_RESULTS = "web_search_call.results"
    CODE_INTERPRETER_CALL_OUTPUTS = "code_interpreter_call.outputs"
    COMPUTER_CALL_OUTPUT_IMAGE_URL = "computer_call_output.output.image_url"
    FILE_SEARCH_CALL_RESULTS = "file_search_call.results"
    MESSAGE_INPUT_IMAGE_URL = "message.input_image.image_url"
    MESSAGE_OUTPUT_TEXT_LOGPROBS = "message.output_text.logprobs"
    REASONING_ENCRYPTED_CONTENT = "reasoning.encrypted_content"


class ReasoningEffort(str, Enum):
    NONE = "none"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    XHIGH = "xhigh"


class ReasoningSummary(str, Enum):
    AUTO = "auto"
    CONCISE = "concise"
    DETAILED = "detailed"


class TextVerbosity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Truncation(str, Enum):
    AUTO = "auto"
    DISABLED = "disabled"


class ToolChoiceMode(str, Enum):
    NONE = "none"
    AUTO = "auto"
    REQUIRED = "required"


class OutputContent(WireModel):
    """A content part of an output message (``output_text``, ``refusal``, ...)."""
    type: str
    text: Optional[str] = None
    refusal: Optional[str] = None
    annotations: Optional[List[Dict[str, Any]]] = None
    logprobs: Optional[List[Dict[str, Any]]] = None


class OutputItem(WireModel):
    """
    One entry of ``output[]``.

    The ``type`` discriminates the item: ``message`` items carry ``content``,
    ``function_call`` items carry ``call_id``/``name``/``arguments``,
    ``reasoning`` items carry ``summary`` and optionally ``encrypted_content``.
    Fields of other item types are kept as extra attributes.
    """
    id: Optional[str] = None
    type: str
    role: Optional[str] = None
    status: Optional[str] = None
    content: Optional[List[OutputContent]] = None
    arguments: Optional[str] = None
    call_id: Optional[str] = None
    name: Optional[str] = None
    queries: Optional[List[str]] = None
    results: Optional[List[Dict[str, Any]]] = None
    action: Optional[Dict[str, Any]] = None
    summary: Optional[List[Dict[str, Any]]] = None
    encrypted_content: Optional[str] = None

    def text(self) -> str:
        return "".join(part.text for part in self.content or [] if part.type == "output_text" and part.text)


class ResponseError(WireModel):
    code: Optional[str] = None
    message: Optional[str] = None


class Response(WireModel):
    """Response of ``POST /responses``."""
    id: str
    object: str = "response"
    created_at: Optional[float] = None
    status: Optional[str] = None
    model: Optional[str] = None
    output: List[OutputItem] = []
    usage: Optional[Usage] = None
    error: Optional[ResponseError] = None
    incomplete_details: Optional[Dict[str, Any]] = None
    instructions: Optional[Any] = None
    previous_response_id: Optional[str] = None
    conversation: Optional[Any] = None
    metadata: Optional[Dict[str, Any]] = None

    def output_text(self) -> str:
        """Concatenated text of every ``message`` item in ``output[]``."""
        return "".join(item.text() for item in self.output if item.type == "message")

    def function_calls(self) -> List[OutputItem]:
        return [item for item in self.output if item.type == "function_call"]
