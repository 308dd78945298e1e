"""
Conversation messages and their content parts.

A :class:`Message` is a role plus either plain text or a list of content parts
(text, remote image, local image file, audio). Messages are lowered to the wire
shape of the API they are sent to: Chat uses ``text``/``image_url`` parts, the
Responses API and Realtime use ``input_text``/``input_image``.
"""

import base64
import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ValidationError

from openai_tools.errors import CodecError, ConfigError
from openai_tools.models.tool import ApiContext

IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


class Role(str, Enum):
    """Role of a participant in a conversation."""
    SYSTEM = "system"
    DEVELOPER = "developer"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    FUNCTION = "function"


def image_mime_type(path: Union[str, Path]) -> str:
    """
    Return the MIME type for an image file by extension.

    Raises:
        ConfigError: If the extension is not a supported image type
    """
    suffix = Path(path).suffix.lower()
    if suffix not in IMAGE_MIME_TYPES:
        raise ConfigError(f"Unsupported image extension '{suffix}' for {path}")
    return IMAGE_MIME_TYPES[suffix]


def read_file_bytes(path: Union[str, Path]) -> bytes:
    """
    Read a local file.

    Raises:
        ConfigError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read file {path}: {e}") from e


class TextPart(BaseModel):
    """Plain text content."""
    type: Literal["text"] = "text"
    text: str

    def to_wire(self, context: ApiContext, role: Optional["Role"] = None) -> Dict[str, Any]:
        if context == ApiContext.CHAT:
            return {"type": "text", "text": self.text}
        if role == Role.ASSISTANT:
            return {"type": "output_text" if context == ApiContext.RESPONSES else "text", "text": self.text}
        return {"type": "input_text", "text": self.text}


class ImageUrlPart(BaseModel):
    """Image referenced by URL (including ``data:`` URLs)."""
    type: Literal["image_url"] = "image_url"
    url: str
    detail: Optional[str] = None

    def to_wire(self, context: ApiContext, role: Optional["Role"] = None) -> Dict[str, Any]:
        if context == ApiContext.CHAT:
            image_url: Dict[str, Any] = {"url": self.url}
            if self.detail is not None:
                image_url["detail"] = self.detail
            return {"type": "image_url", "image_url": image_url}
        out: Dict[str, Any] = {"type": "input_image", "image_url": self.url}
        if self.detail is not None:
            out["detail"] = self.detail
        return out


class ImageFilePart(BaseModel):
    """
    Local image file, inlined as a base64 ``data:`` URL when the message is
    lowered for sending.
    """
    type: Literal["image_file"] = "image_file"
    path: str
    detail: Optional[str] = None

    def data_url(self) -> str:
        mime = image_mime_type(self.path)
        encoded = base64.b64encode(read_file_bytes(self.path)).decode("ascii")
        return f"data:{mime};base64,{encoded}"

    def to_wire(self, context: ApiContext, role: Optional["Role"] = None) -> Dict[str, Any]:
        return ImageUrlPart(url=self.data_url(), detail=self.detail).to_wire(context, role)


class AudioPart(BaseModel):
    """Base64-encoded audio input."""
    type: Literal["input_audio"] = "input_audio"
    data: str
    format: str = "wav"
    transcript: Optional[str] = None

    def to_wire(self, context: ApiContext, role: Optional["Role"] = None) -> Dict[str, Any]:
        if context == ApiContext.REALTIME:
            out: Dict[str, Any] = {"type": "input_audio", "audio": self.data}
            if self.transcript is not None:
                out["transcript"] = self.transcript
            return out
        return {"type": "input_audio", "input_audio": {"data": self.data, "format": self.format}}


ContentPart = Union[TextPart, ImageUrlPart, ImageFilePart, AudioPart]


class FunctionCall(BaseModel):
    """Name and JSON-encoded arguments of a function call."""
    name: str
    arguments: str = ""


class ToolCall(BaseModel):
    """A tool call requested by the model."""
    id: str
    type: str = "function"
    function: FunctionCall

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def arguments(self) -> str:
        return self.function.arguments

    def arguments_dict(self) -> Dict[str, Any]:
        """
        Decode the arguments string.

        Raises:
            CodecError: If the model produced invalid JSON
        """
        try:
            value = json.loads(self.function.arguments or "{}")
        except ValueError as e:
            raise CodecError(f"Tool call {self.id} has invalid JSON arguments: {e}", cause=e) from e
        if not isinstance(value, dict):
            raise CodecError(f"Tool call {self.id} arguments are not a JSON object")
        return value

    def to_wire(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type,
                "function": {"name": self.function.name, "arguments": self.function.arguments}}


class Message(BaseModel):
    """
    A single conversation message.

    ``content`` is either a string or a list of parts. Assistant messages
    returned by chat completions may carry ``tool_calls`` with no content;
    such messages can be appended to the next request unchanged.
    """

    role: Role
    content: Optional[Union[str, List[ContentPart]]] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    refusal: Optional[str] = None
    annotations: Optional[List[Dict[str, Any]]] = None
    audio: Optional[Dict[str, Any]] = None

    @classmethod
    def from_string(cls, role: Role, text: str) -> "Message":
        """Create a text message."""
        if role == Role.TOOL:
            raise ConfigError("Tool messages require a tool_call_id; use Message.from_tool_call_response")
        return cls(role=role, content=text)

    @classmethod
    def from_parts(cls, role: Role, parts: List[ContentPart]) -> "Message":
        """Create a message from content parts."""
        if not parts:
            raise ConfigError("A message needs at least one content part")
        return cls(role=role, content=list(parts))

    @classmethod
    def from_image_file(cls, role: Role, path: Union[str, Path], text: Optional[str] = None) -> "Message":
        """
        Create a message carrying a local image, optionally preceded by text.

        Raises:
            ConfigError: If the file extension is not a supported image type
        """
        image_mime_type(path)
        parts: List[ContentPart] = []
        if text:
            parts.append(TextPart(text=text))
        parts.append(ImageFilePart(path=str(path)))
        return cls(role=role, content=parts)

    @classmethod
    def from_image_url(cls, role: Role, url: str, text: Optional[str] = None) -> "Message":
        parts: List[ContentPart] = []
        if text:
            parts.append(TextPart(text=text))
        parts.append(ImageUrlPart(url=url))
        return cls(role=role, content=parts)

    @classmethod
    def from_tool_call_response(cls, output: str, tool_call_id: str) -> "Message":
        """Create the ``role=tool`` message that answers a tool call."""
        if not tool_call_id:
            raise ConfigError("tool_call_id must not be empty")
        return cls(role=Role.TOOL, content=output, tool_call_id=tool_call_id)

    @classmethod
    def from_tool_calls(cls, tool_calls: List[ToolCall], content: Optional[str] = None) -> "Message":
        """Create an assistant message that records the tool calls it made."""
        return cls(role=Role.ASSISTANT, content=content, tool_calls=list(tool_calls))

    def text(self) -> Optional[str]:
        """Return the concatenated text content, if any."""
        if self.content is None or isinstance(self.content, str):
            return self.content
        texts = [part.text for part in self.content if isinstance(part, TextPart)]
        return "".join(texts) if texts else None

    def validate_for_send(self) -> None:
        """
        Check the message can be sent.

        Raises:
            ConfigError: If a tool message lacks ``tool_call_id`` or the
                message carries neither content nor tool calls
        """
        if self.role == Role.TOOL and not self.tool_call_id:
            raise ConfigError("Messages with role 'tool' require a tool_call_id")
        if not self.content and not self.tool_calls:
            raise ConfigError(f"Message with role '{self.role.value}' has no content")

    def _content_wire(self, context: ApiContext) -> Union[str, List[Dict[str, Any]], None]:
        if self.content is None or isinstance(self.content, str):
            return self.content
        return [part.to_wire(context, self.role) for part in self.content]

    def to_wire(self, context: ApiContext = ApiContext.CHAT) -> Dict[str, Any]:
        """
        Lower to the chat-completions (or Responses message) wire shape.

        Raises:
            ConfigError: If validation fails or a local image cannot be read
        """
        self.validate_for_send()
        out: Dict[str, Any] = {"role": self.role.value}
        content = self._content_wire(context)
        if content is not None:
            out["content"] = content
        if self.name is not None:
            out["name"] = self.name
        if self.tool_call_id is not None:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            out["tool_calls"] = [call.to_wire() for call in self.tool_calls]
        return out

    def to_responses_items(self) -> List[Dict[str, Any]]:
        """
        Lower to Responses API input items.

        Tool results become ``function_call_output`` items and assistant tool
        calls become ``function_call`` items; everything else is a message.
        """
        self.validate_for_send()
        if self.role == Role.TOOL:
            return [{"type": "function_call_output", "call_id": self.tool_call_id,
                     "output": self.text() or ""}]
        items: List[Dict[str, Any]] = []
        if self.content:
            items.append({"role": self.role.value, "content": self._content_wire(ApiContext.RESPONSES)})
        for call in self.tool_calls or []:
            items.append({"type": "function_call", "call_id": call.id,
                          "name": call.function.name, "arguments": call.function.arguments})
        return items


def messages_from_json(data: Any) -> List[Message]:
    """Parse a list of wire messages, e.g. a saved conversation."""
    if not isinstance(data, list):
        raise CodecError("Expected a list of messages")
    try:
        return [Message.model_validate(item) for item in data]
    except ValidationError as e:
        raise CodecError(f"Invalid message list: {e}", cause=e) from e
