"""
Conversation items created by the client during a Realtime session.

An item is a ``message`` (with ``input_text``, ``input_audio``, ``text`` or
``audio`` content), a ``function_call``, or the ``function_call_output`` that
answers one. Items are sent with ``conversation.item.create``.
"""

import base64
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from openai_tools.errors import ConfigError
from openai_tools.models.message import Role


class ItemContent(BaseModel):
    """One content part of a message item."""
    type: Literal["input_text", "input_audio", "text", "audio"]
    text: Optional[str] = None
    audio: Optional[str] = None
    transcript: Optional[str] = None

    @classmethod
    def input_text(cls, text: str) -> "ItemContent":
        return cls(type="input_text", text=text)

    @classmethod
    def input_audio(cls, audio_b64: str, transcript: Optional[str] = None) -> "ItemContent":
        return cls(type="input_audio", audio=audio_b64, transcript=transcript)

    @classmethod
    def text_part(cls, text: str) -> "ItemContent":
        return cls(type="text", text=text)


class MessageItem(BaseModel):
    type: Literal["message"] = "message"
    id: Optional[str] = None
    role: Role
    content: List[ItemContent]
    status: Optional[str] = None


class FunctionCallItem(BaseModel):
    type: Literal["function_call"] = "function_call"
    id: Optional[str] = None
    call_id: str
    name: str
    arguments: str


class FunctionCallOutputItem(BaseModel):
    type: Literal["function_call_output"] = "function_call_output"
    id: Optional[str] = None
    call_id: str
    output: str


ConversationItem = Annotated[
    Union[MessageItem, FunctionCallItem, FunctionCallOutputItem],
    Field(discriminator="type"),
]


def item_to_wire(item: Union[MessageItem, FunctionCallItem, FunctionCallOutputItem]) -> Dict[str, Any]:
    return item.model_dump(mode="json", exclude_none=True)


def user_text(text: str) -> MessageItem:
    """A user message with a single ``input_text`` part."""
    if not text:
        raise ConfigError("Message text must not be empty")
    return MessageItem(role=Role.USER, content=[ItemContent.input_text(text)])


def assistant_text(text: str) -> MessageItem:
    """An assistant message, e.g. to seed conversation history."""
    if not text:
        raise ConfigError("Message text must not be empty")
    return MessageItem(role=Role.ASSISTANT, content=[ItemContent.text_part(text)])


def system_text(text: str) -> MessageItem:
    if not text:
        raise ConfigError("Message text must not be empty")
    return MessageItem(role=Role.SYSTEM, content=[ItemContent.input_text(text)])


def user_audio(audio: Union[bytes, str], transcript: Optional[str] = None) -> MessageItem:
    """A user message carrying audio; raw bytes are base64 encoded."""
    if not audio:
        raise ConfigError("Audio must not be empty")
    encoded = base64.b64encode(audio).decode("ascii") if isinstance(audio, bytes) else audio
    return MessageItem(role=Role.USER, content=[ItemContent.input_audio(encoded, transcript)])


def function_output(call_id: str, output: str) -> FunctionCallOutputItem:
    """The result of a function call, referencing its ``call_id``."""
    if not call_id:
        raise ConfigError("call_id must not be empty")
    return FunctionCallOutputItem(call_id=call_id, output=output)
