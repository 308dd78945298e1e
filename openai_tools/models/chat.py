"""
Pydantic models for chat completion responses.
"""

from typing import Any, Dict, List, Optional

from openai_tools.models.base import WireModel
from openai_tools.models.message import Message, ToolCall
from openai_tools.models.usage import Usage


class ChatChoice(WireModel):
    """One generated alternative."""
    index: int = 0
    message: Message
    finish_reason: Optional[str] = None
    logprobs: Optional[Dict[str, Any]] = None


class ChatResponse(WireModel):
    """Response of ``POST /chat/completions``."""
    id: str
    object: str = "chat.completion"
    created: int = 0
    model: str
    system_fingerprint: Optional[str] = None
    service_tier: Optional[str] = None
    choices: List[ChatChoice]
    usage: Optional[Usage] = None

    def first_message(self) -> Optional[Message]:
        return self.choices[0].message if self.choices else None

    def content(self) -> Optional[str]:
        """Text of the first choice, if any."""
        message = self.first_message()
        return message.text() if message is not None else None

    def tool_calls(self) -> List[ToolCall]:
        """Tool calls of the first choice."""
        message = self.first_message()
        return list(message.tool_calls or []) if message is not None else []
