"""
Pydantic models for the Conversations API.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from openai_tools.models.base import WireModel


class ConversationInclude(str, Enum):
    """Extra data to include when listing conversation items."""
    WEB_SEARCH_CALL_ACTION_SOURCES = "web_search_call.action.sources"
    CODE_INTERPRETER_CALL_OUTPUTS = "code_interpreter_call.outputs"
    FILE_SEARCH_CALL_RESULTS = "file_search_call.results"
    MESSAGE_INPUT_IMAGE_URL = "message.input_image.image_url"
    REASONING_ENCRYPTED_CONTENT = "reasoning.encrypted_content"


class ListOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Conversation(WireModel):
    id: str
    object: str = "conversation"
    created_at: int = 0
    metadata: Optional[Dict[str, Any]] = None


class ConversationItem(WireModel):
    """An item stored in a conversation (message, function call, ...)."""
    id: Optional[str] = None
    object: Optional[str] = None
    type: str
    role: Optional[str] = None
    content: Optional[List[Dict[str, Any]]] = None
    status: Optional[str] = None


class ConversationItemList(WireModel):
    object: str = "list"
    data: List[ConversationItem]
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False


class ConversationList(WireModel):
    object: str = "list"
    data: List[Conversation]
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False


class DeletedConversation(WireModel):
    id: str
    object: str = "conversation.deleted"
    deleted: bool
