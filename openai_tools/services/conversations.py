"""
Conversations client.

Conversations are server-side threads of items that can be passed to the
Responses API through ``Responses.conversation(id)``.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.core.http_client import QueryValue
from openai_tools.errors import ConfigError
from openai_tools.models.base import coerce_enum
from openai_tools.models.conversations import (
    Conversation,
    ConversationInclude,
    ConversationItemList,
    ConversationList,
    DeletedConversation,
    ListOrder,
)
from openai_tools.models.message import Message
from openai_tools.services.base import OperationClient, paging_query, require_id

logger = logging.getLogger(LOGGER_NAME)

CONVERSATIONS_PATH = "conversations"


def _items_wire(items: List[Message]) -> List[Dict[str, Any]]:
    wire: List[Dict[str, Any]] = []
    for item in items:
        for entry in item.to_responses_items():
            entry.setdefault("type", "message")
            wire.append(entry)
    return wire


class Conversations(OperationClient):
    """Client for the ``/conversations`` endpoints."""

    async def create(self, metadata: Optional[Dict[str, str]] = None,
                     items: Optional[List[Message]] = None) -> Conversation:
        body: Dict[str, Any] = {}
        if metadata is not None:
            body["metadata"] = dict(metadata)
        if items:
            body["items"] = _items_wire(items)
        return await self._send_json(Conversation, "POST", CONVERSATIONS_PATH, json_body=body)

    async def retrieve(self, conversation_id: str) -> Conversation:
        path = f"{CONVERSATIONS_PATH}/{require_id(conversation_id, 'conversation')}"
        return await self._send_json(Conversation, "GET", path)

    async def update(self, conversation_id: str, metadata: Dict[str, str]) -> Conversation:
        """Replace the conversation's metadata."""
        path = f"{CONVERSATIONS_PATH}/{require_id(conversation_id, 'conversation')}"
        return await self._send_json(Conversation, "POST", path, json_body={"metadata": dict(metadata)})

    async def delete(self, conversation_id: str) -> DeletedConversation:
        path = f"{CONVERSATIONS_PATH}/{require_id(conversation_id, 'conversation')}"
        return await self._send_json(DeletedConversation, "DELETE", path)

    async def list(self, limit: Optional[int] = None, after: Optional[str] = None) -> ConversationList:
        return await self._send_json(ConversationList, "GET", CONVERSATIONS_PATH, query=paging_query(limit, after))

    async def create_items(self, conversation_id: str, items: List[Message]) -> ConversationItemList:
        """Append items to a conversation."""
        if not items:
            raise ConfigError("At least one item is required")
        path = f"{CONVERSATIONS_PATH}/{require_id(conversation_id, 'conversation')}/items"
        return await self._send_json(ConversationItemList, "POST", path, json_body={"items": _items_wire(items)})

    async def list_items(
        self,
        conversation_id: str,
        limit: Optional[int] = None,
        after: Optional[str] = None,
        order: Optional[ListOrder] = None,
        include: Optional[List[ConversationInclude]] = None,
    ) -> ConversationItemList:
        query: List[Tuple[str, QueryValue]] = paging_query(limit, after)
        if order is not None:
            query.append(("order", coerce_enum(ListOrder, order, "list order").value))
        for value in include or []:
            query.append(("include[]", coerce_enum(ConversationInclude, value, "include value").value))
        path = f"{CONVERSATIONS_PATH}/{require_id(conversation_id, 'conversation')}/items"
        return await self._send_json(ConversationItemList, "GET", path, query=query)
