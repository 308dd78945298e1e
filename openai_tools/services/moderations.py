"""
Moderation client.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from openai_tools.config.constants import DEFAULT_MODERATION_MODEL, LOGGER_NAME
from openai_tools.errors import ConfigError
from openai_tools.models.capabilities import model_id
from openai_tools.models.moderations import ModerationResponse
from openai_tools.services.base import OperationClient

logger = logging.getLogger(LOGGER_NAME)

MODERATIONS_PATH = "moderations"


class Moderations(OperationClient):
    """Client for ``POST /moderations``."""

    async def moderate(self, input: Union[str, List[str]], model: Optional[Any] = None) -> ModerationResponse:
        """
        Classify one string or a list of strings.

        Args:
            input: Text to classify; a list yields one result per entry
            model: Moderation model, defaults to ``omni-moderation-latest``
        """
        if not input:
            raise ConfigError("Moderation requires a non-empty input")
        body: Dict[str, Any] = {
            "input": input,
            "model": model_id(model) if model is not None else DEFAULT_MODERATION_MODEL,
        }
        return await self._send_json(ModerationResponse, "POST", MODERATIONS_PATH, json_body=body)

    async def moderate_text(self, text: str, model: Optional[Any] = None) -> ModerationResponse:
        return await self.moderate(text, model)

    async def moderate_texts(self, texts: List[str], model: Optional[Any] = None) -> ModerationResponse:
        return await self.moderate(list(texts), model)
