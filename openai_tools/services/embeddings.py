"""
Embeddings client.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from openai_tools.config.constants import DEFAULT_EMBEDDING_MODEL, LOGGER_NAME
from openai_tools.errors import ConfigError
from openai_tools.models.capabilities import model_id
from openai_tools.models.embeddings import EmbeddingResponse
from openai_tools.services.base import OperationClient

logger = logging.getLogger(LOGGER_NAME)

EMBEDDINGS_PATH = "embeddings"

ENCODING_FORMATS = ("float", "base64")


class Embedding(OperationClient):
    """
    Builder and dispatcher for ``POST /embeddings``.

    A single string is sent as a string and a list as a list; the input is
    never wrapped.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._model: str = DEFAULT_EMBEDDING_MODEL
        self._input: Optional[Union[str, List[str]]] = None
        self._encoding_format: Optional[str] = None
        self._dimensions: Optional[int] = None
        self._user: Optional[str] = None

    def model(self, model: Any) -> "Embedding":
        self._model = model_id(model)
        return self

    def input_text(self, text: str) -> "Embedding":
        self._input = text
        return self

    def input_text_array(self, texts: List[str]) -> "Embedding":
        self._input = list(texts)
        return self

    def encoding_format(self, encoding_format: str) -> "Embedding":
        """
        Set ``float`` or ``base64``.

        Raises:
            ConfigError: For any other value
        """
        if encoding_format not in ENCODING_FORMATS:
            raise ConfigError(f"encoding_format must be one of {', '.join(ENCODING_FORMATS)}, got '{encoding_format}'")
        self._encoding_format = encoding_format
        return self

    def dimensions(self, dimensions: int) -> "Embedding":
        self._dimensions = dimensions
        return self

    def user(self, user: str) -> "Embedding":
        self._user = user
        return self

    def build_body(self) -> Dict[str, Any]:
        if not self._model:
            raise ConfigError("Embedding request requires a model")
        if self._input is None or len(self._input) == 0:
            raise ConfigError("Embedding request requires a non-empty input")
        body: Dict[str, Any] = {"model": self._model, "input": self._input}
        if self._encoding_format is not None:
            body["encoding_format"] = self._encoding_format
        if self._dimensions is not None:
            body["dimensions"] = self._dimensions
        if self._user is not None:
            body["user"] = self._user
        return body

    async def embed(self) -> EmbeddingResponse:
        """
        Send the request.

        Returns:
            EmbeddingResponse: Vectors in input order
        """
        body = self.build_body()
        logger.debug(f"Requesting embeddings from {self._model}")
        return await self._send_json(EmbeddingResponse, "POST", EMBEDDINGS_PATH, json_body=body)
