"""
Chat completions client.

Usage example:
```python
chat = ChatCompletion(AuthProvider.openai_from_env())
response = await (
    chat.model("gpt-4o-mini")
    .messages([Message.from_string(Role.USER, "Hi")])
    .temperature(0.2)
    .chat()
)
print(response.content())
```
"""

import logging
from typing import Any, Dict, List, Optional, Union

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.errors import ConfigError
from openai_tools.models.capabilities import apply_parameter_support, model_id
from openai_tools.models.chat import ChatResponse
from openai_tools.models.message import Message
from openai_tools.models.schema import Schema
from openai_tools.models.tool import ApiContext, Tool
from openai_tools.services.base import OperationClient

logger = logging.getLogger(LOGGER_NAME)

CHAT_PATH = "chat/completions"

TOOL_CHOICE_MODES = ("none", "auto", "required")


class ChatCompletion(OperationClient):
    """
    Builder and dispatcher for ``POST /chat/completions``.

    Setters return the client so calls can be chained; :meth:`chat` sends the
    accumulated request. The message list given to :meth:`messages` is copied,
    so the caller's list is never mutated.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._model: Optional[str] = None
        self._messages: List[Message] = []
        self._params: Dict[str, Any] = {}
        self._tools: Optional[List[Tool]] = None
        self._response_format: Optional[Dict[str, Any]] = None

    def model(self, model: Any) -> "ChatCompletion":
        self._model = model_id(model)
        return self

    def messages(self, messages: List[Message]) -> "ChatCompletion":
        self._messages = list(messages)
        return self

    def add_message(self, message: Message) -> "ChatCompletion":
        """Append a message, e.g. the assistant reply or a tool result."""
        self._messages.append(message)
        return self

    def store(self, store: bool) -> "ChatCompletion":
        self._params["store"] = store
        return self

    def frequency_penalty(self, value: float) -> "ChatCompletion":
        self._params["frequency_penalty"] = value
        return self

    def presence_penalty(self, value: float) -> "ChatCompletion":
        self._params["presence_penalty"] = value
        return self

    def logit_bias(self, bias: Dict[str, int]) -> "ChatCompletion":
        self._params["logit_bias"] = dict(bias)
        return self

    def logprobs(self, enabled: bool) -> "ChatCompletion":
        self._params["logprobs"] = enabled
        return self

    def top_logprobs(self, count: int) -> "ChatCompletion":
        self._params["top_logprobs"] = count
        return self

    def max_completion_tokens(self, tokens: int) -> "ChatCompletion":
        self._params["max_completion_tokens"] = tokens
        return self

    def n(self, count: int) -> "ChatCompletion":
        self._params["n"] = count
        return self

    def modalities(self, modalities: List[str]) -> "ChatCompletion":
        self._params["modalities"] = list(modalities)
        return self

    def temperature(self, value: float) -> "ChatCompletion":
        self._params["temperature"] = value
        return self

    def top_p(self, value: float) -> "ChatCompletion":
        self._params["top_p"] = value
        return self

    def seed(self, seed: int) -> "ChatCompletion":
        self._params["seed"] = seed
        return self

    def stop(self, stop: Union[str, List[str]]) -> "ChatCompletion":
        self._params["stop"] = stop
        return self

    def parallel_tool_calls(self, enabled: bool) -> "ChatCompletion":
        self._params["parallel_tool_calls"] = enabled
        return self

    def reasoning_effort(self, effort: str) -> "ChatCompletion":
        self._params["reasoning_effort"] = effort
        return self

    def safety_identifier(self, identifier: str) -> "ChatCompletion":
        self._params["safety_identifier"] = identifier
        return self

    def metadata(self, metadata: Dict[str, str]) -> "ChatCompletion":
        self._params["metadata"] = dict(metadata)
        return self

    def json_schema(self, schema: Schema) -> "ChatCompletion":
        """Request structured output matching ``schema``."""
        if schema.schema is None:
            raise ConfigError("Chat structured output needs a schema body; use Schema.chat_json_schema")
        self._response_format = {"type": "json_schema", "json_schema": schema.to_dict()}
        return self

    def json_mode(self) -> "ChatCompletion":
        """Request any valid JSON object."""
        self._response_format = {"type": "json_object"}
        return self

    def tools(self, tools: List[Tool]) -> "ChatCompletion":
        self._tools = list(tools)
        return self

    def tool_choice(self, choice: str) -> "ChatCompletion":
        """
        Set ``tool_choice`` to ``none``, ``auto``, ``required`` or a function
        name, which forces that function.
        """
        if choice in TOOL_CHOICE_MODES:
            self._params["tool_choice"] = choice
        else:
            self._params["tool_choice"] = {"type": "function", "function": {"name": choice}}
        return self

    def build_body(self) -> Dict[str, Any]:
        """
        Assemble the request body.

        Raises:
            ConfigError: If the model or messages are missing or a message is invalid
        """
        if not self._model:
            raise ConfigError("Chat completion requires a model")
        if not self._messages:
            raise ConfigError("Chat completion requires at least one message")

        body: Dict[str, Any] = {
            "model": self._model,
            "messages": [message.to_wire(ApiContext.CHAT) for message in self._messages],
        }
        body.update(self._params)
        if self._response_format is not None:
            body["response_format"] = self._response_format
        if self._tools:
            body["tools"] = [tool.to_wire(ApiContext.CHAT) for tool in self._tools]
        return apply_parameter_support(self._model, body)

    async def chat(self) -> ChatResponse:
        """
        Send the request.

        Returns:
            ChatResponse: The parsed completion

        Raises:
            ConfigError: On an incomplete request
            TransportError: On network failure
            ApiError: On a non-2xx response
            CodecError: On an unparseable response
        """
        body = self.build_body()
        logger.info(f"Requesting chat completion from {self._model} with {len(self._messages)} messages")
        return await self._send_json(ChatResponse, "POST", CHAT_PATH, json_body=body)
