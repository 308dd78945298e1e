"""
Responses API client.

Input is either a plain string (:meth:`Responses.str_message`) or a list of
messages (:meth:`Responses.messages`); setting both is rejected when the
request is built.
"""

import logging
from typing import Any, Dict, List, Optional

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.errors import ConfigError
from openai_tools.models.base import coerce_enum
from openai_tools.models.capabilities import apply_parameter_support, model_id
from openai_tools.models.message import Message
from openai_tools.models.responses import (
    Include,
    ReasoningEffort,
    ReasoningSummary,
    Response,
    TextVerbosity,
    ToolChoiceMode,
    Truncation,
)
from openai_tools.models.schema import Schema
from openai_tools.models.tool import ApiContext, Tool
from openai_tools.services.base import OperationClient

logger = logging.getLogger(LOGGER_NAME)

RESPONSES_PATH = "responses"


class Responses(OperationClient):
    """Builder and dispatcher for ``POST /responses``."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._model: Optional[str] = None
        self._text_input: Optional[str] = None
        self._messages_input: Optional[List[Message]] = None
        self._tools: Optional[List[Tool]] = None
        self._format: Optional[Schema] = None
        self._verbosity: Optional[TextVerbosity] = None
        self._reasoning: Optional[Dict[str, str]] = None
        self._params: Dict[str, Any] = {}

    def model(self, model: Any) -> "Responses":
        self._model = model_id(model)
        return self

    def instructions(self, instructions: str) -> "Responses":
        self._params["instructions"] = instructions
        return self

    def str_message(self, text: str) -> "Responses":
        """Use a plain string as input."""
        self._text_input = text
        return self

    def messages(self, messages: List[Message]) -> "Responses":
        """Use a list of messages as input."""
        self._messages_input = list(messages)
        return self

    def tools(self, tools: List[Tool]) -> "Responses":
        self._tools = list(tools)
        return self

    def tool_choice(self, choice: str) -> "Responses":
        """``none``, ``auto``, ``required`` or the name of a function to force."""
        if choice in {mode.value for mode in ToolChoiceMode}:
            self._params["tool_choice"] = choice
        else:
            self._params["tool_choice"] = {"type": "function", "name": choice}
        return self

    def structured_output(self, schema: Schema) -> "Responses":
        """Constrain the output with a ``json_schema`` or ``text`` format."""
        if schema.type not in ("json_schema", "text"):
            raise ConfigError("Responses output format must come from Schema.responses_json_schema or responses_text_schema")
        self._format = schema
        return self

    def text_verbosity(self, verbosity: TextVerbosity) -> "Responses":
        self._verbosity = coerce_enum(TextVerbosity, verbosity, "text verbosity")
        return self

    def temperature(self, value: float) -> "Responses":
        self._params["temperature"] = value
        return self

    def top_p(self, value: float) -> "Responses":
        self._params["top_p"] = value
        return self

    def top_logprobs(self, count: int) -> "Responses":
        self._params["top_logprobs"] = count
        return self

    def max_output_tokens(self, tokens: int) -> "Responses":
        self._params["max_output_tokens"] = tokens
        return self

    def max_tool_calls(self, count: int) -> "Responses":
        self._params["max_tool_calls"] = count
        return self

    def metadata(self, metadata: Dict[str, str]) -> "Responses":
        self._params["metadata"] = dict(metadata)
        return self

    def parallel_tool_calls(self, enabled: bool) -> "Responses":
        self._params["parallel_tool_calls"] = enabled
        return self

    def include(self, include: List[Include]) -> "Responses":
        self._params["include"] = [coerce_enum(Include, value, "include value").value for value in include]
        return self

    def background(self, enabled: bool) -> "Responses":
        self._params["background"] = enabled
        return self

    def conversation(self, conversation_id: str) -> "Responses":
        self._params["conversation"] = conversation_id
        return self

    def previous_response_id(self, response_id: str) -> "Responses":
        self._params["previous_response_id"] = response_id
        return self

    def reasoning(self, effort: ReasoningEffort, summary: Optional[ReasoningSummary] = None) -> "Responses":
        self._reasoning = {"effort": coerce_enum(ReasoningEffort, effort, "reasoning effort").value}
        if summary is not None:
            self._reasoning["summary"] = coerce_enum(ReasoningSummary, summary, "reasoning summary").value
        return self

    def safety_identifier(self, identifier: str) -> "Responses":
        self._params["safety_identifier"] = identifier
        return self

    def service_tier(self, tier: str) -> "Responses":
        self._params["service_tier"] = tier
        return self

    def store(self, store: bool) -> "Responses":
        self._params["store"] = store
        return self

    def stream(self, stream: bool) -> "Responses":
        self._params["stream"] = stream
        return self

    def stream_options(self, include_obfuscation: bool) -> "Responses":
        self._params["stream_options"] = {"include_obfuscation": include_obfuscation}
        return self

    def truncation(self, truncation: Truncation) -> "Responses":
        self._params["truncation"] = coerce_enum(Truncation, truncation, "truncation").value
        return self

    def build_body(self) -> Dict[str, Any]:
        """
        Assemble the request body.

        Raises:
            ConfigError: If the model or input is missing, or both input forms are set
        """
        if not self._model:
            raise ConfigError("Responses request requires a model")
        if self._text_input is not None and self._messages_input is not None:
            raise ConfigError("Set either a plain-text input or a messages input, not both")
        if self._text_input is None and self._messages_input is None:
            raise ConfigError("Responses request requires an input")

        body: Dict[str, Any] = {"model": self._model}
        if self._text_input is not None:
            if not self._text_input:
                raise ConfigError("Responses input text must not be empty")
            body["input"] = self._text_input
        else:
            if not self._messages_input:
                raise ConfigError("Responses messages input must not be empty")
            items: List[Dict[str, Any]] = []
            for message in self._messages_input:
                items.extend(message.to_responses_items())
            body["input"] = items

        body.update(self._params)
        if self._tools:
            body["tools"] = [tool.to_wire(ApiContext.RESPONSES) for tool in self._tools]
        if self._format is not None or self._verbosity is not None:
            text: Dict[str, Any] = {}
            if self._format is not None:
                text["format"] = self._format.to_dict()
            if self._verbosity is not None:
                text["verbosity"] = self._verbosity.value
            body["text"] = text
        if self._reasoning is not None:
            body["reasoning"] = dict(self._reasoning)
        return apply_parameter_support(self._model, body)

    async def complete(self) -> Response:
        """
        Send the request.

        Returns:
            Response: The parsed response with its ``output[]`` items
        """
        body = self.build_body()
        logger.info(f"Requesting response from {self._model}")
        return await self._send_json(Response, "POST", RESPONSES_PATH, json_body=body)
