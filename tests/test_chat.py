import logging

import pytest

from openai_tools.errors import ConfigError, InvalidRequestError
from openai_tools.models.capabilities import ChatModel, is_reasoning_model, tts_supports_instructions
from openai_tools.models.message import Message, Role
from openai_tools.models.schema import Schema
from openai_tools.models.tool import ParameterProperty, Tool
from openai_tools.services.chat import ChatCompletion


def completion(content=None, tool_calls=None, finish_reason="stop"):
    """Build a chat completion response body"""
    message = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


@pytest.fixture
def chat(server, openai_auth):
    """Provide a chat client wired to the mock server"""
    return ChatCompletion(openai_auth, transport=server.transport)


class TestSimpleChat:
    """Tests for a single-turn chat"""

    @pytest.mark.asyncio
    async def test_simple_chat(self, server, chat):
        """Test the request body holds exactly what was set"""
        server.respond(json_body=completion("Hello!"))

        response = await chat.model("gpt-4o-mini").messages([Message.from_string(Role.USER, "Hi")]).chat()

        assert response.content() == "Hello!"
        assert response.usage.total_tokens == 7
        request = server.last
        assert str(request.url) == "https://api.openai.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert server.last_json() == {"model": "gpt-4o-mini", "messages": [{"role": "user", "content": "Hi"}]}

    @pytest.mark.asyncio
    async def test_temperature_included_when_set(self, server, chat):
        server.respond(json_body=completion("ok"))
        await chat.model(ChatModel.GPT_4O_MINI).messages([Message.from_string(Role.USER, "Hi")]).temperature(0.2).chat()
        body = server.last_json()
        assert set(body) == {"model", "messages", "temperature"}
        assert body["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_caller_list_not_mutated(self, server, chat):
        """Test the builder copies the message list"""
        history = [Message.from_string(Role.USER, "Hi")]
        chat.model("gpt-4o-mini").messages(history).add_message(Message.from_string(Role.USER, "Again"))
        await chat.chat()
        assert len(history) == 1
        assert len(server.last_json()["messages"]) == 2

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, server, chat):
        server.respond(400, {"error": {"message": "bad model", "param": "model", "code": "model_not_found"}})
        with pytest.raises(InvalidRequestError) as exc_info:
            await chat.model("nope").messages([Message.from_string(Role.USER, "Hi")]).chat()
        assert exc_info.value.param == "model"

    @pytest.mark.asyncio
    async def test_missing_model(self, server, chat):
        with pytest.raises(ConfigError):
            await chat.messages([Message.from_string(Role.USER, "Hi")]).chat()
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_missing_messages(self, server, chat):
        with pytest.raises(ConfigError):
            await chat.model("gpt-4o-mini").chat()
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_invalid_message_fails_before_io(self, server, chat):
        with pytest.raises(ConfigError):
            await chat.model("gpt-4o-mini").messages([Message(role=Role.TOOL, content="42")]).chat()
        assert server.requests == []


class TestToolRoundTrip:
    """Tests for a two-turn tool call conversation"""

    @pytest.mark.asyncio
    async def test_calculator_round_trip(self, server, chat):
        server.respond(json_body=completion(
            tool_calls=[{
                "id": "c1",
                "type": "function",
                "function": {"name": "calculator", "arguments": "{\"a\":25,\"b\":17}"},
            }],
            finish_reason="tool_calls",
        ))
        server.respond(json_body=completion("25 + 17 = 42"))

        calculator = Tool.function(
            "calculator", "Add two numbers",
            [("a", ParameterProperty.number()), ("b", ParameterProperty.number())],
        )
        chat.model("gpt-4o-mini").messages([Message.from_string(Role.USER, "What is 25 + 17?")]).tools([calculator])

        first = await chat.chat()
        calls = first.tool_calls()
        assert [(c.id, c.name) for c in calls] == [("c1", "calculator")]
        args = calls[0].arguments_dict()
        assert args == {"a": 25, "b": 17}

        chat.add_message(first.first_message())
        chat.add_message(Message.from_tool_call_response(str(args["a"] + args["b"]), calls[0].id))
        second = await chat.chat()

        assert "42" in second.content()
        sent = server.last_json()
        assert sent["tools"][0]["function"]["name"] == "calculator"
        assert sent["messages"][1]["role"] == "assistant"
        assert sent["messages"][1]["tool_calls"][0]["id"] == "c1"
        assert "content" not in sent["messages"][1]
        assert sent["messages"][2] == {"role": "tool", "content": "42", "tool_call_id": "c1"}

    def test_tool_choice(self, chat):
        chat.model("gpt-4o-mini").messages([Message.from_string(Role.USER, "x")])
        assert chat.tool_choice("auto").build_body()["tool_choice"] == "auto"
        assert chat.tool_choice("calculator").build_body()["tool_choice"] == {
            "type": "function",
            "function": {"name": "calculator"},
        }


class TestStructuredOutput:
    """Tests for response_format"""

    def test_json_schema(self, chat):
        schema = Schema.chat_json_schema("weather").add_property("location", "string")
        body = chat.model("gpt-4o-mini").messages([Message.from_string(Role.USER, "x")]).json_schema(schema).build_body()
        assert body["response_format"]["type"] == "json_schema"
        assert body["response_format"]["json_schema"]["name"] == "weather"
        assert body["response_format"]["json_schema"]["schema"]["required"] == ["location"]

    def test_json_mode(self, chat):
        body = chat.model("gpt-4o-mini").messages([Message.from_string(Role.USER, "x")]).json_mode().build_body()
        assert body["response_format"] == {"type": "json_object"}

    def test_text_schema_rejected(self, chat):
        with pytest.raises(ConfigError):
            chat.json_schema(Schema.responses_text_schema())


class TestParameterSupport:
    """Tests for per-model parameter filtering"""

    def test_reasoning_model_drops_sampling_parameters(self, chat, caplog):
        caplog.set_level(logging.WARNING, logger="openai_tools")
        body = (
            chat.model(ChatModel.O3_MINI)
            .messages([Message.from_string(Role.USER, "x")])
            .temperature(0.2)
            .logprobs(True)
            .n(3)
            .reasoning_effort("low")
            .build_body()
        )
        assert "temperature" not in body
        assert "logprobs" not in body
        assert "n" not in body
        assert body["reasoning_effort"] == "low"
        assert "does not support temperature" in caplog.text

    def test_reasoning_model_keeps_default_values(self, chat):
        body = chat.model("o1").messages([Message.from_string(Role.USER, "x")]).temperature(1.0).build_body()
        assert body["temperature"] == 1.0

    def test_regular_model_keeps_parameters(self, chat):
        body = (
            chat.model("gpt-4o")
            .messages([Message.from_string(Role.USER, "x")])
            .temperature(0.2)
            .top_p(0.9)
            .n(2)
            .build_body()
        )
        assert body["temperature"] == 0.2
        assert body["top_p"] == 0.9
        assert body["n"] == 2

    @pytest.mark.parametrize("model,expected", [("o1", True), ("o4-mini", True), ("gpt-5-mini", True),
                                                ("gpt-4o", False), ("gpt-4.1", False)])
    def test_is_reasoning_model(self, model, expected):
        assert is_reasoning_model(model) is expected

    def test_tts_instructions_support(self):
        assert tts_supports_instructions("gpt-4o-mini-tts")
        assert not tts_supports_instructions("tts-1")
