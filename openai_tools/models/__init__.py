"""
Data models shared across the library.

This package contains the pydantic models for request and response payloads of
every operation family, plus the building blocks they share: messages and
content parts, tools, the structured-output schema builder, token usage and the
model capability catalog.

Usage example:
```python
from openai_tools.models import Message, Role, Schema, Tool, ParameterProperty

question = Message.from_string(Role.USER, "What is 25 + 17?")
calculator = Tool.function(
    "calculator",
    "Add two numbers",
    [("a", ParameterProperty.number()), ("b", ParameterProperty.number())],
)
schema = Schema.chat_json_schema("weather").add_property("location", "string")
```
"""

from openai_tools.models.message import (
    AudioPart,
    ContentPart,
    FunctionCall,
    ImageFilePart,
    ImageUrlPart,
    Message,
    Role,
    TextPart,
    ToolCall,
)
from openai_tools.models.schema import Schema, SchemaNode
from openai_tools.models.tool import ApiContext, ParameterProperty, Tool, ToolKind
from openai_tools.models.usage import Usage

__all__ = [
    "ApiContext",
    "AudioPart",
    "ContentPart",
    "FunctionCall",
    "ImageFilePart",
    "ImageUrlPart",
    "Message",
    "ParameterProperty",
    "Role",
    "Schema",
    "SchemaNode",
    "TextPart",
    "Tool",
    "ToolCall",
    "ToolKind",
    "Usage",
]
