"""
Tool definitions shared by Chat, Responses and Realtime.

A :class:`Tool` is either a ``function`` tool, whose parameters are an
object-typed :class:`SchemaNode`, or an ``mcp`` tool that points the model at a
remote MCP server. The wire shape depends on the API it is sent to: Chat and
Responses nest the function under a ``function`` key, Realtime flattens it.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from openai_tools.errors import ConfigError
from openai_tools.models.schema import SchemaNode, TypeSpec


class ToolKind(str, Enum):
    """Kind of tool."""
    FUNCTION = "function"
    MCP = "mcp"


class ApiContext(str, Enum):
    """API a record is being lowered for."""
    CHAT = "chat"
    RESPONSES = "responses"
    REALTIME = "realtime"


class ParameterProperty(BaseModel):
    """
    A single function parameter.

    Attributes:
        type: JSON Schema type name, or a list of names for nullable values
        description: Optional description shown to the model
        enum: Optional list of allowed values
    """
    type: TypeSpec
    description: Optional[str] = None
    enum: Optional[List[Any]] = None

    @classmethod
    def string(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls(type="string", description=description)

    @classmethod
    def number(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls(type="number", description=description)

    @classmethod
    def integer(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls(type="integer", description=description)

    @classmethod
    def boolean(cls, description: Optional[str] = None) -> "ParameterProperty":
        return cls(type="boolean", description=description)

    @classmethod
    def one_of(cls, values: List[str], description: Optional[str] = None) -> "ParameterProperty":
        return cls(type="string", description=description, enum=list(values))


def build_parameters(
    properties: Sequence[Tuple[str, ParameterProperty]],
    additional_properties: Optional[bool] = None,
) -> SchemaNode:
    """
    Build an object schema from ``(name, ParameterProperty)`` pairs.

    Every parameter is listed as required, in the given order.
    """
    node = SchemaNode.object(additional_properties=additional_properties)
    for name, prop in properties:
        node.add_property(name, prop.type, prop.description, prop.enum)
    return node


class Tool(BaseModel):
    """
    A tool the model may call.

    Use :meth:`function` or :meth:`mcp` rather than the constructor.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ToolKind
    name: Optional[str] = None
    description: Optional[str] = None
    parameters: Optional[SchemaNode] = None
    strict: Optional[bool] = None
    server_label: Optional[str] = None
    server_url: Optional[str] = None
    require_approval: Optional[Union[str, Dict[str, Any]]] = None
    allowed_tools: Optional[List[str]] = None

    @classmethod
    def function(
        cls,
        name: str,
        description: Optional[str] = None,
        parameters: Union[SchemaNode, Sequence[Tuple[str, ParameterProperty]], None] = None,
        strict: Optional[bool] = None,
    ) -> "Tool":
        """
        Create a function tool.

        Args:
            name: Function name the model will call
            description: What the function does
            parameters: Object schema, or ``(name, ParameterProperty)`` pairs
            strict: Ask the server to enforce the schema exactly

        Raises:
            ConfigError: If the name is empty or parameters are not an object
        """
        if not name:
            raise ConfigError("Function tool name must not be empty")
        if parameters is not None and not isinstance(parameters, SchemaNode):
            parameters = build_parameters(parameters, additional_properties=False if strict else None)
        if parameters is not None and not parameters.is_object:
            raise ConfigError("Function tool parameters must be an object schema")
        return cls(kind=ToolKind.FUNCTION, name=name, description=description,
                   parameters=parameters, strict=strict)

    @classmethod
    def mcp(
        cls,
        server_label: str,
        server_url: str,
        require_approval: Union[str, Dict[str, Any]] = "never",
        allowed_tools: Optional[List[str]] = None,
    ) -> "Tool":
        """Create a remote MCP server tool."""
        if not server_label or not server_url:
            raise ConfigError("MCP tool requires a server_label and server_url")
        return cls(kind=ToolKind.MCP, server_label=server_label, server_url=server_url,
                   require_approval=require_approval, allowed_tools=allowed_tools)

    def _function_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            body["description"] = self.description
        if self.parameters is not None:
            body["parameters"] = self.parameters.to_dict()
        if self.strict is not None:
            body["strict"] = self.strict
        return body

    def to_wire(self, context: ApiContext = ApiContext.CHAT) -> Dict[str, Any]:
        """
        Lower the tool to the wire shape of ``context``.

        Chat and Responses: ``{"type": "function", "function": {...}}``
        (Responses additionally carries ``name`` at the top level).
        Realtime: ``{"type": "function", "name", "description", "parameters"}``.
        MCP tools have the same shape everywhere.
        """
        if self.kind == ToolKind.MCP:
            out: Dict[str, Any] = {
                "type": "mcp",
                "server_label": self.server_label,
                "server_url": self.server_url,
            }
            if self.require_approval is not None:
                out["require_approval"] = self.require_approval
            if self.allowed_tools is not None:
                out["allowed_tools"] = list(self.allowed_tools)
            return out

        if context == ApiContext.REALTIME:
            out = {"type": "function"}
            out.update(self._function_body())
            out.pop("strict", None)
            return out

        out = {"type": "function"}
        if context == ApiContext.RESPONSES:
            out["name"] = self.name
        out["function"] = self._function_body()
        return out
