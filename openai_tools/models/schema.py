"""
Structured-output schema builder.

A :class:`Schema` wraps a tree of :class:`SchemaNode` objects that mirrors the
subset of JSON Schema accepted by structured outputs: object nodes with ordered
properties, array nodes with an ``items`` node, and scalar leaves. Object nodes
built here list every property as required and forbid additional properties.

All traversals (serialization, parsing, cloning, equality) use an explicit
stack, so deeply nested schemas never hit the interpreter's recursion limit.

Usage example:
```python
schema = Schema.chat_json_schema("weather")
schema.add_property("location", "string", "City name")
schema.add_property("temperature", "number")
schema.to_dict()
# {"name": "weather", "schema": {"type": "object", "properties": {...},
#  "required": ["location", "temperature"], "additionalProperties": false}}
```
"""

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from openai_tools.errors import CodecError, ConfigError

LEAF_TYPES = ("string", "number", "integer", "boolean", "null")

TypeSpec = Union[str, List[str]]


def _check_leaf_type(type_name: TypeSpec) -> None:
    names = type_name if isinstance(type_name, list) else [type_name]
    if not names:
        raise ConfigError("Property type must not be empty")
    for name in names:
        if name not in LEAF_TYPES:
            raise ConfigError(f"Unsupported property type '{name}', expected one of {', '.join(LEAF_TYPES)}")


class SchemaNode:
    """
    A single node of a schema tree.

    Attributes:
        type: ``"object"``, ``"array"``, a leaf type, or a list of leaf types
        description: Optional human-readable description
        enum: Allowed values for a leaf
        items: Element node of an array
        properties: Ordered child nodes of an object
        required: Property names the model must produce
        additional_properties: ``additionalProperties`` flag, omitted when None
    """

    def __init__(
        self,
        type: TypeSpec,
        description: Optional[str] = None,
        enum: Optional[List[Any]] = None,
        items: Optional["SchemaNode"] = None,
        additional_properties: Optional[bool] = None,
    ):
        self.type = type
        self.description = description
        self.enum = enum
        self.items = items
        self.properties: Dict[str, SchemaNode] = {}
        self.required: List[str] = []
        self.additional_properties = additional_properties

    @classmethod
    def object(cls, description: Optional[str] = None, additional_properties: Optional[bool] = False) -> "SchemaNode":
        """Create an empty object node."""
        return cls("object", description=description, additional_properties=additional_properties)

    @classmethod
    def leaf(cls, type: TypeSpec, description: Optional[str] = None, enum: Optional[List[Any]] = None) -> "SchemaNode":
        """
        Create a scalar node.

        Raises:
            ConfigError: If ``type`` is not a scalar JSON Schema type
        """
        _check_leaf_type(type)
        return cls(type, description=description, enum=list(enum) if enum is not None else None)

    @property
    def is_object(self) -> bool:
        return self.type == "object"

    def _require_object(self) -> None:
        if not self.is_object:
            raise ConfigError(f"Cannot add properties to a node of type '{self.type}'")

    def _set_property(self, name: str, node: "SchemaNode") -> None:
        if not name:
            raise ConfigError("Property name must not be empty")
        # Re-adding a name replaces the node in place and keeps one required entry.
        self.properties[name] = node
        if name not in self.required:
            self.required.append(name)

    def add_property(
        self,
        name: str,
        type: TypeSpec,
        description: Optional[str] = None,
        enum: Optional[List[Any]] = None,
    ) -> "SchemaNode":
        """
        Add a scalar property and mark it required.

        Args:
            name: Property name
            type: Scalar type name (or list of names)
            description: Optional description
            enum: Optional list of allowed values

        Returns:
            SchemaNode: This node, for chaining
        """
        self._require_object()
        self._set_property(name, SchemaNode.leaf(type, description, enum))
        return self

    def add_array(
        self,
        name: str,
        fields: Iterable[Sequence[str]],
        description: Optional[str] = None,
    ) -> "SchemaNode":
        """
        Add an array of objects and mark it required.

        Each entry of ``fields`` is either ``(name, description)``, which
        declares a string field, or ``(name, type, description)``.

        Returns:
            SchemaNode: This node, for chaining
        """
        self._require_object()
        element = SchemaNode.object()
        for field in fields:
            if len(field) == 2:
                field_name, field_description = field
                field_type = "string"
            elif len(field) == 3:
                field_name, field_type, field_description = field
            else:
                raise ConfigError(f"Array field must be (name, description) or (name, type, description), got {field!r}")
            element.add_property(field_name, field_type, field_description or None)
        self._set_property(name, SchemaNode("array", description=description, items=element))
        return self

    def add_list(self, name: str, item_type: str, description: Optional[str] = None) -> "SchemaNode":
        """Add an array of scalars and mark it required."""
        self._require_object()
        self._set_property(name, SchemaNode("array", description=description, items=SchemaNode.leaf(item_type)))
        return self

    def add_object(self, name: str, description: Optional[str] = None) -> "SchemaNode":
        """
        Add a nested object property and mark it required.

        Returns:
            SchemaNode: The new child node, to be populated by the caller
        """
        self._require_object()
        child = SchemaNode.object(description=description)
        self._set_property(name, child)
        return child

    def _head(self) -> Dict[str, Any]:
        head: Dict[str, Any] = {"type": list(self.type) if isinstance(self.type, list) else self.type}
        if self.description is not None:
            head["description"] = self.description
        if self.enum is not None:
            head["enum"] = list(self.enum)
        return head

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict preserving property order."""
        root: Dict[str, Any] = {}
        stack: List[Tuple[SchemaNode, Dict[str, Any]]] = [(self, root)]
        while stack:
            node, out = stack.pop()
            out.update(node._head())
            if node.items is not None:
                out["items"] = {}
                stack.append((node.items, out["items"]))
            if node.is_object:
                props: Dict[str, Any] = {}
                out["properties"] = props
                for name, child in node.properties.items():
                    props[name] = {}
                    stack.append((child, props[name]))
                out["required"] = list(node.required)
            if node.additional_properties is not None:
                out["additionalProperties"] = node.additional_properties
        return root

    def _json_pieces(self) -> List[Union[str, "SchemaNode"]]:
        head = json.dumps(self._head())
        pieces: List[Union[str, SchemaNode]] = [head[:-1]]
        if self.items is not None:
            pieces.extend([', "items": ', self.items])
        if self.is_object:
            pieces.append(', "properties": {')
            for index, (name, child) in enumerate(self.properties.items()):
                prefix = ", " if index else ""
                pieces.extend([f"{prefix}{json.dumps(name)}: ", child])
            pieces.append(f'}}, "required": {json.dumps(self.required)}')
        if self.additional_properties is not None:
            pieces.append(f', "additionalProperties": {json.dumps(self.additional_properties)}')
        pieces.append("}")
        return pieces

    def to_json(self) -> str:
        """Serialize to a JSON string; identical to ``json.dumps(self.to_dict())``."""
        parts: List[str] = []
        stack: List[Union[str, SchemaNode]] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            else:
                stack.extend(reversed(item._json_pieces()))
        return "".join(parts)

    @staticmethod
    def _shell(data: Any) -> "SchemaNode":
        if not isinstance(data, dict) or "type" not in data:
            raise CodecError(f"Schema node must be an object with a 'type', got {str(data)[:80]!r}")
        node = SchemaNode(
            data["type"],
            description=data.get("description"),
            enum=data.get("enum"),
            additional_properties=data.get("additionalProperties"),
        )
        node.required = list(data.get("required", []))
        return node

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaNode":
        """
        Rebuild a node tree from its dict form.

        Raises:
            CodecError: If a node is not an object with a ``type``
        """
        root = cls._shell(data)
        stack: List[Tuple[Dict[str, Any], SchemaNode]] = [(data, root)]
        while stack:
            source, node = stack.pop()
            if "items" in source:
                node.items = cls._shell(source["items"])
                stack.append((source["items"], node.items))
            for name, child_data in (source.get("properties") or {}).items():
                child = cls._shell(child_data)
                node.properties[name] = child
                stack.append((child_data, child))
        return root

    def clone(self) -> "SchemaNode":
        """Return a deep, independent copy."""
        return SchemaNode.from_dict(self.to_dict())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaNode):
            return NotImplemented
        return self.to_json() == other.to_json()

    def __repr__(self) -> str:
        return f"SchemaNode(type={self.type!r}, properties={list(self.properties)})"


class Schema:
    """
    Wrapper sent as a structured-output format.

    Chat completions expect ``{"name", "schema"}`` inside
    ``response_format.json_schema``; the Responses API expects
    ``{"type": "json_schema", "name", "schema"}`` or ``{"type": "text"}`` as
    ``text.format``.
    """

    def __init__(
        self,
        type: Optional[str] = None,
        name: Optional[str] = None,
        schema: Optional[SchemaNode] = None,
        strict: Optional[bool] = None,
    ):
        self.type = type
        self.name = name
        self.schema = schema
        self.strict = strict

    @classmethod
    def chat_json_schema(cls, name: str) -> "Schema":
        """Schema for ``response_format`` of a chat completion."""
        if not name:
            raise ConfigError("Schema name must not be empty")
        return cls(name=name, schema=SchemaNode.object())

    @classmethod
    def responses_json_schema(cls, name: str) -> "Schema":
        """Schema for ``text.format`` of a Responses request."""
        if not name:
            raise ConfigError("Schema name must not be empty")
        return cls(type="json_schema", name=name, schema=SchemaNode.object())

    @classmethod
    def responses_text_schema(cls) -> "Schema":
        """Plain-text output format for a Responses request."""
        return cls(type="text")

    def _root(self) -> SchemaNode:
        if self.schema is None:
            raise ConfigError("This schema has no object body to add properties to")
        return self.schema

    def add_property(self, name: str, type: TypeSpec, description: Optional[str] = None,
                     enum: Optional[List[Any]] = None) -> "Schema":
        self._root().add_property(name, type, description, enum)
        return self

    def add_array(self, name: str, fields: Iterable[Sequence[str]], description: Optional[str] = None) -> "Schema":
        self._root().add_array(name, fields, description)
        return self

    def add_list(self, name: str, item_type: str, description: Optional[str] = None) -> "Schema":
        self._root().add_list(name, item_type, description)
        return self

    def add_object(self, name: str, description: Optional[str] = None) -> SchemaNode:
        return self._root().add_object(name, description)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.type is not None:
            out["type"] = self.type
        if self.name is not None:
            out["name"] = self.name
        if self.strict is not None:
            out["strict"] = self.strict
        if self.schema is not None:
            out["schema"] = self.schema.to_dict()
        return out

    def to_json(self) -> str:
        head = {key: value for key, value in self.to_dict().items() if key != "schema"}
        if self.schema is None:
            return json.dumps(head)
        prefix = json.dumps(head)[:-1]
        separator = ", " if head else ""
        return f'{prefix}{separator}"schema": {self.schema.to_json()}}}'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Schema":
        if not isinstance(data, dict):
            raise CodecError("Schema must be a JSON object")
        body = data.get("schema")
        return cls(
            type=data.get("type"),
            name=data.get("name"),
            schema=SchemaNode.from_dict(body) if body is not None else None,
            strict=data.get("strict"),
        )

    @classmethod
    def from_json(cls, text: str) -> "Schema":
        try:
            data = json.loads(text)
        except ValueError as e:
            raise CodecError(f"Invalid schema JSON: {e}", cause=e) from e
        return cls.from_dict(data)

    def clone(self) -> "Schema":
        return Schema(self.type, self.name, self.schema.clone() if self.schema is not None else None, self.strict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self.to_json() == other.to_json()

    def __repr__(self) -> str:
        return f"Schema(type={self.type!r}, name={self.name!r})"
