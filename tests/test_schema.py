import json

import pytest

from openai_tools.errors import CodecError, ConfigError
from openai_tools.models.schema import Schema, SchemaNode

WEATHER_JSON = (
    '{"name":"weather","schema":{"type":"object","properties":{"location":{"type":"string"},'
    '"temperature":{"type":"number"}},"required":["location","temperature"],"additionalProperties":false}}'
)


def _compact(data):
    return json.dumps(data, separators=(",", ":"))


@pytest.fixture
def weather():
    """Provide the weather schema used by several tests"""
    return Schema.chat_json_schema("weather").add_property("location", "string").add_property("temperature", "number")


class TestSchemaSerialization:
    """Tests for the serialized shape of schemas"""

    def test_weather_schema_exact(self, weather):
        """Test property order and required order follow insertion"""
        assert _compact(weather.to_dict()) == WEATHER_JSON

    def test_to_json_matches_to_dict(self, weather):
        """Test the streaming serializer agrees with json.dumps"""
        assert weather.to_json() == json.dumps(weather.to_dict())

    def test_responses_json_schema(self):
        schema = Schema.responses_json_schema("answer").add_property("value", "integer", "The answer")
        data = schema.to_dict()
        assert data["type"] == "json_schema"
        assert data["name"] == "answer"
        assert data["schema"]["properties"]["value"] == {"type": "integer", "description": "The answer"}

    def test_responses_text_schema(self):
        schema = Schema.responses_text_schema()
        assert schema.to_dict() == {"type": "text"}
        assert schema.to_json() == '{"type": "text"}'

    def test_strict_flag(self):
        schema = Schema.chat_json_schema("s")
        schema.strict = True
        assert list(schema.to_dict()) == ["name", "strict", "schema"]
        assert schema.to_json() == json.dumps(schema.to_dict())

    def test_enum_and_description(self):
        schema = Schema.chat_json_schema("s").add_property("unit", "string", "Unit", enum=["c", "f"])
        assert schema.to_dict()["schema"]["properties"]["unit"] == {
            "type": "string",
            "description": "Unit",
            "enum": ["c", "f"],
        }

    def test_nullable_union_type(self):
        schema = Schema.chat_json_schema("s").add_property("nickname", ["string", "null"])
        assert schema.to_dict()["schema"]["properties"]["nickname"] == {"type": ["string", "null"]}

    def test_array_of_objects(self):
        schema = Schema.chat_json_schema("s").add_array(
            "steps",
            [("explanation", "Why"), ("count", "integer", "How many")],
            "Reasoning steps",
        )
        steps = schema.to_dict()["schema"]["properties"]["steps"]
        assert steps["type"] == "array"
        assert steps["description"] == "Reasoning steps"
        assert steps["items"] == {
            "type": "object",
            "properties": {
                "explanation": {"type": "string", "description": "Why"},
                "count": {"type": "integer", "description": "How many"},
            },
            "required": ["explanation", "count"],
            "additionalProperties": False,
        }
        assert schema.to_json() == json.dumps(schema.to_dict())

    def test_list_of_scalars(self):
        schema = Schema.chat_json_schema("s").add_list("tags", "string")
        assert schema.to_dict()["schema"]["properties"]["tags"] == {"type": "array", "items": {"type": "string"}}

    def test_nested_object(self):
        schema = Schema.chat_json_schema("s")
        address = schema.add_object("address", "Postal address")
        address.add_property("city", "string")
        inner = schema.to_dict()["schema"]["properties"]["address"]
        assert inner["properties"] == {"city": {"type": "string"}}
        assert inner["required"] == ["city"]
        assert inner["additionalProperties"] is False


class TestSchemaBuilding:
    """Tests for the rules the builder enforces"""

    def test_readding_replaces_in_place(self, weather):
        """Test a repeated name replaces the node without duplicating required"""
        weather.add_property("location", "integer")
        body = weather.to_dict()["schema"]
        assert list(body["properties"]) == ["location", "temperature"]
        assert body["properties"]["location"] == {"type": "integer"}
        assert body["required"] == ["location", "temperature"]

    def test_unknown_type_rejected(self):
        with pytest.raises(ConfigError):
            Schema.chat_json_schema("s").add_property("x", "date")

    def test_empty_property_name_rejected(self):
        with pytest.raises(ConfigError):
            Schema.chat_json_schema("s").add_property("", "string")

    def test_empty_schema_name_rejected(self):
        with pytest.raises(ConfigError):
            Schema.chat_json_schema("")

    def test_text_schema_has_no_body(self):
        with pytest.raises(ConfigError):
            Schema.responses_text_schema().add_property("x", "string")

    def test_bad_array_field(self):
        with pytest.raises(ConfigError):
            Schema.chat_json_schema("s").add_array("rows", [("only",)])

    def test_cannot_add_to_leaf(self):
        leaf = SchemaNode.leaf("string")
        with pytest.raises(ConfigError):
            leaf.add_property("x", "string")


class TestSchemaCopyAndParse:
    """Tests for cloning, equality and parsing"""

    def test_clone_is_independent(self, weather):
        """Test mutating a clone leaves the original untouched"""
        copy = weather.clone()
        assert copy == weather
        copy.add_property("humidity", "number")
        assert copy != weather
        assert "humidity" not in weather.to_dict()["schema"]["properties"]

    def test_round_trip(self, weather):
        """Test parsing the serialized form yields an equal schema"""
        nested = weather.clone()
        nested.add_object("extra").add_list("values", "number")
        assert Schema.from_json(nested.to_json()) == nested
        assert Schema.from_dict(nested.to_dict()).to_dict() == nested.to_dict()

    def test_from_json_invalid(self):
        with pytest.raises(CodecError):
            Schema.from_json("{not json")

    def test_from_dict_node_without_type(self):
        with pytest.raises(CodecError):
            Schema.from_dict({"name": "s", "schema": {"properties": {}}})

    def test_deep_nesting(self):
        """Test several hundred levels serialize, clone and compare without recursion"""
        schema = Schema.chat_json_schema("deep")
        node = schema.schema
        for _ in range(600):
            node = node.add_object("child")
        node.add_property("leaf", "string")

        text = schema.to_json()
        assert text.count('"child"') == 600
        copy = schema.clone()
        assert copy == schema
        assert copy.schema is not schema.schema

        deepest = copy.schema
        for _ in range(600):
            deepest = deepest.properties["child"]
        assert deepest.required == ["leaf"]
