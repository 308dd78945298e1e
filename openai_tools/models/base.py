"""
Shared pydantic base classes for wire payloads.
"""

from enum import Enum
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from openai_tools.errors import CodecError, ConfigError

T = TypeVar("T", bound="WireModel")
E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Any, what: str) -> E:
    """
    Convert a caller-supplied value to a member of ``enum_cls``.

    Raises:
        ConfigError: If the value names no member
    """
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(str(member.value) for member in enum_cls)
        raise ConfigError(f"Invalid {what} '{value}', expected one of: {allowed}") from e


class WireModel(BaseModel):
    """
    Base model for request and response payloads.

    Unset optional fields are omitted on serialization rather than sent as
    ``null``, and unknown response fields are kept so newer server fields are
    not lost.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict, dropping unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)

    @classmethod
    def parse_wire(cls: Type[T], data: Any) -> T:
        """
        Validate a decoded JSON value into this model.

        Raises:
            CodecError: If the value does not match the model
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise CodecError(f"Unexpected {cls.__name__} payload: {e}", cause=e, payload=data) from e


class DeletedObject(WireModel):
    """Acknowledgement returned by delete endpoints."""

    id: str
    object: str = ""
    deleted: bool
