"""
Pydantic models for embedding responses.
"""

import base64
import struct
from typing import List, Optional, Union

from openai_tools.errors import CodecError
from openai_tools.models.base import WireModel
from openai_tools.models.usage import Usage

Vector1D = List[float]
Vector2D = List[List[float]]
Vector3D = List[List[List[float]]]


def _depth(value) -> int:
    depth = 0
    while isinstance(value, list):
        depth += 1
        if not value:
            break
        value = value[0]
    return depth


class EmbeddingData(WireModel):
    """
    One embedding vector.

    ``embedding`` is a float array of 1, 2 or 3 dimensions, or a base64
    string when ``encoding_format="base64"`` was requested. Exactly one of
    :meth:`as_1d`, :meth:`as_2d`, :meth:`as_3d` returns a value.
    """
    object: str = "embedding"
    index: int = 0
    embedding: Union[Vector3D, Vector2D, Vector1D, str]

    @property
    def dimensions(self) -> int:
        if isinstance(self.embedding, str):
            return 1
        return _depth(self.embedding)

    def as_1d(self) -> Optional[Vector1D]:
        if isinstance(self.embedding, str):
            return self.decode_base64()
        return self.embedding if self.dimensions == 1 else None

    def as_2d(self) -> Optional[Vector2D]:
        return self.embedding if not isinstance(self.embedding, str) and self.dimensions == 2 else None

    def as_3d(self) -> Optional[Vector3D]:
        return self.embedding if not isinstance(self.embedding, str) and self.dimensions == 3 else None

    def decode_base64(self) -> Vector1D:
        """
        Decode a base64 embedding of little-endian float32 values.

        Raises:
            CodecError: If the payload is not valid base64 float32 data
        """
        if not isinstance(self.embedding, str):
            raise CodecError("Embedding is not base64 encoded")
        try:
            raw = base64.b64decode(self.embedding, validate=True)
            return list(struct.unpack(f"<{len(raw) // 4}f", raw))
        except (ValueError, struct.error) as e:
            raise CodecError(f"Invalid base64 embedding: {e}", cause=e) from e


class EmbeddingResponse(WireModel):
    """Response of ``POST /embeddings``."""
    object: str = "list"
    data: List[EmbeddingData]
    model: str
    usage: Optional[Usage] = None
