"""
Pydantic models and enumerations for the Images API.
"""

import base64
from enum import Enum
from typing import List, Optional

from openai_tools.errors import CodecError
from openai_tools.models.base import WireModel


class ImageModel(str, Enum):
    DALL_E_2 = "dall-e-2"
    DALL_E_3 = "dall-e-3"
    GPT_IMAGE_1 = "gpt-image-1"


class ImageSize(str, Enum):
    SIZE_256 = "256x256"
    SIZE_512 = "512x512"
    SIZE_1024 = "1024x1024"
    SIZE_1792_1024 = "1792x1024"
    SIZE_1024_1792 = "1024x1792"


class ImageQuality(str, Enum):
    STANDARD = "standard"
    HD = "hd"


class ImageStyle(str, Enum):
    VIVID = "vivid"
    NATURAL = "natural"


class ImageResponseFormat(str, Enum):
    URL = "url"
    B64_JSON = "b64_json"


class GenerateOptions(WireModel):
    """Optional fields of an image generation request."""
    model: Optional[ImageModel] = None
    n: Optional[int] = None
    quality: Optional[ImageQuality] = None
    response_format: Optional[ImageResponseFormat] = None
    size: Optional[ImageSize] = None
    style: Optional[ImageStyle] = None
    user: Optional[str] = None


class EditOptions(WireModel):
    """Optional fields of an image edit request."""
    model: Optional[ImageModel] = None
    mask: Optional[str] = None
    n: Optional[int] = None
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None


class VariationOptions(WireModel):
    """Optional fields of an image variation request."""
    model: Optional[ImageModel] = None
    n: Optional[int] = None
    response_format: Optional[ImageResponseFormat] = None
    size: Optional[ImageSize] = None
    user: Optional[str] = None


class ImageData(WireModel):
    """One generated image, returned either by URL or as base64."""
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None

    def has_url(self) -> bool:
        return self.url is not None

    def has_b64(self) -> bool:
        return self.b64_json is not None

    def as_bytes(self) -> Optional[bytes]:
        """
        Decode ``b64_json``; returns None for URL results.

        Raises:
            CodecError: If the payload is not valid base64
        """
        if self.b64_json is None:
            return None
        try:
            return base64.b64decode(self.b64_json, validate=True)
        except ValueError as e:
            raise CodecError(f"Invalid base64 image data: {e}", cause=e) from e


class ImageResponse(WireModel):
    created: int = 0
    data: List[ImageData]
