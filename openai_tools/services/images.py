"""
Images client: generation, edits and variations.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.core.http_client import MultipartPart
from openai_tools.errors import ConfigError
from openai_tools.models.images import EditOptions, GenerateOptions, ImageModel, ImageResponse, VariationOptions
from openai_tools.models.message import image_mime_type, read_file_bytes
from openai_tools.services.base import OperationClient

logger = logging.getLogger(LOGGER_NAME)

GENERATIONS_PATH = "images/generations"
EDITS_PATH = "images/edits"
VARIATIONS_PATH = "images/variations"


def _image_part(field: str, path: Union[str, Path]) -> MultipartPart:
    path = Path(path)
    return MultipartPart.file(field, read_file_bytes(path), path.name, image_mime_type(path))


def _option_parts(fields: Dict[str, Any]) -> List[MultipartPart]:
    return [MultipartPart.text(name, value) for name, value in fields.items()]


class Images(OperationClient):
    """Client for the ``/images`` endpoints."""

    async def generate(self, prompt: str, options: Optional[GenerateOptions] = None) -> ImageResponse:
        """
        Generate images from a prompt.

        Raises:
            ConfigError: If the prompt is empty
        """
        if not prompt:
            raise ConfigError("Image generation requires a prompt")
        body: Dict[str, Any] = {"prompt": prompt}
        body.update((options or GenerateOptions()).to_wire())
        logger.info(f"Generating image with {body.get('model', 'default model')}")
        return await self._send_json(ImageResponse, "POST", GENERATIONS_PATH, json_body=body)

    async def edit(self, image: Union[str, Path], prompt: str, options: Optional[EditOptions] = None) -> ImageResponse:
        """
        Edit an image. ``options.mask`` is a path to a PNG whose transparent
        areas mark where the image should change.
        """
        if not prompt:
            raise ConfigError("Image edit requires a prompt")
        fields = (options or EditOptions()).to_wire()
        mask = fields.pop("mask", None)
        parts = [_image_part("image", image), MultipartPart.text("prompt", prompt)]
        if mask is not None:
            parts.append(_image_part("mask", mask))
        parts.extend(_option_parts(fields))
        return await self._send_json(ImageResponse, "POST", EDITS_PATH, multipart=parts)

    async def variation(self, image: Union[str, Path], options: Optional[VariationOptions] = None) -> ImageResponse:
        """
        Create variations of an image. Only DALL-E 2 supports this endpoint.

        Raises:
            ConfigError: If another model is requested
        """
        options = options or VariationOptions()
        if options.model is not None and options.model != ImageModel.DALL_E_2:
            raise ConfigError(f"Image variations are only supported by {ImageModel.DALL_E_2.value}")
        parts = [_image_part("image", image)]
        parts.extend(_option_parts(options.to_wire()))
        return await self._send_json(ImageResponse, "POST", VARIATIONS_PATH, multipart=parts)
