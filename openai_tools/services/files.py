"""
Files client: upload, list, retrieve, delete and download.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.core.http_client import MultipartPart
from openai_tools.errors import ConfigError
from openai_tools.models.base import DeletedObject, coerce_enum
from openai_tools.models.files import File, FileList, FilePurpose
from openai_tools.models.message import read_file_bytes
from openai_tools.services.base import OperationClient, require_id

logger = logging.getLogger(LOGGER_NAME)

FILES_PATH = "files"


class Files(OperationClient):
    """Client for the ``/files`` endpoints."""

    async def upload_bytes(self, data: bytes, filename: str, purpose: FilePurpose) -> File:
        """
        Upload in-memory content.

        Args:
            data: File content
            filename: Name reported to the server
            purpose: Intended use

        Returns:
            File: The created file object
        """
        if not filename:
            raise ConfigError("Upload requires a filename")
        purpose = coerce_enum(FilePurpose, purpose, "file purpose")
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        parts = [
            MultipartPart.text("purpose", purpose.value),
            MultipartPart.file("file", data, filename, content_type),
        ]
        logger.info(f"Uploading {filename} ({len(data)} bytes) for {purpose.value}")
        return await self._send_json(File, "POST", FILES_PATH, multipart=parts)

    async def upload(self, path: Union[str, Path], purpose: FilePurpose) -> File:
        """Upload a local file."""
        path = Path(path)
        return await self.upload_bytes(read_file_bytes(path), path.name, purpose)

    async def list(self, purpose: Optional[FilePurpose] = None) -> FileList:
        query = [("purpose", coerce_enum(FilePurpose, purpose, "file purpose").value)] if purpose is not None else None
        return await self._send_json(FileList, "GET", FILES_PATH, query=query)

    async def retrieve(self, file_id: str) -> File:
        return await self._send_json(File, "GET", f"{FILES_PATH}/{require_id(file_id, 'file')}")

    async def delete(self, file_id: str) -> DeletedObject:
        return await self._send_json(DeletedObject, "DELETE", f"{FILES_PATH}/{require_id(file_id, 'file')}")

    async def content(self, file_id: str) -> bytes:
        """Download the raw content of a file."""
        return await self._send("GET", f"{FILES_PATH}/{require_id(file_id, 'file')}/content")

