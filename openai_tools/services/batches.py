"""
Batch API client.
"""

import logging
from typing import Dict, Optional

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.errors import ConfigError
from openai_tools.models.batches import Batch, BatchEndpoint, BatchList, CreateBatchRequest
from openai_tools.services.base import OperationClient, paging_query, require_id

logger = logging.getLogger(LOGGER_NAME)

BATCHES_PATH = "batches"


class Batches(OperationClient):
    """Client for the ``/batches`` endpoints."""

    async def create(self, request: CreateBatchRequest) -> Batch:
        if not request.input_file_id:
            raise ConfigError("Batch creation requires an input_file_id")
        logger.info(f"Creating batch for {request.endpoint.value} from file {request.input_file_id}")
        return await self._send_json(Batch, "POST", BATCHES_PATH, json_body=request.to_wire())

    async def create_for(self, input_file_id: str, endpoint: BatchEndpoint,
                         metadata: Optional[Dict[str, str]] = None) -> Batch:
        """Shorthand for :meth:`create` with the default completion window."""
        return await self.create(CreateBatchRequest(input_file_id=input_file_id, endpoint=endpoint, metadata=metadata))

    async def retrieve(self, batch_id: str) -> Batch:
        return await self._send_json(Batch, "GET", f"{BATCHES_PATH}/{require_id(batch_id, 'batch')}")

    async def cancel(self, batch_id: str) -> Batch:
        return await self._send_json(Batch, "POST", f"{BATCHES_PATH}/{require_id(batch_id, 'batch')}/cancel")

    async def list(self, limit: Optional[int] = None, after: Optional[str] = None) -> BatchList:
        return await self._send_json(BatchList, "GET", BATCHES_PATH, query=paging_query(limit, after))
