"""
Fine-tuning jobs client.
"""

import logging
from typing import Optional

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.errors import ConfigError
from openai_tools.models.fine_tuning import (
    CreateFineTuningJobRequest,
    FineTuningCheckpointList,
    FineTuningEventList,
    FineTuningJob,
    FineTuningJobList,
)
from openai_tools.services.base import OperationClient, paging_query, require_id

logger = logging.getLogger(LOGGER_NAME)

FINE_TUNING_PATH = "fine_tuning/jobs"


class FineTuning(OperationClient):
    """Client for the ``/fine_tuning/jobs`` endpoints."""

    async def create(self, request: CreateFineTuningJobRequest) -> FineTuningJob:
        if not request.model or not request.training_file:
            raise ConfigError("Fine-tuning requires a model and a training_file")
        logger.info(f"Creating fine-tuning job for {request.model} on {request.training_file}")
        return await self._send_json(FineTuningJob, "POST", FINE_TUNING_PATH, json_body=request.to_wire())

    async def retrieve(self, job_id: str) -> FineTuningJob:
        return await self._send_json(FineTuningJob, "GET", f"{FINE_TUNING_PATH}/{require_id(job_id, 'job')}")

    async def cancel(self, job_id: str) -> FineTuningJob:
        return await self._send_json(FineTuningJob, "POST", f"{FINE_TUNING_PATH}/{require_id(job_id, 'job')}/cancel")

    async def list(self, limit: Optional[int] = None, after: Optional[str] = None) -> FineTuningJobList:
        return await self._send_json(FineTuningJobList, "GET", FINE_TUNING_PATH, query=paging_query(limit, after))

    async def list_events(self, job_id: str, limit: Optional[int] = None,
                          after: Optional[str] = None) -> FineTuningEventList:
        path = f"{FINE_TUNING_PATH}/{require_id(job_id, 'job')}/events"
        return await self._send_json(FineTuningEventList, "GET", path, query=paging_query(limit, after))

    async def list_checkpoints(self, job_id: str, limit: Optional[int] = None,
                               after: Optional[str] = None) -> FineTuningCheckpointList:
        path = f"{FINE_TUNING_PATH}/{require_id(job_id, 'job')}/checkpoints"
        return await self._send_json(FineTuningCheckpointList, "GET", path, query=paging_query(limit, after))
