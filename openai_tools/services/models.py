"""
Models client: list, retrieve and delete model objects.
"""

from openai_tools.models.base import DeletedObject
from openai_tools.models.model_list import Model, ModelList
from openai_tools.services.base import OperationClient, require_id

MODELS_PATH = "models"


class Models(OperationClient):
    """Client for the ``/models`` endpoints."""

    async def list(self) -> ModelList:
        return await self._send_json(ModelList, "GET", MODELS_PATH)

    async def retrieve(self, model_id: str) -> Model:
        return await self._send_json(Model, "GET", f"{MODELS_PATH}/{require_id(model_id, 'model')}")

    async def delete(self, model_id: str) -> DeletedObject:
        """Delete a fine-tuned model owned by the organization."""
        return await self._send_json(DeletedObject, "DELETE", f"{MODELS_PATH}/{require_id(model_id, 'model')}")
