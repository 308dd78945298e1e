"""
Pydantic models for the Models API.
"""

from typing import List

from openai_tools.models.base import WireModel


class Model(WireModel):
    id: str
    object: str = "model"
    created: int = 0
    owned_by: str = ""


class ModelList(WireModel):
    object: str = "list"
    data: List[Model]
