"""
Pydantic models for the moderation API.
"""

from enum import Enum
from typing import Dict, List, Optional

from openai_tools.models.base import WireModel


class ModerationModel(str, Enum):
    OMNI_MODERATION_LATEST = "omni-moderation-latest"
    TEXT_MODERATION_LATEST = "text-moderation-latest"


class ModerationResult(WireModel):
    """
    Classification of one input.

    ``categories`` and ``category_scores`` are keyed by the server's category
    names (``hate``, ``hate/threatening``, ``self-harm/intent``, ...).
    """
    flagged: bool
    categories: Dict[str, Optional[bool]]
    category_scores: Dict[str, Optional[float]]
    category_applied_input_types: Optional[Dict[str, List[str]]] = None

    def flagged_categories(self) -> List[str]:
        return [name for name, flagged in self.categories.items() if flagged]


class ModerationResponse(WireModel):
    id: str
    model: str
    results: List[ModerationResult]
