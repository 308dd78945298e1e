"""
Pydantic models for the Files API.
"""

from enum import Enum
from typing import Any, List, Optional

from openai_tools.models.base import WireModel


class FilePurpose(str, Enum):
    """Intended use of an uploaded file."""
    ASSISTANTS = "assistants"
    BATCH = "batch"
    FINE_TUNE = "fine-tune"
    VISION = "vision"
    USER_DATA = "user_data"
    EVALS = "evals"


class File(WireModel):
    """An uploaded file."""
    id: str
    object: str = "file"
    bytes: int = 0
    created_at: int = 0
    filename: str
    purpose: str
    status: Optional[str] = None
    status_details: Optional[Any] = None


class FileList(WireModel):
    object: str = "list"
    data: List[File]
    has_more: Optional[bool] = None
    first_id: Optional[str] = None
    last_id: Optional[str] = None
