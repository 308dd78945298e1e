"""
Pydantic models for the Batch API.
"""

from enum import Enum
from typing import Dict, List, Optional

from openai_tools.models.base import WireModel


class BatchEndpoint(str, Enum):
    """Endpoints a batch may target."""
    CHAT_COMPLETIONS = "/v1/chat/completions"
    EMBEDDINGS = "/v1/embeddings"
    COMPLETIONS = "/v1/completions"
    RESPONSES = "/v1/responses"
    MODERATIONS = "/v1/moderations"


class CompletionWindow(str, Enum):
    HOURS_24 = "24h"


class BatchStatus(str, Enum):
    VALIDATING = "validating"
    FAILED = "failed"
    IN_PROGRESS = "in_progress"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    EXPIRED = "expired"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"


class CreateBatchRequest(WireModel):
    """Body of ``POST /batches``."""
    input_file_id: str
    endpoint: BatchEndpoint
    completion_window: CompletionWindow = CompletionWindow.HOURS_24
    metadata: Optional[Dict[str, str]] = None


class BatchError(WireModel):
    code: Optional[str] = None
    message: Optional[str] = None
    param: Optional[str] = None
    line: Optional[int] = None


class BatchErrors(WireModel):
    object: Optional[str] = None
    data: List[BatchError] = []


class RequestCounts(WireModel):
    total: int = 0
    completed: int = 0
    failed: int = 0


class Batch(WireModel):
    """A batch job."""
    id: str
    object: str = "batch"
    endpoint: str
    errors: Optional[BatchErrors] = None
    input_file_id: str
    completion_window: str
    status: BatchStatus
    output_file_id: Optional[str] = None
    error_file_id: Optional[str] = None
    created_at: int = 0
    in_progress_at: Optional[int] = None
    expires_at: Optional[int] = None
    finalizing_at: Optional[int] = None
    completed_at: Optional[int] = None
    failed_at: Optional[int] = None
    expired_at: Optional[int] = None
    cancelling_at: Optional[int] = None
    cancelled_at: Optional[int] = None
    request_counts: Optional[RequestCounts] = None
    metadata: Optional[Dict[str, str]] = None


class BatchList(WireModel):
    object: str = "list"
    data: List[Batch]
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False
