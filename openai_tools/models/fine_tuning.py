"""
Pydantic models for the fine-tuning API.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from openai_tools.models.base import WireModel


class FineTuningJobStatus(str, Enum):
    VALIDATING_FILES = "validating_files"
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class Hyperparameters(WireModel):
    """Training hyperparameters; each may be a number or ``"auto"``."""
    n_epochs: Optional[Union[int, str]] = None
    batch_size: Optional[Union[int, str]] = None
    learning_rate_multiplier: Optional[Union[float, str]] = None


class DpoHyperparameters(Hyperparameters):
    beta: Optional[Union[float, str]] = None


class SupervisedMethod(WireModel):
    hyperparameters: Optional[Hyperparameters] = None


class DpoMethod(WireModel):
    hyperparameters: Optional[DpoHyperparameters] = None


class FineTuningMethod(WireModel):
    """``{"type": "supervised", "supervised": {...}}`` or the ``dpo`` equivalent."""
    type: str
    supervised: Optional[SupervisedMethod] = None
    dpo: Optional[DpoMethod] = None

    @classmethod
    def supervised_with(cls, hyperparameters: Optional[Hyperparameters] = None) -> "FineTuningMethod":
        return cls(type="supervised", supervised=SupervisedMethod(hyperparameters=hyperparameters))

    @classmethod
    def dpo_with(cls, hyperparameters: Optional[DpoHyperparameters] = None) -> "FineTuningMethod":
        return cls(type="dpo", dpo=DpoMethod(hyperparameters=hyperparameters))


class WandbIntegration(WireModel):
    project: str
    name: Optional[str] = None
    entity: Optional[str] = None
    tags: Optional[List[str]] = None


class Integration(WireModel):
    type: str = "wandb"
    wandb: WandbIntegration


class CreateFineTuningJobRequest(WireModel):
    """Body of ``POST /fine_tuning/jobs``."""
    model: str
    training_file: str
    validation_file: Optional[str] = None
    suffix: Optional[str] = None
    seed: Optional[int] = None
    method: Optional[FineTuningMethod] = None
    integrations: Optional[List[Integration]] = None
    metadata: Optional[Dict[str, str]] = None


class FineTuningError(WireModel):
    code: Optional[str] = None
    message: Optional[str] = None
    param: Optional[str] = None


class FineTuningJob(WireModel):
    """A fine-tuning job."""
    id: str
    object: str = "fine_tuning.job"
    model: str
    created_at: int = 0
    finished_at: Optional[int] = None
    fine_tuned_model: Optional[str] = None
    organization_id: Optional[str] = None
    result_files: List[str] = []
    status: FineTuningJobStatus
    validation_file: Optional[str] = None
    training_file: str
    hyperparameters: Optional[Hyperparameters] = None
    trained_tokens: Optional[int] = None
    error: Optional[FineTuningError] = None
    seed: Optional[int] = None
    estimated_finish: Optional[int] = None
    integrations: Optional[List[Dict[str, Any]]] = None
    method: Optional[FineTuningMethod] = None
    user_provided_suffix: Optional[str] = None


class FineTuningJobList(WireModel):
    object: str = "list"
    data: List[FineTuningJob]
    has_more: bool = False


class FineTuningEvent(WireModel):
    id: str
    object: str = "fine_tuning.job.event"
    created_at: int = 0
    level: str
    message: str
    data: Optional[Any] = None
    type: Optional[str] = None


class FineTuningEventList(WireModel):
    object: str = "list"
    data: List[FineTuningEvent]
    has_more: bool = False


class CheckpointMetrics(WireModel):
    step: Optional[float] = None
    train_loss: Optional[float] = None
    train_mean_token_accuracy: Optional[float] = None
    valid_loss: Optional[float] = None
    valid_mean_token_accuracy: Optional[float] = None
    full_valid_loss: Optional[float] = None
    full_valid_mean_token_accuracy: Optional[float] = None


class FineTuningCheckpoint(WireModel):
    id: str
    object: str = "fine_tuning.job.checkpoint"
    created_at: int = 0
    fine_tuning_job_id: str
    fine_tuned_model_checkpoint: str
    step_number: int
    metrics: Optional[CheckpointMetrics] = None


class FineTuningCheckpointList(WireModel):
    object: str = "list"
    data: List[FineTuningCheckpoint]
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False
