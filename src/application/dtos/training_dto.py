"""
Application DTOs - Training

This module contains Data Transfer Objects (DTOs) for training operations.
DTOs are used to transfer data between layers and define the API contracts.
"""

import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.training import (
    BATCH_SIZE_RANGE,
    EPOCHS_RANGE,
    LEARNING_RATE_RANGE,
    VALIDATION_RATIO_RANGE,
    ModelMetrics,
    TrainingConfig,
    TrainingHistoryEntry,
    TrainingStatus,
)


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """JSON has no NaN or infinity; undefined numbers are sent as null."""
    if value is None or not math.isfinite(value):
        return None
    return float(value)


class TrainingRequestDTO(BaseModel):
    """DTO for training request."""

    epochs: int = Field(
        default=150,
        ge=EPOCHS_RANGE[0],
        le=EPOCHS_RANGE[1],
        description="Number of passes over the training samples",
    )
    batch_size: int = Field(
        default=32, ge=BATCH_SIZE_RANGE[0], le=BATCH_SIZE_RANGE[1]
    )
    learning_rate: float = Field(
        default=0.001,
        ge=LEARNING_RATE_RANGE[0],
        le=LEARNING_RATE_RANGE[1],
        description="Adam learning rate",
    )
    validation_ratio: float = Field(
        default=0.2,
        ge=VALIDATION_RATIO_RANGE[0],
        le=VALIDATION_RATIO_RANGE[1],
        description="Trailing fraction of months held out for validation",
    )

    def to_config(self) -> TrainingConfig:
        return TrainingConfig(
            epochs=self.epochs,
            batch_size=self.batch_size,
            learning_rate=self.learning_rate,
            validation_ratio=self.validation_ratio,
        )


class TrainingHistoryEntryDTO(BaseModel):
    """DTO for one epoch of training history."""

    epoch: int
    train_loss: Optional[float] = None
    validation_loss: Optional[float] = None

    @classmethod
    def from_entity(cls, entry: TrainingHistoryEntry) -> "TrainingHistoryEntryDTO":
        return cls(
            epoch=entry.epoch,
            train_loss=finite_or_none(entry.train_loss),
            validation_loss=finite_or_none(entry.validation_loss),
        )


class TrainingMetricsDTO(BaseModel):
    """DTO for training metrics."""

    r2_score: Optional[float] = None
    mean_absolute_error: Optional[float] = None
    directional_accuracy: Optional[float] = None
    mean_squared_error: Optional[float] = None
    root_mean_squared_error: Optional[float] = None

    @classmethod
    def from_entity(cls, metrics: ModelMetrics) -> "TrainingMetricsDTO":
        return cls(
            r2_score=finite_or_none(metrics.r2_score),
            mean_absolute_error=finite_or_none(metrics.mean_absolute_error),
            directional_accuracy=finite_or_none(metrics.directional_accuracy),
            mean_squared_error=finite_or_none(metrics.mean_squared_error),
            root_mean_squared_error=finite_or_none(metrics.root_mean_squared_error),
        )


class TrainingStatusDTO(BaseModel):
    """DTO for the state of the current (or last) training run."""

    status: TrainingStatus
    epochs_requested: Optional[int] = None
    epochs_completed: int = 0
    history: List[TrainingHistoryEntryDTO] = Field(default_factory=list)
    metrics: Optional[TrainingMetricsDTO] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    error: Optional[str] = None


class StartTrainingResponseDTO(BaseModel):
    """DTO for training start response."""

    message: str = "Training started successfully"
    status: TrainingStatus = TrainingStatus.TRAINING
    epochs_requested: int
