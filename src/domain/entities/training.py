"""
Domain Entities - Training

This module defines the entities produced and consumed by a training run:
the hyperparameters, the per-epoch history, the evaluation metrics and the
outcome of the run. They carry no dependency on the numeric backend.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

EPOCHS_RANGE = (10, 1000)
BATCH_SIZE_RANGE = (8, 128)
LEARNING_RATE_RANGE = (0.0001, 0.1)
VALIDATION_RATIO_RANGE = (0.1, 0.5)

# Checkpoints run on every Nth epoch (0-based) and on the last one.
CHECKPOINT_INTERVAL = 5


class TrainingStatus(str, Enum):
    """Status of a training run."""

    IDLE = "idle"
    TRAINING = "training"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class TrainingConfig:
    """Hyperparameters chosen by the player for one training run."""

    epochs: int = 150
    batch_size: int = 32
    learning_rate: float = 0.001
    validation_ratio: float = 0.2


@dataclass(frozen=True)
class TrainingHistoryEntry:
    """Losses reported at the end of one epoch (1-based)."""

    epoch: int
    train_loss: float
    validation_loss: float


@dataclass(frozen=True)
class ModelMetrics:
    """Goodness-of-fit of the model over the whole training set."""

    r2_score: float
    mean_absolute_error: float
    directional_accuracy: float
    mean_squared_error: Optional[float] = None
    root_mean_squared_error: Optional[float] = None


@dataclass(frozen=True)
class ScatterPoint:
    """Real ROI of a sample against the model's prediction for it."""

    real: float
    predicted: float


@dataclass
class TrainingOutcome:
    """Result of a training run that did not fail."""

    status: TrainingStatus
    epochs_completed: int
    history: List[TrainingHistoryEntry] = field(default_factory=list)
    metrics: Optional[ModelMetrics] = None

    @property
    def cancelled(self) -> bool:
        return self.status == TrainingStatus.CANCELLED


def is_checkpoint_epoch(epoch_index: int, total_epochs: int) -> bool:
    """Tell whether metrics are recomputed after the given 0-based epoch."""
    return epoch_index % CHECKPOINT_INTERVAL == 0 or epoch_index == total_epochs - 1
