"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import (
    DomainError,
    InvalidConfigError,
    MalformedInputError,
    ModelNotTrainedError,
    NoDataIngestedError,
    ScalerNotInitializedError,
    TrainingInProgressError,
)
from .performance import (
    DataPoint,
    DataSummary,
    FeatureSummary,
    FuturePrediction,
    PredictionInput,
    PredictionResult,
    TimeSeriesPoint,
    format_month_label,
    next_month,
)
from .training import (
    ModelMetrics,
    ScatterPoint,
    TrainingConfig,
    TrainingHistoryEntry,
    TrainingOutcome,
    TrainingStatus,
    is_checkpoint_epoch,
)

__all__ = [
    "DataPoint",
    "DataSummary",
    "FeatureSummary",
    "FuturePrediction",
    "PredictionInput",
    "PredictionResult",
    "TimeSeriesPoint",
    "format_month_label",
    "next_month",
    "ModelMetrics",
    "ScatterPoint",
    "TrainingConfig",
    "TrainingHistoryEntry",
    "TrainingOutcome",
    "TrainingStatus",
    "is_checkpoint_epoch",
    "DomainError",
    "InvalidConfigError",
    "MalformedInputError",
    "ModelNotTrainedError",
    "NoDataIngestedError",
    "ScalerNotInitializedError",
    "TrainingInProgressError",
]
