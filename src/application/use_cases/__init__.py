"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .data_ingestion_use_case import DataIngestionUseCase, IngestedDataset
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .model_evaluation_use_case import (
    EvaluationResult,
    ModelEvaluationUseCase,
    compute_metrics,
)
from .model_prediction_use_case import (
    ModelPredictionError,
    ModelPredictionUseCase,
    estimate_gain,
)
from .model_training_use_case import ModelTrainingError, ModelTrainingUseCase
from .training_management_use_case import TrainingManagementUseCase

__all__ = [
    "DataIngestionUseCase",
    "IngestedDataset",
    "ModelTrainingUseCase",
    "ModelTrainingError",
    "ModelEvaluationUseCase",
    "EvaluationResult",
    "compute_metrics",
    "ModelPredictionUseCase",
    "ModelPredictionError",
    "estimate_gain",
    "TrainingManagementUseCase",
    "GetHealthStatusUseCase",
    "GetApplicationInfoUseCase",
]
