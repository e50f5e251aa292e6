"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .dataset_dto import (
    DataPointDTO,
    DatasetDTO,
    DatasetUploadResponseDTO,
    DataSummaryDTO,
    EvaluationDTO,
    FeatureSummaryDTO,
    ScatterPointDTO,
    TimeSeriesPointDTO,
)
from .health_dto import ApplicationInfoDTO, SystemHealthDTO
from .prediction_dto import (
    ForecastRequestDTO,
    ForecastResponseDTO,
    FuturePredictionDTO,
    PredictionInputDTO,
    PredictionParametersDTO,
    PredictionResponseDTO,
)
from .training_dto import (
    StartTrainingResponseDTO,
    TrainingHistoryEntryDTO,
    TrainingMetricsDTO,
    TrainingRequestDTO,
    TrainingStatusDTO,
    finite_or_none,
)

__all__ = [
    "DataPointDTO",
    "DatasetDTO",
    "DatasetUploadResponseDTO",
    "DataSummaryDTO",
    "EvaluationDTO",
    "FeatureSummaryDTO",
    "ScatterPointDTO",
    "TimeSeriesPointDTO",
    "SystemHealthDTO",
    "ApplicationInfoDTO",
    "PredictionInputDTO",
    "PredictionParametersDTO",
    "PredictionResponseDTO",
    "ForecastRequestDTO",
    "ForecastResponseDTO",
    "FuturePredictionDTO",
    "TrainingRequestDTO",
    "TrainingHistoryEntryDTO",
    "TrainingMetricsDTO",
    "TrainingStatusDTO",
    "StartTrainingResponseDTO",
    "finite_or_none",
]
