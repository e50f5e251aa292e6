"""
Application DTOs - Dataset

Contracts exposing the ingested dataset, its summary and the chart
snapshots (time series and real-vs-predicted scatter).
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities.performance import (
    DataPoint,
    DataSummary,
    FeatureSummary,
    TimeSeriesPoint,
)
from src.domain.entities.training import ModelMetrics, ScatterPoint

from .training_dto import TrainingMetricsDTO, finite_or_none


class FeatureSummaryDTO(BaseModel):
    min: float
    max: float
    mean: float

    @classmethod
    def from_entity(cls, value: FeatureSummary) -> "FeatureSummaryDTO":
        return cls(min=value.min, max=value.max, mean=value.mean)


class DataSummaryDTO(BaseModel):
    """DTO for the per-column summary of the dataset."""

    tournament_count: FeatureSummaryDTO
    avg_buy_in: FeatureSummaryDTO
    roi: FeatureSummaryDTO

    @classmethod
    def from_entity(cls, value: DataSummary) -> "DataSummaryDTO":
        return cls(
            tournament_count=FeatureSummaryDTO.from_entity(value.tournament_count),
            avg_buy_in=FeatureSummaryDTO.from_entity(value.avg_buy_in),
            roi=FeatureSummaryDTO.from_entity(value.roi),
        )


class DataPointDTO(BaseModel):
    month: str
    year: int
    tournament_count: float
    avg_buy_in: float
    roi: float

    @classmethod
    def from_entity(cls, value: DataPoint) -> "DataPointDTO":
        return cls(
            month=value.month_label,
            year=value.year,
            tournament_count=value.tournament_count,
            avg_buy_in=value.avg_buy_in,
            roi=value.roi,
        )


class DatasetUploadResponseDTO(BaseModel):
    """DTO returned after a successful upload."""

    player_name: Optional[str] = None
    records: int
    first_month: str
    last_month: str
    summary: DataSummaryDTO


class DatasetDTO(BaseModel):
    """DTO for the full ingested dataset."""

    player_name: Optional[str] = None
    records: List[DataPointDTO]
    summary: Optional[DataSummaryDTO] = None


class TimeSeriesPointDTO(BaseModel):
    month: str
    year: int
    real_roi: float
    predicted_roi: Optional[float] = None

    @classmethod
    def from_entity(cls, value: TimeSeriesPoint) -> "TimeSeriesPointDTO":
        return cls(
            month=value.month_label,
            year=value.year,
            real_roi=value.real_roi,
            predicted_roi=finite_or_none(value.predicted_roi),
        )


class ScatterPointDTO(BaseModel):
    real: float
    predicted: Optional[float] = None

    @classmethod
    def from_entity(cls, value: ScatterPoint) -> "ScatterPointDTO":
        return cls(real=value.real, predicted=finite_or_none(value.predicted))


class EvaluationDTO(BaseModel):
    """DTO for the latest metrics checkpoint."""

    metrics: Optional[TrainingMetricsDTO] = None
    scatter: List[ScatterPointDTO]

    @classmethod
    def from_entities(
        cls, metrics: Optional[ModelMetrics], scatter: List[ScatterPoint]
    ) -> "EvaluationDTO":
        return cls(
            metrics=TrainingMetricsDTO.from_entity(metrics) if metrics else None,
            scatter=[ScatterPointDTO.from_entity(p) for p in scatter],
        )
