"""
Application DTOs - Prediction

Request and response contracts for single-month predictions and
multi-month forecasts.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from src.application.dtos.training_dto import finite_or_none
from src.domain.entities.performance import (
    FuturePrediction,
    PredictionInput,
    PredictionResult,
)


class PredictionParametersDTO(BaseModel):
    """DTO echoing prediction parameters back to the caller."""

    year: int
    month: int
    tournament_count: float
    avg_buy_in: float

    @classmethod
    def from_entity(cls, value: PredictionInput) -> "PredictionParametersDTO":
        return cls(
            year=value.year,
            month=value.month,
            tournament_count=value.tournament_count,
            avg_buy_in=value.avg_buy_in,
        )


class PredictionInputDTO(BaseModel):
    """DTO for the parameters of a prediction request."""

    year: int = Field(..., ge=2000, le=2050)
    month: int = Field(..., ge=1, le=12)
    tournament_count: float = Field(..., ge=1, le=1000)
    avg_buy_in: float = Field(..., ge=0.1)

    def to_entity(self) -> PredictionInput:
        return PredictionInput(
            year=self.year,
            month=self.month,
            tournament_count=self.tournament_count,
            avg_buy_in=self.avg_buy_in,
        )


class PredictionResponseDTO(BaseModel):
    """DTO for a single-month prediction."""

    month: str
    roi: Optional[float] = Field(None, description="Predicted ROI in percent")
    estimated_gain: Optional[float] = Field(
        None, description="ROI applied to tournaments x buy-in, in buy-in units"
    )
    input: PredictionParametersDTO

    @classmethod
    def from_result(
        cls, result: PredictionResult, prediction_input: PredictionInput
    ) -> "PredictionResponseDTO":
        return cls(
            month=prediction_input.month_label,
            roi=finite_or_none(result.roi),
            estimated_gain=finite_or_none(result.estimated_gain),
            input=PredictionParametersDTO.from_entity(prediction_input),
        )


class ForecastRequestDTO(PredictionInputDTO):
    """DTO for a multi-month forecast starting at the given month."""

    month_count: int = Field(default=6, ge=2, le=24)


class FuturePredictionDTO(BaseModel):
    """DTO for one forecasted month."""

    month: str
    roi: Optional[float] = None

    @classmethod
    def from_entity(cls, value: FuturePrediction) -> "FuturePredictionDTO":
        return cls(month=value.month_label, roi=finite_or_none(value.roi))


class ForecastResponseDTO(BaseModel):
    """DTO for a forecast run; may be shorter than requested."""

    requested_months: int
    predictions: List[FuturePredictionDTO]
