from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.application.dtos.prediction_dto import (
    ForecastRequestDTO,
    PredictionInputDTO,
    PredictionResponseDTO,
)
from src.domain.entities.performance import PredictionInput, PredictionResult


@pytest.mark.parametrize(
    "payload",
    [
        {"year": 1999, "month": 1, "tournament_count": 10, "avg_buy_in": 5},
        {"year": 2024, "month": 13, "tournament_count": 10, "avg_buy_in": 5},
        {"year": 2024, "month": 1, "tournament_count": 0, "avg_buy_in": 5},
        {"year": 2024, "month": 1, "tournament_count": 10, "avg_buy_in": 0},
    ],
)
def test_prediction_input_ranges(payload) -> None:
    with pytest.raises(ValidationError):
        PredictionInputDTO(**payload)


def test_forecast_request_defaults_to_six_months() -> None:
    dto = ForecastRequestDTO(year=2024, month=1, tournament_count=10, avg_buy_in=5)
    assert dto.month_count == 6
    with pytest.raises(ValidationError):
        ForecastRequestDTO(
            year=2024, month=1, tournament_count=10, avg_buy_in=5, month_count=1
        )


def test_prediction_response_from_result() -> None:
    prediction_input = PredictionInput(
        year=2024, month=2, tournament_count=20, avg_buy_in=10
    )

    dto = PredictionResponseDTO.from_result(
        PredictionResult(roi=5.0, estimated_gain=10.0), prediction_input
    )

    assert dto.month == "2024-02"
    assert dto.roi == 5.0
    assert dto.input.tournament_count == 20
