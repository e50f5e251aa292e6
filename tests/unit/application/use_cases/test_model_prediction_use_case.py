from __future__ import annotations

from datetime import date

import numpy as np
import pytest

from src.application.use_cases.model_prediction_use_case import (
    DEFAULT_AVG_BUY_IN,
    DEFAULT_TOURNAMENT_COUNT,
    ModelPredictionError,
    ModelPredictionUseCase,
    estimate_gain,
)
from src.domain.entities.errors import ModelNotTrainedError
from src.domain.entities.performance import DataPoint, PredictionInput
from src.domain.services.scaler_registry import ScalerRegistry
from tests.conftest import StubModel


class _RecordingModel(StubModel):
    def __init__(self) -> None:
        super().__init__(prediction=4.0)
        self.inputs = []

    def predict(self, x, verbose=0):
        self.inputs.append(np.array(x))
        return super().predict(x, verbose=verbose)


def _records():
    return [
        DataPoint(year=2023, month=m, tournament_count=90 + m, avg_buy_in=10 + m, roi=m)
        for m in range(1, 13)
    ]


@pytest.fixture()
def scalers() -> ScalerRegistry:
    return ScalerRegistry().fit(_records())


def _input(year=2024, month=11, tournament_count=100.0, avg_buy_in=20.0):
    return PredictionInput(
        year=year,
        month=month,
        tournament_count=tournament_count,
        avg_buy_in=avg_buy_in,
    )


def test_predict_normalizes_inputs(scalers) -> None:
    model = _RecordingModel()

    roi = ModelPredictionUseCase().predict(model, scalers, _input(year=2023, month=7))

    assert roi == pytest.approx(4.0)
    row = model.inputs[0]
    assert row.shape == (1, 4)
    np.testing.assert_allclose(row[0], scalers.normalize_row(2023, 7, 100.0, 20.0))


def test_predict_without_model_raises(scalers) -> None:
    with pytest.raises(ModelNotTrainedError):
        ModelPredictionUseCase().predict(None, scalers, _input())


def test_predict_without_scalers_raises() -> None:
    with pytest.raises(ModelNotTrainedError):
        ModelPredictionUseCase().predict(StubModel(), None, _input())
    with pytest.raises(ModelNotTrainedError):
        ModelPredictionUseCase().predict(StubModel(), ScalerRegistry(), _input())


def test_backend_failure_is_wrapped(scalers) -> None:
    with pytest.raises(ModelPredictionError):
        ModelPredictionUseCase().predict(
            StubModel(fail_predict_after=0), scalers, _input()
        )


def test_predict_with_gain(scalers) -> None:
    result = ModelPredictionUseCase().predict_with_gain(
        StubModel(prediction=10.0), scalers, _input(tournament_count=50, avg_buy_in=4)
    )
    assert result.roi == pytest.approx(10.0)
    assert result.estimated_gain == pytest.approx(20.0)


def test_estimate_gain_negative_roi() -> None:
    assert estimate_gain(-50.0, _input(tournament_count=10, avg_buy_in=2)) == -10.0


def test_forecast_rolls_over_year(scalers) -> None:
    results = ModelPredictionUseCase().predict_future_periods(
        StubModel(), scalers, _input(year=2024, month=11), 3
    )
    assert [r.month_label for r in results] == ["2024-11", "2024-12", "2025-01"]


def test_forecast_holds_volume_constant(scalers) -> None:
    model = _RecordingModel()

    ModelPredictionUseCase().predict_future_periods(model, scalers, _input(), 4)

    tournament_column = [row[0][2] for row in model.inputs]
    assert len(set(tournament_column)) == 1


def test_forecast_returns_partial_results_on_failure(scalers) -> None:
    results = ModelPredictionUseCase().predict_future_periods(
        StubModel(fail_predict_after=2), scalers, _input(), 6
    )
    assert [r.month_label for r in results] == ["2024-11", "2024-12"]


def test_forecast_without_model_is_empty(scalers) -> None:
    results = ModelPredictionUseCase().predict_future_periods(
        None, scalers, _input(), 6
    )
    assert results == []


def test_default_input_uses_recent_months() -> None:
    defaults = ModelPredictionUseCase().default_input(
        _records(), today=date(2025, 3, 9)
    )
    # Months 7..12: tournaments 97..102, buy-ins 17..22
    assert (defaults.year, defaults.month) == (2025, 3)
    assert defaults.tournament_count == 100.0
    assert defaults.avg_buy_in == pytest.approx(19.5)


def test_default_input_rounds_tournaments_half_up() -> None:
    records = [
        DataPoint(year=2024, month=1, tournament_count=10, avg_buy_in=1, roi=0),
        DataPoint(year=2024, month=2, tournament_count=11, avg_buy_in=1, roi=0),
    ]
    defaults = ModelPredictionUseCase().default_input(records, today=date(2024, 3, 1))
    assert defaults.tournament_count == 11.0


def test_default_input_without_data() -> None:
    defaults = ModelPredictionUseCase().default_input([], today=date(2024, 6, 1))
    assert defaults.tournament_count == DEFAULT_TOURNAMENT_COUNT
    assert defaults.avg_buy_in == DEFAULT_AVG_BUY_IN
    assert defaults.month == 6
