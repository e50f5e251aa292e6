"""
Application Use Case - Model Prediction

Single-month ROI prediction and iterative multi-month forecasting with a
trained network. Inputs are normalized with the scalers fitted at ingestion;
the network output is already in ROI percent, labels were never scaled.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, List, Optional, Sequence

import numpy as np
import structlog

from src.domain.entities.errors import DomainError, ModelNotTrainedError
from src.domain.entities.performance import (
    DataPoint,
    FuturePrediction,
    PredictionInput,
    PredictionResult,
    next_month,
)
from src.domain.services.scaler_registry import ScalerRegistry

logger = structlog.get_logger(__name__)

DEFAULT_TOURNAMENT_COUNT = 100.0
DEFAULT_AVG_BUY_IN = 50.0


class ModelPredictionError(Exception):
    """Raised when the network fails to produce a usable prediction."""

    pass


def estimate_gain(roi: float, prediction_input: PredictionInput) -> float:
    """Gain in buy-in units implied by ``roi`` percent over the given volume."""
    return roi * prediction_input.tournament_count * prediction_input.avg_buy_in / 100


class ModelPredictionUseCase:
    """Runs forward passes of a trained model on user-supplied parameters."""

    def __init__(self, recent_window_months: int = 6):
        self.recent_window_months = recent_window_months

    def predict(
        self,
        model: Optional[Any],
        scalers: Optional[ScalerRegistry],
        prediction_input: PredictionInput,
    ) -> float:
        """
        Predict the ROI for one month.

        Raises:
            ModelNotTrainedError: When no model exists or scalers were never fit
            ModelPredictionError: When the forward pass fails
        """
        if model is None or scalers is None or not scalers.is_fitted:
            raise ModelNotTrainedError()

        row = scalers.normalize_row(
            prediction_input.year,
            prediction_input.month,
            prediction_input.tournament_count,
            prediction_input.avg_buy_in,
        ).reshape(1, -1)

        try:
            output = model.predict(row, verbose=0)
        except Exception as e:
            logger.error(
                "prediction.forward_failed",
                month=prediction_input.month_label,
                error=str(e),
            )
            raise ModelPredictionError(f"Prediction failed: {e}") from e

        return float(np.asarray(output).reshape(-1)[0])

    def predict_with_gain(
        self,
        model: Optional[Any],
        scalers: Optional[ScalerRegistry],
        prediction_input: PredictionInput,
    ) -> PredictionResult:
        roi = self.predict(model, scalers, prediction_input)
        logger.info("prediction.completed", month=prediction_input.month_label, roi=roi)
        return PredictionResult(
            roi=roi, estimated_gain=estimate_gain(roi, prediction_input)
        )

    def predict_future_periods(
        self,
        model: Optional[Any],
        scalers: Optional[ScalerRegistry],
        start: PredictionInput,
        month_count: int,
    ) -> List[FuturePrediction]:
        """
        Forecast ``month_count`` consecutive months starting at ``start``.

        Tournament count and buy-in stay constant across the horizon. The loop
        stops at the first failed prediction and returns what it has so far.
        """
        results: List[FuturePrediction] = []
        year, month = start.year, start.month

        for _ in range(max(month_count, 0)):
            current = PredictionInput(
                year=year,
                month=month,
                tournament_count=start.tournament_count,
                avg_buy_in=start.avg_buy_in,
            )
            try:
                roi = self.predict(model, scalers, current)
            except (DomainError, ModelPredictionError) as e:
                logger.warning(
                    "forecast.stopped_early",
                    month=current.month_label,
                    completed=len(results),
                    error=str(e),
                )
                break

            results.append(FuturePrediction(month_label=current.month_label, roi=roi))
            year, month = next_month(year, month)

        logger.info(
            "forecast.completed",
            start=start.month_label,
            requested=month_count,
            produced=len(results),
        )
        return results

    def default_input(
        self, records: Sequence[DataPoint], today: Optional[date] = None
    ) -> PredictionInput:
        """
        Default prediction parameters for the current month.

        Volume and buy-in are the means over the most recent months of data;
        the tournament count is rounded half up to a whole number.
        """
        today = today or date.today()

        recent = sorted(records, key=lambda r: (r.year, r.month))[
            -self.recent_window_months :
        ]
        if recent:
            tournament_count = float(
                math.floor(np.mean([r.tournament_count for r in recent]) + 0.5)
            )
            avg_buy_in = float(np.mean([r.avg_buy_in for r in recent]))
        else:
            tournament_count = DEFAULT_TOURNAMENT_COUNT
            avg_buy_in = DEFAULT_AVG_BUY_IN

        return PredictionInput(
            year=today.year,
            month=today.month,
            tournament_count=tournament_count,
            avg_buy_in=avg_buy_in,
        )
