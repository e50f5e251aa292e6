"""
Application Use Cases - Model Evaluation

Metrics checkpoint run during and after training. The current model predicts
every training sample; the results are reduced to goodness-of-fit metrics, a
real-vs-predicted scatter and the predicted ROI of every month.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence

import numpy as np
import structlog
from sklearn.metrics import mean_absolute_error, mean_squared_error

from src.domain.entities.performance import TimeSeriesPoint
from src.domain.entities.training import ModelMetrics, ScatterPoint

logger = structlog.get_logger(__name__)


@dataclass
class EvaluationResult:
    """Fresh snapshot produced by one checkpoint."""

    metrics: ModelMetrics
    scatter: List[ScatterPoint]
    predictions: np.ndarray


def compute_metrics(actual: np.ndarray, predicted: np.ndarray) -> ModelMetrics:
    """
    Compute goodness-of-fit of ``predicted`` against ``actual``.

    R² is NaN when the labels have zero variance. NaN predictions are not
    masked and propagate into the metrics.
    """
    actual = np.asarray(actual, dtype=np.float64).ravel()
    predicted = np.asarray(predicted, dtype=np.float64).ravel()

    if actual.size == 0:
        nan = float("nan")
        return ModelMetrics(
            r2_score=nan, mean_absolute_error=nan, directional_accuracy=nan
        )

    errors = actual - predicted
    sum_squared_error = float(np.sum(errors**2))
    sum_squared_total = float(np.sum((actual - actual.mean()) ** 2))

    if sum_squared_total == 0.0:
        r2 = float("nan")
    else:
        r2 = 1.0 - sum_squared_error / sum_squared_total

    if np.all(np.isfinite(predicted)):
        mae = float(mean_absolute_error(actual, predicted))
        mse = float(mean_squared_error(actual, predicted))
    else:
        mae = float(np.mean(np.abs(errors)))
        mse = float(np.mean(errors**2))

    # Zero counts as non-negative.
    same_sign = (actual >= 0) == (predicted >= 0)
    directional_accuracy = float(np.count_nonzero(same_sign)) / actual.size

    return ModelMetrics(
        r2_score=r2,
        mean_absolute_error=mae,
        directional_accuracy=directional_accuracy,
        mean_squared_error=mse,
        root_mean_squared_error=float(np.sqrt(mse)),
    )


class ModelEvaluationUseCase:
    """Recomputes metrics, scatter and time-series predictions."""

    def execute(
        self,
        model: Any,
        features: np.ndarray,
        labels: np.ndarray,
        time_series: Sequence[TimeSeriesPoint] = (),
    ) -> EvaluationResult:
        """
        Evaluate ``model`` over the whole training set.

        Every point of ``time_series`` gets its ``predicted_roi`` replaced,
        index-aligned with ``labels``.
        """
        predictions = np.asarray(
            model.predict(features, verbose=0), dtype=np.float64
        ).reshape(-1)

        metrics = compute_metrics(labels, predictions)

        actual = np.asarray(labels, dtype=np.float64).reshape(-1)
        scatter = [
            ScatterPoint(real=float(real), predicted=float(pred))
            for real, pred in zip(actual, predictions)
        ]

        for point, pred in zip(time_series, predictions):
            point.predicted_roi = float(pred)

        logger.debug(
            "evaluation.completed",
            samples=int(actual.size),
            r2=metrics.r2_score,
            mae=metrics.mean_absolute_error,
            directional_accuracy=metrics.directional_accuracy,
        )

        return EvaluationResult(
            metrics=metrics, scatter=scatter, predictions=predictions
        )
