"""
Application Session - ROI pipeline coordinator

A PokerRoiSession owns every piece of mutable pipeline state: the ingested
dataset and its scalers, the live model, and the caches derived from training
(history, metrics, scatter, time series). Lifecycle:

  1. created empty
  2. populated by ``ingest``
  3. extended by ``train``
  4. queried by ``predict`` / ``predict_future_periods``

Callers never see live state. Accessors return copies and subscribers
receive full snapshots through the notification hub.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Callable, Dict, List, Optional

import structlog

from src.application.models.cancellation import CancellationToken
from src.application.models.events import NotificationHub, SessionEvent, Subscriber
from src.application.use_cases.data_ingestion_use_case import (
    DataIngestionUseCase,
    IngestedDataset,
)
from src.application.use_cases.model_evaluation_use_case import (
    ModelEvaluationUseCase,
)
from src.application.use_cases.model_prediction_use_case import (
    ModelPredictionUseCase,
)
from src.application.use_cases.model_training_use_case import ModelTrainingUseCase
from src.domain.entities.errors import NoDataIngestedError, TrainingInProgressError
from src.domain.entities.performance import (
    DataPoint,
    DataSummary,
    FuturePrediction,
    PredictionInput,
    PredictionResult,
    TimeSeriesPoint,
)
from src.domain.entities.training import (
    ModelMetrics,
    ScatterPoint,
    TrainingConfig,
    TrainingHistoryEntry,
    TrainingOutcome,
)
from src.domain.services.config_validator import validate_training_configuration
from src.domain.services.scaler_registry import Scaler

logger = structlog.get_logger(__name__)


class PokerRoiSession:
    """Stateful coordinator of ingestion, training and prediction."""

    def __init__(
        self,
        ingestion_use_case: Optional[DataIngestionUseCase] = None,
        training_use_case: Optional[ModelTrainingUseCase] = None,
        evaluation_use_case: Optional[ModelEvaluationUseCase] = None,
        prediction_use_case: Optional[ModelPredictionUseCase] = None,
        notifications: Optional[NotificationHub] = None,
    ):
        self.ingestion = ingestion_use_case or DataIngestionUseCase()
        self.training = training_use_case or ModelTrainingUseCase()
        self.evaluation = evaluation_use_case or ModelEvaluationUseCase()
        self.prediction = prediction_use_case or ModelPredictionUseCase()
        self.notifications = notifications or NotificationHub()

        self._dataset: Optional[IngestedDataset] = None
        self._model: Optional[Any] = None
        self._history: List[TrainingHistoryEntry] = []
        self._metrics: Optional[ModelMetrics] = None
        self._scatter: List[ScatterPoint] = []
        self._is_training = False

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def subscribe(
        self, event: SessionEvent, callback: Subscriber
    ) -> Callable[[], None]:
        return self.notifications.subscribe(event, callback)

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------
    @property
    def is_training(self) -> bool:
        return self._is_training

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @property
    def has_data(self) -> bool:
        return self._dataset is not None

    @property
    def player_name(self) -> Optional[str]:
        return self._dataset.player_name if self._dataset else None

    @property
    def summary(self) -> Optional[DataSummary]:
        return self._dataset.summary if self._dataset else None

    @property
    def metrics(self) -> Optional[ModelMetrics]:
        return self._metrics

    def records(self) -> List[DataPoint]:
        return list(self._dataset.records) if self._dataset else []

    def scalers(self) -> Dict[str, Scaler]:
        return self._dataset.scalers.snapshot() if self._dataset else {}

    def training_history(self) -> List[TrainingHistoryEntry]:
        return list(self._history)

    def scatter(self) -> List[ScatterPoint]:
        return list(self._scatter)

    def time_series(self) -> List[TimeSeriesPoint]:
        if not self._dataset:
            return []
        return [replace(point) for point in self._dataset.time_series]

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    def ingest(self, raw_text: str, filename: Optional[str] = None) -> DataSummary:
        """
        Replace the current dataset with the parsed content of ``raw_text``.

        The previous dataset is kept untouched if parsing fails. On success
        metrics and scatter are cleared; the model is kept but must be
        re-evaluated before its caches are trusted again.
        """
        self._ensure_idle("ingest a new dataset")

        dataset = self.ingestion.execute(raw_text, filename=filename)

        self._dataset = dataset
        self._metrics = None
        self._scatter = []

        logger.info(
            "session.dataset_replaced",
            records=dataset.size,
            player_name=dataset.player_name,
            model_kept=self._model is not None,
        )

        self.notifications.publish(SessionEvent.TIME_SERIES, self.time_series())
        return dataset.summary

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    async def train(
        self,
        config: Optional[TrainingConfig] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> TrainingOutcome:
        """
        Train a fresh model on the current dataset.

        Raises:
            TrainingInProgressError: When another run is active
            NoDataIngestedError: When nothing was ingested
            InvalidConfigError: When hyperparameters are out of range
            ModelTrainingError: When the backend fails; caches are cleared
        """
        config = config or TrainingConfig()
        self._ensure_idle("start another training run")
        if self._dataset is None:
            raise NoDataIngestedError("No processed data available for training")
        validate_training_configuration(config)

        dataset = self._dataset
        self._is_training = True
        self._model = None
        self._history = []

        try:
            model, outcome = await self.training.execute(
                features=dataset.features,
                labels=dataset.labels,
                config=config,
                on_epoch_end=self._on_epoch_end,
                on_checkpoint=self._run_checkpoint,
                cancellation_token=cancellation_token,
            )
        except Exception:
            self._reset_evaluation()
            raise
        finally:
            self._is_training = False

        self._model = model
        outcome.metrics = self._metrics

        logger.info(
            "session.training_finished",
            status=outcome.status.value,
            epochs_completed=outcome.epochs_completed,
        )
        return outcome

    def _on_epoch_end(self, history: List[TrainingHistoryEntry]) -> None:
        self._history = list(history)
        self.notifications.publish(SessionEvent.PROGRESS, self.training_history())

    def _run_checkpoint(self, model: Any) -> None:
        dataset = self._dataset
        if dataset is None:
            return

        result = self.evaluation.execute(
            model=model,
            features=dataset.features,
            labels=dataset.labels,
            time_series=dataset.time_series,
        )
        self._metrics = result.metrics
        self._scatter = result.scatter

        self.notifications.publish(SessionEvent.METRICS, self._metrics)
        self.notifications.publish(SessionEvent.SCATTER, self.scatter())
        self.notifications.publish(SessionEvent.TIME_SERIES, self.time_series())

    def _reset_evaluation(self) -> None:
        self._model = None
        self._metrics = None
        self._scatter = []
        if self._dataset is not None:
            for point in self._dataset.time_series:
                point.predicted_roi = None

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict(self, prediction_input: PredictionInput) -> float:
        self._ensure_idle("predict")
        return self.prediction.predict(
            self._model, self._current_scalers(), prediction_input
        )

    def predict_with_gain(self, prediction_input: PredictionInput) -> PredictionResult:
        self._ensure_idle("predict")
        return self.prediction.predict_with_gain(
            self._model, self._current_scalers(), prediction_input
        )

    def predict_future_periods(
        self, start: PredictionInput, month_count: int
    ) -> List[FuturePrediction]:
        self._ensure_idle("forecast")
        return self.prediction.predict_future_periods(
            self._model, self._current_scalers(), start, month_count
        )

    def default_prediction_input(self, today: Optional[date] = None) -> PredictionInput:
        return self.prediction.default_input(self.records(), today=today)

    def _current_scalers(self):
        return self._dataset.scalers if self._dataset else None

    def _ensure_idle(self, action: str) -> None:
        if self._is_training:
            logger.warning("session.rejected_while_training", action=action)
            raise TrainingInProgressError(
                f"Cannot {action} while a training run is in progress"
            )
