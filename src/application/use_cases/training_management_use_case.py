"""
Application Use Cases - Training Management

Runs a single background training task on the shared session and keeps the
bookkeeping (timestamps, final outcome, failure reason) that the status
endpoint reports.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import structlog

from src.application.dtos.training_dto import (
    StartTrainingResponseDTO,
    TrainingHistoryEntryDTO,
    TrainingMetricsDTO,
    TrainingStatusDTO,
)
from src.application.models.cancellation import CancellationToken
from src.domain.entities.errors import NoDataIngestedError, TrainingInProgressError
from src.domain.entities.training import (
    TrainingConfig,
    TrainingOutcome,
    TrainingStatus,
)
from src.domain.services.config_validator import validate_training_configuration

if TYPE_CHECKING:
    from src.application.session import PokerRoiSession

logger = structlog.get_logger(__name__)


class TrainingManagementUseCase:
    """Use case for starting, cancelling and inspecting training runs."""

    def __init__(self, session: "PokerRoiSession"):
        self.session = session
        self._task: Optional[asyncio.Task] = None
        self._token: Optional[CancellationToken] = None
        self._config: Optional[TrainingConfig] = None
        self._outcome: Optional[TrainingOutcome] = None
        self._error: Optional[str] = None
        self._start_time: Optional[datetime] = None
        self._end_time: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, config: TrainingConfig) -> StartTrainingResponseDTO:
        """
        Schedule a training run in the background.

        Preconditions are checked synchronously so that the caller gets an
        immediate error instead of a failed background task.

        Raises:
            TrainingInProgressError: When a run is already active
            NoDataIngestedError: When nothing was ingested
            InvalidConfigError: When hyperparameters are out of range
        """
        if self.is_running or self.session.is_training:
            raise TrainingInProgressError()
        if not self.session.has_data:
            raise NoDataIngestedError("No processed data available for training")
        validate_training_configuration(config)

        self._token = CancellationToken()
        self._config = config
        self._outcome = None
        self._error = None
        self._start_time = datetime.now(timezone.utc)
        self._end_time = None

        self._task = asyncio.create_task(self._run(config, self._token))

        logger.info(
            "training.scheduled",
            epochs=config.epochs,
            batch_size=config.batch_size,
            learning_rate=config.learning_rate,
            validation_ratio=config.validation_ratio,
        )
        return StartTrainingResponseDTO(epochs_requested=config.epochs)

    async def _run(self, config: TrainingConfig, token: CancellationToken) -> None:
        try:
            self._outcome = await self.session.train(config, cancellation_token=token)
        except Exception as e:
            self._error = str(e)
            logger.error("training.background_failed", error=str(e), exc_info=True)
        finally:
            self._end_time = datetime.now(timezone.utc)

    def cancel(self) -> bool:
        """Request cancellation of the active run. Returns False when idle."""
        if not self.is_running or self._token is None:
            return False
        self._token.cancel()
        logger.info("training.cancel_requested")
        return True

    async def wait(self) -> None:
        """Wait for the active run, if any, to finish."""
        if self._task is not None:
            await asyncio.shield(self._task)

    def status(self) -> TrainingStatusDTO:
        history = [
            TrainingHistoryEntryDTO.from_entity(entry)
            for entry in self.session.training_history()
        ]
        metrics = self.session.metrics

        return TrainingStatusDTO(
            status=self._current_status(),
            epochs_requested=self._config.epochs if self._config else None,
            epochs_completed=len(history),
            history=history,
            metrics=TrainingMetricsDTO.from_entity(metrics) if metrics else None,
            start_time=self._start_time,
            end_time=self._end_time,
            error=self._error,
        )

    def _current_status(self) -> TrainingStatus:
        if self.is_running or self.session.is_training:
            return TrainingStatus.TRAINING
        if self._error is not None:
            return TrainingStatus.FAILED
        if self._outcome is not None:
            return self._outcome.status
        return TrainingStatus.IDLE
