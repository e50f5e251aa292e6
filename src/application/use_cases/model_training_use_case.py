"""
Application Use Cases - Model Training

This module contains the use case for training the ROI regressor. It builds
and compiles the fixed feed-forward network, runs the epochs one at a time,
streams the per-epoch history and triggers metrics checkpoints. Control is
handed back to the event loop between epochs so the host can render progress
or request cancellation.
"""

import asyncio
import time
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import structlog
from tensorflow.keras.layers import (  # type: ignore
    BatchNormalization,
    Dense,
    Dropout,
    Input,
)
from tensorflow.keras.models import Sequential  # type: ignore
from tensorflow.keras.optimizers import Adam  # type: ignore

from src.application.models.cancellation import CancellationToken
from src.domain.entities.errors import NoDataIngestedError
from src.domain.entities.training import (
    TrainingConfig,
    TrainingHistoryEntry,
    TrainingOutcome,
    TrainingStatus,
    is_checkpoint_epoch,
)
from src.domain.services.config_validator import validate_training_configuration
from src.domain.services.scaler_registry import FEATURE_NAMES

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[List[TrainingHistoryEntry]], None]
CheckpointCallback = Callable[[Sequential], None]


class ModelTrainingError(Exception):
    """Exception raised when model training fails."""

    pass


class ModelTrainingUseCase:
    """Use case for training the ROI regression network."""

    def __init__(self, n_features: int = len(FEATURE_NAMES)):
        self.n_features = n_features

    async def execute(
        self,
        features: Optional[np.ndarray],
        labels: Optional[np.ndarray],
        config: TrainingConfig,
        on_epoch_end: Optional[ProgressCallback] = None,
        on_checkpoint: Optional[CheckpointCallback] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Tuple[Sequential, TrainingOutcome]:
        """
        Execute model training.

        Args:
            features: Normalized feature matrix, chronologically ordered
            labels: ROI labels aligned with ``features``
            config: Training hyperparameters
            on_epoch_end: Receives a copy of the full history after each epoch
            on_checkpoint: Receives the model whenever metrics must be recomputed
            cancellation_token: Checked before every epoch

        Returns:
            Tuple of (trained model, outcome)

        Raises:
            InvalidConfigError: When hyperparameters are out of range
            NoDataIngestedError: When there is nothing to train on
            ModelTrainingError: When the numeric backend fails
        """
        validate_training_configuration(config)

        if features is None or labels is None or len(features) == 0:
            raise NoDataIngestedError("No processed data available for training")

        start_time = time.time()
        x_train, y_train, validation_data = self._split(
            features, labels, config.validation_ratio
        )

        n_validation = 0 if validation_data is None else len(validation_data[0])

        logger.info(
            "training.started",
            epochs=config.epochs,
            batch_size=config.batch_size,
            learning_rate=config.learning_rate,
            train_samples=len(x_train),
            validation_samples=n_validation,
        )

        history: List[TrainingHistoryEntry] = []
        status = TrainingStatus.COMPLETED

        try:
            model = self._build_model(config=config)

            for epoch_index in range(config.epochs):
                if cancellation_token is not None and cancellation_token.cancelled:
                    status = TrainingStatus.CANCELLED
                    logger.info(
                        "training.cancelled",
                        epochs_completed=len(history),
                        reason=cancellation_token.reason,
                    )
                    break

                logs = self._run_epoch(
                    model=model,
                    x_train=x_train,
                    y_train=y_train,
                    validation_data=validation_data,
                    config=config,
                    epoch_index=epoch_index,
                )
                entry = TrainingHistoryEntry(
                    epoch=epoch_index + 1,
                    train_loss=self._last_value(logs, "loss"),
                    validation_loss=self._last_value(logs, "val_loss"),
                )
                history.append(entry)

                logger.debug(
                    "training.epoch_completed",
                    epoch=entry.epoch,
                    loss=entry.train_loss,
                    val_loss=entry.validation_loss,
                )

                if on_epoch_end is not None:
                    on_epoch_end(list(history))

                if on_checkpoint is not None and is_checkpoint_epoch(
                    epoch_index, config.epochs
                ):
                    on_checkpoint(model)

                await asyncio.sleep(0)

            if on_checkpoint is not None:
                on_checkpoint(model)

        except Exception as e:
            logger.error(
                "training.execution_failed",
                epochs_completed=len(history),
                error=str(e),
                exc_info=e,
            )
            raise ModelTrainingError(f"Model training failed: {str(e)}") from e

        finally:
            del x_train, y_train, validation_data

        logger.info(
            "training.finished",
            status=status.value,
            epochs_completed=len(history),
            training_duration=time.time() - start_time,
            final_loss=history[-1].train_loss if history else None,
            final_val_loss=history[-1].validation_loss if history else None,
        )

        return model, TrainingOutcome(
            status=status, epochs_completed=len(history), history=list(history)
        )

    @staticmethod
    def _split(
        features: np.ndarray, labels: np.ndarray, validation_ratio: float
    ) -> Tuple[np.ndarray, np.ndarray, Optional[Tuple[np.ndarray, np.ndarray]]]:
        """Hold out the trailing samples for validation, keeping temporal order."""

        x_all = np.asarray(features, dtype=np.float32)
        y_all = np.asarray(labels, dtype=np.float32).reshape(-1, 1)

        n = len(x_all)
        n_train = max(int(n * (1 - validation_ratio)), 1)
        if n_train >= n:
            return x_all, y_all, None

        return (
            x_all[:n_train],
            y_all[:n_train],
            (x_all[n_train:], y_all[n_train:]),
        )

    def _build_model(self, config: TrainingConfig) -> Sequential:
        """Build and compile the neural network model."""

        model = Sequential(
            [
                Input(shape=(self.n_features,)),
                Dense(64, activation="relu", kernel_initializer="he_normal"),
                BatchNormalization(),
                Dropout(0.3),
                Dense(32, activation="relu", kernel_initializer="he_normal"),
                Dropout(0.2),
                Dense(16, activation="relu", kernel_initializer="he_normal"),
                Dense(1),
            ]
        )

        model.compile(
            optimizer=Adam(learning_rate=config.learning_rate),
            loss="mean_squared_error",
            metrics=["mae"],
        )

        logger.info("training.model_built", total_params=model.count_params())

        return model

    @staticmethod
    def _run_epoch(
        model: Sequential,
        x_train: np.ndarray,
        y_train: np.ndarray,
        validation_data: Optional[Tuple[np.ndarray, np.ndarray]],
        config: TrainingConfig,
        epoch_index: int,
    ) -> Dict[str, List[float]]:
        """Run exactly one epoch and return the backend's history logs."""

        fit_history = model.fit(
            x_train,
            y_train,
            batch_size=config.batch_size,
            epochs=epoch_index + 1,
            initial_epoch=epoch_index,
            validation_data=validation_data,
            shuffle=False,  # Important for time series
            verbose=0,
        )
        return dict(fit_history.history or {})

    @staticmethod
    def _last_value(logs: Dict[str, List[float]], key: str) -> float:
        values = logs.get(key)
        if not values or values[-1] is None:
            return 0.0
        return float(values[-1])
