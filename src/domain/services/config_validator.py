"""Domain service helpers for validating training and prediction parameters."""

from typing import List, Tuple

from src.domain.entities.errors import InvalidConfigError
from src.domain.entities.training import (
    BATCH_SIZE_RANGE,
    EPOCHS_RANGE,
    LEARNING_RATE_RANGE,
    VALIDATION_RATIO_RANGE,
    TrainingConfig,
)


def _check_range(
    label: str, value: float, bounds: Tuple[float, float], errors: List[str]
) -> None:
    low, high = bounds
    if not low <= value <= high:
        errors.append(f"{label} must be between {low} and {high} (got {value}).")


def validate_training_configuration(config: TrainingConfig) -> None:
    """Validate the hyperparameters of a training run.

    Raises:
        InvalidConfigError: If one or more validation rules fail.
    """

    errors: List[str] = []

    if isinstance(config.epochs, bool) or not isinstance(config.epochs, int):
        errors.append("Number of epochs must be an integer.")
    else:
        _check_range("Number of epochs", config.epochs, EPOCHS_RANGE, errors)

    if isinstance(config.batch_size, bool) or not isinstance(config.batch_size, int):
        errors.append("Batch size must be an integer.")
    else:
        _check_range("Batch size", config.batch_size, BATCH_SIZE_RANGE, errors)

    _check_range("Learning rate", config.learning_rate, LEARNING_RATE_RANGE, errors)
    _check_range(
        "Validation ratio", config.validation_ratio, VALIDATION_RATIO_RANGE, errors
    )

    if errors:
        raise InvalidConfigError(
            "Training configuration is invalid", details={"errors": errors}
        )
