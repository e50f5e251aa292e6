"""Domain services: feature scaling and parameter validation."""

from .config_validator import validate_training_configuration
from .scaler_registry import FEATURE_NAMES, Scaler, ScalerRegistry

__all__ = [
    "FEATURE_NAMES",
    "Scaler",
    "ScalerRegistry",
    "validate_training_configuration",
]
