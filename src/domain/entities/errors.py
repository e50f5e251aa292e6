"""
Domain Errors

This module defines custom error classes for domain-specific exceptions
raised by the ROI pipeline.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class MalformedInputError(DomainError):
    """Raised when an uploaded table or one of its rows cannot be parsed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class NoDataIngestedError(DomainError):
    """Raised when an operation needs a dataset and none was ingested."""

    def __init__(
        self,
        message: str = "No data has been ingested",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class ModelNotTrainedError(DomainError):
    """Raised when a prediction is requested before a model exists."""

    def __init__(
        self,
        message: str = "Model has not been trained",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class InvalidConfigError(DomainError):
    """Raised when training parameters fall outside their allowed ranges."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class TrainingInProgressError(DomainError):
    """Raised when a second training run, or a conflicting call, is attempted."""

    def __init__(
        self,
        message: str = "A training run is already in progress",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class ScalerNotInitializedError(DomainError):
    """Raised when the scaler registry is used before being fitted."""

    def __init__(
        self,
        message: str = "Scaler not initialized",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
