"""Translation of domain errors into HTTP responses."""

from typing import Any, Dict

from fastapi import HTTPException, status

from src.domain.entities.errors import (
    DomainError,
    InvalidConfigError,
    MalformedInputError,
    ModelNotTrainedError,
    NoDataIngestedError,
    ScalerNotInitializedError,
    TrainingInProgressError,
)

_STATUS_BY_ERROR = (
    (MalformedInputError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidConfigError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NoDataIngestedError, status.HTTP_400_BAD_REQUEST),
    (ModelNotTrainedError, status.HTTP_400_BAD_REQUEST),
    (ScalerNotInitializedError, status.HTTP_400_BAD_REQUEST),
    (TrainingInProgressError, status.HTTP_409_CONFLICT),
)


def to_http_exception(error: DomainError) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            status_code = code
            break

    detail: Dict[str, Any] = {"message": error.message}
    if error.details:
        detail["details"] = error.details
    return HTTPException(status_code=status_code, detail=detail)
