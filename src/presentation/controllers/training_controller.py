"""
Presentation Layer - Training Controller

This module contains the FastAPI controller for training operations.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from src.application.dtos.training_dto import (
    StartTrainingResponseDTO,
    TrainingRequestDTO,
    TrainingStatusDTO,
)
from src.application.models import SystemInfo
from src.application.use_cases.training_management_use_case import (
    TrainingManagementUseCase,
)
from src.domain.entities.errors import DomainError
from src.main.container import AppContainer

from .error_mapping import to_http_exception

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/training", tags=["training"])


@router.post(
    "",
    response_model=StartTrainingResponseDTO,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Start model training",
    description="""
    Train a fresh network on the ingested dataset.

    The run happens in the background; progress, metrics and the final
    status are available from `GET /training`. Only one run can be active
    at a time.
    """,
)
@inject
async def start_training(
    request: Optional[TrainingRequestDTO] = None,
    training_use_case: TrainingManagementUseCase = Depends(
        Provide[AppContainer.training_management_use_case]
    ),
    system_info: SystemInfo = Depends(Provide[AppContainer.system_info]),
) -> StartTrainingResponseDTO:
    """Start training the model; an empty body uses the default hyperparameters."""
    request = request or TrainingRequestDTO(
        epochs=system_info.default_epochs,
        batch_size=system_info.default_batch_size,
        learning_rate=system_info.default_learning_rate,
        validation_ratio=system_info.default_validation_ratio,
    )
    try:
        logger.info(
            "training.start.requested",
            epochs=request.epochs,
            batch_size=request.batch_size,
        )
        return await training_use_case.start(request.to_config())

    except DomainError as e:
        logger.warning("training.start.rejected", error=e.message)
        raise to_http_exception(e) from e

    except Exception as e:
        logger.error("training.start.unexpected_error", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error") from e


@router.get(
    "",
    response_model=TrainingStatusDTO,
    summary="Get training status",
    description="Status, per-epoch history and latest metrics of the last run.",
)
@inject
async def get_training_status(
    training_use_case: TrainingManagementUseCase = Depends(
        Provide[AppContainer.training_management_use_case]
    ),
) -> TrainingStatusDTO:
    return training_use_case.status()


@router.post(
    "/cancel",
    summary="Cancel training",
    description="""
    Request cancellation of the active run. The run stops at the next epoch
    boundary and keeps the model trained so far.
    """,
)
@inject
async def cancel_training(
    training_use_case: TrainingManagementUseCase = Depends(
        Provide[AppContainer.training_management_use_case]
    ),
) -> dict:
    """Cancel the active training run."""
    if not training_use_case.cancel():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": "No training run is in progress"},
        )
    return {"message": "Training cancellation requested"}
