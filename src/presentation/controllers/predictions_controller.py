"""
Presentation Layer - Predictions Controller

Exposes endpoints to predict the ROI of a month and to forecast several
consecutive months with the trained model.
"""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException

from src.application.dtos.prediction_dto import (
    ForecastRequestDTO,
    ForecastResponseDTO,
    FuturePredictionDTO,
    PredictionInputDTO,
    PredictionParametersDTO,
    PredictionResponseDTO,
)
from src.application.session import PokerRoiSession
from src.application.use_cases.model_prediction_use_case import ModelPredictionError
from src.domain.entities.errors import DomainError, ModelNotTrainedError
from src.main.container import AppContainer

from .error_mapping import to_http_exception

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/predictions", tags=["Predictions"])


@router.get(
    "/defaults",
    response_model=PredictionParametersDTO,
    summary="Get default prediction parameters",
    description="""
    Current year and month, with tournament count and average buy-in taken
    from the most recent months of the dataset.
    """,
)
@inject
async def get_prediction_defaults(
    session: PokerRoiSession = Depends(Provide[AppContainer.session]),
) -> PredictionParametersDTO:
    return PredictionParametersDTO.from_entity(session.default_prediction_input())


@router.post(
    "",
    response_model=PredictionResponseDTO,
    summary="Predict the ROI of one month",
)
@inject
async def predict(
    request: PredictionInputDTO,
    session: PokerRoiSession = Depends(Provide[AppContainer.session]),
) -> PredictionResponseDTO:
    prediction_input = request.to_entity()
    try:
        result = session.predict_with_gain(prediction_input)
        return PredictionResponseDTO.from_result(result, prediction_input)
    except DomainError as exc:
        logger.warning("prediction.rejected", error=exc.message)
        raise to_http_exception(exc) from exc
    except ModelPredictionError as exc:
        logger.error("prediction.failed", error=str(exc))
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("prediction.unexpected_error", error=str(exc), exc_info=exc)
        raise HTTPException(status_code=500, detail="Internal server error") from exc


@router.post(
    "/forecast",
    response_model=ForecastResponseDTO,
    summary="Forecast consecutive months",
    description="""
    Predict `month_count` consecutive months starting at the given month.
    Tournament count and buy-in are held constant. The list can be shorter
    than requested when a prediction fails midway.
    """,
)
@inject
async def forecast(
    request: ForecastRequestDTO,
    session: PokerRoiSession = Depends(Provide[AppContainer.session]),
) -> ForecastResponseDTO:
    try:
        predictions = session.predict_future_periods(
            request.to_entity(), request.month_count
        )
        if not predictions and not session.is_trained:
            raise ModelNotTrainedError()
    except DomainError as exc:
        logger.warning("forecast.rejected", error=exc.message)
        raise to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("forecast.unexpected_error", error=str(exc), exc_info=exc)
        raise HTTPException(status_code=500, detail="Internal server error") from exc

    return ForecastResponseDTO(
        requested_months=request.month_count,
        predictions=[FuturePredictionDTO.from_entity(p) for p in predictions],
    )
