"""
Presentation Layer - Dataset Controller

Upload of monthly ROI exports and read access to the ingested dataset.
"""

from typing import List

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from src.application.dtos.dataset_dto import (
    DataPointDTO,
    DatasetDTO,
    DatasetUploadResponseDTO,
    DataSummaryDTO,
    EvaluationDTO,
    TimeSeriesPointDTO,
)
from src.application.session import PokerRoiSession
from src.domain.entities.errors import DomainError
from src.main.container import AppContainer

from .error_mapping import to_http_exception

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["dataset"])


@router.post(
    "/dataset",
    response_model=DatasetUploadResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a monthly ROI export",
    description="""
    Replace the current dataset with the uploaded CSV file.

    Expected columns, in order: player name, period `YYYY-MM`, tournament
    count, average buy-in and ROI in percent. Files named
    `resultado_roi_mensal_<name>.csv` override the player name of the rows.
    """,
)
@inject
async def upload_dataset(
    file: UploadFile = File(...),
    session: PokerRoiSession = Depends(Provide[AppContainer.session]),
) -> DatasetUploadResponseDTO:
    """Ingest an uploaded CSV file."""
    try:
        content = await file.read()
        raw_text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("dataset.upload.decode_failed", filename=file.filename)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Uploaded file is not valid UTF-8 text"},
        ) from e

    try:
        summary = session.ingest(raw_text, filename=file.filename)
        records = session.records()

        logger.info(
            "dataset.upload.success",
            filename=file.filename,
            records=len(records),
        )

        return DatasetUploadResponseDTO(
            player_name=session.player_name,
            records=len(records),
            first_month=records[0].month_label,
            last_month=records[-1].month_label,
            summary=DataSummaryDTO.from_entity(summary),
        )

    except DomainError as e:
        logger.warning(
            "dataset.upload.rejected", filename=file.filename, error=e.message
        )
        raise to_http_exception(e) from e

    except Exception as e:
        logger.error(
            "dataset.upload.unexpected_error",
            filename=file.filename,
            error=str(e),
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail="Internal server error") from e


@router.get(
    "/dataset",
    response_model=DatasetDTO,
    summary="Get the ingested dataset",
)
@inject
async def get_dataset(
    session: PokerRoiSession = Depends(Provide[AppContainer.session]),
) -> DatasetDTO:
    """Return the ingested records and their summary."""
    summary = session.summary
    return DatasetDTO(
        player_name=session.player_name,
        records=[DataPointDTO.from_entity(r) for r in session.records()],
        summary=DataSummaryDTO.from_entity(summary) if summary else None,
    )


@router.get(
    "/dataset/time-series",
    response_model=List[TimeSeriesPointDTO],
    summary="Get the ROI time series",
    description="""
    Real ROI per month and, once a checkpoint has run, the model prediction
    for the same month.
    """,
)
@inject
async def get_time_series(
    session: PokerRoiSession = Depends(Provide[AppContainer.session]),
) -> List[TimeSeriesPointDTO]:
    return [TimeSeriesPointDTO.from_entity(p) for p in session.time_series()]


@router.get(
    "/evaluation",
    response_model=EvaluationDTO,
    summary="Get the latest evaluation",
    description="Metrics and real-vs-predicted scatter of the last checkpoint.",
)
@inject
async def get_evaluation(
    session: PokerRoiSession = Depends(Provide[AppContainer.session]),
) -> EvaluationDTO:
    return EvaluationDTO.from_entities(session.metrics, session.scatter())
