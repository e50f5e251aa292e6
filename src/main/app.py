"""
Main Application - Main Layer

Builds the FastAPI application serving the ROI dashboard: dataset upload,
background training, evaluation snapshots and predictions.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.main.config import get_settings
from src.main.container import app_lifespan, init_container
from src.presentation.controllers import (
    dataset_router,
    predictions_router,
    system_router,
    training_router,
)
from src.shared import configure_logging, get_logger, update_logging_from_settings

# Bootstrap logging from the environment so that settings errors are visible
configure_logging()
settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Record the start time and hold the container resources open."""
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("app.startup", environment=settings.environment.value)

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("app.shutdown")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    A fresh container (and therefore a fresh session) is created on every
    call, which keeps test clients isolated from each other.
    """
    settings = get_settings()
    init_container(settings)

    app = FastAPI(
        title=settings.api.title,
        description=settings.api.description,
        version=settings.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # The dashboard front-end is served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (dataset_router, training_router, predictions_router, system_router):
        app.include_router(router)

    return app


app = create_app()
