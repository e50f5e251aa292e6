"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

import asyncio
from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.models import NotificationHub, SystemInfo
from src.application.session import PokerRoiSession
from src.application.use_cases.data_ingestion_use_case import DataIngestionUseCase
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.application.use_cases.model_evaluation_use_case import (
    ModelEvaluationUseCase,
)
from src.application.use_cases.model_prediction_use_case import ModelPredictionUseCase
from src.application.use_cases.model_training_use_case import ModelTrainingUseCase
from src.application.use_cases.training_management_use_case import (
    TrainingManagementUseCase,
)
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Pipeline components
    notification_hub = providers.Singleton(NotificationHub)

    data_ingestion_use_case = providers.Factory(DataIngestionUseCase)

    model_training_use_case = providers.Factory(ModelTrainingUseCase)

    model_evaluation_use_case = providers.Factory(ModelEvaluationUseCase)

    model_prediction_use_case = providers.Factory(
        ModelPredictionUseCase,
        recent_window_months=config.prediction.recent_window_months,
    )

    # One session per process: all pipeline state lives here
    session = providers.Singleton(
        PokerRoiSession,
        ingestion_use_case=data_ingestion_use_case,
        training_use_case=model_training_use_case,
        evaluation_use_case=model_evaluation_use_case,
        prediction_use_case=model_prediction_use_case,
        notifications=notification_hub,
    )

    training_management_use_case = providers.Singleton(
        TrainingManagementUseCase,
        session=session,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        default_epochs=config.training.epochs,
        default_batch_size=config.training.batch_size,
        default_learning_rate=config.training.learning_rate,
        default_validation_ratio=config.training.validation_ratio,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        session=session,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for in-process resources.

    The session is created eagerly so that the first request does not pay
    for it. On shutdown an active training run is cancelled and awaited.
    """
    container = get_container()

    session = container.session()
    training_manager = container.training_management_use_case()

    try:
        logger.info("container.resources.initialized", has_data=session.has_data)
        yield container

    finally:
        if training_manager.cancel():
            logger.info("container.training.cancel_on_shutdown")
            try:
                await training_manager.wait()
            except asyncio.CancelledError:
                logger.warning("container.training.wait_interrupted")

        logger.info("container.resources.shutdown")
