"""Use cases for health and application info endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from src.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from src.application.models import SystemInfo

if TYPE_CHECKING:
    from src.application.session import PokerRoiSession


class GetHealthStatusUseCase:
    """Use case responsible for returning health status."""

    def __init__(self, session: "PokerRoiSession") -> None:
        self._session = session

    async def execute(self) -> SystemHealthDTO:
        return SystemHealthDTO(
            status="up",
            has_data=self._session.has_data,
            is_trained=self._session.is_trained,
            is_training=self._session.is_training,
        )


class GetApplicationInfoUseCase:
    """Use case responsible for returning application info."""

    def __init__(self, system_info: SystemInfo) -> None:
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        now = datetime.now(timezone.utc)
        started = started_at or now
        uptime_seconds = max(0.0, (now - started).total_seconds())

        return ApplicationInfoDTO(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            started_at=started,
            uptime_seconds=uptime_seconds,
            training_defaults={
                "epochs": self._info.default_epochs,
                "batch_size": self._info.default_batch_size,
                "learning_rate": self._info.default_learning_rate,
                "validation_ratio": self._info.default_validation_ratio,
            },
        )
