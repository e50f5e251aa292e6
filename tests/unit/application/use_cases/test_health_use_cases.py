from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.application.models import SystemInfo
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)


def _system_info() -> SystemInfo:
    return SystemInfo(
        title="Poker ROI",
        description="desc",
        version="1.2.3",
        environment="testing",
        default_epochs=150,
        default_batch_size=32,
        default_learning_rate=0.001,
        default_validation_ratio=0.2,
    )


@pytest.mark.asyncio
async def test_health_reflects_session_state(loaded_session) -> None:
    health = await GetHealthStatusUseCase(loaded_session).execute()

    assert health.status == "up"
    assert health.has_data is True
    assert health.is_trained is False
    assert health.is_training is False


@pytest.mark.asyncio
async def test_application_info_reports_uptime_and_defaults() -> None:
    started_at = datetime.now(timezone.utc) - timedelta(seconds=30)

    info = await GetApplicationInfoUseCase(_system_info()).execute(started_at)

    assert info.name == "Poker ROI"
    assert info.version == "1.2.3"
    assert info.uptime_seconds >= 30
    assert info.training_defaults["epochs"] == 150
    assert info.training_defaults["validation_ratio"] == 0.2


@pytest.mark.asyncio
async def test_application_info_without_start_time() -> None:
    info = await GetApplicationInfoUseCase(_system_info()).execute(None)
    assert info.uptime_seconds == pytest.approx(0.0, abs=1.0)
