from __future__ import annotations

import asyncio

import pytest

from src.application.session import PokerRoiSession
from src.domain.entities.training import TrainingConfig
from src.main.config import AppSettings
from src.main.container import app_lifespan, get_container, init_container
from tests.conftest import SAMPLE_ROWS, build_csv


@pytest.mark.asyncio
async def test_init_and_get_container() -> None:
    settings = AppSettings()
    container = init_container(settings)
    assert get_container() is container

    async with app_lifespan():
        pass


def test_session_is_a_singleton() -> None:
    container = init_container(AppSettings())

    session = container.session()

    assert isinstance(session, PokerRoiSession)
    assert container.session() is session
    assert container.training_management_use_case().session is session
    assert container.training_management_use_case() is (
        container.training_management_use_case()
    )


def test_settings_flow_into_components(monkeypatch) -> None:
    monkeypatch.setenv("PREDICTION_RECENT_WINDOW_MONTHS", "3")
    monkeypatch.setenv("TRAINING_EPOCHS", "25")
    container = init_container(AppSettings())

    assert container.session().prediction.recent_window_months == 3
    info = container.system_info()
    assert info.default_epochs == 25
    assert info.environment == "development"


@pytest.mark.asyncio
async def test_app_lifespan_cancels_active_training(stub_models) -> None:
    container = init_container(AppSettings())
    container.session().ingest(build_csv(SAMPLE_ROWS))
    manager = container.training_management_use_case()

    async with app_lifespan():
        await manager.start(TrainingConfig(epochs=500, batch_size=8))
        await asyncio.sleep(0)

    assert not manager.is_running
    assert manager.status().status.value == "cancelled"


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("src.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
