from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import numpy as np
import pytest

from src.application.models import NotificationHub
from src.application.session import PokerRoiSession
from src.application.use_cases.model_training_use_case import ModelTrainingUseCase
from src.domain.entities.training import TrainingConfig

HEADER = "Jogador,Periodo,Torneios,ABI Medio,ROI Medio"

SAMPLE_ROWS = [
    ("alice", "2023-01", 80, 10.0, 12.5),
    ("alice", "2023-02", 100, 12.0, -4.0),
    ("alice", "2023-03", 120, 11.0, 7.5),
    ("alice", "2023-04", 90, 15.0, 20.0),
    ("alice", "2023-05", 110, 14.0, -10.0),
    ("alice", "2023-06", 95, 13.0, 3.0),
    ("alice", "2023-07", 130, 9.0, 15.0),
    ("alice", "2023-08", 70, 22.0, -2.5),
    ("alice", "2023-09", 105, 18.0, 8.0),
    ("alice", "2023-10", 115, 16.0, 11.0),
    ("alice", "2023-11", 85, 20.0, -6.0),
    ("alice", "2023-12", 125, 17.0, 4.5),
]


def build_csv(rows, header: str = HEADER) -> str:
    lines = [header]
    for row in rows:
        lines.append(",".join(str(value) for value in row))
    return "\n".join(lines) + "\n"


class StubModel:
    """Stands in for a compiled Keras model in unit tests."""

    def __init__(
        self, prediction: float = 1.0, fail_predict_after: Optional[int] = None
    ):
        self.prediction = prediction
        self.fail_predict_after = fail_predict_after
        self.fit_calls: List[Dict[str, Any]] = []
        self.predict_calls = 0

    def fit(self, x, y, **kwargs):
        self.fit_calls.append({"x": x, "y": y, **kwargs})
        epoch = kwargs["epochs"]
        history = {"loss": [1.0 / epoch]}
        if kwargs.get("validation_data") is not None:
            history["val_loss"] = [2.0 / epoch]
        return SimpleNamespace(history=history)

    def predict(self, x, verbose=0):
        self.predict_calls += 1
        if (
            self.fail_predict_after is not None
            and self.predict_calls > self.fail_predict_after
        ):
            raise RuntimeError("backend failure")
        return np.full((np.asarray(x).shape[0], 1), self.prediction, dtype=np.float32)


@pytest.fixture()
def sample_csv() -> str:
    return build_csv(SAMPLE_ROWS)


@pytest.fixture()
def stub_models(monkeypatch) -> List[StubModel]:
    """Replace the Keras network with StubModel; returns every built model."""
    built: List[StubModel] = []

    def _build(self, config: TrainingConfig) -> StubModel:
        model = StubModel()
        built.append(model)
        return model

    monkeypatch.setattr(ModelTrainingUseCase, "_build_model", _build)
    return built


@pytest.fixture()
def session() -> PokerRoiSession:
    return PokerRoiSession(notifications=NotificationHub())


@pytest.fixture()
def loaded_session(session: PokerRoiSession, sample_csv: str) -> PokerRoiSession:
    session.ingest(sample_csv, filename="resultado_roi_mensal_alice.csv")
    return session


@pytest.fixture()
def fast_config() -> TrainingConfig:
    return TrainingConfig(
        epochs=10, batch_size=8, learning_rate=0.01, validation_ratio=0.2
    )
