"""Min/max scaling of the model's input features."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np

from src.domain.entities.errors import MalformedInputError, ScalerNotInitializedError
from src.domain.entities.performance import DataPoint

FEATURE_NAMES = ("year", "month", "tournament_count", "avg_buy_in")


@dataclass(frozen=True)
class Scaler:
    """Observed range of one feature."""

    min: float
    max: float

    @property
    def is_degenerate(self) -> bool:
        return self.max == self.min


class ScalerRegistry:
    """
    Tracks the min/max of every feature of an ingested dataset.

    Values are mapped linearly into [0, 1]. A feature whose values are all
    equal is degenerate: it normalizes to 0 and denormalizes to its single
    observed value.
    """

    def __init__(self) -> None:
        self._scalers: Dict[str, Scaler] = {}

    @property
    def is_fitted(self) -> bool:
        return bool(self._scalers)

    def fit(self, records: Sequence[DataPoint]) -> "ScalerRegistry":
        """Replace any previous state with the ranges of ``records``."""
        if not records:
            raise MalformedInputError("Cannot fit scalers on an empty dataset")

        matrix = self._raw_matrix(records)
        mins = matrix.min(axis=0)
        maxs = matrix.max(axis=0)
        self._scalers = {
            name: Scaler(min=float(mins[idx]), max=float(maxs[idx]))
            for idx, name in enumerate(FEATURE_NAMES)
        }
        return self

    def normalize(self, value: float, feature: str) -> float:
        scaler = self._get(feature)
        if scaler.is_degenerate:
            return 0.0
        return (value - scaler.min) / (scaler.max - scaler.min)

    def denormalize(self, value: float, feature: str) -> float:
        scaler = self._get(feature)
        if scaler.is_degenerate:
            return scaler.min
        return value * (scaler.max - scaler.min) + scaler.min

    def normalize_row(
        self, year: float, month: float, tournament_count: float, avg_buy_in: float
    ) -> np.ndarray:
        """Normalize a single feature vector in model input order."""
        values = (year, month, tournament_count, avg_buy_in)
        return np.array(
            [self.normalize(v, name) for v, name in zip(values, FEATURE_NAMES)],
            dtype=np.float32,
        )

    def transform(self, records: Sequence[DataPoint]) -> np.ndarray:
        """Return the normalized ``(n, 4)`` feature matrix for ``records``."""
        if not self.is_fitted:
            raise ScalerNotInitializedError()

        matrix = self._raw_matrix(records)
        mins = np.array([self._scalers[n].min for n in FEATURE_NAMES])
        spans = np.array(
            [self._scalers[n].max - self._scalers[n].min for n in FEATURE_NAMES]
        )
        degenerate = spans == 0
        safe_spans = np.where(degenerate, 1.0, spans)
        scaled = (matrix - mins) / safe_spans
        scaled[:, degenerate] = 0.0
        return scaled.astype(np.float32)

    def snapshot(self) -> Dict[str, Scaler]:
        return dict(self._scalers)

    def _get(self, feature: str) -> Scaler:
        if not self.is_fitted:
            raise ScalerNotInitializedError()
        try:
            return self._scalers[feature]
        except KeyError:
            raise ValueError(f"Unknown feature '{feature}'") from None

    @staticmethod
    def _raw_matrix(records: Sequence[DataPoint]) -> np.ndarray:
        return np.array(
            [
                [r.year, r.month, r.tournament_count, r.avg_buy_in]
                for r in records
            ],
            dtype=np.float64,
        ).reshape(-1, len(FEATURE_NAMES))
