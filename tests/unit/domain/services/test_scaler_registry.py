from __future__ import annotations

import math

import numpy as np
import pytest

from src.domain.entities.errors import MalformedInputError, ScalerNotInitializedError
from src.domain.entities.performance import DataPoint
from src.domain.services.scaler_registry import FEATURE_NAMES, ScalerRegistry


def _records():
    return [
        DataPoint(year=2023, month=1, tournament_count=80, avg_buy_in=10, roi=5),
        DataPoint(year=2023, month=6, tournament_count=100, avg_buy_in=20, roi=-1),
        DataPoint(year=2024, month=12, tournament_count=120, avg_buy_in=30, roi=2),
    ]


def test_fit_records_ranges_per_feature() -> None:
    registry = ScalerRegistry().fit(_records())

    snapshot = registry.snapshot()
    assert set(snapshot) == set(FEATURE_NAMES)
    assert snapshot["tournament_count"].min == 80
    assert snapshot["tournament_count"].max == 120
    assert snapshot["month"].min == 1
    assert snapshot["month"].max == 12


@pytest.mark.parametrize("feature", FEATURE_NAMES)
def test_normalize_round_trip(feature: str) -> None:
    registry = ScalerRegistry().fit(_records())
    scaler = registry.snapshot()[feature]
    value = (scaler.min + scaler.max) / 2

    normalized = registry.normalize(value, feature)

    assert 0.0 <= normalized <= 1.0
    assert registry.denormalize(normalized, feature) == pytest.approx(value)


def test_degenerate_feature_normalizes_to_zero() -> None:
    records = [
        DataPoint(year=2024, month=m, tournament_count=50, avg_buy_in=11, roi=1)
        for m in (1, 2, 3)
    ]
    registry = ScalerRegistry().fit(records)

    assert registry.snapshot()["year"].is_degenerate
    assert registry.normalize(2024, "year") == 0.0
    assert registry.normalize(2030, "year") == 0.0
    assert registry.denormalize(0.7, "year") == 2024

    features = registry.transform(records)
    assert not np.isnan(features).any()
    assert np.all(features[:, 0] == 0.0)
    assert np.all(features[:, 2] == 0.0)


def test_transform_matches_normalize_row() -> None:
    records = _records()
    registry = ScalerRegistry().fit(records)

    features = registry.transform(records)

    assert features.shape == (3, 4)
    assert features.dtype == np.float32
    expected = registry.normalize_row(2023, 6, 100, 20)
    np.testing.assert_allclose(features[1], expected, rtol=1e-6)


def test_unfitted_registry_raises() -> None:
    registry = ScalerRegistry()

    assert registry.is_fitted is False
    with pytest.raises(ScalerNotInitializedError):
        registry.normalize(1.0, "year")
    with pytest.raises(ScalerNotInitializedError):
        registry.transform(_records())


def test_unknown_feature_raises_value_error() -> None:
    registry = ScalerRegistry().fit(_records())
    with pytest.raises(ValueError):
        registry.normalize(1.0, "roi")


def test_fit_on_empty_records_raises() -> None:
    with pytest.raises(MalformedInputError):
        ScalerRegistry().fit([])


def test_refit_replaces_previous_state() -> None:
    registry = ScalerRegistry().fit(_records())
    registry.fit(
        [DataPoint(year=2020, month=1, tournament_count=1, avg_buy_in=1, roi=0)]
    )
    assert registry.snapshot()["year"].max == 2020
    assert math.isclose(registry.normalize(2020, "year"), 0.0)
