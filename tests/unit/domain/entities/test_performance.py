from __future__ import annotations

import pytest

from src.domain.entities.performance import (
    DataPoint,
    PredictionInput,
    format_month_label,
    next_month,
)


@pytest.mark.parametrize(
    "year, month, expected",
    [(2024, 1, (2024, 2)), (2024, 11, (2024, 12)), (2024, 12, (2025, 1))],
)
def test_next_month_rolls_over_year(year, month, expected) -> None:
    assert next_month(year, month) == expected


def test_month_labels_are_zero_padded() -> None:
    assert format_month_label(2024, 3) == "2024-03"
    point = DataPoint(year=2023, month=11, tournament_count=1, avg_buy_in=1, roi=0)
    assert point.month_label == "2023-11"
    prediction_input = PredictionInput(
        year=2025, month=1, tournament_count=10, avg_buy_in=5
    )
    assert prediction_input.month_label == "2025-01"
