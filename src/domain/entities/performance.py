"""
Domain Entities - Player Performance

Monthly performance records uploaded by a player, the statistical summary
derived from them and the calendar helpers used to label and advance months.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


def format_month_label(year: int, month: int) -> str:
    """Return the ``YYYY-MM`` label for a calendar month."""
    return f"{year}-{month:02d}"


def next_month(year: int, month: int) -> Tuple[int, int]:
    """Advance one calendar month, rolling December into January."""
    if month >= 12:
        return year + 1, 1
    return year, month + 1


@dataclass(frozen=True)
class DataPoint:
    """One observed month for one player."""

    year: int
    month: int
    tournament_count: float
    avg_buy_in: float
    roi: float

    @property
    def month_label(self) -> str:
        return format_month_label(self.year, self.month)


@dataclass(frozen=True)
class FeatureSummary:
    """Minimum, maximum and arithmetic mean of one column."""

    min: float
    max: float
    mean: float


@dataclass(frozen=True)
class DataSummary:
    """Per-column summary of an ingested dataset."""

    tournament_count: FeatureSummary
    avg_buy_in: FeatureSummary
    roi: FeatureSummary


@dataclass
class TimeSeriesPoint:
    """Real ROI for a month and, once evaluated, the model's prediction."""

    month_label: str
    year: int
    real_roi: float
    predicted_roi: Optional[float] = None


@dataclass(frozen=True)
class PredictionInput:
    """Parameters for a single ROI prediction."""

    year: int
    month: int
    tournament_count: float
    avg_buy_in: float

    @property
    def month_label(self) -> str:
        return format_month_label(self.year, self.month)


@dataclass(frozen=True)
class PredictionResult:
    """Predicted ROI (percent) and the gain it implies in buy-in units."""

    roi: float
    estimated_gain: float


@dataclass(frozen=True)
class FuturePrediction:
    """Forecast for a month after the start of a forecast run."""

    month_label: str
    roi: float
