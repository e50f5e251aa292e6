"""
Application Use Cases - Data Ingestion

This module contains the use case that turns an uploaded monthly ROI export
into a typed, chronologically sorted dataset ready for training:
  - Parses the delimited text with pandas, all cells as text
  - Validates every row (period, numeric fields); one bad row fails all
  - Sorts by (year, month)
  - Fits the scaler registry and builds normalized features and raw labels
  - Computes the per-column summary and the initial time-series view
"""

import io
import math
import re
from dataclasses import asdict, dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd
import structlog

from src.domain.entities.errors import MalformedInputError
from src.domain.entities.performance import (
    DataPoint,
    DataSummary,
    FeatureSummary,
    TimeSeriesPoint,
)
from src.domain.services.scaler_registry import ScalerRegistry
from src.shared.consts import ROI_EXPORT_FILENAME_PATTERN

logger = structlog.get_logger(__name__)

EXPECTED_COLUMNS = 5
PERIOD_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


@dataclass
class IngestedDataset:
    """Everything derived from one successful ingestion."""

    player_name: Optional[str]
    records: List[DataPoint]
    features: np.ndarray
    labels: np.ndarray
    scalers: ScalerRegistry
    summary: DataSummary
    time_series: List[TimeSeriesPoint] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.records)


class DataIngestionUseCase:
    """Parses a monthly ROI export into an IngestedDataset."""

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def execute(self, raw_text: str, filename: Optional[str] = None) -> IngestedDataset:
        """
        Execute ingestion.

        Args:
            raw_text: Delimited text with a header row
            filename: Optional uploaded file name, used to recover the player

        Returns:
            The ingested dataset

        Raises:
            MalformedInputError: When the table or any row is invalid
        """
        frame = self._read_table(raw_text)

        logger.info(
            "ingestion.started",
            rows=len(frame),
            filename=filename,
        )

        records = [
            self._parse_row(row, row_number=index + 1)
            for index, row in enumerate(frame.itertuples(index=False, name=None))
        ]

        data = pd.DataFrame([asdict(r) for r in records])
        data = data.sort_values(["year", "month"], kind="stable").reset_index(
            drop=True
        )
        records = [
            DataPoint(
                year=int(row.year),
                month=int(row.month),
                tournament_count=float(row.tournament_count),
                avg_buy_in=float(row.avg_buy_in),
                roi=float(row.roi),
            )
            for row in data.itertuples(index=False)
        ]

        time_series = [
            TimeSeriesPoint(month_label=r.month_label, year=r.year, real_roi=r.roi)
            for r in records
        ]

        scalers = ScalerRegistry().fit(records)
        features = scalers.transform(records)
        labels = data["roi"].to_numpy(dtype=np.float64)
        summary = self._summarize(data)
        player_name = self._resolve_player_name(filename, frame)

        logger.info(
            "ingestion.completed",
            records=len(records),
            player_name=player_name,
            first_month=records[0].month_label,
            last_month=records[-1].month_label,
        )

        return IngestedDataset(
            player_name=player_name,
            records=records,
            features=features,
            labels=labels,
            scalers=scalers,
            summary=summary,
            time_series=time_series,
        )

    def _read_table(self, raw_text: str) -> pd.DataFrame:
        try:
            frame = pd.read_csv(
                io.StringIO(raw_text),
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError as e:
            raise MalformedInputError("Uploaded file is empty") from e
        except pd.errors.ParserError as e:
            raise MalformedInputError(f"Unreadable table: {e}") from e

        if frame.shape[1] < EXPECTED_COLUMNS:
            raise MalformedInputError(
                f"Expected {EXPECTED_COLUMNS} columns, found {frame.shape[1]}",
                details={"columns": list(frame.columns)},
            )
        if frame.empty:
            raise MalformedInputError("Uploaded file has no data rows")

        return frame.iloc[:, :EXPECTED_COLUMNS]

    def _parse_row(self, row: tuple, row_number: int) -> DataPoint:
        _, period, tournaments, buy_in, roi = row

        match = PERIOD_PATTERN.match(str(period))
        if not match:
            raise MalformedInputError(
                f"Malformed record in row {row_number}: invalid period '{period}'",
                details={"row": row_number, "field": "period"},
            )
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise MalformedInputError(
                f"Malformed record in row {row_number}: month {month} out of range",
                details={"row": row_number, "field": "period"},
            )

        return DataPoint(
            year=year,
            month=month,
            tournament_count=self._parse_number(
                tournaments, "tournament_count", row_number
            ),
            avg_buy_in=self._parse_number(buy_in, "avg_buy_in", row_number),
            roi=self._parse_number(roi, "roi", row_number),
        )

    @staticmethod
    def _parse_number(raw: str, field_name: str, row_number: int) -> float:
        try:
            value = float(str(raw).strip())
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            raise MalformedInputError(
                f"Malformed record in row {row_number}: "
                f"{field_name} '{raw}' is not a number",
                details={"row": row_number, "field": field_name},
            )
        return value

    @staticmethod
    def _summarize(data: pd.DataFrame) -> DataSummary:
        def column(name: str) -> FeatureSummary:
            return FeatureSummary(
                min=float(data[name].min()),
                max=float(data[name].max()),
                mean=float(data[name].mean()),
            )

        return DataSummary(
            tournament_count=column("tournament_count"),
            avg_buy_in=column("avg_buy_in"),
            roi=column("roi"),
        )

    @staticmethod
    def _resolve_player_name(
        filename: Optional[str], frame: pd.DataFrame
    ) -> Optional[str]:
        if filename:
            match = re.search(ROI_EXPORT_FILENAME_PATTERN, filename, re.IGNORECASE)
            if match:
                return match.group(1)

        first = str(frame.iloc[0, 0]).strip()
        return first or None
