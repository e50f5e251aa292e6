from __future__ import annotations

import numpy as np
import pytest

from src.application.use_cases.data_ingestion_use_case import DataIngestionUseCase
from src.domain.entities.errors import MalformedInputError
from tests.conftest import HEADER, build_csv


def test_rows_are_sorted_chronologically() -> None:
    raw = build_csv(
        [
            ("bob", "2024-03", 120, 30.0, 9.0),
            ("bob", "2023-01", 80, 10.0, -3.0),
            ("bob", "2024-01", 100, 20.0, 4.0),
        ]
    )

    dataset = DataIngestionUseCase().execute(raw)

    assert [r.month_label for r in dataset.records] == [
        "2023-01",
        "2024-01",
        "2024-03",
    ]
    assert [p.month_label for p in dataset.time_series] == [
        "2023-01",
        "2024-01",
        "2024-03",
    ]
    np.testing.assert_allclose(dataset.labels, [-3.0, 4.0, 9.0])
    # Tournament count column follows the same order as the labels
    np.testing.assert_allclose(dataset.features[:, 2], [0.0, 0.5, 1.0])
    assert all(p.predicted_roi is None for p in dataset.time_series)


def test_summary_statistics() -> None:
    raw = build_csv(
        [
            ("bob", "2024-01", 80, 10.0, 1.0),
            ("bob", "2024-02", 100, 20.0, 2.0),
            ("bob", "2024-03", 120, 30.0, 3.0),
        ]
    )

    summary = DataIngestionUseCase().execute(raw).summary

    assert summary.tournament_count.min == 80
    assert summary.tournament_count.max == 120
    assert summary.tournament_count.mean == pytest.approx(100)
    assert summary.avg_buy_in.mean == pytest.approx(20)
    assert summary.roi.max == 3.0


def test_shapes_and_dtypes(sample_csv: str) -> None:
    dataset = DataIngestionUseCase().execute(sample_csv)

    assert dataset.size == 12
    assert dataset.features.shape == (12, 4)
    assert dataset.labels.shape == (12,)
    assert dataset.features.dtype == np.float32
    assert dataset.labels.dtype == np.float64
    assert dataset.scalers.is_fitted


def test_blank_lines_are_skipped() -> None:
    raw = f"{HEADER}\n\nbob,2024-01,10,5,1.5\n\nbob,2024-02,12,5,-2\n\n"
    dataset = DataIngestionUseCase().execute(raw)
    assert dataset.size == 2


def test_player_name_from_filename(sample_csv: str) -> None:
    dataset = DataIngestionUseCase().execute(
        sample_csv, filename="resultado_roi_mensal_carol.csv"
    )
    assert dataset.player_name == "carol"


def test_player_name_falls_back_to_first_row(sample_csv: str) -> None:
    dataset = DataIngestionUseCase().execute(sample_csv, filename="export.csv")
    assert dataset.player_name == "alice"


@pytest.mark.parametrize(
    "row, field",
    [
        ("bob,2024/01,10,5,1", "period"),
        ("bob,2024-13,10,5,1", "period"),
        ("bob,2024-01,ten,5,1", "tournament_count"),
        ("bob,2024-01,10,,1", "avg_buy_in"),
        ("bob,2024-01,10,5,nan", "roi"),
    ],
)
def test_malformed_row_is_rejected(row: str, field: str) -> None:
    raw = f"{HEADER}\nbob,2024-02,10,5,1\n{row}\n"

    with pytest.raises(MalformedInputError) as exc_info:
        DataIngestionUseCase().execute(raw)

    assert exc_info.value.details == {"row": 2, "field": field}
    assert "row 2" in exc_info.value.message


def test_missing_columns_are_rejected() -> None:
    raw = "Jogador,Periodo,Torneios\nbob,2024-01,10\n"
    with pytest.raises(MalformedInputError):
        DataIngestionUseCase().execute(raw)


@pytest.mark.parametrize("raw", ["", f"{HEADER}\n"])
def test_empty_input_is_rejected(raw: str) -> None:
    with pytest.raises(MalformedInputError):
        DataIngestionUseCase().execute(raw)


def test_semicolon_delimiter() -> None:
    raw = "Jogador;Periodo;Torneios;ABI;ROI\nbob;2024-01;10;5;1.5\n"
    dataset = DataIngestionUseCase(delimiter=";").execute(raw)
    assert dataset.records[0].roi == 1.5
