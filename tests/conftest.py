"""Shared test fixtures."""

from datetime import date

import matplotlib

matplotlib.use("Agg")

import numpy as np
import polars as pl
import pytest

from tscv_plan.data.splitter import RollingOriginSplits, TimeSeriesCVSplits


@pytest.fixture
def sample_series_df() -> pl.DataFrame:
    """140 days of a single noisy series."""
    dates = pl.date_range(date(2017, 1, 1), date(2017, 5, 20), eager=True)
    rng = np.random.default_rng(42)
    return pl.DataFrame({
        "date": dates,
        "value": (np.linspace(10, 30, len(dates)) + rng.normal(0, 1, len(dates))),
        "symbol": ["FB"] * len(dates),
    })


def _sliding_pairs(n_slices: int = 3, train: int = 80, test: int = 20, skip: int = 20):
    pairs = []
    for i in range(n_slices):
        start = i * skip
        pairs.append((
            np.arange(start, start + train),
            np.arange(start + train, start + train + test),
        ))
    return pairs


@pytest.fixture
def tscv_splits(sample_series_df) -> TimeSeriesCVSplits:
    """3 slices, each with 80 training and 20 testing rows."""
    return TimeSeriesCVSplits.from_index_pairs(sample_series_df, _sliding_pairs())


@pytest.fixture
def rolling_splits(sample_series_df) -> RollingOriginSplits:
    return RollingOriginSplits.from_index_pairs(sample_series_df, _sliding_pairs())


@pytest.fixture
def plan_table_df() -> pl.DataFrame:
    """An already unpacked plan: 2 slices of 6 rows."""
    dates = [date(2017, 1, d) for d in range(1, 7)]
    return pl.DataFrame({
        "id": ["Slice1"] * 6 + ["Slice2"] * 6,
        "key": (["training"] * 4 + ["testing"] * 2) * 2,
        "date": dates * 2,
        "value": [float(v) for v in range(12)],
    })


class RendererSpy:
    """Stands in for plot_time_series and records every call."""

    def __init__(self) -> None:
        self.calls: list[dict] = []

    def __call__(self, df, date_var, value, options=None, **kwargs):
        self.calls.append({"df": df, "date_var": date_var, "value": value, "options": options, **kwargs})
        return "chart"


@pytest.fixture
def renderer_spy(monkeypatch) -> RendererSpy:
    spy = RendererSpy()
    monkeypatch.setattr("tscv_plan.plotting.cv_plan.plot_time_series", spy)
    return spy
