"""Tests for resample plan containers."""

import numpy as np
import polars as pl
import pytest

from tscv_plan.data.splitter import (
    ResampleSplit,
    RollingOriginSplits,
    SplitSet,
    TimeSeriesCVSplits,
)


def test_from_index_pairs_names_slices(tscv_splits):
    assert tscv_splits.ids == ["Slice1", "Slice2", "Slice3"]
    assert len(tscv_splits) == 3
    assert tscv_splits.kind == "time_series_cv"


def test_rolling_origin_pads_slice_names(sample_series_df):
    pairs = [([i], [i + 1]) for i in range(12)]
    splits = RollingOriginSplits.from_index_pairs(sample_series_df, pairs)
    assert splits.ids[0] == "Slice01"
    assert splits.ids[-1] == "Slice12"
    assert splits.kind == "rolling_origin"


def test_split_counts(tscv_splits):
    for split in tscv_splits:
        assert split.n_train == 80
        assert split.n_test == 20


def test_split_indices_become_int_arrays():
    split = ResampleSplit(id=1, train=[0, 1, 2], test=(3,))
    assert isinstance(split.train, np.ndarray)
    assert split.test.dtype == np.int64


def test_two_dimensional_indices_rejected():
    with pytest.raises(ValueError, match="one-dimensional"):
        ResampleSplit(id=1, train=[[0, 1], [2, 3]], test=[4])


def test_duplicate_ids_rejected(sample_series_df):
    splits = [
        ResampleSplit(id="a", train=[0], test=[1]),
        ResampleSplit(id="a", train=[2], test=[3]),
    ]
    with pytest.raises(ValueError, match="Duplicate split ids"):
        TimeSeriesCVSplits(data=sample_series_df, splits=splits)


def test_mixed_id_types_rejected(sample_series_df):
    splits = [
        ResampleSplit(id="a", train=[0], test=[1]),
        ResampleSplit(id=2, train=[2], test=[3]),
    ]
    with pytest.raises(TypeError):
        TimeSeriesCVSplits(data=sample_series_df, splits=splits)


def test_out_of_range_indices_rejected(sample_series_df):
    splits = [ResampleSplit(id=1, train=[0, 1], test=[sample_series_df.height])]
    with pytest.raises(ValueError, match="outside the data range"):
        RollingOriginSplits(data=sample_series_df, splits=splits)


def test_negative_indices_rejected(sample_series_df):
    splits = [ResampleSplit(id=1, train=[-1, 0], test=[1])]
    with pytest.raises(ValueError):
        TimeSeriesCVSplits(data=sample_series_df, splits=splits)


def test_lazy_data_is_collected(sample_series_df):
    splits = TimeSeriesCVSplits(
        data=sample_series_df.lazy(),
        splits=[ResampleSplit(id=1, train=[0], test=[1])],
    )
    assert isinstance(splits.data, pl.DataFrame)


def test_subclasses_share_base():
    assert issubclass(RollingOriginSplits, SplitSet)
    assert issubclass(TimeSeriesCVSplits, SplitSet)
