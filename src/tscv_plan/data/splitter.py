"""Resample plan containers for time series cross-validation.

These hold an already-computed plan: the original dataset plus, for every
split, the row positions used for training (analysis) and testing
(assessment). Choosing the windows is left to the producer.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import ClassVar

import numpy as np
import polars as pl


def _as_index_array(values: Sequence[int] | np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.int64)
    if arr.ndim != 1:
        raise ValueError(f"{name} indices must be one-dimensional, got shape {arr.shape}")
    return arr


@dataclass(eq=False)
class ResampleSplit:
    """A single train/test split defined by row positions."""

    id: str | int
    train: np.ndarray
    test: np.ndarray

    def __post_init__(self) -> None:
        self.train = _as_index_array(self.train, "train")
        self.test = _as_index_array(self.test, "test")

    @property
    def n_train(self) -> int:
        return int(self.train.size)

    @property
    def n_test(self) -> int:
        return int(self.test.size)


@dataclass(eq=False)
class SplitSet:
    """A resample set: the backing dataset and its list of splits.

    Use one of the concrete subclasses; the class identifies which kind of
    producer built the plan.
    """

    data: pl.DataFrame
    splits: list[ResampleSplit]

    kind: ClassVar[str] = "split_set"
    pad_ids: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if isinstance(self.data, pl.LazyFrame):
            self.data = self.data.collect()
        self.splits = list(self.splits)

        ids = self.ids
        if len(set(ids)) != len(ids):
            dupes = sorted({str(i) for i in ids if ids.count(i) > 1})
            raise ValueError(f"Duplicate split ids: {dupes}")
        if len({type(i) for i in ids}) > 1:
            raise TypeError("Split ids must all be of the same type")

        n_rows = self.data.height
        for split in self.splits:
            for name, idx in (("train", split.train), ("test", split.test)):
                if idx.size and (idx.min() < 0 or idx.max() >= n_rows):
                    raise ValueError(
                        f"Split {split.id!r} has {name} indices outside the "
                        f"data range [0, {n_rows})"
                    )

    def __len__(self) -> int:
        return len(self.splits)

    def __iter__(self) -> Iterator[ResampleSplit]:
        return iter(self.splits)

    @property
    def ids(self) -> list[str | int]:
        return [s.id for s in self.splits]

    @classmethod
    def slice_name(cls, position: int, n_slices: int, prefix: str = "Slice") -> str:
        """Name of the 1-based `position`-th of `n_slices` slices."""
        width = len(str(n_slices)) if cls.pad_ids else 0
        return f"{prefix}{position:0{width}d}"

    @classmethod
    def from_index_pairs(
        cls,
        data: pl.DataFrame,
        pairs: Iterable[tuple[Sequence[int], Sequence[int]]],
        prefix: str = "Slice",
    ) -> "SplitSet":
        """Wrap (train_idx, test_idx) pairs, e.g. from sklearn's TimeSeriesSplit."""
        pairs = list(pairs)
        splits = [
            ResampleSplit(id=cls.slice_name(i, len(pairs), prefix), train=train, test=test)
            for i, (train, test) in enumerate(pairs, 1)
        ]
        return cls(data=data, splits=splits)


class RollingOriginSplits(SplitSet):
    """Resample set produced by a rolling-origin procedure."""

    kind: ClassVar[str] = "rolling_origin"
    pad_ids: ClassVar[bool] = True


class TimeSeriesCVSplits(SplitSet):
    """Resample set produced by a time-series-specific CV procedure."""

    kind: ClassVar[str] = "time_series_cv"


SPLIT_SET_KINDS: dict[str, type[SplitSet]] = {
    RollingOriginSplits.kind: RollingOriginSplits,
    TimeSeriesCVSplits.kind: TimeSeriesCVSplits,
}
