"""Flatten resample plans into the long-form table used for plotting.

The canonical table has one row per (split, observation) pair::

    id       key        date        value  ...
    Slice1   training   2017-01-01  12.0
    Slice1   testing    2017-03-01  15.5
    Slice2   training   ...
"""

import numpy as np
import polars as pl
import structlog

from tscv_plan.data.schemas import ID_COL, KEY_COL, KEY_DTYPE, TESTING, TRAINING
from tscv_plan.data.splitter import ResampleSplit, SplitSet
from tscv_plan.data.validator import validate_columns, validate_plan_table
from tscv_plan.exceptions import SchemaError, UnsupportedTypeError

logger = structlog.get_logger()


def _gather_rows(data: pl.DataFrame, idx: np.ndarray) -> pl.DataFrame:
    """Select rows by position, keeping original row order."""
    if idx.size == 0:
        return data.clear()
    return data.select(pl.all().gather(np.sort(idx).tolist()))


def _label_rows(rows: pl.DataFrame, split_id: str | int, key: str) -> pl.DataFrame:
    columns = rows.columns
    # Fixed id dtype so slices with ids of different widths concatenate
    id_dtype = pl.Int64 if isinstance(split_id, int) else pl.String
    return rows.with_columns(
        pl.lit(split_id, dtype=id_dtype).alias(ID_COL),
        pl.lit(key, dtype=KEY_DTYPE).alias(KEY_COL),
    ).select([ID_COL, KEY_COL, *columns])


def _split_rows(data: pl.DataFrame, split: ResampleSplit) -> list[pl.DataFrame]:
    return [
        _label_rows(_gather_rows(data, split.train), split.id, TRAINING),
        _label_rows(_gather_rows(data, split.test), split.id, TESTING),
    ]


def time_series_cv_plan(plan: SplitSet | pl.DataFrame | pl.LazyFrame) -> pl.DataFrame:
    """Unpack a resample set into a table with 'id' and 'key' columns.

    A table that is already flat is checked and returned as is.
    """
    if isinstance(plan, SplitSet):
        data = plan.data
        clashing = tuple(c for c in (ID_COL, KEY_COL) if c in data.columns)
        if clashing:
            raise SchemaError(
                f"Resample data already has column(s) {list(clashing)}; "
                "rename them before unpacking the plan."
            )

        frames = [frame for split in plan for frame in _split_rows(data, split)]
        if not frames:
            return pl.DataFrame(schema={ID_COL: pl.String, KEY_COL: KEY_DTYPE, **data.schema})
        return pl.concat(frames, how="vertical")

    if isinstance(plan, (pl.DataFrame, pl.LazyFrame)):
        table = plan.collect() if isinstance(plan, pl.LazyFrame) else plan
        validate_plan_table(table)
        return table

    raise UnsupportedTypeError(plan, func="time_series_cv_plan")


def normalize_split_set(plan: SplitSet, date_var: str, value: str) -> pl.DataFrame:
    """Normalize a rolling-origin or time-series-cv resample set."""
    validate_columns(plan.data, date_var, value)
    table = time_series_cv_plan(plan)
    logger.debug(
        "cv_plan_normalized",
        kind=plan.kind,
        n_slices=len(plan),
        n_rows=table.height,
    )
    return table


def normalize_table(
    table: pl.DataFrame | pl.LazyFrame, date_var: str, value: str
) -> pl.DataFrame:
    """Check an already-flat plan table and pass it through."""
    table = time_series_cv_plan(table)
    validate_columns(table, date_var, value)
    logger.debug("cv_plan_passthrough", n_rows=table.height)
    return table


def normalize(
    plan: SplitSet | pl.DataFrame | pl.LazyFrame, date_var: str, value: str
) -> pl.DataFrame:
    """Produce the canonical (id, key, date, value, ...) table for any plan variant."""
    if isinstance(plan, SplitSet):
        return normalize_split_set(plan, date_var, value)
    if isinstance(plan, (pl.DataFrame, pl.LazyFrame)):
        return normalize_table(plan, date_var, value)
    raise UnsupportedTypeError(plan, func="normalize")
