"""Reading and writing plan tables and resample split files."""

import json
from pathlib import Path

import polars as pl
import structlog

from tscv_plan.data.splitter import SPLIT_SET_KINDS, ResampleSplit, SplitSet

logger = structlog.get_logger()


def load_table(path: Path, try_parse_dates: bool = True) -> pl.DataFrame:
    """Load a CSV or Parquet table, chosen by file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        df = pl.read_parquet(path)
    elif suffix in (".csv", ".txt"):
        df = pl.read_csv(path, try_parse_dates=try_parse_dates)
    else:
        raise ValueError(f"Unsupported table format: {path.suffix!r} (expected .csv or .parquet)")
    logger.info("table_loaded", path=str(path), n_rows=df.height, n_cols=df.width)
    return df


def save_table(df: pl.DataFrame, path: Path) -> Path:
    """Write a table as CSV or Parquet, chosen by file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        df.write_parquet(path)
    elif suffix == ".csv":
        df.write_csv(path)
    else:
        raise ValueError(f"Unsupported table format: {path.suffix!r} (expected .csv or .parquet)")
    logger.info("table_saved", path=str(path), n_rows=df.height)
    return path


def load_splits(path: Path, data: pl.DataFrame) -> SplitSet:
    """Load a resample set from a JSON splits file.

    Format::

        {"kind": "time_series_cv",
         "splits": [{"id": "Slice1", "train": [0, 1, ...], "test": [80, ...]}, ...]}

    `kind` is "time_series_cv" (default) or "rolling_origin". Splits that
    omit `id` get a generated slice name from their position.
    """
    with open(path) as f:
        payload = json.load(f)

    kind = payload.get("kind", "time_series_cv")
    if kind not in SPLIT_SET_KINDS:
        raise ValueError(f"Unknown resample kind {kind!r}, expected one of {sorted(SPLIT_SET_KINDS)}")
    cls = SPLIT_SET_KINDS[kind]

    raw = payload.get("splits", [])
    splits = []
    for i, s in enumerate(raw, 1):
        missing = [k for k in ("train", "test") if k not in s]
        if missing:
            raise ValueError(f"Split {i} in {path} is missing {missing}")
        split_id = s["id"] if "id" in s else cls.slice_name(i, len(raw))
        splits.append(ResampleSplit(id=split_id, train=s["train"], test=s["test"]))
    plan = cls(data=data, splits=splits)

    logger.info("splits_loaded", path=str(path), kind=kind, n_slices=len(plan))
    return plan
