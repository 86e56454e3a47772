"""Schema checks for cross-validation plan tables."""

import polars as pl
import structlog

from tscv_plan.data.schemas import ID_COL, KEY_COL, REQUIRED_PLAN_COLUMNS
from tscv_plan.exceptions import SchemaError

logger = structlog.get_logger()


def _quote(cols: tuple[str, ...]) -> str:
    return ", ".join(f"'{c}'" for c in cols)


def validate_columns(df: pl.DataFrame, *columns: str) -> None:
    """Raise SchemaError if any of the selected columns is absent."""
    missing = tuple(c for c in columns if c not in df.columns)
    if missing:
        raise SchemaError(
            f"Column(s) {_quote(missing)} not found in data. "
            f"Available columns: {df.columns}",
            missing=missing,
        )


def validate_plan_table(df: pl.DataFrame) -> None:
    """Check that a flat table is a usable cross-validation plan.

    - 'id' and 'key' columns are present
    - neither holds nulls
    - 'key' has at most two distinct values (training / testing)
    """
    missing = tuple(c for c in REQUIRED_PLAN_COLUMNS if c not in df.columns)
    if missing:
        raise SchemaError(
            f"The data frame must have 'id' and 'key' columns, missing {_quote(missing)}. "
            "Try using `time_series_cv_plan()` to unpack the resample set.",
            missing=missing,
        )

    null_cols = tuple(c for c in REQUIRED_PLAN_COLUMNS if df[c].null_count() > 0)
    if null_cols:
        raise SchemaError(f"Null values found in {_quote(null_cols)}")

    keys = df[KEY_COL].unique().to_list()
    if len(keys) > 2:
        raise SchemaError(
            f"Column 'key' must distinguish training from testing rows, "
            f"found {len(keys)} values: {sorted(map(str, keys))}"
        )

    logger.debug(
        "plan_table_validation_passed",
        n_rows=df.height,
        n_slices=df[ID_COL].n_unique(),
    )
