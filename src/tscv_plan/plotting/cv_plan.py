"""Visualize a time series resample plan.

`plot_time_series_cv_plan` accepts a resample set produced by a
rolling-origin or time-series-cv procedure, or a table already unpacked with
`time_series_cv_plan()`, and draws one facet per slice with training and
testing windows in different colors.

Example::

    splits = TimeSeriesCVSplits.from_index_pairs(sales, pairs)
    fig = plot_time_series_cv_plan(
        splits, "date", "adjusted",
        facet_ncol=2, line_alpha=0.5, interactive=False,
    )
"""

import polars as pl
import structlog

from tscv_plan.config import DEFAULT_TITLE, PlotOptions
from tscv_plan.data.schemas import ID_COL, KEY_COL
from tscv_plan.data.splitter import RollingOriginSplits, SplitSet, TimeSeriesCVSplits
from tscv_plan.exceptions import UnsupportedTypeError
from tscv_plan.plan.normalizer import normalize_split_set, normalize_table
from tscv_plan.plotting.time_series import plot_time_series

logger = structlog.get_logger()


def _plot_plan_table(
    table: pl.DataFrame,
    date_var: str,
    value: str,
    options: PlotOptions,
    smooth: bool,
    title: str,
):
    return plot_time_series(
        table,
        date_var,
        value,
        options,
        color_var=KEY_COL,
        group_by=ID_COL,
        smooth=smooth,
        title=title,
    )


def plot_time_series_cv_plan(
    plan: SplitSet | pl.DataFrame | pl.LazyFrame,
    date_var: str,
    value: str,
    options: PlotOptions | None = None,
    *,
    smooth: bool = False,
    title: str = DEFAULT_TITLE,
    **style: object,
):
    """Plot every slice of a resample plan, coloring training vs testing rows.

    Args:
        plan: A RollingOriginSplits or TimeSeriesCVSplits resample set, or a
            polars table with 'id' and 'key' columns.
        date_var: Name of the date column.
        value: Name of the value column.
        options: Base style options for the renderer.
        smooth: Overlay a trend line on each facet.
        title: Chart title.
        **style: Individual PlotOptions fields overriding `options`, e.g.
            ``facet_ncol=2, line_alpha=0.5, interactive=True``.

    Returns:
        A matplotlib Figure, or a plotly Figure when interactive.

    Raises:
        UnsupportedTypeError: `plan` is none of the supported types.
        SchemaError: Required columns are missing from the plan.
    """
    options = (options or PlotOptions()).with_overrides(**style)

    if isinstance(plan, RollingOriginSplits):
        table = normalize_split_set(plan, date_var, value)
    elif isinstance(plan, TimeSeriesCVSplits):
        table = normalize_split_set(plan, date_var, value)
    elif isinstance(plan, (pl.DataFrame, pl.LazyFrame)):
        table = normalize_table(plan, date_var, value)
    else:
        raise UnsupportedTypeError(plan)

    fig = _plot_plan_table(table, date_var, value, options, smooth, title)
    logger.info(
        "cv_plan_rendered",
        plan_type=type(plan).__name__,
        n_slices=table[ID_COL].n_unique(),
        n_rows=table.height,
        interactive=options.interactive,
    )
    return fig
