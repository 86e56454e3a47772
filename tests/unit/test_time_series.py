"""Tests for the faceted time series renderer."""

from datetime import date

import matplotlib.colors as mcolors
import polars as pl
import pytest

from tscv_plan.config import PlotOptions
from tscv_plan.plotting.time_series import plot_time_series, smooth_series


def _visible_axes(fig):
    return [ax for ax in fig.axes if ax.get_visible()]


def test_single_series_single_facet(sample_series_df):
    fig = plot_time_series(sample_series_df, "date", "value", title="Adjusted")
    axes = _visible_axes(fig)
    assert len(axes) == 1
    assert len(axes[0].get_lines()) == 1
    assert fig.get_suptitle() == "Adjusted"


def test_one_facet_per_group(plan_table_df):
    fig = plot_time_series(plan_table_df, "date", "value", group_by="id", color_var="key")
    axes = _visible_axes(fig)
    assert [ax.get_title() for ax in axes] == ["Slice1", "Slice2"]
    # training + testing line in each facet
    assert all(len(ax.get_lines()) == 2 for ax in axes)


def test_facet_grid_hides_unused_cells(tscv_splits):
    from tscv_plan.plan.normalizer import time_series_cv_plan

    table = time_series_cv_plan(tscv_splits)
    fig = plot_time_series(
        table, "date", "value", PlotOptions(facet_ncol=2), group_by="id", color_var="key"
    )
    assert len(fig.axes) == 4
    assert len(_visible_axes(fig)) == 3


def test_training_and_testing_colors(plan_table_df):
    options = PlotOptions(training_color="#000000", testing_color="#FF0000", line_alpha=0.4)
    fig = plot_time_series(
        plan_table_df, "date", "value", options, group_by="id", color_var="key"
    )
    lines = {line.get_label(): line for line in fig.axes[0].get_lines()}
    assert mcolors.to_hex(lines["training"].get_color()) == "#000000"
    assert mcolors.to_hex(lines["testing"].get_color()) == "#ff0000"
    assert lines["training"].get_alpha() == 0.4


def test_smooth_adds_trend_line(plan_table_df):
    fig = plot_time_series(
        plan_table_df, "date", "value", group_by="id", color_var="key", smooth=True
    )
    assert len(fig.axes[0].get_lines()) == 3


def test_missing_column_raises(plan_table_df):
    with pytest.raises(pl.exceptions.ColumnNotFoundError):
        plot_time_series(plan_table_df, "date", "adjusted")
    with pytest.raises(pl.exceptions.ColumnNotFoundError):
        plot_time_series(plan_table_df, "date", "value", group_by="fold")


def test_interactive_facets_and_legend(plan_table_df):
    fig = plot_time_series(
        plan_table_df,
        "date",
        "value",
        PlotOptions(interactive=True, facet_ncol=2),
        group_by="id",
        color_var="key",
        title="Plan",
    )
    assert [a.text for a in fig.layout.annotations] == ["Slice1", "Slice2"]
    assert len(fig.data) == 4
    # each key shows up once in the legend
    assert sum(1 for t in fig.data if t.showlegend) == 2


def test_interactive_smooth_trace(plan_table_df):
    fig = plot_time_series(
        plan_table_df,
        "date",
        "value",
        PlotOptions(interactive=True),
        group_by="id",
        color_var="key",
        smooth=True,
    )
    assert sum(1 for t in fig.data if t.name == "smooth") == 2


def test_smooth_series_is_centered_rolling_mean():
    df = pl.DataFrame({
        "date": [date(2017, 1, d) for d in (3, 1, 2, 4)],
        "value": [3.0, 1.0, 2.0, 4.0],
    })
    trend = smooth_series(df, "date", "value", span=0.75)
    assert trend["date"].to_list() == [date(2017, 1, d) for d in (1, 2, 3, 4)]
    assert trend["value"].to_list() == [1.5, 2.0, 3.0, 3.5]


def test_static_figures_stay_out_of_pyplot(plan_table_df):
    import matplotlib.pyplot as plt

    before = plt.get_fignums()
    for _ in range(3):
        plot_time_series(plan_table_df, "date", "value", group_by="id", color_var="key")
    assert plt.get_fignums() == before
