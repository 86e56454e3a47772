"""Faceted time series line plots.

Static charts are drawn with matplotlib; interactive charts (pan, zoom,
hover tooltips) with plotly.
"""

import math
from typing import Any

import polars as pl
import structlog
from matplotlib.figure import Figure

from tscv_plan.config import PlotOptions
from tscv_plan.data.schemas import TESTING, TRAINING

logger = structlog.get_logger()

# matplotlib "tab10"
PALETTE = [
    "#1F77B4", "#FF7F0E", "#2CA02C", "#D62728", "#9467BD",
    "#8C564B", "#E377C2", "#7F7F7F", "#BCBD22", "#17BECF",
]
C_BG = "#FAFAFA"


def _check_columns(df: pl.DataFrame, *columns: str | None) -> None:
    missing = [c for c in columns if c is not None and c not in df.columns]
    if missing:
        raise pl.exceptions.ColumnNotFoundError(
            f"plot_time_series: column(s) {missing} not found in {df.columns}"
        )


def _facets(df: pl.DataFrame, group_by: str | None) -> list[tuple[str, pl.DataFrame]]:
    """Split into one frame per group, in order of first appearance."""
    if group_by is None or df.is_empty():
        return [("", df)]
    parts = df.partition_by(group_by, as_dict=True, maintain_order=True)
    return [(str(key[0]), part) for key, part in parts.items()]


def _series(df: pl.DataFrame, color_var: str | None) -> list[tuple[str, pl.DataFrame]]:
    if color_var is None or df.is_empty():
        return [("", df)]
    parts = df.partition_by(color_var, as_dict=True, maintain_order=True)
    return [(str(key[0]), part) for key, part in parts.items()]


def _color_map(df: pl.DataFrame, color_var: str | None, options: PlotOptions) -> dict[str, str]:
    """Fixed colors for training/testing; palette for anything else."""
    fixed = {TRAINING: options.training_color, TESTING: options.testing_color}
    if color_var is None:
        return {"": options.training_color}
    colors = {}
    others = 0
    for label in df[color_var].unique(maintain_order=True).cast(pl.String).to_list():
        if label in fixed:
            colors[label] = fixed[label]
        else:
            colors[label] = PALETTE[others % len(PALETTE)]
            others += 1
    return colors


def smooth_series(
    df: pl.DataFrame, date_var: str, value: str, span: float = 0.75
) -> pl.DataFrame:
    """Centered rolling mean over a fraction `span` of the rows, sorted by date."""
    n = df.height
    window = min(max(3, round(span * n)), max(n, 1))
    return df.sort(date_var).select(
        pl.col(date_var),
        pl.col(value)
        .cast(pl.Float64)
        .rolling_mean(window_size=window, min_samples=1, center=True)
        .alias(value),
    )


def _grid(n_facets: int, options: PlotOptions) -> tuple[int, int]:
    ncol = max(1, min(options.facet_ncol, n_facets))
    return math.ceil(n_facets / ncol), ncol


def _plot_static(
    facets: list[tuple[str, pl.DataFrame]],
    date_var: str,
    value: str,
    color_var: str | None,
    colors: dict[str, str],
    options: PlotOptions,
    smooth: bool,
    title: str,
) -> Figure:
    nrow, ncol = _grid(len(facets), options)
    height = options.height or 250 * nrow + 80
    # Detached from pyplot's figure manager
    fig = Figure(figsize=(options.width / 100, height / 100))
    axes = fig.subplots(
        nrow,
        ncol,
        sharex=options.facet_scales in ("fixed", "free_y"),
        sharey=options.facet_scales in ("fixed", "free_x"),
        squeeze=False,
    )
    fig.patch.set_facecolor(C_BG)
    flat = axes.ravel()

    handles: dict[str, Any] = {}
    for ax, (label, part) in zip(flat, facets):
        ax.set_facecolor(C_BG)
        for key, series in _series(part, color_var):
            series = series.sort(date_var)
            (line,) = ax.plot(
                series[date_var].to_list(),
                series[value].to_list(),
                color=colors.get(key, PALETTE[0]),
                alpha=options.line_alpha,
                linewidth=options.line_size,
                label=key,
            )
            handles.setdefault(key, line)

        if smooth and part.height > 0:
            trend = smooth_series(part, date_var, value, options.smooth_span)
            ax.plot(
                trend[date_var].to_list(),
                trend[value].to_list(),
                color=options.smooth_color,
                linewidth=options.line_size * 1.5,
            )

        if label:
            ax.set_title(label, fontsize=10)
        ax.grid(alpha=0.3, linestyle="-", linewidth=0.5)
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)

    # Hide unused cells of the facet grid
    for ax in flat[len(facets):]:
        ax.set_visible(False)

    fig.suptitle(title, fontsize=13, fontweight="bold")
    if options.x_lab:
        fig.supxlabel(options.x_lab, fontsize=10)
    if options.y_lab:
        fig.supylabel(options.y_lab, fontsize=10)
    if options.legend_show and color_var is not None and handles:
        fig.legend(
            list(handles.values()),
            list(handles.keys()),
            title=options.color_lab,
            loc="upper right",
            fontsize=9,
            framealpha=0.9,
        )
    fig.autofmt_xdate()
    fig.tight_layout()
    return fig


def _plot_interactive(
    facets: list[tuple[str, pl.DataFrame]],
    date_var: str,
    value: str,
    color_var: str | None,
    colors: dict[str, str],
    options: PlotOptions,
    smooth: bool,
    title: str,
):
    import plotly.graph_objects as go
    from plotly.subplots import make_subplots

    nrow, ncol = _grid(len(facets), options)
    fig = make_subplots(
        rows=nrow,
        cols=ncol,
        subplot_titles=[label for label, _ in facets] if any(lbl for lbl, _ in facets) else None,
        shared_xaxes="all" if options.facet_scales in ("fixed", "free_y") else False,
        shared_yaxes="all" if options.facet_scales in ("fixed", "free_x") else False,
    )

    shown: set[str] = set()
    for i, (label, part) in enumerate(facets):
        row, col = i // ncol + 1, i % ncol + 1
        for key, series in _series(part, color_var):
            series = series.sort(date_var)
            fig.add_trace(
                go.Scatter(
                    x=series[date_var].to_list(),
                    y=series[value].to_list(),
                    mode="lines",
                    name=key or value,
                    legendgroup=key,
                    showlegend=key not in shown and color_var is not None,
                    line=dict(color=colors.get(key, PALETTE[0]), width=options.line_size * 2),
                    opacity=options.line_alpha,
                ),
                row=row,
                col=col,
            )
            shown.add(key)

        if smooth and part.height > 0:
            trend = smooth_series(part, date_var, value, options.smooth_span)
            fig.add_trace(
                go.Scatter(
                    x=trend[date_var].to_list(),
                    y=trend[value].to_list(),
                    mode="lines",
                    name="smooth",
                    legendgroup="smooth",
                    showlegend=False,
                    line=dict(color=options.smooth_color, width=options.line_size * 3),
                ),
                row=row,
                col=col,
            )

    fig.update_layout(
        title=title,
        width=options.width,
        height=options.height or 300 * nrow + 100,
        showlegend=options.legend_show,
        legend_title_text=options.color_lab,
        template="plotly_white",
    )
    if options.x_lab:
        fig.update_xaxes(title_text=options.x_lab, row=nrow)
    if options.y_lab:
        fig.update_yaxes(title_text=options.y_lab, col=1)
    return fig


def plot_time_series(
    df: pl.DataFrame,
    date_var: str,
    value: str,
    options: PlotOptions | None = None,
    *,
    color_var: str | None = None,
    group_by: str | None = None,
    smooth: bool = False,
    title: str = "Time Series Plot",
):
    """Plot one or more time series, one facet per `group_by` value.

    Returns a matplotlib Figure, or a plotly Figure when
    `options.interactive` is set.
    """
    options = options or PlotOptions()
    _check_columns(df, date_var, value, color_var, group_by)

    facets = _facets(df, group_by)
    colors = _color_map(df, color_var, options)
    draw = _plot_interactive if options.interactive else _plot_static
    fig = draw(facets, date_var, value, color_var, colors, options, smooth, title)

    logger.debug(
        "time_series_plot_built",
        n_facets=len(facets),
        interactive=options.interactive,
        smooth=smooth,
    )
    return fig
