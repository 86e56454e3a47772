"""CLI entry point for tscv-plan."""

from pathlib import Path
from typing import Annotated

import typer

app = typer.Typer(
    name="tscv-plan",
    help="tscv-plan - Visualize time series cross-validation plans.",
)


def _load_plan(data: Path, splits: Path | None):
    from tscv_plan.data.loader import load_splits, load_table

    df = load_table(data)
    return load_splits(splits, df) if splits else df


@app.command()
def plan(
    data: Annotated[Path, typer.Argument(help="CSV or Parquet file with the original series")],
    splits: Annotated[Path, typer.Option(help="JSON file with train/test indices per slice")],
    output: Annotated[Path | None, typer.Option(help="Output table (.parquet or .csv)")] = None,
) -> None:
    """Unpack a resample set into a long-form (id, key, ...) table."""
    from tscv_plan.config import load_settings
    from tscv_plan.data.loader import save_table
    from tscv_plan.exceptions import TscvPlanError
    from tscv_plan.plan.normalizer import time_series_cv_plan

    output = output or load_settings().paths.outputs / "cv_plan.parquet"

    try:
        table = time_series_cv_plan(_load_plan(data, splits))
        save_table(table, output)
    except (TscvPlanError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"Wrote {table.height} rows to {output}")


@app.command()
def plot(
    data: Annotated[Path, typer.Argument(help="Plan table, or original series when --splits is given")],
    date_var: Annotated[str, typer.Option("--date", help="Date column")] = "date",
    value: Annotated[str, typer.Option(help="Value column")] = "value",
    splits: Annotated[Path | None, typer.Option(help="JSON file with train/test indices per slice")] = None,
    output: Annotated[Path | None, typer.Option(help="Output image (.png/.svg/.pdf) or .html")] = None,
    title: Annotated[str | None, typer.Option(help="Chart title")] = None,
    facet_ncol: Annotated[int | None, typer.Option(help="Number of facet columns")] = None,
    line_alpha: Annotated[float | None, typer.Option(help="Line opacity (0-1)")] = None,
    smooth: Annotated[bool, typer.Option(help="Overlay a trend line")] = False,
) -> None:
    """Plot a resample plan, one facet per slice. An .html output is interactive."""
    from tscv_plan.config import load_settings
    from tscv_plan.exceptions import TscvPlanError
    from tscv_plan.plotting.cv_plan import plot_time_series_cv_plan

    settings = load_settings()
    output = output or settings.paths.outputs / "cv_plan.png"
    interactive = output.suffix.lower() == ".html"
    style = {
        k: v
        for k, v in {"facet_ncol": facet_ncol, "line_alpha": line_alpha}.items()
        if v is not None
    }

    try:
        fig = plot_time_series_cv_plan(
            _load_plan(data, splits),
            date_var,
            value,
            settings.plot,
            smooth=smooth,
            title=title or settings.title,
            interactive=interactive,
            **style,
        )
    except (TscvPlanError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    output.parent.mkdir(parents=True, exist_ok=True)
    if interactive:
        fig.write_html(str(output))
    else:
        fig.savefig(output, dpi=settings.output.image_dpi, bbox_inches="tight")
    typer.echo(f"Saved {output}")


if __name__ == "__main__":
    app()
