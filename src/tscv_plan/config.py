"""Centralized project configuration using Pydantic."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_TITLE = "Time Series Cross Validation Plan"


class PathConfig(BaseModel):
    project_root: Path = PROJECT_ROOT
    outputs: Path = PROJECT_ROOT / "outputs"


class PlotOptions(BaseModel):
    """Style options passed through to the time series renderer."""

    facet_ncol: int = Field(default=1, ge=1)
    facet_scales: Literal["fixed", "free_x", "free_y", "free"] = "free_y"
    line_alpha: float = Field(default=1.0, ge=0.0, le=1.0)
    line_size: float = Field(default=1.0, gt=0.0)
    interactive: bool = False
    smooth_span: float = Field(default=0.75, gt=0.0, le=1.0)
    smooth_color: str = "#3366FF"
    training_color: str = "#2C3E50"
    testing_color: str = "#E31A1C"
    x_lab: str = ""
    y_lab: str = ""
    color_lab: str = "Legend"
    legend_show: bool = True
    width: int = Field(default=900, gt=0)
    height: int | None = None

    model_config = {"extra": "forbid"}

    def with_overrides(self, **overrides: object) -> "PlotOptions":
        """Return a validated copy with the given fields replaced."""
        if not overrides:
            return self
        return PlotOptions.model_validate({**self.model_dump(), **overrides})


class OutputConfig(BaseModel):
    image_dpi: int = 150


class Settings(BaseSettings):
    paths: PathConfig = PathConfig()
    plot: PlotOptions = PlotOptions()
    output: OutputConfig = OutputConfig()
    title: str = DEFAULT_TITLE

    model_config = {"env_prefix": "TSCV_PLAN_"}


def load_settings(params_path: Path | None = None) -> Settings:
    """Load settings from params.yaml, falling back to defaults."""
    params_path = params_path or PROJECT_ROOT / "params.yaml"
    if params_path.exists():
        with open(params_path) as f:
            params = yaml.safe_load(f) or {}
        return Settings(**params)
    return Settings()
