"""Errors raised while preparing a resample plan for plotting."""


class TscvPlanError(Exception):
    """Base class for all tscv-plan errors."""


class UnsupportedTypeError(TscvPlanError, TypeError):
    """The object handed to the plan dispatcher is not a recognized resample plan."""

    def __init__(self, obj: object, func: str = "plot_time_series_cv_plan") -> None:
        self.type_name = type(obj).__name__
        super().__init__(f"{func}: No method for class {self.type_name!r}")


class SchemaError(TscvPlanError, ValueError):
    """A table is missing required columns or holds invalid id/key values."""

    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        self.missing = missing
        super().__init__(message)
