"""Sales forecasting and inventory replenishment engine."""

from .config import ForecastPolicy, load_policy
from .domain.errors import (
    DegenerateBaselineError,
    EmptySeriesError,
    ForecastError,
    InvalidConfigError,
)
from .domain.models import (
    ForecastMode,
    ForecastPoint,
    ForecastSchedule,
    InventoryRecommendation,
    Observation,
    RunConfig,
    SeasonalProfile,
    TimeSeries,
)
from .ingest import load_series
from .pipeline import ForecastResult, RunState, run_forecast, run_series

__all__ = [
    "ForecastPolicy",
    "load_policy",
    "DegenerateBaselineError",
    "EmptySeriesError",
    "ForecastError",
    "InvalidConfigError",
    "ForecastMode",
    "ForecastPoint",
    "ForecastSchedule",
    "InventoryRecommendation",
    "Observation",
    "RunConfig",
    "SeasonalProfile",
    "TimeSeries",
    "load_series",
    "ForecastResult",
    "RunState",
    "run_forecast",
    "run_series",
]
