"""
Monthly sales forecasting.

Model: weighted-moving-average baseline + linear trend + monthly seasonality.

Approach:
- Baseline: linearly-decaying weighted moving average of the last
  min(n, window_size) observations (most recent weighs most)
- Trend: (last - first) / count over the last min(n, trend_window) observations
- Seasonality: multiplicative factor per calendar month (neutral below 12 points)
- Forecast: point_t = (baseline + trend × t) × factor[month(last_date + t months)]

Each point carries a confidence band that widens with √t.

Output: Always non-negative. Deterministic given inputs.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence
import logging
import statistics

from dateutil.relativedelta import relativedelta

from .config import DEFAULT_POLICY, DEFAULT_TREND_WINDOW, DEFAULT_WINDOW_SIZE, ForecastPolicy
from .domain.errors import DegenerateBaselineError
from .domain.models import ForecastPoint, ForecastSchedule, SeasonalProfile, TimeSeries
from .seasonality import seasonal_profile
from .uncertainty import confidence_band


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastModel:
    """
    Fitted forecast model state.

    Attributes:
        baseline: Weighted moving average level
        trend: Per-period slope
        profile: Monthly seasonal factors
        last_date: Date of the last observation
        n_samples: Number of observations used
        window_size: Effective baseline window (min(n, requested))
        uncertainty_factor: Relative band half-width at one step ahead
    """
    baseline: float
    trend: float
    profile: SeasonalProfile
    last_date: date
    n_samples: int
    window_size: int
    uncertainty_factor: float


@dataclass(frozen=True)
class ForecastSummary:
    """Recent history vs forecast comparison."""
    past_avg: float
    future_avg: float
    change_percent: float

    @property
    def direction(self) -> str:
        """Stock adjustment suggested by the change: 'increase' or 'decrease'."""
        return "increase" if self.change_percent > 0 else "decrease"


def add_months(start: date, months: int) -> date:
    """Calendar-month offset, clamped to the last day of shorter months."""
    return start + relativedelta(months=months)


def estimate_trend(values: Sequence[float], window: int = DEFAULT_TREND_WINDOW) -> float:
    """
    Average per-period change over the most recent observations.

    Args:
        values: Series values, oldest first
        window: Number of most recent observations considered

    Returns:
        (last - first) / count over the last min(n, window) values; 0.0 for n < 2

    Example:
        >>> estimate_trend([10, 20, 30, 40], window=6)
        7.5
    """
    recent = list(values[-window:])
    if len(recent) < 2:
        return 0.0
    return (recent[-1] - recent[0]) / len(recent)


def weighted_baseline(values: Sequence[float], window_size: int = DEFAULT_WINDOW_SIZE) -> float:
    """
    Linearly-decaying weighted moving average favoring recent observations.

    The i-th most recent value (i = 0 is the latest) has weight w - i,
    where w = min(n, window_size).

    Raises:
        DegenerateBaselineError: if the effective window is empty

    Example:
        >>> weighted_baseline([10, 20, 30], window_size=6)  # (30*3 + 20*2 + 10*1) / 6
        23.333333333333332
    """
    w = min(len(values), window_size)
    if w <= 0:
        raise DegenerateBaselineError(
            f"Cannot compute baseline over an empty window (n={len(values)}, window_size={window_size})"
        )

    weighted_sum = 0.0
    weight_sum = 0
    for i in range(w):
        weight = w - i
        weighted_sum += values[-1 - i] * weight
        weight_sum += weight

    return weighted_sum / weight_sum


def fit_forecast_model(
    series: TimeSeries,
    window_size: int = DEFAULT_WINDOW_SIZE,
    policy: ForecastPolicy = DEFAULT_POLICY,
    profile: Optional[SeasonalProfile] = None,
) -> ForecastModel:
    """
    Fit baseline, trend and seasonal profile on a series.

    Args:
        series: Observations, oldest first
        window_size: Maximum baseline window (observations)
        policy: Forecast policy constants
        profile: Precomputed seasonal profile (computed from series if None)

    Returns:
        ForecastModel
    """
    values = series.values

    if profile is None:
        profile = seasonal_profile(series, policy.min_seasonal_points)

    model = ForecastModel(
        baseline=weighted_baseline(values, window_size),
        trend=estimate_trend(values, policy.trend_window),
        profile=profile,
        last_date=series.last_date,
        n_samples=len(values),
        window_size=min(len(values), window_size),
        uncertainty_factor=policy.uncertainty_factor,
    )

    logger.debug(
        f"Fitted model: baseline={model.baseline:.4f}, trend={model.trend:.4f}, "
        f"n={model.n_samples}, seasonal={'no' if profile.is_neutral else 'yes'}"
    )
    return model


def predict(model: ForecastModel, horizon_steps: int) -> ForecastSchedule:
    """
    Generate monthly forecasts for the next `horizon_steps` periods.

    Args:
        model: Model from fit_forecast_model()
        horizon_steps: Number of months to forecast

    Returns:
        ForecastSchedule of horizon_steps points, one per month after last_date

    Example:
        >>> schedule = predict(model, horizon_steps=3)
        >>> len(schedule)
        3
        >>> all(p.lower >= 0 for p in schedule)
        True
    """
    points = []
    for t in range(1, horizon_steps + 1):
        forecast_date = add_months(model.last_date, t)
        season_factor = model.profile.factor(forecast_date.month)

        # Demand cannot be negative even under a steep downward trend
        point = max(0.0, (model.baseline + model.trend * t) * season_factor)
        lower, upper = confidence_band(point, t, model.uncertainty_factor)

        points.append(ForecastPoint(date=forecast_date, point=point, lower=lower, upper=upper))

    return ForecastSchedule(tuple(points))


def summarize_forecast(series: TimeSeries, schedule: ForecastSchedule) -> ForecastSummary:
    """
    Compare the forecast average with the same number of most recent observations.

    Returns:
        ForecastSummary; change_percent is 0.0 when the past average is zero
    """
    if not len(schedule):
        raise ValueError("Cannot summarize an empty forecast")

    past_avg = statistics.fmean(series.values[-len(schedule):])
    future_avg = statistics.fmean(p.point for p in schedule)
    change_percent = (future_avg - past_avg) / past_avg * 100 if past_avg != 0 else 0.0

    return ForecastSummary(past_avg=past_avg, future_avg=future_avg, change_percent=change_percent)


def quick_forecast(
    series: TimeSeries,
    horizon_steps: int = 3,
    window_size: int = DEFAULT_WINDOW_SIZE,
    policy: ForecastPolicy = DEFAULT_POLICY,
) -> List[ForecastPoint]:
    """One-shot fit + predict, returned as a plain list."""
    model = fit_forecast_model(series, window_size, policy)
    return list(predict(model, horizon_steps))
