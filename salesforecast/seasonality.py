"""
Monthly seasonal factors.

factor[m] = mean(values in calendar month m) / mean(all values)

Computed only when the series has at least min_seasonal_points observations
(default 12); shorter series get a neutral profile.
"""

from collections import defaultdict
from typing import Dict, List
import statistics

from .config import DEFAULT_MIN_SEASONAL_POINTS
from .domain.models import SeasonalProfile, TimeSeries


def seasonal_profile(
    series: TimeSeries,
    min_seasonal_points: int = DEFAULT_MIN_SEASONAL_POINTS,
) -> SeasonalProfile:
    """
    Compute per-calendar-month multiplicative factors.

    Args:
        series: Observations, oldest first
        min_seasonal_points: Minimum length before factors are computed

    Returns:
        SeasonalProfile (months without observations read as 1.0)

    Example:
        >>> profile = seasonal_profile(series_with_december_peak)
        >>> profile.factor(12) > 1.0
        True
    """
    if len(series) < min_seasonal_points:
        return SeasonalProfile()

    overall_avg = statistics.fmean(series.values)
    if overall_avg == 0:
        # No sales at all: no pattern to scale by
        return SeasonalProfile()

    by_month: Dict[int, List[float]] = defaultdict(list)
    for obs in series:
        by_month[obs.date.month].append(obs.value)

    factors = {
        month: statistics.fmean(month_values) / overall_avg
        for month, month_values in sorted(by_month.items())
    }
    return SeasonalProfile(factors)
