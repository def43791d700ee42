"""
Stationarity heuristics and differencing.

Stationarity here is simplified to mean level: the series is split in two
halves by index and the relative change between the half means is compared
against a threshold (default 10%).

Differencing is used only to assess non-stationarity. The differenced series
is kept as a diagnostic and is not fed back into the point forecast.
"""

from dataclasses import dataclass
from typing import List, Sequence
import logging
import statistics

import numpy as np

from .config import DEFAULT_STATIONARITY_THRESHOLD_PCT


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StationarityResult:
    """
    Outcome of the half-over-half mean test.

    Attributes:
        is_stationary: True if percent_change < threshold_pct
        first_avg: Mean of values[:n//2]
        second_avg: Mean of values[n//2:]
        percent_change: |second_avg - first_avg| / first_avg * 100 (0 when first_avg == 0)
        threshold_pct: Threshold used
    """
    is_stationary: bool
    first_avg: float
    second_avg: float
    percent_change: float
    threshold_pct: float


def check_stationarity(
    values: Sequence[float],
    threshold_pct: float = DEFAULT_STATIONARITY_THRESHOLD_PCT,
) -> StationarityResult:
    """
    Heuristic trend-shift test.

    Args:
        values: Series values, oldest first
        threshold_pct: Percent change below which the series is stationary

    Returns:
        StationarityResult

    Notes:
        - A zero first-half mean is treated as stationary (percent_change = 0)
        - Fewer than 2 values cannot show a shift: stationary, percent_change = 0

    Example:
        >>> check_stationarity([10, 10, 20, 20]).is_stationary
        False
    """
    n = len(values)
    split = n // 2

    if split == 0:
        avg = float(values[0]) if n else 0.0
        return StationarityResult(True, avg, avg, 0.0, threshold_pct)

    first_avg = statistics.fmean(values[:split])
    second_avg = statistics.fmean(values[split:])

    if first_avg == 0:
        percent_change = 0.0
    else:
        percent_change = abs((second_avg - first_avg) / first_avg * 100)

    result = StationarityResult(
        is_stationary=percent_change < threshold_pct,
        first_avg=first_avg,
        second_avg=second_avg,
        percent_change=percent_change,
        threshold_pct=threshold_pct,
    )

    logger.debug(
        f"Stationarity: first_avg={first_avg:.4f}, second_avg={second_avg:.4f}, "
        f"change={percent_change:.2f}% -> {'stationary' if result.is_stationary else 'non-stationary'}"
    )
    return result


def difference(values: Sequence[float], order: int = 1) -> List[float]:
    """
    Lagged difference: value[i] - value[i - order] for i = order..n-1.

    Args:
        values: Series values, oldest first
        order: Lag (>= 1)

    Returns:
        List of n - order differences (empty when order >= n)

    Example:
        >>> difference([10, 12, 15, 11], 1)
        [2.0, 3.0, -4.0]
    """
    if order < 1:
        raise ValueError(f"order must be >= 1, got {order}")

    if order >= len(values):
        return []

    arr = np.asarray(values, dtype=float)
    return (arr[order:] - arr[:-order]).tolist()
