"""
Forecast uncertainty band.

The band half-width is proportional to the point forecast and widens with the
square root of forecast distance, the same aggregation rule used for
independent per-period errors:

    u_t = k × point × √t
    lower = max(0, point - u_t)
    upper = point + u_t

Where k is the policy uncertainty factor (default 0.1 → ±10% one step ahead).
"""

from typing import Tuple

from .config import DEFAULT_UNCERTAINTY_FACTOR


def uncertainty_over_horizon(point: float, step: int, factor: float = DEFAULT_UNCERTAINTY_FACTOR) -> float:
    """
    Scale relative one-step uncertainty to a forecast `step` periods ahead.

    Args:
        point: Point forecast (>= 0)
        step: Periods ahead (t >= 1)
        factor: Relative half-width at t = 1

    Returns:
        float: Band half-width (0.0 if point, step or factor is not positive)

    Examples:
        >>> uncertainty_over_horizon(100.0, 1)
        10.0
        >>> uncertainty_over_horizon(100.0, 4)
        20.0
    """
    if point <= 0 or step <= 0 or factor <= 0:
        return 0.0

    return factor * point * (step ** 0.5)


def confidence_band(point: float, step: int, factor: float = DEFAULT_UNCERTAINTY_FACTOR) -> Tuple[float, float]:
    """
    Lower/upper bounds around a point forecast.

    Returns:
        (lower, upper) with 0 <= lower <= point <= upper for point >= 0
    """
    u = uncertainty_over_horizon(point, step, factor)
    return max(0.0, point - u), point + u
