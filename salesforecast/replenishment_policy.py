"""
Safety-stock Replenishment Policy

Turns a monthly demand forecast into period-by-period order quantities,
carrying the projected inventory from one period to the next.

Policy Formula (per period, in chronological order):
    SS = F × pct / 100           (Safety stock)
    I* = F + SS                  (Ideal inventory)
    Q  = max(0, I* - R)          (Units to order)
    R' = R + Q - F               (Remaining inventory carried forward)

Where:
    - F: Forecast demand for the period (point forecast)
    - pct: Safety stock percentage (0-100)
    - R: Inventory remaining from the previous period (starting inventory first)

Whenever Q > 0 the period closes with exactly its safety stock on hand
(R' = I* - F = SS).
"""

from typing import Iterable, List, Union
import logging

from .domain.errors import InvalidConfigError
from .domain.models import ForecastPoint, ForecastSchedule, InventoryRecommendation
from .domain.validation import validate_safety_stock_pct, validate_starting_inventory


logger = logging.getLogger(__name__)


def _as_schedule(forecast: Union[ForecastSchedule, Iterable[ForecastPoint]]) -> ForecastSchedule:
    """Accept a ForecastSchedule as-is; validate the order of anything else."""
    if isinstance(forecast, ForecastSchedule):
        return forecast
    return ForecastSchedule(tuple(forecast))


def compute_period_order(
    forecast: float,
    remaining_inventory: float,
    safety_stock_pct: float,
) -> tuple:
    """
    Order quantity for a single period.

    Args:
        forecast: Forecast demand for the period
        remaining_inventory: Inventory available at period start
        safety_stock_pct: Safety stock percentage (0-100)

    Returns:
        (safety_stock, ideal_inventory, units_to_order, remaining_after)

    Examples:
        >>> compute_period_order(100.0, 100.0, 20.0)
        (20.0, 120.0, 20.0, 20.0)
        >>> compute_period_order(100.0, 200.0, 20.0)
        (20.0, 120.0, 0.0, 100.0)
    """
    safety_stock = forecast * (safety_stock_pct / 100)
    ideal_inventory = forecast + safety_stock
    units_to_order = max(0.0, ideal_inventory - remaining_inventory)
    remaining_after = remaining_inventory + units_to_order - forecast
    return safety_stock, ideal_inventory, units_to_order, remaining_after


def plan_inventory(
    forecast: Union[ForecastSchedule, Iterable[ForecastPoint]],
    starting_inventory: float,
    safety_stock_pct: float,
) -> List[InventoryRecommendation]:
    """
    Fold the forecast into reorder recommendations, oldest period first.

    Args:
        forecast: ForecastSchedule (other iterables must already be in
                  strictly increasing date order, else ValueError)
        starting_inventory: On-hand units before the first period (>= 0)
        safety_stock_pct: Safety stock percentage (0-100)

    Returns:
        One InventoryRecommendation per forecast point, same order

    Raises:
        InvalidConfigError: if starting_inventory or safety_stock_pct is out of range
        ValueError: if the forecast points are not chronological

    Examples:
        >>> recs = plan_inventory(schedule, starting_inventory=100, safety_stock_pct=20)
        >>> recs[0].units_to_order
        20.0
    """
    for is_valid, error in (
        validate_starting_inventory(starting_inventory),
        validate_safety_stock_pct(safety_stock_pct),
    ):
        if not is_valid:
            raise InvalidConfigError(error)

    schedule = _as_schedule(forecast)

    recommendations = []
    remaining = float(starting_inventory)

    for fp in schedule:
        safety_stock, ideal_inventory, units_to_order, remaining = compute_period_order(
            fp.point, remaining, safety_stock_pct
        )
        recommendations.append(InventoryRecommendation(
            period=fp.date.strftime("%Y-%m"),
            forecast=fp.point,
            safety_stock=safety_stock,
            ideal_inventory=ideal_inventory,
            units_to_order=units_to_order,
            remaining_inventory=remaining,
        ))

    logger.debug(
        f"Planned {len(recommendations)} periods from starting inventory {starting_inventory}: "
        f"total order {sum(r.units_to_order for r in recommendations):.2f}"
    )
    return recommendations
