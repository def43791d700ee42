"""
Centralized validation rules for run parameters.

Each function returns (is_valid, error_message) so callers decide whether to
raise or to fall back to a default.
"""
import math
from typing import Optional, Tuple


MIN_HORIZON_STEPS = 1
MAX_HORIZON_STEPS = 12
MIN_WINDOW_SIZE = 1
MAX_WINDOW_SIZE = 6
MIN_SAFETY_STOCK_PCT = 0.0
MAX_SAFETY_STOCK_PCT = 100.0


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_int_range(value, field_name: str, min_val: int, max_val: Optional[int] = None) -> Tuple[bool, str]:
    """
    Validate an integer against an inclusive range.

    Args:
        value: Value to validate
        field_name: Field name for error message
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive), None for unbounded

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, int) or isinstance(value, bool):
        return False, f"{field_name} must be an integer, got {value!r}"

    if value < min_val:
        return False, f"{field_name} must be >= {min_val}, got {value}"

    if max_val is not None and value > max_val:
        return False, f"{field_name} must be <= {max_val}, got {value}"

    return True, ""


def validate_float_range(value, field_name: str, min_val: float, max_val: Optional[float] = None) -> Tuple[bool, str]:
    """
    Validate a finite real number against an inclusive range.

    Args:
        value: Value to validate
        field_name: Field name for error message
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive), None for unbounded

    Returns:
        (is_valid, error_message)
    """
    if not _is_number(value) or not math.isfinite(value):
        return False, f"{field_name} must be a finite number, got {value!r}"

    if value < min_val:
        return False, f"{field_name} must be >= {min_val}, got {value}"

    if max_val is not None and value > max_val:
        return False, f"{field_name} must be <= {max_val}, got {value}"

    return True, ""


def validate_horizon_steps(horizon_steps) -> Tuple[bool, str]:
    """Forecast horizon in months (1-12)."""
    return validate_int_range(horizon_steps, "horizon_steps", MIN_HORIZON_STEPS, MAX_HORIZON_STEPS)


def validate_window_size(window_size) -> Tuple[bool, str]:
    """Baseline window in observations (1-6)."""
    return validate_int_range(window_size, "window_size", MIN_WINDOW_SIZE, MAX_WINDOW_SIZE)


def validate_safety_stock_pct(safety_stock_pct) -> Tuple[bool, str]:
    """Safety stock as a percentage of forecast demand (0-100)."""
    return validate_float_range(
        safety_stock_pct, "safety_stock_pct", MIN_SAFETY_STOCK_PCT, MAX_SAFETY_STOCK_PCT
    )


def validate_starting_inventory(starting_inventory) -> Tuple[bool, str]:
    """On-hand units at the start of the plan (>= 0)."""
    return validate_float_range(starting_inventory, "starting_inventory", 0.0)
