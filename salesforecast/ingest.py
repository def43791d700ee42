"""
Sales row ingestion.

Turns heterogeneous row dicts (as produced by a CSV/table parser) into a
sorted TimeSeries:
- Auto-detects the date and value columns from the first row's keys
- Parses values as finite real numbers, dropping rows that fail
- Parses dates (ISO or free-form), dropping rows that fail
- Sorts ascending by date (stable) and keeps the most recent observations
  when the input exceeds the observation cap
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, List, Mapping, Optional, Sequence

from dateutil import parser as dateparser

from .config import MAX_OBSERVATIONS
from .domain.errors import EmptySeriesError
from .domain.models import Observation, TimeSeries


logger = logging.getLogger(__name__)

# Fills fields absent from partial dates ("2023-05", "2023")
MISSING_DATE_PARTS = datetime(2000, 1, 1)


@dataclass(frozen=True)
class ColumnRule:
    """A column-resolution rule: matches a lower-cased key, with a readable reason."""
    predicate: Callable[[str], bool]
    reason: str


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda key: any(k in key for k in keywords)


DATE_COLUMN_RULES = [
    ColumnRule(_contains_any("date", "time"), "name contains 'date' or 'time'"),
]

VALUE_COLUMN_RULES = [
    ColumnRule(
        _contains_any("sales", "amount", "price", "quantity"),
        "name contains 'sales', 'amount', 'price' or 'quantity'",
    ),
]


@dataclass(frozen=True)
class ColumnResolution:
    """Resolved date/value columns and why each was chosen."""
    date_column: Optional[str]
    value_column: Optional[str]
    date_reason: str
    value_reason: str


def resolve_column(
    keys: Sequence[str],
    rules: Sequence[ColumnRule],
    fallback_index: int,
) -> tuple:
    """
    Pick a column by the first matching rule, else by position.

    Rules are tried in order; within a rule, keys are scanned in declaration
    order and matched case-insensitively.

    Args:
        keys: Column names in declaration order
        rules: Ordered resolution rules
        fallback_index: Position used when no rule matches

    Returns:
        (column or None, reason)
    """
    for rule in rules:
        for key in keys:
            if rule.predicate(str(key).lower()):
                return key, rule.reason

    if fallback_index < len(keys):
        return keys[fallback_index], f"fallback to column #{fallback_index + 1}"

    return None, f"no column #{fallback_index + 1} to fall back to"


def resolve_columns(rows: Sequence[Mapping[str, Any]]) -> ColumnResolution:
    """
    Resolve the date and value columns from the first row's keys.

    Raises:
        EmptySeriesError: if there are no rows
    """
    if not rows:
        raise EmptySeriesError("No rows to ingest")

    keys = list(rows[0].keys())
    date_column, date_reason = resolve_column(keys, DATE_COLUMN_RULES, 0)
    value_column, value_reason = resolve_column(keys, VALUE_COLUMN_RULES, 1)

    return ColumnResolution(
        date_column=date_column,
        value_column=value_column,
        date_reason=date_reason,
        value_reason=value_reason,
    )


def parse_value(raw: Any) -> Optional[float]:
    """
    Parse a sales value as a finite real number.

    Returns:
        float, or None when the value is missing, non-numeric, NaN or infinite
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
    else:
        return None

    return value if math.isfinite(value) else None


def parse_date(raw: Any) -> Optional[date]:
    """
    Parse an observation date.

    Returns:
        date, or None when the value cannot be interpreted as a calendar date

    Missing parts default to month 1 and day 1, so "2023-05" is 2023-05-01.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None

    try:
        return dateparser.parse(raw.strip(), default=MISSING_DATE_PARTS).date()
    except (ValueError, OverflowError):
        return None


def load_series(
    rows: Sequence[Mapping[str, Any]],
    max_observations: int = MAX_OBSERVATIONS,
) -> TimeSeries:
    """
    Normalize raw rows into a chronological TimeSeries.

    Args:
        rows: Row dicts with arbitrary string keys
        max_observations: Keep at most this many (most recent) observations

    Returns:
        TimeSeries sorted ascending by date

    Raises:
        EmptySeriesError: if no row has a parsable value and date

    Example:
        >>> series = load_series([{"Date": "2023-01-01", "Sales": "10"}])
        >>> series.values
        [10.0]
    """
    resolution = resolve_columns(rows)
    logger.debug(
        f"Resolved columns: date={resolution.date_column!r} ({resolution.date_reason}), "
        f"value={resolution.value_column!r} ({resolution.value_reason})"
    )

    observations: List[Observation] = []
    n_bad_value = 0
    n_bad_date = 0

    for row in rows:
        value = parse_value(row.get(resolution.value_column)) if resolution.value_column is not None else None
        if value is None:
            n_bad_value += 1
            continue

        obs_date = parse_date(row.get(resolution.date_column))
        if obs_date is None:
            n_bad_date += 1
            continue

        observations.append(Observation(date=obs_date, value=value))

    if n_bad_value:
        logger.debug(f"Dropped {n_bad_value} rows with non-numeric {resolution.value_column!r}")
    if n_bad_date:
        logger.warning(f"Dropped {n_bad_date} rows with unparseable {resolution.date_column!r}")

    if not observations:
        raise EmptySeriesError(
            f"No valid sales data found (date column {resolution.date_column!r}, "
            f"value column {resolution.value_column!r})"
        )

    # Stable sort keeps same-day rows in input order
    observations.sort(key=lambda obs: obs.date)

    if len(observations) > max_observations:
        logger.warning(
            f"Series has {len(observations)} observations, keeping the most recent {max_observations}"
        )
        observations = observations[-max_observations:]

    return TimeSeries(tuple(observations))
