"""
Domain models for the sales forecasting engine.

Pure data classes + value objects. No I/O, no side effects.
Deterministic and fully testable.
"""
import math
from dataclasses import dataclass, field
from datetime import date as Date
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from .errors import EmptySeriesError, InvalidConfigError
from .validation import (
    validate_horizon_steps,
    validate_safety_stock_pct,
    validate_starting_inventory,
    validate_window_size,
)


class ForecastMode(str, Enum):
    """Forecast run mode."""
    BASIC = "basic"        # Trend + seasonal baseline
    ADVANCED = "advanced"  # Same numbers, plus stationarity/differencing/order diagnostics


@dataclass(frozen=True)
class Observation:
    """Single sales observation - immutable."""
    date: Date
    value: float

    def __post_init__(self):
        if not math.isfinite(self.value):
            raise ValueError(f"Observation value must be finite, got {self.value}")


@dataclass(frozen=True)
class TimeSeries:
    """Chronological sequence of observations (oldest first) - immutable."""
    observations: Tuple[Observation, ...]

    def __post_init__(self):
        object.__setattr__(self, "observations", tuple(self.observations))
        if not self.observations:
            raise EmptySeriesError("Time series must contain at least one observation")
        for prev, curr in zip(self.observations, self.observations[1:]):
            if curr.date < prev.date:
                raise ValueError(
                    f"Observations must be sorted by date: {curr.date} follows {prev.date}"
                )

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    @property
    def values(self) -> List[float]:
        return [obs.value for obs in self.observations]

    @property
    def dates(self) -> List[Date]:
        return [obs.date for obs in self.observations]

    @property
    def last_date(self) -> Date:
        return self.observations[-1].date


@dataclass(frozen=True)
class SeasonalProfile:
    """
    Multiplicative demand factor per calendar month (1-12).

    Months absent from ``factors`` are neutral (1.0).
    """
    factors: Dict[int, float] = field(default_factory=dict)

    def factor(self, month: int) -> float:
        return self.factors.get(month, 1.0)

    @property
    def is_neutral(self) -> bool:
        return all(f == 1.0 for f in self.factors.values())


@dataclass(frozen=True)
class ForecastPoint:
    """Point forecast with confidence band for one future period."""
    date: Date
    point: float
    lower: float
    upper: float

    def __post_init__(self):
        if self.lower < 0:
            raise ValueError(f"lower must be >= 0, got {self.lower}")
        if not self.lower <= self.point <= self.upper:
            raise ValueError(
                f"Expected lower <= point <= upper, got {self.lower}, {self.point}, {self.upper}"
            )

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class ForecastSchedule:
    """
    Forecast points in strictly increasing date order.

    Construction rejects unsorted or duplicated periods, so anything holding a
    ForecastSchedule can fold over it chronologically without re-checking.
    """
    points: Tuple[ForecastPoint, ...]

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))
        for prev, curr in zip(self.points, self.points[1:]):
            if curr.date <= prev.date:
                raise ValueError(
                    f"Forecast points must be in strictly increasing date order: "
                    f"{curr.date} follows {prev.date}"
                )

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ForecastPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> ForecastPoint:
        return self.points[index]


@dataclass(frozen=True)
class InventoryRecommendation:
    """Reorder recommendation for one forecast period - immutable."""
    period: str                 # YYYY-MM
    forecast: float
    safety_stock: float
    ideal_inventory: float      # forecast + safety_stock
    units_to_order: float
    remaining_inventory: float  # carried into the next period

    def __post_init__(self):
        if self.units_to_order < 0:
            raise ValueError(f"units_to_order must be >= 0, got {self.units_to_order}")


@dataclass(frozen=True)
class RunConfig:
    """
    Caller-supplied parameters for one forecast run.

    Raises InvalidConfigError when any value is outside its documented range.
    """
    horizon_steps: int = 3
    window_size: int = 6
    safety_stock_pct: float = 20.0
    starting_inventory: float = 100.0
    mode: ForecastMode = ForecastMode.BASIC

    def __post_init__(self):
        for is_valid, error in (
            validate_horizon_steps(self.horizon_steps),
            validate_window_size(self.window_size),
            validate_safety_stock_pct(self.safety_stock_pct),
            validate_starting_inventory(self.starting_inventory),
        ):
            if not is_valid:
                raise InvalidConfigError(error)

        try:
            object.__setattr__(self, "mode", ForecastMode(self.mode))
        except ValueError:
            raise InvalidConfigError(
                f"mode must be one of {[m.value for m in ForecastMode]}, got {self.mode!r}"
            ) from None
