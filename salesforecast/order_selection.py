"""
ARIMA order selection for the "advanced" forecast mode.

The advanced mode is a trend + seasonal baseline with an order-selection
diagnostic, not a fitted ARIMA model. The selected (p, d, q) is reported and
logged but does not change the forecast numbers.

Selectors implement the OrderSelector interface so a real AR/MA estimator can
replace the heuristic without touching the forecaster.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_LONG_HISTORY_THRESHOLD
from .domain.models import TimeSeries
from .stationarity import StationarityResult, check_stationarity


@dataclass(frozen=True)
class ArimaOrder:
    """(p, d, q) order: autoregressive lags, differencing order, moving-average lags."""
    p: int
    d: int
    q: int

    def __post_init__(self):
        if min(self.p, self.d, self.q) < 0:
            raise ValueError(f"ARIMA order terms must be >= 0, got {self.as_tuple()}")

    def as_tuple(self) -> tuple:
        return (self.p, self.d, self.q)

    def __str__(self) -> str:
        return f"ARIMA({self.p},{self.d},{self.q})"


class OrderSelector(ABC):
    """Contract for (p, d, q) selection strategies. No I/O, no side effects."""

    @abstractmethod
    def select(
        self,
        series: TimeSeries,
        stationarity: Optional[StationarityResult] = None,
    ) -> ArimaOrder:
        """
        Choose an order for `series`.

        Args:
            series: Observations, oldest first
            stationarity: Precomputed stationarity result (computed if None)
        """


class HeuristicOrderSelector(OrderSelector):
    """
    Rule-of-thumb order selection.

    - d = 1 if the series is non-stationary, else 0
    - p = q = 2 with at least `long_history_threshold` observations, else 1
    """

    def __init__(self, long_history_threshold: int = DEFAULT_LONG_HISTORY_THRESHOLD):
        if long_history_threshold < 1:
            raise ValueError(
                f"long_history_threshold must be >= 1, got {long_history_threshold}"
            )
        self.long_history_threshold = long_history_threshold

    def select(
        self,
        series: TimeSeries,
        stationarity: Optional[StationarityResult] = None,
    ) -> ArimaOrder:
        if stationarity is None:
            stationarity = check_stationarity(series.values)

        d = 0 if stationarity.is_stationary else 1
        lags = 2 if len(series) >= self.long_history_threshold else 1
        return ArimaOrder(p=lags, d=d, q=lags)
