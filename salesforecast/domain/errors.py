"""
Exceptions raised by the forecasting core.

Every failure is a caller-input problem: computation is pure and deterministic,
so nothing here is retryable.
"""


class ForecastError(Exception):
    """Base exception for forecast runs"""
    pass


class EmptySeriesError(ForecastError, ValueError):
    """Raised when no parsable observation survives ingestion"""
    pass


class InvalidConfigError(ForecastError, ValueError):
    """Raised when run or policy parameters are outside their documented ranges"""
    pass


class DegenerateBaselineError(ForecastError):
    """Raised when the baseline window is empty"""
    pass
