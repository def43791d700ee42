"""
Project configuration and constants.

Run parameters (horizon, safety stock, starting inventory, mode) come from the
caller per invocation. Forecast policy constants live here and can be
overridden from the "forecast_policy" section of a JSON settings file.
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from .domain.errors import InvalidConfigError


logger = logging.getLogger(__name__)


# Default run parameters
DEFAULT_HORIZON_STEPS = 3
DEFAULT_WINDOW_SIZE = 6
DEFAULT_SAFETY_STOCK_PCT = 20.0
DEFAULT_STARTING_INVENTORY = 100.0

# Input bound recommended for callers (observations per series)
MAX_OBSERVATIONS = 365

# Default policy constants
DEFAULT_STATIONARITY_THRESHOLD_PCT = 10.0
DEFAULT_TREND_WINDOW = 6
DEFAULT_MIN_SEASONAL_POINTS = 12
DEFAULT_UNCERTAINTY_FACTOR = 0.1
DEFAULT_LONG_HISTORY_THRESHOLD = 24
DEFAULT_DIFFERENCING_ORDER = 1

SETTINGS_SECTION = "forecast_policy"


@dataclass(frozen=True)
class ForecastPolicy:
    """
    Tunable constants of the forecasting heuristics.

    Attributes:
        stationarity_threshold_pct: Half-over-half mean change (%) below which
            a series is considered stationary
        trend_window: Number of most recent observations used for the trend slope
        min_seasonal_points: Minimum series length before monthly factors are computed
        uncertainty_factor: Relative band half-width at one step ahead
        long_history_threshold: Series length from which the order heuristic picks p=q=2
        differencing_order: Lag used to difference non-stationary series
        max_observations: Most recent observations kept by ingestion
    """
    stationarity_threshold_pct: float = DEFAULT_STATIONARITY_THRESHOLD_PCT
    trend_window: int = DEFAULT_TREND_WINDOW
    min_seasonal_points: int = DEFAULT_MIN_SEASONAL_POINTS
    uncertainty_factor: float = DEFAULT_UNCERTAINTY_FACTOR
    long_history_threshold: int = DEFAULT_LONG_HISTORY_THRESHOLD
    differencing_order: int = DEFAULT_DIFFERENCING_ORDER
    max_observations: int = MAX_OBSERVATIONS

    def __post_init__(self):
        if not self.stationarity_threshold_pct > 0:
            raise InvalidConfigError(
                f"stationarity_threshold_pct must be > 0, got {self.stationarity_threshold_pct}"
            )
        if self.trend_window < 1:
            raise InvalidConfigError(f"trend_window must be >= 1, got {self.trend_window}")
        if self.min_seasonal_points < 1:
            raise InvalidConfigError(
                f"min_seasonal_points must be >= 1, got {self.min_seasonal_points}"
            )
        if not self.uncertainty_factor >= 0:
            raise InvalidConfigError(
                f"uncertainty_factor must be >= 0, got {self.uncertainty_factor}"
            )
        if self.long_history_threshold < 1:
            raise InvalidConfigError(
                f"long_history_threshold must be >= 1, got {self.long_history_threshold}"
            )
        if self.differencing_order < 1:
            raise InvalidConfigError(
                f"differencing_order must be >= 1, got {self.differencing_order}"
            )
        if self.max_observations < 1:
            raise InvalidConfigError(
                f"max_observations must be >= 1, got {self.max_observations}"
            )


DEFAULT_POLICY = ForecastPolicy()


def normalize_policy_settings(section: Dict[str, Any]) -> ForecastPolicy:
    """
    Build a ForecastPolicy from a settings section.

    Unknown keys are ignored. A value that cannot be converted or is out of
    range falls back to its default (logged), so this never raises.

    Args:
        section: Mapping of policy field name -> raw value

    Returns:
        Normalized ForecastPolicy
    """
    accepted: Dict[str, Any] = {}

    for f in fields(ForecastPolicy):
        if f.name not in section:
            continue
        raw = section[f.name]
        caster = int if f.type in (int, "int") else float
        try:
            if caster is int and isinstance(raw, float) and not raw.is_integer():
                raise ValueError(f"{f.name} must be an integer, got {raw}")
            value = caster(raw)
            # Validate this field in isolation against the defaults
            ForecastPolicy(**{f.name: value})
        except (TypeError, ValueError) as e:
            logger.warning(
                f"Invalid forecast policy value {f.name}={raw!r}, using default: {e}"
            )
            continue
        accepted[f.name] = value

    return ForecastPolicy(**accepted)


def load_policy(settings_file: Optional[Union[str, Path]] = None) -> ForecastPolicy:
    """
    Load the forecast policy from a JSON settings file.

    Args:
        settings_file: Path to settings.json (None = defaults)

    Returns:
        ForecastPolicy (defaults when the file or section is missing or unreadable)
    """
    if settings_file is None:
        return DEFAULT_POLICY

    path = Path(settings_file)
    if not path.exists():
        logger.debug(f"Settings file {path} not found, using default forecast policy")
        return DEFAULT_POLICY

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
        logger.warning(f"Cannot read settings file {path}, using default forecast policy: {e}")
        return DEFAULT_POLICY

    section = settings.get(SETTINGS_SECTION, {}) if isinstance(settings, dict) else {}
    if not isinstance(section, dict):
        logger.warning(f"'{SETTINGS_SECTION}' in {path} is not an object, using defaults")
        return DEFAULT_POLICY

    return normalize_policy_settings(section)
