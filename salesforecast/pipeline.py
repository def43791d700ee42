"""
Forecast run pipeline.

Single flow, each stage returning a new RunState:
    ingest()
        → assess_stationarity()
            → select_order()          (advanced mode: differencing + order diagnostics)
                → fit()
                    → forecast()
                        → plan()
                            → ForecastResult

A run is a pure function of (rows, RunConfig, ForecastPolicy); the only carried
state is the chronological inventory fold inside plan().
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple
import logging

from .config import DEFAULT_POLICY, ForecastPolicy
from .domain.models import (
    ForecastMode,
    ForecastSchedule,
    InventoryRecommendation,
    RunConfig,
    TimeSeries,
)
from .forecast import ForecastModel, ForecastSummary, fit_forecast_model, predict, summarize_forecast
from .ingest import load_series
from .order_selection import ArimaOrder, HeuristicOrderSelector, OrderSelector
from .replenishment_policy import plan_inventory
from .stationarity import StationarityResult, check_stationarity, difference


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunState:
    """
    Immutable state of one forecast run.

    Fields are filled stage by stage; a stage never modifies the state it
    receives.
    """
    config: RunConfig
    policy: ForecastPolicy
    series: Optional[TimeSeries] = None
    stationarity: Optional[StationarityResult] = None
    differenced: Optional[Tuple[float, ...]] = None  # diagnostic only, not forecast input
    diff_order: int = 0
    order: Optional[ArimaOrder] = None
    model: Optional[ForecastModel] = None
    schedule: Optional[ForecastSchedule] = None
    recommendations: Tuple[InventoryRecommendation, ...] = ()


@dataclass(frozen=True)
class ForecastResult:
    """Output of a forecast run."""
    forecast: ForecastSchedule
    recommendations: Tuple[InventoryRecommendation, ...]
    summary: ForecastSummary
    state: RunState

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for JSON output.

        Dates are ISO calendar dates, periods are YYYY-MM.
        """
        state = self.state
        diagnostics: Dict[str, Any] = {
            "mode": state.config.mode.value,
            "n_observations": len(state.series),
            "baseline": state.model.baseline,
            "trend": state.model.trend,
            "seasonal_factors": {str(m): f for m, f in sorted(state.model.profile.factors.items())},
            "stationary": state.stationarity.is_stationary,
            "percent_change": state.stationarity.percent_change,
        }
        if state.config.mode is ForecastMode.ADVANCED:
            diagnostics["diff_order"] = state.diff_order
            diagnostics["differenced"] = list(state.differenced) if state.differenced is not None else None
            diagnostics["arima_order"] = list(state.order.as_tuple()) if state.order else None

        return {
            "forecast": [
                {
                    "date": p.date.isoformat(),
                    "forecasted_sales": p.point,
                    "lower_ci": p.lower,
                    "upper_ci": p.upper,
                }
                for p in self.forecast
            ],
            "recommendations": [
                {
                    "period": r.period,
                    "forecast": r.forecast,
                    "safety_stock": r.safety_stock,
                    "ideal_inventory": r.ideal_inventory,
                    "units_to_order": r.units_to_order,
                    "remaining_inventory": r.remaining_inventory,
                }
                for r in self.recommendations
            ],
            "summary": {
                "past_avg": self.summary.past_avg,
                "future_avg": self.summary.future_avg,
                "change_percent": self.summary.change_percent,
                "direction": self.summary.direction,
            },
            "diagnostics": diagnostics,
        }


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------

def ingest(state: RunState, rows: Sequence[Mapping[str, Any]]) -> RunState:
    series = load_series(rows, max_observations=state.policy.max_observations)
    logger.info(f"Loaded {len(series)} observations ({series.dates[0]} .. {series.last_date})")
    return replace(state, series=series)


def assess_stationarity(state: RunState) -> RunState:
    result = check_stationarity(state.series.values, state.policy.stationarity_threshold_pct)
    return replace(state, stationarity=result)


def select_order(state: RunState, selector: OrderSelector) -> RunState:
    """
    Differencing and order diagnostics for advanced mode.

    Non-stationary series are differenced to record the transformed series;
    the forecast itself is computed on the original values.
    """
    differenced = None
    diff_order = 0
    if not state.stationarity.is_stationary:
        diff_order = state.policy.differencing_order
        differenced = tuple(difference(state.series.values, diff_order))
        logger.info(
            f"Series non-stationary ({state.stationarity.percent_change:.2f}% change), "
            f"differenced with order {diff_order} ({len(differenced)} values)"
        )

    order = selector.select(state.series, state.stationarity)
    logger.info(f"Selected {order} (diagnostic only, forecast unchanged)")

    return replace(state, differenced=differenced, diff_order=diff_order, order=order)


def fit(state: RunState) -> RunState:
    model = fit_forecast_model(state.series, state.config.window_size, state.policy)
    return replace(state, model=model)


def forecast(state: RunState) -> RunState:
    return replace(state, schedule=predict(state.model, state.config.horizon_steps))


def plan(state: RunState) -> RunState:
    recommendations = plan_inventory(
        state.schedule,
        starting_inventory=state.config.starting_inventory,
        safety_stock_pct=state.config.safety_stock_pct,
    )
    return replace(state, recommendations=tuple(recommendations))


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def run_series(
    series: TimeSeries,
    config: RunConfig,
    policy: Optional[ForecastPolicy] = None,
    order_selector: Optional[OrderSelector] = None,
) -> ForecastResult:
    """
    Run forecast + replenishment planning on an already-built series.

    Args:
        series: Observations, oldest first
        config: Run parameters
        policy: Forecast policy (defaults if None)
        order_selector: Strategy for advanced-mode order selection
                        (HeuristicOrderSelector if None)

    Returns:
        ForecastResult
    """
    policy = policy or DEFAULT_POLICY
    state = RunState(config=config, policy=policy, series=series)

    state = assess_stationarity(state)
    if config.mode is ForecastMode.ADVANCED:
        selector = order_selector or HeuristicOrderSelector(policy.long_history_threshold)
        state = select_order(state, selector)

    state = plan(forecast(fit(state)))

    return ForecastResult(
        forecast=state.schedule,
        recommendations=state.recommendations,
        summary=summarize_forecast(state.series, state.schedule),
        state=state,
    )


def run_forecast(
    rows: Sequence[Mapping[str, Any]],
    config: RunConfig,
    policy: Optional[ForecastPolicy] = None,
    order_selector: Optional[OrderSelector] = None,
) -> ForecastResult:
    """
    Full run from raw rows: ingestion, forecast and reorder plan.

    Args:
        rows: Row dicts with a date-like and a numeric column
        config: Run parameters
        policy: Forecast policy (defaults if None)
        order_selector: Strategy for advanced-mode order selection

    Returns:
        ForecastResult

    Raises:
        EmptySeriesError: if no row is parsable
    """
    policy = policy or DEFAULT_POLICY
    state = ingest(RunState(config=config, policy=policy), rows)
    logger.info(
        f"Generating {config.mode.value} forecast for {config.horizon_steps} periods"
    )
    return run_series(state.series, config, policy, order_selector)
