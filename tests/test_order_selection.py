"""
Tests for advanced-mode ARIMA order selection.
"""

import pytest
from datetime import date
from dateutil.relativedelta import relativedelta
from salesforecast.domain.models import Observation, TimeSeries
from salesforecast.order_selection import ArimaOrder, HeuristicOrderSelector, OrderSelector
from salesforecast.stationarity import StationarityResult


def _monthly_series(values):
    start = date(2023, 1, 1)
    return TimeSeries(tuple(
        Observation(date=start + relativedelta(months=i), value=float(v))
        for i, v in enumerate(values)
    ))


class TestHeuristicOrderSelector:
    """Test the rule-of-thumb selector."""

    def test_short_stationary(self):
        order = HeuristicOrderSelector().select(_monthly_series([100] * 12))
        assert order.as_tuple() == (1, 0, 1)

    def test_long_stationary(self):
        order = HeuristicOrderSelector().select(_monthly_series([100] * 24))
        assert order.as_tuple() == (2, 0, 2)

    def test_long_non_stationary(self):
        order = HeuristicOrderSelector().select(_monthly_series([100] * 12 + [200] * 12))
        assert order.as_tuple() == (2, 1, 2)

    def test_uses_precomputed_stationarity(self):
        shifted = StationarityResult(
            is_stationary=False, first_avg=1.0, second_avg=2.0,
            percent_change=100.0, threshold_pct=10.0,
        )
        order = HeuristicOrderSelector().select(_monthly_series([100] * 12), shifted)
        assert order.d == 1

    def test_custom_history_threshold(self):
        selector = HeuristicOrderSelector(long_history_threshold=6)
        assert selector.select(_monthly_series([100] * 6)).p == 2
        assert selector.select(_monthly_series([100] * 5)).p == 1

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            HeuristicOrderSelector(long_history_threshold=0)


class TestArimaOrder:
    """Test the order value object."""

    def test_str(self):
        assert str(ArimaOrder(2, 1, 2)) == "ARIMA(2,1,2)"

    def test_negative_terms_rejected(self):
        with pytest.raises(ValueError):
            ArimaOrder(-1, 0, 1)

    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            OrderSelector()
