"""
Tests for domain models and parameter validation rules.
"""

import pytest
from datetime import date
from salesforecast.domain.errors import EmptySeriesError
from salesforecast.domain.models import InventoryRecommendation, Observation, TimeSeries
from salesforecast.domain.validation import (
    validate_float_range,
    validate_horizon_steps,
    validate_int_range,
    validate_safety_stock_pct,
    validate_starting_inventory,
    validate_window_size,
)


class TestTimeSeries:
    """Test series construction invariants."""

    def test_empty_rejected(self):
        with pytest.raises(EmptySeriesError):
            TimeSeries(())

    def test_unsorted_rejected(self):
        with pytest.raises(ValueError):
            TimeSeries((
                Observation(date(2023, 2, 1), 1.0),
                Observation(date(2023, 1, 1), 2.0),
            ))

    def test_same_day_allowed(self):
        series = TimeSeries([Observation(date(2023, 1, 1), 1.0), Observation(date(2023, 1, 1), 2.0)])

        assert len(series) == 2
        assert isinstance(series.observations, tuple)

    def test_accessors(self):
        series = TimeSeries((Observation(date(2023, 1, 1), 1.0), Observation(date(2023, 2, 1), 2.0)))

        assert series.values == [1.0, 2.0]
        assert series.dates == [date(2023, 1, 1), date(2023, 2, 1)]
        assert series.last_date == date(2023, 2, 1)

    def test_non_finite_observation_rejected(self):
        with pytest.raises(ValueError):
            Observation(date(2023, 1, 1), float("nan"))


class TestInventoryRecommendation:
    def test_negative_order_rejected(self):
        with pytest.raises(ValueError):
            InventoryRecommendation("2025-01", 100.0, 20.0, 120.0, -1.0, 20.0)


class TestValidation:
    """Test (is_valid, message) rules."""

    def test_horizon_bounds(self):
        assert validate_horizon_steps(1) == (True, "")
        assert validate_horizon_steps(12) == (True, "")
        assert validate_horizon_steps(0) == (False, "horizon_steps must be >= 1, got 0")
        assert validate_horizon_steps(13)[0] is False

    def test_window_bounds(self):
        assert validate_window_size(6)[0]
        assert not validate_window_size(7)[0]

    def test_int_rejects_bool_and_float(self):
        assert not validate_int_range(True, "x", 0)[0]
        assert not validate_int_range(1.0, "x", 0)[0]

    def test_float_rejects_non_finite(self):
        assert not validate_float_range(float("inf"), "x", 0.0)[0]
        assert not validate_float_range("5", "x", 0.0)[0]
        assert validate_float_range(5, "x", 0.0)[0]

    def test_safety_stock_and_inventory(self):
        assert validate_safety_stock_pct(0)[0]
        assert validate_safety_stock_pct(100)[0]
        assert not validate_safety_stock_pct(100.5)[0]
        assert validate_starting_inventory(0)[0]
        assert not validate_starting_inventory(-0.01)[0]
