"""
Tests for monthly seasonal factors.
"""

import pytest
from datetime import date
from dateutil.relativedelta import relativedelta
from salesforecast.domain.models import Observation, SeasonalProfile, TimeSeries
from salesforecast.seasonality import seasonal_profile


def _monthly_series(values, start=date(2023, 1, 1)):
    """Build a monthly series starting at `start`."""
    return TimeSeries(tuple(
        Observation(date=start + relativedelta(months=i), value=v)
        for i, v in enumerate(values)
    ))


class TestSeasonalProfile:
    """Test factor computation."""

    def test_short_series_is_neutral(self):
        profile = seasonal_profile(_monthly_series([10, 20, 30] * 3))

        assert profile.is_neutral
        for month in range(1, 13):
            assert profile.factor(month) == 1.0

    def test_twelve_points_average_to_one(self):
        profile = seasonal_profile(_monthly_series(list(range(1, 13))))

        factors = [profile.factor(m) for m in range(1, 13)]
        assert sum(factors) / 12 == pytest.approx(1.0, abs=1e-9)
        assert profile.factor(12) == pytest.approx(12 / 6.5)
        assert profile.factor(1) == pytest.approx(1 / 6.5)

    def test_constant_series_is_flat(self):
        profile = seasonal_profile(_monthly_series([80.0] * 24))

        for month in range(1, 13):
            assert profile.factor(month) == pytest.approx(1.0)

    def test_december_peak(self):
        values = [200.0 if (i % 12) == 11 else 100.0 for i in range(24)]
        profile = seasonal_profile(_monthly_series(values))

        overall = (22 * 100 + 2 * 200) / 24
        assert profile.factor(12) == pytest.approx(200 / overall)
        assert profile.factor(6) == pytest.approx(100 / overall)
        assert profile.factor(12) > 1.0 > profile.factor(6)

    def test_months_without_data_read_as_one(self):
        """Twelve weekly points all fall in Jan-Mar."""
        series = TimeSeries(tuple(
            Observation(date=date(2023, 1, 2) + relativedelta(weeks=i), value=10.0 + i)
            for i in range(12)
        ))
        profile = seasonal_profile(series)

        assert set(profile.factors) == {1, 2, 3}
        assert profile.factor(7) == 1.0

    def test_all_zero_sales_is_neutral(self):
        profile = seasonal_profile(_monthly_series([0.0] * 12))

        assert profile.is_neutral

    def test_min_points_override(self):
        series = _monthly_series([10.0, 30.0, 20.0])

        assert seasonal_profile(series).is_neutral
        profile = seasonal_profile(series, min_seasonal_points=3)
        assert profile.factor(2) == pytest.approx(1.5)

    def test_default_profile_is_neutral(self):
        assert SeasonalProfile().is_neutral
        assert SeasonalProfile().factor(5) == 1.0
