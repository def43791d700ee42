"""
Tests for synthetic example data.
"""

import pytest
from datetime import date
from salesforecast.example_data import MONTH_FACTORS, create_example_data
from salesforecast.ingest import load_series


class TestCreateExampleData:
    """Test generated rows."""

    def test_shape_and_dates(self):
        rows = create_example_data()

        assert len(rows) == 24
        assert rows[0]["date"] == "2023-01-01"
        assert rows[1]["date"] == "2023-02-01"
        assert rows[-1]["date"] == "2024-12-01"

    def test_reproducible_with_seed(self):
        assert create_example_data(random_seed=7) == create_example_data(random_seed=7)
        assert create_example_data(random_seed=7) != create_example_data(random_seed=8)

    def test_non_negative(self):
        for row in create_example_data(periods=36, trend=0.0):
            assert row["sales"] >= 0

    def test_noise_within_ten_percent(self):
        rows = create_example_data(periods=24, mean_sales=200.0, seasonality=False, trend=0.0)

        for row in rows:
            assert 180.0 <= row["sales"] <= 220.0

    def test_seasonality_scales_month(self):
        rows = create_example_data(start_date=date(2023, 2, 1), periods=1, trend=0.0)

        factor = MONTH_FACTORS[2]
        assert 90.0 * factor <= rows[0]["sales"] <= 110.0 * factor

    def test_trend_added_per_period(self):
        flat = create_example_data(periods=12, seasonality=False, trend=0.0)
        rising = create_example_data(periods=12, seasonality=False, trend=2.0)

        for i, (a, b) in enumerate(zip(flat, rising)):
            assert b["sales"] - a["sales"] == pytest.approx(2.0 * i)

    def test_loads_as_series(self):
        series = load_series(create_example_data())

        assert len(series) == 24
        assert series.last_date == date(2024, 12, 1)

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            create_example_data(periods=0)
        with pytest.raises(ValueError):
            create_example_data(mean_sales=-1)
        with pytest.raises(ValueError):
            create_example_data(start_date="not a date")
