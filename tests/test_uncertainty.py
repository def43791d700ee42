"""
Tests for the forecast uncertainty band.

Validates √t scaling and lower-bound clamping.
"""

import pytest
from salesforecast.uncertainty import confidence_band, uncertainty_over_horizon


class TestUncertaintyOverHorizon:
    """Test band half-width."""

    def test_one_step(self):
        assert uncertainty_over_horizon(100.0, 1) == pytest.approx(10.0)

    def test_sqrt_scaling(self):
        assert uncertainty_over_horizon(100.0, 4) == pytest.approx(20.0)
        assert uncertainty_over_horizon(100.0, 9) == pytest.approx(30.0)

    def test_custom_factor(self):
        assert uncertainty_over_horizon(100.0, 1, factor=0.25) == pytest.approx(25.0)

    def test_non_positive_inputs(self):
        assert uncertainty_over_horizon(0.0, 3) == 0.0
        assert uncertainty_over_horizon(-5.0, 3) == 0.0
        assert uncertainty_over_horizon(100.0, 0) == 0.0
        assert uncertainty_over_horizon(100.0, 1, factor=0.0) == 0.0

    def test_monotonic_in_step(self):
        widths = [uncertainty_over_horizon(50.0, t) for t in range(1, 13)]
        assert widths == sorted(widths)


class TestConfidenceBand:
    """Test lower/upper bounds."""

    def test_symmetric_when_narrow(self):
        lower, upper = confidence_band(100.0, 1)

        assert lower == pytest.approx(90.0)
        assert upper == pytest.approx(110.0)

    def test_lower_clamped_at_zero(self):
        lower, upper = confidence_band(10.0, 100)

        assert lower == 0.0
        assert upper == pytest.approx(20.0)

    def test_zero_point(self):
        assert confidence_band(0.0, 5) == (0.0, 0.0)
