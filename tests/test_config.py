"""
Tests for forecast policy loading from settings.json.
"""

import json
import pytest
from salesforecast.config import (
    DEFAULT_POLICY,
    ForecastPolicy,
    load_policy,
    normalize_policy_settings,
)
from salesforecast.domain.errors import InvalidConfigError


def _write_settings(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestForecastPolicy:
    """Test policy defaults and validation."""

    def test_defaults(self):
        policy = ForecastPolicy()

        assert policy.stationarity_threshold_pct == 10.0
        assert policy.trend_window == 6
        assert policy.min_seasonal_points == 12
        assert policy.uncertainty_factor == 0.1
        assert policy.long_history_threshold == 24
        assert policy.differencing_order == 1
        assert policy.max_observations == 365

    @pytest.mark.parametrize("kwargs", [
        {"stationarity_threshold_pct": 0},
        {"trend_window": 0},
        {"min_seasonal_points": 0},
        {"uncertainty_factor": -0.1},
        {"uncertainty_factor": float("nan")},
        {"long_history_threshold": 0},
        {"differencing_order": 0},
        {"max_observations": 0},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(InvalidConfigError):
            ForecastPolicy(**kwargs)


class TestLoadPolicy:
    """Test settings file handling."""

    def test_no_file_uses_defaults(self):
        assert load_policy(None) == DEFAULT_POLICY

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_policy(tmp_path / "nope.json") == DEFAULT_POLICY

    def test_overrides_applied(self, tmp_path):
        path = _write_settings(tmp_path, {
            "forecast_policy": {"trend_window": 12, "stationarity_threshold_pct": 5},
            "other_section": {"ignored": True},
        })
        policy = load_policy(path)

        assert policy.trend_window == 12
        assert policy.stationarity_threshold_pct == 5.0
        assert policy.min_seasonal_points == 12

    def test_invalid_json_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_policy(path) == DEFAULT_POLICY

    def test_undecodable_file_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_bytes(b"\xff\xfe{\x00")

        assert load_policy(path) == DEFAULT_POLICY

    def test_missing_section_uses_defaults(self, tmp_path):
        assert load_policy(_write_settings(tmp_path, {"ui": {}})) == DEFAULT_POLICY

    def test_non_object_section_uses_defaults(self, tmp_path):
        path = _write_settings(tmp_path, {"forecast_policy": [1, 2, 3]})
        assert load_policy(path) == DEFAULT_POLICY

    def test_accepts_string_path(self, tmp_path):
        path = _write_settings(tmp_path, {"forecast_policy": {"uncertainty_factor": 0.2}})
        assert load_policy(str(path)).uncertainty_factor == 0.2


class TestNormalizePolicySettings:
    """Test per-field fallback."""

    def test_bad_values_fall_back_individually(self):
        policy = normalize_policy_settings({
            "trend_window": "abc",
            "uncertainty_factor": -1,
            "min_seasonal_points": 6,
        })

        assert policy.trend_window == 6
        assert policy.uncertainty_factor == 0.1
        assert policy.min_seasonal_points == 6

    def test_numeric_strings_converted(self):
        policy = normalize_policy_settings({"trend_window": "12", "stationarity_threshold_pct": "7.5"})

        assert policy.trend_window == 12
        assert policy.stationarity_threshold_pct == 7.5

    def test_non_integral_float_falls_back(self):
        policy = normalize_policy_settings({"min_seasonal_points": 6.9, "long_history_threshold": 36.0})

        assert policy.min_seasonal_points == 12
        assert policy.long_history_threshold == 36

    def test_none_value_falls_back(self):
        assert normalize_policy_settings({"differencing_order": None}).differencing_order == 1

    def test_unknown_keys_ignored(self):
        assert normalize_policy_settings({"colour": "blue"}) == DEFAULT_POLICY
