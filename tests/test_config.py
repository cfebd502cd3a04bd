"""Tests for runtime configuration."""

import pytest

from real_return_engine import config


def test_defaults():
    assert config.DEFAULT_ANNUAL_INFLATION == 3.0
    assert config.AVERAGE_INFLATION_FALLBACK == 0.035
    assert config.CHART_BENCHMARK_FALLBACK == 7.0
    assert config.CHART_INFLATION_FALLBACK == 2.5
    assert config.ALPHA_FALLBACK_BENCHMARK_CAGR == 0.08
    assert config.ALPHA_MISSING_YEAR_RETURN == 8.0
    assert config.STATUS_THRESHOLDS == {"beating": 1.0, "losing": -1.0}


def test_configure_and_reset():
    config.configure(DEFAULT_ANNUAL_INFLATION=4.0)
    assert config.DEFAULT_ANNUAL_INFLATION == 4.0

    config.reset()
    assert config.DEFAULT_ANNUAL_INFLATION == 3.0


def test_unknown_key_is_rejected():
    with pytest.raises(KeyError):
        config.configure(NOT_A_SETTING=1)


def test_reset_restores_a_fresh_thresholds_dict():
    config.STATUS_THRESHOLDS["beating"] = 50.0

    config.reset()

    assert config.STATUS_THRESHOLDS["beating"] == 1.0
