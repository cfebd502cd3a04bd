"""Tests for the inflation accumulator."""

import pytest

from real_return_engine import config
from real_return_engine.inflation import average_inflation_rate, cumulative_inflation
from conftest import make_tables


def test_zero_and_negative_years_have_no_inflation(five_percent_tables):
    assert cumulative_inflation(0, five_percent_tables) == 0
    assert cumulative_inflation(-2, five_percent_tables) == 0
    assert cumulative_inflation(0) == 0


def test_compounds_geometrically_not_linearly(five_percent_tables):
    """Two years at 5% is 10.25%, not 10%."""
    result = cumulative_inflation(2, five_percent_tables)

    assert result == pytest.approx(0.1025)
    assert result != pytest.approx(0.10)


def test_partial_year_uses_exponent():
    """The fractional remainder compounds as (1 + r) ** remainder."""
    tables = make_tables(5.0, 10.0, first_year=2024, last_year=2025, inflation_overrides={2025: 10.0})

    result = cumulative_inflation(1.5, tables)

    # Most recent year (2025, 10%) first, then half of 2024 (5%)
    assert result == pytest.approx(1.10 * 1.05 ** 0.5 - 1)
    assert result != pytest.approx(1.10 * (1 + 0.05 * 0.5) - 1)


def test_years_past_table_use_default_rate(five_percent_tables):
    result = cumulative_inflation(3.5, five_percent_tables)

    expected = 1.05 * 1.05 * 1.03 * 1.03 ** 0.5 - 1
    assert result == pytest.approx(expected)


def test_default_rate_is_configurable(five_percent_tables):
    config.configure(DEFAULT_ANNUAL_INFLATION=0.0)

    assert cumulative_inflation(4, five_percent_tables) == pytest.approx(0.1025)


def test_recorded_history_grows_with_time():
    five = cumulative_inflation(5)
    ten = cumulative_inflation(10)

    assert 0 < five < ten
    assert cumulative_inflation(2) < 0.5


def test_average_rate_is_arithmetic_mean():
    tables = make_tables(2.0, 10.0, first_year=2023, last_year=2025, inflation_overrides={2024: 4.0, 2025: 6.0})

    # 2024 and 2025 fall in a two-year window ending 2026
    assert average_inflation_rate(2, tables, current_year=2026) == pytest.approx(0.05)
    assert average_inflation_rate(3, tables, current_year=2026) == pytest.approx(0.04)


def test_average_rate_falls_back_when_window_is_empty(five_percent_tables):
    assert average_inflation_rate(0, five_percent_tables, current_year=2030) == pytest.approx(0.035)

    config.configure(AVERAGE_INFLATION_FALLBACK=0.02)
    assert average_inflation_rate(0, five_percent_tables, current_year=2030) == pytest.approx(0.02)


def test_very_long_holding_compounds_default_in_one_step(five_percent_tables):
    assert cumulative_inflation(1e9, five_percent_tables) == float("inf")
    assert cumulative_inflation(102, five_percent_tables) == pytest.approx(1.05 ** 2 * 1.03 ** 100 - 1)
