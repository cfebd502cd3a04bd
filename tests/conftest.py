"""Pytest configuration and fixtures."""

import pytest

from real_return_engine import config
from real_return_engine.constants import Benchmark
from real_return_engine.data_objects import Position
from real_return_engine.providers import set_rate_table_provider
from real_return_engine.rate_tables import build_rate_tables


@pytest.fixture(autouse=True)
def reset_engine_state():
    """Each test starts from default config and the bundled tables."""
    config.reset()
    set_rate_table_provider(None)
    yield
    config.reset()
    set_rate_table_provider(None)


def make_tables(inflation_rate, benchmark_return, first_year=2000, last_year=2026, inflation_overrides=None, **overrides):
    """Flat-rate tables; ``overrides`` replaces a benchmark's table by name."""
    years = range(first_year, last_year + 1)
    inflation = {y: inflation_rate for y in years}
    inflation.update(inflation_overrides or {})
    benchmarks = {b.value: {y: benchmark_return for y in years} for b in Benchmark}
    benchmarks.update(overrides)
    return build_rate_tables(
        inflation=inflation,
        benchmarks=benchmarks,
        last_data_year=last_year,
    )


@pytest.fixture
def five_percent_tables():
    """Two years of 5% inflation (2024, 2025); older years use the default rate."""
    return make_tables(5.0, 10.0, first_year=2024, last_year=2025)


@pytest.fixture
def flat_tables():
    """2% inflation and a 10% return for every benchmark, 2000 through 2026."""
    return make_tables(2.0, 10.0)


def make_position(ticker="TEST", avg_cost=100.0, current_price=100.0, shares=10.0, years_held=1.0, **kwargs):
    return Position(
        ticker=ticker,
        name=kwargs.pop("name", "Test Stock"),
        avg_cost=avg_cost,
        current_price=current_price,
        shares=shares,
        years_held=years_held,
        sector=kwargs.pop("sector", "Test"),
        **kwargs,
    )


@pytest.fixture
def position_factory():
    return make_position


@pytest.fixture
def sample_portfolio():
    return [
        make_position("AAPL", avg_cost=155.0, current_price=271.0, shares=40, years_held=3, name="Apple Inc."),
        make_position("INTC", avg_cost=55.0, current_price=39.0, shares=150, years_held=4, name="Intel Corp"),
        make_position("COST", avg_cost=720.0, current_price=855.0, shares=10, years_held=2, name="Costco Wholesale"),
    ]
