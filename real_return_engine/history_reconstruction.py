"""
Historical series reconstruction.

Builds a year-by-year growth chart for a whole portfolio when only two prices
are known per position: the average cost and the current price.

Each position's missing history is synthesised backward from today's price.
The path follows the chosen benchmark's real annual returns, shifted by a
constant alpha (the position's CAGR minus the benchmark's CAGR over the same
trailing window), so it moves like the market did, only better or worse, and
still lands on the known current price. This is an illustration, not a
record of what the holdings actually did.

Benchmark and inflation lines are not synthesised: they compound the
recorded annual figures forward from the window's baseline year.

Key functions:
- chart_window(): first and last year of the chart
- benchmark_cagr(): benchmark's annualised return over a trailing window
- simulate_price_path(): one position's synthetic yearly prices
- reconstruct_history(): the full ChartPoint series
- history_frame(): ChartPoints as a year-indexed DataFrame
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from real_return_engine import config
from real_return_engine._logging import log_operation
from real_return_engine.constants import BENCHMARK_INCEPTION_YEAR, Benchmark, DEFAULT_BENCHMARK
from real_return_engine.data_objects import ChartPoint, Position
from real_return_engine.position_stats import round_half_up
from real_return_engine.providers import resolve_rate_tables
from real_return_engine.rate_tables import RateTables


logger = logging.getLogger(__name__)


def _finite_or_zero(value: float) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0.0
    return numeric if math.isfinite(numeric) else 0.0


def chart_window(portfolio: Sequence[Position], current_year: int) -> Tuple[int, int]:
    """
    ``(start_year, end_year)`` for the chart.

    The window covers the longest holding plus one baseline year at 0% growth
    so the first real year's move is visible, spans at least two years of
    holding, and never starts before the benchmark's inception.
    """
    max_years = max((_finite_or_zero(p.years_held) for p in portfolio), default=0.0)
    start_year = current_year - max(math.ceil(max_years), 2) - 1
    return max(start_year, BENCHMARK_INCEPTION_YEAR), current_year


def benchmark_cagr(benchmark_returns: pd.Series, years: float, current_year: int) -> float:
    """
    Annualised benchmark return (fraction) over the trailing holding window.

    Compounds every recorded year from ``current_year - max(1, floor(years))``
    onward and takes the geometric mean. Falls back to
    ``config.ALPHA_FALLBACK_BENCHMARK_CAGR`` when no year is recorded.
    """
    holding_start = current_year - max(1, math.floor(years))
    window = benchmark_returns[benchmark_returns.index >= holding_start]
    if window.empty:
        return config.ALPHA_FALLBACK_BENCHMARK_CAGR
    total = float(np.prod(1 + window.to_numpy(dtype=float) / 100))
    return total ** (1 / len(window)) - 1


def simulate_price_path(
    position: Position,
    tables: RateTables,
    benchmark: Union[Benchmark, str],
    start_year: int,
    current_year: int,
) -> np.ndarray:
    """
    Synthetic year-end prices for ``position`` from ``start_year`` to
    ``current_year``, ending exactly at the current price.

    Walking backward, each prior price is ``price / (1 + market + alpha)``
    where ``market`` is the benchmark's recorded return for that year. A
    position whose alpha overflows yields an all-NaN path.
    """
    n_years = current_year - start_year + 1
    years = position.years_held or 1

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        price = np.float64(position.current_price)
        position_cagr = (price / position.avg_cost) ** (1 / years) - 1
        alpha = position_cagr - benchmark_cagr(tables.benchmark_returns(benchmark), years, current_year)
        if not np.isfinite(alpha):
            logger.debug("Alpha for %s is not finite; no price path", position.ticker)
            return np.full(n_years, np.nan)

        path = np.zeros(n_years, dtype=float)
        sim_price = price
        for i in range(n_years - 1, -1, -1):
            path[i] = sim_price
            market = tables.benchmark_return(benchmark, start_year + i, config.ALPHA_MISSING_YEAR_RETURN)
            sim_price = sim_price / (1 + market / 100 + alpha)
    return path


def _compound_index(rates: Sequence[float]) -> np.ndarray:
    """Index starting at 100 in the first year, compounding from the second."""
    growth = 1 + np.asarray(rates, dtype=float) / 100
    growth[0] = 1.0
    return 100 * np.cumprod(growth)


@log_operation("reconstruct_history")
def reconstruct_history(
    portfolio: Sequence[Position],
    benchmark: Union[Benchmark, str] = DEFAULT_BENCHMARK,
    tables: Optional[RateTables] = None,
    current_year: Optional[int] = None,
) -> List[ChartPoint]:
    """
    Year-by-year cumulative growth of the portfolio, the benchmark and
    inflation, each in percent relative to the first year (always 0).

    Positions without a positive cost and price are left out; an empty
    portfolio yields a flat portfolio line beside the benchmark and inflation
    lines. Years missing from a table use the configured chart defaults.
    """
    tables = resolve_rate_tables(tables)
    benchmark = Benchmark.parse(benchmark)
    current_year = current_year or date.today().year

    start_year, end_year = chart_window(portfolio, current_year)
    years = list(range(start_year, end_year + 1))

    portfolio_values = np.zeros(len(years), dtype=float)
    for position in portfolio:
        if not position.ticker:
            continue
        if not (_finite_or_zero(position.avg_cost) > 0 and _finite_or_zero(position.current_price) > 0):
            logger.debug("Skipping %s in history: needs positive cost and price", position.ticker)
            continue

        path = simulate_price_path(position, tables, benchmark, start_year, end_year)
        with np.errstate(invalid="ignore", over="ignore"):
            values = path * _finite_or_zero(position.shares)
        finite = np.isfinite(values)
        if not finite.all():
            logger.debug("Dropping %d non-finite years for %s", int((~finite).sum()), position.ticker)
        portfolio_values += np.where(finite, values, 0.0)

    if portfolio_values[0] > 0:
        portfolio_growth = portfolio_values / portfolio_values[0] * 100 - 100
    else:
        portfolio_growth = np.zeros(len(years), dtype=float)

    benchmark_growth = _compound_index(
        [tables.benchmark_return(benchmark, y, config.CHART_BENCHMARK_FALLBACK) for y in years]
    ) - 100
    inflation_growth = _compound_index(
        [tables.inflation_rate(y, config.CHART_INFLATION_FALLBACK) for y in years]
    ) - 100

    points: List[ChartPoint] = []
    for i, year in enumerate(years):
        if i == 0:
            points.append(ChartPoint(year=str(year), portfolio=0.0, benchmark=0.0, inflation=0.0))
            continue
        points.append(
            ChartPoint(
                year=str(year),
                portfolio=round_half_up(portfolio_growth[i], 1),
                benchmark=round_half_up(benchmark_growth[i], 1),
                inflation=round_half_up(inflation_growth[i], 1),
            )
        )
    return points


def history_frame(points: Sequence[ChartPoint]) -> pd.DataFrame:
    """ChartPoints as a DataFrame indexed by integer year."""
    frame = pd.DataFrame(
        [[int(p.year), p.portfolio, p.benchmark, p.inflation] for p in points],
        columns=["year", "portfolio", "benchmark", "inflation"],
    )
    return frame.set_index("year")
