"""
Inflation accumulator.

Turns a holding period into cumulative purchasing-power loss using the
recorded annual inflation table, newest year first.

Key functions:
- cumulative_inflation(): compounded multiplier-minus-one over a holding period
- average_inflation_rate(): plain arithmetic mean of recent annual rates
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

import numpy as np

from real_return_engine import config
from real_return_engine.providers import resolve_rate_tables
from real_return_engine.rate_tables import RateTables


logger = logging.getLogger(__name__)


def cumulative_inflation(years_held: float, tables: Optional[RateTables] = None) -> float:
    """
    Compounded inflation over ``years_held`` years, as multiplier minus one.

    Full years compound the most recent annual rates, walking backward; the
    fractional remainder compounds the next rate geometrically,
    ``(1 + rate) ** remainder``. Years older than the table use
    ``config.DEFAULT_ANNUAL_INFLATION``.

    Returns 0.0 for ``years_held <= 0``. ``0.1025`` means +10.25%.
    """
    if years_held is None or not years_held > 0:
        return 0.0

    tables = resolve_rate_tables(tables)
    rates = tables.inflation.iloc[::-1].tolist()
    default = config.DEFAULT_ANNUAL_INFLATION

    full_years = math.floor(years_held)
    remainder = years_held - full_years

    def rate_at(offset: int) -> float:
        return rates[offset] if offset < len(rates) else default

    total = 1.0
    for offset in range(min(full_years, len(rates))):
        total *= 1 + rates[offset] / 100

    untabled_years = full_years - len(rates)
    if untabled_years > 0:
        logger.debug("%d years before the inflation table, using default %.2f", untabled_years, default)
        with np.errstate(over="ignore"):
            total = float(total * np.power(1 + default / 100, untabled_years, dtype=float))

    if remainder > 0:
        total *= (1 + rate_at(full_years) / 100) ** remainder

    return total - 1


def average_inflation_rate(
    years: float,
    tables: Optional[RateTables] = None,
    current_year: Optional[int] = None,
) -> float:
    """
    Arithmetic mean of the annual rates for the trailing ``years`` years, as a
    fraction (``0.032`` means 3.2%/yr).

    A rough estimate for when no holding period is known; it is not the
    compounded figure and should not be used in place of
    ``cumulative_inflation``.
    """
    tables = resolve_rate_tables(tables)
    current_year = current_year or date.today().year
    start_year = current_year - math.floor(years)

    window = tables.inflation[tables.inflation.index >= start_year]
    if window.empty:
        return config.AVERAGE_INFLATION_FALLBACK
    return float(window.mean()) / 100
