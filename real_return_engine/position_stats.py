"""
Position statistics calculator.

Derives nominal return, inflation-adjusted (real) return, CAGR and a status
tag from a position's cost, price and holding period. Pure functions: inputs
are never mutated, a new ``Position`` carrying the derived fields comes back.

Rounding happens here, not at display time: every percent is rounded to one
decimal (half away from zero) and status is classified from the rounded real
return, so merges and comparisons downstream see the same numbers the user
does.
"""

from __future__ import annotations

import dataclasses
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from real_return_engine import config
from real_return_engine.constants import PositionStatus
from real_return_engine.data_objects import Position
from real_return_engine.inflation import cumulative_inflation
from real_return_engine.providers import resolve_rate_tables
from real_return_engine.rate_tables import RateTables


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like JavaScript's ``toFixed``: exact binary value, ties away from zero."""
    if not math.isfinite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def classify_status(real_return: float) -> PositionStatus:
    """Status from a rounded real return; both lower bounds are inclusive."""
    thresholds = config.STATUS_THRESHOLDS
    if real_return >= thresholds["beating"]:
        return PositionStatus.BEATING_INFLATION
    if real_return >= thresholds["losing"]:
        return PositionStatus.TRACKING_MARKET
    return PositionStatus.LOSING_POWER


def effective_years(years_held: float) -> float:
    """Holding period used for CAGR; anything under a year counts as one year."""
    return max(years_held, 1) if years_held > 0 else 1


def calculate_stats(position: Position, tables: Optional[RateTables] = None) -> Position:
    """
    Return a copy of ``position`` with its derived fields recomputed.

    Only ``nominal_return``, ``inflation_adj_return``, ``cagr`` and ``status``
    change. A position without a positive cost and price gets zeros and the
    neutral ``Tracking Market`` status.
    """
    cost = position.avg_cost
    price = position.current_price

    if not (cost > 0 and price > 0):
        return dataclasses.replace(
            position,
            nominal_return=0.0,
            inflation_adj_return=0.0,
            cagr=0.0,
            status=PositionStatus.TRACKING_MARKET,
        )

    nominal = (price - cost) / cost * 100

    inflation = cumulative_inflation(position.years_held, tables)
    real = ((1 + nominal / 100) / (1 + inflation) - 1) * 100

    cagr = ((price / cost) ** (1 / effective_years(position.years_held)) - 1) * 100

    rounded_real = round_half_up(real, 1)
    return dataclasses.replace(
        position,
        nominal_return=round_half_up(nominal, 1),
        inflation_adj_return=rounded_real,
        cagr=round_half_up(cagr, 1),
        status=classify_status(rounded_real),
    )


def calculate_all(positions: Iterable[Position], tables: Optional[RateTables] = None) -> List[Position]:
    """Recompute every position, preserving order."""
    tables = resolve_rate_tables(tables)
    return [calculate_stats(p, tables) for p in positions]
