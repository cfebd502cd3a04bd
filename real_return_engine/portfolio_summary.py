"""
Portfolio-level helpers around the position calculators.

Pure computation with no I/O; prices arrive already fetched.

Key functions:
- recalculate_weights(): market-value weight of each position
- hydrate_prices(): apply a fetched price map to stored positions
- summarize_portfolio(): totals, capital-weighted age and inflation drag
"""

from __future__ import annotations

import dataclasses
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from real_return_engine.constants import PositionStatus
from real_return_engine.data_objects import Position, _coerce_number
from real_return_engine.inflation import cumulative_inflation
from real_return_engine.position_stats import calculate_stats, round_half_up
from real_return_engine.providers import resolve_rate_tables
from real_return_engine.rate_tables import RateTables


logger = logging.getLogger(__name__)

TOP_HOLDINGS_COUNT = 10


def _market_values(portfolio: List[Position]) -> np.ndarray:
    values = np.array(
        [(p.current_price or 0.0) * (p.shares or 0.0) for p in portfolio],
        dtype=float,
    )
    return np.where(np.isfinite(values), values, 0.0)


def recalculate_weights(portfolio: List[Position]) -> List[Position]:
    """
    Set each position's weight to its share of total market value, in
    percent rounded to one decimal. All weights are 0 for a worthless
    portfolio.
    """
    values = _market_values(portfolio)
    total = float(values.sum())
    if total == 0:
        return [dataclasses.replace(p, weight=0.0) for p in portfolio]
    return [
        dataclasses.replace(p, weight=round_half_up(value / total * 100, 1))
        for p, value in zip(portfolio, values)
    ]


def hydrate_prices(
    portfolio: List[Position],
    price_map: Mapping[str, Mapping[str, Any]],
    last_updated: Optional[str] = None,
    tables: Optional[RateTables] = None,
) -> List[Position]:
    """
    Refresh current prices from a master price map keyed by uppercase ticker.

    Only entries with a positive ``price`` are applied; those positions are
    recomputed. Positions without a usable quote keep their stored price.
    """
    tables = resolve_rate_tables(tables)
    hydrated: List[Position] = []
    for position in portfolio:
        quote = price_map.get(position.normalized_ticker) or {}
        price = _coerce_number(quote.get("price"))
        if price > 0:
            refreshed = dataclasses.replace(
                position,
                current_price=float(price),
                last_updated=last_updated if last_updated is not None else position.last_updated,
            )
            hydrated.append(calculate_stats(refreshed, tables))
        else:
            if position.normalized_ticker:
                logger.debug("No price for %s in master price map", position.normalized_ticker)
            hydrated.append(position)
    return hydrated


@dataclass
class PortfolioSummary:
    total_value: float = 0.0
    total_cost: float = 0.0
    total_gain: float = 0.0
    total_return_pct: float = 0.0
    weighted_years_held: float = 0.0
    inflation_drag: float = 0.0
    top_holdings_weight: float = 0.0
    status_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


def summarize_portfolio(portfolio: List[Position], tables: Optional[RateTables] = None) -> PortfolioSummary:
    """
    Portfolio totals.

    ``weighted_years_held`` weights each position's holding period by its
    cost basis, the same rule the merge engine uses. ``inflation_drag`` is
    the purchasing power the invested capital lost over that period:
    ``total_cost * cumulative_inflation(weighted_years_held)``.
    ``top_holdings_weight`` is the percent of market value held by the ten
    largest positions.
    """
    if not portfolio:
        return PortfolioSummary(status_counts={s.value: 0 for s in PositionStatus})

    values = _market_values(portfolio)
    costs = np.array([(p.avg_cost or 0.0) * (p.shares or 0.0) for p in portfolio], dtype=float)
    costs = np.where(np.isfinite(costs), costs, 0.0)
    years = np.array([p.years_held or 0.0 for p in portfolio], dtype=float)

    total_value = float(values.sum())
    total_cost = float(costs.sum())
    total_gain = total_value - total_cost
    total_return_pct = total_gain / total_cost * 100 if total_cost > 0 else 0.0
    weighted_years = float((costs * years).sum() / total_cost) if total_cost > 0 else float(years.max())

    top_value = float(np.sort(values)[::-1][:TOP_HOLDINGS_COUNT].sum())
    top_weight = top_value / total_value * 100 if total_value > 0 else 0.0

    counts = Counter(p.status.value for p in portfolio)

    return PortfolioSummary(
        total_value=round(total_value, 2),
        total_cost=round(total_cost, 2),
        total_gain=round(total_gain, 2),
        total_return_pct=round_half_up(total_return_pct, 1),
        weighted_years_held=round_half_up(weighted_years, 2),
        inflation_drag=round(total_cost * cumulative_inflation(weighted_years, resolve_rate_tables(tables)), 2),
        top_holdings_weight=round_half_up(top_weight, 1),
        status_counts={s.value: counts.get(s.value, 0) for s in PositionStatus},
    )
