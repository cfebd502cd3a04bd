"""
Position merge engine.

Folds lots of the same instrument into one weighted-average position.
Tickers match case-insensitively; the existing entry keeps its place in the
list and its ticker casing.

Contract notes:
- Inputs are never mutated; every function returns a new list.
- Average cost is weighted by shares.
- Holding period is weighted by invested capital (shares * avg cost), so a
  small recent lot cannot drag the apparent age, and therefore the CAGR, of a
  large long-held lot.
- Every merged position is recomputed with ``calculate_stats``.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional

from real_return_engine.data_objects import Position
from real_return_engine.position_stats import calculate_stats, round_half_up
from real_return_engine.providers import resolve_rate_tables
from real_return_engine.rate_tables import RateTables


logger = logging.getLogger(__name__)


def find_position(portfolio: List[Position], ticker: str, exclude_index: Optional[int] = None) -> int:
    """Index of the first position matching ``ticker`` (any casing), or -1."""
    key = (ticker or "").strip().upper()
    for idx, position in enumerate(portfolio):
        if idx != exclude_index and position.normalized_ticker == key:
            return idx
    return -1


def merge_positions(existing: Position, incoming: Position, tables: Optional[RateTables] = None) -> Position:
    """Combine two lots of the same instrument into one recomputed position."""
    existing_shares = existing.shares or 0.0
    incoming_shares = incoming.shares or 0.0
    total_shares = existing_shares + incoming_shares

    if total_shares == 0:
        merged = dataclasses.replace(
            existing,
            name=incoming.name,
            sector=incoming.sector,
            current_price=incoming.current_price,
            last_updated=incoming.last_updated,
            shares=0.0,
            avg_cost=0.0,
            years_held=max(existing.years_held, incoming.years_held),
        )
        return calculate_stats(merged, tables)

    existing_cost = existing_shares * (existing.avg_cost or 0.0)
    incoming_cost = incoming_shares * (incoming.avg_cost or 0.0)
    weighted_avg_cost = (existing_cost + incoming_cost) / total_shares

    invested = existing_cost + incoming_cost
    if invested > 0:
        weighted_years = (
            existing_cost * existing.years_held + incoming_cost * incoming.years_held
        ) / invested
    else:
        # No cost basis on either lot (e.g. gifted shares)
        weighted_years = max(existing.years_held, incoming.years_held)

    merged = dataclasses.replace(
        existing,
        name=incoming.name or existing.name,
        sector=incoming.sector or existing.sector,
        current_price=incoming.current_price or existing.current_price,
        last_updated=incoming.last_updated or existing.last_updated,
        shares=total_shares,
        avg_cost=weighted_avg_cost,
        years_held=round_half_up(weighted_years, 2),
    )
    return calculate_stats(merged, tables)


def merge_into(
    portfolio: List[Position],
    incoming: Position,
    tables: Optional[RateTables] = None,
) -> List[Position]:
    """
    Merge ``incoming`` into the matching position of ``portfolio``.

    Without a match the incoming position is appended as-is. With a match the
    merged, recomputed position replaces the existing one at the same index.
    """
    existing_index = find_position(portfolio, incoming.ticker)
    if existing_index == -1:
        return [*portfolio, incoming]

    merged = merge_positions(portfolio[existing_index], incoming, tables)
    logger.debug(
        "Merged %s lot into %s: %.4f shares @ %.4f, %.2f years",
        incoming.ticker,
        merged.ticker,
        merged.shares,
        merged.avg_cost,
        merged.years_held,
    )
    return [*portfolio[:existing_index], merged, *portfolio[existing_index + 1:]]


def merge_all(
    current: List[Position],
    incoming: Iterable[Position],
    tables: Optional[RateTables] = None,
) -> List[Position]:
    """Fold every incoming position into ``current``, in order."""
    tables = resolve_rate_tables(tables)
    merged = list(current)
    for position in incoming:
        merged = merge_into(merged, position, tables)
    return merged


def merge_row_into_duplicate(
    portfolio: List[Position],
    index: int,
    tables: Optional[RateTables] = None,
) -> List[Position]:
    """
    Collapse the row at ``index`` into another row with the same ticker.

    Used after a ticker is edited in place: if the new ticker already exists
    elsewhere, that row absorbs this one and this row is dropped. Without a
    duplicate the list comes back unchanged (as a copy).
    """
    if not 0 <= index < len(portfolio):
        raise IndexError(f"Position index {index} out of range for {len(portfolio)} positions")

    row = portfolio[index]
    duplicate_index = find_position(portfolio, row.ticker, exclude_index=index)
    if not row.normalized_ticker or duplicate_index == -1:
        return list(portfolio)

    merged = list(portfolio)
    merged[duplicate_index] = merge_positions(portfolio[duplicate_index], row, tables)
    del merged[index]
    return merged
