"""
Portfolio analysis entry point.

Called by:
    - ``run_real_return.main`` (CLI)
    - applications that want the whole pipeline in one call

Primary flow:
    1) Resolve rate tables (explicit, else the registered provider).
    2) Recompute every position's statistics.
    3) Fold duplicate tickers into weighted-average positions.
    4) Recompute market-value weights.
    5) Summarise the portfolio and reconstruct the growth series.
    6) Return ``PortfolioReport``.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

import yaml

from real_return_engine._logging import log_operation, log_portfolio_operation, log_timing
from real_return_engine.constants import Benchmark, DEFAULT_BENCHMARK
from real_return_engine.data_objects import Position, positions_from_records
from real_return_engine.history_reconstruction import reconstruct_history
from real_return_engine.portfolio_summary import recalculate_weights, summarize_portfolio
from real_return_engine.position_merge import merge_all
from real_return_engine.position_stats import calculate_all
from real_return_engine.providers import resolve_rate_tables
from real_return_engine.rate_tables import RateTables, check_data_currency
from real_return_engine.results import HistoryResult, PortfolioReport


def load_positions(path: Union[str, Path]) -> List[Position]:
    """
    Read positions from a YAML or JSON file.

    Accepts either a bare list of position records or a mapping with a
    ``positions`` list. Records may use snake_case or stored camelCase keys.
    """
    path = Path(path)
    with open(path, "r") as f:
        if path.suffix.lower() == ".json":
            payload = json.load(f)
        else:
            try:
                payload = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"{path} is not valid YAML: {exc}") from exc

    if isinstance(payload, Mapping):
        payload = payload.get("positions")
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a list of positions or a 'positions' list")
    return positions_from_records(payload)


DEMO_PORTFOLIO_PATH = Path(__file__).resolve().parent / "data" / "demo_portfolio.yaml"


def demo_portfolio(tables: Optional[RateTables] = None) -> List[Position]:
    """Sample positions for new users, recomputed and weighted."""
    positions = calculate_all(load_positions(DEMO_PORTFOLIO_PATH), tables)
    return recalculate_weights(positions)


@log_operation("portfolio_analysis")
@log_timing(2.0)
def analyze_portfolio(
    positions: Sequence[Union[Position, Mapping[str, Any]]],
    benchmark: Union[Benchmark, str] = DEFAULT_BENCHMARK,
    tables: Optional[RateTables] = None,
    current_year: Optional[int] = None,
) -> PortfolioReport:
    """
    Run the full pipeline over ``positions`` and return ``PortfolioReport``.

    Contract notes:
    - ``positions`` may mix ``Position`` objects and raw record mappings.
    - Duplicate tickers are merged in list order; the first occurrence keeps
      its place and ticker casing.
    - Nothing is persisted and no prices are fetched.
    """
    tables = resolve_rate_tables(tables)
    benchmark = Benchmark.parse(benchmark)
    current_year = current_year or date.today().year

    parsed = [p if isinstance(p, Position) else Position.from_dict(p) for p in positions]
    recomputed = calculate_all(parsed, tables)
    merged = merge_all([], recomputed, tables)
    weighted = recalculate_weights(merged)

    warnings: List[str] = []
    stale = check_data_currency(tables, current_year)
    if stale:
        warnings.append(
            f"Historical data ends in {tables.last_data_year}; later years use default rates."
        )
    if len(merged) < len(parsed):
        warnings.append(f"Merged {len(parsed) - len(merged)} duplicate ticker lot(s).")

    history = HistoryResult(
        benchmark=benchmark,
        points=reconstruct_history(weighted, benchmark, tables, current_year),
        data_is_stale=stale,
    )
    summary = summarize_portfolio(weighted, tables)

    log_portfolio_operation(
        "portfolio_analysis",
        {"positions": len(weighted), "benchmark": benchmark.value, "years": len(history.points)},
    )
    return PortfolioReport(positions=weighted, summary=summary, history=history, warnings=warnings or None)
