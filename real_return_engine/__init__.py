"""Public API for real_return_engine."""

from real_return_engine.constants import Benchmark, PositionStatus
from real_return_engine.data_objects import ChartPoint, Position
from real_return_engine.history_reconstruction import history_frame, reconstruct_history
from real_return_engine.inflation import average_inflation_rate, cumulative_inflation
from real_return_engine.portfolio_analysis import analyze_portfolio, demo_portfolio, load_positions
from real_return_engine.portfolio_summary import (
    hydrate_prices,
    recalculate_weights,
    summarize_portfolio,
)
from real_return_engine.position_merge import merge_all, merge_into, merge_row_into_duplicate
from real_return_engine.position_stats import calculate_all, calculate_stats, classify_status
from real_return_engine.providers import (
    RateTableProvider,
    StaticRateTableProvider,
    get_rate_table_provider,
    set_rate_table_provider,
)
from real_return_engine.rate_tables import (
    RateTables,
    build_rate_tables,
    default_rate_tables,
    load_rate_tables,
)

__all__ = [
    "Benchmark",
    "PositionStatus",
    "ChartPoint",
    "Position",
    "history_frame",
    "reconstruct_history",
    "average_inflation_rate",
    "cumulative_inflation",
    "analyze_portfolio",
    "load_positions",
    "demo_portfolio",
    "hydrate_prices",
    "recalculate_weights",
    "summarize_portfolio",
    "merge_all",
    "merge_into",
    "merge_row_into_duplicate",
    "calculate_all",
    "calculate_stats",
    "classify_status",
    "RateTableProvider",
    "StaticRateTableProvider",
    "get_rate_table_provider",
    "set_rate_table_provider",
    "RateTables",
    "build_rate_tables",
    "default_rate_tables",
    "load_rate_tables",
]
