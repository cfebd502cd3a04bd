"""Result objects returned to API and CLI callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from real_return_engine._vendor import make_json_safe
from real_return_engine.constants import Benchmark, get_benchmark_display_name
from real_return_engine.data_objects import ChartPoint, Position
from real_return_engine.history_reconstruction import history_frame
from real_return_engine.portfolio_summary import PortfolioSummary


@dataclass
class HistoryResult:
    """Reconstructed growth series for one benchmark choice."""

    benchmark: Benchmark
    points: List[ChartPoint] = field(default_factory=list)
    data_is_stale: bool = False

    def to_api_response(self) -> List[Dict[str, Any]]:
        """Chart rows as ``{"date", "portfolio", "benchmark", "inflation"}``."""
        return make_json_safe(self.points)

    def to_frame(self) -> pd.DataFrame:
        return history_frame(self.points)

    def to_cli_report(self) -> str:
        lines = [
            f"Growth since {self.points[0].year} vs {self.benchmark.value} "
            f"({get_benchmark_display_name(self.benchmark)})"
            if self.points
            else f"No history for {self.benchmark.value}",
        ]
        if self.data_is_stale:
            lines.append("  note: historical tables are out of date; recent years use default rates")
        lines.append(f"  {'Year':<6}{'Portfolio':>12}{'Benchmark':>12}{'Inflation':>12}")
        for p in self.points:
            lines.append(f"  {p.year:<6}{p.portfolio:>11.1f}%{p.benchmark:>11.1f}%{p.inflation:>11.1f}%")
        return "\n".join(lines)


@dataclass
class PortfolioReport:
    """Recomputed positions, portfolio totals and the growth series."""

    positions: List[Position]
    summary: PortfolioSummary
    history: HistoryResult
    warnings: Optional[List[str]] = None

    def to_api_response(self) -> Dict[str, Any]:
        payload = {
            "positions": self.positions,
            "summary": self.summary,
            "benchmark": self.history.benchmark,
            "chart": self.history.points,
        }
        if self.warnings:
            payload["warnings"] = list(self.warnings)
        return make_json_safe(payload)

    def to_cli_report(self) -> str:
        lines = [
            f"  {'Ticker':<8}{'Shares':>10}{'Avg Cost':>11}{'Price':>11}{'Years':>7}"
            f"{'Nominal':>10}{'Real':>9}{'CAGR':>9}{'Weight':>8}  Status",
        ]
        for p in self.positions:
            lines.append(
                f"  {p.ticker:<8}{p.shares:>10.2f}{p.avg_cost:>11.2f}{p.current_price:>11.2f}"
                f"{p.years_held:>7.2f}{p.nominal_return:>9.1f}%{p.inflation_adj_return:>8.1f}%"
                f"{p.cagr:>8.1f}%{p.weight:>7.1f}%  {p.status.value}"
            )
        s = self.summary
        lines += [
            "",
            f"  Total value {s.total_value:,.2f}  cost {s.total_cost:,.2f}  gain {s.total_gain:,.2f} "
            f"({s.total_return_pct:.1f}%)",
            f"  Capital-weighted age {s.weighted_years_held:.2f}y, inflation drag {s.inflation_drag:,.2f}",
            "",
            self.history.to_cli_report(),
        ]
        for warning in self.warnings or []:
            lines.append(f"WARNING: {warning}")
        return "\n".join(lines)
