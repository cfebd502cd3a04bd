#!/usr/bin/env python3
# coding: utf-8

"""Command-line runner for the real-return engine.

Examples:
    python run_real_return.py --portfolio portfolio.yaml
    python run_real_return.py --demo --benchmark VTI --json
    python run_real_return.py --portfolio portfolio.json --tables my_rates.yaml --year 2025
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from real_return_engine import config
from real_return_engine.constants import Benchmark
from real_return_engine.portfolio_analysis import DEMO_PORTFOLIO_PATH, analyze_portfolio, load_positions
from real_return_engine.rate_tables import load_rate_tables


def run_report(
    portfolio_path: str,
    benchmark: str = "VT",
    tables_path: Optional[str] = None,
    year: Optional[int] = None,
    as_json: bool = False,
) -> str:
    """Analyse a portfolio file and return the rendered report."""
    positions = load_positions(portfolio_path)
    tables = load_rate_tables(tables_path) if tables_path else None
    report = analyze_portfolio(positions, benchmark=benchmark, tables=tables, current_year=year)
    if as_json:
        return json.dumps(report.to_api_response(), indent=2)
    return report.to_cli_report()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Inflation-adjusted portfolio performance report")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--portfolio", type=str, help="Path to YAML or JSON positions file")
    source.add_argument("--demo", action="store_true", help="Use the bundled sample portfolio")
    parser.add_argument(
        "--benchmark",
        type=str,
        default=Benchmark.VT.value,
        choices=[b.value for b in Benchmark],
        help="Benchmark fund for the growth chart",
    )
    parser.add_argument("--tables", type=str, help="YAML file with inflation and benchmark tables")
    parser.add_argument("--year", type=int, help="Treat this as the current year")
    parser.add_argument("--json", action="store_true", help="Emit the API payload as JSON")
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL, help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        output = run_report(
            str(DEMO_PORTFOLIO_PATH) if args.demo else args.portfolio,
            benchmark=args.benchmark,
            tables_path=args.tables,
            year=args.year,
            as_json=args.json,
        )
    except (OSError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
