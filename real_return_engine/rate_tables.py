"""Historical inflation and benchmark-return tables.

Tables are read-only inputs: year-indexed ``pd.Series`` of annual percentages.
The bundled YAML holds the recorded history; callers that want different data
(tests, what-if tables) build their own ``RateTables`` and pass it explicitly.

Contract notes:
- Series are indexed by ``int`` year and sorted ascending.
- Values are percents (``3.4`` means +3.4%), never fractions.
- Every ``Benchmark`` member must have a table.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import pandas as pd
import yaml

from real_return_engine import config
from real_return_engine.constants import Benchmark


logger = logging.getLogger(__name__)

BUNDLED_TABLES_PATH = Path(__file__).resolve().parent / "data" / "historical_rates.yaml"


def _to_series(raw: Any, label: str) -> pd.Series:
    if not isinstance(raw, Mapping) or not raw:
        raise ValueError(f"Rate table '{label}' must be a non-empty mapping of year -> percent")
    try:
        values = {int(year): float(rate) for year, rate in raw.items()}
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Rate table '{label}' has a non-numeric entry ({exc})") from None
    series = pd.Series(values, dtype=float, name=label).sort_index()
    series.index.name = "year"
    return series


@dataclass(frozen=True, eq=False)
class RateTables:
    """Inflation and per-benchmark annual return tables."""

    inflation: pd.Series
    benchmarks: Dict[Benchmark, pd.Series]
    last_data_year: int

    def benchmark_returns(self, benchmark: Union[Benchmark, str]) -> pd.Series:
        return self.benchmarks[Benchmark.parse(benchmark)]

    def inflation_rate(self, year: int, default: float) -> float:
        return _lookup(self.inflation, year, default)

    def benchmark_return(self, benchmark: Union[Benchmark, str], year: int, default: float) -> float:
        return _lookup(self.benchmark_returns(benchmark), year, default)


def _lookup(series: pd.Series, year: int, default: float) -> float:
    value = series.get(year)
    if value is None or pd.isna(value):
        logger.debug("No %s entry for %s, using default %.2f", series.name, year, default)
        return default
    return float(value)


def build_rate_tables(
    inflation: Mapping[Any, Any],
    benchmarks: Mapping[Any, Mapping[Any, Any]],
    last_data_year: Optional[int] = None,
) -> RateTables:
    """Build ``RateTables`` from plain ``{year: percent}`` mappings."""
    inflation_series = _to_series(inflation, "inflation")

    parsed: Dict[Benchmark, pd.Series] = {}
    for name, table in (benchmarks or {}).items():
        bench = Benchmark.parse(name)
        parsed[bench] = _to_series(table, bench.value)

    missing = [b.value for b in Benchmark if b not in parsed]
    if missing:
        raise ValueError(f"Missing benchmark return tables: {', '.join(missing)}")

    if last_data_year is None:
        last_data_year = int(inflation_series.index.max())

    return RateTables(
        inflation=inflation_series,
        benchmarks=parsed,
        last_data_year=int(last_data_year),
    )


def load_rate_tables(path: Union[str, Path]) -> RateTables:
    """Load tables from a YAML file (see ``data/historical_rates.yaml``)."""
    with open(path, "r") as f:
        try:
            payload = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Rate table file {path} is not valid YAML: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Rate table file {path} must contain a mapping")
    return build_rate_tables(
        payload.get("inflation"),
        payload.get("benchmarks") or {},
        payload.get("last_data_year"),
    )


@functools.lru_cache(maxsize=1)
def _load_cached(path: str) -> RateTables:
    tables = load_rate_tables(path)
    check_data_currency(tables)
    return tables


def default_rate_tables() -> RateTables:
    """Tables from ``RATE_TABLES_PATH`` when set, else the bundled history."""
    path = config.RATE_TABLES_PATH or str(BUNDLED_TABLES_PATH)
    return _load_cached(path)


def check_data_currency(tables: RateTables, current_year: Optional[int] = None) -> bool:
    """Return True (and warn) when the current year is past the recorded data."""
    current_year = current_year or date.today().year
    stale = current_year > tables.last_data_year
    if stale:
        logger.warning(
            "Historical data ends in %s; update the inflation and benchmark tables "
            "with newer figures.",
            tables.last_data_year,
        )
    return stale
