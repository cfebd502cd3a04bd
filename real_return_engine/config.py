"""Configuration surface for real_return_engine.

Values come from the process environment (a local ``.env`` is loaded first)
and can be overridden at runtime with :func:`configure`. Computation modules
read these attributes at call time, so overrides apply to the next call.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


_DEFAULTS: dict[str, Any] = {
    # Inflation accumulator: annual rate (%) for years older than the table.
    "DEFAULT_ANNUAL_INFLATION": _env_float("RRE_DEFAULT_ANNUAL_INFLATION", 3.0),
    # Average-rate estimate (fraction) when the trailing window has no data.
    "AVERAGE_INFLATION_FALLBACK": _env_float("RRE_AVERAGE_INFLATION_FALLBACK", 0.035),
    # Chart channels: annual rate (%) for a year missing from a table.
    "CHART_INFLATION_FALLBACK": _env_float("RRE_CHART_INFLATION_FALLBACK", 2.5),
    "CHART_BENCHMARK_FALLBACK": _env_float("RRE_CHART_BENCHMARK_FALLBACK", 7.0),
    # Alpha decomposition: benchmark CAGR (fraction) when no window data exists,
    # and the benchmark return (%) used on the simulated path for a missing year.
    "ALPHA_FALLBACK_BENCHMARK_CAGR": _env_float("RRE_ALPHA_FALLBACK_BENCHMARK_CAGR", 0.08),
    "ALPHA_MISSING_YEAR_RETURN": _env_float("RRE_ALPHA_MISSING_YEAR_RETURN", 8.0),
    "STATUS_THRESHOLDS": {
        "beating": _env_float("RRE_STATUS_BEATING_THRESHOLD", 1.0),
        "losing": _env_float("RRE_STATUS_LOSING_THRESHOLD", -1.0),
    },
    "RATE_TABLES_PATH": os.getenv("RRE_RATE_TABLES_PATH", ""),
    "LOG_LEVEL": os.getenv("RRE_LOG_LEVEL", "WARNING").upper(),
}


DEFAULT_ANNUAL_INFLATION = float(_DEFAULTS["DEFAULT_ANNUAL_INFLATION"])
AVERAGE_INFLATION_FALLBACK = float(_DEFAULTS["AVERAGE_INFLATION_FALLBACK"])
CHART_INFLATION_FALLBACK = float(_DEFAULTS["CHART_INFLATION_FALLBACK"])
CHART_BENCHMARK_FALLBACK = float(_DEFAULTS["CHART_BENCHMARK_FALLBACK"])
ALPHA_FALLBACK_BENCHMARK_CAGR = float(_DEFAULTS["ALPHA_FALLBACK_BENCHMARK_CAGR"])
ALPHA_MISSING_YEAR_RETURN = float(_DEFAULTS["ALPHA_MISSING_YEAR_RETURN"])
STATUS_THRESHOLDS = dict(_DEFAULTS["STATUS_THRESHOLDS"])
RATE_TABLES_PATH = str(_DEFAULTS["RATE_TABLES_PATH"])
LOG_LEVEL = str(_DEFAULTS["LOG_LEVEL"])


def configure(**overrides: Any) -> None:
    """Programmatically override package configuration values."""
    globals_dict = globals()
    for key, value in overrides.items():
        if key not in _DEFAULTS:
            raise KeyError(f"Unknown config key: {key}")
        globals_dict[key] = value


def reset() -> None:
    """Restore every key to its environment-derived default."""
    globals_dict = globals()
    for key, value in _DEFAULTS.items():
        globals_dict[key] = dict(value) if isinstance(value, dict) else value
