"""
Core Constants Module

Centralized definitions for position status labels, benchmark choices, and the
chart window floor. Labels here are the stored values; any friendlier wording
shown to users belongs to the presentation layer.
"""

from enum import Enum


# Position Status
# ===============
# Closed set of qualitative tags derived from the inflation-adjusted return.
# The values are the literal labels persisted with each position.

class PositionStatus(str, Enum):
    BEATING_INFLATION = "Beating Inflation"
    TRACKING_MARKET = "Tracking Market"
    LOSING_POWER = "Losing Power"

    @classmethod
    def parse(cls, value) -> "PositionStatus":
        """Map a stored label back to a status; unknown labels are neutral."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value or member.name == str(value).upper():
                return member
        return cls.TRACKING_MARKET


# Benchmarks
# ==========
# Index funds whose annual total returns drive the benchmark chart line and
# shape the reconstructed price path of every position.

class Benchmark(str, Enum):
    VT = "VT"      # Total world stock market
    VTI = "VTI"    # Total US stock market
    VOO = "VOO"    # S&P 500

    @classmethod
    def parse(cls, value) -> "Benchmark":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ", ".join(b.value for b in cls)
            raise ValueError(f"Unknown benchmark {value!r}; expected one of {valid}") from None


DEFAULT_BENCHMARK = Benchmark.VT

BENCHMARK_DISPLAY_NAMES = {
    Benchmark.VT: "Vanguard Total World Stock ETF",
    Benchmark.VTI: "Vanguard Total Stock Market ETF",
    Benchmark.VOO: "Vanguard S&P 500 ETF",
}

# Chart Window
# ============
# VT launched in 2008; no chart starts before it, whichever benchmark is drawn.

BENCHMARK_INCEPTION_YEAR = 2008

# Positions created before a sector is known
UNKNOWN_SECTOR = "Unknown"


def get_benchmark_display_name(benchmark) -> str:
    """Get human-readable fund name for a benchmark choice."""
    return BENCHMARK_DISPLAY_NAMES[Benchmark.parse(benchmark)]
