"""
Core Data Objects Module

Data structures for position-level return analysis and the reconstructed
growth chart.

Classes:
- Position: One held instrument, its inputs and derived return metrics
- ChartPoint: One year of the portfolio / benchmark / inflation growth series

Usage: Positions flow through ``position_stats.calculate_stats`` after every
edit, through ``position_merge`` when tickers collide, and into
``history_reconstruction`` to build ChartPoints.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional

from real_return_engine.constants import PositionStatus, UNKNOWN_SECTOR


logger = logging.getLogger(__name__)

# Stored/browser field name -> attribute name
_FIELD_ALIASES = {
    "avgCost": "avg_cost",
    "currentPrice": "current_price",
    "yearsHeld": "years_held",
    "nominalReturn": "nominal_return",
    "inflationAdjReturn": "inflation_adj_return",
    "lastUpdated": "last_updated",
}
_NUMERIC_FIELDS = (
    "avg_cost",
    "current_price",
    "shares",
    "years_held",
    "nominal_return",
    "inflation_adj_return",
    "weight",
    "cagr",
)
DERIVED_FIELDS = ("nominal_return", "inflation_adj_return", "cagr", "status")


def _coerce_number(value: Any) -> float:
    """Coerce user/stored input to a finite float; anything else becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0.0
    return numeric if math.isfinite(numeric) else 0.0


@dataclass
class Position:
    """
    One held instrument.

    Input fields (never touched by the calculators except during a merge):
    - ticker: symbol as entered; identity is case-insensitive (see
      ``normalized_ticker``), casing is preserved as given
    - name / sector: display metadata
    - avg_cost: average cost per share
    - current_price: latest price per share, supplied by the caller
    - shares: share count, fractional allowed
    - years_held: fractional holding period in years
    - weight: percent of portfolio market value, maintained by the caller
      (see ``portfolio_summary.recalculate_weights``)
    - last_updated: optional price timestamp label

    Derived fields (valid only right after ``calculate_stats``):
    - nominal_return, inflation_adj_return, cagr: percents, one decimal
    - status: ``PositionStatus``

    Any change to avg_cost, current_price or years_held leaves the derived
    fields stale until the position is recomputed.
    """

    ticker: str
    name: str = ""
    avg_cost: float = 0.0
    current_price: float = 0.0
    shares: float = 0.0
    years_held: float = 0.0
    nominal_return: float = 0.0
    inflation_adj_return: float = 0.0
    status: PositionStatus = PositionStatus.TRACKING_MARKET
    sector: str = UNKNOWN_SECTOR
    weight: float = 0.0
    cagr: float = 0.0
    last_updated: Optional[str] = None

    @classmethod
    def blank(cls) -> "Position":
        """Empty row as inserted by the position editor."""
        return cls(ticker="", name="", sector=UNKNOWN_SECTOR)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Position":
        """Build from snake_case or stored camelCase keys; unknown keys are ignored."""
        kwargs: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            attr = _FIELD_ALIASES.get(key, key)
            if attr in cls.__dataclass_fields__:
                kwargs[attr] = value

        for attr in _NUMERIC_FIELDS:
            if attr in kwargs:
                kwargs[attr] = _coerce_number(kwargs[attr])
        kwargs["ticker"] = str(kwargs.get("ticker") or "").strip()
        kwargs["name"] = str(kwargs.get("name") or "")
        kwargs["sector"] = str(kwargs.get("sector") or UNKNOWN_SECTOR)
        if "status" in kwargs:
            kwargs["status"] = PositionStatus.parse(kwargs["status"])
        if kwargs.get("last_updated") is not None:
            kwargs["last_updated"] = str(kwargs["last_updated"])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Stored camelCase representation."""
        payload = {
            "ticker": self.ticker,
            "name": self.name,
            "avgCost": self.avg_cost,
            "currentPrice": self.current_price,
            "shares": self.shares,
            "yearsHeld": self.years_held,
            "nominalReturn": self.nominal_return,
            "inflationAdjReturn": self.inflation_adj_return,
            "status": self.status.value,
            "sector": self.sector,
            "weight": self.weight,
            "cagr": self.cagr,
        }
        if self.last_updated is not None:
            payload["lastUpdated"] = self.last_updated
        return payload

    @property
    def normalized_ticker(self) -> str:
        return (self.ticker or "").strip().upper()

    @property
    def market_value(self) -> float:
        return self.shares * self.current_price

    @property
    def cost_basis(self) -> float:
        return self.shares * self.avg_cost


@dataclass(frozen=True)
class ChartPoint:
    """One year of cumulative growth, percent relative to the first point."""

    year: str
    portfolio: float
    benchmark: float
    inflation: float

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["date"] = payload.pop("year")
        return payload


Portfolio = List[Position]


def positions_from_records(records: List[Mapping[str, Any]]) -> Portfolio:
    """Convert a list of stored records, skipping entries that are not mappings."""
    positions: Portfolio = []
    for idx, record in enumerate(records or []):
        if not isinstance(record, Mapping):
            logger.warning("Skipping position record %s: expected a mapping, got %s", idx, type(record).__name__)
            continue
        positions.append(Position.from_dict(record))
    return positions
