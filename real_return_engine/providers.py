"""Provider protocol and registry for historical rate tables."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from real_return_engine.rate_tables import RateTables, default_rate_tables


@runtime_checkable
class RateTableProvider(Protocol):
    def get_rate_tables(self) -> RateTables: ...


class BundledRateTableProvider:
    """Serves the recorded history shipped with the package."""

    def get_rate_tables(self) -> RateTables:
        return default_rate_tables()


class StaticRateTableProvider:
    """Serves a fixed, caller-built set of tables."""

    def __init__(self, tables: RateTables):
        self._tables = tables

    def get_rate_tables(self) -> RateTables:
        return self._tables


_rate_table_provider: Optional[RateTableProvider] = None


def set_rate_table_provider(provider: Optional[RateTableProvider]) -> None:
    """Install a provider; ``None`` restores the bundled tables."""
    global _rate_table_provider
    if provider is not None and not isinstance(provider, RateTableProvider):
        raise TypeError("provider must implement get_rate_tables()")
    _rate_table_provider = provider


def get_rate_table_provider() -> RateTableProvider:
    global _rate_table_provider
    if _rate_table_provider is None:
        _rate_table_provider = BundledRateTableProvider()
    return _rate_table_provider


def resolve_rate_tables(tables: Optional[RateTables] = None) -> RateTables:
    """Explicit tables win; otherwise ask the registered provider."""
    if tables is not None:
        return tables
    return get_rate_table_provider().get_rate_tables()
