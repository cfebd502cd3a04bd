"""Tests for the position merge engine."""

import pytest

from real_return_engine.position_merge import (
    find_position,
    merge_all,
    merge_into,
    merge_positions,
    merge_row_into_duplicate,
)


def test_weighted_average_cost(position_factory, five_percent_tables):
    existing = position_factory("AAPL", avg_cost=50, current_price=90, shares=100, years_held=2)
    incoming = position_factory("AAPL", avg_cost=80, current_price=90, shares=50, years_held=2)

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.shares == 150
    assert merged.avg_cost == pytest.approx(60.0)


def test_ticker_match_is_case_insensitive(position_factory, five_percent_tables):
    portfolio = [position_factory("AAPL", shares=50)]

    result = merge_into(portfolio, position_factory("aapl", shares=50), five_percent_tables)

    assert len(result) == 1
    assert result[0].shares == 100
    assert result[0].ticker == "AAPL"


def test_holding_period_is_weighted_by_capital(position_factory, five_percent_tables):
    # Two $5,000 lots held 4 and 2 years
    existing = position_factory("VTI", avg_cost=100, current_price=120, shares=50, years_held=4)
    incoming = position_factory("VTI", avg_cost=50, current_price=120, shares=100, years_held=2)

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.years_held == pytest.approx(3.0)


def test_small_recent_lot_barely_moves_holding_period(position_factory, five_percent_tables):
    existing = position_factory("MSFT", avg_cost=100, current_price=400, shares=100, years_held=10)
    incoming = position_factory("MSFT", avg_cost=400, current_price=400, shares=1, years_held=0.1)

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.years_held > 9.5


def test_holding_period_rounds_to_two_decimals(position_factory, five_percent_tables):
    existing = position_factory("KO", avg_cost=100, current_price=100, shares=10, years_held=1)
    incoming = position_factory("KO", avg_cost=100, current_price=100, shares=20, years_held=2)

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.years_held == 1.67


def test_zero_cost_lots_use_longest_holding(position_factory, five_percent_tables):
    existing = position_factory("GIFT", avg_cost=0, current_price=10, shares=5, years_held=3)
    incoming = position_factory("GIFT", avg_cost=0, current_price=10, shares=5, years_held=7)

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.years_held == 7
    assert merged.avg_cost == 0
    assert merged.nominal_return == 0


def test_zero_total_shares_keeps_incoming_display_fields(position_factory, five_percent_tables):
    existing = position_factory("xyz", avg_cost=10, current_price=12, shares=0, years_held=1, name="Old")
    incoming = position_factory(
        "XYZ", avg_cost=20, current_price=15, shares=0, years_held=4, name="New", sector="Energy",
        last_updated="2026-01-02",
    )

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.ticker == "xyz"
    assert merged.name == "New"
    assert merged.sector == "Energy"
    assert merged.current_price == 15
    assert merged.last_updated == "2026-01-02"
    assert merged.shares == 0
    assert merged.avg_cost == 0
    assert merged.years_held == 4


def test_blank_incoming_display_fields_keep_existing(position_factory, five_percent_tables):
    existing = position_factory("AAPL", current_price=120, name="Apple Inc.", sector="Technology")
    incoming = position_factory("AAPL", current_price=0, name="", sector="")

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.name == "Apple Inc."
    assert merged.sector == "Technology"
    assert merged.current_price == 120


def test_merged_position_is_recomputed(position_factory, five_percent_tables):
    existing = position_factory("AAPL", avg_cost=100, current_price=100, shares=10, years_held=1)
    incoming = position_factory("AAPL", avg_cost=100, current_price=150, shares=10, years_held=1)

    merged = merge_positions(existing, incoming, five_percent_tables)

    assert merged.current_price == 150
    assert merged.nominal_return == 50.0
    assert merged.cagr == 50.0


def test_new_ticker_is_appended(position_factory, five_percent_tables):
    portfolio = [position_factory("AAPL")]
    incoming = position_factory("MSFT")

    result = merge_into(portfolio, incoming, five_percent_tables)

    assert [p.ticker for p in result] == ["AAPL", "MSFT"]
    assert result[1] is incoming
    assert len(portfolio) == 1


def test_merge_all_folds_in_order(position_factory, five_percent_tables):
    current = [position_factory("AAPL", avg_cost=100, current_price=120, shares=50, years_held=2)]
    incoming = [
        position_factory("MSFT", avg_cost=200, current_price=220, shares=25, years_held=1),
        position_factory("aapl", avg_cost=120, current_price=120, shares=50, years_held=1),
    ]

    result = merge_all(current, incoming, five_percent_tables)

    assert [p.ticker for p in result] == ["AAPL", "MSFT"]
    assert result[0].shares == 100
    assert result[0].avg_cost == pytest.approx(110.0)
    assert result[1].shares == 25
    assert result[1].avg_cost == 200


def test_merge_does_not_mutate_inputs(position_factory, five_percent_tables):
    existing = position_factory("AAPL", avg_cost=50, shares=100, years_held=2)
    incoming = position_factory("AAPL", avg_cost=80, shares=50, years_held=1)
    portfolio = [existing]

    merge_into(portfolio, incoming, five_percent_tables)

    assert portfolio == [existing]
    assert existing.shares == 100
    assert existing.avg_cost == 50
    assert incoming.shares == 50


def test_find_position(position_factory):
    portfolio = [position_factory("AAPL"), position_factory("msft"), position_factory("AAPL")]

    assert find_position(portfolio, " Msft ") == 1
    assert find_position(portfolio, "aapl") == 0
    assert find_position(portfolio, "aapl", exclude_index=0) == 2
    assert find_position(portfolio, "GOOG") == -1


def test_merge_row_into_duplicate(position_factory, five_percent_tables):
    portfolio = [
        position_factory("AAPL", avg_cost=100, shares=10),
        position_factory("MSFT", shares=5),
        position_factory("aapl", avg_cost=200, shares=10),
    ]

    result = merge_row_into_duplicate(portfolio, 2, five_percent_tables)

    assert [p.ticker for p in result] == ["AAPL", "MSFT"]
    assert result[0].shares == 20
    assert result[0].avg_cost == pytest.approx(150.0)
    assert len(portfolio) == 3


def test_merge_row_without_duplicate_is_unchanged(position_factory, five_percent_tables):
    portfolio = [position_factory("AAPL"), position_factory("MSFT")]

    result = merge_row_into_duplicate(portfolio, 1, five_percent_tables)

    assert result == portfolio
    assert result is not portfolio


def test_merge_row_index_out_of_range(position_factory, five_percent_tables):
    with pytest.raises(IndexError):
        merge_row_into_duplicate([position_factory("AAPL")], 3, five_percent_tables)
