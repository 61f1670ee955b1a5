"""Tests for the pure transaction aggregates."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from finboard.services import aggregation


def test_monthly_totals_only_counts_reference_month(make_txn):
    txns = [
        make_txn("income", "3000.00", date(2024, 3, 1)),
        make_txn("expense", "120.50", date(2024, 3, 31)),
        make_txn("expense", "99.99", date(2024, 2, 29)),
        make_txn("income", "10.00", date(2024, 4, 1)),
    ]

    result = aggregation.monthly_totals(txns, date(2024, 3, 15))

    assert result.income == Decimal("3000.00")
    assert result.expense == Decimal("120.50")
    assert result.balance == Decimal("2879.50")


def test_monthly_totals_balance_is_income_minus_expense(make_txn):
    txns = [make_txn("income", "50"), make_txn("expense", "80"), make_txn("expense", "5.25")]

    result = aggregation.monthly_totals(txns, date(2024, 1, 1))

    assert result.balance == result.income - result.expense
    assert result.income >= 0 and result.expense >= 0
    assert result.balance == Decimal("-35.25")


def test_empty_input_yields_zero_aggregates():
    assert aggregation.monthly_totals([], date.today()) == aggregation.Totals()
    assert aggregation.totals([]).balance == 0
    assert aggregation.category_expense_breakdown([]) == {}
    assert aggregation.monthly_income_expense_series([]) == []
    assert aggregation.recent_series([], 7) == []


def test_category_breakdown_sums_expenses_in_first_seen_order(make_txn):
    txns = [
        make_txn("expense", "40", category="Groceries"),
        make_txn("income", "500", category="Salary"),
        make_txn("expense", "15", category="Transport"),
        make_txn("expense", "10", category="Groceries"),
        make_txn("expense", "7.5"),
    ]

    breakdown = aggregation.category_expense_breakdown(txns)

    assert list(breakdown) == ["Groceries", "Transport", "Uncategorized"]
    assert breakdown["Groceries"] == Decimal("50")
    assert "Salary" not in breakdown
    assert sum(breakdown.values()) == aggregation.totals(txns).expense


def test_monthly_series_first_seen_keeps_input_order(make_txn):
    txns = [
        make_txn("expense", "30", date(2024, 3, 2)),
        make_txn("income", "100", date(2024, 1, 10)),
        make_txn("income", "20", date(2024, 3, 20)),
        make_txn("expense", "5", date(2024, 1, 11)),
    ]

    series = aggregation.monthly_income_expense_series(txns)

    assert [point.label for point in series] == ["03/2024", "01/2024"]
    assert series[0] == aggregation.MonthPoint("03/2024", Decimal("20"), Decimal("30"))
    assert series[1] == aggregation.MonthPoint("01/2024", Decimal("100"), Decimal("5"))


def test_monthly_series_chronological_sorts_across_years(make_txn):
    txns = [
        make_txn("expense", "1", date(2024, 2, 1)),
        make_txn("expense", "1", date(2023, 12, 1)),
        make_txn("expense", "1", date(2024, 1, 1)),
    ]

    series = aggregation.monthly_income_expense_series(txns, order="chronological")

    assert [point.label for point in series] == ["12/2023", "01/2024", "02/2024"]


def test_monthly_series_rejects_unknown_order():
    with pytest.raises(ValueError):
        aggregation.monthly_income_expense_series([], order="alphabetical")


def test_recent_series_reverses_and_signs(make_txn):
    newest_first = [make_txn("expense", "100"), make_txn("income", "50")]

    assert aggregation.recent_series(newest_first, 2) == [Decimal("50"), Decimal("-100")]


def test_recent_series_takes_only_the_newest_n(make_txn):
    newest_first = [make_txn("income", str(n)) for n in (5, 4, 3, 2, 1)]

    assert aggregation.recent_series(newest_first, 3) == [Decimal("3"), Decimal("4"), Decimal("5")]
    assert aggregation.recent_series(newest_first, 0) == []
    assert aggregation.recent_series(newest_first, -2) == []
    assert len(aggregation.recent_series(newest_first, 50)) == 5


def test_month_helpers():
    assert aggregation.month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert aggregation.shift_months(date(2024, 3, 31), 2) == date(2024, 1, 1)
    assert aggregation.shift_months(date(2024, 1, 15), 11) == date(2023, 2, 1)
