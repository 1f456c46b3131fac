"""Tests for the aggregation engine."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from mymoney.domain.aggregation import (
    aggregate_by_date,
    as_calendar_date,
    recent_transactions,
    summarize,
    totals_by_category,
)
from mymoney.domain.entities import Transaction, TransactionType


def _txn(txn_id, amount, txn_date, txn_type=TransactionType.INCOME, **kwargs):
    return Transaction(
        id=txn_id,
        name=f"Entry {txn_id}",
        amount=Decimal(str(amount)),
        date=txn_date,
        type=txn_type,
        **kwargs,
    )


def test_aggregate_merges_same_date_and_sorts_ascending():
    """Entries on one date merge, output ascends by date."""
    transactions = [
        _txn(1, 100, "2024-01-05"),
        _txn(2, 50, "2024-01-05"),
        _txn(3, 20, "2024-01-03"),
    ]

    series = aggregate_by_date(transactions)

    assert series.labels == ("2024-01-03", "2024-01-05")
    assert series.sums == (Decimal("20"), Decimal("150"))


def test_aggregate_empty_collection():
    series = aggregate_by_date([])
    assert series.dates == ()
    assert series.sums == ()
    assert len(series) == 0


def test_aggregate_preserves_total():
    transactions = [
        _txn(1, "10.25", date(2024, 3, 1)),
        _txn(2, "0.75", date(2024, 3, 2)),
        _txn(3, 1000, date(2023, 12, 31)),
        _txn(4, 5, date(2024, 3, 1)),
    ]

    series = aggregate_by_date(transactions)

    assert sum(series.sums) == sum(t.amount for t in transactions)
    assert len(series.dates) == len(set(series.dates))
    assert list(series.dates) == sorted(series.dates)


def test_aggregate_is_order_independent():
    transactions = [
        _txn(1, 100, date(2024, 1, 5)),
        _txn(2, 50, date(2024, 1, 3)),
        _txn(3, 25, date(2024, 1, 5)),
    ]

    assert aggregate_by_date(transactions) == aggregate_by_date(list(reversed(transactions)))


def test_aggregate_compares_calendar_dates_not_strings():
    """Timestamps on the same day merge even when their strings differ."""
    transactions = [
        _txn(1, 10, "2024-01-05T08:00:00"),
        _txn(2, 20, "2024-01-05"),
        _txn(3, 5, datetime(2024, 1, 5, 23, 59)),
        _txn(4, 1, "2023-12-31"),
    ]

    series = aggregate_by_date(transactions)

    assert series.dates == (date(2023, 12, 31), date(2024, 1, 5))
    assert series.sums == (Decimal("1"), Decimal("35"))


def test_as_calendar_date_rejects_garbage():
    with pytest.raises(ValueError, match="Could not parse date"):
        as_calendar_date("not a date")


def test_summarize_balance():
    incomes = [_txn(1, 1500, date(2024, 1, 5)), _txn(2, "250.5", date(2024, 1, 6))]
    expenses = [_txn(3, 120, date(2024, 1, 6), TransactionType.EXPENSE)]

    summary = summarize(incomes, expenses)

    assert summary.total_income == Decimal("1750.5")
    assert summary.total_expense == Decimal("120")
    assert summary.total_balance == Decimal("1630.5")


def test_summarize_empty():
    summary = summarize([], [])
    assert summary.total_income == 0
    assert summary.total_expense == 0
    assert summary.total_balance == 0


def test_totals_by_category_orders_by_total_descending():
    transactions = [
        _txn(1, 100, date(2024, 1, 1), category_id=1, category_name="Salary"),
        _txn(2, 300, date(2024, 1, 2), category_id=2, category_name="Freelance"),
        _txn(3, 250, date(2024, 1, 3), category_id=1, category_name="Salary"),
        _txn(4, 10, date(2024, 1, 4)),
        _txn(5, 5, date(2024, 1, 4), category_id=9),
    ]

    totals = totals_by_category(transactions)

    assert [t.category_name for t in totals] == [
        "Salary",
        "Freelance",
        "Uncategorized",
        "Category 9",
    ]
    assert totals[0].total == Decimal("350")
    assert totals[0].count == 2
    assert totals[2].category_id is None


def test_recent_transactions_newest_first_across_types():
    incomes = [
        _txn(1, 10, date(2024, 1, 1)),
        _txn(2, 10, date(2024, 1, 5), created_at=datetime(2024, 1, 5, 8, 0)),
        _txn(3, 10, date(2024, 1, 3)),
    ]
    expenses = [
        _txn(4, 10, date(2024, 1, 5), TransactionType.EXPENSE, created_at=datetime(2024, 1, 5, 9, 0)),
        _txn(5, 10, date(2024, 1, 4), TransactionType.EXPENSE),
        _txn(6, 10, date(2023, 12, 30), TransactionType.EXPENSE),
    ]

    recent = recent_transactions(incomes, expenses, limit=5)

    assert [t.id for t in recent] == [4, 2, 5, 3, 1, 6]


def test_recent_transactions_respects_limit():
    incomes = [_txn(i, 1, date(2024, 1, i)) for i in range(1, 10)]
    assert len(recent_transactions(incomes, [], limit=3)) == 3


def test_recent_transactions_limits_each_collection():
    """Older incomes do not crowd out the latest expenses."""
    incomes = [_txn(i, 1, date(2024, 2, i)) for i in range(1, 8)]
    expenses = [_txn(100, 1, date(2024, 1, 1), TransactionType.EXPENSE)]

    recent = recent_transactions(incomes, expenses, limit=5)

    assert [t.id for t in recent] == [7, 6, 5, 4, 3, 100]
