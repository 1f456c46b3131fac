"""Transaction aggregation engine.

Pure functions turning transaction collections into the ordered series and
totals that overview screens and charts render.

Precondition: amounts are positive decimals. They are validated when an entry
is created (see ``TransactionService.validate_new_transaction``) and are not
re-checked here.
"""

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from dateutil import parser as date_parser

from mymoney.domain.entities import (
    AggregatedSeries,
    CategoryTotal,
    EntityId,
    FinanceSummary,
    Transaction,
)

ZERO = Decimal("0")


def as_calendar_date(value: Union[date, datetime, str]) -> date:
    """Return the calendar date of a date, timestamp or ISO 8601 string.

    Args:
        value: ``date``, ``datetime`` or ISO string such as "2024-01-05" or
            "2024-01-05T10:00:00"

    Returns:
        Date object

    Raises:
        ValueError: If a string value is not an ISO 8601 date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value).strip()).date()
    except (ValueError, TypeError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def _total(transactions: Iterable[Transaction]) -> Decimal:
    return sum((Decimal(txn.amount) for txn in transactions), ZERO)


def aggregate_by_date(transactions: Iterable[Transaction]) -> AggregatedSeries:
    """Group transactions by calendar date and sum their amounts.

    Transactions sharing a date are merged into one entry. Dates are compared
    as calendar dates, never as strings.

    Args:
        transactions: Transactions of one type

    Returns:
        AggregatedSeries with ``dates`` ascending and ``sums`` aligned by index
    """
    sums_by_date: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        sums_by_date[as_calendar_date(txn.date)] += Decimal(txn.amount)

    ordered = sorted(sums_by_date)
    return AggregatedSeries(
        dates=tuple(ordered),
        sums=tuple(sums_by_date[d] for d in ordered),
    )


def summarize(
    incomes: Iterable[Transaction], expenses: Iterable[Transaction]
) -> FinanceSummary:
    """Total both collections and derive the balance."""
    total_income = _total(incomes)
    total_expense = _total(expenses)
    return FinanceSummary(
        total_income=total_income,
        total_expense=total_expense,
        total_balance=total_income - total_expense,
    )


def totals_by_category(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """Sum transactions per category, largest total first.

    Transactions without a category are grouped under "Uncategorized".
    """
    groups: dict[Optional[EntityId], dict] = defaultdict(
        lambda: {"name": None, "total": ZERO, "count": 0}
    )
    for txn in transactions:
        group = groups[txn.category_id]
        if group["name"] is None and txn.category_name:
            group["name"] = txn.category_name
        group["total"] += Decimal(txn.amount)
        group["count"] += 1

    results = []
    for category_id, data in groups.items():
        if data["name"]:
            name = data["name"]
        elif category_id is None:
            name = "Uncategorized"
        else:
            name = f"Category {category_id}"
        results.append(
            CategoryTotal(
                category_id=category_id,
                category_name=name,
                total=data["total"],
                count=data["count"],
            )
        )

    return sorted(results, key=lambda item: (-item.total, item.category_name))


def recent_transactions(
    incomes: Sequence[Transaction],
    expenses: Sequence[Transaction],
    limit: int = 5,
) -> list[Transaction]:
    """Merge the latest ``limit`` entries of each collection, newest first.

    Up to ``limit`` incomes and ``limit`` expenses are kept, so the result
    holds at most twice ``limit`` entries. Ordered by effective date
    descending; transactions on the same date are ordered by creation
    timestamp descending when both carry one.
    """

    def sort_key(txn: Transaction):
        created = txn.created_at or datetime.min
        if created.tzinfo is not None:
            created = created.replace(tzinfo=None)
        return (as_calendar_date(txn.date), created)

    latest_incomes = sorted(incomes, key=sort_key, reverse=True)[:limit]
    latest_expenses = sorted(expenses, key=sort_key, reverse=True)[:limit]
    return sorted([*latest_incomes, *latest_expenses], key=sort_key, reverse=True)
