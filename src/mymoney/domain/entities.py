"""Domain model entities for mymoney.

These are pure data classes representing business concepts, independent of
the JSON shapes the remote API sends. The API layer maps payloads into these
entities so the aggregation and formatting code never touches raw dicts.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

EntityId = Union[int, str]


class TransactionType(str, Enum):
    """Which collection a transaction or category belongs to."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Profile:
    """Authenticated user's public profile."""

    full_name: str
    email: str
    profile_image_url: Optional[str] = None
    id: Optional[EntityId] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Category:
    """Named grouping of transactions of one type."""

    id: EntityId
    name: str
    type: TransactionType
    icon: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Transaction:
    """Income or expense record.

    ``date`` is the effective calendar date and drives every ordering done by
    the aggregation engine. ``created_at``/``updated_at`` are server
    timestamps used for display only.
    """

    id: EntityId
    name: str
    amount: Decimal
    date: date
    type: TransactionType
    category_id: Optional[EntityId] = None
    category_name: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AggregatedSeries:
    """Per-date sums, as two index-aligned sequences with dates ascending."""

    dates: tuple[date, ...] = ()
    sums: tuple[Decimal, ...] = ()

    @property
    def labels(self) -> tuple[str, ...]:
        """ISO date strings for chart axes."""
        return tuple(d.isoformat() for d in self.dates)

    def __len__(self) -> int:
        return len(self.dates)


@dataclass(frozen=True)
class FinanceSummary:
    """Totals across the income and expense collections."""

    total_income: Decimal
    total_expense: Decimal
    total_balance: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount of the transactions filed under one category."""

    category_id: Optional[EntityId]
    category_name: str
    total: Decimal
    count: int


@dataclass(frozen=True)
class DashboardOverview:
    """Everything the overview screen renders."""

    summary: FinanceSummary
    recent_transactions: tuple[Transaction, ...] = field(default_factory=tuple)
