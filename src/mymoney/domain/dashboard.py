"""Dashboard domain service."""

import asyncio

from mymoney.domain.aggregation import recent_transactions, summarize
from mymoney.domain.entities import DashboardOverview
from mymoney.domain.transaction import TransactionService


class DashboardService:
    """Builds the overview from the income and expense collections."""

    def __init__(
        self,
        income_service: TransactionService,
        expense_service: TransactionService,
        recent_limit: int = 5,
    ):
        self.income_service = income_service
        self.expense_service = expense_service
        self.recent_limit = recent_limit

    async def build_overview(self) -> DashboardOverview:
        """Fetch both collections concurrently and derive the overview."""
        incomes, expenses = await asyncio.gather(
            self.income_service.list_transactions(),
            self.expense_service.list_transactions(),
        )
        return DashboardOverview(
            summary=summarize(incomes, expenses),
            recent_transactions=tuple(
                recent_transactions(incomes, expenses, limit=self.recent_limit)
            ),
        )
