"""Income and expense domain service."""

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional

from mymoney.api import endpoints
from mymoney.api.http_client import HttpClient
from mymoney.api.mappers import transaction_to_domain, transaction_to_payload
from mymoney.domain.aggregation import aggregate_by_date, as_calendar_date
from mymoney.domain.entities import (
    AggregatedSeries,
    EntityId,
    Transaction,
    TransactionType,
)
from mymoney.domain.errors import (
    ApiError,
    ValidationError,
    category_required,
    date_required,
    future_date,
    invalid_amount,
    name_required,
)
from mymoney.session.cancellation import ActionLatch
from mymoney.utils.amount_parser import parse_amount
from mymoney.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

SORT_FIELDS = ("date", "amount", "name")


class TransactionService:
    """Service for one transaction collection (incomes or expenses).

    ``transactions`` holds the last successfully fetched collection. A failed
    fetch leaves it as it was, so screens keep showing the last good data.
    """

    def __init__(self, client: HttpClient, transaction_type: TransactionType):
        """Initialize transaction service.

        Args:
            client: HTTP client
            transaction_type: Collection this service manages
        """
        self.client = client
        self.transaction_type = TransactionType(transaction_type)
        self.transactions: tuple[Transaction, ...] = ()
        self.latch = ActionLatch()

    @property
    def export_filename(self) -> str:
        return f"{self.transaction_type.value}_details.xlsx"

    def validate_new_transaction(
        self,
        name: Optional[str],
        amount,
        txn_date,
        category_id: Optional[EntityId],
        today: Optional[date] = None,
    ) -> tuple[str, Decimal, date]:
        """Check a new entry before it is sent.

        Checks run in order: name, amount, date present, date not in the
        future, category.

        Args:
            name: Display label
            amount: Amount as number or user input string
            txn_date: Effective date as date or string
            category_id: Referenced category
            today: Reference date for the future check (defaults to today)

        Returns:
            Tuple of (trimmed name, amount, date)

        Raises:
            ValidationError: On the first failed check
        """
        if not name or not str(name).strip():
            raise ValidationError(name_required(f"an {self.transaction_type.value}"))

        try:
            parsed_amount = parse_amount(amount)
        except ValueError:
            raise ValidationError(invalid_amount())
        if parsed_amount <= 0:
            raise ValidationError(invalid_amount())

        if txn_date is None or (isinstance(txn_date, str) and not txn_date.strip()):
            raise ValidationError(date_required())
        if isinstance(txn_date, date):
            parsed_date = as_calendar_date(txn_date)
        else:
            try:
                parsed_date = parse_date(str(txn_date), today=today)
            except ValueError as e:
                raise ValidationError(str(e))
        if parsed_date > (today or date.today()):
            raise ValidationError(future_date(parsed_date.isoformat()))

        if category_id is None or str(category_id).strip() == "":
            raise ValidationError(category_required())

        return str(name).strip(), parsed_amount, parsed_date

    async def list_transactions(self) -> list[Transaction]:
        """Fetch the collection and remember it as the last good one."""
        payload = await self.client.get_json(endpoints.transactions(self.transaction_type)) or []
        transactions = [transaction_to_domain(item, self.transaction_type) for item in payload]
        self.transactions = tuple(transactions)
        return transactions

    async def overview(self) -> AggregatedSeries:
        """Fetch the collection and aggregate it by date for charting."""
        return aggregate_by_date(await self.list_transactions())

    async def _refresh_after_mutation(self) -> None:
        try:
            await self.list_transactions()
        except ApiError as e:
            logger.warning(
                "Could not refresh %ss, keeping previous list: %s",
                self.transaction_type.value,
                e,
            )

    async def add_transaction(
        self,
        name: str,
        amount,
        txn_date,
        category_id: EntityId,
        icon: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Transaction:
        """Validate and create an entry.

        Raises:
            ValidationError: If validation fails (nothing is sent)
            ActionInProgressError: If another add is still outstanding
            ApiError: If the server rejects the entry
        """
        name, parsed_amount, parsed_date = self.validate_new_transaction(
            name, amount, txn_date, category_id, today=today
        )

        with self.latch.hold(f"add-{self.transaction_type.value}"):
            response = await self.client.post(
                endpoints.transactions(self.transaction_type),
                transaction_to_payload(name, parsed_amount, parsed_date, category_id, icon),
            )
            created = transaction_to_domain(response.json(), self.transaction_type)
            logger.info("Added %s %s", self.transaction_type.value, created.id)
        await self._refresh_after_mutation()
        return created

    async def delete_transaction(self, transaction_id: EntityId) -> None:
        """Delete an entry by ID."""
        if transaction_id is None or str(transaction_id).strip() == "":
            raise ValidationError(f"{self.transaction_type.label} ID is required")

        with self.latch.hold(f"delete-{self.transaction_type.value}"):
            await self.client.delete(
                endpoints.transaction(self.transaction_type, transaction_id)
            )
            logger.info("Deleted %s %s", self.transaction_type.value, transaction_id)
        await self._refresh_after_mutation()

    async def filter_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        keyword: Optional[str] = None,
        sort_field: str = "date",
        sort_order: str = "asc",
    ) -> list[Transaction]:
        """Ask the server for a filtered, sorted slice of the collection.

        The result does not replace ``transactions``.
        """
        if sort_field not in SORT_FIELDS:
            raise ValidationError(
                f"Invalid sort field '{sort_field}'. Must be one of: {', '.join(SORT_FIELDS)}"
            )
        if sort_order.lower() not in ("asc", "desc"):
            raise ValidationError(f"Invalid sort order '{sort_order}'. Must be asc or desc")
        if start_date and end_date and start_date > end_date:
            raise ValidationError("Start date must not be after end date")

        body = {
            "type": self.transaction_type.value,
            "startDate": start_date.isoformat() if start_date else None,
            "endDate": end_date.isoformat() if end_date else None,
            "keyword": keyword or "",
            "sortField": sort_field,
            "sortOrder": sort_order.lower(),
        }
        response = await self.client.post(endpoints.FILTER, body)
        payload = response.json() if response.content else []
        return [transaction_to_domain(item, self.transaction_type) for item in payload]

    async def download_export(self, destination: Optional[str | Path] = None) -> Path:
        """Download the spreadsheet export and write it to destination.

        Returns:
            Path of the written file

        Raises:
            ValidationError: If the destination directory is missing or the
                file cannot be written
        """
        target = Path(destination) if destination else Path(self.export_filename)
        if target.is_dir():
            target = target / self.export_filename
        if not target.parent.is_dir():
            raise ValidationError(f"Directory '{target.parent}' does not exist")

        with self.latch.hold(f"download-{self.transaction_type.value}"):
            response = await self.client.get(endpoints.excel_download(self.transaction_type))
        try:
            target.write_bytes(response.content)
        except OSError as e:
            logger.error("Could not write %s export to %s: %s", self.transaction_type.value, target, e)
            raise ValidationError(f"Could not write '{target}': {e.strerror or e}") from e
        logger.info("Wrote %s export to %s", self.transaction_type.value, target)
        return target

    async def email_export(self) -> None:
        """Ask the server to email the spreadsheet export to the user."""
        with self.latch.hold(f"email-{self.transaction_type.value}"):
            await self.client.get(endpoints.email_export(self.transaction_type))
