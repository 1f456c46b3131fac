"""Category domain service."""

import logging
from typing import Optional

from mymoney.api import endpoints
from mymoney.api.http_client import HttpClient
from mymoney.api.mappers import category_to_domain, category_to_payload
from mymoney.domain.entities import Category, EntityId, TransactionType
from mymoney.domain.errors import (
    ApiError,
    ConflictError,
    ValidationError,
    duplicate_category_name,
    invalid_transaction_type,
)
from mymoney.session.cancellation import ActionLatch

logger = logging.getLogger(__name__)


def parse_transaction_type(value: str | TransactionType) -> TransactionType:
    """Parse "income"/"expense" (any case) into a TransactionType.

    Raises:
        ValidationError: If value names neither type
    """
    try:
        return TransactionType(str(getattr(value, "value", value)).strip().lower())
    except ValueError:
        raise ValidationError(invalid_transaction_type(str(value)))


class CategoryService:
    """Service for managing categories.

    Keeps the last successfully fetched collection in ``categories``; a failed
    fetch or mutation leaves it untouched.
    """

    def __init__(self, client: HttpClient):
        """Initialize category service.

        Args:
            client: HTTP client
        """
        self.client = client
        self.categories: Optional[tuple[Category, ...]] = None
        self.latch = ActionLatch()

    async def list_categories(self) -> list[Category]:
        """Fetch all categories of the current user."""
        payload = await self.client.get_json(endpoints.CATEGORIES) or []
        categories = [category_to_domain(item) for item in payload]
        self.categories = tuple(categories)
        return categories

    async def list_categories_by_type(
        self, category_type: str | TransactionType
    ) -> list[Category]:
        """Fetch the categories of one type."""
        category_type = parse_transaction_type(category_type)
        payload = await self.client.get_json(endpoints.categories_by_type(category_type)) or []
        return [category_to_domain(item) for item in payload]

    async def _refresh_after_mutation(self) -> None:
        try:
            await self.list_categories()
        except ApiError as e:
            logger.warning("Could not refresh categories, keeping previous list: %s", e)

    async def _fresh_categories(self) -> list[Category]:
        # Duplicate checks must see categories created elsewhere since the last list
        return await self.list_categories()

    def check_duplicate_name(
        self,
        categories: tuple[Category, ...] | list[Category],
        name: str,
        category_type: TransactionType,
        exclude_id: Optional[EntityId] = None,
    ) -> None:
        """Reject a name already used by another category of the same type.

        Names compare case-insensitively after trimming.

        Raises:
            ConflictError: If the name is taken
        """
        wanted = name.strip().lower()
        for cat in categories:
            if exclude_id is not None and str(cat.id) == str(exclude_id):
                continue
            if cat.type is category_type and cat.name.strip().lower() == wanted:
                raise ConflictError(duplicate_category_name(name.strip(), category_type.value))

    async def create_category(
        self,
        name: str,
        category_type: str | TransactionType = TransactionType.INCOME,
        icon: Optional[str] = None,
    ) -> Category:
        """Create a category.

        Args:
            name: Category name
            category_type: "income" or "expense"
            icon: Optional icon reference

        Returns:
            Created category

        Raises:
            ValidationError: If name is empty or type is invalid
            ConflictError: If a category of the same type has this name
        """
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        category_type = parse_transaction_type(category_type)

        with self.latch.hold("create-category"):
            self.check_duplicate_name(await self._fresh_categories(), name, category_type)
            response = await self.client.post(
                endpoints.CATEGORIES, category_to_payload(name.strip(), category_type, icon)
            )
            created = category_to_domain(response.json())
            logger.info("Created category '%s' (%s)", created.name, created.type.value)
        await self._refresh_after_mutation()
        return created

    async def update_category(
        self,
        category_id: EntityId,
        name: Optional[str] = None,
        category_type: Optional[str | TransactionType] = None,
        icon: Optional[str] = None,
    ) -> Category:
        """Update a category. Fields left as None keep their current value.

        Raises:
            ValidationError: If the ID is missing or the resulting name is empty
            ConflictError: If the new name collides within its type
            ClientError: If the server does not know the category
        """
        if category_id is None or str(category_id).strip() == "":
            raise ValidationError("Category ID is missing for update")

        with self.latch.hold("update-category"):
            categories = await self._fresh_categories()
            current = next((c for c in categories if str(c.id) == str(category_id)), None)

            new_name = name if name is not None else (current.name if current else "")
            if not new_name or not new_name.strip():
                raise ValidationError("Category name is required")
            if category_type is not None:
                new_type = parse_transaction_type(category_type)
            elif current is not None:
                new_type = current.type
            else:
                raise ValidationError("Category type is required")
            new_icon = icon if icon is not None else (current.icon if current else None)

            self.check_duplicate_name(categories, new_name, new_type, exclude_id=category_id)
            response = await self.client.put(
                endpoints.category(category_id),
                category_to_payload(new_name.strip(), new_type, new_icon),
            )
            updated = category_to_domain(response.json())
            logger.info("Updated category %s", updated.id)
        await self._refresh_after_mutation()
        return updated
