"""Utility for resolving category names to IDs."""

from typing import Sequence

from mymoney.domain.entities import Category, EntityId
from mymoney.domain.errors import NotFoundError, category_not_found


def resolve_category(categories: Sequence[Category], category: str | int) -> EntityId:
    """Resolve a category name or ID to the category's ID.

    Args:
        categories: Categories the reference may point at (usually one type)
        category: Category ID (int or string form) or name, matched
            case-insensitively

    Returns:
        Category ID

    Raises:
        NotFoundError: If no category matches
    """
    reference = str(category).strip()

    for cat in categories:
        if str(cat.id) == reference:
            return cat.id

    for cat in categories:
        if cat.name.strip().lower() == reference.lower():
            return cat.id

    raise NotFoundError(category_not_found(reference))
