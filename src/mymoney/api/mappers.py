"""Mapper functions to convert between API payloads and domain entities.

This layer isolates the JSON field names of the remote API, so a change in
the wire format only touches this module.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from dateutil import parser as date_parser

from mymoney.domain import entities as domain
from mymoney.domain.aggregation import as_calendar_date


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return date_parser.isoparse(value)


def profile_to_domain(payload: dict[str, Any]) -> domain.Profile:
    """Convert a profile payload to a domain Profile entity."""
    return domain.Profile(
        id=payload.get("id"),
        full_name=payload.get("fullName") or "",
        email=payload.get("email") or "",
        profile_image_url=payload.get("profileImageUrl") or None,
        created_at=_parse_timestamp(payload.get("createdAt")),
    )


def category_to_domain(payload: dict[str, Any]) -> domain.Category:
    """Convert a category payload to a domain Category entity."""
    return domain.Category(
        id=payload["id"],
        name=payload["name"],
        type=domain.TransactionType(str(payload["type"]).lower()),
        icon=payload.get("icon") or None,
        created_at=_parse_timestamp(payload.get("createdAt")),
        updated_at=_parse_timestamp(payload.get("updatedAt")),
    )


def transaction_to_domain(
    payload: dict[str, Any], transaction_type: domain.TransactionType
) -> domain.Transaction:
    """Convert an income or expense payload to a domain Transaction entity.

    The type comes from the collection the payload was read from, unless the
    payload names it (mixed lists such as recent transactions do).
    """
    return domain.Transaction(
        id=payload["id"],
        name=payload["name"],
        amount=Decimal(str(payload["amount"])),
        date=as_calendar_date(payload["date"]),
        type=domain.TransactionType(payload.get("type") or transaction_type),
        category_id=payload.get("categoryId"),
        category_name=payload.get("categoryName"),
        icon=payload.get("icon") or None,
        created_at=_parse_timestamp(payload.get("createdAt")),
        updated_at=_parse_timestamp(payload.get("updatedAt")),
    )


def transaction_to_payload(
    name: str,
    amount: Decimal,
    txn_date: date,
    category_id: domain.EntityId,
    icon: Optional[str] = None,
) -> dict[str, Any]:
    """Build the request body for creating an income or expense."""
    return {
        "name": name,
        # Integral amounts go out as ints, the rest as floats
        "amount": int(amount) if amount == amount.to_integral_value() else float(amount),
        "date": txn_date.isoformat(),
        "icon": icon or "",
        "categoryId": category_id,
    }


def category_to_payload(
    name: str, category_type: domain.TransactionType, icon: Optional[str] = None
) -> dict[str, Any]:
    """Build the request body for creating or updating a category."""
    return {
        "name": name,
        "type": domain.TransactionType(category_type).value,
        "icon": icon or "",
    }
