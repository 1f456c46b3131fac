"""Transaction list formatting."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from mymoney.domain.aggregation import as_calendar_date
from mymoney.domain.entities import TransactionType


def format_date_label(value: Union[date, datetime, str]) -> str:
    """Return the ISO date part of a date or timestamp."""
    return as_calendar_date(value).isoformat()


def format_timestamp_label(
    txn_date: Union[date, datetime, str], updated_at: Optional[datetime]
) -> str:
    """Combine the effective date with the clock time of the last update.

    The hour is rendered on a 12-hour clock with an "am"/"pm" suffix. Hours
    from 12 upwards are "pm". Hour 0 is shown as "0" rather than "12".

    Args:
        txn_date: Effective date of the transaction
        updated_at: Server update timestamp, or None

    Returns:
        Label such as "2024-01-05 at 1:05:09 pm"
    """
    label = format_date_label(txn_date)
    if updated_at is None:
        return label

    hour = updated_at.hour
    suffix = "pm" if hour >= 12 else "am"
    display_hour = hour - 12 if hour > 12 else hour
    return (
        f"{label} at {display_hour}:{updated_at.minute:02d}:"
        f"{updated_at.second:02d} {suffix}"
    )


def format_amount(amount: Union[Decimal, int, float, str, None]) -> str:
    """Insert thousands separators into an amount.

    The integer part is grouped by thousands; a non-zero fractional part is
    kept as is. No sign glyph is added here.

    Examples:
        1234567 -> "1,234,567"
        1234.5 -> "1,234.5"
    """
    if amount is None or amount == "":
        return ""
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return str(amount)
    if not value.is_finite():
        return str(amount)

    if value == value.to_integral_value():
        return f"{int(value):,}"

    text = format(value.normalize(), "f")
    integer_part, fractional_part = text.split(".")
    sign = "-" if integer_part.startswith("-") else ""
    grouped = f"{abs(int(integer_part)):,}"
    return f"{sign}{grouped}.{fractional_part}"


def format_signed_amount(
    amount: Union[Decimal, int, float, str],
    transaction_type: TransactionType,
    currency: Optional[str] = None,
) -> str:
    """Prefix a formatted amount with "+" for income or "-" for expense."""
    sign = "+" if TransactionType(transaction_type) is TransactionType.INCOME else "-"
    if currency:
        return f"{sign} {currency} {format_amount(amount)}"
    return f"{sign} {format_amount(amount)}"
