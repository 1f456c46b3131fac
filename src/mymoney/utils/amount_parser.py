"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str) -> Decimal:
    """Parse user input into a Decimal amount.

    Handles various formats:
    - "123.45"
    - "$123.45", "123.45 €"
    - "1,234.56"
    - "1 234 567"

    Numbers are passed through unchanged as Decimals.

    Args:
        amount_str: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value is empty, non-numeric or not finite
    """
    if isinstance(amount_str, (int, Decimal)):
        return Decimal(amount_str)
    if isinstance(amount_str, float):
        return Decimal(str(amount_str))

    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols, grouping commas and spaces
    cleaned = re.sub(r"[$€£¥₫,\s]", "", str(amount_str))
    cleaned = re.sub(r"(?i)vnd", "", cleaned)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return amount
