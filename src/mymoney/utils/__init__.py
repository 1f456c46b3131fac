"""Utility functions for mymoney."""

from mymoney.utils.date_parser import parse_date, get_date_range
from mymoney.utils.amount_parser import parse_amount
from mymoney.utils.category_resolver import resolve_category
from mymoney.utils.validation import validate_email

__all__ = [
    "parse_date",
    "get_date_range",
    "parse_amount",
    "resolve_category",
    "validate_email",
]
