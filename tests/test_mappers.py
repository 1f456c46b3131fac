"""Tests for API payload mappers."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from mymoney.api.mappers import (
    category_to_domain,
    category_to_payload,
    profile_to_domain,
    transaction_to_domain,
    transaction_to_payload,
)
from mymoney.domain.entities import TransactionType


class TestProfileMapper:
    """Tests for Profile mapper."""

    def test_profile_to_domain(self):
        profile = profile_to_domain(
            {
                "id": 3,
                "fullName": "Jane Doe",
                "email": "jane@example.com",
                "profileImageUrl": "",
                "createdAt": "2024-01-01T09:00:00Z",
            }
        )

        assert profile.id == 3
        assert profile.full_name == "Jane Doe"
        assert profile.profile_image_url is None
        assert profile.created_at == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def test_profile_with_missing_fields(self):
        profile = profile_to_domain({"email": "jane@example.com"})

        assert profile.full_name == ""
        assert profile.created_at is None


class TestCategoryMapper:
    """Tests for Category mapper."""

    def test_category_to_domain(self):
        category = category_to_domain({"id": 4, "name": "Food", "type": "EXPENSE", "icon": "🍔"})

        assert category.id == 4
        assert category.type is TransactionType.EXPENSE
        assert category.icon == "🍔"

    def test_category_to_payload(self):
        assert category_to_payload("Food", TransactionType.EXPENSE) == {
            "name": "Food",
            "type": "expense",
            "icon": "",
        }


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        txn = transaction_to_domain(
            {
                "id": 1,
                "name": "Salary",
                "amount": 1500.25,
                "date": "2024-01-05T00:00:00",
                "categoryId": 2,
                "categoryName": "Work",
                "updatedAt": "2024-01-05T13:05:09",
            },
            TransactionType.INCOME,
        )

        assert txn.amount == Decimal("1500.25")
        assert txn.date == date(2024, 1, 5)
        assert txn.type is TransactionType.INCOME
        assert txn.updated_at == datetime(2024, 1, 5, 13, 5, 9)
        assert txn.created_at is None

    def test_payload_type_overrides_collection(self):
        txn = transaction_to_domain(
            {"id": 1, "name": "Rent", "amount": 800, "date": "2024-02-01", "type": "expense"},
            TransactionType.INCOME,
        )

        assert txn.type is TransactionType.EXPENSE

    def test_transaction_missing_amount(self):
        with pytest.raises(KeyError):
            transaction_to_domain({"id": 1, "name": "Rent", "date": "2024-02-01"}, TransactionType.EXPENSE)

    @pytest.mark.parametrize(
        "amount,expected",
        [(Decimal("1500"), 1500), (Decimal("1500.00"), 1500), (Decimal("12.5"), 12.5)],
    )
    def test_transaction_to_payload_amount(self, amount, expected):
        payload = transaction_to_payload("Salary", amount, date(2024, 1, 5), 2)

        assert payload["amount"] == expected
        assert type(payload["amount"]) is type(expected)
        assert payload["date"] == "2024-01-05"
        assert payload["categoryId"] == 2
        assert payload["icon"] == ""
