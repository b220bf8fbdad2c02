"""Tests for wealthwise.domain.models."""

from datetime import datetime

import pytest

from wealthwise.domain.models import (
    Budget,
    Category,
    CategoryId,
    Money,
    RecordId,
    Transaction,
    TransactionType,
    is_date_only,
    new_record_id,
    normalize_timestamp,
    parse_timestamp,
    validate_budget,
    validate_category,
    validate_transaction,
)


def make_transaction(**overrides: object) -> Transaction:
    fields: dict = {
        "id": RecordId("t1"),
        "amount": Money(50.0),
        "date": "2024-03-15T12:00:00",
        "category_id": CategoryId("food"),
        "type": TransactionType.EXPENSE,
    }
    fields.update(overrides)
    return Transaction(**fields)


def make_budget(**overrides: object) -> Budget:
    fields: dict = {
        "id": RecordId("b1"),
        "name": "Groceries",
        "amount": Money(200.0),
        "start_date": "2024-03-01",
        "end_date": "2024-03-31",
        "category_id": CategoryId("food"),
    }
    fields.update(overrides)
    return Budget(**fields)


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_date_only(self) -> None:
        """Should parse a bare date as midnight."""
        assert parse_timestamp("2024-03-15") == datetime(2024, 3, 15)

    def test_naive_timestamp(self) -> None:
        """Should parse a timestamp with fractional seconds."""
        assert parse_timestamp("2024-03-31T23:59:59.999") == datetime(2024, 3, 31, 23, 59, 59, 999000)

    def test_utc_timestamp_is_made_naive(self) -> None:
        """Should convert aware timestamps to naive local time."""
        result = parse_timestamp("2024-03-15T10:00:00Z")

        assert result.tzinfo is None

    def test_invalid_raises_valueerror(self) -> None:
        """Should raise ValueError for non-ISO input."""
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")

    def test_is_date_only(self) -> None:
        """Should detect strings without a time component."""
        assert is_date_only("2024-03-31")
        assert not is_date_only("2024-03-31T10:00:00")

    def test_normalize_keeps_date_only(self) -> None:
        """Should store date-only values unchanged."""
        assert normalize_timestamp("2024-03-31") == "2024-03-31"

    def test_normalize_drops_offset(self) -> None:
        """Should store aware timestamps as naive local time."""
        normalized = normalize_timestamp("2024-03-15T10:00:00+02:00")

        assert datetime.fromisoformat(normalized).tzinfo is None
        assert normalized == parse_timestamp("2024-03-15T10:00:00+02:00").isoformat()


class TestNewRecordId:
    """Tests for new_record_id."""

    def test_ids_are_unique_and_increasing(self) -> None:
        """Should never repeat an id within a process."""
        ids = [int(new_record_id()) for _ in range(50)]

        assert len(set(ids)) == 50
        assert ids == sorted(ids)


class TestRowConversion:
    """Tests for to_row/from_row."""

    def test_transaction_row_uses_column_names(self) -> None:
        """Should map fields to persisted column names."""
        row = make_transaction(description="Lunch").to_row()

        assert row == {
            "id": "t1",
            "amount": 50.0,
            "date": "2024-03-15T12:00:00",
            "description": "Lunch",
            "categoryId": "food",
            "type": "expense",
        }

    def test_budget_null_category_is_none(self) -> None:
        """Should read a null categoryId as None (all categories)."""
        row = make_budget(category_id=None).to_row()

        assert row["categoryId"] is None
        assert Budget.from_row(row).category_id is None

    def test_category_from_row(self) -> None:
        """Should parse the type into the enum."""
        category = Category.from_row(
            {"id": "salary", "name": "Salary", "icon": "briefcase", "color": "#10b981", "type": "income"}
        )

        assert category.type is TransactionType.INCOME


class TestValidateTransaction:
    """Tests for validate_transaction."""

    def test_valid(self) -> None:
        """Should accept a well-formed transaction."""
        assert validate_transaction(make_transaction()) == (True, None)

    def test_zero_amount(self) -> None:
        """Should reject a zero amount."""
        assert validate_transaction(make_transaction(amount=Money(0))) == (False, "Amount must be positive")

    def test_negative_amount(self) -> None:
        """Should reject a negative amount."""
        valid, _ = validate_transaction(make_transaction(amount=Money(-5)))

        assert valid is False

    def test_missing_category(self) -> None:
        """Should require a category."""
        assert validate_transaction(make_transaction(category_id=CategoryId(""))) == (False, "Category is required")

    def test_bad_date(self) -> None:
        """Should reject an unparseable date."""
        valid, error = validate_transaction(make_transaction(date="15th of March"))

        assert valid is False
        assert error is not None and "Invalid date" in error


class TestValidateBudget:
    """Tests for validate_budget."""

    def test_valid(self) -> None:
        """Should accept a well-formed budget."""
        assert validate_budget(make_budget()) == (True, None)

    def test_blank_name(self) -> None:
        """Should require a name."""
        assert validate_budget(make_budget(name="  ")) == (False, "Budget name is required")

    def test_non_positive_amount(self) -> None:
        """Should reject a zero cap."""
        assert validate_budget(make_budget(amount=Money(0))) == (False, "Amount must be positive")

    def test_end_before_start(self) -> None:
        """Should require the end date after the start date."""
        result = validate_budget(make_budget(start_date="2024-03-31", end_date="2024-03-01"))

        assert result == (False, "End date must be after start date")

    def test_end_equal_to_start(self) -> None:
        """Should reject an empty date range."""
        valid, _ = validate_budget(make_budget(start_date="2024-03-01", end_date="2024-03-01"))

        assert valid is False


class TestValidateCategory:
    """Tests for validate_category."""

    def test_blank_name(self) -> None:
        """Should require a name."""
        category = Category(
            id=CategoryId("x"), name="", icon="tag", color="#000000", type=TransactionType.EXPENSE
        )

        assert validate_category(category) == (False, "Category name is required")
