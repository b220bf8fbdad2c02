"""Domain types for wealthwise.

These types give the rest of the package a shared vocabulary:
- Money: Amount in the user's currency (stored as REAL)
- CategoryId / RecordId: Opaque string identifiers
- Category, Transaction, Budget: Immutable records mirroring the persisted rows
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, NewType

# Money amounts are plain decimals; every stored amount is positive
Money = NewType("Money", float)

# Category ids are application-level slugs (e.g. "food")
CategoryId = NewType("CategoryId", str)

# Transaction and budget ids are caller-supplied opaque strings
RecordId = NewType("RecordId", str)


class TransactionType(str, Enum):
    """Direction of a transaction or category."""

    INCOME = "income"
    EXPENSE = "expense"


class WindowKind(str, Enum):
    """Time window used for filtering and summaries."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Category:
    """Immutable category record."""

    id: CategoryId
    name: str
    icon: str
    color: str
    type: TransactionType

    def to_row(self) -> dict[str, Any]:
        """Convert to a row keyed by column name."""
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "type": self.type.value,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Category":
        """Build a category from a database row."""
        return cls(
            id=CategoryId(row["id"]),
            name=row["name"],
            icon=row["icon"],
            color=row["color"],
            type=TransactionType(row["type"]),
        )


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record."""

    id: RecordId
    amount: Money
    date: str  # ISO-8601 timestamp
    category_id: CategoryId
    type: TransactionType
    description: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Convert to a row keyed by column name, with the date normalized.

        Raises:
            ValueError: If the date is not ISO-8601.
        """
        return {
            "id": self.id,
            "amount": self.amount,
            "date": normalize_timestamp(self.date),
            "description": self.description,
            "categoryId": self.category_id,
            "type": self.type.value,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Transaction":
        """Build a transaction from a database row."""
        return cls(
            id=RecordId(row["id"]),
            amount=Money(row["amount"]),
            date=row["date"],
            category_id=CategoryId(row["categoryId"]),
            type=TransactionType(row["type"]),
            description=row.get("description"),
        )


@dataclass(frozen=True)
class Budget:
    """Immutable budget record.

    ``category_id`` of None means the budget covers every category.
    ``spent`` is derived from transactions and only rewritten by the
    budget synchronizer.
    """

    id: RecordId
    name: str
    amount: Money
    start_date: str
    end_date: str
    category_id: CategoryId | None = None
    spent: Money = Money(0.0)

    def to_row(self) -> dict[str, Any]:
        """Convert to a row keyed by column name, with the dates normalized.

        Raises:
            ValueError: If a date is not ISO-8601.
        """
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "spent": self.spent,
            "categoryId": self.category_id,
            "startDate": normalize_timestamp(self.start_date),
            "endDate": normalize_timestamp(self.end_date),
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Budget":
        """Build a budget from a database row. A null category means all categories."""
        category_id = row.get("categoryId")
        return cls(
            id=RecordId(row["id"]),
            name=row["name"],
            amount=Money(row["amount"]),
            spent=Money(row.get("spent") or 0.0),
            category_id=CategoryId(category_id) if category_id else None,
            start_date=row["startDate"],
            end_date=row["endDate"],
        )


_last_record_id = 0


def new_record_id() -> RecordId:
    """Generate a timestamp-derived record id (milliseconds since epoch).

    Ids handed out by one process are strictly increasing, even when two are
    requested within the same millisecond.
    """
    global _last_record_id
    candidate = int(datetime.now().timestamp() * 1000)
    _last_record_id = max(candidate, _last_record_id + 1)
    return RecordId(str(_last_record_id))


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or timestamp into a naive local datetime.

    Args:
        value: ISO-8601 string, e.g. "2024-03-15" or "2024-03-15T10:30:00Z".

    Returns:
        Naive datetime. Aware values are converted to local time first.

    Raises:
        ValueError: If the value is not ISO-8601.
    """
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def is_date_only(value: str) -> bool:
    """Check whether an ISO-8601 string carries no time component."""
    return "T" not in value and " " not in value.strip()


def normalize_timestamp(value: str) -> str:
    """Rewrite an ISO-8601 value in the form it is stored in.

    Timestamps become naive local time so stored values sort as text in
    chronological order. Date-only values are kept as they are.

    Raises:
        ValueError: If the value is not ISO-8601.
    """
    if is_date_only(value):
        return parse_timestamp(value).date().isoformat()
    return parse_timestamp(value).isoformat()


def validate_transaction(transaction: Transaction) -> tuple[bool, str | None]:
    """Validate a transaction before it is stored.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if transaction.amount <= 0:
        return False, "Amount must be positive"

    if not transaction.category_id:
        return False, "Category is required"

    try:
        parse_timestamp(transaction.date)
    except ValueError:
        return False, f"Invalid date: {transaction.date}"

    return True, None


def validate_budget(budget: Budget) -> tuple[bool, str | None]:
    """Validate a budget before it is stored.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not budget.name.strip():
        return False, "Budget name is required"

    if budget.amount <= 0:
        return False, "Amount must be positive"

    try:
        start = parse_timestamp(budget.start_date)
        end = parse_timestamp(budget.end_date)
    except ValueError as e:
        return False, f"Invalid date: {e}"

    if end <= start:
        return False, "End date must be after start date"

    return True, None


def validate_category(category: Category) -> tuple[bool, str | None]:
    """Validate a category before it is stored.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not category.name.strip():
        return False, "Category name is required"

    if not category.id.strip():
        return False, "Category id is required"

    return True, None
