"""Pure functions for summaries, breakdowns and budget progress.

This module contains the functional core for reporting:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from wealthwise.dates import window_range
from wealthwise.domain.budget import budget_bounds
from wealthwise.domain.models import (
    Budget,
    Category,
    CategoryId,
    Money,
    Transaction,
    TransactionType,
    WindowKind,
    parse_timestamp,
)

UNCATEGORIZED = "Uncategorized"
UNKNOWN_CATEGORY = "Unknown Category"
ALL_CATEGORIES = "All Categories"

WARNING_THRESHOLD = 70.0
NEAR_LIMIT_THRESHOLD = 90.0


@dataclass(frozen=True)
class Totals:
    """Immutable income/expense totals."""

    income: Money
    expense: Money
    balance: Money


@dataclass(frozen=True)
class CategoryTotal:
    """Immutable total for one category."""

    category_id: CategoryId
    amount: Money


class BudgetHealth(str, Enum):
    """How close a budget is to its cap."""

    ON_TRACK = "on_track"
    WARNING = "warning"
    NEAR_LIMIT = "near_limit"
    EXCEEDED = "exceeded"


def filter_by_window(
    transactions: list[Transaction],
    kind: WindowKind,
    reference: datetime | None = None,
) -> list[Transaction]:
    """Keep the transactions dated inside a time window.

    Args:
        transactions: Transactions to filter.
        kind: Window kind (daily, weekly, monthly, yearly).
        reference: Instant inside the wanted window. Defaults to now.

    Returns:
        Transactions whose date lies within the window, bounds inclusive,
        in their original order.
    """
    if reference is None:
        reference = datetime.now()

    start, end = window_range(kind, reference)
    return [t for t in transactions if start <= parse_timestamp(t.date) <= end]


def totals(transactions: list[Transaction]) -> Totals:
    """Calculate income, expense and balance for a set of transactions."""
    income = sum(t.amount for t in transactions if t.type is TransactionType.INCOME)
    expense = sum(t.amount for t in transactions if t.type is TransactionType.EXPENSE)
    return Totals(income=Money(income), expense=Money(expense), balance=Money(income - expense))


def category_totals(transactions: list[Transaction]) -> list[CategoryTotal]:
    """Sum transaction amounts per category.

    Amounts are summed regardless of type, so callers filter by type first
    (e.g. expenses only for a spending breakdown).

    Returns:
        One CategoryTotal per category in order of first appearance.
    """
    sums: dict[CategoryId, float] = {}
    for transaction in transactions:
        sums[transaction.category_id] = sums.get(transaction.category_id, 0.0) + transaction.amount

    return [CategoryTotal(category_id=cid, amount=Money(amount)) for cid, amount in sums.items()]


def filter_by_type(transactions: list[Transaction], type_: TransactionType) -> list[Transaction]:
    """Keep only transactions of one type, in their original order."""
    return [t for t in transactions if t.type is TransactionType(type_)]


def group_by_date(transactions: list[Transaction]) -> list[tuple[str, list[Transaction]]]:
    """Group transactions by calendar day, newest day first.

    Returns:
        List of (YYYY-MM-DD, transactions) tuples. Transactions keep their
        relative order within a day.
    """
    groups: dict[str, list[Transaction]] = {}
    for transaction in transactions:
        day = parse_timestamp(transaction.date).strftime("%Y-%m-%d")
        groups.setdefault(day, []).append(transaction)

    return sorted(groups.items(), key=lambda item: item[0], reverse=True)


def progress_percentage(budget: Budget) -> float:
    """Calculate the share of a budget already spent.

    Returns:
        Percentage between 0 and 100. Budgets with no positive cap report 0.
    """
    if budget.amount <= 0:
        return 0.0
    return min(100.0, (budget.spent / budget.amount) * 100)


def remaining(budget: Budget) -> Money:
    """Calculate what is left of a budget (negative when overspent)."""
    return Money(budget.amount - budget.spent)


def budget_health(budget: Budget) -> BudgetHealth:
    """Classify a budget by how much of it has been consumed."""
    percentage = progress_percentage(budget)

    if percentage >= 100:
        return BudgetHealth.EXCEEDED
    if percentage >= NEAR_LIMIT_THRESHOLD:
        return BudgetHealth.NEAR_LIMIT
    if percentage >= WARNING_THRESHOLD:
        return BudgetHealth.WARNING
    return BudgetHealth.ON_TRACK


def is_active(budget: Budget, now: datetime | None = None) -> bool:
    """Check whether a budget's end date is still in the future.

    A date-only end date keeps the budget active until the end of that day.
    """
    if now is None:
        now = datetime.now()
    _, end = budget_bounds(budget)
    return end > now


def split_active_budgets(
    budgets: list[Budget], now: datetime | None = None
) -> tuple[list[Budget], list[Budget]]:
    """Split budgets into (active, inactive) lists, preserving order."""
    active = [b for b in budgets if is_active(b, now)]
    inactive = [b for b in budgets if not is_active(b, now)]
    return active, inactive


def category_name(
    categories: list[Category],
    category_id: CategoryId | None,
    fallback: str = UNCATEGORIZED,
) -> str:
    """Resolve a category id to its display name.

    Args:
        categories: Known categories.
        category_id: Id to resolve. None means all categories (budget scope).
        fallback: Label used when the id is not found.

    Returns:
        Category name, ALL_CATEGORIES for None, or the fallback label.
    """
    if category_id is None:
        return ALL_CATEGORIES

    for category in categories:
        if category.id == category_id:
            return category.name

    return fallback
