"""Pure functions for budget spend calculations.

This module contains the functional core of budget synchronization:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Only expense transactions ever count towards a budget's spent amount.
"""

from dataclasses import replace
from datetime import datetime

from wealthwise.dates import end_of_day
from wealthwise.domain.models import Budget, Money, Transaction, TransactionType, is_date_only, parse_timestamp


def budget_bounds(budget: Budget) -> tuple[datetime, datetime]:
    """Calculate the inclusive date range of a budget.

    A date-only end date covers the whole of that day.

    Args:
        budget: Budget to inspect.

    Returns:
        Tuple of (start, end).
    """
    start = parse_timestamp(budget.start_date)
    end = parse_timestamp(budget.end_date)
    if is_date_only(budget.end_date):
        end = end_of_day(end)
    return start, end


def transaction_in_budget(transaction: Transaction, budget: Budget) -> bool:
    """Check whether a transaction counts towards a budget.

    Args:
        transaction: Transaction to check.
        budget: Budget to check against.

    Returns:
        True if the transaction is an expense inside the budget's date range
        and category scope.
    """
    if transaction.type is not TransactionType.EXPENSE:
        return False

    if budget.category_id is not None and budget.category_id != transaction.category_id:
        return False

    start, end = budget_bounds(budget)
    return start <= parse_timestamp(transaction.date) <= end


def calculate_spent(budget: Budget, transactions: list[Transaction]) -> Money:
    """Sum the amounts of every transaction that counts towards a budget."""
    return Money(sum(t.amount for t in transactions if transaction_in_budget(t, budget)))


def apply_transaction(budgets: list[Budget], transaction: Transaction) -> list[Budget]:
    """Add a new transaction's amount to each budget it counts towards.

    Args:
        budgets: Current budgets.
        transaction: Newly added transaction.

    Returns:
        List of updated budgets (only those that matched).
    """
    return [
        replace(budget, spent=Money(budget.spent + transaction.amount))
        for budget in budgets
        if transaction_in_budget(transaction, budget)
    ]


def recalculate_budgets(budgets: list[Budget], transactions: list[Transaction]) -> list[Budget]:
    """Recompute every budget's spent amount from scratch.

    Args:
        budgets: Current budgets.
        transactions: Full transaction set.

    Returns:
        List of budgets whose spent amount changed, with the new value.
    """
    changed: list[Budget] = []

    for budget in budgets:
        spent = calculate_spent(budget, transactions)
        if abs(spent - budget.spent) > 1e-9:
            changed.append(replace(budget, spent=spent))

    return changed
