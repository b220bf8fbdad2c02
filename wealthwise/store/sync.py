"""Transaction and budget mutations that keep budget spend in step.

Each function persists the change through the query layer and then brings
the affected budgets' spent amounts up to date before returning. Callers run
one of these at a time; nothing here locks.
"""

from dataclasses import replace
from pathlib import Path

from wealthwise.domain.budget import apply_transaction, calculate_spent, recalculate_budgets
from wealthwise.domain.models import Budget, CategoryId, RecordId, Transaction
from wealthwise.log import get_logger
from wealthwise.store.queries import (
    delete_category,
    delete_transaction,
    get_all_budgets,
    get_all_transactions,
    insert_budget,
    insert_transaction_with_spend,
    set_budget_spent,
    update_budget,
    update_transaction,
)

logger = get_logger(__name__)


def recalculate_all_budgets(db_path: Path | None = None) -> list[Budget]:
    """Recompute every budget's spent amount from the full transaction set.

    Returns:
        Budgets whose spent amount changed, with their new value.
    """
    changed = recalculate_budgets(get_all_budgets(db_path), get_all_transactions(db_path))

    for budget in changed:
        set_budget_spent(budget.id, budget.spent, db_path)

    logger.debug("budgets_recalculated", changed=len(changed))
    return changed


def record_transaction(transaction: Transaction, db_path: Path | None = None) -> list[Budget]:
    """Store a new transaction and add it to every budget it counts towards.

    Income transactions never touch budgets. The transaction and the new
    spent amounts are written together, so a failure leaves neither behind.

    Returns:
        Budgets whose spent amount was increased.

    Raises:
        sqlite3.IntegrityError: If the transaction id already exists.
    """
    updated = apply_transaction(get_all_budgets(db_path), transaction)
    insert_transaction_with_spend(transaction, updated, db_path)

    logger.info("transaction_recorded", id=transaction.id, budgets_updated=len(updated))
    return updated


def edit_transaction(transaction: Transaction, db_path: Path | None = None) -> int:
    """Replace a transaction and recompute all budgets.

    Date, category, amount and type may all change at once, so budgets are
    recalculated from scratch rather than adjusted.

    Returns:
        Number of transaction rows updated (0 if the id is unknown).
    """
    count = update_transaction(transaction, db_path)
    recalculate_all_budgets(db_path)
    logger.info("transaction_edited", id=transaction.id, rows=count)
    return count


def remove_transaction(transaction_id: RecordId, db_path: Path | None = None) -> int:
    """Delete a transaction and recompute all budgets.

    Returns:
        Number of transaction rows deleted (0 if the id is unknown).
    """
    count = delete_transaction(transaction_id, db_path)
    recalculate_all_budgets(db_path)
    logger.info("transaction_removed", id=transaction_id, rows=count)
    return count


def create_budget(budget: Budget, db_path: Path | None = None) -> Budget:
    """Store a new budget with spent derived from existing transactions.

    Returns:
        The stored budget.

    Raises:
        sqlite3.IntegrityError: If the id already exists or the category is unknown.
    """
    stored = replace(budget, spent=calculate_spent(budget, get_all_transactions(db_path)))
    insert_budget(stored, db_path)
    logger.info("budget_created", id=stored.id, spent=stored.spent)
    return stored


def edit_budget(budget: Budget, db_path: Path | None = None) -> int:
    """Replace a budget, recomputing its spent amount for the new scope.

    Returns:
        Number of budget rows updated (0 if the id is unknown).
    """
    spent = calculate_spent(budget, get_all_transactions(db_path))
    count = update_budget(replace(budget, spent=spent), db_path)
    logger.info("budget_edited", id=budget.id, rows=count)
    return count


def remove_category(category_id: CategoryId, db_path: Path | None = None) -> int:
    """Delete a category and recompute budgets that now cover all categories.

    Returns:
        Number of category rows deleted (0 if the id is unknown).
    """
    count = delete_category(category_id, db_path)
    if count:
        recalculate_all_budgets(db_path)
    logger.info("category_removed", id=category_id, rows=count)
    return count
