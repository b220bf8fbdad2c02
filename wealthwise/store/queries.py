"""Database query functions.

Every mutation commits before returning. Updates and deletes report the
number of rows affected; zero means the id was unknown, which is not an error.
"""

import sqlite3
from pathlib import Path
from typing import Any

from wealthwise.domain.models import Budget, Category, CategoryId, Money, RecordId, Transaction
from wealthwise.log import get_logger
from wealthwise.store.schema import init_database

logger = get_logger(__name__)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Borrow the shared database connection, initializing it on first use.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    return init_database(db_path)


def _fetch_all(
    sql: str, params: tuple[Any, ...] | list[Any], operation: str, db_path: Path | None
) -> list[dict[str, Any]]:
    conn = _connect(db_path)
    try:
        cursor = conn.execute(sql, params)
        return [dict(row) for row in cursor.fetchall()]
    except sqlite3.Error:
        logger.exception("query_failed", operation=operation)
        raise


Statement = tuple[str, tuple[Any, ...] | dict[str, Any]]


def _execute(sql: str, params: tuple[Any, ...] | dict[str, Any], operation: str, db_path: Path | None) -> int:
    """Run one mutating statement and commit.

    Returns:
        Number of rows affected.
    """
    return _execute_batch([(sql, params)], operation, db_path)[0]


def _execute_batch(statements: list[Statement], operation: str, db_path: Path | None) -> list[int]:
    """Run mutating statements in a single transaction and commit.

    If any statement fails, none of them are kept.

    Returns:
        Number of rows affected by each statement.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        counts: list[int] = []
        try:
            for sql, params in statements:
                cursor.execute(sql, params)
                counts.append(cursor.rowcount)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.exception("query_failed", operation=operation)
            raise

    logger.debug("query_executed", operation=operation, rows=sum(counts))
    return counts


# Categories


def get_all_categories(db_path: Path | None = None) -> list[Category]:
    """Get all categories.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of categories, income first, then alphabetically.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    rows = _fetch_all(
        "SELECT id, name, icon, color, type FROM categories ORDER BY type DESC, name",
        (),
        "get_all_categories",
        db_path,
    )
    return [Category.from_row(row) for row in rows]


def get_category(category_id: CategoryId, db_path: Path | None = None) -> Category | None:
    """Get a single category by id, or None if it doesn't exist."""
    rows = _fetch_all(
        "SELECT id, name, icon, color, type FROM categories WHERE id = ?",
        (category_id,),
        "get_category",
        db_path,
    )
    return Category.from_row(rows[0]) if rows else None


def insert_category(category: Category, db_path: Path | None = None) -> None:
    """Add a new category.

    Args:
        category: Category to insert.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.IntegrityError: If the id or name is already taken.
    """
    _execute(
        "INSERT INTO categories (id, name, icon, color, type) VALUES (:id, :name, :icon, :color, :type)",
        category.to_row(),
        "insert_category",
        db_path,
    )


def update_category(category: Category, db_path: Path | None = None) -> int:
    """Replace a category's fields.

    Returns:
        Number of rows updated (0 if the id is unknown).

    Raises:
        sqlite3.IntegrityError: If the new name is already taken.
    """
    return _execute(
        "UPDATE categories SET name = :name, icon = :icon, color = :color, type = :type WHERE id = :id",
        category.to_row(),
        "update_category",
        db_path,
    )


def delete_category(category_id: CategoryId, db_path: Path | None = None) -> int:
    """Delete a category.

    Budgets scoped to it fall back to all categories; transactions keep
    their now dangling reference.

    Returns:
        Number of rows deleted (0 if the id is unknown).
    """
    return _execute("DELETE FROM categories WHERE id = ?", (category_id,), "delete_category", db_path)


# Transactions

_TRANSACTION_COLUMNS = "id, amount, date, description, categoryId, type"
_INSERT_TRANSACTION_SQL = (
    f"INSERT INTO transactions ({_TRANSACTION_COLUMNS}) "
    "VALUES (:id, :amount, :date, :description, :categoryId, :type)"
)


def get_all_transactions(db_path: Path | None = None, limit: int | None = None) -> list[Transaction]:
    """Get all transactions.

    Args:
        db_path: Path to the database file. If None, uses default location.
        limit: Maximum number of transactions to return. If None, returns all.

    Returns:
        List of transactions ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    query = f"SELECT {_TRANSACTION_COLUMNS} FROM transactions ORDER BY date DESC, id DESC"
    params: list[Any] = []

    if limit is not None:
        query += " LIMIT ?"
        params.append(limit)

    rows = _fetch_all(query, params, "get_all_transactions", db_path)
    return [Transaction.from_row(row) for row in rows]


def get_transaction(transaction_id: RecordId, db_path: Path | None = None) -> Transaction | None:
    """Get a single transaction by id, or None if it doesn't exist."""
    rows = _fetch_all(
        f"SELECT {_TRANSACTION_COLUMNS} FROM transactions WHERE id = ?",
        (transaction_id,),
        "get_transaction",
        db_path,
    )
    return Transaction.from_row(rows[0]) if rows else None


def get_transactions_by_category(category_id: CategoryId, db_path: Path | None = None) -> list[Transaction]:
    """Get all transactions for a category, newest first.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    rows = _fetch_all(
        f"SELECT {_TRANSACTION_COLUMNS} FROM transactions WHERE categoryId = ? ORDER BY date DESC, id DESC",
        (category_id,),
        "get_transactions_by_category",
        db_path,
    )
    return [Transaction.from_row(row) for row in rows]


def insert_transaction(transaction: Transaction, db_path: Path | None = None) -> None:
    """Insert a transaction with a caller-supplied id.

    Args:
        transaction: Transaction to insert.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.IntegrityError: If the id already exists or the amount is not positive.
    """
    _execute(_INSERT_TRANSACTION_SQL, transaction.to_row(), "insert_transaction", db_path)


def insert_transaction_with_spend(
    transaction: Transaction, budgets: list[Budget], db_path: Path | None = None
) -> None:
    """Insert a transaction and store the spent amount of each budget in one commit.

    Either the transaction and every spent amount are written, or nothing is.

    Args:
        transaction: Transaction to insert.
        budgets: Budgets whose spent field should be stored.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.IntegrityError: If the id already exists or a value breaks a constraint.
    """
    statements: list[Statement] = [(_INSERT_TRANSACTION_SQL, transaction.to_row())]
    statements += [(_SET_SPENT_SQL, (budget.spent, budget.id)) for budget in budgets]
    _execute_batch(statements, "insert_transaction_with_spend", db_path)


def update_transaction(transaction: Transaction, db_path: Path | None = None) -> int:
    """Replace every field of a transaction, keyed by its id.

    Returns:
        Number of rows updated (0 if the id is unknown).
    """
    return _execute(
        "UPDATE transactions SET amount = :amount, date = :date, description = :description, "
        "categoryId = :categoryId, type = :type WHERE id = :id",
        transaction.to_row(),
        "update_transaction",
        db_path,
    )


def delete_transaction(transaction_id: RecordId, db_path: Path | None = None) -> int:
    """Delete a transaction.

    Returns:
        Number of rows deleted (0 if the id is unknown).
    """
    return _execute("DELETE FROM transactions WHERE id = ?", (transaction_id,), "delete_transaction", db_path)


# Budgets

_BUDGET_COLUMNS = "id, name, amount, spent, categoryId, startDate, endDate"
_SET_SPENT_SQL = "UPDATE budgets SET spent = ? WHERE id = ?"


def get_all_budgets(db_path: Path | None = None) -> list[Budget]:
    """Get all budgets.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of budgets ordered by end date.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    rows = _fetch_all(
        f"SELECT {_BUDGET_COLUMNS} FROM budgets ORDER BY endDate, id",
        (),
        "get_all_budgets",
        db_path,
    )
    return [Budget.from_row(row) for row in rows]


def get_budget(budget_id: RecordId, db_path: Path | None = None) -> Budget | None:
    """Get a single budget by id, or None if it doesn't exist."""
    rows = _fetch_all(
        f"SELECT {_BUDGET_COLUMNS} FROM budgets WHERE id = ?",
        (budget_id,),
        "get_budget",
        db_path,
    )
    return Budget.from_row(rows[0]) if rows else None


def insert_budget(budget: Budget, db_path: Path | None = None) -> None:
    """Insert a budget with a caller-supplied id.

    Raises:
        sqlite3.IntegrityError: If the id already exists or the category is unknown.
    """
    _execute(
        f"INSERT INTO budgets ({_BUDGET_COLUMNS}) "
        "VALUES (:id, :name, :amount, :spent, :categoryId, :startDate, :endDate)",
        budget.to_row(),
        "insert_budget",
        db_path,
    )


def update_budget(budget: Budget, db_path: Path | None = None) -> int:
    """Replace every field of a budget, keyed by its id.

    Returns:
        Number of rows updated (0 if the id is unknown).
    """
    return _execute(
        "UPDATE budgets SET name = :name, amount = :amount, spent = :spent, categoryId = :categoryId, "
        "startDate = :startDate, endDate = :endDate WHERE id = :id",
        budget.to_row(),
        "update_budget",
        db_path,
    )


def set_budget_spent(budget_id: RecordId, spent: Money, db_path: Path | None = None) -> int:
    """Overwrite a budget's derived spent amount.

    Returns:
        Number of rows updated (0 if the id is unknown).
    """
    return _execute(_SET_SPENT_SQL, (spent, budget_id), "set_budget_spent", db_path)


def delete_budget(budget_id: RecordId, db_path: Path | None = None) -> int:
    """Delete a budget.

    Returns:
        Number of rows deleted (0 if the id is unknown).
    """
    return _execute("DELETE FROM budgets WHERE id = ?", (budget_id,), "delete_budget", db_path)
