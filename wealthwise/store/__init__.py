"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from wealthwise.store.queries import (
    delete_budget,
    delete_category,
    delete_transaction,
    get_all_budgets,
    get_all_categories,
    get_all_transactions,
    get_budget,
    get_category,
    get_transaction,
    get_transactions_by_category,
    insert_budget,
    insert_category,
    insert_transaction,
    insert_transaction_with_spend,
    set_budget_spent,
    update_budget,
    update_category,
    update_transaction,
)
from wealthwise.store.schema import close_database, database_exists, get_db_path, init_database
from wealthwise.store.sync import (
    create_budget,
    edit_budget,
    edit_transaction,
    recalculate_all_budgets,
    record_transaction,
    remove_category,
    remove_transaction,
)

__all__ = [
    # Schema
    "close_database",
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_budget",
    "delete_category",
    "delete_transaction",
    "get_all_budgets",
    "get_all_categories",
    "get_all_transactions",
    "get_budget",
    "get_category",
    "get_transaction",
    "get_transactions_by_category",
    "insert_budget",
    "insert_category",
    "insert_transaction",
    "insert_transaction_with_spend",
    "set_budget_spent",
    "update_budget",
    "update_category",
    "update_transaction",
    # Budget synchronization
    "create_budget",
    "edit_budget",
    "edit_transaction",
    "recalculate_all_budgets",
    "record_transaction",
    "remove_category",
    "remove_transaction",
]
