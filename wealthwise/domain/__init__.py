"""Domain models and types for wealthwise.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from wealthwise.domain.models import (
    Budget,
    Category,
    CategoryId,
    Money,
    RecordId,
    Transaction,
    TransactionType,
    WindowKind,
)

__all__ = [
    "Budget",
    "Category",
    "CategoryId",
    "Money",
    "RecordId",
    "Transaction",
    "TransactionType",
    "WindowKind",
]
