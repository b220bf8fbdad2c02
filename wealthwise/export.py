"""Whole-database export to a shareable JSON document."""

import json
from dataclasses import dataclass
from pathlib import Path

from wealthwise.domain.models import Budget, Category, Transaction
from wealthwise.log import get_logger
from wealthwise.store.queries import get_all_budgets, get_all_categories, get_all_transactions

logger = get_logger(__name__)

SECTIONS = ("categories", "transactions", "budgets")


@dataclass(frozen=True)
class ExportBundle:
    """Immutable contents of an export document."""

    categories: list[Category]
    transactions: list[Transaction]
    budgets: list[Budget]


def export_all(db_path: Path | None = None) -> str:
    """Serialize every category, transaction and budget.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Pretty-printed JSON with one section per entity.

    Raises:
        sqlite3.Error: If reading the database fails.
    """
    document = {
        "categories": [c.to_row() for c in get_all_categories(db_path)],
        "transactions": [t.to_row() for t in get_all_transactions(db_path)],
        "budgets": [b.to_row() for b in get_all_budgets(db_path)],
    }
    logger.info("data_exported", **{name: len(document[name]) for name in SECTIONS})
    return json.dumps(document, indent=2, ensure_ascii=False)


def parse_export(text: str) -> ExportBundle:
    """Load an export document back into domain records.

    Args:
        text: JSON produced by export_all.

    Returns:
        ExportBundle with all three sections.

    Raises:
        ValueError: If the text is not valid JSON or a section is missing or malformed.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Export is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise ValueError("Export must be a JSON object")

    for name in SECTIONS:
        if not isinstance(document.get(name), list):
            raise ValueError(f"Export is missing the '{name}' section")

    try:
        return ExportBundle(
            categories=[Category.from_row(row) for row in document["categories"]],
            transactions=[Transaction.from_row(row) for row in document["transactions"]],
            budgets=[Budget.from_row(row) for row in document["budgets"]],
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ValueError(f"Malformed record in export: {e}") from e
