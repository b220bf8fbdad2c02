"""Tests for the JSON export."""

import json
from pathlib import Path

import pytest

from wealthwise.domain.models import Budget, CategoryId, Money, RecordId, Transaction, TransactionType
from wealthwise.export import export_all, parse_export
from wealthwise.store.sync import create_budget, record_transaction


class TestExportAll:
    """Tests for export_all."""

    def test_fresh_database(self, db_path: Path) -> None:
        """Should export the seeded categories and empty sections."""
        document = json.loads(export_all(db_path))

        assert set(document) == {"categories", "transactions", "budgets"}
        assert len(document["categories"]) == 14
        assert document["transactions"] == []
        assert document["budgets"] == []

    def test_reimport_matches_store(self, db_path: Path) -> None:
        """Should export everything needed to rebuild the same records."""
        txn = Transaction(
            id=RecordId("t1"),
            amount=Money(50.0),
            date="2024-03-15T12:00:00",
            category_id=CategoryId("food"),
            type=TransactionType.EXPENSE,
            description="Café",
        )
        record_transaction(txn, db_path)
        budget = create_budget(
            Budget(
                id=RecordId("b1"),
                name="Food",
                amount=Money(200.0),
                start_date="2024-03-01",
                end_date="2024-03-31",
                category_id=None,
            ),
            db_path,
        )

        text = export_all(db_path)
        bundle = parse_export(text)

        assert "Café" in text
        assert bundle.transactions == [txn]
        assert bundle.budgets == [budget]
        assert bundle.budgets[0].spent == 50
        assert len(bundle.categories) == 14


class TestParseExport:
    """Tests for parse_export error handling."""

    def test_invalid_json(self) -> None:
        """Should reject text that isn't JSON."""
        with pytest.raises(ValueError, match="not valid JSON"):
            parse_export("{not json")

    def test_not_an_object(self) -> None:
        """Should reject a top-level array."""
        with pytest.raises(ValueError, match="JSON object"):
            parse_export("[]")

    def test_missing_section(self) -> None:
        """Should name the missing section."""
        with pytest.raises(ValueError, match="budgets"):
            parse_export(json.dumps({"categories": [], "transactions": []}))

    def test_malformed_record(self) -> None:
        """Should reject records missing required fields."""
        text = json.dumps({"categories": [], "transactions": [{"id": "t1"}], "budgets": []})

        with pytest.raises(ValueError, match="Malformed"):
            parse_export(text)
