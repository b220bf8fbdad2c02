"""Tests for wealthwise.domain.budget pure functions."""

from datetime import datetime

from wealthwise.domain.budget import (
    apply_transaction,
    budget_bounds,
    calculate_spent,
    recalculate_budgets,
    transaction_in_budget,
)
from wealthwise.domain.models import Budget, CategoryId, Money, RecordId, Transaction, TransactionType


def expense(txn_id: str, amount: float, date: str, category: str = "food") -> Transaction:
    return Transaction(
        id=RecordId(txn_id),
        amount=Money(amount),
        date=date,
        category_id=CategoryId(category),
        type=TransactionType.EXPENSE,
    )


def income(txn_id: str, amount: float, date: str, category: str = "salary") -> Transaction:
    return Transaction(
        id=RecordId(txn_id),
        amount=Money(amount),
        date=date,
        category_id=CategoryId(category),
        type=TransactionType.INCOME,
    )


FOOD_MARCH = Budget(
    id=RecordId("b-food"),
    name="Food March",
    amount=Money(200.0),
    start_date="2024-03-01",
    end_date="2024-03-31",
    category_id=CategoryId("food"),
)

ALL_MARCH = Budget(
    id=RecordId("b-all"),
    name="Everything March",
    amount=Money(1000.0),
    start_date="2024-03-01",
    end_date="2024-03-31",
    category_id=None,
)


class TestBudgetBounds:
    """Tests for budget_bounds."""

    def test_date_only_end_covers_whole_day(self) -> None:
        """Should stretch a date-only end date to the end of that day."""
        start, end = budget_bounds(FOOD_MARCH)

        assert start == datetime(2024, 3, 1)
        assert end == datetime(2024, 3, 31, 23, 59, 59, 999999)

    def test_timestamp_end_is_kept(self) -> None:
        """Should keep an explicit end time."""
        budget = Budget(
            id=RecordId("b"),
            name="b",
            amount=Money(1),
            start_date="2024-03-01T00:00:00",
            end_date="2024-03-31T12:00:00",
        )

        _, end = budget_bounds(budget)

        assert end == datetime(2024, 3, 31, 12)


class TestTransactionInBudget:
    """Tests for transaction_in_budget."""

    def test_matching_expense(self) -> None:
        """Should match an expense in range and category."""
        assert transaction_in_budget(expense("t", 50, "2024-03-15"), FOOD_MARCH)

    def test_income_never_counts(self) -> None:
        """Should ignore income transactions."""
        assert not transaction_in_budget(income("t", 50, "2024-03-15", "food"), FOOD_MARCH)

    def test_other_category(self) -> None:
        """Should ignore expenses in a different category."""
        assert not transaction_in_budget(expense("t", 50, "2024-03-15", "transportation"), FOOD_MARCH)

    def test_null_category_budget_matches_any_category(self) -> None:
        """Should count every category for an all-categories budget."""
        assert transaction_in_budget(expense("t", 50, "2024-03-15", "transportation"), ALL_MARCH)
        assert transaction_in_budget(expense("t", 50, "2024-03-15", "food"), ALL_MARCH)

    def test_bounds_are_inclusive(self) -> None:
        """Should include transactions on the first and last day."""
        assert transaction_in_budget(expense("t", 1, "2024-03-01T00:00:00"), FOOD_MARCH)
        assert transaction_in_budget(expense("t", 1, "2024-03-31T23:59:59"), FOOD_MARCH)

    def test_outside_range(self) -> None:
        """Should ignore expenses before or after the range."""
        assert not transaction_in_budget(expense("t", 1, "2024-02-29T23:59:59"), FOOD_MARCH)
        assert not transaction_in_budget(expense("t", 1, "2024-04-01T00:00:00"), FOOD_MARCH)


class TestCalculateSpent:
    """Tests for calculate_spent."""

    def test_sums_matching_expenses_only(self) -> None:
        """Should sum only the transactions that count."""
        transactions = [
            expense("t1", 50, "2024-03-15"),
            expense("t2", 25.5, "2024-03-20"),
            expense("t3", 100, "2024-04-02"),
            expense("t4", 10, "2024-03-10", "shopping"),
            income("t5", 3000, "2024-03-01"),
        ]

        assert calculate_spent(FOOD_MARCH, transactions) == 75.5
        assert calculate_spent(ALL_MARCH, transactions) == 85.5

    def test_no_transactions(self) -> None:
        """Should be zero with nothing to sum."""
        assert calculate_spent(FOOD_MARCH, []) == 0


class TestApplyTransaction:
    """Tests for apply_transaction."""

    def test_adds_to_matching_budgets(self) -> None:
        """Should add the amount to every matching budget."""
        updated = apply_transaction([FOOD_MARCH, ALL_MARCH], expense("t", 50, "2024-03-15"))

        assert {b.id: b.spent for b in updated} == {"b-food": 50.0, "b-all": 50.0}

    def test_income_changes_nothing(self) -> None:
        """Should leave budgets alone for income."""
        assert apply_transaction([FOOD_MARCH, ALL_MARCH], income("t", 50, "2024-03-15")) == []

    def test_only_returns_matches(self) -> None:
        """Should skip budgets the transaction doesn't count towards."""
        updated = apply_transaction([FOOD_MARCH, ALL_MARCH], expense("t", 50, "2024-03-15", "transportation"))

        assert [b.id for b in updated] == ["b-all"]


class TestRecalculateBudgets:
    """Tests for recalculate_budgets."""

    def test_returns_only_changed_budgets(self) -> None:
        """Should skip budgets whose spent is already right."""
        stale = Budget(
            id=FOOD_MARCH.id,
            name=FOOD_MARCH.name,
            amount=FOOD_MARCH.amount,
            start_date=FOOD_MARCH.start_date,
            end_date=FOOD_MARCH.end_date,
            category_id=FOOD_MARCH.category_id,
            spent=Money(50.0),
        )

        changed = recalculate_budgets([stale, ALL_MARCH], [])

        assert len(changed) == 1
        assert changed[0].id == "b-food"
        assert changed[0].spent == 0

    def test_type_change_is_picked_up(self) -> None:
        """An expense turned into income should drop out of spent."""
        spent_before = calculate_spent(FOOD_MARCH, [expense("t", 50, "2024-03-15")])
        spent_after = calculate_spent(FOOD_MARCH, [income("t", 50, "2024-03-15", "food")])

        assert spent_before == 50
        assert spent_after == 0
