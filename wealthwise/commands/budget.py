"""Budget commands for creating, reviewing and removing spending caps."""

import sqlite3
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
from rich.console import Console
from rich.table import Table

from wealthwise.commands.transactions import format_money, parse_date_input
from wealthwise.domain.aggregation import (
    UNKNOWN_CATEGORY,
    BudgetHealth,
    budget_health,
    category_name,
    progress_percentage,
    remaining,
    split_active_budgets,
)
from wealthwise.domain.models import (
    Budget,
    Category,
    CategoryId,
    Money,
    RecordId,
    new_record_id,
    parse_timestamp,
    validate_budget,
)
from wealthwise.store.queries import delete_budget, get_all_budgets, get_all_categories, get_budget, get_category
from wealthwise.store.schema import get_db_path
from wealthwise.store.sync import create_budget, edit_budget

console = Console()

HEALTH_COLORS = {
    BudgetHealth.ON_TRACK: "green",
    BudgetHealth.WARNING: "yellow",
    BudgetHealth.NEAR_LIMIT: "red",
    BudgetHealth.EXCEEDED: "red",
}


def format_progress(budget: Budget) -> str:
    """Format budget usage percentage with color based on health."""
    color = HEALTH_COLORS[budget_health(budget)]
    return f"[{color}]{progress_percentage(budget):.0f}%[/{color}]"


def format_remaining(budget: Budget) -> str:
    left = remaining(budget)
    if left < 0:
        return f"[red]{format_money(abs(left))} over[/red]"
    return f"[green]{format_money(left)}[/green]"


def budget_warning(budget: Budget) -> str | None:
    """Warning text for budgets at or past 90% of their cap."""
    health = budget_health(budget)
    if health is BudgetHealth.EXCEEDED:
        return "Budget exceeded! Consider adjusting your spending."
    if health is BudgetHealth.NEAR_LIMIT:
        return "Almost at budget limit!"
    return None


def _default_end(start: str) -> str:
    """One month after the start (clamped to month end), as the entry form proposed."""
    return (pd.Timestamp(parse_timestamp(start)) + pd.DateOffset(months=1)).strftime("%Y-%m-%d")


def _check_category(category: str | None, db_path: Path) -> CategoryId | None:
    if category is None:
        return None
    if get_category(CategoryId(category), db_path) is None:
        console.print(f"[red]Unknown category '{category}'[/red]", style="bold")
        sys.exit(1)
    return CategoryId(category)


def budget_add_command(
    name: str,
    amount: float,
    category: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> None:
    """Create a budget; spent is derived from existing transactions."""
    db_path = get_db_path()

    try:
        category_id = _check_category(category, db_path)
        start_date = parse_date_input(start) if start else datetime.now().strftime("%Y-%m-%d")
        end_date = parse_date_input(end) if end else _default_end(start_date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    budget = Budget(
        id=new_record_id(),
        name=name,
        amount=Money(amount),
        start_date=start_date,
        end_date=end_date,
        category_id=category_id,
    )

    valid, error = validate_budget(budget)
    if not valid:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)

    try:
        stored = create_budget(budget, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Could not add budget: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Budget '{stored.name}' created (ID: {stored.id})")
    console.print(f"  {stored.start_date} → {stored.end_date}")
    console.print(f"  Spent so far: {format_money(stored.spent)} of {format_money(stored.amount)}")


def budget_edit_command(
    budget_id: str,
    name: str | None = None,
    amount: float | None = None,
    category: str | None = None,
    all_categories: bool = False,
    start: str | None = None,
    end: str | None = None,
) -> None:
    """Edit fields of a budget; unspecified fields are kept."""
    db_path = get_db_path()

    try:
        current = get_budget(RecordId(budget_id), db_path)
        if current is None:
            console.print(f"[yellow]Budget {budget_id} not found[/yellow]")
            return

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if amount is not None:
            changes["amount"] = Money(amount)
        if all_categories:
            changes["category_id"] = None
        elif category is not None:
            changes["category_id"] = _check_category(category, db_path)
        if start is not None:
            changes["start_date"] = parse_date_input(start)
        if end is not None:
            changes["end_date"] = parse_date_input(end)

        updated = replace(current, **changes)
        valid, error = validate_budget(updated)
        if not valid:
            console.print(f"[red]{error}[/red]", style="bold")
            sys.exit(1)

        if edit_budget(updated, db_path) == 0:
            console.print(f"[yellow]Budget {budget_id} no longer exists[/yellow]")
            return

        console.print(f"[green]✓[/green] Updated budget '{updated.name}'")

    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def budget_delete_command(budget_id: str) -> None:
    """Delete a budget."""
    db_path = get_db_path()

    try:
        count = delete_budget(RecordId(budget_id), db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if count == 0:
        console.print(f"[yellow]Budget {budget_id} not found[/yellow]")
    else:
        console.print(f"[green]✓[/green] Deleted budget {budget_id}")


def render_budget_table(title: str, budgets: list[Budget], categories: list[Category]) -> None:
    table = Table(title=title)
    table.add_column("Name", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Period", style="cyan")
    table.add_column("Spent", justify="right")
    table.add_column("Budget", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Used", justify="right")
    table.add_column("ID", style="dim")

    for budget in budgets:
        start = parse_timestamp(budget.start_date).strftime("%b %d")
        end = parse_timestamp(budget.end_date).strftime("%b %d, %Y")
        table.add_row(
            budget.name,
            category_name(categories, budget.category_id, UNKNOWN_CATEGORY),
            f"{start} - {end}",
            format_money(budget.spent),
            format_money(budget.amount),
            format_remaining(budget),
            format_progress(budget),
            budget.id,
        )

    console.print(table)


def budget_list_command(show_inactive: bool = True) -> None:
    """Show active budgets with progress, then past ones."""
    db_path = get_db_path()

    try:
        budgets = get_all_budgets(db_path)
        categories = get_all_categories(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not budgets:
        console.print("[yellow]No budgets set[/yellow]")
        return

    active, inactive = split_active_budgets(budgets)

    if active:
        render_budget_table("Active Budgets", active, categories)
        for budget in active:
            warning = budget_warning(budget)
            if warning:
                console.print(f"[red]⚠ {budget.name}: {warning}[/red]")

    if inactive and show_inactive:
        console.print()
        render_budget_table("Past Budgets", inactive, categories)
