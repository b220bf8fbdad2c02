"""CLI entry point for wealthwise."""

import typer

from wealthwise.commands.admin import export_command, init_command, theme_command
from wealthwise.commands.budget import (
    budget_add_command,
    budget_delete_command,
    budget_edit_command,
    budget_list_command,
)
from wealthwise.commands.categories import category_add_command, category_delete_command, category_list_command
from wealthwise.commands.report import summary_command
from wealthwise.commands.transactions import add_command, delete_command, edit_command, list_command
from wealthwise.domain.models import TransactionType, WindowKind
from wealthwise.log import configure_logging

app = typer.Typer(
    name="wealthwise",
    help="WealthWise - Track your income, expenses and budgets",
    add_completion=False,
)
budget_app = typer.Typer(help="Manage your budgets.")
category_app = typer.Typer(help="Manage your categories.")
app.add_typer(budget_app, name="budget")
app.add_typer(category_app, name="category")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """WealthWise - Track your income, expenses and budgets."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize the database and configuration."""
    init_command(force)


@app.command()
def add(
    amount: float,
    category: str = typer.Option(..., "--category", "-c", help="Category id (see 'category list')"),
    type_: TransactionType = typer.Option(None, "--type", "-t", help="Defaults to the category's type"),
    date: str = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD, DD/MM/YYYY, ...); default now"),
    description: str = typer.Option(None, "--description", "-m", help="Optional description"),
) -> None:
    """Add an income or expense transaction."""
    add_command(amount, category, type_.value if type_ else None, date, description)


@app.command()
def edit(
    transaction_id: str,
    amount: float = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category id"),
    type_: TransactionType = typer.Option(None, "--type", "-t", help="New type"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    description: str = typer.Option(None, "--description", "-m", help="New description"),
) -> None:
    """Edit a transaction."""
    edit_command(transaction_id, amount, category, type_.value if type_ else None, date, description)


@app.command()
def delete(transaction_id: str) -> None:
    """Delete a transaction."""
    delete_command(transaction_id)


@app.command(name="list")
def list_transactions(
    window: WindowKind = typer.Option(None, "--window", "-w", help="Only show one period"),
    date: str = typer.Option(None, "--date", "-d", help="Any date inside the period (default today)"),
    category: str = typer.Option(None, "--category", "-c", help="Only show one category"),
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions."""
    list_command(window.value if window else None, date, category, None if all else limit)


@app.command()
def summary(
    window: WindowKind = typer.Option(WindowKind.MONTHLY, "--window", "-w", help="Period to summarize"),
    date: str = typer.Option(None, "--date", "-d", help="Any date inside the period (default today)"),
    histogram: bool = typer.Option(True, help="Show category breakdown histograms"),
) -> None:
    """Show income, expenses, balance and category breakdown."""
    summary_command(window.value, date, histogram)


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="Write to file instead of stdout"),
) -> None:
    """Export all your data as JSON."""
    export_command(output)


@app.command()
def theme(value: str = typer.Argument(None, help="light, dark or system")) -> None:
    """Show or set the display theme."""
    theme_command(value)


@budget_app.command(name="add")
def budget_add(
    name: str,
    amount: float,
    category: str = typer.Option(None, "--category", "-c", help="Category id (default: all categories)"),
    start: str = typer.Option(None, "--start", help="Start date (default today)"),
    end: str = typer.Option(None, "--end", help="End date (default one month after start)"),
) -> None:
    """Create a budget."""
    budget_add_command(name, amount, category, start, end)


@budget_app.command(name="list")
def budget_list(
    all: bool = typer.Option(True, "--all/--active", help="Include past budgets"),
) -> None:
    """Show budgets and how much of each is spent."""
    budget_list_command(all)


@budget_app.command(name="edit")
def budget_edit(
    budget_id: str,
    name: str = typer.Option(None, "--name", help="New name"),
    amount: float = typer.Option(None, "--amount", help="New cap"),
    category: str = typer.Option(None, "--category", "-c", help="New category id"),
    all_categories: bool = typer.Option(False, "--all-categories", help="Cover every category"),
    start: str = typer.Option(None, "--start", help="New start date"),
    end: str = typer.Option(None, "--end", help="New end date"),
) -> None:
    """Edit a budget."""
    budget_edit_command(budget_id, name, amount, category, all_categories, start, end)


@budget_app.command(name="delete")
def budget_delete(budget_id: str) -> None:
    """Delete a budget."""
    budget_delete_command(budget_id)


@category_app.command(name="list")
def category_list() -> None:
    """List categories."""
    category_list_command()


@category_app.command(name="add")
def category_add(
    name: str,
    type_: TransactionType = typer.Option(TransactionType.EXPENSE, "--type", "-t", help="income or expense"),
    icon: str = typer.Option("tag", "--icon", help="Icon name"),
    color: str = typer.Option("#6b7280", "--color", help="Hex color"),
    category_id: str = typer.Option(None, "--id", help="Category id (default: derived from name)"),
) -> None:
    """Add a category."""
    category_add_command(name, type_.value, icon, color, category_id)


@category_app.command(name="delete")
def category_delete(category_id: str) -> None:
    """Delete a category."""
    category_delete_command(category_id)


if __name__ == "__main__":
    app()
