"""Summary command: totals and spending breakdown for a time window."""

import sqlite3
import sys
from datetime import datetime

from rich.console import Console

from wealthwise.commands.transactions import format_money, parse_date_input
from wealthwise.dates import format_window_label
from wealthwise.domain.aggregation import (
    UNCATEGORIZED,
    CategoryTotal,
    category_totals,
    filter_by_type,
    filter_by_window,
    totals,
)
from wealthwise.domain.models import Money, TransactionType, WindowKind, parse_timestamp
from wealthwise.store.queries import get_all_categories, get_all_transactions
from wealthwise.store.schema import get_db_path

console = Console()


def calculate_histogram_bar_length(amount: Money, max_amount: Money, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def render_breakdown(title: str, breakdown: list[CategoryTotal], names: dict[str, str], bar_width: int) -> None:
    """Render one category breakdown as a histogram, largest first."""
    if not breakdown:
        return

    console.print(f"{title}\n")
    ordered = sorted(breakdown, key=lambda c: c.amount, reverse=True)
    max_amount = Money(max(c.amount for c in ordered))

    for item in ordered:
        bar = "█" * calculate_histogram_bar_length(item.amount, max_amount, bar_width)
        label = names.get(item.category_id, UNCATEGORIZED)
        console.print(f"  {label:20} {format_money(item.amount):>12} {bar}")

    console.print()


def summary_command(window: str = "monthly", date: str | None = None, histogram: bool = True) -> None:
    """Show income, expense and balance for a window plus a per-category breakdown."""
    db_path = get_db_path()

    try:
        kind = WindowKind(window)
        reference = parse_timestamp(parse_date_input(date)) if date else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    try:
        categories = get_all_categories(db_path)
        transactions = filter_by_window(get_all_transactions(db_path), kind, reference)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[bold cyan]{format_window_label(kind, reference or datetime.now())}[/bold cyan]\n")

    if not transactions:
        console.print("[dim]No transactions in this period[/dim]")
        return

    summary = totals(transactions)
    console.print(f"  [green]Income:[/green]  {format_money(summary.income)}")
    console.print(f"  [red]Expense:[/red] {format_money(summary.expense)}")
    balance_color = "green" if summary.balance >= 0 else "red"
    console.print(f"  [bold]Balance:[/bold] [{balance_color}]{format_money(summary.balance)}[/{balance_color}]\n")

    if not histogram:
        return

    names = {c.id: c.name for c in categories}
    render_breakdown(
        "[bold red]Expenses by category:[/bold red]",
        category_totals(filter_by_type(transactions, TransactionType.EXPENSE)),
        names,
        bar_width=30,
    )
    render_breakdown(
        "[bold green]Income by category:[/bold green]",
        category_totals(filter_by_type(transactions, TransactionType.INCOME)),
        names,
        bar_width=40,
    )
