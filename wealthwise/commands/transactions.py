"""Transaction management commands (add, edit, delete, list)."""

import sqlite3
import sys
from dataclasses import replace
from datetime import datetime
from typing import Any, NoReturn

import pandas as pd
from rich.console import Console
from rich.table import Table

from wealthwise.domain.aggregation import UNCATEGORIZED, category_name, filter_by_window, group_by_date
from wealthwise.domain.models import (
    CategoryId,
    Money,
    RecordId,
    Transaction,
    TransactionType,
    WindowKind,
    is_date_only,
    new_record_id,
    parse_timestamp,
    validate_transaction,
)
from wealthwise.store.queries import (
    get_all_categories,
    get_all_transactions,
    get_category,
    get_transaction,
    get_transactions_by_category,
)
from wealthwise.store.schema import get_db_path
from wealthwise.store.sync import edit_transaction, record_transaction, remove_transaction

console = Console()


def parse_date_input(value: str) -> str:
    """Normalize a user-entered date to ISO-8601.

    ISO input is taken as is; anything else (DD/MM/YYYY, "15 Mar 2024", ...)
    goes through pandas with day-first parsing.

    Args:
        value: Date or timestamp typed by the user.

    Returns:
        "YYYY-MM-DD" when no time was given, otherwise "YYYY-MM-DDTHH:MM:SS".

    Raises:
        ValueError: If the value can't be parsed.
    """
    try:
        dt = parse_timestamp(value)
        has_time = not is_date_only(value)
    except ValueError:
        try:
            parsed = pd.to_datetime(value, dayfirst=True)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid date: {value}") from e
        if pd.isna(parsed):
            raise ValueError(f"Invalid date: {value}")
        dt = parsed.to_pydatetime()
        if dt.tzinfo is not None:
            dt = dt.astimezone().replace(tzinfo=None)
        has_time = ":" in value

    if not has_time:
        return dt.strftime("%Y-%m-%d")
    return dt.isoformat(timespec="seconds")


def format_money(amount: float) -> str:
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def format_signed(transaction: Transaction) -> str:
    """Format a transaction amount with sign and color markup."""
    if transaction.type is TransactionType.EXPENSE:
        return f"[red]-{format_money(transaction.amount)}[/red]"
    return f"[green]+{format_money(transaction.amount)}[/green]"


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]", style="bold")
    sys.exit(1)


def add_command(
    amount: float,
    category: str,
    type_: str | None = None,
    date: str | None = None,
    description: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        amount: Positive transaction amount.
        category: Category id.
        type_: "income" or "expense". Defaults to the category's type.
        date: Transaction date (ISO, DD/MM/YYYY, ...). Defaults to now.
        description: Optional description.
    """
    db_path = get_db_path()

    try:
        cat = get_category(CategoryId(category), db_path)
        if cat is None:
            _fail(f"Unknown category '{category}' (see 'wealthwise category list')")

        try:
            when = parse_date_input(date) if date else datetime.now().isoformat(timespec="seconds")
        except ValueError as e:
            _fail(str(e))

        transaction = Transaction(
            id=new_record_id(),
            amount=Money(amount),
            date=when,
            category_id=cat.id,
            type=TransactionType(type_) if type_ else cat.type,
            description=description,
        )

        valid, error = validate_transaction(transaction)
        if not valid:
            _fail(error or "Invalid transaction")

        updated = record_transaction(transaction, db_path)

        console.print("[green]✓[/green] Transaction added:")
        console.print(f"  ID: {transaction.id}")
        console.print(f"  Date: {transaction.date}")
        console.print(f"  Amount: {format_signed(transaction)}")
        console.print(f"  Category: {cat.name}")
        if description:
            console.print(f"  Description: {description}")
        for budget in updated:
            console.print(f"[dim]Budget '{budget.name}' spent now {format_money(budget.spent)}[/dim]")

    except sqlite3.IntegrityError as e:
        _fail(f"Could not add transaction: {e}")
    except sqlite3.Error as e:
        _fail(f"Database error: {e}")


def edit_command(
    transaction_id: str,
    amount: float | None = None,
    category: str | None = None,
    type_: str | None = None,
    date: str | None = None,
    description: str | None = None,
) -> None:
    """Edit fields of an existing transaction; unspecified fields are kept."""
    db_path = get_db_path()

    try:
        current = get_transaction(RecordId(transaction_id), db_path)
        if current is None:
            console.print(f"[yellow]Transaction {transaction_id} not found[/yellow]")
            return

        changes: dict[str, Any] = {}
        if amount is not None:
            changes["amount"] = Money(amount)
        if category is not None:
            if get_category(CategoryId(category), db_path) is None:
                _fail(f"Unknown category '{category}'")
            changes["category_id"] = CategoryId(category)
        if type_ is not None:
            changes["type"] = TransactionType(type_)
        if date is not None:
            try:
                changes["date"] = parse_date_input(date)
            except ValueError as e:
                _fail(str(e))
        if description is not None:
            changes["description"] = description

        updated = replace(current, **changes)
        valid, error = validate_transaction(updated)
        if not valid:
            _fail(error or "Invalid transaction")

        count = edit_transaction(updated, db_path)
        if count == 0:
            console.print(f"[yellow]Transaction {transaction_id} no longer exists[/yellow]")
            return

        console.print(f"[green]✓[/green] Updated transaction {transaction_id}")
        console.print(f"  {updated.date}  {format_signed(updated)}  {updated.category_id}")

    except sqlite3.Error as e:
        _fail(f"Database error: {e}")


def delete_command(transaction_id: str) -> None:
    """Delete a transaction."""
    db_path = get_db_path()

    try:
        count = remove_transaction(RecordId(transaction_id), db_path)
    except sqlite3.Error as e:
        _fail(f"Database error: {e}")

    if count == 0:
        console.print(f"[yellow]Transaction {transaction_id} not found[/yellow]")
    else:
        console.print(f"[green]✓[/green] Deleted transaction {transaction_id}")


def list_command(
    window: str | None = None,
    date: str | None = None,
    category: str | None = None,
    limit: int | None = 50,
) -> None:
    """List transactions grouped by day, newest first."""
    db_path = get_db_path()

    try:
        categories = get_all_categories(db_path)
        if category:
            transactions = get_transactions_by_category(CategoryId(category), db_path)
        else:
            transactions = get_all_transactions(db_path)

        if window:
            reference = parse_timestamp(parse_date_input(date)) if date else None
            transactions = filter_by_window(transactions, WindowKind(window), reference)

        if limit is not None:
            transactions = transactions[:limit]

        if not transactions:
            console.print("[yellow]No transactions found[/yellow]")
            return

        table = Table(title=f"Transactions (showing {len(transactions)})")
        table.add_column("Date", style="cyan")
        table.add_column("Time", style="dim")
        table.add_column("Description", style="white")
        table.add_column("Category", style="magenta")
        table.add_column("Amount", justify="right")
        table.add_column("ID", style="dim")

        for day, day_transactions in group_by_date(transactions):
            for idx, txn in enumerate(day_transactions):
                table.add_row(
                    day if idx == 0 else "",
                    parse_timestamp(txn.date).strftime("%H:%M"),
                    txn.description or "[dim]-[/dim]",
                    category_name(categories, txn.category_id, UNCATEGORIZED),
                    format_signed(txn),
                    txn.id,
                )

        console.print(table)

    except ValueError as e:
        _fail(str(e))
    except sqlite3.Error as e:
        _fail(f"Database error: {e}")
