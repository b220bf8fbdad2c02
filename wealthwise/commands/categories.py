"""Category commands (list, add, delete)."""

import re
import sqlite3
import sys

from rich.console import Console
from rich.table import Table

from wealthwise.domain.models import Category, CategoryId, TransactionType, validate_category
from wealthwise.store.queries import get_all_categories, insert_category
from wealthwise.store.schema import get_db_path
from wealthwise.store.sync import remove_category

console = Console()


def slugify(name: str) -> str:
    """Turn a category name into an id, e.g. "Pet Care" -> "pet_care"."""
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


def category_list_command() -> None:
    """List categories."""
    db_path = get_db_path()

    try:
        categories = get_all_categories(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    table = Table(title=f"Categories ({len(categories)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="white")
    table.add_column("Type")
    table.add_column("Icon", style="dim")
    table.add_column("Color")

    for category in categories:
        type_display = (
            "[green]income[/green]" if category.type is TransactionType.INCOME else "[red]expense[/red]"
        )
        table.add_row(
            category.id,
            category.name,
            type_display,
            category.icon,
            f"[{category.color}]■[/{category.color}] {category.color}",
        )

    console.print(table)


def category_add_command(
    name: str,
    type_: str = "expense",
    icon: str = "tag",
    color: str = "#6b7280",
    category_id: str | None = None,
) -> None:
    """Add a category."""
    db_path = get_db_path()

    category = Category(
        id=CategoryId(category_id or slugify(name)),
        name=name,
        icon=icon,
        color=color,
        type=TransactionType(type_),
    )

    valid, error = validate_category(category)
    if not valid:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)

    try:
        insert_category(category, db_path)
    except sqlite3.IntegrityError as e:
        console.print(f"[red]Could not add category: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Created category: {category.name} (ID: {category.id})")


def category_delete_command(category_id: str) -> None:
    """Delete a category. Budgets scoped to it widen to all categories."""
    db_path = get_db_path()

    try:
        count = remove_category(CategoryId(category_id), db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if count == 0:
        console.print(f"[yellow]Category {category_id} not found[/yellow]")
    else:
        console.print(f"[green]✓[/green] Deleted category {category_id}")
        console.print("[dim]Its transactions now show as Uncategorized[/dim]")
