"""Admin commands for init, export, and the theme preference."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from wealthwise.config import THEMES, create_default_config, get_config_path, get_theme, set_theme
from wealthwise.export import export_all
from wealthwise.store.queries import get_all_categories
from wealthwise.store.schema import close_database, get_db_path, init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print(f"[green]✓[/green] Database initialized ({len(get_all_categories(db_path))} categories)")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize wealthwise database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'wealthwise init --force' to overwrite[/yellow]")
            sys.exit(1)

        if db_exists:
            close_database(db_path)
            db_path.unlink()

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def export_command(output: str | None = None) -> None:
    """Export all data as JSON to a file or stdout."""
    db_path = get_db_path()

    try:
        document = export_all(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    if output is None:
        # Plain stdout so the document can be piped
        sys.stdout.write(document + "\n")
        return

    try:
        out_path = Path(output).expanduser()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(document, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Data exported to: {out_path}")


def theme_command(theme: str | None = None) -> None:
    """Show or set the display theme preference."""
    if theme is None:
        console.print(f"Theme: [bold]{get_theme()}[/bold] [dim](options: {', '.join(THEMES)})[/dim]")
        return

    try:
        set_theme(theme)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Theme set to {theme}")
