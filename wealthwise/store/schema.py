"""Database schema initialization and migrations."""

import os
import sqlite3
from pathlib import Path

from wealthwise.log import get_logger

logger = get_logger(__name__)

# Ordered migrations; index + 1 is the schema version stored in PRAGMA user_version
MIGRATIONS: list[list[str]] = [
    [
        """
        CREATE TABLE IF NOT EXISTS categories (
            id TEXT PRIMARY KEY NOT NULL,
            name TEXT NOT NULL UNIQUE,
            color TEXT NOT NULL,
            icon TEXT NOT NULL,
            type TEXT NOT NULL CHECK (type IN ('income', 'expense'))
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS transactions (
            id TEXT PRIMARY KEY NOT NULL,
            categoryId TEXT NOT NULL,
            amount REAL NOT NULL CHECK (amount > 0),
            date TEXT NOT NULL,
            description TEXT,
            type TEXT NOT NULL CHECK (type IN ('income', 'expense'))
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS budgets (
            id TEXT PRIMARY KEY NOT NULL,
            name TEXT NOT NULL,
            categoryId TEXT REFERENCES categories(id) ON DELETE SET NULL,
            amount REAL NOT NULL CHECK (amount > 0),
            spent REAL NOT NULL DEFAULT 0 CHECK (spent >= 0),
            startDate TEXT NOT NULL,
            endDate TEXT NOT NULL
        )
        """,
    ],
    [
        "CREATE INDEX IF NOT EXISTS idx_txn_date ON transactions(date)",
        "CREATE INDEX IF NOT EXISTS idx_txn_category_date ON transactions(categoryId, date)",
        "CREATE INDEX IF NOT EXISTS idx_budget_end_date ON budgets(endDate)",
    ],
]

SCHEMA_VERSION = len(MIGRATIONS)

# (id, name, icon, color, type)
DEFAULT_CATEGORIES: list[tuple[str, str, str, str, str]] = [
    ("salary", "Salary", "briefcase", "#10b981", "income"),
    ("freelance", "Freelance", "laptop", "#3b82f6", "income"),
    ("investments", "Investments", "trending-up", "#f59e0b", "income"),
    ("gifts", "Gifts", "gift", "#ec4899", "income"),
    ("other_income", "Other Income", "more-horizontal", "#6b7280", "income"),
    ("food", "Food & Dining", "utensils", "#10b981", "expense"),
    ("shopping", "Shopping", "shopping-bag", "#f59e0b", "expense"),
    ("transportation", "Transportation", "car", "#3b82f6", "expense"),
    ("health", "Health & Fitness", "heart", "#ef4444", "expense"),
    ("entertainment", "Entertainment", "film", "#8b5cf6", "expense"),
    ("housing", "Housing", "home", "#64748b", "expense"),
    ("utilities", "Utilities", "plug", "#0ea5e9", "expense"),
    ("subscriptions", "Subscriptions", "repeat", "#ec4899", "expense"),
    ("other_expense", "Other Expense", "more-horizontal", "#6b7280", "expense"),
]

# Open handles, one per database file, kept for the life of the process
_connections: dict[Path, sqlite3.Connection] = {}


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path.

    WEALTHWISE_DB overrides the XDG location.
    """
    override = os.environ.get("WEALTHWISE_DB")
    if override:
        return Path(override).expanduser()
    return get_xdg_data_home() / "wealthwise" / "wealthwise.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def _apply_migrations(conn: sqlite3.Connection) -> None:
    current = conn.execute("PRAGMA user_version").fetchone()[0]

    for version, statements in enumerate(MIGRATIONS, start=1):
        if version <= current:
            continue
        for statement in statements:
            conn.execute(statement)
        # PRAGMA does not accept bound parameters
        conn.execute(f"PRAGMA user_version = {version}")
        logger.info("schema_migrated", version=version)


def _seed_categories(conn: sqlite3.Connection) -> None:
    count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
    if count:
        return

    conn.executemany(
        "INSERT INTO categories (id, name, icon, color, type) VALUES (?, ?, ?, ?, ?)",
        DEFAULT_CATEGORIES,
    )
    logger.info("categories_seeded", count=len(DEFAULT_CATEGORIES))


def init_database(db_path: Path | None = None) -> sqlite3.Connection:
    """Open the database and bring its schema up to date.

    Only the first call for a given path does any work; later calls return
    the already-open handle.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        The shared connection for this database.

    Raises:
        sqlite3.Error: If the database cannot be opened or a migration fails.
    """
    if db_path is None:
        db_path = get_db_path()

    key = db_path.resolve()
    conn = _connections.get(key)
    if conn is not None:
        return conn

    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(db_path)
    except (OSError, sqlite3.Error):
        logger.exception("database_open_failed", path=str(db_path))
        raise

    conn.row_factory = sqlite3.Row

    try:
        conn.execute("PRAGMA foreign_keys = ON")
        _apply_migrations(conn)
        _seed_categories(conn)
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        conn.close()
        logger.exception("schema_init_failed", path=str(db_path))
        raise

    _connections[key] = conn
    logger.debug("database_opened", path=str(db_path), version=SCHEMA_VERSION)
    return conn


def close_database(db_path: Path | None = None) -> None:
    """Close cached database handles.

    Args:
        db_path: Database to close. If None, closes every open handle.
    """
    if db_path is None:
        keys = list(_connections)
    else:
        keys = [db_path.resolve()]

    for key in keys:
        conn = _connections.pop(key, None)
        if conn is not None:
            conn.close()
