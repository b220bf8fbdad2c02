"""Tests for database initialization and migrations."""

from pathlib import Path

import pytest

from wealthwise.store.schema import (
    DEFAULT_CATEGORIES,
    SCHEMA_VERSION,
    close_database,
    database_exists,
    get_db_path,
    init_database,
)


class TestInitDatabase:
    """Tests for init_database."""

    def test_creates_file_and_tables(self, db_path: Path) -> None:
        """Should create the database with all three tables."""
        conn = init_database(db_path)

        tables = {
            row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        }
        assert {"categories", "transactions", "budgets"} <= tables
        assert database_exists(db_path)

    def test_records_schema_version(self, db_path: Path) -> None:
        """Should store the latest migration number in user_version."""
        conn = init_database(db_path)

        assert conn.execute("PRAGMA user_version").fetchone()[0] == SCHEMA_VERSION

    def test_seeds_default_categories(self, db_path: Path) -> None:
        """Should seed the default categories on a fresh database."""
        conn = init_database(db_path)

        count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        assert count == len(DEFAULT_CATEGORIES) == 14

    def test_enables_foreign_keys(self, db_path: Path) -> None:
        """Should turn on foreign key enforcement."""
        conn = init_database(db_path)

        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_second_call_returns_same_handle(self, db_path: Path) -> None:
        """Should reuse the open connection."""
        assert init_database(db_path) is init_database(db_path)

    def test_reopen_does_not_reseed(self, db_path: Path) -> None:
        """Should leave existing data alone when opened again."""
        conn = init_database(db_path)
        conn.execute("DELETE FROM categories WHERE id = 'gifts'")
        conn.commit()
        close_database(db_path)

        conn = init_database(db_path)

        count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        assert count == len(DEFAULT_CATEGORIES) - 1
        assert conn.execute("PRAGMA user_version").fetchone()[0] == SCHEMA_VERSION

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Should create missing parent directories."""
        path = tmp_path / "nested" / "dir" / "wealthwise.db"
        try:
            init_database(path)
            assert path.exists()
        finally:
            close_database(path)

    def test_unopenable_path_raises(self, tmp_path: Path) -> None:
        """Should propagate the error when the location can't be created."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(OSError):
            init_database(blocker / "wealthwise.db")


class TestGetDbPath:
    """Tests for get_db_path."""

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should honour WEALTHWISE_DB."""
        monkeypatch.setenv("WEALTHWISE_DB", str(tmp_path / "custom.db"))

        assert get_db_path() == tmp_path / "custom.db"

    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to the XDG data directory."""
        monkeypatch.delenv("WEALTHWISE_DB", raising=False)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert get_db_path() == tmp_path / "wealthwise" / "wealthwise.db"
