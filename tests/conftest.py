"""Shared fixtures for wealthwise tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from wealthwise.store.schema import close_database


@pytest.fixture
def db_path(tmp_path: Path) -> Iterator[Path]:
    """Path to a fresh database, closed after the test."""
    path = tmp_path / "wealthwise.db"
    yield path
    close_database(path)
