"""Test configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from decider.config import reset_config
from decider.db.database import reset_database


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def shopping_list(temp_dir):
    """Create a shared checklist file."""
    content = """Shopping List
[x] Milk
[ ] Bread
[ ] Eggs
"""
    path = temp_dir / "shopping.txt"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch, temp_dir):
    """Reset global state between tests and keep the database out of the cwd."""
    monkeypatch.setenv("DECIDER_DB_PATH", str(temp_dir / "global.db"))
    reset_config()
    reset_database()
    yield
    reset_config()
    reset_database()


@pytest.fixture
def test_db(temp_dir):
    """Create a test database."""
    from decider.db.database import Database

    db_path = temp_dir / "test.db"
    db = Database(db_path)
    db.migrate()
    yield db
    db.close()
