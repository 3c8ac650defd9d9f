"""Database management for Decider.

Handles SQLite connections, migrations, and the bounded decision history.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from decider.config import get_config

logger = logging.getLogger(__name__)


class Database:
    """SQLite database wrapper."""

    def __init__(self, db_path: Path | None = None) -> None:
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database. If None, uses config.
        """
        self.db_path = db_path or get_config().database.path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._local = threading.local()
        self._connections: set[sqlite3.Connection] = set()
        self._connections_lock = threading.Lock()
        # Serializes insert-then-trim so the history cap holds across threads
        self._history_lock = threading.Lock()

    @property
    def conn(self) -> sqlite3.Connection:
        """Get or create database connection."""
        conn = getattr(self._local, "conn", None)
        if conn is None:
            conn = self._create_connection()
            self._local.conn = conn
        return conn

    def _create_connection(self) -> sqlite3.Connection:
        """Create and configure a new SQLite connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row

        if get_config().database.wal_mode:
            conn.execute("PRAGMA journal_mode=WAL")

        with self._connections_lock:
            self._connections.add(conn)

        return conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        try:
            yield self.conn
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def close(self) -> None:
        """Close all open database connections."""
        with self._connections_lock:
            connections = list(self._connections)
            self._connections.clear()

        for conn in connections:
            with contextlib.suppress(sqlite3.ProgrammingError):
                conn.close()

        if hasattr(self._local, "conn"):
            del self._local.conn

    def migrate(self) -> None:
        """Run database migrations."""
        try:
            cursor = self.conn.execute("SELECT MAX(version) FROM schema_migrations")
            current_version = cursor.fetchone()[0] or 0
        except sqlite3.OperationalError:
            # Table doesn't exist yet
            current_version = 0

        migrations_dir = Path(__file__).parent / "migrations"
        migration_files = sorted(migrations_dir.glob("*.sql"))

        for migration_file in migration_files:
            # 001_initial_schema.sql -> 1
            version = int(migration_file.stem.split("_")[0])

            if version > current_version:
                self._run_migration(migration_file, version)

    def _run_migration(self, migration_file: Path, version: int) -> None:
        """Run a single migration file.

        Args:
            migration_file: Path to the migration SQL file.
            version: Migration version number.
        """
        with open(migration_file) as f:
            sql = f.read()

        statements = sql.split(";")

        with self.transaction():
            for statement in statements:
                statement = statement.strip()
                if statement:
                    self.conn.execute(statement)

            cursor = self.conn.execute(
                "SELECT 1 FROM schema_migrations WHERE version = ?", (version,)
            )
            if not cursor.fetchone():
                self.conn.execute(
                    "INSERT INTO schema_migrations (version, name) VALUES (?, ?)",
                    (version, migration_file.stem),
                )
        logger.debug("Applied migration %s", migration_file.stem)

    # Decision history

    def insert_decision(
        self,
        *,
        decision_id: str,
        decided_at: str,
        selected_item: str,
        total_items: int,
        title: str | None,
        max_entries: int,
    ) -> int:
        """Insert a decision and evict anything beyond ``max_entries``.

        Returns:
            Number of old decisions evicted.
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")

        with self._history_lock, self.transaction():
            self.conn.execute(
                """
                INSERT INTO decision_history (
                    id, decided_at, selected_item, total_items, title
                )
                VALUES (?, ?, ?, ?, ?)
                """,
                (decision_id, decided_at, selected_item, int(total_items), title),
            )
            cursor = self.conn.execute(
                """
                DELETE FROM decision_history
                WHERE seq NOT IN (
                    SELECT seq FROM decision_history
                    ORDER BY seq DESC
                    LIMIT ?
                )
                """,
                (int(max_entries),),
            )
            evicted = cursor.rowcount

        if evicted:
            logger.info("Evicted %d decision(s) beyond the %d-entry history", evicted, max_entries)
        return evicted

    def get_decisions(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Get decisions, most recent first."""
        query = """
            SELECT id, decided_at, selected_item, total_items, title
            FROM decision_history
            ORDER BY seq DESC
        """
        params: list[Any] = []
        if limit is not None:
            query += " LIMIT ?"
            params.append(int(limit))
        cursor = self.conn.execute(query, params)
        return [dict(row) for row in cursor.fetchall()]

    def get_decision(self, decision_id: str) -> dict[str, Any] | None:
        """Get a single decision by id."""
        cursor = self.conn.execute(
            """
            SELECT id, decided_at, selected_item, total_items, title
            FROM decision_history
            WHERE id = ?
            """,
            (decision_id,),
        )
        row = cursor.fetchone()
        return dict(row) if row else None

    def count_decisions(self) -> int:
        """Count stored decisions."""
        cursor = self.conn.execute("SELECT COUNT(*) FROM decision_history")
        return int(cursor.fetchone()[0])

    def clear_decisions(self) -> int:
        """Delete every stored decision.

        Returns:
            Number of decisions removed.
        """
        with self._history_lock, self.transaction():
            cursor = self.conn.execute("DELETE FROM decision_history")
            removed = cursor.rowcount
        logger.info("Cleared %d decision(s) from history", removed)
        return removed


# Global database instance
_db: Database | None = None


def get_database() -> Database:
    """Get the global database instance."""
    global _db
    if _db is None:
        _db = Database()
    return _db


def reset_database() -> None:
    """Reset the global database (useful for testing)."""
    global _db
    if _db:
        _db.close()
    _db = None
