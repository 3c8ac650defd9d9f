"""Database module for the decision history."""

from decider.db.database import Database, get_database, reset_database

__all__ = ["Database", "get_database", "reset_database"]
