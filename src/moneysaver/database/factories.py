"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from moneysaver.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "MONEYSAVER_DB_PATH"
DEFAULT_DB_PATH = Path("~/.moneysaver/moneysaver.db")


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file: explicit path, then $MONEYSAVER_DB_PATH, then the home default."""
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    return Path(chosen).expanduser() if chosen else DEFAULT_DB_PATH.expanduser()


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed document database.

    The parent directory is created if it does not exist yet.

    Args:
        database_path: Path to the SQLite file; see ``resolve_database_path``

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
