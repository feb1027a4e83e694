"""Database layer for moneysaver application."""

from moneysaver.database.base import Database
from moneysaver.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
