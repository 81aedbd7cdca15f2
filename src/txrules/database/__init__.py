"""Database layer for txrules application."""

from txrules.database.base import Database
from txrules.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
