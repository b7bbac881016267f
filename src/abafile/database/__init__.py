"""Database layer for abafile application."""

from abafile.database.base import Database
from abafile.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
