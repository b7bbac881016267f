"""Access to the database from CLI commands."""

import click

from abafile.database.base import Database
from abafile.database.factories import create_sqlite_database


def get_db(ctx: click.Context) -> Database:
    """Return the command's database, opening it on first use.

    Commands that only read files (such as ``inspect``) never open it.
    """
    obj = ctx.find_root().ensure_object(dict)
    if obj.get("db") is None:
        db = create_sqlite_database(database_path=obj.get("db_path"))
        db.connect()
        db.initialize_schema()
        obj["db"] = db
    return obj["db"]
