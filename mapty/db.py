"""Database handle shared by every mapty model.

Models bind to ``db``, a peewee ``Proxy``; ``configure_db`` decides once per
process which real database sits behind it.
"""

import os

from peewee import Proxy, SqliteDatabase

DEFAULT_DB_PATH = "mapty.sqlite3"

db = Proxy()

_configured = False


def get_db_path_from_env() -> str:
    """SQLite path from ``MAPTY_DB``, defaulting to ``mapty.sqlite3``."""
    return os.environ.get("MAPTY_DB", DEFAULT_DB_PATH)


def _open_database(db_path: str):
    database_url = os.environ.get("DATABASE_URL")
    if database_url:
        from playhouse.db_url import connect

        return connect(database_url)
    return SqliteDatabase(db_path, pragmas={"journal_mode": "wal", "foreign_keys": 1})


def configure_db(db_path: str | None = None):
    """Bind ``db`` to a real database; later calls keep the first choice.

    ``DATABASE_URL`` wins over *db_path*, which falls back to ``MAPTY_DB``.
    """
    global _configured
    if not _configured:
        db.initialize(_open_database(db_path or get_db_path_from_env()))
        _configured = True
    return db


def is_configured() -> bool:
    return _configured


def get_db():
    if not _configured:
        raise RuntimeError("Database not configured. Call configure_db() first.")
    return db
