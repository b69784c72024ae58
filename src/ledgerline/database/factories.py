"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerline.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "LEDGERLINE_DB_PATH"
DEFAULT_DB_PATH = Path.home() / ".ledgerline" / "ledgerline.db"


def sqlite_url(database_path: str) -> str:
    """Turn a file path or database URL into a SQLAlchemy URL.

    Values that already carry a scheme (``sqlite:///...``, ``postgresql://...``)
    pass through unchanged; ``~`` in plain paths is expanded.
    """
    if "://" in database_path:
        return database_path
    return f"sqlite:///{Path(database_path).expanduser()}"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a database instance, SQLite unless given a full URL.

    Args:
        database_path: SQLite file path or SQLAlchemy URL. If None, checks the
            LEDGERLINE_DB_PATH environment variable, then defaults to
            ~/.ledgerline/ledgerline.db

    Returns:
        SQLAlchemyDatabase instance
    """
    database_path = database_path or os.environ.get(DB_PATH_ENV) or str(DEFAULT_DB_PATH)
    url = sqlite_url(database_path)
    if url.startswith("sqlite:///"):
        Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(url)
