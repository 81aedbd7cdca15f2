"""Construction of the SQLite-backed store for transactions and rules."""

import os
from pathlib import Path
from typing import Optional

from txrules.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "TXRULES_DB_PATH"
DEFAULT_DB_PATH = Path("~/.txrules/txrules.db")


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the database file: explicit path, then $TXRULES_DB_PATH, then ~/.txrules/txrules.db.

    The parent directory of the default location is created on demand; an
    explicit or environment path is used as given.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV_VAR)
    if chosen:
        return Path(chosen).expanduser()

    path = DEFAULT_DB_PATH.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the transactions and rules store in a SQLite file.

    Args:
        database_path: SQLite file; see resolve_database_path for the fallbacks

    Returns:
        SQLAlchemyDatabase whose tables are created on first use
    """
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
