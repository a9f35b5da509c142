"""Store factory functions for creating store instances."""

from typing import Optional

from sakledger.config import resolve_database_path
from sakledger.database.sqlalchemy_db import SQLAlchemyStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStore:
    """Create a SQLite-backed store instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SAKLEDGER_DB_PATH
            environment variable, then defaults to ~/.sakledger/sakledger.db

    Returns:
        SQLAlchemyStore instance configured for SQLite
    """
    database_url = f"sqlite:///{resolve_database_path(database_path)}"
    return SQLAlchemyStore(database_url)
