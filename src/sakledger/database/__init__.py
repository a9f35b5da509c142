"""Storage layer for sakledger."""

from sakledger.database.base import KeyValueStore
from sakledger.database.memory import InMemoryStore
from sakledger.database.factories import create_sqlite_store

__all__ = ["KeyValueStore", "InMemoryStore", "create_sqlite_store"]
