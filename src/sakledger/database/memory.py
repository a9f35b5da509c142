"""In-process key-value store."""

import json
from typing import Optional

from sakledger.database.base import KeyValueStore, JSONValue
from sakledger.domain.errors import ConflictError, stale_write


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store.

    Values are kept as JSON text so callers get a fresh copy on every load,
    the same as with a database-backed store. A removed key keeps its
    version with a None payload.
    """

    def __init__(self):
        self._records: dict[str, tuple[Optional[str], int]] = {}

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    def load_versioned(self, key: str) -> tuple[Optional[JSONValue], int]:
        payload, version = self._records.get(key, (None, 0))
        if payload is None:
            return None, version
        return json.loads(payload), version

    def save(
        self, key: str, value: JSONValue, expected_version: Optional[int] = None
    ) -> int:
        _, current = self._records.get(key, (None, 0))
        if expected_version is not None and expected_version != current:
            raise ConflictError(stale_write(key, expected_version, current))
        self._records[key] = (json.dumps(value), current + 1)
        return current + 1

    def remove(self, key: str) -> None:
        payload, version = self._records.get(key, (None, 0))
        if payload is not None:
            self._records[key] = (None, version + 1)
