"""Abstract key-value store interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

# JSON-compatible value: dict, list, str, int, float, bool or None.
JSONValue = Any


class KeyValueStore(ABC):
    """Abstract whole-value store used by the ledger and tax services.

    Each key holds one JSON document and an integer version that starts at 1
    on first write and increases by one on every save and every remove. A
    version of 0 means the key was never written. Versions never go back
    down, so a reader holding an old version cannot write after a remove.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backing storage."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the backing storage."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create backing tables if the store needs them."""
        pass

    @abstractmethod
    def load_versioned(self, key: str) -> tuple[Optional[JSONValue], int]:
        """Return the stored value and its version.

        An absent or removed key loads as None with its last version.
        """
        pass

    @abstractmethod
    def save(
        self, key: str, value: JSONValue, expected_version: Optional[int] = None
    ) -> int:
        """Replace the value stored under key. Returns the new version.

        Args:
            key: Storage key
            value: JSON-compatible value
            expected_version: If given, the write only succeeds when the
                stored version still equals it (0 for an absent key)

        Raises:
            ConflictError: If expected_version no longer matches
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the value under key and bump its version.

        Removing an absent key is a no-op.
        """
        pass

    def load(self, key: str) -> Optional[JSONValue]:
        """Return the value stored under key, or None."""
        value, _ = self.load_versioned(key)
        return value
