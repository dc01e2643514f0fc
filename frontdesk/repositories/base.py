"""Key/value storage boundary shared by every persistence adapter."""
from __future__ import annotations

from typing import Any, Optional, Protocol


class StorageUnavailableError(Exception):
    """Raised when durable storage cannot be read or written at all."""

    def __init__(self, message: str, *, record: Any = None):
        super().__init__(message)
        self.message = message
        self.record = record


class KeyValueStorage(Protocol):
    def load(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key was never written."""

    def save(self, key: str, value: str) -> None:
        """Persist value under key, raising StorageUnavailableError on failure."""
