"""
Persistence adapters.

Each adapter is a small key/value store (JSON file, SQL table, or memory).
Services depend on the KeyValueStorage protocol rather than on a backend.
"""

from .base import KeyValueStorage, StorageUnavailableError
from .json_storage import JsonFileStorage
from .memory_storage import MemoryStorage

__all__ = ["JsonFileStorage", "KeyValueStorage", "MemoryStorage", "StorageUnavailableError"]
