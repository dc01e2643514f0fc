"""In-process storage, used by tests and the `memory` backend."""
from __future__ import annotations

from typing import Dict, Optional

from .base import StorageUnavailableError


class MemoryStorage:
    """Dict-backed storage with an optional quota in characters."""

    def __init__(self, quota: int | None = None) -> None:
        self._values: Dict[str, str] = {}
        self.quota = quota
        self.writes = 0

    def load(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def save(self, key: str, value: str) -> None:
        if self.quota is not None:
            used = sum(len(v) for k, v in self._values.items() if k != key)
            if used + len(value) > self.quota:
                raise StorageUnavailableError(f"storage quota exceeded writing {key!r}")
        self._values[key] = value
        self.writes += 1
