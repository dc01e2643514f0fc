"""
JSON file persistence adapter.

All keys share one JSON object on disk ({key: serialized value}); the roster
and any presentation settings live side by side in the same file.
"""

from __future__ import annotations

from pathlib import Path
import json
import logging
import os
import tempfile

from .base import StorageUnavailableError

logger = logging.getLogger(__name__)


class JsonFileStorage:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError:
            logger.warning("storage file %s is not valid JSON; ignoring its contents", self.path)
            return {}
        except OSError as exc:
            raise StorageUnavailableError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            logger.warning("storage file %s does not hold a JSON object; ignoring its contents", self.path)
            return {}
        return data

    def load(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".data-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageUnavailableError(f"cannot write {self.path}: {exc}") from exc

    def keys(self) -> list[str]:
        return sorted(k for k, v in self._read_all().items() if isinstance(v, str))
