"""
Configuration helpers for the front desk roster.

Exposes a Settings object read from environment variables (storage backend,
data file, database URL, logging) so that services and adapters do not fetch
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional
import os

STORAGE_BACKENDS = ("json", "sql", "memory")
DEFAULT_DATA_DIR = Path.home() / ".frontdesk"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    data_file: Path
    database_url: str
    log_level: str
    log_file: Optional[Path]


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _path(value: str | None) -> Path | None:
        if not value or not value.strip():
            return None
        return Path(value.strip()).expanduser()

    def _backend(value: str | None, default: str = "json") -> str:
        candidate = (value or "").strip().lower()
        return candidate if candidate in STORAGE_BACKENDS else default

    data_file = _path(os.getenv("FRONTDESK_DATA_FILE")) or DEFAULT_DATA_DIR / "data.json"
    default_db = f"sqlite:///{data_file.parent / 'frontdesk.db'}"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=_backend(os.getenv("FRONTDESK_STORAGE")),
        data_file=data_file,
        database_url=(os.getenv("DATABASE_URL") or default_db).strip(),
        log_level=(os.getenv("FRONTDESK_LOG_LEVEL") or "INFO").strip().upper(),
        log_file=_path(os.getenv("FRONTDESK_LOG_FILE")),
    )
