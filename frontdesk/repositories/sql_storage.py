"""Key/value storage backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from frontdesk.db.models import StoredValue
from frontdesk.db.session import Base, get_engine, get_session

from .base import StorageUnavailableError


class SQLStorage:
    """Stores each key as one row of the stored_values table."""

    def __init__(self, *, create_tables: bool = True) -> None:
        if create_tables:
            try:
                Base.metadata.create_all(bind=get_engine())
            except SQLAlchemyError as exc:
                raise StorageUnavailableError(f"cannot prepare database: {exc}") from exc

    def load(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                entity = session.get(StoredValue, key)
                return entity.value if entity else None
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"cannot read {key!r}: {exc}") from exc

    def save(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        try:
            with get_session() as session:
                entity = session.get(StoredValue, key)
                if not entity:
                    session.add(StoredValue(key=key, value=value, updated_at=now))
                else:
                    entity.value = value
                    entity.updated_at = now
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"cannot write {key!r}: {exc}") from exc

    def keys(self) -> list[str]:
        try:
            with get_session() as session:
                return [row.key for row in session.query(StoredValue.key).order_by(StoredValue.key)]
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"cannot list keys: {exc}") from exc
