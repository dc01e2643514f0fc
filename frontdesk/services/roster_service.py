"""
Visitor roster use cases: check-in, check-out and the persisted roster.

RosterStore is the only writer of the roster. Each successful mutation writes
the whole roster to storage once; a failed write still leaves the in-memory
change in place and is reported to the caller.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional
import logging

from frontdesk.domain.visitors import (
    ROSTER_STORAGE_KEY,
    RosterFormatError,
    VisitorInput,
    VisitorRecord,
    VisitorStatus,
    roster_from_json,
    roster_to_json,
    utc_now_ms,
)
from frontdesk.repositories.base import KeyValueStorage, StorageUnavailableError
from frontdesk.services.view_service import RosterStats, summarize

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

__all__ = [
    "AlreadyCheckedOutError",
    "NotFoundError",
    "RosterError",
    "RosterStore",
    "StorageUnavailableError",
    "ValidationError",
]


class RosterError(Exception):
    """Base exception for roster operations."""


class ValidationError(RosterError):
    """Raised when required check-in fields are empty."""

    def __init__(self, fields: tuple[str, ...]):
        super().__init__(f"missing required field(s): {', '.join(fields)}")
        self.fields = fields


class NotFoundError(RosterError):
    """Raised when no visitor with the given id is on the roster."""

    def __init__(self, visitor_id: int):
        super().__init__(f"visitor {visitor_id} not found")
        self.visitor_id = visitor_id


class AlreadyCheckedOutError(RosterError):
    """Raised on a second check-out of the same visit."""

    def __init__(self, record: VisitorRecord):
        super().__init__(f"visitor {record.id} already checked out")
        self.record = record


class RosterStore:
    """Owns the roster (newest first) and keeps it in sync with storage."""

    def __init__(self, storage: KeyValueStorage, *, key: str = ROSTER_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self._roster: tuple[VisitorRecord, ...] = ()
        self._loaded = False

    # -------------------------------------- helpers --------------------------------------
    def _now(self) -> datetime:
        return utc_now_ms()

    def _next_id(self, now: datetime) -> int:
        candidate = (now - EPOCH) // timedelta(milliseconds=1)
        highest = max((record.id for record in self._roster), default=None)
        if highest is not None and candidate <= highest:
            candidate = highest + 1
        return candidate

    def _ensure_loaded(self) -> None:
        # a mutation on an unloaded store would overwrite the stored roster
        if not self._loaded:
            self.initialize()

    def _persist(self, record: VisitorRecord) -> None:
        try:
            self.storage.save(self.key, roster_to_json(self._roster))
        except StorageUnavailableError as exc:
            logger.error("roster change for visitor %s is not durable: %s", record.id, exc)
            raise StorageUnavailableError(exc.message, record=record) from exc

    # -------------------------------------- roster --------------------------------------
    def initialize(self) -> tuple[VisitorRecord, ...]:
        """Load the stored roster; anything missing or unreadable starts empty."""
        try:
            raw = self.storage.load(self.key)
        except StorageUnavailableError as exc:
            logger.error("storage unavailable at startup, starting with an empty roster: %s", exc)
            raw = None

        if raw is None:
            self._roster = ()
        else:
            try:
                self._roster = roster_from_json(raw)
            except RosterFormatError as exc:
                logger.warning("stored roster is unreadable, starting with an empty roster: %s", exc)
                self._roster = ()

        self._loaded = True
        logger.info("roster loaded with %d visitor(s)", len(self._roster))
        return self._roster

    def snapshot(self) -> tuple[VisitorRecord, ...]:
        self._ensure_loaded()
        return self._roster

    def get(self, visitor_id: int) -> Optional[VisitorRecord]:
        self._ensure_loaded()
        for record in self._roster:
            if record.id == visitor_id:
                return record
        return None

    def stats(self) -> RosterStats:
        self._ensure_loaded()
        return summarize(self._roster)

    # -------------------------------------- mutations --------------------------------------
    def check_in(self, data: VisitorInput | Mapping[str, Any]) -> VisitorRecord:
        visitor = data if isinstance(data, VisitorInput) else VisitorInput.from_mapping(data)
        visitor = visitor.normalized()
        missing = visitor.missing_fields()
        if missing:
            raise ValidationError(missing)

        self._ensure_loaded()
        now = self._now()
        record = VisitorRecord(
            id=self._next_id(now),
            name=visitor.name,
            company=visitor.company,
            contact_person=visitor.contact_person,
            reason=visitor.reason,
            badge=visitor.badge,
            check_in_time=now,
        )
        self._roster = (record,) + self._roster
        logger.info("visitor checked in id=%s host=%s", record.id, record.contact_person)
        self._persist(record)
        return record

    def check_out(self, visitor_id: int) -> VisitorRecord:
        self._ensure_loaded()
        for index, record in enumerate(self._roster):
            if record.id == visitor_id:
                break
        else:
            raise NotFoundError(visitor_id)
        if record.status is VisitorStatus.CHECKED_OUT:
            raise AlreadyCheckedOutError(record)

        # a clock stepping backwards must not produce a departure before the arrival
        check_out_time = max(self._now(), record.check_in_time)
        updated = replace(record, check_out_time=check_out_time, status=VisitorStatus.CHECKED_OUT)
        self._roster = self._roster[:index] + (updated,) + self._roster[index + 1:]
        logger.info("visitor checked out id=%s", updated.id)
        self._persist(updated)
        return updated
