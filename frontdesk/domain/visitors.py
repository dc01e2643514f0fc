"""Domain helpers for visitor records: model, validation and wire format."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping

ROSTER_STORAGE_KEY = "visitor-management-data"

TEXT_FIELDS = ("name", "company", "contact_person", "reason", "badge")
REQUIRED_FIELDS = ("name", "contact_person", "reason")

# snake_case attribute -> key used in the stored JSON
WIRE_KEYS = {
    "id": "id",
    "name": "name",
    "company": "company",
    "contact_person": "contactPerson",
    "reason": "reason",
    "badge": "badge",
    "check_in_time": "checkInTime",
    "check_out_time": "checkOutTime",
    "status": "status",
}


class VisitorStatus(str, Enum):
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class RosterFilter(str, Enum):
    ALL = "all"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"


class RosterFormatError(ValueError):
    """Raised when a stored value cannot be read back as a roster."""


@dataclass(frozen=True)
class VisitorInput:
    """Check-in payload as typed at the front desk."""

    name: str = ""
    company: str = ""
    contact_person: str = ""
    reason: str = ""
    badge: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VisitorInput":
        """Accept both snake_case and the camelCase keys used by form payloads."""
        values = {}
        for attr in TEXT_FIELDS:
            values[attr] = _clean(data.get(attr, data.get(WIRE_KEYS[attr])))
        return cls(**values)

    def normalized(self) -> "VisitorInput":
        return VisitorInput(
            name=_clean(self.name),
            company=_clean(self.company),
            contact_person=_clean(self.contact_person),
            reason=_clean(self.reason),
            badge=_clean(self.badge),
        )

    def missing_fields(self) -> tuple[str, ...]:
        return tuple(field for field in REQUIRED_FIELDS if not _clean(getattr(self, field)))


@dataclass(frozen=True)
class VisitorRecord:
    id: int
    name: str
    company: str
    contact_person: str
    reason: str
    badge: str
    check_in_time: datetime
    check_out_time: datetime | None = None
    status: VisitorStatus = VisitorStatus.CHECKED_IN

    def __post_init__(self) -> None:
        checked_out = self.status is VisitorStatus.CHECKED_OUT
        if checked_out != (self.check_out_time is not None):
            raise ValueError(f"visitor {self.id}: status {self.status.value} does not match check-out time")
        if self.check_out_time is not None and self.check_out_time < self.check_in_time:
            raise ValueError(f"visitor {self.id}: check-out precedes check-in")

    @property
    def is_checked_in(self) -> bool:
        return self.status is VisitorStatus.CHECKED_IN

    def to_dict(self) -> dict:
        """Convert the record to the dictionary stored in the roster blob."""
        return {
            "id": self.id,
            "name": self.name,
            "company": self.company,
            "contactPerson": self.contact_person,
            "reason": self.reason,
            "badge": self.badge,
            "checkInTime": format_timestamp(self.check_in_time),
            "checkOutTime": format_timestamp(self.check_out_time) if self.check_out_time else None,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "VisitorRecord":
        if not isinstance(data, dict):
            raise RosterFormatError("roster entry is not an object")
        missing = [wire for wire in WIRE_KEYS.values() if wire not in data]
        if missing:
            raise RosterFormatError(f"roster entry missing keys: {', '.join(missing)}")

        visitor_id = data["id"]
        if isinstance(visitor_id, bool) or not isinstance(visitor_id, int):
            raise RosterFormatError(f"invalid visitor id: {visitor_id!r}")

        text = {}
        for attr in TEXT_FIELDS:
            value = data[WIRE_KEYS[attr]]
            if not isinstance(value, str):
                raise RosterFormatError(f"visitor {visitor_id}: {attr} is not a string")
            text[attr] = value
        empty = [field for field in REQUIRED_FIELDS if not text[field].strip()]
        if empty:
            raise RosterFormatError(f"visitor {visitor_id}: empty {', '.join(empty)}")

        try:
            status = VisitorStatus(data["status"])
        except ValueError as exc:
            raise RosterFormatError(f"visitor {visitor_id}: unknown status {data['status']!r}") from exc

        check_out_raw = data["checkOutTime"]
        try:
            return cls(
                id=visitor_id,
                check_in_time=parse_timestamp(data["checkInTime"]),
                check_out_time=parse_timestamp(check_out_raw) if check_out_raw is not None else None,
                status=status,
                **text,
            )
        except ValueError as exc:
            raise RosterFormatError(str(exc)) from exc


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def utc_now_ms() -> datetime:
    """Current UTC instant truncated to the millisecond precision of the wire format."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str) or not value:
        raise RosterFormatError(f"invalid timestamp: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise RosterFormatError(f"invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def roster_to_json(roster: Iterable[VisitorRecord]) -> str:
    return json.dumps([record.to_dict() for record in roster], ensure_ascii=False)


def roster_from_json(raw: str) -> tuple[VisitorRecord, ...]:
    """Parse a stored roster blob; raise RosterFormatError on anything invalid."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise RosterFormatError(f"roster is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise RosterFormatError("roster is not a JSON array")

    records = tuple(VisitorRecord.from_dict(item) for item in data)
    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise RosterFormatError(f"duplicate visitor id {record.id}")
        seen.add(record.id)
    return records
