"""Read-only views over the roster: search/filter projection and counts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from frontdesk.domain.visitors import RosterFilter, VisitorRecord, VisitorStatus


@dataclass(frozen=True)
class RosterStats:
    total: int
    checked_in: int
    checked_out: int


def _matches_search(record: VisitorRecord, term: str) -> bool:
    if not term:
        return True
    return (
        term in record.name.lower()
        or term in record.company.lower()
        or term in record.contact_person.lower()
    )


def _matches_filter(record: VisitorRecord, roster_filter: RosterFilter) -> bool:
    if roster_filter is RosterFilter.ALL:
        return True
    return record.status.value == roster_filter.value


def project(
    roster: Iterable[VisitorRecord],
    search_term: str = "",
    filter: RosterFilter | str = RosterFilter.ALL,
) -> tuple[VisitorRecord, ...]:
    """
    Return the records matching both the search term and the status filter.

    The term is matched case-insensitively as a substring of name, company or
    contact person. Roster order is preserved and nothing is mutated.
    """
    roster_filter = RosterFilter(filter)
    term = (search_term or "").lower()
    return tuple(
        record
        for record in roster
        if _matches_search(record, term) and _matches_filter(record, roster_filter)
    )


def summarize(roster: Iterable[VisitorRecord]) -> RosterStats:
    total = checked_in = 0
    for record in roster:
        total += 1
        if record.status is VisitorStatus.CHECKED_IN:
            checked_in += 1
    return RosterStats(total=total, checked_in=checked_in, checked_out=total - checked_in)
