"""Front desk visitor check-in/check-out roster."""

from frontdesk.app import create_roster_store
from frontdesk.domain.visitors import RosterFilter, VisitorInput, VisitorRecord, VisitorStatus
from frontdesk.services.roster_service import (
    AlreadyCheckedOutError,
    NotFoundError,
    RosterStore,
    StorageUnavailableError,
    ValidationError,
)
from frontdesk.services.view_service import RosterStats, project, summarize

__all__ = [
    "AlreadyCheckedOutError",
    "NotFoundError",
    "RosterFilter",
    "RosterStats",
    "RosterStore",
    "StorageUnavailableError",
    "ValidationError",
    "VisitorInput",
    "VisitorRecord",
    "VisitorStatus",
    "create_roster_store",
    "project",
    "summarize",
]
