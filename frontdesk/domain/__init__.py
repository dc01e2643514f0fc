"""Domain types for the visitor roster."""

from .visitors import (
    ROSTER_STORAGE_KEY,
    RosterFilter,
    RosterFormatError,
    VisitorInput,
    VisitorRecord,
    VisitorStatus,
)

__all__ = [
    "ROSTER_STORAGE_KEY",
    "RosterFilter",
    "RosterFormatError",
    "VisitorInput",
    "VisitorRecord",
    "VisitorStatus",
]
