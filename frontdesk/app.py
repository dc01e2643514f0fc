"""Wiring: settings -> storage adapter -> RosterStore."""
from __future__ import annotations

import logging

from frontdesk.core.config import Settings, get_settings
from frontdesk.core.logging import setup_logging
from frontdesk.repositories import JsonFileStorage, KeyValueStorage, MemoryStorage
from frontdesk.services.roster_service import RosterStore

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> KeyValueStorage:
    if settings.storage_backend == "sql":
        from frontdesk.repositories.sql_storage import SQLStorage

        return SQLStorage()
    if settings.storage_backend == "memory":
        return MemoryStorage()
    return JsonFileStorage(settings.data_file)


def create_roster_store(settings: Settings | None = None) -> RosterStore:
    """Build the single RosterStore handed to the presentation layer."""
    settings = settings or get_settings()
    setup_logging(settings)
    storage = build_storage(settings)
    logger.info("using %s storage backend (env=%s)", settings.storage_backend, settings.app_env)
    store = RosterStore(storage)
    store.initialize()
    return store
