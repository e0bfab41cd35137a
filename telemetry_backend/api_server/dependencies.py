"""
Request dependencies: the app-scoped record store.
"""

from __future__ import annotations

from telemetry_backend.config import get_settings
from telemetry_backend.database.store import RecordStore, SQLAlchemyRecordStore

_store: RecordStore | None = None


def get_store() -> RecordStore:
    """Dependency: one SQLAlchemyRecordStore (and connection pool) for the whole process."""
    global _store
    if _store is None:
        _store = SQLAlchemyRecordStore(get_settings().database_url)
    return _store


def reset_store_for_test() -> None:
    """Drop the cached store. For tests only."""
    global _store
    _store = None
