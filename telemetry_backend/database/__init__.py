"""
Database layer: telemetry tables and the record store.

RecordStore is the interface the ingestion core depends on;
SQLAlchemyRecordStore backs it with PostgreSQL or SQLite.
"""

from telemetry_backend.database.models import (
    Base,
    ProtocolStatsRow,
    ReceivedEnvelopeRow,
    ReceivedMessageRow,
    RecordKind,
    WakuMessageRow,
)
from telemetry_backend.database.store import RecordStore, SQLAlchemyRecordStore

__all__ = [
    "Base",
    "ProtocolStatsRow",
    "ReceivedEnvelopeRow",
    "ReceivedMessageRow",
    "RecordKind",
    "RecordStore",
    "SQLAlchemyRecordStore",
    "WakuMessageRow",
]
