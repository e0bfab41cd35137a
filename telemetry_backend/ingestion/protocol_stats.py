"""
Protocol stats ingestion: anonymize the host peer id, then store one row.
"""

from __future__ import annotations

from telemetry_backend.core.anonymizer import anonymize
from telemetry_backend.database.store import RecordStore
from telemetry_backend.ingestion.batch import persist_record
from telemetry_backend.ingestion.schemas import ProtocolStats
from telemetry_backend.telemetry_logging import get_logger

logger = get_logger(__name__)


def record_protocol_stats(store: RecordStore, stats: ProtocolStats) -> ProtocolStats:
    """Replace peer_id with its digest and insert. StoreError propagates to the caller."""
    stats.peer_id = anonymize(stats.peer_id)
    persist_record(store, stats)
    logger.debug("protocol_stats_stored", id=stats.id, peer_id=stats.peer_id)
    return stats
