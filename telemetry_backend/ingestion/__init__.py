"""
Ingestion core: decode schemas, batch persistence, protocol stats and the
envelope lifecycle.
"""

from telemetry_backend.ingestion.batch import BatchResult, ingest_batch
from telemetry_backend.ingestion.envelope import (
    EnvelopeOutcome,
    create_envelope,
    update_processing_error,
)
from telemetry_backend.ingestion.protocol_stats import record_protocol_stats

__all__ = [
    "BatchResult",
    "EnvelopeOutcome",
    "create_envelope",
    "ingest_batch",
    "record_protocol_stats",
    "update_processing_error",
]
