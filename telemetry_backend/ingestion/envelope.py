"""
Envelope lifecycle: creation, then an optional processing-error update by id.

Both operations swallow store failures. Clients always get the
creation-accepted response; the EnvelopeOutcome returned here is what the
transport logs so failures stay diagnosable. The batch endpoints, by
contrast, surface store failures as a 500; the two paths are intentionally
left as they are until that difference is settled.
"""

from __future__ import annotations

from dataclasses import dataclass

from telemetry_backend.core.exceptions import DecodeError, StoreError
from telemetry_backend.database.models import RecordKind
from telemetry_backend.database.store import RecordStore
from telemetry_backend.ingestion.batch import persist_record
from telemetry_backend.ingestion.schemas import ReceivedEnvelope
from telemetry_backend.telemetry_logging import get_logger

logger = get_logger(__name__)


@dataclass
class EnvelopeOutcome:
    envelope: ReceivedEnvelope
    persisted: bool
    error: str | None = None


def create_envelope(store: RecordStore, envelope: ReceivedEnvelope) -> EnvelopeOutcome:
    """Insert the envelope. On StoreError the envelope comes back without an id."""
    try:
        persist_record(store, envelope)
    except StoreError as e:
        envelope.id = None
        logger.error(
            "envelope_store_failed",
            message_hash=envelope.message_hash,
            error=str(e),
        )
        return EnvelopeOutcome(envelope=envelope, persisted=False, error=str(e))
    logger.debug("envelope_stored", id=envelope.id, message_hash=envelope.message_hash)
    return EnvelopeOutcome(envelope=envelope, persisted=True)


def update_processing_error(store: RecordStore, envelope: ReceivedEnvelope) -> EnvelopeOutcome:
    """
    Set processingError on the stored envelope with envelope.id.

    Only that column changes. Raises DecodeError when the id is missing;
    a missing row or store failure is logged and reported in the outcome.
    """
    if envelope.id is None:
        raise DecodeError("envelope update requires an id")
    logger.info("envelope_update", id=envelope.id)
    try:
        store.update_by_identifier(
            RecordKind.RECEIVED_ENVELOPE,
            envelope.id,
            {"processing_error": envelope.processing_error},
        )
    except StoreError as e:
        logger.error(
            "envelope_update_failed",
            id=envelope.id,
            message_hash=envelope.message_hash,
            error=str(e),
        )
        return EnvelopeOutcome(envelope=envelope, persisted=False, error=str(e))
    return EnvelopeOutcome(envelope=envelope, persisted=True)
