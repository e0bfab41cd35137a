"""
Batch ingestion: persist each record of a decoded batch independently.

There is no batch atomicity. A record whose insert fails is logged and dropped
from the result; the records around it are still written and are not rolled
back. The caller turns BatchResult.all_succeeded into the response status
(201 on full success, 500 otherwise), so an error response may still mean
some records were saved.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from telemetry_backend.core.exceptions import StoreError
from telemetry_backend.database.store import RecordStore
from telemetry_backend.ingestion.schemas import TelemetryRecord
from telemetry_backend.telemetry_logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R", bound=TelemetryRecord)


@dataclass
class BatchResult(Generic[R]):
    """Outcome of one batch: records that were stored (ids filled) and the aggregate flag."""

    persisted: list[R] = field(default_factory=list)
    received: int = 0

    @property
    def all_succeeded(self) -> bool:
        return len(self.persisted) == self.received

    @property
    def failed(self) -> int:
        return self.received - len(self.persisted)


def persist_record(store: RecordStore, record: R) -> R:
    """
    Stamp createdAt, insert the record and write the generated id back onto it.

    Any client-supplied id is discarded before the insert. Raises StoreError.
    """
    record.id = None
    record.created_at = int(time.time())
    record.id = store.insert(record.kind, record.to_row())
    return record


def ingest_batch(store: RecordStore, records: Sequence[R]) -> BatchResult[R]:
    """Persist every record of the batch independently; see module docstring."""
    result: BatchResult[R] = BatchResult(received=len(records))
    for index, record in enumerate(records):
        try:
            persist_record(store, record)
        except StoreError as e:
            record.id = None
            logger.error(
                "batch_record_store_failed",
                kind=record.kind.value,
                index=index,
                error=str(e),
            )
            continue
        result.persisted.append(record)

    log = logger.info if result.all_succeeded else logger.warning
    log(
        "batch_ingested",
        kind=records[0].kind.value if records else None,
        received=result.received,
        persisted=len(result.persisted),
        failed=result.failed,
    )
    return result
