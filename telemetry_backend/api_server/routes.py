"""
API route definitions: telemetry ingestion endpoints.

ROUTES is the static operation table: built once at import and registered on
the router; nothing is added at request time. Handlers are plain (sync)
functions, so Starlette runs each request in its worker thread pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from telemetry_backend.api_server.dependencies import get_store
from telemetry_backend.core.exceptions import StoreError
from telemetry_backend.database.store import RecordStore
from telemetry_backend.ingestion import (
    BatchResult,
    create_envelope,
    ingest_batch,
    record_protocol_stats,
    update_processing_error,
)
from telemetry_backend.ingestion.envelope import EnvelopeOutcome
from telemetry_backend.ingestion.schemas import (
    ProtocolStats,
    ReceivedEnvelope,
    ReceivedEnvelopeUpdate,
    ReceivedMessage,
    WakuMessage,
)
from telemetry_backend.telemetry_logging import get_logger

logger = get_logger(__name__)

INVALID_PAYLOAD = "Invalid request payload"
BATCH_SAVE_FAILED = "Could not save all record"
PROTOCOL_STATS_SAVE_FAILED = "Could not save protocol stats"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _batch_response(result: BatchResult[Any]) -> JSONResponse:
    if not result.all_succeeded:
        return error_response(500, BATCH_SAVE_FAILED)
    return JSONResponse(
        status_code=201,
        content=[record.to_json() for record in result.persisted],
    )


def _envelope_response(outcome: EnvelopeOutcome) -> JSONResponse:
    # Always 201: envelope store failures are only visible in the logs
    if not outcome.persisted:
        logger.warning("envelope_accepted_not_persisted", error=outcome.error)
    return JSONResponse(status_code=201, content=outcome.envelope.to_json())


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------


def create_protocol_stats(
    stats: ProtocolStats,
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    """Store one protocol stats report with the host id anonymized."""
    try:
        record_protocol_stats(store, stats)
    except StoreError as e:
        logger.error("protocol_stats_store_failed", error=str(e))
        return error_response(500, PROTOCOL_STATS_SAVE_FAILED)
    return JSONResponse(status_code=201, content={"error": ""})


def create_received_messages(
    messages: list[ReceivedMessage],
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    """Store a batch of received messages; 500 if any record was not saved."""
    return _batch_response(ingest_batch(store, messages))


def create_waku_messages(
    messages: list[WakuMessage],
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    """Store a batch of waku messages; 500 if any record was not saved."""
    return _batch_response(ingest_batch(store, messages))


def create_received_envelope(
    envelope: ReceivedEnvelope,
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    return _envelope_response(create_envelope(store, envelope))


def update_envelope(
    envelope: ReceivedEnvelopeUpdate,
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    return _envelope_response(update_processing_error(store, envelope))


def health() -> PlainTextResponse:
    """Liveness probe: API is up."""
    return PlainTextResponse("OK", status_code=200)


# -----------------------------------------------------------------------------
# Static route table
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Route:
    path: str
    method: str
    endpoint: Callable[..., Any]
    status_code: int


ROUTES: tuple[Route, ...] = (
    Route("/protocol-stats", "POST", create_protocol_stats, 201),
    Route("/received-messages", "POST", create_received_messages, 201),
    Route("/waku-messages", "POST", create_waku_messages, 201),
    Route("/received-envelope", "POST", create_received_envelope, 201),
    Route("/update-envelope", "POST", update_envelope, 201),
    Route("/health", "GET", health, 200),
)


def build_router(routes: tuple[Route, ...] = ROUTES) -> APIRouter:
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            status_code=route.status_code,
            response_model=None,
        )
    return router


router = build_router()
