"""
FastAPI server: telemetry ingestion API over the record store.

Wires the static route table, CORS, request logging and the error mapping
(validation failures become 400 {"error": "Invalid request payload"}).
Config via env (see telemetry_backend.config).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from telemetry_backend import __version__
from telemetry_backend.api_server.dependencies import get_store
from telemetry_backend.api_server.middleware import log_requests
from telemetry_backend.api_server.routes import INVALID_PAYLOAD, error_response, router
from telemetry_backend.config import get_settings
from telemetry_backend.core.exceptions import DecodeError
from telemetry_backend.telemetry_logging import configure_structlog, get_logger

logger = get_logger(__name__)

CORS_ALLOWED_HEADERS = ["X-Requested-With", "Content-Type", "Authorization"]
CORS_ALLOWED_METHODS = ["GET", "HEAD", "POST", "PUT", "OPTIONS"]


# -----------------------------------------------------------------------------
# Lifespan: create tables before serving, release the pool on shutdown
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    store.ensure_schema()
    logger.info("api_started", version=__version__)
    yield
    store.dispose()
    logger.info("api_stopped")


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------

settings = get_settings()
configure_structlog(settings.log_level, settings.log_format)

app = FastAPI(
    title="Telemetry Backend API",
    description="Ingestion endpoint for node protocol stats, message and envelope telemetry.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=CORS_ALLOWED_METHODS,
    allow_headers=CORS_ALLOWED_HEADERS,
)
app.middleware("http")(log_requests)
app.include_router(router)


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Any, exc: RequestValidationError) -> JSONResponse:
    """Malformed body: the whole request is refused before anything is stored."""
    errors = exc.errors()
    logger.warning(
        "request_payload_invalid",
        error_count=len(errors),
        first_error=str(errors[0].get("msg")) if errors else None,
    )
    return error_response(400, INVALID_PAYLOAD)


@app.exception_handler(DecodeError)
def decode_exception_handler(request: Any, exc: DecodeError) -> JSONResponse:
    logger.warning("request_payload_invalid", error=str(exc))
    return error_response(400, INVALID_PAYLOAD)
