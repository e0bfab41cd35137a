"""
HTTP middleware: per-request context and timing.

Binds method/path into the structlog context for every log line of the
request and logs one line per request with its duration: request_completed
with the status code, or request_failed when the handler raised.
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable

from fastapi import Request, Response

from telemetry_backend.telemetry_logging import bind_request, get_logger

logger = get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    bind_request(request.method, request.url.path)
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error("request_failed", error=str(e), duration_ms=_elapsed_ms(start))
        raise
    logger.info(
        "request_completed",
        status_code=response.status_code,
        duration_ms=_elapsed_ms(start),
    )
    return response
